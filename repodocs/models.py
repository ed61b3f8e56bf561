"""Core data models shared across repodocs components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

UNKNOWN_LANGUAGE = "Unknown"


@dataclass(frozen=True)
class RepositoryIdentity:
    """Owner/name pair parsed from a repository URL."""

    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass
class RepositoryMetadata:
    """Subset of repository fields used to describe the project."""

    name: str
    description: str = ""
    language: str = UNKNOWN_LANGUAGE
    stars: int = 0
    files: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "language": self.language,
            "stars": self.stars,
            "files": list(self.files),
        }


@dataclass
class KeyFileContent:
    """Truncated contents of a key file used as prompt context."""

    path: str
    content: str


@dataclass(frozen=True)
class KeyFileResult:
    """Outcome of a best-effort key file fetch."""

    path: str
    content: Optional[str] = None

    @property
    def present(self) -> bool:
        return self.content is not None

    def truncated(self, limit: int) -> KeyFileContent:
        return KeyFileContent(path=self.path, content=(self.content or "")[:limit])


@dataclass
class GeneratedDocumentSet:
    """The three markdown documents produced by the completion call."""

    readme: str
    getting_started: str
    api_docs: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "readme": self.readme,
            "gettingStarted": self.getting_started,
            "apiDocs": self.api_docs,
        }


@dataclass
class GenerationResult:
    """Combined pipeline output returned to callers."""

    documents: GeneratedDocumentSet
    repository: RepositoryMetadata

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = self.documents.to_dict()
        payload["repoInfo"] = self.repository.to_dict()
        return payload
