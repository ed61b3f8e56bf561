"""Pipeline orchestration for documentation generation."""

from __future__ import annotations

from typing import Optional

from .config import RepoDocsConfig, load_config
from .errors import InvalidInputError
from .github.client import HostingClient
from .github.fetchers import KeyFileFetcher, MetadataFetcher, TreeFetcher
from .github.url import parse_repo_url
from .llm.runner import CompletionRunner
from .logging import get_logger
from .models import GenerationResult
from .prompting.builder import PromptBuilder

MISSING_URL_MESSAGE = "Repository URL is required"
INVALID_URL_MESSAGE = "Invalid GitHub URL. Please use format: https://github.com/owner/repo"


class Orchestrator:
    """Coordinates the fetch, prompt and completion steps for one repository.

    Metadata and completion failures abort the run. Tree and key-file
    failures only shrink the context handed to the model.
    """

    def __init__(
        self,
        config: RepoDocsConfig | None = None,
        *,
        client: HostingClient | None = None,
        metadata_fetcher: MetadataFetcher | None = None,
        tree_fetcher: TreeFetcher | None = None,
        key_file_fetcher: KeyFileFetcher | None = None,
        prompt_builder: PromptBuilder | None = None,
        completion_runner: CompletionRunner | None = None,
    ) -> None:
        self.config = config or load_config()
        client = client or HostingClient(self.config.github)
        self.metadata_fetcher = metadata_fetcher or MetadataFetcher(client)
        self.tree_fetcher = tree_fetcher or TreeFetcher(client)
        self.key_file_fetcher = key_file_fetcher or KeyFileFetcher(client)
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.completion_runner = completion_runner or CompletionRunner(self.config.llm)
        self.logger = get_logger("orchestrator")

    def run(self, repo_url: Optional[str]) -> GenerationResult:
        """Generate documentation for the repository behind ``repo_url``."""
        if not repo_url or not repo_url.strip():
            raise InvalidInputError(MISSING_URL_MESSAGE)
        identity = parse_repo_url(repo_url)
        if identity is None:
            raise InvalidInputError(INVALID_URL_MESSAGE)

        self.logger.info("Generating documentation for %s", identity.slug)
        metadata = self.metadata_fetcher.fetch(identity)

        files = self.tree_fetcher.fetch(identity)
        metadata.files = files
        self.logger.debug("Tree listing returned %d paths", len(files))

        key_files = self.key_file_fetcher.fetch(identity)
        self.logger.debug("Key file fetch returned %d files", len(key_files))

        messages = self.prompt_builder.build(metadata, files, key_files)
        content = self.completion_runner.run(messages)
        documents = self.prompt_builder.parse(content)
        self.logger.info("Generated documentation for %s", identity.slug)
        return GenerationResult(documents=documents, repository=metadata)


__all__ = ["INVALID_URL_MESSAGE", "MISSING_URL_MESSAGE", "Orchestrator"]
