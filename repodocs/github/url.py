"""Repository URL parsing."""

from __future__ import annotations

import re
from typing import Optional

from ..models import RepositoryIdentity

_URL_PATTERNS = (
    re.compile(r"github\.com/([^/]+)/([^/?#]+)"),
    re.compile(r"github\.com:([^/]+)/([^/?#]+)"),
)
_GIT_SUFFIX = re.compile(r"\.git$")


def parse_repo_url(url: Optional[str]) -> Optional[RepositoryIdentity]:
    """Extract the owner/name pair from a GitHub URL.

    Accepts ``github.com/owner/repo`` (any scheme, optional ``.git`` suffix)
    and the SSH-style ``github.com:owner/repo`` form. Returns ``None`` when the
    string matches neither.
    """
    if not url:
        return None
    candidate = url.strip()
    for pattern in _URL_PATTERNS:
        match = pattern.search(candidate)
        if match:
            return RepositoryIdentity(
                owner=match.group(1),
                name=_GIT_SUFFIX.sub("", match.group(2)),
            )
    return None


__all__ = ["parse_repo_url"]
