"""Domain models for file content at a revision."""

from __future__ import annotations

from dataclasses import dataclass

from diffnav.domain.github import Repository


@dataclass(frozen=True)
class ContentKey:
    """Cache key for one file at one revision.

    The content behind a key is stable only when revision is an immutable
    commit hash. Branch or tag names make cached entries go stale.
    """

    repository: Repository
    revision: str
    path: str


@dataclass(frozen=True)
class Content:
    """Payload of one file at one revision.

    Attributes:
        data: Raw bytes as served by the raw content endpoint
        exists: False when the file is absent at the revision (added or deleted file)
    """

    data: bytes = b""
    exists: bool = True

    @classmethod
    def absent(cls) -> Content:
        return cls(data=b"", exists=False)

    @property
    def is_empty(self) -> bool:
        return not self.data
