"""Domain models for GitHub compare and pull request data.

Parse-once pattern: Raw JSON is parsed into type-safe models at the boundary.
Services use the clean, typed API - no dictionary access or parsing logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ResponseParseError(Exception):
    """Raised when an API payload does not have the expected shape."""

    pass


def _require(data: dict, key: str, context: str):
    if not isinstance(data, dict):
        raise ResponseParseError(f"Expected an object for {context}, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise ResponseParseError(f"Missing '{key}' in {context}")
    return data[key]


# ============================================================
# Domain Models
# ============================================================


@dataclass(frozen=True)
class Repository:
    """A repository on the remote host, identified by owner and name."""

    owner: str
    name: str

    @classmethod
    def from_full_name(cls, full_name: str) -> Repository:
        """Parse an "owner/name" string.

        Raises:
            ValueError: If the string is not in owner/name format
        """
        owner, sep, name = full_name.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Repository must be in owner/name format: {full_name}")
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name


class FileStatus(Enum):
    """Status tag the compare endpoint reports for a changed file."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    RENAMED = "renamed"
    COPIED = "copied"
    CHANGED = "changed"
    UNCHANGED = "unchanged"

    @classmethod
    def from_string(cls, value: str) -> FileStatus:
        """Parse FileStatus from the API's status string.

        Raises:
            ResponseParseError: If value is not a known status tag
        """
        for member in cls:
            if member.value == value:
                return member
        raise ResponseParseError(f"Unknown file status: {value!r}")


@dataclass(frozen=True)
class Commit:
    """A single commit as reported by the compare endpoint.

    Attributes:
        sha: Full commit hash
        parents: Parent hashes in recorded order (first element is the first parent)
        author: Author display name
        message: Full commit message (first line is the summary)
    """

    sha: str
    parents: tuple[str, ...] = ()
    author: str = ""
    message: str = ""

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> Commit:
        """Parse a commit entry from the compare response.

        Args:
            data: One element of the response's "commits" array

        Returns:
            Typed Commit instance

        Raises:
            ResponseParseError: If the sha or parent hashes are missing
        """
        sha = _require(data, "sha", "commit")
        parents = tuple(
            _require(parent, "sha", f"parent of commit {sha}")
            for parent in data.get("parents") or []
        )
        detail = data.get("commit") or {}
        author = (detail.get("author") or {}).get("name") or ""
        return cls(
            sha=sha,
            parents=parents,
            author=author,
            message=detail.get("message") or "",
        )

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def first_parent(self) -> str | None:
        return self.parents[0] if self.parents else None

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0].strip()


@dataclass(frozen=True)
class ChangedFile:
    """A file changed between the two revisions of a comparison.

    Attributes:
        path: Path of the file at the head revision
        status: Status tag reported by the API
        additions: Number of added lines
        deletions: Number of removed lines
        previous_path: Path at the base revision for renamed files
    """

    path: str
    status: FileStatus
    additions: int = 0
    deletions: int = 0
    previous_path: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ChangedFile:
        """Parse a file entry from the compare response.

        Raises:
            ResponseParseError: If the filename or status is missing or invalid
        """
        path = _require(data, "filename", "file")
        status = FileStatus.from_string(_require(data, "status", f"file {path}"))
        try:
            additions = int(data.get("additions") or 0)
            deletions = int(data.get("deletions") or 0)
        except (TypeError, ValueError) as e:
            raise ResponseParseError(f"Invalid line counts for file {path}: {e}") from e
        return cls(
            path=path,
            status=status,
            additions=additions,
            deletions=deletions,
            previous_path=data.get("previous_filename"),
        )

    @property
    def base_path(self) -> str:
        """Path to read on the base side of the comparison."""
        return self.previous_path or self.path

    def format_row(self) -> str:
        """Format as a navigator row, e.g. "modified (+3 −1) - a.go"."""
        return f"{self.status.value} (+{self.additions} −{self.deletions}) - {self.path}"


@dataclass(frozen=True)
class Comparison:
    """Compare data between two revisions of one repository.

    Files keep the API's ordering. Commits are treated as an unordered set;
    use services.ancestry.linearize to obtain the first-parent chain.
    base_sha is the commit hash the API resolved base_revision to, when the
    response reports one.
    """

    repository: Repository
    base_revision: str
    head_revision: str
    files: tuple[ChangedFile, ...] = ()
    commits: tuple[Commit, ...] = ()
    base_sha: str | None = None

    @classmethod
    def from_dict(
        cls,
        data: dict,
        repository: Repository,
        base_revision: str,
        head_revision: str,
    ) -> Comparison:
        """Parse the compare endpoint response.

        Args:
            data: Decoded JSON body of the compare endpoint
            repository: Repository the comparison belongs to
            base_revision: Base revision as requested
            head_revision: Head revision as requested

        Raises:
            ResponseParseError: If the payload is not a compare response
        """
        if not isinstance(data, dict):
            raise ResponseParseError(
                f"Expected an object for compare response, got {type(data).__name__}"
            )
        commits = data.get("commits") or []
        files = data.get("files") or []
        if not isinstance(commits, list) or not isinstance(files, list):
            raise ResponseParseError("Compare response 'commits' and 'files' must be arrays")
        base_commit = data.get("base_commit") or {}
        return cls(
            repository=repository,
            base_revision=base_revision,
            head_revision=head_revision,
            files=tuple(ChangedFile.from_dict(item) for item in files),
            commits=tuple(Commit.from_dict(item) for item in commits),
            base_sha=base_commit.get("sha") if isinstance(base_commit, dict) else None,
        )


@dataclass(frozen=True)
class PullRequest:
    """Pull request metadata needed to open a review session."""

    number: int
    title: str
    base_sha: str
    head_sha: str
    body: str = ""

    @classmethod
    def from_dict(cls, data: dict, number: int | None = None) -> PullRequest:
        """Parse the pull request endpoint response.

        Raises:
            ResponseParseError: If base or head sha is missing
        """
        base = _require(data, "base", "pull request")
        head = _require(data, "head", "pull request")
        return cls(
            number=number if number is not None else int(data.get("number") or 0),
            title=data.get("title") or "",
            base_sha=_require(base, "sha", "pull request base"),
            head_sha=_require(head, "sha", "pull request head"),
            body=data.get("body") or "",
        )
