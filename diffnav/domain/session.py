"""Domain models for a review session.

A session is one review unit: a comparison between two revisions plus the
first-parent commit chain reconstructed from it. Sessions are immutable once
built; the selection cursor belongs to the navigator.
"""

from __future__ import annotations

from dataclasses import dataclass

from diffnav.domain.github import ChangedFile, Commit, Comparison, Repository


@dataclass(frozen=True)
class SessionTarget:
    """Normalized entry point of the engine, whatever the reference form."""

    repository: Repository
    base_revision: str
    head_revision: str
    description: str


@dataclass(frozen=True)
class FileCoordinates:
    """Everything needed to resolve both sides of one changed file.

    Attributes:
        repository: Repository holding the file
        base_revision: Revision for the left side
        head_revision: Revision for the right side
        path: Path at the head revision
        base_path: Path at the base revision (differs from path for renames)
    """

    repository: Repository
    base_revision: str
    head_revision: str
    path: str
    base_path: str

    @property
    def label(self) -> str:
        return (
            f"{self.repository.full_name}: {self.path} "
            f"({self.base_revision[:7]}..{self.head_revision[:7]})"
        )


@dataclass(frozen=True)
class Session:
    """A comparison with its reconstructed commit chain.

    Attributes:
        description: Human-readable header (PR title and body, commit summary, ...)
        comparison: Compare data for the session's revision pair
        chain: First-parent commits, oldest first
        base_sha: Commit hash of the base side when base_revision is an
            expression such as "sha^" that only the compare endpoint resolves
    """

    description: str
    comparison: Comparison
    chain: tuple[Commit, ...] = ()
    base_sha: str | None = None

    @property
    def repository(self) -> Repository:
        return self.comparison.repository

    @property
    def base_revision(self) -> str:
        """Revision the base side of every file is read at."""
        return self.base_sha or self.comparison.base_sha or self.comparison.base_revision

    @property
    def files(self) -> tuple[ChangedFile, ...]:
        return self.comparison.files

    def describe_file(self, index: int) -> FileCoordinates:
        """Coordinates needed to resolve both sides of a changed file.

        Args:
            index: Position of the file in API order

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= len(self.files):
            raise IndexError(f"File index {index} out of range (session has {len(self.files)} files)")
        changed = self.files[index]
        return FileCoordinates(
            repository=self.repository,
            base_revision=self.base_revision,
            head_revision=self.comparison.head_revision,
            path=changed.path,
            base_path=changed.base_path,
        )
