"""Domain model for review references.

A review reference names what to review: a pull request, a single commit, or
a single commit inside a pull request. References are parsed from web URLs
or from the owner/repo#number@sha shorthand before any network call is made.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from diffnav.domain.github import Repository


class MalformedReferenceError(ValueError):
    """Raised when a review reference cannot be parsed."""

    pass


_NAME = r"[A-Za-z0-9_.-]+"
_SHA = r"[0-9a-fA-F]{7,40}"

_SHA_PATTERN = re.compile(rf"^{_SHA}$")

# owner/repo#12, owner/repo@abc1234, owner/repo#12@abc1234
_SHORTHAND_PATTERN = re.compile(
    rf"^(?P<owner>{_NAME})/(?P<repo>{_NAME})"
    rf"(?:#(?P<pr>\d+))?"
    rf"(?:@(?P<sha>{_SHA}))?$"
)

# /owner/repo/pull/12[/commits/sha][/anything]
_PULL_PATH_PATTERN = re.compile(
    rf"^/(?P<owner>{_NAME})/(?P<repo>{_NAME})/pull/(?P<pr>\d+)"
    rf"(?:/commits/(?P<sha>{_SHA}))?(?:/.*)?$"
)

# /owner/repo/commit/sha
_COMMIT_PATH_PATTERN = re.compile(
    rf"^/(?P<owner>{_NAME})/(?P<repo>{_NAME})/commits?/(?P<sha>{_SHA})(?:/.*)?$"
)


@dataclass(frozen=True)
class ReviewReference:
    """A normalized reference to a pull request and/or commit.

    At least one of pr_number and commit_sha is set.
    """

    repository: Repository
    pr_number: int | None = None
    commit_sha: str | None = None

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> ReviewReference:
        """Parse a reference from a URL or shorthand.

        Args:
            text: e.g. "https://github.com/o/r/pull/12", "https://github.com/o/r/commit/abc1234",
                "https://github.com/o/r/pull/12/commits/abc1234", "o/r#12", "o/r@abc1234"

        Returns:
            Parsed ReviewReference

        Raises:
            MalformedReferenceError: If the text matches no supported form
        """
        value = text.strip()
        if not value:
            raise MalformedReferenceError("Empty review reference")

        if "://" in value:
            match = cls._match_url(value)
        else:
            match = _SHORTHAND_PATTERN.match(value)
            if match and not (match.group("pr") or match.group("sha")):
                match = None

        if not match:
            raise MalformedReferenceError(
                f"Unrecognized review reference: {text!r}. Expected a pull request or "
                "commit URL, or owner/repo#number, owner/repo@sha, owner/repo#number@sha"
            )

        pr = match.group("pr") if "pr" in match.groupdict() else None
        return cls.from_parts(
            f"{match.group('owner')}/{match.group('repo')}",
            pr_number=int(pr) if pr else None,
            commit_sha=match.group("sha"),
        )

    @classmethod
    def from_parts(
        cls,
        repository: str,
        pr_number: int | None = None,
        commit_sha: str | None = None,
    ) -> ReviewReference:
        """Build a reference from explicit components.

        Raises:
            MalformedReferenceError: If the components are inconsistent or invalid
        """
        try:
            repo = Repository.from_full_name(repository)
        except ValueError as e:
            raise MalformedReferenceError(str(e)) from e
        if repo.name.endswith(".git"):
            repo = Repository(owner=repo.owner, name=repo.name[: -len(".git")])

        if pr_number is None and commit_sha is None:
            raise MalformedReferenceError("A pull request number or commit hash is required")
        if pr_number is not None and pr_number <= 0:
            raise MalformedReferenceError(f"Invalid pull request number: {pr_number}")
        if commit_sha is not None and not _SHA_PATTERN.match(commit_sha):
            raise MalformedReferenceError(f"Invalid commit hash: {commit_sha!r}")

        return cls(
            repository=repo,
            pr_number=pr_number,
            commit_sha=commit_sha.lower() if commit_sha else None,
        )

    @staticmethod
    def _match_url(value: str) -> re.Match | None:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            return None
        path = parts.path.rstrip("/")
        return _PULL_PATH_PATTERN.match(path) or _COMMIT_PATH_PATTERN.match(path)

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def is_pull_request(self) -> bool:
        return self.pr_number is not None

    @property
    def is_commit(self) -> bool:
        return self.commit_sha is not None

    def __str__(self) -> str:
        text = self.repository.full_name
        if self.pr_number is not None:
            text += f"#{self.pr_number}"
        if self.commit_sha is not None:
            text += f"@{self.commit_sha}"
        return text
