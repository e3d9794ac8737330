"""Session service.

Turns review references into sessions. Every session, including the nested
single-commit sessions opened from a navigator, goes through the same
pipeline: fetch the comparison, linearize its commits, build the Session.
"""

from __future__ import annotations

from diffnav.domain.github import Commit, Comparison, Repository
from diffnav.domain.reference import ReviewReference
from diffnav.domain.session import Session, SessionTarget
from diffnav.services.ancestry import linearize
from diffnav.services.comparison import ComparisonFetcher


def parent_revision(sha: str) -> str:
    """Revision naming the first parent of a commit."""
    return f"{sha}^"


class SessionService:
    """Builds review sessions from references and revision pairs."""

    def __init__(self, fetcher: ComparisonFetcher):
        """Initialize with dependencies.

        Args:
            fetcher: Comparison fetcher (injected)
        """
        self.fetcher = fetcher

    # ============================================================
    # Public API
    # ============================================================

    def open_session(self, target: SessionTarget) -> Session:
        """Fetch, linearize, and build a session for a revision pair.

        Nothing is built if the fetch fails.

        Raises:
            GitHubApiError: On a fatal API status
            ResponseParseError: If the compare payload is malformed
        """
        comparison = self.fetcher.fetch(
            target.repository, target.base_revision, target.head_revision
        )
        chain = linearize(comparison.commits, target.head_revision)
        return Session(
            description=target.description,
            comparison=comparison,
            chain=tuple(chain),
            base_sha=self._base_sha(target, comparison, chain),
        )

    def open_commit_session(self, repository: Repository, commit: Commit) -> Session:
        """Open a nested session scoped to a single commit (commit^..commit).

        The compare call uses "sha^"; file content is read at the first parent.
        """
        description = f"{commit.short_sha} {commit.summary}".rstrip()
        if commit.author:
            description += f"\nAuthor: {commit.author}"
        return self.open_session(
            SessionTarget(
                repository=repository,
                base_revision=parent_revision(commit.sha),
                head_revision=commit.sha,
                description=description,
            )
        )

    def resolve_reference(self, reference: ReviewReference) -> SessionTarget:
        """Normalize a reference to (repository, base, head, description).

        Pull requests are looked up to obtain their base and head hashes.
        A commit reference, with or without a pull request, compares the
        commit against its first parent.

        Raises:
            GitHubApiError: If the pull request lookup fails
        """
        repository = reference.repository

        if reference.pr_number is None:
            sha = reference.commit_sha
            return SessionTarget(
                repository=repository,
                base_revision=parent_revision(sha),
                head_revision=sha,
                description=f"{repository.full_name} commit {sha}",
            )

        pr = self.fetcher.fetch_pull_request(repository, reference.pr_number)
        title = f"#{pr.number} {pr.title}".rstrip()

        if reference.commit_sha is not None:
            sha = reference.commit_sha
            return SessionTarget(
                repository=repository,
                base_revision=parent_revision(sha),
                head_revision=sha,
                description=f"{title} @ {sha[:7]}",
            )

        description = title
        if pr.body.strip():
            description += f"\n\n{pr.body.strip()}"
        return SessionTarget(
            repository=repository,
            base_revision=pr.base_sha,
            head_revision=pr.head_sha,
            description=description,
        )

    def open_reference(self, reference: ReviewReference) -> Session:
        """Resolve a reference and open its session."""
        return self.open_session(self.resolve_reference(reference))

    # ============================================================
    # Private Helpers
    # ============================================================

    @staticmethod
    def _base_sha(target: SessionTarget, comparison: Comparison, chain: list[Commit]) -> str | None:
        """Commit hash for the base side of a session.

        The raw content host does not evaluate "sha^", so a single-commit
        session reads its base side at the head commit's first parent.
        """
        if comparison.base_sha:
            return comparison.base_sha
        if chain and target.base_revision == parent_revision(target.head_revision):
            return chain[-1].first_parent
        return None
