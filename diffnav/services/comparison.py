"""Comparison fetcher.

Requests compare data for a revision pair and parses it into a Comparison.
"""

from __future__ import annotations

from diffnav.domain.github import Comparison, PullRequest, Repository
from diffnav.infrastructure.github.client import GitHubApiClient


class ComparisonFetcher:
    """Fetches typed compare data and pull request metadata."""

    def __init__(self, client: GitHubApiClient):
        self.client = client

    def fetch(self, repository: Repository, base_revision: str, head_revision: str) -> Comparison:
        """Fetch the comparison between two revisions.

        Calls the compare endpoint exactly once. File order is preserved.
        API errors propagate unchanged; a 403 is not interpreted.

        Raises:
            GitHubApiError: On a fatal API status
            ResponseParseError: If the payload is malformed
        """
        url = self.client.compare_url(repository, base_revision, head_revision)
        response = self.client.request(url)
        return Comparison.from_dict(
            response.body,
            repository=repository,
            base_revision=base_revision,
            head_revision=head_revision,
        )

    def fetch_pull_request(self, repository: Repository, number: int) -> PullRequest:
        """Fetch pull request metadata (base and head hashes, title, body).

        Raises:
            GitHubApiError: On a fatal API status
            ResponseParseError: If the payload is malformed
        """
        response = self.client.request(self.client.pull_request_url(repository, number))
        return PullRequest.from_dict(response.body, number=number)
