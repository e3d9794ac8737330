"""Content resolver and cache.

Resolves file content per (repository, revision, path) and memoizes it in a
ContentCache. The cache has no invalidation policy: entries live as long as
the cache object, which is sound only for immutable commit hashes. Passing a
branch or tag name as revision may return stale content.
"""

from __future__ import annotations

from diffnav.domain.content import Content, ContentKey
from diffnav.domain.github import Repository
from diffnav.infrastructure.github.client import GitHubApiClient


class ContentCache:
    """Mapping from ContentKey to Content.

    Created once per process by the entry point and injected wherever content
    is resolved. Tests create an isolated instance each.
    """

    def __init__(self):
        self._entries: dict[ContentKey, Content] = {}

    def get(self, key: ContentKey) -> Content | None:
        return self._entries.get(key)

    def put(self, key: ContentKey, content: Content) -> None:
        self._entries[key] = content

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ContentResolver:
    """Returns file content at a revision, fetching on cache miss."""

    def __init__(self, client: GitHubApiClient, cache: ContentCache):
        """Initialize with dependencies.

        Args:
            client: API client used for raw content requests (injected)
            cache: Shared content cache (injected)
        """
        self.client = client
        self.cache = cache

    def resolve(self, repository: Repository, revision: str, path: str) -> Content:
        """Resolve content for an exact (repository, revision, path) key.

        A 404 from the content host resolves to empty content: the file does
        not exist at that revision (added or deleted file).

        Raises:
            GitHubApiError: On any other failure; nothing is cached so a
                later call fetches again
        """
        key = ContentKey(repository=repository, revision=revision, path=path)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        response = self.client.request_raw(self.client.raw_content_url(repository, revision, path))
        content = Content.absent() if response.is_absent else Content(data=response.content)
        self.cache.put(key, content)
        return content
