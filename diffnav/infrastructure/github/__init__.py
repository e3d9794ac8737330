"""GitHub API wrapper."""

from .client import (
    ApiResponse,
    GitHubApiClient,
    GitHubApiError,
    GitHubTransportError,
    RawResponse,
    ResponseStatus,
    classify_status,
)

__all__ = [
    "ApiResponse",
    "GitHubApiClient",
    "GitHubApiError",
    "GitHubTransportError",
    "RawResponse",
    "ResponseStatus",
    "classify_status",
]
