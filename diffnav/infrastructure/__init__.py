"""Infrastructure components for diffnav.

This layer handles external system interactions:
- GitHub REST API and raw content host via requests
- Settings and credentials from YAML config and environment
- External diff commands that display comparisons

Organized into subdirectories:
- github/ - GitHub API client
- viewer/ - Comparison viewers
"""

# GitHub API
from .github import (
    GitHubApiClient,
    GitHubApiError,
    GitHubTransportError,
)

# Settings
from .settings import Settings, SettingsError

# Comparison viewers
from .viewer import (
    ComparisonRequest,
    ComparisonViewer,
    ExternalDiffViewer,
    ViewerError,
)

__all__ = [
    # GitHub API
    "GitHubApiClient",
    "GitHubApiError",
    "GitHubTransportError",
    # Settings
    "Settings",
    "SettingsError",
    # Comparison viewers
    "ComparisonRequest",
    "ComparisonViewer",
    "ExternalDiffViewer",
    "ViewerError",
]
