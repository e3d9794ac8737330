"""Services for diffnav.

Services encapsulate business logic and orchestrate domain models.
They receive dependencies via constructor injection.
"""

from diffnav.services.ancestry import linearize
from diffnav.services.comparison import ComparisonFetcher
from diffnav.services.content import ContentCache, ContentResolver
from diffnav.services.navigator import (
    CommitActivation,
    FileActivation,
    Navigator,
    NavigatorClosedError,
    NavigatorRow,
    NavigatorState,
    RowKind,
)
from diffnav.services.session_service import SessionService

__all__ = [
    "CommitActivation",
    "ComparisonFetcher",
    "ContentCache",
    "ContentResolver",
    "FileActivation",
    "Navigator",
    "NavigatorClosedError",
    "NavigatorRow",
    "NavigatorState",
    "RowKind",
    "SessionService",
    "linearize",
]
