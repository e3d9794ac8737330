"""Domain models for diffnav."""

from diffnav.domain.content import Content, ContentKey
from diffnav.domain.github import (
    ChangedFile,
    Commit,
    Comparison,
    FileStatus,
    PullRequest,
    Repository,
    ResponseParseError,
)
from diffnav.domain.reference import MalformedReferenceError, ReviewReference
from diffnav.domain.session import FileCoordinates, Session, SessionTarget

__all__ = [
    "ChangedFile",
    "Commit",
    "Comparison",
    "Content",
    "ContentKey",
    "FileCoordinates",
    "FileStatus",
    "MalformedReferenceError",
    "PullRequest",
    "Repository",
    "ResponseParseError",
    "ReviewReference",
    "Session",
    "SessionTarget",
]
