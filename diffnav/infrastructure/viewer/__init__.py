"""Comparison viewers - external collaborators that show two-pane diffs."""

from .base import ComparisonRequest, ComparisonView, ComparisonViewer
from .external import ExternalDiffView, ExternalDiffViewer, ViewerError

__all__ = [
    "ComparisonRequest",
    "ComparisonView",
    "ComparisonViewer",
    "ExternalDiffView",
    "ExternalDiffViewer",
    "ViewerError",
]
