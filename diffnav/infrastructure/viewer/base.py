"""Comparison viewer interface.

The navigator hands two content buffers to a comparison viewer and listens
for the view's close signal. Viewers are external collaborators: any object
satisfying ComparisonViewer can be injected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from diffnav.domain.content import Content


@dataclass(frozen=True)
class ComparisonRequest:
    """Two content blobs to show side by side.

    Either side may be empty to represent an added or deleted file.
    """

    base: Content
    head: Content
    label: str
    base_label: str
    head_label: str


class ComparisonView(Protocol):
    """A comparison opened by a viewer."""

    label: str

    @property
    def is_live(self) -> bool:
        """Whether the view is still open."""
        ...

    def focus(self) -> None:
        """Bring the view to the front."""
        ...


CloseCallback = Callable[[ComparisonView], None]


class ComparisonViewer(Protocol):
    """Opens two-pane comparisons."""

    def open(self, request: ComparisonRequest, on_close: CloseCallback) -> ComparisonView:
        """Open a comparison and call on_close(view) once it is closed."""
        ...
