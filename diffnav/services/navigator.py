"""Session navigator.

State machine over a Session. The navigator renders the session as rows,
turns row activations into comparisons or nested sessions, and restores its
cursor when a comparison or nested navigator is closed.

States:
    LISTING  - rows shown, nothing open
    VIEWING  - at least one comparison view or nested navigator is live
    CLOSED   - terminal; activation raises NavigatorClosedError
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from diffnav.domain.github import Commit
from diffnav.domain.session import FileCoordinates, Session
from diffnav.infrastructure.viewer.base import (
    ComparisonRequest,
    ComparisonView,
    ComparisonViewer,
)
from diffnav.services.content import ContentResolver
from diffnav.services.session_service import SessionService

SUMMARY_WIDTH = 60


class NavigatorClosedError(Exception):
    """Raised when activating rows of a closed navigator."""

    pass


# ============================================================
# Domain Models
# ============================================================


class NavigatorState(Enum):
    """Navigator lifecycle state."""

    LISTING = "listing"
    VIEWING = "viewing"
    CLOSED = "closed"


class RowKind(Enum):
    """Kind of a rendered navigator row."""

    HEADER = "header"
    SECTION = "section"
    COMMIT = "commit"
    FILE = "file"


@dataclass(frozen=True)
class FileActivation:
    """Request to compare one changed file."""

    index: int
    coordinates: FileCoordinates


@dataclass(frozen=True)
class CommitActivation:
    """Request to open a nested session for one commit of the chain."""

    index: int
    commit: Commit


Activation = Union[FileActivation, CommitActivation]


@dataclass(frozen=True)
class Cursor:
    """Selected activatable row, by kind and index within its section."""

    kind: RowKind
    index: int


@dataclass(frozen=True)
class NavigatorRow:
    """One rendered row; activatable rows carry their activation event."""

    kind: RowKind
    text: str
    activation: Activation | None = None
    selected: bool = False


def truncate(text: str, width: int = SUMMARY_WIDTH) -> str:
    if len(text) <= width:
        return text
    return text[: width - 3].rstrip() + "..."


def format_commit_row(commit: Commit) -> str:
    """Format a commit row: short hash, author, truncated summary."""
    parts = [commit.short_sha]
    if commit.author:
        parts.append(commit.author)
    parts.append(truncate(commit.summary))
    return " ".join(part for part in parts if part)


# ============================================================
# Navigator
# ============================================================


class Navigator:
    """Interactive controller over one Session.

    At most one live comparison view exists per file; activating a file
    whose view is live re-focuses that view. Commit activation recursively
    opens a nested navigator over the commit's own session.
    """

    def __init__(
        self,
        session: Session,
        resolver: ContentResolver,
        viewer: ComparisonViewer,
        session_service: SessionService,
        on_close: Callable[[Navigator], None] | None = None,
    ):
        """Initialize with the session and its collaborators.

        Args:
            session: Session to navigate
            resolver: Content resolver shared across navigators (injected)
            viewer: Comparison viewer (injected)
            session_service: Builds nested single-commit sessions (injected)
            on_close: Called once when this navigator closes
        """
        self.session = session
        self.resolver = resolver
        self.viewer = viewer
        self.session_service = session_service
        self.on_close = on_close
        self.cursor = self._initial_cursor()
        self._file_views: dict[int, ComparisonView] = {}
        self._children: dict[int, Navigator] = {}
        self._closed = False

    # --------------------------------------------------------
    # State
    # --------------------------------------------------------

    @property
    def state(self) -> NavigatorState:
        if self._closed:
            return NavigatorState.CLOSED
        if any(view.is_live for view in self._file_views.values()) or self._children:
            return NavigatorState.VIEWING
        return NavigatorState.LISTING

    @property
    def live_views(self) -> dict[int, ComparisonView]:
        return {index: view for index, view in self._file_views.items() if view.is_live}

    @property
    def children(self) -> dict[int, Navigator]:
        return dict(self._children)

    # --------------------------------------------------------
    # Rendering
    # --------------------------------------------------------

    def rows(self) -> list[NavigatorRow]:
        """Render the session as rows.

        Header rows hold the description, followed by the commit chain
        (oldest first) and the changed files (API order).
        """
        rows = [
            NavigatorRow(RowKind.HEADER, line)
            for line in (self.session.description.splitlines() or [""])
        ]

        rows.append(NavigatorRow(RowKind.SECTION, f"Commits ({len(self.session.chain)})"))
        for index, commit in enumerate(self.session.chain):
            rows.append(
                NavigatorRow(
                    RowKind.COMMIT,
                    format_commit_row(commit),
                    activation=CommitActivation(index=index, commit=commit),
                    selected=self.cursor == Cursor(RowKind.COMMIT, index),
                )
            )

        rows.append(NavigatorRow(RowKind.SECTION, f"Files ({len(self.session.files)})"))
        for index, changed in enumerate(self.session.files):
            rows.append(
                NavigatorRow(
                    RowKind.FILE,
                    changed.format_row(),
                    activation=FileActivation(
                        index=index,
                        coordinates=self.session.describe_file(index),
                    ),
                    selected=self.cursor == Cursor(RowKind.FILE, index),
                )
            )
        return rows

    def cursor_position(self) -> int | None:
        """Position of the selected row within rows(), if any."""
        for position, row in enumerate(self.rows()):
            if row.selected:
                return position
        return None

    def select_row(self, position: int) -> None:
        """Move the cursor to an activatable row.

        Raises:
            IndexError: If position is out of range
            ValueError: If the row is not activatable
        """
        self.cursor = self._cursor_for(self._row_at(position))

    # --------------------------------------------------------
    # Activation
    # --------------------------------------------------------

    def activate_row(self, position: int) -> ComparisonView | Navigator:
        """Activate the row at a rendered position."""
        return self.activate(self._require_activation(self._row_at(position)))

    def activate(self, activation: Activation) -> ComparisonView | Navigator:
        """Dispatch an activation event."""
        if isinstance(activation, FileActivation):
            return self.activate_file(activation.index)
        if isinstance(activation, CommitActivation):
            return self.activate_commit(activation.index)
        raise TypeError(f"Unsupported activation: {activation!r}")

    def activate_file(self, index: int) -> ComparisonView:
        """Open (or re-focus) the comparison for a changed file.

        The base side is resolved before the head side. On failure nothing
        is registered and the cursor does not move.

        Raises:
            NavigatorClosedError: If the navigator is closed
            IndexError: If index is out of range
            GitHubApiError: If content cannot be fetched
        """
        self._ensure_open()
        existing = self._file_views.get(index)
        if existing is not None and existing.is_live:
            existing.focus()
            self.cursor = Cursor(RowKind.FILE, index)
            return existing

        coordinates = self.session.describe_file(index)
        base = self.resolver.resolve(
            coordinates.repository, coordinates.base_revision, coordinates.base_path
        )
        head = self.resolver.resolve(
            coordinates.repository, coordinates.head_revision, coordinates.path
        )
        request = ComparisonRequest(
            base=base,
            head=head,
            label=coordinates.label,
            base_label=f"{coordinates.repository.full_name}/{coordinates.base_revision}/{coordinates.base_path}",
            head_label=f"{coordinates.repository.full_name}/{coordinates.head_revision}/{coordinates.path}",
        )

        view = self.viewer.open(request, lambda closed: self._view_closed(index, closed))
        self.cursor = Cursor(RowKind.FILE, index)
        if view.is_live:
            self._file_views[index] = view
        return view

    def activate_commit(self, index: int) -> Navigator:
        """Open (or return the live) nested navigator for a chain commit.

        Raises:
            NavigatorClosedError: If the navigator is closed
            IndexError: If index is out of range
            GitHubApiError: If the commit's comparison cannot be fetched
        """
        self._ensure_open()
        existing = self._children.get(index)
        if existing is not None:
            self.cursor = Cursor(RowKind.COMMIT, index)
            return existing

        if index < 0 or index >= len(self.session.chain):
            raise IndexError(
                f"Commit index {index} out of range (session has {len(self.session.chain)} commits)"
            )
        commit = self.session.chain[index]
        nested = self.session_service.open_commit_session(self.session.repository, commit)
        child = Navigator(
            nested,
            self.resolver,
            self.viewer,
            self.session_service,
            on_close=lambda closed: self._child_closed(index, closed),
        )
        self._children[index] = child
        self.cursor = Cursor(RowKind.COMMIT, index)
        return child

    def close(self) -> None:
        """Tear down the navigator and any nested navigators."""
        if self._closed:
            return
        self._closed = True
        for child in list(self._children.values()):
            child.close()
        self._children.clear()
        self._file_views.clear()
        if self.on_close is not None:
            self.on_close(self)

    # --------------------------------------------------------
    # Private Methods
    # --------------------------------------------------------

    def _initial_cursor(self) -> Cursor | None:
        if self.session.files:
            return Cursor(RowKind.FILE, 0)
        if self.session.chain:
            return Cursor(RowKind.COMMIT, 0)
        return None

    def _ensure_open(self) -> None:
        if self._closed:
            raise NavigatorClosedError("Navigator is closed")

    def _row_at(self, position: int) -> NavigatorRow:
        rows = self.rows()
        if position < 0 or position >= len(rows):
            raise IndexError(f"Row {position} out of range (navigator has {len(rows)} rows)")
        return rows[position]

    @staticmethod
    def _require_activation(row: NavigatorRow) -> Activation:
        if row.activation is None:
            raise ValueError(f"Row is not activatable: {row.text!r}")
        return row.activation

    @classmethod
    def _cursor_for(cls, row: NavigatorRow) -> Cursor:
        return Cursor(row.kind, cls._require_activation(row).index)

    def _view_closed(self, index: int, view: ComparisonView) -> None:
        if self._file_views.get(index) is view:
            del self._file_views[index]
        if not self._closed:
            self.cursor = Cursor(RowKind.FILE, index)

    def _child_closed(self, index: int, child: Navigator) -> None:
        if self._children.get(index) is child:
            del self._children[index]
        if not self._closed:
            self.cursor = Cursor(RowKind.COMMIT, index)
