"""External diff command viewer.

Writes both sides of a comparison to a temporary directory and runs a diff
command on them, e.g. `diff -u`, `git diff --no-index`, `meld`, `vimdiff`.
The command blocks until the user is done, then the view reports closed.
"""

from __future__ import annotations

import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from diffnav.infrastructure.viewer.base import CloseCallback, ComparisonRequest


class ViewerError(Exception):
    """Raised when the diff command cannot be started."""

    pass


@dataclass
class ExternalDiffView:
    """A comparison shown by an external command."""

    label: str
    command: list[str]
    base_file: Path
    head_file: Path
    live: bool = True

    @property
    def is_live(self) -> bool:
        return self.live

    def focus(self) -> None:
        # The command runs in the foreground; nothing to raise.
        pass


@dataclass
class ExternalDiffViewer:
    """Comparison viewer that shells out to a diff command.

    Attributes:
        command: Command and leading arguments; the base and head file
            paths are appended
        runner: subprocess.run compatible callable (injected for tests)
    """

    command: list[str] = field(default_factory=lambda: ["diff", "-u"])
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def open(self, request: ComparisonRequest, on_close: CloseCallback) -> ExternalDiffView:
        """Show the comparison and block until the command exits.

        The command's exit status is not checked: diff tools exit non-zero
        when the inputs differ.

        Raises:
            ViewerError: If the command is not found or cannot be executed
        """
        print(f"=== {request.label}")
        with tempfile.TemporaryDirectory(prefix="diffnav-") as tmp:
            base_file = self._write(Path(tmp) / "base", request.base_label, request.base.data)
            head_file = self._write(Path(tmp) / "head", request.head_label, request.head.data)
            view = ExternalDiffView(
                label=request.label,
                command=self.command,
                base_file=base_file,
                head_file=head_file,
            )
            try:
                self.runner(self.command + [str(base_file), str(head_file)], check=False)
            except OSError as e:
                raise ViewerError(f"Failed to run diff command {self.command[0]!r}: {e}") from e
        view.live = False
        on_close(view)
        return view

    # --------------------------------------------------------
    # Private Methods
    # --------------------------------------------------------

    @staticmethod
    def _write(directory: Path, label: str, data: bytes) -> Path:
        """Write data under directory using the label's file name."""
        directory.mkdir(parents=True, exist_ok=True)
        name = label.rsplit("/", 1)[-1] or "content"
        path = directory / name
        path.write_bytes(data)
        return path
