"""Tests for ExternalDiffViewer.

Tests cover:
- Both sides written to files and passed to the command
- Close signal after the command exits
- Non-zero exit codes are not errors
- Missing command raises ViewerError
"""

import subprocess
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from diffnav.domain.content import Content
from diffnav.infrastructure.viewer.base import ComparisonRequest
from diffnav.infrastructure.viewer.external import ExternalDiffViewer, ViewerError


def make_request(base: Content, head: Content) -> ComparisonRequest:
    return ComparisonRequest(
        base=base,
        head=head,
        label="octo/widgets: src/a.py (b1..h1)",
        base_label="octo/widgets/b1/src/a.py",
        head_label="octo/widgets/h1/src/a.py",
    )


class TestExternalDiffViewer(unittest.TestCase):
    """Tests for ExternalDiffViewer.open."""

    def setUp(self):
        self.seen: dict[str, bytes] = {}

        def fake_run(cmd, check):
            # Files only exist while the command runs
            self.seen["cmd"] = cmd
            self.seen["base"] = Path(cmd[-2]).read_bytes()
            self.seen["head"] = Path(cmd[-1]).read_bytes()
            return subprocess.CompletedProcess(cmd, 1)

        self.runner = MagicMock(side_effect=fake_run)
        self.viewer = ExternalDiffViewer(command=["diff", "-u"], runner=self.runner)

    def test_runs_command_on_both_sides(self):
        self.viewer.open(make_request(Content(b"old\n"), Content(b"new\n")), MagicMock())

        self.assertEqual(self.seen["cmd"][:2], ["diff", "-u"])
        self.assertTrue(self.seen["cmd"][2].endswith("a.py"))
        self.assertEqual(self.seen["base"], b"old\n")
        self.assertEqual(self.seen["head"], b"new\n")
        self.assertEqual(self.runner.call_args.kwargs["check"], False)

    def test_absent_side_is_written_empty(self):
        self.viewer.open(make_request(Content(b"bye\n"), Content.absent()), MagicMock())

        self.assertEqual(self.seen["head"], b"")

    def test_signals_close_after_command_exits(self):
        on_close = MagicMock()

        view = self.viewer.open(make_request(Content(b"a"), Content(b"b")), on_close)

        on_close.assert_called_once_with(view)
        self.assertFalse(view.is_live)
        self.assertEqual(view.label, "octo/widgets: src/a.py (b1..h1)")

    def test_temporary_files_are_removed(self):
        view = self.viewer.open(make_request(Content(b"a"), Content(b"b")), MagicMock())

        self.assertFalse(view.base_file.exists())
        self.assertFalse(view.head_file.exists())

    def test_missing_command_raises_viewer_error(self):
        on_close = MagicMock()
        viewer = ExternalDiffViewer(
            command=["no-such-diff-tool"],
            runner=MagicMock(side_effect=FileNotFoundError("no-such-diff-tool")),
        )

        with self.assertRaises(ViewerError):
            viewer.open(make_request(Content(b"a"), Content(b"b")), on_close)
        on_close.assert_not_called()


if __name__ == "__main__":
    unittest.main()
