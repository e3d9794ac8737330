"""Tests for the Session model.

Tests cover:
- describe_file coordinates, including renames
- Out-of-range file indexes
"""

import unittest

from diffnav.domain.github import ChangedFile, Comparison, FileStatus, Repository
from diffnav.domain.session import Session

REPO = Repository("octo", "widgets")


class TestSession(unittest.TestCase):
    """Tests for Session.describe_file."""

    def setUp(self):
        comparison = Comparison(
            repository=REPO,
            base_revision="b1",
            head_revision="h1",
            files=(
                ChangedFile("a.go", FileStatus.MODIFIED, 3, 1),
                ChangedFile("new.go", FileStatus.RENAMED, 0, 0, previous_path="old.go"),
            ),
        )
        self.session = Session(description="desc", comparison=comparison)

    def test_describe_file_returns_coordinates(self):
        coords = self.session.describe_file(0)

        self.assertEqual(coords.repository, REPO)
        self.assertEqual(coords.base_revision, "b1")
        self.assertEqual(coords.head_revision, "h1")
        self.assertEqual(coords.path, "a.go")
        self.assertEqual(coords.base_path, "a.go")

    def test_describe_renamed_file_uses_previous_path_for_base(self):
        coords = self.session.describe_file(1)

        self.assertEqual(coords.path, "new.go")
        self.assertEqual(coords.base_path, "old.go")

    def test_label_names_repository_path_and_revisions(self):
        self.assertEqual(self.session.describe_file(0).label, "octo/widgets: a.go (b1..h1)")

    def test_base_sha_overrides_base_revision_expression(self):
        comparison = Comparison(
            repository=REPO,
            base_revision="h1^",
            head_revision="h1",
            files=(ChangedFile("a.go", FileStatus.MODIFIED, 1, 0),),
        )
        session = Session(description="desc", comparison=comparison, base_sha="b1")

        coords = session.describe_file(0)

        self.assertEqual(coords.base_revision, "b1")
        self.assertEqual(session.comparison.base_revision, "h1^")

    def test_out_of_range_index_raises(self):
        with self.assertRaises(IndexError):
            self.session.describe_file(2)
        with self.assertRaises(IndexError):
            self.session.describe_file(-1)

    def test_repository_and_files_come_from_comparison(self):
        self.assertEqual(self.session.repository, REPO)
        self.assertEqual(len(self.session.files), 2)
        self.assertEqual(self.session.chain, ())


if __name__ == "__main__":
    unittest.main()
