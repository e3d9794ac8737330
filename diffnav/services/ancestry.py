"""First-parent chain reconstruction.

The compare endpoint returns the commits between two revisions without a
reliable order. The review needs the mainline of that range: start at the
head commit and follow first parents until leaving the returned set.
"""

from __future__ import annotations

from collections.abc import Iterable

from diffnav.domain.github import Commit

# Shortest abbreviated hash accepted when the head has no exact match
MIN_ABBREVIATED_SHA = 7


def linearize(commits: Iterable[Commit], head_revision: str) -> list[Commit]:
    """Return the first-parent chain ending at head_revision, oldest first.

    The walk stops at the first commit missing from the set; that is the
    normal exit when the chain leaves the compared range. Secondary parents
    are never followed, so commits merged in from side branches are left out.

    Args:
        commits: Commit set as returned by the compare endpoint
        head_revision: Full or abbreviated hash of the head commit

    Returns:
        Commits from oldest to head; empty if head_revision is not in the set
    """
    by_sha: dict[str, Commit] = {}
    for commit in commits:
        by_sha.setdefault(commit.sha, commit)

    chain: list[Commit] = []
    seen: set[str] = set()
    current = _find_head(by_sha, head_revision)
    while current is not None and current.sha not in seen:
        seen.add(current.sha)
        chain.insert(0, current)
        parent = current.first_parent
        current = by_sha.get(parent) if parent else None
    return chain


def _find_head(by_sha: dict[str, Commit], head_revision: str) -> Commit | None:
    if head_revision in by_sha:
        return by_sha[head_revision]
    if len(head_revision) < MIN_ABBREVIATED_SHA:
        return None
    matches = [commit for sha, commit in by_sha.items() if sha.startswith(head_revision)]
    return matches[0] if len(matches) == 1 else None
