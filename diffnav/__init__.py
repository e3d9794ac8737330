"""diffnav - review GitHub pull requests and commits file by file.

Resolves a pull request or commit reference to a (base, head) revision pair,
fetches the changed files and the intervening commits from the GitHub compare
API, and lets the reviewer open each file in a two-pane comparison without a
local checkout.

Usage:
    python -m diffnav <command> <reference> [options]
    diffnav <command> <reference> [options]

Structure:
    diffnav/
    ├── __main__.py          # Entry point dispatcher
    ├── domain/              # Domain models (parse-once pattern)
    │   ├── github.py        # Repository, Commit, ChangedFile, Comparison, PullRequest
    │   ├── content.py       # Content, ContentKey
    │   ├── reference.py     # ReviewReference parsing
    │   └── session.py       # Session, SessionTarget, FileCoordinates
    ├── services/            # Business logic services
    │   ├── ancestry.py      # First-parent chain reconstruction
    │   ├── comparison.py    # Comparison fetcher
    │   ├── content.py       # Content resolver and cache
    │   ├── navigator.py     # Navigator state machine
    │   └── session_service.py
    ├── infrastructure/      # External system interactions
    │   ├── github/          # GitHub REST client
    │   ├── viewer/          # Comparison viewers
    │   └── settings.py      # YAML config and credentials
    ├── utils/               # Terminal display helpers
    └── commands/            # Thin command orchestrators
        └── review.py
"""
