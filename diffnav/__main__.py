#!/usr/bin/env python3
"""CLI entry point for diffnav.

Usage:
    python -m diffnav <command> <reference> [options]

Commands:
    review  Browse a pull request or commit interactively
    show    Print a pull request's or commit's commits and changed files
"""

import argparse
import sys

from diffnav.commands.review import cmd_review, cmd_show
from diffnav.infrastructure.settings import Settings, SettingsError


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "reference",
        help="Pull request or commit URL, or owner/repo#number, owner/repo@sha, owner/repo#number@sha",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file (default: ~/.config/diffnav/config.yaml)",
    )
    parser.add_argument(
        "--token",
        help="GitHub token (default: GITHUB_TOKEN / GH_TOKEN or config file)",
    )
    parser.add_argument(
        "--api-url",
        help="GitHub API base URL (default: https://api.github.com)",
    )
    parser.add_argument(
        "--raw-url",
        help="Raw content base URL (default: https://raw.githubusercontent.com)",
    )


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Review the file changes of a GitHub pull request or commit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  review  Browse a pull request or commit interactively
  show    Print the commit chain and changed files

Examples:
  diffnav review https://github.com/owner/repo/pull/123
  diffnav review owner/repo#123 --diff-command "git diff --no-index"
  diffnav show https://github.com/owner/repo/commit/abc1234
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # review command
    parser_review = subparsers.add_parser(
        "review",
        help="Browse a pull request or commit interactively",
    )
    _add_common_arguments(parser_review)
    parser_review.add_argument(
        "--diff-command",
        help="Command used to show file comparisons (default: 'diff -u')",
    )

    # show command
    parser_show = subparsers.add_parser(
        "show",
        help="Print the commit chain and changed files",
    )
    _add_common_arguments(parser_show)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = Settings.load(
            config_path=args.config,
            token=args.token,
            api_url=args.api_url,
            raw_url=args.raw_url,
            diff_command=getattr(args, "diff_command", None),
        )
    except SettingsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Route to command implementations with explicit parameters
    if args.command == "review":
        return cmd_review(reference=args.reference, settings=settings)

    elif args.command == "show":
        return cmd_show(reference=args.reference, settings=settings)

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
