"""Review commands - open a review session for a pull request or commit.

    show    Print the session's commit chain and changed files
    review  Browse the session interactively: open file comparisons and
            drill into single commits
"""

from __future__ import annotations

import sys

from diffnav.domain.github import ResponseParseError
from diffnav.domain.reference import MalformedReferenceError, ReviewReference
from diffnav.domain.session import Session
from diffnav.infrastructure.github.client import GitHubApiClient, GitHubApiError
from diffnav.infrastructure.settings import Settings
from diffnav.infrastructure.viewer.base import ComparisonViewer
from diffnav.infrastructure.viewer.external import ExternalDiffViewer, ViewerError
from diffnav.services.comparison import ComparisonFetcher
from diffnav.services.content import ContentCache, ContentResolver
from diffnav.services.navigator import Navigator, NavigatorState
from diffnav.services.session_service import SessionService
from diffnav.utils.interactive import print_navigator, prompt_line

# Errors shown to the user at the interactive boundary
_REPORTED_ERRORS = (GitHubApiError, ResponseParseError, ViewerError)


def create_client(settings: Settings) -> GitHubApiClient:
    """Create an API client from resolved settings."""
    return GitHubApiClient(
        token=settings.token,
        api_url=settings.api_url,
        raw_url=settings.raw_url,
        timeout=settings.timeout,
    )


def _open_session(
    reference: str,
    service: SessionService,
    settings: Settings,
) -> Session | None:
    """Parse the reference and open its session, reporting failures."""
    try:
        parsed = ReviewReference.parse(reference)
    except MalformedReferenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    print(f"Fetching {parsed}...")
    if not settings.token:
        print("  No token configured; sending unauthenticated requests")
    try:
        session = service.open_reference(parsed)
    except (GitHubApiError, ResponseParseError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    print(f"  {len(session.chain)} commits, {len(session.files)} files changed")
    return session


def cmd_show(
    reference: str,
    settings: Settings,
    client: GitHubApiClient | None = None,
) -> int:
    """Print a session without interaction.

    Args:
        reference: Pull request or commit reference (URL or shorthand)
        settings: Resolved settings
        client: API client (default: created from settings)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    client = client or create_client(settings)
    service = SessionService(ComparisonFetcher(client))
    session = _open_session(reference, service, settings)
    if session is None:
        return 1

    navigator = Navigator(
        session,
        ContentResolver(client, ContentCache()),
        ExternalDiffViewer(command=settings.diff_command),
        service,
    )
    print_navigator(navigator)
    navigator.close()
    return 0


def cmd_review(
    reference: str,
    settings: Settings,
    client: GitHubApiClient | None = None,
    viewer: ComparisonViewer | None = None,
    cache: ContentCache | None = None,
) -> int:
    """Browse a session interactively.

    Args:
        reference: Pull request or commit reference (URL or shorthand)
        settings: Resolved settings
        client: API client (default: created from settings)
        viewer: Comparison viewer (default: external diff command from settings)
        cache: Process-wide content cache (default: a new cache)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    client = client or create_client(settings)
    service = SessionService(ComparisonFetcher(client))
    session = _open_session(reference, service, settings)
    if session is None:
        return 1

    navigator = Navigator(
        session,
        ContentResolver(client, cache if cache is not None else ContentCache()),
        viewer or ExternalDiffViewer(command=settings.diff_command),
        service,
    )
    run_navigator(navigator)
    return 0


def run_navigator(navigator: Navigator) -> None:
    """Prompt loop over a navigator and the nested navigators it opens.

    A row number activates that row, an empty line activates the selected
    row, and "q" closes the current navigator, returning to its parent.
    """
    stack = [navigator]
    while stack:
        current = stack[-1]
        if current.state is NavigatorState.CLOSED:
            stack.pop()
            continue

        print_navigator(current)
        response = prompt_line("Row number (Enter = selected, q = back)")
        if response is None:
            stack[0].close()
            break
        if response.lower() in ("q", "quit"):
            current.close()
            stack.pop()
            continue

        if response == "":
            position = current.cursor_position()
            if position is None:
                print("  Nothing to open")
                continue
        elif response.isdigit():
            position = int(response)
        else:
            print("  Please enter a row number or 'q'")
            continue

        try:
            result = current.activate_row(position)
        except (IndexError, ValueError) as e:
            print(f"  {e}")
            continue
        except _REPORTED_ERRORS as e:
            print(f"  Error: {e}", file=sys.stderr)
            continue

        if isinstance(result, Navigator) and result not in stack:
            stack.append(result)
