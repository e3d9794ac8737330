"""Interactive prompting and list display utilities.

Provides the terminal list rendering used to show a navigator.
"""

from __future__ import annotations

from diffnav.services.navigator import Navigator, NavigatorRow, RowKind


# ============================================================
# Prompt Functions
# ============================================================


def prompt_line(message: str) -> str | None:
    """Prompt for one line of input.

    Returns:
        The stripped response, or None on EOF
    """
    try:
        return input(f"{message}: ").strip()
    except EOFError:
        return None


# ============================================================
# Display Functions
# ============================================================


def print_separator(char: str = "─", width: int = 60) -> None:
    """Print a horizontal separator line."""
    print(char * width)


def print_header(lines: list[str], char: str = "─", width: int = 60) -> None:
    """Print lines with separators above and below."""
    print_separator(char, width)
    for line in lines:
        print(line)
    print_separator(char, width)


def format_row(position: int, row: NavigatorRow) -> str:
    """Format a navigator row for the terminal.

    Activatable rows are numbered by position so they can be picked at the
    prompt; the selected row is marked with ">".
    """
    if row.kind is RowKind.SECTION:
        return f"\n{row.text}"
    if row.activation is None:
        return row.text
    marker = ">" if row.selected else " "
    return f"{marker} {position:3d}  {row.text}"


def print_navigator(navigator: Navigator) -> None:
    """Print a navigator's header block and its activatable rows."""
    rows = navigator.rows()
    header = [row.text for row in rows if row.kind is RowKind.HEADER]
    print_header(header)
    for position, row in enumerate(rows):
        if row.kind is RowKind.HEADER:
            continue
        print(format_row(position, row))
    print()
