"""CLI command implementations."""

from diffnav.commands.review import cmd_review, cmd_show

__all__ = ["cmd_review", "cmd_show"]
