"""Shared utility library for check_zpools."""

from check_zpools.lib.process import CommandError, check_tool, run_command

__all__ = [
    "CommandError",
    "check_tool",
    "run_command",
]
