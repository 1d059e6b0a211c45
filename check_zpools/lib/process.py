"""Process utilities for zpool queries."""

import subprocess
from typing import TYPE_CHECKING

from check_zpools.core.errors import ToolUnavailable

if TYPE_CHECKING:
    from check_zpools.core.context import Context


class CommandError(Exception):
    """Error running a command."""

    def __init__(self, cmd: list[str], returncode: int | None = None, stderr: str = ""):
        detail = f" with exit code {returncode}" if returncode is not None else ""
        super().__init__(f"Command failed{detail}: {' '.join(cmd)}")
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr


def run_command(cmd: list[str], context: "Context | None" = None) -> str:
    """
    Run a command and return its output.

    Args:
        cmd: Command and arguments
        context: Execution context (for testing)

    Returns:
        Command stdout

    Raises:
        CommandError: If the command cannot be run or exits non-zero
    """
    if context is None:
        from check_zpools.core.context import Context
        context = Context()

    try:
        result = context.run(cmd)
    except subprocess.CalledProcessError as e:
        raise CommandError(cmd, e.returncode, e.stderr or "") from e
    except (OSError, subprocess.SubprocessError) as e:
        raise CommandError(cmd, stderr=str(e)) from e

    if result.returncode != 0:
        raise CommandError(cmd, result.returncode, result.stderr or "")
    return result.stdout


def check_tool(
    name: str,
    context: "Context | None" = None,
    required: bool = False,
) -> bool:
    """
    Check if a tool exists in PATH.

    Args:
        name: Tool name to check
        context: Execution context (for testing)
        required: Raise if tool is missing

    Returns:
        True if tool exists

    Raises:
        ToolUnavailable: If required=True and tool is missing
    """
    if context is None:
        from check_zpools.core.context import Context
        context = Context()

    exists = context.check_tool(name)

    if required and not exists:
        path = context.get_env("PATH", "")
        raise ToolUnavailable(
            f"{name} not found in path: {path}, "
            "please check if command exists and PATH is correct"
        )

    return exists
