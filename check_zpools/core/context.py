"""Execution context for testability."""

import os
import shutil
import subprocess

# Conventional locations of zpool that are often missing from a plugin's PATH
SYSTEM_BIN_DIRS = ("/usr/sbin", "/sbin")


def augment_path(path: str | None, extra: tuple[str, ...] = SYSTEM_BIN_DIRS) -> str:
    """Append system binary directories to a PATH string, skipping duplicates."""
    parts = [p for p in (path or "").split(os.pathsep) if p]
    for directory in extra:
        if directory not in parts:
            parts.append(directory)
    return os.pathsep.join(parts)


class Context:
    """
    Wraps external calls for testability.

    In production: executes real commands with an augmented PATH
    In tests: can be replaced with MockContext
    """

    def __init__(self, extra_path: tuple[str, ...] = SYSTEM_BIN_DIRS):
        self.path = augment_path(os.environ.get("PATH"), extra_path)

    def check_tool(self, name: str) -> bool:
        """Check if a tool exists in the augmented PATH."""
        return shutil.which(name, path=self.path) is not None

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        timeout: int | None = None,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """
        Run a command and return result.

        Args:
            cmd: Command and arguments as list
            check: Raise on non-zero exit code
            timeout: Timeout in seconds (None waits indefinitely)
            **kwargs: Additional subprocess.run arguments

        Returns:
            CompletedProcess with stdout, stderr, returncode
        """
        env = dict(os.environ, PATH=self.path)
        env.update(kwargs.pop("env", None) or {})
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=check,
            timeout=timeout,
            env=env,
            **kwargs,
        )

    def get_env(self, key: str, default: str | None = None) -> str | None:
        """Get environment variable."""
        if key == "PATH":
            return self.path
        return os.environ.get(key, default)
