"""Error taxonomy for the check.

Every error carries the severity it is reported with, so the CLI boundary can
turn any of them into a status line without knowing the concrete type.
"""

from check_zpools.core.severity import Severity


class CheckError(Exception):
    """Base class for errors that end a check run."""

    severity = Severity.UNKNOWN


class ConfigurationError(CheckError):
    """Bad or missing command-line or config-file input."""


class ToolUnavailable(CheckError):
    """The external storage tool could not be found."""


class QueryFailure(CheckError):
    """A zpool query failed or returned output that could not be parsed."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class PoolNotFound(QueryFailure):
    """The named pool does not exist."""

    severity = Severity.CRITICAL

    def __init__(self, pool: str, returncode: int | None = None):
        super().__init__(f"POOL {pool} does not exist", returncode)
        self.pool = pool
