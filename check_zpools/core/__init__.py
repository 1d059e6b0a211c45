"""Core check_zpools functionality."""

from check_zpools.core.severity import Severity, worst
from check_zpools.core.errors import (
    CheckError,
    ConfigurationError,
    PoolNotFound,
    QueryFailure,
    ToolUnavailable,
)
from check_zpools.core.output import Report, emit, report
from check_zpools.core.thresholds import Thresholds
from check_zpools.core.context import Context
from check_zpools.core.logging import RunLogger, get_log_path, query_logs

__all__ = [
    "CheckError",
    "ConfigurationError",
    "Context",
    "PoolNotFound",
    "QueryFailure",
    "Report",
    "RunLogger",
    "Severity",
    "Thresholds",
    "ToolUnavailable",
    "emit",
    "get_log_path",
    "query_logs",
    "report",
    "worst",
]
