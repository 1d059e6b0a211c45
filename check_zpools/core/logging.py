"""JSONL logging for check runs."""

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from check_zpools.core.errors import ConfigurationError


# Log level ordering
LOG_LEVELS = {"debug": 0, "info": 1, "warning": 2, "error": 3}

CHECK_NAME = "check_zpools"


def get_log_path(
    base_path: Path,
    check_name: str = CHECK_NAME,
    log_date: date | None = None,
) -> Path:
    """
    Get the log file path for a run.

    Args:
        base_path: Base directory for logs
        check_name: Name used for the log file
        log_date: Day of the log (default: today)

    Returns:
        Path to the log file: {base}/{date}/{check}.jsonl
    """
    day = (log_date or date.today()).isoformat()
    return Path(base_path) / day / f"{check_name}.jsonl"


class RunLogger:
    """
    JSONL logger for a check run.

    Writes structured log entries to a JSONL file. A logger without a
    path is disabled and drops every entry, so plugin runs do not write
    anywhere unless a log directory was configured.
    """

    def __init__(self, log_path: Path | None = None, check_name: str = CHECK_NAME):
        """
        Initialize logger.

        Args:
            log_path: Path to log file (None disables logging)
            check_name: Name recorded in each entry
        """
        self.check_name = check_name
        self.log_path = log_path
        self._file = None

    @classmethod
    def for_directory(cls, log_dir: str | Path | None) -> "RunLogger":
        """
        Create a logger writing under log_dir, or a disabled one.

        The log file is opened right away so an unusable directory is
        reported before any pool is checked.

        Raises:
            ConfigurationError: If the log file cannot be created
        """
        if not log_dir:
            return cls()
        logger = cls(get_log_path(Path(log_dir)))
        logger._ensure_file()
        return logger

    @property
    def enabled(self) -> bool:
        return self.log_path is not None

    def _ensure_file(self) -> None:
        """Ensure log file is open."""
        if self._file is None:
            try:
                self.log_path.parent.mkdir(parents=True, exist_ok=True)
                self._file = open(self.log_path, "a")
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot write log file {self.log_path}: {e.strerror or e}"
                ) from e

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        if not self.enabled:
            return
        self._ensure_file()
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "check": self.check_name,
            "message": message,
            **extra,
        }
        self._file.write(json.dumps(entry, default=str) + "\n")
        self._file.flush()

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message."""
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message."""
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def query_logs(
    base_path: Path,
    log_date: date | None = None,
    min_level: str = "debug",
) -> list[dict[str, Any]]:
    """Read back one day's run log entries at or above min_level."""
    log_file = get_log_path(base_path, log_date=log_date)
    if not log_file.exists():
        return []

    threshold = LOG_LEVELS.get(min_level, 0)
    entries = []
    for line in log_file.read_text().splitlines():
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            continue
        if LOG_LEVELS.get(entry.get("level"), 0) >= threshold:
            entries.append(entry)
    return entries
