"""Capacity thresholds."""

from dataclasses import dataclass

from check_zpools.core.errors import ConfigurationError


@dataclass(frozen=True)
class Thresholds:
    """Capacity thresholds in percent; warn may equal crit but not exceed it."""

    warn: int
    crit: int

    def __post_init__(self):
        for name, value in (("warning", self.warn), ("critical", self.crit)):
            if not 0 <= value <= 100:
                raise ConfigurationError(f"{name.title()} threshold must be between 0 and 100")
        if self.warn > self.crit:
            raise ConfigurationError("Warning threshold cannot be greater than critical")
