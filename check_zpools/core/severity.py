"""Plugin severities and their exit codes."""

from enum import IntEnum


class Severity(IntEnum):
    """
    Monitoring plugin result states.

    Values are the standard plugin exit codes, so the natural ordering is
    also the aggregation ordering: max() of several severities is the worst.
    """

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    def exit_code(self, soft_fail: bool = False) -> int:
        """Exit code for this severity, with CRITICAL downgraded under soft-fail."""
        if soft_fail and self is Severity.CRITICAL:
            return int(Severity.WARNING)
        return int(self)


def worst(severities) -> Severity:
    """Return the worst of an iterable of severities (OK when empty)."""
    return max(severities, default=Severity.OK)
