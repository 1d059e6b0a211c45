"""Plugin status line output."""

import sys
from dataclasses import dataclass, field
from typing import NoReturn, TextIO

from check_zpools.core.errors import CheckError
from check_zpools.core.severity import Severity


@dataclass(frozen=True)
class Report:
    """Overall result of a check run."""

    severity: Severity
    message: str
    perfdata: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_error(cls, error: CheckError) -> "Report":
        """Build the report for an error that ended the run early."""
        return cls(severity=error.severity, message=f"{error.severity.name}: {error}")

    def render(self) -> str:
        """
        Format the single status line.

        The performance data trailer follows a '|' and is left out entirely
        when there is none, as for UNKNOWN results.
        """
        if not self.perfdata:
            return self.message
        return f"{self.message}|{' '.join(self.perfdata)}"

    def exit_code(self, soft_fail: bool = False) -> int:
        """Process exit code for this report."""
        return self.severity.exit_code(soft_fail)


def emit(result: Report, soft_fail: bool = False, stream: TextIO | None = None) -> int:
    """Write the status line and return the exit code to use."""
    print(result.render(), file=stream or sys.stdout)
    return result.exit_code(soft_fail)


def report(result: Report, soft_fail: bool = False) -> NoReturn:
    """Write the status line and terminate with the matching exit code."""
    sys.exit(emit(result, soft_fail))
