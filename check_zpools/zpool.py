"""Read-only queries against the zpool command."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from check_zpools.core.errors import PoolNotFound, QueryFailure
from check_zpools.lib.process import CommandError, run_command

if TYPE_CHECKING:
    from check_zpools.core.context import Context

ALL_POOLS = "ALL"

# zpool prints this on stderr for a pool name it does not know
NO_SUCH_POOL = "no such pool"

# capacity placeholder for pools whose size is unknown (UNAVAIL, FAULTED)
CAPACITY_UNAVAILABLE = "-"


@dataclass(frozen=True)
class PoolSnapshot:
    """State of one pool as observed during this run."""

    name: str
    health: str
    capacity: int | None
    spares_in_use: int


def count_spares_in_use(status_text: str) -> int:
    """Count hot spares that have been activated (state INUSE)."""
    return sum(1 for line in status_text.splitlines() if "INUSE" in line)


def parse_capacity(value: str) -> int | None:
    """
    Parse a capacity field such as '42%' into an integer percentage.

    zpool prints '-' when the capacity of an unavailable pool is unknown;
    that gives None.
    """
    text = value.strip().rstrip("%").strip()
    if text == CAPACITY_UNAVAILABLE:
        return None
    if not text.isdigit():
        raise ValueError(f"invalid capacity value: {value.strip()!r}")
    return int(text)


class ZpoolSource:
    """Pool enumeration and per-pool lookups through zpool."""

    def __init__(self, context: "Context"):
        self.context = context

    def _query(self, cmd: list[str], what: str, pool: str | None = None) -> str:
        try:
            return run_command(cmd, context=self.context)
        except CommandError as e:
            if pool is not None and NO_SUCH_POOL in e.stderr:
                raise PoolNotFound(pool, e.returncode) from e
            target = f" of {pool}" if pool is not None else ""
            code = f" with exit code {e.returncode}" if e.returncode is not None else ""
            raise QueryFailure(
                f"zpool query for {what}{target} failed{code}", e.returncode
            ) from e

    def list_pools(self) -> list[str]:
        """Get pool names in the order zpool reports them."""
        stdout = self._query(["zpool", "list", "-H", "-o", "name"], "pool names")
        return [line.strip() for line in stdout.splitlines() if line.strip()]

    def health(self, pool: str) -> str:
        """Get the health label of a pool (ONLINE, DEGRADED, ...)."""
        stdout = self._query(["zpool", "list", "-H", "-o", "health", pool], "health", pool)
        label = stdout.strip()
        if not label:
            raise QueryFailure(f"zpool query for health of {pool} returned no data")
        return label

    def capacity(self, pool: str) -> int | None:
        """Get the used capacity of a pool in percent, None if zpool cannot tell."""
        stdout = self._query(["zpool", "list", "-H", "-o", "capacity", pool], "capacity", pool)
        try:
            return parse_capacity(stdout)
        except ValueError as e:
            raise QueryFailure(f"zpool query for capacity of {pool} failed: {e}") from e

    def spares_in_use(self, pool: str) -> int:
        """Get the number of spare disks currently in use in a pool."""
        stdout = self._query(["zpool", "status", pool], "status", pool)
        return count_spares_in_use(stdout)

    def snapshot(self, pool: str) -> PoolSnapshot:
        """Query health, capacity and spare usage of one pool."""
        return PoolSnapshot(
            name=pool,
            health=self.health(pool),
            capacity=self.capacity(pool),
            spares_in_use=self.spares_in_use(pool),
        )
