"""Pool evaluation and status aggregation."""

from dataclasses import dataclass, field

from check_zpools.core.errors import PoolNotFound, QueryFailure
from check_zpools.core.output import Report
from check_zpools.core.severity import Severity, worst
from check_zpools.core.thresholds import Thresholds
from check_zpools.zpool import ALL_POOLS, PoolSnapshot, ZpoolSource

ISSUE_SEPARATOR = " // "


@dataclass(frozen=True)
class PoolVerdict:
    """Result of evaluating one pool."""

    pool: str
    severity: Severity
    capacity: int | None
    issues: tuple[str, ...] = field(default_factory=tuple)

    @property
    def perfdata(self) -> str | None:
        """Performance datum, None when the capacity is unknown."""
        if self.capacity is None:
            return None
        return f"{self.pool}={self.capacity}%"


def resolve_pools(selector: str, source: ZpoolSource) -> list[str]:
    """
    Turn a pool selector into the ordered list of pools to check.

    A named pool is returned as-is; whether it exists is found out when it is
    queried. ALL enumerates pools and keeps zpool's ordering.

    Raises:
        QueryFailure: If enumeration fails or finds no pools
    """
    if selector != ALL_POOLS:
        return [selector]

    pools = source.list_pools()
    if not pools:
        raise QueryFailure("zpool list found no pools")
    return pools


def judge(snapshot: PoolSnapshot, thresholds: Thresholds | None = None) -> PoolVerdict:
    """Decide the severity of one pool from its observed state."""
    name = snapshot.name
    findings: list[tuple[Severity, str]] = []

    if snapshot.health != "ONLINE":
        findings.append((Severity.CRITICAL, f"POOL {name} health is {snapshot.health}"))

    if thresholds is not None and snapshot.capacity is not None:
        if snapshot.capacity >= thresholds.crit:
            findings.append(
                (Severity.CRITICAL, f"POOL {name} usage is CRITICAL ({snapshot.capacity}%)")
            )
        elif snapshot.capacity >= thresholds.warn:
            findings.append(
                (Severity.WARNING, f"POOL {name} usage is WARNING ({snapshot.capacity}%)")
            )

    # A spare in use means a disk already failed and was replaced
    if snapshot.spares_in_use > 0:
        findings.append(
            (Severity.WARNING, f"POOL {name} has {snapshot.spares_in_use} spare(s) in use")
        )

    return PoolVerdict(
        pool=name,
        severity=worst(severity for severity, _ in findings),
        capacity=snapshot.capacity,
        issues=tuple(message for _, message in findings),
    )


def evaluate_pool(
    pool: str,
    source: ZpoolSource,
    thresholds: Thresholds | None = None,
) -> PoolVerdict:
    """Query one pool and judge it."""
    return judge(source.snapshot(pool), thresholds)


def aggregate(verdicts: list[PoolVerdict]) -> Report:
    """Fold per-pool verdicts into the overall report."""
    if not verdicts:
        raise ValueError("cannot aggregate an empty list of verdicts")

    pools = tuple(v.pool for v in verdicts)
    severity = worst(v.severity for v in verdicts)
    perfdata = tuple(v.perfdata for v in verdicts if v.perfdata is not None)

    if severity is Severity.OK:
        message = f"ALL ZFS POOLS OK ({', '.join(pools)})"
    else:
        issues = [issue for v in verdicts for issue in v.issues]
        message = f"ZFS POOL ALARM: {ISSUE_SEPARATOR.join(issues)}"

    return Report(severity=severity, message=message, perfdata=perfdata)


def check_pools(
    selector: str,
    source: ZpoolSource,
    thresholds: Thresholds | None = None,
    logger=None,
) -> Report:
    """
    Run the whole check: resolve, evaluate each pool in order, aggregate.

    Evaluation stops at the first failing query. A single named pool that does
    not exist is reported as CRITICAL; a pool vanishing during an ALL run is a
    query failure like any other.

    Raises:
        QueryFailure: If any zpool query fails
    """
    pools = resolve_pools(selector, source)

    verdicts = []
    for pool in pools:
        try:
            verdict = evaluate_pool(pool, source, thresholds)
        except PoolNotFound as e:
            if selector == ALL_POOLS:
                raise QueryFailure(str(e), e.returncode) from e
            return Report(severity=Severity.CRITICAL, message=f"ZFS POOL ALARM: {e}")
        if logger is not None:
            logger.info(
                "pool evaluated",
                pool=pool,
                severity=verdict.severity.name,
                capacity=verdict.capacity,
                issues=list(verdict.issues),
            )
        verdicts.append(verdict)

    return aggregate(verdicts)
