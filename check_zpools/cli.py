"""Command-line interface for check_zpools."""

import argparse
import sys
from pathlib import Path
from typing import TextIO

from check_zpools import __version__
from check_zpools.core import (
    CheckError,
    ConfigurationError,
    Context,
    Report,
    RunLogger,
    Severity,
    emit,
    report,
)
from check_zpools.core.config import build_config
from check_zpools.evaluate import check_pools
from check_zpools.lib.process import check_tool
from check_zpools.zpool import ZpoolSource


class PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as UNKNOWN instead of exiting 2."""

    def error(self, message):
        raise ConfigurationError(message)


def create_parser() -> PluginArgumentParser:
    """Create the argument parser."""
    parser = PluginArgumentParser(
        prog="check_zpools",
        description="Monitoring plugin for ZFS pool health and capacity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Examples:
  %(prog)s -p ALL                   # Check health of every pool
  %(prog)s -p ALL -w 80 -c 90       # Also alarm on pool usage
  %(prog)s -p tank -w 80 -c 90 -s   # Never exit CRITICAL, only WARNING

Exit codes:
  0 - All pools OK
  1 - Warning (or critical in soft-fail mode)
  2 - Critical
  3 - Unknown: usage error, zpool missing or a zpool query failed
        """,
    )
    parser.add_argument(
        "-p",
        dest="pool",
        metavar="POOL",
        help="Pool to check, or ALL for every pool",
    )
    parser.add_argument(
        "-w",
        dest="warning",
        type=int,
        metavar="PCT",
        help="Warning threshold for pool usage in percent (requires -c)",
    )
    parser.add_argument(
        "-c",
        dest="critical",
        type=int,
        metavar="PCT",
        help="Critical threshold for pool usage in percent (requires -w)",
    )
    parser.add_argument(
        "-s",
        dest="soft_fail",
        action="store_true",
        help="Soft-fail: exit with the WARNING code when the result is CRITICAL",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="FILE",
        help="YAML config file with defaults for the options above",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        metavar="DIR",
        help="Write a JSONL run log below this directory",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        help="Show this help and exit",
    )
    return parser


def execute(argv: list[str], context: Context | None = None) -> tuple[Report, bool]:
    """
    Run the check without writing anything to stdout.

    Help and version requests come back as UNKNOWN reports too, since a
    plugin that did not check anything must not look healthy.

    Args:
        argv: Command-line arguments
        context: Execution context (for testing)

    Returns:
        The report and whether soft-fail mode is on
    """
    parser = create_parser()

    try:
        opts = parser.parse_args(argv)
    except ConfigurationError as e:
        return Report.from_error(e), False

    if not argv or opts.help:
        return Report(Severity.UNKNOWN, parser.format_help().rstrip("\n")), False

    if opts.version:
        return Report(Severity.UNKNOWN, f"check_zpools {__version__}"), False

    try:
        config = build_config(
            pool=opts.pool,
            warning=opts.warning,
            critical=opts.critical,
            soft_fail=opts.soft_fail,
            log_dir=opts.log_dir,
            config_path=opts.config,
        )
        logger = RunLogger.for_directory(config.log_dir)
    except ConfigurationError as e:
        return Report.from_error(e), False

    if context is None:
        context = Context()

    with logger:
        thresholds = config.thresholds
        logger.info(
            "check started",
            pool=config.pool,
            warning=thresholds.warn if thresholds else None,
            critical=thresholds.crit if thresholds else None,
            soft_fail=config.soft_fail,
        )

        try:
            check_tool("zpool", context=context, required=True)
            result = check_pools(config.pool, ZpoolSource(context), thresholds, logger)
        except CheckError as e:
            logger.error(str(e), error=type(e).__name__)
            result = Report.from_error(e)

        logger.info(
            "check finished",
            exit_code=result.exit_code(config.soft_fail),
            severity=result.severity.name,
            output=result.render(),
        )

    return result, config.soft_fail


def run(
    argv: list[str],
    context: Context | None = None,
    stream: TextIO | None = None,
) -> int:
    """
    Run the check and write its status line.

    Args:
        argv: Command-line arguments
        context: Execution context (for testing)
        stream: Where to write output (default: stdout)

    Returns:
        Plugin exit code
    """
    result, soft_fail = execute(argv, context)
    return emit(result, soft_fail, stream)


def main() -> None:
    """Console script entry point."""
    report(*execute(sys.argv[1:]))


if __name__ == "__main__":
    main()
