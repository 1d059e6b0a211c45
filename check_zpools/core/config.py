"""Configuration loading with layered overrides."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from check_zpools.core.errors import ConfigurationError
from check_zpools.core.thresholds import Thresholds

SYSTEM_CONFIG = Path("/etc/check_zpools/config.yaml")

CONFIG_KEYS = ("pool", "warning", "critical", "soft_fail", "log_dir")


@dataclass(frozen=True)
class CheckConfig:
    """Validated settings for one check run."""

    pool: str
    thresholds: Thresholds | None = None
    soft_fail: bool = False
    log_dir: Path | None = None


def user_config_path() -> Path:
    return Path.home() / ".config" / "check_zpools" / "config.yaml"


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file if it exists."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {key: data[key] for key in CONFIG_KEYS if key in data}


def load_layered_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Merge config files with explicit file -> user -> system precedence.

    Raises:
        ConfigurationError: If an explicitly requested file does not exist
    """
    merged: dict[str, Any] = {}
    merged.update(load_config_file(SYSTEM_CONFIG))
    merged.update(load_config_file(user_config_path()))

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {config_path}")
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")
        merged.update({key: data[key] for key in CONFIG_KEYS if key in data})

    return merged


def _parse_percent(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} threshold must be an integer percentage")
    if isinstance(value, int):
        return value
    text = str(value).strip().rstrip("%")
    if not text.isdigit():
        raise ConfigurationError(f"{name} threshold must be an integer percentage")
    return int(text)


def build_config(
    pool: str | None = None,
    warning: Any = None,
    critical: Any = None,
    soft_fail: bool = False,
    log_dir: str | Path | None = None,
    config_path: Path | None = None,
) -> CheckConfig:
    """
    Combine command-line values with config files into a CheckConfig.

    Command-line values win over any file. Thresholds must be given as a
    pair, and validation happens here so no pool is queried with a bad
    configuration.

    Raises:
        ConfigurationError: On missing pool, half-set or invalid thresholds
    """
    values = load_layered_config(config_path)
    cli = {
        "pool": pool,
        "warning": warning,
        "critical": critical,
        "log_dir": log_dir,
    }
    values.update({key: value for key, value in cli.items() if value is not None})
    if soft_fail:
        values["soft_fail"] = True

    selector = str(values.get("pool") or "").strip()
    if not selector:
        raise ConfigurationError("A pool name or ALL must be given with -p")

    warn = values.get("warning")
    crit = values.get("critical")
    if (warn is None) != (crit is None):
        raise ConfigurationError("Both warning and critical thresholds must be set")

    thresholds = None
    if warn is not None:
        thresholds = Thresholds(
            warn=_parse_percent("Warning", warn),
            crit=_parse_percent("Critical", crit),
        )

    soft = values.get("soft_fail", False)
    if not isinstance(soft, bool):
        raise ConfigurationError("soft_fail must be true or false")

    directory = values.get("log_dir")
    return CheckConfig(
        pool=selector,
        thresholds=thresholds,
        soft_fail=soft,
        log_dir=Path(directory) if directory else None,
    )
