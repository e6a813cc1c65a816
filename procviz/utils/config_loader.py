"""Helpers for loading and validating processor configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union
import threading

import yaml  # type: ignore[import-untyped]

from procviz.core.exceptions import ConfigurationError
from procviz.utils.consts import DEFAULT_CYCLE_TIME_MS, ConstUtils


@dataclass(frozen=True)
class ProcessorConfig:
    available_registers: tuple[str, ...]
    cycle_time_ms: float = DEFAULT_CYCLE_TIME_MS
    reset_registers_on_load: bool = False


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, ProcessorConfig] = {}
_CACHE_LOCK = threading.RLock()

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError("Config root must be a mapping")
    return raw


def _build_registers(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ConfigurationError(
            "processor.available_registers", "must be a non-empty list of names"
        )

    names: list[str] = []
    for item in raw:
        if not isinstance(item, str) or not item.strip():
            raise ConfigurationError(
                "processor.available_registers", f"invalid register name {item!r}"
            )
        name = item.strip()
        if name in ConstUtils.RESERVED_REGISTERS:
            raise ConfigurationError(
                "processor.available_registers", f"{name!r} is a reserved register"
            )
        if name in names:
            raise ConfigurationError(
                "processor.available_registers", f"duplicate register {name!r}"
            )
        names.append(name)
    return tuple(names)


def _build_cycle_time(raw: Any) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ConfigurationError("processor.cycle_time_ms", "must be a number")
    if raw < 0:
        raise ConfigurationError("processor.cycle_time_ms", "must be >= 0")
    return raw


def parse_config(raw: dict[str, Any]) -> ProcessorConfig:
    """Build a ProcessorConfig from an already-parsed YAML mapping.

    Raises:
        ConfigurationError: on missing keys or invalid values
    """
    try:
        proc = raw["processor"]
        registers = _build_registers(proc["available_registers"])
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key: {exc}") from exc
    except TypeError as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc

    return ProcessorConfig(
        available_registers=registers,
        cycle_time_ms=_build_cycle_time(proc.get("cycle_time_ms", DEFAULT_CYCLE_TIME_MS)),
        reset_registers_on_load=bool(proc.get("reset_registers_on_load", False)),
    )


def load_config(path: Optional[Union[str, Path]] = None) -> ProcessorConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Optional path to YAML config. If None, load the bundled
            procviz/config.yaml.

    Returns:
        ProcessorConfig instance

    Raises:
        ConfigurationError: on parse or validation errors
    """
    p = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    return parse_config(_load_yaml_file(p))


def get_config(path: Optional[Union[str, Path]] = None) -> ProcessorConfig:
    """Return the loaded config for path, loading and caching if necessary.

    THREAD SAFETY: This function is thread-safe. Multiple threads can
    safely call this concurrently.
    """
    key = str(Path(path) if path is not None else DEFAULT_CONFIG_PATH)
    with _CACHE_LOCK:
        if key not in _LOADER_CACHE:
            _LOADER_CACHE[key] = load_config(key)
        return _LOADER_CACHE[key]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    All subsequent calls to get_config() will reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
