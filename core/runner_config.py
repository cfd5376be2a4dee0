"""
Runner Configuration Provider
=============================
Loads radar-runner.conf (TOML) into an immutable RunnerConfig.

Behaviour:
- The default file is written on first use so it can be edited by hand.
- Missing keys take built-in defaults.
- Unreadable or invalid files never abort the runner: a warning is logged and
  the full built-in configuration is used instead.

Usage:
    from core.runner_config import load_runner_config

    cfg = load_runner_config()              # <config-dir>/radar-runner.conf
    cfg = load_runner_config("my.conf")     # explicit path
"""

import logging
import os
import tomllib
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

from config import (
    CATEGORY_KEYS,
    CODES_KEY_SUFFIX,
    DEFAULT_CODES,
    DEFAULT_CONFIG_TOML,
    DEFAULT_HOLIDAYS,
    DEFAULT_INDICATORS_FREQUENCY_MINUTES,
    DEFAULT_PROGRAM,
    DEFAULT_QUOTES_FREQUENCY_MINUTES,
    DEFAULT_WINDOW_END,
    DEFAULT_WINDOW_START,
    PROGRAM_ENV_VAR,
    get_config_path,
    get_data_dir,
)
from core.types import RunnerConfig
from observability.logger import get_logger
from utils.errors import ConfigurationError, RunnerError, error_context

logger = get_logger("core.runner_config")

MAX_FREQUENCY_MINUTES = 7 * 24 * 60

KNOWN_KEYS = {
    "feriados",
    "intervalo_inicio",
    "intervalo_fim",
    "frequencia_minutos",
    "frequencia_indicadores_minutos",
    "programa",
}


# =============================================================================
# PUBLIC API
# =============================================================================

def load_runner_config(
    path: Optional[Union[str, Path]] = None,
    *,
    data_dir: Optional[Path] = None,
    create_default: bool = True,
) -> RunnerConfig:
    """
    Load the runner configuration, falling back to built-in defaults.

    Args:
        path: Config file path (defaults to <config-dir>/radar-runner.conf)
        data_dir: Output base directory (defaults to config.get_data_dir())
        create_default: Write the default file if it does not exist yet

    Returns:
        RunnerConfig - never raises for configuration problems
    """
    config_path = Path(path) if path else get_config_path()
    data_dir = data_dir or get_data_dir()

    if create_default:
        ensure_default_config(config_path)

    try:
        raw = read_config_file(config_path)
        cfg = build_runner_config(raw, source=config_path, data_dir=data_dir)
    except ConfigurationError as e:
        logger.warning(f"Could not use {config_path}: {e} => using built-in defaults")
        return default_runner_config(data_dir=data_dir)

    logger.debug(f"Configuration loaded from {config_path}")
    return cfg


def ensure_default_config(path: Path) -> bool:
    """
    Write the default config file if none exists.

    Returns:
        True if a new file was written.
    """
    if path.exists():
        return False

    try:
        with error_context("creating default config file", log_level=logging.WARNING, path=str(path)):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
    except RunnerError:
        return False

    logger.info(f"Default configuration file created: {path}")
    return True


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML config file."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {path}", cause=e) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML: {e}", cause=e) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Config file is not valid UTF-8: {e}", cause=e) from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file: {e}", cause=e) from e


def default_runner_config(data_dir: Optional[Path] = None) -> RunnerConfig:
    """Built-in configuration used when no usable file exists."""
    return RunnerConfig(
        holidays=frozenset(DEFAULT_HOLIDAYS),
        window_start=DEFAULT_WINDOW_START,
        window_end=DEFAULT_WINDOW_END,
        quotes_frequency_minutes=DEFAULT_QUOTES_FREQUENCY_MINUTES,
        indicators_frequency_minutes=DEFAULT_INDICATORS_FREQUENCY_MINUTES,
        codes=dict(DEFAULT_CODES),
        program=os.environ.get(PROGRAM_ENV_VAR) or DEFAULT_PROGRAM,
        data_dir=data_dir or get_data_dir(),
        source=None,
    )


def build_runner_config(
    raw: Mapping[str, Any],
    *,
    source: Optional[Path] = None,
    data_dir: Optional[Path] = None,
) -> RunnerConfig:
    """
    Validate a parsed config mapping and merge it over the defaults.

    Raises:
        ConfigurationError: wrong value type or value out of range.
    """
    if not isinstance(raw, Mapping):
        raise ConfigurationError("Config root must be a table.")

    for key in raw:
        if key not in KNOWN_KEYS and not key.endswith(CODES_KEY_SUFFIX):
            logger.debug(f"Ignoring unknown config key: {key}")

    holidays = _parse_holidays(raw.get("feriados", list(DEFAULT_HOLIDAYS)))

    window_start = _as_int(
        raw.get("intervalo_inicio", DEFAULT_WINDOW_START),
        name="intervalo_inicio", min_value=0, max_value=23,
    )
    window_end = _as_int(
        raw.get("intervalo_fim", DEFAULT_WINDOW_END),
        name="intervalo_fim", min_value=0, max_value=23,
    )
    if window_start > window_end:
        logger.warning(
            f"Window {window_start}..{window_end} is empty: periodic modes will never run"
        )

    quotes_frequency = _as_int(
        raw.get("frequencia_minutos", DEFAULT_QUOTES_FREQUENCY_MINUTES),
        name="frequencia_minutos", min_value=1, max_value=MAX_FREQUENCY_MINUTES,
    )
    indicators_frequency = _as_int(
        raw.get("frequencia_indicadores_minutos", DEFAULT_INDICATORS_FREQUENCY_MINUTES),
        name="frequencia_indicadores_minutos", min_value=1, max_value=MAX_FREQUENCY_MINUTES,
    )

    program = os.environ.get(PROGRAM_ENV_VAR) or _as_str(
        raw.get("programa", DEFAULT_PROGRAM), name="programa"
    )

    return RunnerConfig(
        holidays=holidays,
        window_start=window_start,
        window_end=window_end,
        quotes_frequency_minutes=quotes_frequency,
        indicators_frequency_minutes=indicators_frequency,
        codes=_parse_codes(raw),
        program=program,
        data_dir=data_dir or get_data_dir(),
        source=source,
    )


# =============================================================================
# FIELD PARSERS
# =============================================================================

def _parse_holidays(value: Any) -> FrozenSet[str]:
    """Normalize holiday entries to canonical YYYY-MM-DD strings."""
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError("feriados must be a list of dates.", config_key="feriados")

    holidays = set()
    for entry in value:
        if isinstance(entry, datetime):
            holidays.add(entry.date().isoformat())
        elif isinstance(entry, date):
            holidays.add(entry.isoformat())
        elif isinstance(entry, str):
            try:
                holidays.add(date.fromisoformat(entry.strip()).isoformat())
            except ValueError:
                logger.warning(f"Skipping invalid holiday entry: {entry!r}")
        else:
            logger.warning(f"Skipping invalid holiday entry: {entry!r}")
    return frozenset(holidays)


def _parse_codes(raw: Mapping[str, Any]) -> Dict[str, Tuple[str, ...]]:
    """Collect every '<category>_codes' list, starting from the defaults."""
    codes: Dict[str, Tuple[str, ...]] = dict(DEFAULT_CODES)

    for key, value in raw.items():
        if not key.endswith(CODES_KEY_SUFFIX):
            continue
        category = CATEGORY_KEYS.get(key, key[: -len(CODES_KEY_SUFFIX)].lower())
        if not category:
            raise ConfigurationError(f"Invalid codes key: {key}", config_key=key)
        if not isinstance(value, (list, tuple)):
            raise ConfigurationError(f"{key} must be a list of strings.", config_key=key)

        parsed = []
        for code in value:
            if not isinstance(code, str):
                raise ConfigurationError(f"{key} must be a list of strings.", config_key=key)
            code = code.strip()
            if code:
                parsed.append(code)
        codes[category] = tuple(parsed)

    return codes


def _as_int(value: Any, *, name: str, min_value: int, max_value: int) -> int:
    """Require an int within range (bools rejected)."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an int.", config_key=name)
    if value < min_value or value > max_value:
        raise ConfigurationError(
            f"{name} out of range: {value} (allowed: {min_value}-{max_value}).",
            config_key=name,
        )
    return value


def _as_str(value: Any, *, name: str) -> str:
    """Require a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{name} must be a non-empty string.", config_key=name)
    return value.strip()
