"""
Radar Runner Configuration
==========================
THE ONLY PLACE PATHS AND CORE SETTINGS ARE DEFINED.

The user-editable schedule (holidays, window, frequencies, asset codes) lives in
radar-runner.conf and is loaded by core.runner_config. Everything here is either
a built-in default for that file or a process-level setting.

Overrides (environment or .env file):
    RADAR_CONFIG_DIR       directory holding radar-runner.conf
    RADAR_DATA_DIR         directory receiving CSV outputs and logs
    RADAR_FUNDAMENTOS_BIN  external collector executable
    LOG_LEVEL              DEBUG | INFO | WARNING | ERROR
"""

from pathlib import Path
import os
import sys

# Load environment variables from .env file
from dotenv import load_dotenv

_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)
else:
    load_dotenv()

VERSION = "0.4.1"
APP_NAME = "radar"

# ============================================================================
# MARKET
# ============================================================================

MARKET_TIMEZONE = "America/Sao_Paulo"   # B3 session clock

# ============================================================================
# DIRECTORY RESOLUTION
# ============================================================================


def _home() -> Path:
    try:
        return Path.home()
    except RuntimeError:
        print(f"[{APP_NAME}] Warning: could not determine home directory, using ./", file=sys.stderr)
        return Path(".")


def _platform_config_root() -> Path:
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path(".")
    if sys.platform == "darwin":
        return _home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else _home() / ".config"


def _platform_data_root() -> Path:
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path(".")
    if sys.platform == "darwin":
        return _home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_DATA_HOME")
    return Path(xdg) if xdg else _home() / ".local" / "share"


def get_config_dir() -> Path:
    """Directory holding radar-runner.conf (resolved on every call so tests can patch env)."""
    override = os.environ.get("RADAR_CONFIG_DIR")
    if override:
        return Path(override)
    return _platform_config_root() / APP_NAME


def get_data_dir() -> Path:
    """Base directory for collector outputs and runner logs."""
    override = os.environ.get("RADAR_DATA_DIR")
    if override:
        return Path(override)
    return _platform_data_root() / APP_NAME


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILENAME


CONFIG_FILENAME = "radar-runner.conf"

# Relative to the data dir
HISTORICAL_SUBDIR = Path("dados") / "historico"
LOG_SUBDIR = Path("logs")
QUOTES_FILENAME = "cotacoes.csv"

# ============================================================================
# EXTERNAL COLLECTOR
# ============================================================================

DEFAULT_PROGRAM = "radar-fundamentos"
PROGRAM_ENV_VAR = "RADAR_FUNDAMENTOS_BIN"     # takes precedence over the "programa" key
OUTPUT_FLAG = "--saida"
HISTORICAL_TIMESTAMP_FORMAT = "%Y-%m-%d_%Hh-%Mm-%Ss"

# ============================================================================
# SCHEDULE DEFAULTS
# ============================================================================

DEFAULT_HOLIDAYS = ()
DEFAULT_WINDOW_START = 10
DEFAULT_WINDOW_END = 20
DEFAULT_QUOTES_FREQUENCY_MINUTES = 15
DEFAULT_INDICATORS_FREQUENCY_MINUTES = 180
HISTORICAL_POLL_SECONDS = 3 * 3600

LIVE_QUOTES_CATEGORY = "geral"

DEFAULT_CODES = {
    # High-frequency list used by the quote modes
    LIVE_QUOTES_CATEGORY: (
        "SNEL11", "AFHI11", "RELG11", "VGIR11",
        "VALE3", "PRIO3", "BRAV3", "KLBN11", "ITSA4",
    ),
    # Fundamentals / historical lists
    "acao": ("VALE3", "PRIO3", "BRAV3", "KLBN11", "ITSA4"),
    "fundo": ("SNEL11", "AFHI11", "RELG11", "VGIR11"),
}

# TOML key -> category tag. Any other "<name>_codes" key becomes category <name>.
CODES_KEY_SUFFIX = "_codes"
CATEGORY_KEYS = {
    "ativos_codes": LIVE_QUOTES_CATEGORY,
    "acao_codes": "acao",
    "fundo_codes": "fundo",
}

# Written on first use so the schedule can be edited by hand
DEFAULT_CONFIG_TOML = """\
# Holiday dates in YYYY-MM-DD format (B3 closures)
feriados = [
    "2025-01-01",
    "2025-03-03",
    "2025-03-04",
    "2025-04-18",
    "2025-04-21",
    "2025-05-01",
    "2025-06-19",
    "2025-11-20",
    "2025-12-24",
    "2025-12-25",
    "2025-12-31",
    "2026-01-01",
    "2026-02-16",
    "2026-02-17",
    "2026-04-03",
    "2026-04-21",
    "2026-05-01",
    "2026-06-04",
    "2026-11-20",
    "2026-12-24",
    "2026-12-25",
    "2026-12-31",
]

# Hour window for periodic runs (0..23, both ends inclusive)
intervalo_inicio = 10
intervalo_fim = 20

# Minutes between runs of the 'cotacoes' mode
frequencia_minutos = 15

# Minutes between runs of the 'indicadores' mode
frequencia_indicadores_minutos = 180

# High-frequency asset codes (cotacoes)
ativos_codes = ["SNEL11", "AFHI11", "RELG11", "VGIR11", "VALE3", "PRIO3", "BRAV3", "KLBN11", "ITSA4"]

# Stock codes (fundamentals / historical)
acao_codes = ["VALE3", "PRIO3", "BRAV3", "KLBN11", "ITSA4"]

# Fund codes (fundamentals / historical)
fundo_codes = ["SNEL11", "AFHI11", "RELG11", "VGIR11"]
"""

# ============================================================================
# LOGGING
# ============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOGGER_NAME = "radar_runner"

# Log rotation
LOG_MAX_BYTES = 10_000_000       # 10 MB
LOG_BACKUP_COUNT = 5
