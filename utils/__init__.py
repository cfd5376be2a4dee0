# Utils package

# Timezone utilities
from utils.timezone import (
    to_market_time,
    localize_market,
    now_market,
    TZ_UTC,
    TZ_MARKET,
)

# Error handling utilities
from utils.errors import (
    RunnerError,
    ConfigurationError,
    LaunchError,
    OutputPathError,
    error_context,
    format_exception_chain,
)

__all__ = [
    # Timezone
    'to_market_time',
    'localize_market',
    'now_market',
    'TZ_UTC',
    'TZ_MARKET',
    # Errors
    'RunnerError',
    'ConfigurationError',
    'LaunchError',
    'OutputPathError',
    'error_context',
    'format_exception_chain',
]
