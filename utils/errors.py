"""
Unified Error Handling Utilities
================================
Provides consistent exceptions and context management for the runner.

Usage:
    from utils.errors import RunnerError, LaunchError, error_context

    # Custom exceptions
    raise LaunchError("Collector not found", program="radar-fundamentos")

    # Context manager for error context
    with error_context("preparing output directory", task="acao"):
        path.mkdir(parents=True, exist_ok=True)

Design Principles:
- Clear exception hierarchy for different failure types
- Structured error context (task, operation, details)
- Consistent logging format
- Nothing here is fatal by itself; callers decide what to swallow
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

from observability.logger import get_logger

logger = get_logger("utils.errors")


# =============================================================================
# EXCEPTION HIERARCHY
# =============================================================================

class RunnerError(Exception):
    """
    Base exception for all runner errors.

    Supports structured context for logging and debugging.

    Example:
        raise RunnerError(
            "Operation failed",
            operation="launch",
            task="acao",
            details={"returncode": 2}
        )
    """

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        task: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.operation = operation
        self.task = task
        self.details = details or {}
        self.cause = cause

        # Build full message
        parts = [message]
        if operation:
            parts.append(f"operation={operation}")
        if task:
            parts.append(f"task={task}")
        if self.details:
            parts.append(f"details={self.details}")

        super().__init__(" | ".join(parts))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "operation": self.operation,
            "task": self.task,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None
        }


class ConfigurationError(RunnerError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        if config_key:
            kwargs.setdefault('details', {})['config_key'] = config_key
        super().__init__(message, **kwargs)


class LaunchError(RunnerError):
    """Raised when the external collector cannot be spawned."""

    def __init__(
        self,
        message: str = "Launch failed",
        program: Optional[str] = None,
        **kwargs
    ):
        self.program = program
        if program:
            kwargs.setdefault('details', {})['program'] = program
        super().__init__(message, **kwargs)


class OutputPathError(RunnerError):
    """Raised when an output directory cannot be prepared."""

    def __init__(
        self,
        message: str = "Output path unavailable",
        path: Optional[str] = None,
        **kwargs
    ):
        self.path = path
        if path:
            kwargs.setdefault('details', {})['path'] = path
        super().__init__(message, **kwargs)


# =============================================================================
# ERROR CONTEXT MANAGER
# =============================================================================

@contextmanager
def error_context(
    operation: str,
    *,
    task: Optional[str] = None,
    reraise: bool = True,
    log_level: int = logging.ERROR,
    **extra_context
):
    """
    Context manager that adds context to any exception.

    Args:
        operation: Description of the operation being performed
        task: Optional task tag context
        reraise: If True, re-raise with added context
        log_level: Logging level for errors
        **extra_context: Additional context to include

    Example:
        with error_context("launching collector", task="acao", program="radar-fundamentos"):
            subprocess.run(argv)

        # On error, logs:
        # ERROR: Failed while launching collector | task=acao | {'program': ...} | ...
    """
    try:
        yield
    except RunnerError as e:
        # Add context to existing runner error
        if not e.operation:
            e.operation = operation
        if not e.task and task:
            e.task = task
        e.details.update(extra_context)

        context = f"Failed while {operation}"
        if task:
            context += f" | task={task}"
        if extra_context:
            context += f" | {extra_context}"
        context += f" | {e}"

        logger.log(log_level, context)

        if reraise:
            raise

    except Exception as e:
        # Wrap in RunnerError with context
        context = f"Failed while {operation}"
        if task:
            context += f" | task={task}"
        if extra_context:
            context += f" | {extra_context}"
        context += f" | {type(e).__name__}: {e}"

        logger.log(log_level, context, exc_info=True)

        if reraise:
            raise RunnerError(
                f"Failed while {operation}: {e}",
                operation=operation,
                task=task,
                details=extra_context,
                cause=e
            ) from e


# =============================================================================
# ERROR FORMATTING
# =============================================================================

def format_exception_chain(error: Exception) -> str:
    """
    Format exception with its full chain for logging.

    Returns a multi-line string showing the exception chain.
    """
    lines = []
    current = error

    while current:
        lines.append(f"{type(current).__name__}: {current}")
        current = getattr(current, '__cause__', None) or getattr(current, 'cause', None)

    return "\n  Caused by: ".join(lines)
