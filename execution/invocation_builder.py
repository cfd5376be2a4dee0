"""
Invocation Builder
==================
Turns a TaskDescriptor into the exact radar-fundamentos command line.

Argument order:
    <program> <subcommand> [<category>] <code>... [--saida <path>]

The builder is pure: given the same task, moment and config it always yields
the same Invocation. Creating the output directory is a separate step
(prepare_output_dir) so building never touches the filesystem.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from config import (
    HISTORICAL_SUBDIR,
    HISTORICAL_TIMESTAMP_FORMAT,
    OUTPUT_FLAG,
    QUOTES_FILENAME,
)
from core.types import Invocation, RunnerConfig, TaskDescriptor
from observability.logger import get_logger
from orchestration.task_specs import OutputPolicy, TaskSpec, get_task_spec
from utils.errors import OutputPathError

logger = get_logger("execution.invocation_builder")


def build_invocation(task: TaskDescriptor, now: datetime, config: RunnerConfig) -> Invocation:
    """
    Build the external invocation for a task at a given moment.

    Args:
        task: What to collect
        now: Build moment on the market clock (used for historical timestamps)
        config: Loaded runner config (program name, data dir)

    Returns:
        Invocation ready for the launcher
    """
    spec = get_task_spec(task.kind)

    args: List[str] = [spec.subcommand]
    if spec.passes_category:
        args.append(task.category)
    args.extend(task.codes)

    output_path = resolve_output_path(spec, task, now, config.data_dir)
    if output_path is not None:
        args.extend([OUTPUT_FLAG, str(output_path)])

    return Invocation(program=config.program, args=tuple(args), output_path=output_path)


def resolve_output_path(
    spec: TaskSpec,
    task: TaskDescriptor,
    now: datetime,
    data_dir: Path,
) -> Optional[Path]:
    """Output CSV for a task, per its kind's output policy."""
    if spec.output_policy is OutputPolicy.TIMESTAMPED:
        timestamp = now.strftime(HISTORICAL_TIMESTAMP_FORMAT)
        return data_dir / HISTORICAL_SUBDIR / f"{task.category}_{timestamp}.csv"
    if spec.output_policy is OutputPolicy.QUOTES_FILE:
        return data_dir / QUOTES_FILENAME
    if spec.output_policy is OutputPolicy.CATEGORY_FILE:
        return data_dir / f"{task.category}.csv"
    return None


def prepare_output_dir(invocation: Invocation) -> Optional[Path]:
    """
    Create the directory that will receive the invocation's output.

    Idempotent: an existing directory is success.

    Returns:
        The directory, or None when the invocation has no output path.

    Raises:
        OutputPathError: the directory could not be created.
    """
    if invocation.output_path is None:
        return None

    directory = invocation.output_path.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputPathError(
            f"Could not create output directory: {e}",
            path=str(directory),
            cause=e,
        ) from e

    logger.debug(f"Output directory ready: {directory}")
    return directory
