"""
TaskScheduler - Window-gated dispatch loop for the external collector.

One scheduler drives one task per process:
- One-shot kinds: forced decision, build, launch, return
- Periodic kinds: decide, build+launch when allowed, sleep, repeat forever

Every decision is logged with its inputs before it is acted on. Collector
failures (launch errors, non-zero exits) are logged and never stop the loop;
nothing is retried inside a cycle and missed windows are not backfilled.

Usage:
    from orchestration.task_scheduler import TaskScheduler

    scheduler = TaskScheduler(config)
    scheduler.run(task)                 # blocks forever for periodic kinds

Clock, sleep and launcher are injectable so the loop can be driven
deterministically in tests.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple

from core.types import LaunchResult, RunnerConfig, TaskDescriptor
from execution.invocation_builder import build_invocation, prepare_output_dir
from execution.process_launcher import ProcessLauncher, SubprocessLauncher
from observability.logger import get_logger
from orchestration.market_calendar import ExecutionContext, should_run
from orchestration.task_specs import get_task_spec
from utils.errors import LaunchError, OutputPathError, format_exception_chain
from utils.timezone import now_market

logger = get_logger("orchestration.task_scheduler")


@dataclass
class SchedulerState:
    """Counters for the current process, reported in logs."""
    cycles: int = 0
    launches: int = 0
    failures: int = 0
    skipped: int = 0
    last_result: Optional[LaunchResult] = None

    def record(self, result: LaunchResult):
        self.launches += 1
        if not result.success:
            self.failures += 1
        self.last_result = result


class TaskScheduler:
    """
    Runs one task according to its kind's cadence and the market window.

    Args:
        config: Loaded runner configuration (read-only)
        launcher: Process launcher (defaults to SubprocessLauncher)
        clock: Returns the current market-aware datetime
        sleep: Blocks for the given number of seconds
    """

    def __init__(
        self,
        config: RunnerConfig,
        launcher: Optional[ProcessLauncher] = None,
        clock: Callable[[], datetime] = now_market,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.launcher = launcher or SubprocessLauncher()
        self.clock = clock
        self.sleep = sleep
        self.state = SchedulerState()

    # =========================================================================
    # DECISION
    # =========================================================================

    def evaluate(self, task: TaskDescriptor, force: bool) -> Tuple[ExecutionContext, bool]:
        """Compute and log the run-now decision for the current moment."""
        ctx = ExecutionContext.from_moment(self.clock())
        cfg = self.config
        decision = should_run(
            force, ctx.date, ctx.hour, cfg.holidays, cfg.window_start, cfg.window_end
        )
        logger.info(
            f"[{task.label}] Current hour: {ctx.hour}h, date {ctx.date_str}, "
            f"window {cfg.window_start}..{cfg.window_end}, force={force} => runnable? {decision}"
        )
        return ctx, decision

    # =========================================================================
    # CYCLES
    # =========================================================================

    def run_cycle(self, task: TaskDescriptor, force: bool = False) -> Optional[LaunchResult]:
        """
        One decision + optional launch.

        Returns:
            LaunchResult if the collector was started (or failed to start),
            None if the gate kept it from running.
        """
        self.state.cycles += 1
        ctx, decision = self.evaluate(task, force)

        if not decision:
            self.state.skipped += 1
            logger.info(
                f"[{task.label}] Outside hours ({self.config.window_start}..{self.config.window_end}) "
                f"or holiday. Waiting for the next window."
            )
            return None

        result = self._execute(task, ctx)
        self.state.record(result)
        return result

    def run_once(self, task: TaskDescriptor) -> LaunchResult:
        """Forced single cycle (snapshot commands)."""
        return self.run_cycle(task, force=True)

    def run_forever(self, task: TaskDescriptor, max_cycles: Optional[int] = None):
        """
        Periodic loop: cycle, sleep the kind's interval, repeat.

        Args:
            task: Periodic task to run
            max_cycles: Stop after this many cycles (None = never)
        """
        spec = get_task_spec(task.kind)
        interval = spec.interval_for(self.config)
        if interval is None:
            raise ValueError(f"{spec.name} is a one-shot kind and cannot be looped")

        while max_cycles is None or self.state.cycles < max_cycles:
            self.run_cycle(task, force=False)
            logger.info(
                f"[{task.label}] Waiting {interval // 60} minutes until next check "
                f"(cycles={self.state.cycles}, launches={self.state.launches}, "
                f"failures={self.state.failures})"
            )
            self.sleep(interval)

    def run(self, task: TaskDescriptor, max_cycles: Optional[int] = None) -> Optional[LaunchResult]:
        """Dispatch to run_once or run_forever based on the task kind."""
        spec = get_task_spec(task.kind)
        if spec.one_shot:
            return self.run_once(task)
        self.run_forever(task, max_cycles=max_cycles)
        return self.state.last_result

    # =========================================================================
    # EXECUTION
    # =========================================================================

    def _execute(self, task: TaskDescriptor, ctx: ExecutionContext) -> LaunchResult:
        """Build, prepare and launch one invocation with full tracking."""
        spec = get_task_spec(task.kind)
        invocation = build_invocation(task, ctx.moment, self.config)

        logger.info(f"[{task.label}] Starting `{invocation.program}` ({spec.subcommand})...")
        try:
            prepare_output_dir(invocation)
        except OutputPathError as e:
            logger.warning(f"[{task.label}] {e} - continuing anyway")
        if invocation.output_path is not None:
            logger.info(f"[{task.label}] Output: {invocation.output_path}")
        logger.info(f"[{task.label}] Full command: {invocation}")

        # Anchored to the decision moment from the injected clock
        started = ctx.moment
        timer = time.monotonic()
        returncode = None
        error = None
        try:
            returncode = self.launcher.launch(invocation)
        except LaunchError as e:
            error = str(e)
            logger.error(f"[{task.label}] Error running collector: {format_exception_chain(e)}")
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            logger.error(f"[{task.label}] Unexpected error running collector: {error}", exc_info=True)

        duration = time.monotonic() - timer
        completed = started + timedelta(seconds=duration)
        result = LaunchResult(
            task_name=spec.name,
            success=error is None and returncode == 0,
            started_at=started,
            completed_at=completed,
            duration_seconds=duration,
            returncode=returncode,
            error=error,
            metrics={"codes": len(task.codes), "category": task.category},
        )

        if returncode is not None:
            if result.success:
                logger.info(
                    f"[{task.label}] Finished with exit code 0 in {result.duration_seconds:.1f}s"
                )
            else:
                logger.error(
                    f"[{task.label}] Finished with exit code {returncode} "
                    f"in {result.duration_seconds:.1f}s"
                )

        return result
