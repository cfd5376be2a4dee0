"""
Orchestration Module
====================
Decides when the collector may run and drives the per-task loop.

Components:
- market_calendar: business-day, hour-window and run-now decisions
- task_specs: per-kind subcommand, output policy and cadence registry
- task_scheduler.TaskScheduler: one-shot and periodic dispatch loops
  (import it from orchestration.task_scheduler; it depends on execution/,
  which itself reads task_specs from here)
"""

from orchestration.market_calendar import (
    ExecutionContext,
    is_business_day,
    in_window,
    should_run,
)
from orchestration.task_specs import (
    TASK_SPECS,
    TaskSpec,
    OutputPolicy,
    get_task_spec,
)

__all__ = [
    # Calendar
    'ExecutionContext',
    'is_business_day',
    'in_window',
    'should_run',
    # Task specs
    'TASK_SPECS',
    'TaskSpec',
    'OutputPolicy',
    'get_task_spec',
]
