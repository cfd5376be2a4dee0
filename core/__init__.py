# Core types for radar runner
from core.types import TaskKind, TaskDescriptor, Invocation, LaunchResult, RunnerConfig

__all__ = ['TaskKind', 'TaskDescriptor', 'Invocation', 'LaunchResult', 'RunnerConfig']
