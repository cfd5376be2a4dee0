"""
Mock implementations for testing without spawning the real collector.

This package provides:
- FakeLauncher: records invocations, simulates exit codes and launch errors
- RecordingSleep: records sleep durations, can stop the scheduler loop
- SequenceClock: returns scripted market-time moments

Usage:
    from tests.mocks import FakeLauncher, FailureMode, RecordingSleep, StopLoop

    launcher = FakeLauncher(failure_mode=FailureMode.LAUNCH_ERROR)
    sleep = RecordingSleep(stop_after=3)
"""

from .mock_launcher import (
    FailureMode,
    FakeLauncher,
    RecordingSleep,
    SequenceClock,
    StopLoop,
)

__all__ = [
    'FailureMode',
    'FakeLauncher',
    'RecordingSleep',
    'SequenceClock',
    'StopLoop',
]
