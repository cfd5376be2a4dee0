"""
Core Types for Radar Runner
===========================
Canonical type definitions for schedulable tasks, external invocations and
their outcomes.

This module is the SINGLE SOURCE OF TRUTH for runner data types.
All other modules should import from here.

Task Kind Convention
--------------------
Each kind is one schedulable unit of the external collector:

- LIVE_QUOTES_SNAPSHOT / INDICATORS_SNAPSHOT: run once now, bypassing the gate
- LIVE_QUOTES_PERIODIC / INDICATORS_PERIODIC / HISTORICAL_EXPORT: gated loops

The kind is a tag only; how it maps onto the collector's command line lives in
orchestration/task_specs.py.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, FrozenSet, Mapping, Tuple


class TaskKind(Enum):
    """Schedulable unit kinds."""
    LIVE_QUOTES_SNAPSHOT = "live_quotes_snapshot"
    LIVE_QUOTES_PERIODIC = "live_quotes_periodic"
    HISTORICAL_EXPORT = "historical_export"
    INDICATORS_PERIODIC = "indicators_periodic"
    INDICATORS_SNAPSHOT = "indicators_snapshot"


@dataclass(frozen=True)
class TaskDescriptor:
    """
    One schedulable unit: what to collect and for which asset category.

    codes may legitimately be empty for a category with no configured codes;
    the collector is then invoked without positional codes.
    """
    kind: TaskKind
    category: str
    codes: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any sequence, store an immutable tuple
        object.__setattr__(self, 'codes', tuple(self.codes))

    @property
    def label(self) -> str:
        """Short tag used as log prefix, e.g. 'acao'."""
        return self.category


@dataclass(frozen=True)
class Invocation:
    """A fully resolved external command, passed once to the launcher."""
    program: str
    args: Tuple[str, ...]
    output_path: Optional[Path] = None

    @property
    def argv(self) -> Tuple[str, ...]:
        return (self.program,) + self.args

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass
class LaunchResult:
    """Result of one external collector run."""
    task_name: str
    success: bool
    started_at: datetime
    completed_at: datetime
    duration_seconds: float
    returncode: Optional[int] = None
    error: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RunnerConfig:
    """
    Effective schedule configuration, loaded once at startup.

    Read-only for the lifetime of the process; passed explicitly to the
    scheduler and the invocation builder.
    """
    holidays: FrozenSet[str]
    window_start: int
    window_end: int
    quotes_frequency_minutes: int
    indicators_frequency_minutes: int
    codes: Mapping[str, Tuple[str, ...]]
    program: str
    data_dir: Path
    source: Optional[Path] = None   # None when built-in defaults are in use

    def codes_for(self, category: str) -> Tuple[str, ...]:
        """Codes configured for a category, empty if the category is unknown."""
        return tuple(self.codes.get(category, ()))

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(sorted(self.codes))

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation for display and logging."""
        return {
            "source": str(self.source) if self.source else "<built-in defaults>",
            "data_dir": str(self.data_dir),
            "program": self.program,
            "holidays": sorted(self.holidays),
            "window": [self.window_start, self.window_end],
            "quotes_frequency_minutes": self.quotes_frequency_minutes,
            "indicators_frequency_minutes": self.indicators_frequency_minutes,
            "codes": {k: list(v) for k, v in sorted(self.codes.items())},
        }
