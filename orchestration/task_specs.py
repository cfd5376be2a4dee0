"""
Task Specifications Registry

Complete registry of the runner's task kinds and how each one maps onto the
radar-fundamentos command line. Each spec has:
- External subcommand name
- Whether the asset category is passed as a positional argument
- Output path policy (timestamped, fixed quotes file, fixed per category)
- Cadence (fixed seconds, or a minutes key read from the loaded config)
- Whether the kind is a forced one-shot

This is the collector's positional-argument contract expressed as data.
Changing a subcommand or an output policy is a protocol change: update the
entry here and the invocation builder picks it up.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from config import HISTORICAL_POLL_SECONDS
from core.types import RunnerConfig, TaskKind


class OutputPolicy(Enum):
    """Where a kind writes its CSV."""
    TIMESTAMPED = "timestamped"       # <data>/dados/historico/<cat>_<ts>.csv, one per run
    QUOTES_FILE = "quotes_file"       # <data>/cotacoes.csv, overwritten
    CATEGORY_FILE = "category_file"   # <data>/<cat>.csv, overwritten


@dataclass(frozen=True)
class TaskSpec:
    """
    Specification for one task kind.

    Exactly one of interval_seconds / frequency_field is used for periodic
    kinds; one-shot kinds have neither.
    """
    kind: TaskKind
    subcommand: str
    passes_category: bool
    output_policy: OutputPolicy
    one_shot: bool = False
    interval_seconds: Optional[int] = None
    frequency_field: Optional[str] = None   # RunnerConfig attribute, in minutes
    description: str = ""

    @property
    def name(self) -> str:
        return self.kind.value

    def interval_for(self, config: RunnerConfig) -> Optional[int]:
        """Seconds to sleep between cycles, None for one-shot kinds."""
        if self.one_shot:
            return None
        if self.frequency_field:
            return int(getattr(config, self.frequency_field)) * 60
        return self.interval_seconds


# =============================================================================
# TASK SPECIFICATIONS REGISTRY
# =============================================================================

TASK_SPECS: Dict[TaskKind, TaskSpec] = {

    # =========================================================================
    # LIVE QUOTES - full high-frequency list, fixed output file
    # =========================================================================

    TaskKind.LIVE_QUOTES_SNAPSHOT: TaskSpec(
        kind=TaskKind.LIVE_QUOTES_SNAPSHOT,
        subcommand="cotacoes",
        passes_category=False,
        output_policy=OutputPolicy.QUOTES_FILE,
        one_shot=True,
        description="Collect quotes once, ignoring the schedule",
    ),

    TaskKind.LIVE_QUOTES_PERIODIC: TaskSpec(
        kind=TaskKind.LIVE_QUOTES_PERIODIC,
        subcommand="cotacoes",
        passes_category=False,
        output_policy=OutputPolicy.QUOTES_FILE,
        frequency_field="quotes_frequency_minutes",
        description="Collect quotes every frequencia_minutos inside the window",
    ),

    # =========================================================================
    # HISTORICAL EXPORT - one timestamped file per run
    # =========================================================================

    TaskKind.HISTORICAL_EXPORT: TaskSpec(
        kind=TaskKind.HISTORICAL_EXPORT,
        subcommand="export",
        passes_category=True,
        output_policy=OutputPolicy.TIMESTAMPED,
        interval_seconds=HISTORICAL_POLL_SECONDS,
        description="Export fundamentals history every 3 hours inside the window",
    ),

    # =========================================================================
    # INDICATORS - fixed file per category
    # =========================================================================

    TaskKind.INDICATORS_PERIODIC: TaskSpec(
        kind=TaskKind.INDICATORS_PERIODIC,
        subcommand="indicadores",
        passes_category=True,
        output_policy=OutputPolicy.CATEGORY_FILE,
        frequency_field="indicators_frequency_minutes",
        description="Collect indicators every frequencia_indicadores_minutos inside the window",
    ),

    TaskKind.INDICATORS_SNAPSHOT: TaskSpec(
        kind=TaskKind.INDICATORS_SNAPSHOT,
        subcommand="indicadores",
        passes_category=True,
        output_policy=OutputPolicy.CATEGORY_FILE,
        one_shot=True,
        description="Collect indicators once, ignoring the schedule",
    ),
}


def get_task_spec(kind: TaskKind) -> TaskSpec:
    """Look up the spec for a kind."""
    return TASK_SPECS[kind]
