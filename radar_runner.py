#!/usr/bin/env python3
"""
Radar Runner
============
Decides when radar-fundamentos should collect data and launches it with the
right arguments: only on B3 business days, only inside the configured hour
window, each mode at its own cadence.

One process runs one mode. Run several instances (systemd units, tmux panes)
to keep several schedules going at once.

Usage:
    radar-runner cotacoes-agora              # quotes once, now
    radar-runner cotacoes                    # quotes every frequencia_minutos
    radar-runner historico acao              # historical export every 3 hours
    radar-runner indicadores fundo           # indicators every frequencia_indicadores_minutos
    radar-runner indicadores-agora acao      # indicators once, now
    radar-runner config                      # show the effective configuration
"""

import argparse
import json
import sys
from typing import Optional, Sequence

from config import LIVE_QUOTES_CATEGORY, VERSION, get_config_path
from core.runner_config import load_runner_config
from core.types import RunnerConfig, TaskDescriptor, TaskKind
from observability.logger import get_logger, setup_logging
from orchestration.task_scheduler import TaskScheduler
from orchestration.task_specs import get_task_spec

logger = get_logger("cli")

# Subcommand -> task kind
COMMANDS = {
    "cotacoes-agora": TaskKind.LIVE_QUOTES_SNAPSHOT,
    "cotacoes": TaskKind.LIVE_QUOTES_PERIODIC,
    "historico": TaskKind.HISTORICAL_EXPORT,
    "indicadores": TaskKind.INDICATORS_PERIODIC,
    "indicadores-agora": TaskKind.INDICATORS_SNAPSHOT,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radar-runner",
        description="Window-gated scheduler for radar-fundamentos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s cotacoes-agora            # Collect quotes once, ignoring the schedule
  %(prog)s cotacoes                  # Periodic quotes (frequency from config)
  %(prog)s historico acao            # Periodic historical export for stocks
  %(prog)s indicadores fundo         # Periodic indicators for funds
  %(prog)s config                    # Show resolved paths and configuration
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--config", metavar="PATH", help="Config file (default: %s)" % get_config_path())
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("cotacoes-agora", help="Collect quotes once, ignoring the schedule")
    subparsers.add_parser("cotacoes", help="Collect quotes periodically inside the window")

    historico = subparsers.add_parser("historico", help="Periodic historical export for a category")
    historico.add_argument("tipo", help="Asset category (e.g. acao, fundo)")

    indicadores = subparsers.add_parser("indicadores", help="Periodic indicator collection for a category")
    indicadores.add_argument("tipo", help="Asset category (e.g. acao, fundo)")

    indicadores_agora = subparsers.add_parser("indicadores-agora", help="Collect indicators once for a category")
    indicadores_agora.add_argument("tipo", help="Asset category (e.g. acao, fundo)")

    subparsers.add_parser("config", help="Show the effective configuration")

    return parser


def build_task(command: str, category: Optional[str], config: RunnerConfig) -> TaskDescriptor:
    """Map a subcommand (and category argument) onto a TaskDescriptor."""
    kind = COMMANDS[command]
    spec = get_task_spec(kind)

    if not spec.passes_category:
        category = LIVE_QUOTES_CATEGORY
    category = category.strip().lower()

    codes = config.codes_for(category)
    if not codes:
        logger.warning(
            f"No codes configured for category '{category}' "
            f"(known: {', '.join(config.categories)}); collector will run without codes"
        )
    return TaskDescriptor(kind=kind, category=category, codes=codes)


def cmd_config(config: RunnerConfig) -> int:
    print(f"Config file: {config.source or get_config_path()}")
    print(f"Data dir:    {config.data_dir}")
    print(json.dumps(config.to_dict(), indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(level="DEBUG" if args.verbose else None)
    config = load_runner_config(args.config)

    if args.command == "config":
        return cmd_config(config)

    task = build_task(args.command, getattr(args, "tipo", None), config)
    spec = get_task_spec(task.kind)
    scheduler = TaskScheduler(config)

    if spec.one_shot:
        logger.info(f"Single run of '{spec.subcommand}' (bypass) for {len(task.codes)} assets.")
    else:
        interval = spec.interval_for(config)
        logger.info(
            f"Starting {spec.name} (category={task.category}, {len(task.codes)} assets). "
            f"Checking every {interval // 60} minutes, window "
            f"{config.window_start}:00 - {config.window_end}:59."
        )

    try:
        scheduler.run(task)
    except KeyboardInterrupt:
        logger.info(
            f"Interrupted after {scheduler.state.cycles} cycles "
            f"({scheduler.state.launches} launches, {scheduler.state.failures} failures)"
        )
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
