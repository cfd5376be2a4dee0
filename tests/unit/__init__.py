"""
Unit Tests for the Radar Runner
===============================

Unit tests are:
- Fast (< 1 second each)
- Isolated (no child processes, no real sleeping)
- Deterministic (clock and sleep are injected)

Test Categories:
    - test_market_calendar.py - Business days, hour window, run decision
    - test_invocation_builder.py - Collector arguments and output paths
    - test_task_scheduler.py - One-shot and periodic loop behaviour
    - test_runner_config.py - Config file loading and fallbacks

All tests in this directory are automatically marked with @pytest.mark.unit
"""
