"""
Radar Runner Test Suite
=======================

Pytest infrastructure for the scheduler, the invocation builder and the CLI.

Directory Structure:
    tests/
    ├── __init__.py         # This file
    ├── conftest.py         # Shared fixtures
    ├── unit/               # Unit tests (fast, isolated)
    ├── integration/        # Real subprocesses and the CLI entry point
    └── mocks/              # Launcher, clock and sleep doubles

Usage:
    # Run all tests
    pytest

    # Run only unit tests
    pytest -m unit

    # Run with coverage
    pytest --cov=orchestration --cov=execution --cov=core --cov-report=html

    # Run critical path tests only
    pytest -m critical
"""
