"""
Integration Tests for the Radar Runner
======================================

Integration tests exercise real child processes and the CLI entry point.
The Python interpreter stands in for radar-fundamentos wherever a real
process is needed.

Test Categories:
    - test_process_launcher.py - Exit status and launch failures
    - test_cli.py - Argument parsing, config display, one-shot runs

All tests in this directory are automatically marked with @pytest.mark.integration
"""
