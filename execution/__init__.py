"""
Execution Module
================
Builds collector command lines and runs them.
"""

from execution.invocation_builder import (
    build_invocation,
    resolve_output_path,
    prepare_output_dir,
)
from execution.process_launcher import (
    ProcessLauncher,
    SubprocessLauncher,
)

__all__ = [
    # Invocation building
    'build_invocation',
    'resolve_output_path',
    'prepare_output_dir',
    # Launching
    'ProcessLauncher',
    'SubprocessLauncher',
]
