"""
Observability Module
====================
Logging setup shared by every runner component.
"""

from observability.logger import get_logger, setup_logging

__all__ = ['get_logger', 'setup_logging']
