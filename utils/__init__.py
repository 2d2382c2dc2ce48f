"""
SlitherQuest - Utilities Package
Logging setup shared by tools that drive the engine.
"""
from .logger_config import configure_logging

__all__ = ['configure_logging']
