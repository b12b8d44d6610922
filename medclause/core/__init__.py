"""Core module - logging configuration and structured log context."""

from .logging_config import setup_logging, ContextAdapter

__all__ = ['setup_logging', 'ContextAdapter']
