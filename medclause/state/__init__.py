"""State module - the application state store."""

from .store import AppStateStore

__all__ = ['AppStateStore']
