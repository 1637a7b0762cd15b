"""Mutation dispatch onto the single event loop."""

from .dispatcher import Dispatcher

__all__ = [
    "Dispatcher",
]
