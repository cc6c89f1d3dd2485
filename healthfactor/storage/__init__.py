"""State store implementations."""
from .memory import InMemoryHfStateStore

__all__ = ["InMemoryHfStateStore"]
