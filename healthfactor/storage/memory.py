"""In-process HfState store keyed by user."""
from __future__ import annotations

import asyncio

from ..models import HfState


class InMemoryHfStateStore:
    """Dict-backed store; one writer at a time."""

    def __init__(self) -> None:
        self._states: dict[str, HfState] = {}
        self._lock = asyncio.Lock()

    async def get(self, user: str) -> HfState | None:
        return self._states.get(user)

    async def save(self, state: HfState) -> None:
        async with self._lock:
            self._states[state.user] = state

    def __len__(self) -> int:
        return len(self._states)
