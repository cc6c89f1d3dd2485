"""State store protocol, last recorded health factor per user."""
from typing import Protocol

from ..models import HfState


class HfStateStore(Protocol):
    """Abstract interface for persisting HfState records keyed by user."""

    async def get(self, user: str) -> HfState | None: ...

    async def save(self, state: HfState) -> None: ...
