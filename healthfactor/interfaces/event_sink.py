"""Event sink protocol for computed health factors."""
from typing import Protocol

from ..models import HealthFactorComputed


class EventSink(Protocol):
    """Abstract interface for publishing health factor events."""

    async def publish(self, event: HealthFactorComputed) -> None: ...
