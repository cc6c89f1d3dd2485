"""Compute a user's health factor, store it and announce it."""
from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from ..config import AppConfig
from ..engine import compute_hf
from ..fixed_point import PRICE_SCALE_E8
from ..interfaces.event_sink import EventSink
from ..interfaces.state_store import HfStateStore
from ..models import ComputeArgs, HealthFactorComputed, HfState
from ..notifications import LoggingEventSink
from ..storage import InMemoryHfStateStore

logger = logging.getLogger(__name__)

# Registry of event sink factories keyed by config name.
_SINK_FACTORIES: dict[str, Callable[[], EventSink]] = {
    "log": LoggingEventSink,
}


def _unix_now() -> int:
    return int(datetime.now(timezone.utc).timestamp())


class HealthFactorRecorder:
    """Runs the engine and hands the result to the store and the sinks.

    ``slot_source`` supplies the logical update marker stamped on each
    stored state; by default a counter starting at 1.
    """

    def __init__(
        self,
        store: HfStateStore,
        sinks: Iterable[EventSink] = (),
        price_scale: int = PRICE_SCALE_E8,
        slot_source: Callable[[], int] | None = None,
        clock: Callable[[], int] = _unix_now,
    ) -> None:
        self._store = store
        self._sinks: list[EventSink] = list(sinks)
        self._price_scale = price_scale
        if slot_source is None:
            counter = itertools.count(1)
            slot_source = lambda: next(counter)  # noqa: E731
        self._slot_source = slot_source
        self._clock = clock

    @classmethod
    def from_config(
        cls, config: AppConfig, store: HfStateStore | None = None
    ) -> HealthFactorRecorder:
        sinks: list[EventSink] = []
        for name in config.recorder.sinks:
            factory = _SINK_FACTORIES.get(name)
            if factory:
                sinks.append(factory())
            else:
                logger.warning("No event sink factory for '%s'", name)
        return cls(
            store if store is not None else InMemoryHfStateStore(),
            sinks,
            price_scale=config.engine.price_scale,
        )

    async def _publish(self, event: HealthFactorComputed) -> None:
        for sink in self._sinks:
            try:
                await sink.publish(event)
            except Exception as e:
                logger.error("Event sink publish failed: %s", e)

    async def compute_and_record(self, user: str, args: ComputeArgs) -> HfState:
        """Compute the HF for ``user`` and persist it.

        Engine errors propagate before anything is stored or published.
        """
        hf = compute_hf(args, self._price_scale)
        hf_q64 = hf.to_q64()

        state = HfState(
            user=user,
            last_hf_q64=hf_q64,
            last_update_slot=self._slot_source(),
        )
        await self._store.save(state)
        logger.info(
            "Recorded HF for %s: %s (slot %d)", user, hf, state.last_update_slot
        )

        await self._publish(
            HealthFactorComputed(user=user, hf_q64=hf_q64, timestamp=self._clock())
        )
        return state

    async def last_state(self, user: str) -> HfState | None:
        return await self._store.get(user)
