"""Event sink that writes health factor events to the log."""
import logging

from ..fixed_point import U128_MAX, q64_to_float
from ..models import HealthFactorComputed

logger = logging.getLogger(__name__)


class LoggingEventSink:
    """Publish HealthFactorComputed events through ``logging``."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    async def publish(self, event: HealthFactorComputed) -> None:
        if event.hf_q64 == U128_MAX:
            shown = "∞"
        else:
            shown = f"{q64_to_float(event.hf_q64):.4f}"
        logger.log(
            self.level,
            "HealthFactorComputed user=%s hf=%s hf_q64=%d timestamp=%d",
            event.user,
            shown,
            event.hf_q64,
            event.timestamp,
        )
