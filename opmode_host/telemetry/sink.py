# opmode_host/telemetry/sink.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from opmode_host.core.event_bus import EventBus

log = logging.getLogger(__name__)

TOPIC_FRAME = "telemetry.frame"


@dataclass
class TelemetryFrame:
    seq: int
    ts: float
    items: Dict[str, Any] = field(default_factory=dict)

    def lines(self) -> list[str]:
        return [f"{k} : {v}" for k, v in self.items.items()]


class Telemetry:
    """
    Driver-station style telemetry: collect captioned values during a loop
    tick, then ``update()`` publishes them as one frame and starts a new one.
    """

    def __init__(self, bus: EventBus, clock=None) -> None:
        self._bus = bus
        self._clock = clock
        self._items: Dict[str, Any] = {}
        self._seq = 0
        self._latest: Optional[TelemetryFrame] = None

    @property
    def latest(self) -> Optional[TelemetryFrame]:
        return self._latest

    def add_data(self, caption: str, value: Any) -> None:
        self._items[str(caption)] = value

    def update(self) -> TelemetryFrame:
        self._seq += 1
        ts = self._clock.now() if self._clock is not None else 0.0
        frame = TelemetryFrame(seq=self._seq, ts=ts, items=self._items)
        self._items = {}
        self._latest = frame

        log.debug("frame %d: %s", frame.seq, frame.items)
        self._bus.publish(TOPIC_FRAME, frame)
        return frame
