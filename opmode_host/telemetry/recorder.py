# opmode_host/telemetry/recorder.py
from __future__ import annotations

from typing import Any

from opmode_host.core.event_bus import EventBus
from opmode_host.logger.logger import JsonlLogger
from opmode_host.core.lifecycle import TOPIC_STATE
from .sink import TOPIC_FRAME, TelemetryFrame


class TelemetryRecorder:
    """Writes telemetry frames and OpMode state changes to a JSONL file."""

    def __init__(self, bus: EventBus, events: JsonlLogger) -> None:
        self._bus = bus
        self._events = events
        self.frames_written = 0
        bus.subscribe(TOPIC_FRAME, self._on_frame)
        bus.subscribe(TOPIC_STATE, self._on_state)

    def _on_frame(self, frame: TelemetryFrame) -> None:
        self._events.write("telemetry.frame", seq=frame.seq, ts=frame.ts, items=frame.items)
        self.frames_written += 1

    def _on_state(self, state: Any) -> None:
        self._events.write("opmode.state", state=state)

    def detach(self) -> None:
        self._bus.unsubscribe(TOPIC_FRAME, self._on_frame)
        self._bus.unsubscribe(TOPIC_STATE, self._on_state)
