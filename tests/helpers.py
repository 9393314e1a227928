from dataclasses import dataclass
from typing import Any, Callable, Optional

from opmode_host.hardware.hardware_map import HardwareMap
from opmode_host.hardware.motor import SimDcMotor


@dataclass
class PublishedEvent:
    topic: str
    data: Any


class CapturingBus:
    """
    Wraps the EventBus interface: publish(topic, data).
    Useful for asserting what got published.
    """
    def __init__(self) -> None:
        self.events: list[PublishedEvent] = []
        self.subscribers: dict[str, list[Callable[[Any], None]]] = {}

    def subscribe(self, topic: str, handler: Callable[[Any], None]) -> None:
        self.subscribers.setdefault(topic, []).append(handler)

    def unsubscribe(self, topic: str, handler: Callable[[Any], None]) -> None:
        handlers = self.subscribers.get(topic, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, topic: str, data: Any) -> None:
        self.events.append(PublishedEvent(topic, data))
        for h in self.subscribers.get(topic, []):
            h(data)

    def topics(self) -> list[str]:
        return [e.topic for e in self.events]

    def of(self, topic: str) -> list[Any]:
        return [e.data for e in self.events if e.topic == topic]

    def last(self, topic: str) -> Optional[PublishedEvent]:
        for e in reversed(self.events):
            if e.topic == topic:
                return e
        return None


def powers(hardware_map) -> dict:
    return {m.name: m.power for m in hardware_map.motors}


def nonzero_writes(motor) -> list:
    return [(ts, p) for ts, p in motor.history if p != 0.0]


def make_hardware_map(clock, color_sensor=None, motors=None):
    """Four simulated drive motors (mFL, mFR, mBL, mBR) plus an optional sensor."""
    if motors is None:
        motors = [SimDcMotor(name, clock=clock) for name in ("mFL", "mFR", "mBL", "mBR")]
    return HardwareMap(motors=motors, color_sensors=[color_sensor] if color_sensor else [])
