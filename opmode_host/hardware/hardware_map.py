# opmode_host/hardware/hardware_map.py

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..core.settings import HardwareSettings, SimSettings
from .color_sensor import ColorSample, ColorSensor, SimColorSensor
from .motor import DcMotor, Direction, SimDcMotor


class HardwareNotFoundError(KeyError):
    def __init__(self, kind: str, name: str, available: Iterable[str]) -> None:
        self.kind = kind
        self.name = name
        self.available = sorted(available)
        super().__init__(name)

    def __str__(self) -> str:
        names = ", ".join(self.available) or "none"
        return f"No {self.kind} named {self.name!r} is configured (configured: {names})"


class HardwareMap:
    """
    Named device registry for one robot configuration.

    Built once per run and handed to the OpMode through its runtime.
    """

    def __init__(
        self,
        motors: Optional[Iterable[DcMotor]] = None,
        color_sensors: Optional[Iterable[ColorSensor]] = None,
    ) -> None:
        self._motors: Dict[str, DcMotor] = {}
        self._color_sensors: Dict[str, ColorSensor] = {}
        for m in motors or ():
            self.add_motor(m)
        for s in color_sensors or ():
            self.add_color_sensor(s)

    def add_motor(self, motor: DcMotor) -> None:
        if motor.name in self._motors:
            raise ValueError(f"Duplicate motor name: {motor.name}")
        self._motors[motor.name] = motor

    def add_color_sensor(self, sensor: ColorSensor) -> None:
        if sensor.name in self._color_sensors:
            raise ValueError(f"Duplicate color sensor name: {sensor.name}")
        self._color_sensors[sensor.name] = sensor

    def dc_motor(self, name: str) -> DcMotor:
        try:
            return self._motors[name]
        except KeyError:
            raise HardwareNotFoundError("motor", name, self._motors) from None

    def color_sensor(self, name: str) -> ColorSensor:
        try:
            return self._color_sensors[name]
        except KeyError:
            raise HardwareNotFoundError("color sensor", name, self._color_sensors) from None

    @property
    def motors(self) -> List[DcMotor]:
        return list(self._motors.values())

    def stop_all_motors(self) -> None:
        for m in self._motors.values():
            m.set_power(0.0)


def build_hardware_map(
    hardware: HardwareSettings,
    sim: Optional[SimSettings] = None,
    clock=None,
) -> HardwareMap:
    """
    Construct the devices named in a robot profile.

    Motors start in FORWARD; the OpMode sets each direction when it binds
    its drivetrain.
    """
    if hardware.backend != "sim":
        raise ValueError(f"Unknown hardware backend: {hardware.backend}")

    sim = sim or SimSettings()
    hw = HardwareMap()

    for m in hardware.motors:
        hw.add_motor(SimDcMotor(m.name, Direction.FORWARD, clock=clock))

    if hardware.color_sensor:
        hw.add_color_sensor(
            SimColorSensor(
                hardware.color_sensor,
                ColorSample(sim.red, sim.green, sim.blue, sim.alpha),
                noise_std=sim.noise_std,
                seed=sim.seed,
            )
        )

    return hw
