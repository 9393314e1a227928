# opmode_host/core/settings.py

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@dataclass
class MotorSettings:
    name: str
    direction: str = "forward"     # "forward" | "reverse"


def default_drive_motors() -> List[MotorSettings]:
    return [
        MotorSettings("mFL", "forward"),
        MotorSettings("mFR", "reverse"),
        MotorSettings("mBL", "forward"),
        MotorSettings("mBR", "reverse"),
    ]


@dataclass
class HardwareSettings:
    backend: str = "sim"           # only the simulated backend ships with the host
    motors: List[MotorSettings] = field(default_factory=default_drive_motors)
    color_sensor: Optional[str] = "color"


@dataclass
class LifecycleSettings:
    poll_interval_s: float = 0.01
    loop_interval_s: float = 0.02           # teleop loop() pacing
    autonomous_time_limit_s: float = 30.0
    auto_start: bool = True


@dataclass
class SteeringSettings:
    noise_floor: int = 5
    turn_power: float = 0.3


@dataclass
class BoxPatternSettings:
    drive_time_s: float = 2.0
    turn_time_s: float = 1.0
    drive_power: float = 0.5
    turn_power: float = 0.3
    sides: int = 4


@dataclass
class StopImmediatelySettings:
    drive_power: float = 0.2
    leg_time_s: float = 0.5
    loops: int = 35


@dataclass
class LoggingSettings:
    log_dir: str = "logs"
    level: str = "INFO"
    console: bool = False
    dedup_cooldown_s: float = 0.0


@dataclass
class SimSettings:
    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 0
    noise_std: float = 0.0
    seed: Optional[int] = None


@dataclass
class HostSettings:
    hardware: HardwareSettings = field(default_factory=HardwareSettings)
    lifecycle: LifecycleSettings = field(default_factory=LifecycleSettings)
    steering: SteeringSettings = field(default_factory=SteeringSettings)
    box_pattern: BoxPatternSettings = field(default_factory=BoxPatternSettings)
    stop_immediately: StopImmediatelySettings = field(default_factory=StopImmediatelySettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    sim: SimSettings = field(default_factory=SimSettings)

    @classmethod
    def load(cls, profile: str = "default") -> "HostSettings":
        return cls.from_file(CONFIG_DIR / f"robot_profile_{profile}.yaml")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "HostSettings":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "HostSettings":
        """
        Build settings from a parsed profile. Missing sections, and sections
        left empty in YAML (``steering:`` with every key commented out), take
        the defaults.
        """
        data = data or {}
        if not isinstance(data, dict):
            raise TypeError(f"robot profile must be a mapping, got {type(data).__name__}")

        hw = _section(data, "hardware")
        if hw.get("motors") is not None:
            hw["motors"] = [MotorSettings(**m) for m in hw["motors"]]
        else:
            hw.pop("motors", None)

        return cls(
            hardware=HardwareSettings(**hw),
            lifecycle=LifecycleSettings(**_section(data, "lifecycle")),
            steering=SteeringSettings(**_section(data, "steering")),
            box_pattern=BoxPatternSettings(**_section(data, "box_pattern")),
            stop_immediately=StopImmediatelySettings(**_section(data, "stop_immediately")),
            logging=LoggingSettings(**_section(data, "logging")),
            sim=SimSettings(**_section(data, "sim")),
        )


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"profile section '{key}' must be a mapping, got {type(value).__name__}")
    return dict(value)
