from .color_sensor import ColorSample, ColorSensor, SimColorSensor
from .drivetrain import FourMotorDrive, PowerPattern
from .hardware_map import HardwareMap, HardwareNotFoundError, build_hardware_map
from .motor import DcMotor, Direction, SimDcMotor
