import pytest

import opmode_host.opmodes as examples
from opmode_host.core.lifecycle import IterativeOpMode, LinearOpMode
from opmode_host.core.registry import OpModeKind, OpModeRegistry, autonomous, default_registry, opmode_info, teleop


def test_examples_are_registered_with_their_kind():
    kinds = {i.name: i.kind for i in default_registry.available()}

    assert kinds["AutonomousElapsedTimeBoxPattern"] is OpModeKind.AUTONOMOUS
    assert kinds["AutonomousStopImmediately"] is OpModeKind.AUTONOMOUS
    assert kinds["ColorSensorSteering"] is OpModeKind.TELEOP
    assert kinds["ColorSensorTelemetry"] is OpModeKind.TELEOP
    assert default_registry.get("ColorSensorSteering").cls is examples.ColorSensorSteering


def test_description_is_first_docstring_line():
    info = default_registry.get("AutonomousElapsedTimeBoxPattern")
    assert info.description == "Drive a box pattern with right turns using elapsed-time moves."


def test_decorator_forms():
    reg = OpModeRegistry()

    @autonomous(registry=reg, name="Park")
    class ParkAuto(LinearOpMode):
        """Park."""

    @teleop(registry=reg)
    class Drive(IterativeOpMode):
        pass

    assert reg.get("Park").cls is ParkAuto
    assert opmode_info(ParkAuto).kind is OpModeKind.AUTONOMOUS
    assert reg.get("Drive").kind is OpModeKind.TELEOP
    assert [i.name for i in reg.available()] == ["Park", "Drive"]
    assert "Park" in reg and "ParkAuto" not in reg


def test_duplicate_name_rejected():
    reg = OpModeRegistry()

    @teleop(registry=reg, name="Same")
    class A(IterativeOpMode):
        pass

    with pytest.raises(ValueError):
        @teleop(registry=reg, name="Same")
        class B(IterativeOpMode):
            pass


def test_unknown_name_lists_available():
    with pytest.raises(KeyError, match="ColorSensorTelemetry"):
        default_registry.get("Nope")


def test_unregistered_class_defaults_to_teleop():
    class Loose(IterativeOpMode):
        pass

    info = opmode_info(Loose)
    assert info.kind is OpModeKind.TELEOP and info.name == "Loose"
