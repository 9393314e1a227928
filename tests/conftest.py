# tests/conftest.py

import logging

import pytest

from helpers import CapturingBus
from opmode_host.core.clock import SimulatedClock
from opmode_host.core.runner import OpModeRunner
from opmode_host.core.runtime import build_runtime
from opmode_host.core.settings import HostSettings


@pytest.fixture
def bus():
    return CapturingBus()


@pytest.fixture
def clock():
    return SimulatedClock()


@pytest.fixture
def settings():
    return HostSettings()


@pytest.fixture
def runtime(settings, clock, bus):
    """Runtime on simulated time with the default simulated hardware."""
    return build_runtime(settings=settings, clock=clock, bus=bus)


@pytest.fixture
def runner(runtime):
    return OpModeRunner(runtime)


@pytest.fixture
def opmode_logs(caplog):
    caplog.set_level(logging.INFO, logger="opmode_host")
    return caplog
