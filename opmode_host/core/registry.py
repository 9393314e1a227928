# opmode_host/core/registry.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Type


class OpModeKind(Enum):
    AUTONOMOUS = "autonomous"
    TELEOP = "teleop"


@dataclass(frozen=True)
class OpModeInfo:
    name: str
    kind: OpModeKind
    cls: type
    description: str = ""


class OpModeRegistry:
    """Selectable OpModes, keyed by name (what the driver picks from a list)."""

    def __init__(self) -> None:
        self._opmodes: Dict[str, OpModeInfo] = {}

    def register(self, cls: type, kind: OpModeKind, name: Optional[str] = None) -> OpModeInfo:
        name = name or cls.__name__
        existing = self._opmodes.get(name)
        if existing is not None and existing.cls is not cls:
            raise ValueError(f"OpMode name already registered: {name}")

        doc = (cls.__doc__ or "").strip()
        info = OpModeInfo(name=name, kind=kind, cls=cls, description=doc.splitlines()[0] if doc else "")
        self._opmodes[name] = info
        cls.__opmode_info__ = info
        return info

    def get(self, name: str) -> OpModeInfo:
        try:
            return self._opmodes[name]
        except KeyError:
            known = ", ".join(sorted(self._opmodes)) or "none"
            raise KeyError(f"Unknown OpMode {name!r} (available: {known})") from None

    def available(self) -> List[OpModeInfo]:
        return sorted(self._opmodes.values(), key=lambda i: (i.kind.value, i.name))

    def __contains__(self, name: str) -> bool:
        return name in self._opmodes


default_registry = OpModeRegistry()


def _decorator(kind: OpModeKind, cls, name, registry):
    def wrap(c: Type) -> Type:
        (registry or default_registry).register(c, kind, name)
        return c

    if cls is not None:
        return wrap(cls)
    return wrap


def autonomous(cls=None, *, name: Optional[str] = None, registry: Optional[OpModeRegistry] = None) -> Callable:
    """Mark an OpMode as autonomous (runs under the autonomous time limit)."""
    return _decorator(OpModeKind.AUTONOMOUS, cls, name, registry)


def teleop(cls=None, *, name: Optional[str] = None, registry: Optional[OpModeRegistry] = None) -> Callable:
    """Mark an OpMode as teleop (no time limit)."""
    return _decorator(OpModeKind.TELEOP, cls, name, registry)


def opmode_info(cls: type) -> OpModeInfo:
    info = getattr(cls, "__opmode_info__", None)
    if info is not None and info.cls is cls:
        return info
    return OpModeInfo(name=cls.__name__, kind=OpModeKind.TELEOP, cls=cls)
