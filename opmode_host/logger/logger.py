# opmode_host/logger/logger.py
"""
Run logs for OpModes.

Each run writes two files into the configured log directory:
  <OpMode>.log    text from every logger under ``opmode_host``
  <OpMode>.jsonl  one JSON event per line (telemetry frames, state changes)
"""
from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import asdict, is_dataclass
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from opmode_host.core.settings import LoggingSettings

ROOT_LOGGER_NAME = "opmode_host"
TEXT_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s"

log = logging.getLogger(__name__)


def parse_level(name: str) -> int:
    """'info' -> logging.INFO. Unknown names raise ValueError."""
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {name!r}")
    return level


class DedupFilter(logging.Filter):
    """
    Drop a record that repeats the last message of the same logger at the
    same level. Loops log the same line every tick; with ``cooldown_s`` > 0
    the repeat is let through again once the cooldown has passed.
    """
    def __init__(self, cooldown_s: float = 0.0) -> None:
        super().__init__()
        self.cooldown_s = float(cooldown_s)
        self._lock = threading.Lock()
        self._last: Dict[Tuple[str, int], Tuple[str, float]] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        key = (record.name, record.levelno)
        msg = record.getMessage()
        now = time.monotonic()

        with self._lock:
            prev = self._last.get(key)
            if prev is not None and prev[0] == msg:
                if self.cooldown_s <= 0.0 or now - prev[1] < self.cooldown_s:
                    return False
            self._last[key] = (msg, now)
        return True


class TextLog:
    """
    Rotating text log on the ``opmode_host`` logger for the length of a run.

    ``close()`` removes only the handlers added here and puts the logger's
    level and propagate flag back.
    """
    def __init__(
        self,
        path: Union[str, Path],
        level: int = logging.INFO,
        console: bool = False,
        dedup_cooldown_s: float = 0.0,
        max_bytes: int = 5_000_000,
        backup_count: int = 5,
    ) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        self._logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._saved = (self._logger.level, self._logger.propagate)

        handlers: List[logging.Handler] = [
            RotatingFileHandler(self.path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"),
        ]
        if console:
            handlers.append(logging.StreamHandler())

        fmt = logging.Formatter(TEXT_FORMAT, datefmt="%H:%M:%S")
        for h in handlers:
            h.setLevel(level)
            h.setFormatter(fmt)
            # one filter per handler: a shared one would let only the first handler see a line
            h.addFilter(DedupFilter(dedup_cooldown_s))
            self._logger.addHandler(h)
        self._handlers = handlers

        self._logger.setLevel(level)
        self._logger.propagate = False
        log.debug("text log -> %s", self.path)

    def close(self) -> None:
        for h in self._handlers:
            self._logger.removeHandler(h)
            h.close()
        self._handlers = []

        level, propagate = self._saved
        self._logger.setLevel(level)
        self._logger.propagate = propagate


def to_jsonable(obj: Any) -> Any:
    """Dataclasses become dicts, enums their name, paths and exceptions strings."""
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))
    if isinstance(obj, Enum):
        return obj.name
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, BaseException):
        return repr(obj)
    return obj


class JsonlLogger:
    """
    Append-only JSONL event log. Line buffered, so a run that dies still
    leaves every event written before it.
    """
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._f = self.path.open("a", buffering=1, encoding="utf-8")

    def write(self, event: str, **data: Any) -> None:
        row = {"ts_ns": time.time_ns(), "event": event, **to_jsonable(data)}
        line = json.dumps(row, ensure_ascii=False, default=str)
        with self._lock:
            self._f.write(line + "\n")

    def close(self) -> None:
        with self._lock:
            if not self._f.closed:
                self._f.close()

    def __enter__(self) -> "JsonlLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class OpModeLogBundle:
    """The text log and the event log of one OpMode run, set up from the profile's ``logging`` section."""

    def __init__(self, name: str, settings: LoggingSettings) -> None:
        log_dir = Path(settings.log_dir)
        self.name = name
        self.text = TextLog(
            log_dir / f"{name}.log",
            level=parse_level(settings.level),
            console=settings.console,
            dedup_cooldown_s=settings.dedup_cooldown_s,
        )
        self.events = JsonlLogger(log_dir / f"{name}.jsonl")

    def close(self) -> None:
        self.events.close()
        self.text.close()
