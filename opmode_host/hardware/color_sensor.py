# opmode_host/hardware/color_sensor.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class ColorSample:
    red: int
    green: int
    blue: int
    alpha: int = 0

    def __post_init__(self) -> None:
        for channel in ("red", "green", "blue", "alpha"):
            if getattr(self, channel) < 0:
                raise ValueError(f"{channel} intensity must be non-negative")

    @property
    def argb(self) -> int:
        """Channels clipped to 8 bits and packed as 0xAARRGGBB."""
        a, r, g, b = (min(int(v), 255) for v in (self.alpha, self.red, self.green, self.blue))
        return (a << 24) | (r << 16) | (g << 8) | b


class ColorSensor:
    """An RGB + alpha (clear) color sensor. Subclasses implement ``read``."""

    def __init__(self, name: str) -> None:
        self.name = name

    def read(self) -> ColorSample:
        raise NotImplementedError

    def red(self) -> int:
        return self.read().red

    def green(self) -> int:
        return self.read().green

    def blue(self) -> int:
        return self.read().blue

    def alpha(self) -> int:
        return self.read().alpha

    def argb(self) -> int:
        return self.read().argb


class SimColorSensor(ColorSensor):
    """Returns whatever sample it was last given, plus optional Gaussian noise."""

    def __init__(
        self,
        name: str,
        sample: Optional[ColorSample] = None,
        noise_std: float = 0.0,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(name)
        self._sample = sample or ColorSample(0, 0, 0, 0)
        self.noise_std = float(noise_std)
        self._rng = np.random.default_rng(seed)

    def set_sample(self, sample: ColorSample) -> None:
        self._sample = sample

    def read(self) -> ColorSample:
        s = self._sample
        if self.noise_std <= 0:
            return s

        raw = np.array([s.red, s.green, s.blue, s.alpha], dtype=float)
        noisy = np.clip(np.rint(raw + self._rng.normal(0.0, self.noise_std, 4)), 0, None)
        r, g, b, a = (int(v) for v in noisy)
        return ColorSample(r, g, b, a)
