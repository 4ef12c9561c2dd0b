"""
Scalar noise field used to roughen the mainland outline.

The field is a sum of fixed sinusoids along each axis plus per-cell uniform
jitter. Bays are carved by lowering field values along a wobbly inward path,
which pushes those cells toward the water side of the coastline threshold.
"""

import math
from typing import Tuple

import numpy as np

from .alea_prng import AleaPRNG

# Amplitude of per-cell jitter; values are uniform in [-JITTER, JITTER]
JITTER = 1.5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class NoiseField:
    """Width x height matrix of real values, indexed ``values[y, x]``."""

    def __init__(self, values: np.ndarray):
        self.values = values

    @property
    def width(self) -> int:
        return self.values.shape[1]

    @property
    def height(self) -> int:
        return self.values.shape[0]

    @classmethod
    def generate(cls, width: int, height: int, prng: AleaPRNG) -> "NoiseField":
        """
        Build a field of summed sinusoids plus jitter.

        Jitter is drawn row by row so a given seed always produces the same
        field for the same dimensions.
        """
        xs = np.arange(width, dtype=np.float64)
        ys = np.arange(height, dtype=np.float64)

        wave_x = np.sin(xs * 0.3) * 2 + np.sin(xs * 0.7) * 1.5
        wave_y = np.sin(ys * 0.25) * 2 + np.sin(ys * 0.6) * 1.5

        jitter = np.array(
            [[prng.uniform(-JITTER, JITTER) for _ in range(width)] for _ in range(height)],
            dtype=np.float64,
        )

        return cls(wave_y[:, np.newaxis] + wave_x[np.newaxis, :] + jitter)

    def carve_bay(
        self, center: Tuple[float, float], half_land: float, prng: AleaPRNG
    ) -> int:
        """
        Lower the field along a path from the mainland edge toward ``center``.

        Picks a random angle, starts ``half_land`` away from the centre and
        walks 4-11 steps inward with a little wobble. At each step every cell
        within the bay width loses ``(length - step) * 0.8 - distance``
        (never negative), so the cut is deepest near the mouth.

        Returns:
            Number of steps taken
        """
        center_x, center_y = center
        angle = prng.random() * math.pi * 2
        x = center_x + math.cos(angle) * half_land
        y = center_y + math.sin(angle) * half_land

        if half_land > 0:
            dir_x = (center_x - x) / half_land
            dir_y = (center_y - y) / half_land
        else:
            dir_x = dir_y = 0.0

        length = 4 + prng.randint(8)
        bay_width = 2 + prng.randint(3)

        for step in range(length):
            for dy in range(-bay_width, bay_width + 1):
                for dx in range(-bay_width, bay_width + 1):
                    nx = _round_half_up(x + dx)
                    ny = _round_half_up(y + dy)
                    if 0 <= nx < self.width and 0 <= ny < self.height:
                        reduction = max(0.0, (length - step) * 0.8 - math.hypot(dx, dy))
                        self.values[ny, nx] -= reduction

            x += dir_x * 1.5 + prng.uniform(-0.4, 0.4)
            y += dir_y * 1.5 + prng.uniform(-0.4, 0.4)

        return length
