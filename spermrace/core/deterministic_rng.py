"""Deterministic RNG container with a smooth 1-D noise field."""

from __future__ import annotations

import hashlib
import math
import random
from dataclasses import dataclass

import numpy as np

NOISE_SIZE = 4096
NOISE_OCTAVES = 4
NOISE_FALLOFF = 0.5
_NOISE_MASK = NOISE_SIZE - 1


@dataclass
class DeterministicRNG:
    """Owns deterministic RNG streams without touching global random state.

    Uniform draws come from ``python_rng``; the noise lattice is filled once
    from ``numpy_rng`` so agent wiggle stays reproducible for a given seed.
    """

    seed: int

    def __post_init__(self) -> None:
        self.python_rng = random.Random(self.seed)
        self.numpy_rng = np.random.default_rng(self.seed)
        self._lattice: list[float] = self.numpy_rng.random(NOISE_SIZE).tolist()
        self._streams: dict[str, random.Random] = {}

    def stream(self, name: str) -> random.Random:
        """Return independent deterministic stream by name."""
        if name not in self._streams:
            # Use stable cross-process seed derivation instead of built-in hash().
            digest = hashlib.sha256(f"{self.seed}:{name}".encode("utf-8")).digest()
            derived_seed = int.from_bytes(digest[:8], byteorder="big", signed=False) & 0xFFFFFFFF
            self._streams[name] = random.Random(derived_seed)
        return self._streams[name]

    def random(self) -> float:
        """Uniform draw in [0, 1)."""
        return self.python_rng.random()

    def uniform(self, low: float, high: float) -> float:
        return self.python_rng.uniform(low, high)

    def randint(self, low: int, high: int) -> int:
        """Inclusive integer draw."""
        return self.python_rng.randint(low, high)

    def noise(self, x: float) -> float:
        """Sample the smooth noise field at ``x``.

        Octaves of cosine-interpolated lattice values, halving amplitude per
        octave. Nearby inputs give nearby outputs, so an offset that advances a
        little each frame produces a continuous wiggle. Result is in [0, 1).
        """
        if x < 0:
            x = -x
        xi = int(x)
        xf = x - xi
        result = 0.0
        amplitude = 0.5
        for _ in range(NOISE_OCTAVES):
            weight = 0.5 * (1.0 - math.cos(xf * math.pi))
            low = self._lattice[xi & _NOISE_MASK]
            high = self._lattice[(xi + 1) & _NOISE_MASK]
            result += (low + weight * (high - low)) * amplitude
            amplitude *= NOISE_FALLOFF
            xi <<= 1
            xf *= 2.0
            if xf >= 1.0:
                xi += 1
                xf -= 1.0
        return result
