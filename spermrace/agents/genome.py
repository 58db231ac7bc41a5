"""Genome contracts for evolutionary operators."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

MIN_SPEED = 0.5
MIN_AGILITY = 0.1


class Genome(ABC):
    """Abstract genome representation used by the generation manager.

    Implementations must preserve deterministic semantics for mutation under
    controlled randomness.
    """

    @abstractmethod
    def mutate(self, rate: float, rng: random.Random) -> "Genome":
        """Create a mutated genome derived from this genome.

        Args:
            rate (float): Half-width of the uniform mutation applied per trait.
            rng (random.Random): Source of the mutation draws.

        Returns:
            Genome: A mutated genome instance.

        Invariants:
            - Must not mutate the original genome instance in place.
            - Behavior should be deterministic given equivalent RNG state.
        """

    @abstractmethod
    def distance(self, other: "Genome") -> float:
        """Measure distance between this genome and ``other``.

        Invariants:
            - Distance must be deterministic for equivalent inputs.
            - Distance must be non-negative.
        """


@dataclass(frozen=True)
class RaceGenome(Genome):
    """Speed and agility traits of one racer.

    ``speed`` is the upward velocity per frame, ``agility`` the half-width of
    the lateral wiggle. Both are floored so a lineage can never stall.
    """

    speed: float
    agility: float

    @classmethod
    def clamped(cls, speed: float, agility: float) -> "RaceGenome":
        return cls(speed=max(MIN_SPEED, float(speed)), agility=max(MIN_AGILITY, float(agility)))

    def mutate(self, rate: float, rng: random.Random) -> "RaceGenome":
        """Shift each trait by ``U(-rate, +rate)`` and clamp to its floor."""
        return RaceGenome.clamped(
            speed=self.speed + rng.uniform(-rate, rate),
            agility=self.agility + rng.uniform(-rate, rate),
        )

    def distance(self, other: Genome) -> float:
        if not isinstance(other, RaceGenome):
            raise TypeError("RaceGenome distance requires another RaceGenome.")
        return math.hypot(self.speed - other.speed, self.agility - other.agility)

    def summary(self) -> dict[str, float]:
        return {"speed": self.speed, "agility": self.agility}
