"""Arena geometry: bounds, spawn line and egg layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from spermrace.agents.models import Target
from spermrace.core.deterministic_rng import DeterministicRNG


@dataclass(frozen=True)
class Arena:
    """Rectangular race area.

    Agents spawn on a horizontal line ``spawn_offset`` above the bottom edge and
    swim upward towards eggs placed at ``target_y``. An agent further than
    ``margin`` outside any edge is off-screen.
    """

    width: float = 600.0
    height: float = 600.0
    margin: float = 20.0
    spawn_offset: float = 20.0
    target_y: float = 80.0

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "Arena":
        return cls(
            width=float(params.get("width", 600.0)),
            height=float(params.get("height", 600.0)),
            margin=float(params.get("margin", 20.0)),
            spawn_offset=float(params.get("spawn_offset", 20.0)),
            target_y=float(params.get("target_y", 80.0)),
        )

    def contains(self, x: float, y: float) -> bool:
        return (
            -self.margin <= x <= self.width + self.margin
            and -self.margin <= y <= self.height + self.margin
        )

    def spawn_point(self, rng: DeterministicRNG) -> tuple[float, float]:
        return (rng.uniform(0.0, self.width), self.height - self.spawn_offset)

    def centered_target(self, capture_radius: float) -> Target:
        return Target(target_id=0, x=self.width / 2.0, y=self.target_y, capture_radius=capture_radius)

    def spaced_targets(self, count: int, capture_radius: float) -> list[Target]:
        """Place ``count`` eggs evenly across the width, left to right."""
        count = max(0, count)
        spacing = self.width / (count + 1)
        return [
            Target(target_id=index, x=(index + 1) * spacing, y=self.target_y, capture_radius=capture_radius)
            for index in range(count)
        ]
