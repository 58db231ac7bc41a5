"""Plain data records for racers and eggs."""

from __future__ import annotations

import math
from dataclasses import dataclass

from spermrace.agents.genome import RaceGenome


@dataclass
class Agent:
    """One race participant.

    ``alive`` is cleared only at spawn (immune culling), ``off_screen`` once the
    agent leaves the arena and ``has_won`` on capture. None of the three flags
    is ever reverted; a new cohort replaces the agent instead.
    """

    agent_id: int
    x: float
    y: float
    vx: float
    vy: float
    wiggle_amplitude: float = 1.0
    noise_offset: float = 0.0
    noise_step: float = 0.05
    is_self: bool = False
    alive: bool = True
    off_screen: bool = False
    has_won: bool = False
    genome: RaceGenome | None = None

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> tuple[float, float]:
        return (self.vx, self.vy)

    @property
    def in_race(self) -> bool:
        """Alive and still inside the arena."""
        return self.alive and not self.off_screen

    @property
    def eligible(self) -> bool:
        """Can still move and capture a target."""
        return self.in_race and not self.has_won

    @property
    def color_class(self) -> str:
        if not self.alive:
            return "culled"
        return "self" if self.is_self else "other"


@dataclass
class Target:
    """Fixed capture zone ("egg").

    ``capture_radius`` is the drawn size of the egg; an agent captures it when
    its distance to the center is strictly below half of that.
    """

    target_id: int
    x: float
    y: float
    capture_radius: float
    fertilized: bool = False
    captured_by: int | None = None

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def reaches(self, agent: Agent) -> bool:
        return math.hypot(agent.x - self.x, agent.y - self.y) < self.capture_radius / 2.0

    def try_capture(self, agent: Agent) -> bool:
        """Fertilize this target by ``agent`` if it is free and within reach."""
        if self.fertilized or not self.reaches(agent):
            return False
        self.fertilized = True
        self.captured_by = agent.agent_id
        agent.has_won = True
        return True

    def reset(self) -> None:
        self.fertilized = False
        self.captured_by = None
