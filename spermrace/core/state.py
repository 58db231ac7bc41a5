"""Explicit simulation state owned by the caller."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from spermrace.agents.models import Agent, Target
from spermrace.engine.outcome import BirthOutcome, OutcomeType
from spermrace.engine.race import RaceOutcome


class RacePhase(str, enum.Enum):
    RACING = "racing"
    FINISHED = "finished"


@dataclass(frozen=True)
class GenePool:
    """Mean traits the next cohort is drawn from."""

    speed: float
    agility: float


BASELINE_GENE_POOL = GenePool(speed=3.0, agility=1.5)


@dataclass
class SimulationState:
    """Everything a variant mutates between frames.

    ``outcome`` is written once when a race finishes and cleared when the next
    race starts. ``winners`` collects capturing agents in capture order.
    """

    agents: list[Agent] = field(default_factory=list)
    targets: list[Target] = field(default_factory=list)
    phase: RacePhase = RacePhase.RACING
    frame_index: int = 0
    attempt_count: int = 0
    generation_count: int = 0
    race_outcome: RaceOutcome | None = None
    birth_outcome: BirthOutcome | None = None
    outcome_type: OutcomeType = OutcomeType.NONE
    result_text: str = ""
    restart_timer: int = 0
    winners: list[Agent] = field(default_factory=list)
    gene_pool: GenePool | None = None
    environment: dict[str, Any] = field(default_factory=dict)

    @property
    def outcome(self) -> str:
        """Race-level outcome label: a birth type, ``populationLost`` or ``none``."""
        if self.birth_outcome is not None:
            return self.birth_outcome.value
        if self.outcome_type == OutcomeType.POPULATION_LOST:
            return OutcomeType.POPULATION_LOST.value
        return OutcomeType.NONE.value

    def begin_race(self, agents: list[Agent], targets: list[Target]) -> None:
        """Install a fresh cohort and clear the previous race's results."""
        self.agents = agents
        self.targets = targets
        self.phase = RacePhase.RACING
        self.frame_index = 0
        self.race_outcome = None
        self.birth_outcome = None
        self.outcome_type = OutcomeType.NONE
        self.result_text = ""
        self.restart_timer = 0
        self.winners = []

    def agent(self, agent_id: int) -> Agent:
        for agent in self.agents:
            if agent.agent_id == agent_id:
                return agent
        raise KeyError(f"Unknown agent id: {agent_id}")
