"""Base race variant plugin contract."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from spermrace.agents.models import Agent
from spermrace.core.deterministic_rng import DeterministicRNG
from spermrace.core.render_state import RenderState, build_render_state
from spermrace.core.state import RacePhase, SimulationState
from spermrace.engine.outcome import POPULATION_LOST_TEXT, OutcomeType, describe_result, roll
from spermrace.engine.race import PopulationLost, TickResult
from spermrace.environment.arena import Arena

LOGGER = logging.getLogger(__name__)


class Simulation(ABC):
    """Abstract race variant interface.

    All simulation state is instance-local and lives in ``self.state``. The
    simulator talks to variants only through this contract.
    """

    def __init__(self, params: dict[str, Any], rng: DeterministicRNG) -> None:
        """Store variant parameters and RNG.

        Args:
            params: Variant parameters, already validated against its schema.
            rng: Deterministic RNG owned by the simulator.
        """
        self.params = params
        self.rng = rng
        self.arena = Arena.from_params(params)
        self.state = SimulationState()

    @abstractmethod
    def reset(self) -> None:
        """Start from scratch: counters, cohort and targets."""

    @abstractmethod
    def step(self) -> None:
        """Advance the simulation by one frame."""

    @abstractmethod
    def get_metrics(self) -> dict[str, float]:
        """Return scalar metrics for logging."""

    def click(self) -> bool:
        """Handle the restart trigger. Returns whether it was accepted."""
        return False

    def is_settled(self) -> bool:
        """True when nothing changes until the user clicks."""
        return False

    def get_render_state(self) -> RenderState:
        return build_render_state(self.state, self.arena, self.get_metrics())

    def close(self) -> None:
        return None

    def conclude_race(self, result: TickResult) -> None:
        """Record the outcome of a finished single-egg race.

        The birth outcome is rolled once, and only when the "self" agent made
        the capture.
        """
        state = self.state
        state.phase = RacePhase.FINISHED
        outcome = result.outcome
        state.race_outcome = outcome
        if isinstance(outcome, PopulationLost) or outcome is None:
            state.outcome_type = OutcomeType.POPULATION_LOST
            state.result_text = POPULATION_LOST_TEXT
            return

        winner = state.agent(outcome.agent_id)
        state.winners.append(winner)
        if winner.is_self:
            state.birth_outcome = roll(self.rng.stream("outcome").random())
            state.outcome_type = state.birth_outcome.outcome_type
        state.result_text = describe_result(winner.is_self, state.birth_outcome)
        LOGGER.debug("Agent %d captured target %d", outcome.agent_id, outcome.target_id)

    def spawn_racer(self, agent_id: int, speed: float, wiggle_amplitude: float, noise_step: float, is_self: bool) -> Agent:
        """Create an agent on the spawn line heading straight up at ``speed``."""
        x, y = self.arena.spawn_point(self.rng)
        return Agent(
            agent_id=agent_id,
            x=x,
            y=y,
            vx=0.0,
            vy=-speed,
            wiggle_amplitude=wiggle_amplitude,
            noise_offset=self.rng.uniform(0.0, 1000.0),
            noise_step=noise_step,
            is_self=is_self,
        )


def cohort_roles(cohort_size: int) -> list[bool]:
    """``is_self`` flag per agent: everyone else first, the "self" agent last."""
    if cohort_size <= 0:
        return []
    return [False] * (cohort_size - 1) + [True]
