"""Evolutionary race: winners' genes seed the next generation."""

from __future__ import annotations

import logging
from typing import Any

from spermrace.core.deterministic_rng import DeterministicRNG
from spermrace.core.state import BASELINE_GENE_POOL, RacePhase
from spermrace.engine.outcome import OutcomeType
from spermrace.engine.race import Capture, EndPolicy, PopulationLost, RaceEngine
from spermrace.evolution.generation import GenerationManager, GenerationRecord
from spermrace.simulations.base_simulation import Simulation

LOGGER = logging.getLogger(__name__)


class EvoRaceSimulation(Simulation):
    """Several eggs per race; each race is one generation.

    A generation ends once every egg is fertilized or nobody can reach one any
    more. After ``reset_delay`` frames the winners' mean genome becomes the
    gene pool for the next cohort.
    """

    def __init__(self, params: dict[str, Any], rng: DeterministicRNG) -> None:
        super().__init__(params=params, rng=rng)
        self.cohort_size = int(params["cohort_size"])
        self.num_targets = int(params.get("num_targets", 2))
        self.target_size = float(params.get("target_size", 35.0))
        self.mutation_rate = float(params.get("mutation_rate", 0.3))
        self.reset_delay = int(params.get("reset_delay", 120))
        self.engine = RaceEngine(self.arena, rng, EndPolicy.ALL_TARGETS)
        self.manager = GenerationManager(rng, self.arena, noise_step=float(params.get("noise_step", 0.1)))
        self.history: list[GenerationRecord] = []

    def reset(self) -> None:
        self.history = []
        state = self.state
        state.gene_pool = BASELINE_GENE_POOL
        state.generation_count = 1
        agents = self.manager.spawn(state.gene_pool, self.mutation_rate, self.cohort_size)
        state.begin_race(agents, self.arena.spaced_targets(self.num_targets, self.target_size))
        LOGGER.info(
            "Gen: 1 | Success: N/A | Avg Speed: %.2f | Avg Agility: %.2f",
            state.gene_pool.speed,
            state.gene_pool.agility,
        )

    def step(self) -> None:
        state = self.state
        if state.phase == RacePhase.FINISHED:
            state.restart_timer -= 1
            if state.restart_timer <= 0:
                self.manager.advance(state, self.mutation_rate, self.cohort_size)
            return

        result = self.engine.tick(state.agents, state.targets)
        state.frame_index += 1
        for capture in result.captures:
            state.winners.append(state.agent(capture.agent_id))
        if not result.finished:
            return

        state.phase = RacePhase.FINISHED
        if state.winners:
            state.race_outcome = self.first_capture()
        else:
            state.race_outcome = PopulationLost()
            state.outcome_type = OutcomeType.POPULATION_LOST
        state.restart_timer = self.reset_delay
        record = self.manager.record(state)
        self.history.append(record)
        LOGGER.info(
            "Generation %d finished | Success: %d/%d | Winner Avg Speed: %.2f | Winner Avg Agility: %.2f",
            record.generation,
            record.winners,
            record.targets,
            record.avg_speed,
            record.avg_agility,
        )

    def first_capture(self) -> Capture:
        """Capture made by the generation's first winner."""
        winner_id = self.state.winners[0].agent_id
        target = next(target for target in self.state.targets if target.captured_by == winner_id)
        return Capture(target_id=target.target_id, agent_id=winner_id)

    def get_metrics(self) -> dict[str, float]:
        state = self.state
        pool = state.gene_pool or BASELINE_GENE_POOL
        return {
            "frame_index": float(state.frame_index),
            "generation_count": float(state.generation_count),
            "winners": float(len(state.winners)),
            "avg_speed": float(pool.speed),
            "avg_agility": float(pool.agility),
            "racers_in_race": float(sum(1 for agent in state.agents if agent.eligible)),
        }


SIMULATION_NAME = "evo_race"
SimulationClass = EvoRaceSimulation
