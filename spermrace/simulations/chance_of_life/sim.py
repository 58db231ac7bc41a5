"""Repeat randomized attempts until the "self" racer is born."""

from __future__ import annotations

import logging
from typing import Any

from spermrace.core.deterministic_rng import DeterministicRNG
from spermrace.core.state import RacePhase
from spermrace.engine.race import EndPolicy, RaceEngine
from spermrace.simulations.base_simulation import Simulation, cohort_roles

LOGGER = logging.getLogger(__name__)


def map_clamped(value: float, low: float, high: float, out_low: float, out_high: float) -> float:
    """Linearly map ``value`` from [low, high] onto [out_low, out_high], clamped."""
    if high == low:
        return out_low
    fraction = min(1.0, max(0.0, (value - low) / (high - low)))
    return out_low + fraction * (out_high - out_low)


class ChanceOfLifeSimulation(Simulation):
    """Attempts-counter loop.

    Every attempt draws new vigor, diversity, target size and population, and
    samples the immune-strength control. Failed attempts restart on their own
    after ``restart_delay`` frames; a win by the "self" agent waits for a click,
    which also resets the attempt counter.
    """

    def __init__(self, params: dict[str, Any], rng: DeterministicRNG) -> None:
        super().__init__(params=params, rng=rng)
        self.immune_strength = 0
        self.set_immune_strength(params.get("immune_strength", 30))
        self.restart_delay = int(params.get("restart_delay", 120))
        low, high = sorted((int(params.get("min_population", 1)), int(params.get("max_population", 500))))
        self.min_population = max(0, low)
        self.max_population = max(0, high)
        self.vigor_range = (float(params.get("min_vigor", 2.0)), float(params.get("max_vigor", 5.0)))
        self.diversity_range = (float(params.get("min_diversity", 0.1)), float(params.get("max_diversity", 2.0)))
        self.target_size_range = (
            float(params.get("min_target_size", 20.0)),
            float(params.get("max_target_size", 80.0)),
        )
        self.speed_floor = float(params.get("speed_floor", 0.5))
        self.engine = RaceEngine(self.arena, rng, EndPolicy.FIRST_CAPTURE)

    def set_immune_strength(self, value: float) -> None:
        """Update the control value; it takes effect at the next attempt."""
        self.immune_strength = int(min(100, max(0, round(float(value)))))

    def reset(self) -> None:
        self.state.attempt_count = 0
        self.start_new_attempt()

    def start_new_attempt(self, population: int | None = None) -> None:
        state = self.state
        state.attempt_count += 1

        vigor = self.rng.uniform(*self.vigor_range)
        diversity = self.rng.uniform(*self.diversity_range)
        target_size = self.rng.uniform(*self.target_size_range)
        immune_strength = self.immune_strength
        if population is None:
            population = self.rng.randint(self.min_population, self.max_population)
        state.environment = {
            "population": population,
            "immune_strength": immune_strength,
            "vigor": vigor,
            "diversity": diversity,
            "target_size": target_size,
        }
        LOGGER.info(
            "--- Attempt #%d --- Pop: %d, Immunity: %d%%, Vigor: %.1f, Diversity: %.1f, Target: %d",
            state.attempt_count,
            population,
            immune_strength,
            vigor,
            diversity,
            int(target_size),
        )

        min_speed = max(self.speed_floor, vigor - diversity)
        max_speed = vigor + diversity
        wiggle_amplitude = map_clamped(vigor, 2.0, 5.0, 1.0, 4.0)
        noise_step = map_clamped(vigor, 2.0, 5.0, 0.08, 0.15)
        agents = []
        for index, is_self in enumerate(cohort_roles(population)):
            agent = self.spawn_racer(
                agent_id=index,
                speed=self.rng.uniform(min_speed, max_speed),
                wiggle_amplitude=wiggle_amplitude,
                noise_step=noise_step,
                is_self=is_self,
            )
            if self.rng.uniform(0.0, 100.0) < immune_strength:
                agent.alive = False
            agents.append(agent)

        state.begin_race(agents, [self.arena.centered_target(target_size)])

    def self_was_born(self) -> bool:
        return self.state.phase == RacePhase.FINISHED and any(agent.is_self for agent in self.state.winners)

    def step(self) -> None:
        state = self.state
        if state.phase == RacePhase.FINISHED:
            if self.self_was_born():
                return
            state.restart_timer -= 1
            if state.restart_timer <= 0:
                self.start_new_attempt()
            return

        result = self.engine.tick(state.agents, state.targets)
        state.frame_index += 1
        if not result.finished:
            return

        self.conclude_race(result)
        if self.self_was_born():
            LOGGER.info("Result: SUCCESS! 'You' were born. Total attempts: %d", state.attempt_count)
            return
        if result.population_lost:
            LOGGER.info("Result: FAILED. Population lost.")
        else:
            LOGGER.info("Result: FAILED. Another sperm won.")
        state.restart_timer = self.restart_delay

    def click(self) -> bool:
        """Reset the attempt counter, accepted only on the success screen."""
        if not self.self_was_born():
            return False
        LOGGER.info("--- RESETTING SIMULATION ---")
        self.reset()
        return True

    def is_settled(self) -> bool:
        return self.self_was_born()

    def get_metrics(self) -> dict[str, float]:
        agents = self.state.agents
        return {
            "frame_index": float(self.state.frame_index),
            "attempt_count": float(self.state.attempt_count),
            "population": float(len(agents)),
            "culled": float(sum(1 for agent in agents if not agent.alive)),
            "racers_in_race": float(sum(1 for agent in agents if agent.eligible)),
        }


SIMULATION_NAME = "chance_of_life"
SimulationClass = ChanceOfLifeSimulation
