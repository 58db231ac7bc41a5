"""Single race of a large fixed cohort to one egg."""

from __future__ import annotations

import logging
from typing import Any

from spermrace.core.deterministic_rng import DeterministicRNG
from spermrace.core.state import RacePhase
from spermrace.engine.race import EndPolicy, RaceEngine
from spermrace.simulations.base_simulation import Simulation, cohort_roles

LOGGER = logging.getLogger(__name__)


class ClassicRaceSimulation(Simulation):
    """Thousands of racers, one of them "you", one egg; click to race again."""

    def __init__(self, params: dict[str, Any], rng: DeterministicRNG) -> None:
        super().__init__(params=params, rng=rng)
        self.cohort_size = int(params.get("cohort_size", 2000))
        self.target_size = float(params.get("target_size", 50.0))
        self.min_speed = float(params.get("min_speed", 2.0))
        self.max_speed = float(params.get("max_speed", 4.0))
        self.wiggle_amplitude = float(params.get("wiggle_amplitude", 1.0))
        self.noise_step = float(params.get("noise_step", 0.05))
        self.engine = RaceEngine(self.arena, rng, EndPolicy.FIRST_CAPTURE)

    def reset(self) -> None:
        self.state.attempt_count = 0
        self.start_race()

    def start_race(self) -> None:
        agents = [
            self.spawn_racer(
                agent_id=index,
                speed=self.rng.uniform(self.min_speed, self.max_speed),
                wiggle_amplitude=self.wiggle_amplitude,
                noise_step=self.noise_step,
                is_self=is_self,
            )
            for index, is_self in enumerate(cohort_roles(self.cohort_size))
        ]
        self.state.begin_race(agents, [self.arena.centered_target(self.target_size)])
        self.state.attempt_count += 1
        LOGGER.info("Race %d started with %d racers", self.state.attempt_count, len(agents))

    def step(self) -> None:
        if self.state.phase != RacePhase.RACING:
            return
        result = self.engine.tick(self.state.agents, self.state.targets)
        self.state.frame_index += 1
        if result.finished:
            self.conclude_race(result)
            LOGGER.info("Race %d finished: %s", self.state.attempt_count, self.state.result_text.replace("\n", " "))

    def click(self) -> bool:
        if self.state.phase != RacePhase.FINISHED:
            return False
        self.start_race()
        return True

    def is_settled(self) -> bool:
        return self.state.phase == RacePhase.FINISHED

    def get_metrics(self) -> dict[str, float]:
        return {
            "frame_index": float(self.state.frame_index),
            "racers_in_race": float(sum(1 for agent in self.state.agents if agent.eligible)),
            "attempt_count": float(self.state.attempt_count),
        }


SIMULATION_NAME = "classic_race"
SimulationClass = ClassicRaceSimulation
