"""Truncation selection plus uniform mutation across race generations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from spermrace.agents.genome import RaceGenome
from spermrace.agents.models import Agent
from spermrace.core.deterministic_rng import DeterministicRNG
from spermrace.core.state import BASELINE_GENE_POOL, GenePool, SimulationState
from spermrace.environment.arena import Arena

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRecord:
    """Summary of one finished generation."""

    generation: int
    winners: int
    targets: int
    avg_speed: float
    avg_agility: float
    diversity: float


def aggregate_winners(winners: Sequence[Agent]) -> GenePool:
    """Average the winners' genomes, or fall back to the baseline pool."""
    genomes = [agent.genome for agent in winners if agent.genome is not None]
    if not genomes:
        return BASELINE_GENE_POOL
    return GenePool(
        speed=sum(genome.speed for genome in genomes) / len(genomes),
        agility=sum(genome.agility for genome in genomes) / len(genomes),
    )


def genome_diversity(agents: Sequence[Agent]) -> float:
    """Mean pairwise trait distance across a cohort."""
    genomes = [agent.genome for agent in agents if agent.genome is not None]
    if len(genomes) < 2:
        return 0.0
    traits = np.array([[genome.speed, genome.agility] for genome in genomes], dtype=float)
    deltas = traits[:, None, :] - traits[None, :, :]
    distances = np.sqrt((deltas**2).sum(axis=-1))
    upper = np.triu_indices(len(genomes), k=1)
    return float(distances[upper].mean())


class GenerationManager:
    """Builds each new cohort from the previous race's winners.

    Only capturers reproduce. There is no crossover; the next cohort is the
    winners' mean genome plus independent uniform noise per trait.
    """

    def __init__(self, rng: DeterministicRNG, arena: Arena, noise_step: float = 0.1) -> None:
        self.rng = rng
        self.arena = arena
        self.noise_step = float(noise_step)

    def spawn(self, gene_pool: GenePool, mutation_rate: float, cohort_size: int) -> list[Agent]:
        parent = RaceGenome(speed=gene_pool.speed, agility=gene_pool.agility)
        agents: list[Agent] = []
        for index in range(max(0, cohort_size)):
            x, y = self.arena.spawn_point(self.rng)
            genome = parent.mutate(mutation_rate, self.rng.python_rng)
            agents.append(
                Agent(
                    agent_id=index,
                    x=x,
                    y=y,
                    vx=0.0,
                    vy=-genome.speed,
                    wiggle_amplitude=genome.agility,
                    noise_offset=self.rng.uniform(0.0, 1000.0),
                    noise_step=self.noise_step,
                    genome=genome,
                )
            )
        return agents

    def next_cohort(
        self,
        previous_winners: Sequence[Agent],
        gene_pool: GenePool,
        mutation_rate: float,
        cohort_size: int,
    ) -> tuple[GenePool, list[Agent]]:
        """Return the new gene pool and a freshly spawned cohort drawn from it."""
        new_pool = aggregate_winners(previous_winners)
        if not previous_winners:
            LOGGER.info("No winners; gene pool reset to baseline")
        LOGGER.debug(
            "Gene pool drift: speed %+.3f agility %+.3f",
            new_pool.speed - gene_pool.speed,
            new_pool.agility - gene_pool.agility,
        )
        return new_pool, self.spawn(new_pool, mutation_rate, cohort_size)

    def advance(self, state: SimulationState, mutation_rate: float, cohort_size: int) -> SimulationState:
        """Replace the finished generation in ``state`` with the next one."""
        gene_pool, agents = self.next_cohort(
            previous_winners=state.winners,
            gene_pool=state.gene_pool or BASELINE_GENE_POOL,
            mutation_rate=mutation_rate,
            cohort_size=cohort_size,
        )
        for target in state.targets:
            target.reset()
        state.begin_race(agents, state.targets)
        state.gene_pool = gene_pool
        state.generation_count += 1
        LOGGER.info(
            "Gen: %d | Avg Speed: %.2f | Avg Agility: %.2f",
            state.generation_count,
            gene_pool.speed,
            gene_pool.agility,
        )
        return state

    def record(self, state: SimulationState) -> GenerationRecord:
        pool = aggregate_winners(state.winners)
        return GenerationRecord(
            generation=state.generation_count,
            winners=len(state.winners),
            targets=len(state.targets),
            avg_speed=pool.speed,
            avg_agility=pool.agility,
            diversity=genome_diversity(state.agents),
        )
