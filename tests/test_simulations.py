"""Tests for the race variant plugins driven through the simulator."""

from __future__ import annotations

import dataclasses
from typing import Any

import pytest

from spermrace.core.plugin_registry import (
    SimulationPluginNotFoundError,
    discover_simulations,
    get_simulation_class,
)
from spermrace.core.simulator import Simulator
from spermrace.core.state import GenePool, RacePhase
from spermrace.engine.outcome import OutcomeType
from spermrace.engine.race import Capture, PopulationLost


def _config(simulation: str, params: dict[str, Any], seed: int = 1, max_frames: int = 100) -> dict[str, Any]:
    return {
        "simulation": simulation,
        "params": params,
        "run": {"random_seed": seed, "max_frames": max_frames},
        "logging": {"level": "INFO", "log_interval": 0},
    }


def _park(agent, x: float, y: float) -> None:
    agent.x, agent.y = x, y
    agent.vx = agent.vy = 0.0
    agent.wiggle_amplitude = 0.0


def test_plugin_discovery_finds_all_variants() -> None:
    assert set(discover_simulations()) == {"classic_race", "chance_of_life", "evo_race"}
    with pytest.raises(SimulationPluginNotFoundError, match="Available simulations"):
        get_simulation_class("tortoise_race")


def test_full_immunity_loses_population_on_first_tick() -> None:
    simulator = Simulator(_config("chance_of_life", {"immune_strength": 100, "restart_delay": 3}))
    state = simulator.state
    assert state.agents and all(not agent.alive for agent in state.agents)

    simulator.step()

    assert state.phase == RacePhase.FINISHED
    assert state.frame_index == 1
    assert state.race_outcome == PopulationLost()
    assert state.outcome == "populationLost"
    assert state.outcome_type == OutcomeType.POPULATION_LOST
    assert not simulator.click()

    for _ in range(3):
        simulator.step()
    assert state.attempt_count == 2
    assert state.phase == RacePhase.RACING


def test_other_winner_triggers_auto_restart() -> None:
    simulator = Simulator(_config("chance_of_life", {"immune_strength": 0, "restart_delay": 5}))
    sim = simulator.sim
    sim.start_new_attempt(population=2)
    state = simulator.state
    other, you = state.agents
    target = state.targets[0]
    _park(other, target.x, target.y)
    _park(you, 0.0, 590.0)
    attempts = state.attempt_count

    simulator.step()

    assert state.phase == RacePhase.FINISHED
    assert state.birth_outcome is None
    assert state.outcome == "none"
    assert state.result_text.startswith("Another sperm won.")
    assert not sim.is_settled()

    for _ in range(5):
        simulator.step()
    assert state.attempt_count == attempts + 1


def test_self_win_rolls_outcome_and_click_resets_attempts() -> None:
    simulator = Simulator(_config("chance_of_life", {"immune_strength": 0}))
    sim = simulator.sim
    sim.start_new_attempt(population=1)
    state = simulator.state
    (you,) = state.agents
    assert you.is_self
    _park(you, state.targets[0].x, state.targets[0].y)
    assert not simulator.click()

    simulator.step()

    assert sim.is_settled()
    assert state.birth_outcome is not None
    assert state.outcome == state.birth_outcome.value
    assert state.result_text.startswith("The 'YOU' sperm won!")
    assert state.attempt_count == 2

    # Nothing moves while waiting on the success screen.
    assert simulator.run(frames=50) == []

    assert simulator.click()
    assert state.attempt_count == 1
    assert state.phase == RacePhase.RACING


def test_immune_strength_is_clamped_and_sampled_per_attempt() -> None:
    simulator = Simulator(_config("chance_of_life", {"immune_strength": 0}))
    simulator.set_immune_strength(150)
    assert simulator.sim.immune_strength == 100
    assert simulator.state.environment["immune_strength"] == 0

    simulator.sim.start_new_attempt()
    assert simulator.state.environment["immune_strength"] == 100
    simulator.set_immune_strength(-5)
    assert simulator.sim.immune_strength == 0


def test_reversed_population_bounds_are_sorted() -> None:
    simulator = Simulator(_config("chance_of_life", {"min_population": 10, "max_population": 3}))

    assert 3 <= simulator.state.environment["population"] <= 10
    assert len(simulator.state.agents) == simulator.state.environment["population"]


def test_classic_race_runs_until_settled_and_click_restarts() -> None:
    simulator = Simulator(_config("classic_race", {"cohort_size": 5}, max_frames=2000))
    state = simulator.state
    assert [agent.is_self for agent in state.agents] == [False, False, False, False, True]

    simulator.run()

    assert state.phase == RacePhase.FINISHED
    assert state.race_outcome is not None
    assert simulator.sim.is_settled()
    assert simulator.click()
    assert state.attempt_count == 2
    assert len(state.agents) == 5


def test_classic_race_with_empty_cohort_is_lost_immediately() -> None:
    simulator = Simulator(_config("classic_race", {"cohort_size": 0}))
    simulator.step()
    assert simulator.state.race_outcome == PopulationLost()


def test_evo_race_generation_cycle() -> None:
    simulator = Simulator(_config("evo_race", {"cohort_size": 20, "num_targets": 2, "reset_delay": 2}))
    state = simulator.state
    assert state.generation_count == 1
    assert len(state.targets) == 2
    first, second = state.agents[0], state.agents[1]
    _park(first, state.targets[0].x, state.targets[0].y)
    _park(second, state.targets[1].x, state.targets[1].y)
    expected = GenePool(
        speed=(first.genome.speed + second.genome.speed) / 2,
        agility=(first.genome.agility + second.genome.agility) / 2,
    )

    simulator.step()

    assert state.phase == RacePhase.FINISHED
    assert [agent.agent_id for agent in state.winners] == [0, 1]
    history = simulator.sim.history
    assert len(history) == 1
    assert history[0].winners == 2

    simulator.step()
    simulator.step()

    assert state.generation_count == 2
    assert state.gene_pool == expected
    assert state.phase == RacePhase.RACING
    assert len(state.agents) == 20
    assert not any(target.fertilized for target in state.targets)


def test_evo_race_never_settles_and_ignores_clicks() -> None:
    simulator = Simulator(_config("evo_race", {"cohort_size": 10, "reset_delay": 1}))

    metrics = simulator.run(frames=400)

    assert len(metrics) == 400
    assert not simulator.click()
    assert simulator.state.generation_count >= 2
    assert metrics[-1]["generation_count"] == float(simulator.state.generation_count)


def test_render_state_snapshot() -> None:
    simulator = Simulator(_config("evo_race", {"cohort_size": 6}))
    simulator.step()

    frame = simulator.render_state()

    assert len(frame.agents) == 6
    assert len(frame.targets) == 2
    assert frame.gene_pool == {"speed": 3.0, "agility": 1.5}
    assert frame.generation_count == 1
    assert frame.bounds == (600.0, 600.0)
    assert frame.agents[0].genome_summary.keys() == {"speed", "agility"}
    with pytest.raises(dataclasses.FrozenInstanceError):
        frame.phase = "finished"  # type: ignore[misc]

    classic = Simulator(_config("classic_race", {"cohort_size": 3}))
    classic_frame = classic.render_state()
    assert classic_frame.gene_pool is None
    assert [agent.color_class for agent in classic_frame.agents] == ["other", "other", "self"]
    assert classic_frame.outcome_type == "none"


def test_evo_race_with_some_eggs_left_keeps_the_capture() -> None:
    simulator = Simulator(_config("evo_race", {"cohort_size": 3, "num_targets": 2}))
    state = simulator.state
    winner, *others = state.agents
    _park(winner, state.targets[0].x, state.targets[0].y)
    for agent in others:
        agent.alive = False

    simulator.step()

    assert state.phase == RacePhase.FINISHED
    assert [agent.agent_id for agent in state.winners] == [0]
    assert state.race_outcome == Capture(target_id=0, agent_id=0)
    assert state.outcome_type == OutcomeType.NONE
    assert state.outcome == "none"
    assert simulator.sim.history[0].winners == 1


def test_evo_race_without_targets_degrades_to_population_lost() -> None:
    simulator = Simulator(_config("evo_race", {"cohort_size": 5, "num_targets": -1, "reset_delay": 1}))
    assert simulator.state.targets == []

    simulator.step()

    assert simulator.state.race_outcome == PopulationLost()
    assert simulator.state.outcome == "populationLost"
    simulator.step()
    assert simulator.state.generation_count == 2
