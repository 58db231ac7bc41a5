"""Immutable render-state contracts for the drawing layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from spermrace.core.state import SimulationState
from spermrace.environment.arena import Arena

FRAMES_PER_SECOND = 60


@dataclass(frozen=True)
class AgentState:
    """Drawable snapshot of one agent."""

    id: int
    position: tuple[float, float]
    velocity: tuple[float, float]
    color_class: str
    alive: bool = True
    off_screen: bool = False
    has_won: bool = False
    is_self: bool = False
    genome_summary: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class TargetState:
    id: int
    position: tuple[float, float]
    capture_radius: float
    fertilized: bool
    captured_by: int | None


@dataclass(frozen=True)
class RenderState:
    """Top-level immutable frame handed to the renderer."""

    phase: str
    frame_index: int
    attempt_count: int
    generation_count: int
    outcome: str
    outcome_type: str
    result_text: str
    restart_countdown: int
    bounds: tuple[float, float]
    agents: list[AgentState]
    targets: list[TargetState]
    gene_pool: dict[str, float] | None
    environment: dict[str, Any]
    metrics: dict[str, float]


def build_render_state(state: SimulationState, arena: Arena, metrics: dict[str, float]) -> RenderState:
    """Snapshot ``state`` for drawing; the snapshot shares no mutable records."""
    agents = [
        AgentState(
            id=agent.agent_id,
            position=agent.position,
            velocity=agent.velocity,
            color_class=agent.color_class,
            alive=agent.alive,
            off_screen=agent.off_screen,
            has_won=agent.has_won,
            is_self=agent.is_self,
            genome_summary=agent.genome.summary() if agent.genome is not None else {},
        )
        for agent in state.agents
    ]
    targets = [
        TargetState(
            id=target.target_id,
            position=target.position,
            capture_radius=target.capture_radius,
            fertilized=target.fertilized,
            captured_by=target.captured_by,
        )
        for target in state.targets
    ]
    gene_pool = None
    if state.gene_pool is not None:
        gene_pool = {"speed": state.gene_pool.speed, "agility": state.gene_pool.agility}
    return RenderState(
        phase=state.phase.value,
        frame_index=state.frame_index,
        attempt_count=state.attempt_count,
        generation_count=state.generation_count,
        outcome=state.outcome,
        outcome_type=state.outcome_type.value,
        result_text=state.result_text,
        # Whole seconds left, as shown on the results screen.
        restart_countdown=math.ceil(state.restart_timer / FRAMES_PER_SECOND),
        bounds=(arena.width, arena.height),
        agents=agents,
        targets=targets,
        gene_pool=gene_pool,
        environment=dict(state.environment),
        metrics=dict(metrics),
    )
