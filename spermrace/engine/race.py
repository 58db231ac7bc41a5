"""Per-frame race advancement and capture detection."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence, Union

from spermrace.agents.models import Agent, Target
from spermrace.core.deterministic_rng import DeterministicRNG
from spermrace.environment.arena import Arena


class EndPolicy(str, enum.Enum):
    """When a race is over."""

    FIRST_CAPTURE = "first_capture"
    ALL_TARGETS = "all_targets"


@dataclass(frozen=True)
class Capture:
    """``agent_id`` fertilized ``target_id``."""

    target_id: int
    agent_id: int


@dataclass(frozen=True)
class PopulationLost:
    """No agent is left that could still capture a target."""


RaceOutcome = Union[Capture, PopulationLost]


@dataclass(frozen=True)
class TickResult:
    captures: tuple[Capture, ...]
    finished: bool
    population_lost: bool
    eligible: int

    @property
    def outcome(self) -> RaceOutcome | None:
        """Race outcome once finished: population lost, or this frame's first capture.

        ``None`` while racing, and also when an ``all_targets`` race ends on a
        frame without captures after eggs were fertilized earlier; the caller
        holds those captures.
        """
        if not self.finished:
            return None
        if self.population_lost:
            return PopulationLost()
        return self.captures[0] if self.captures else None


class RaceEngine:
    """Moves agents and resolves captures one frame at a time.

    The engine keeps no race state of its own; everything it changes lives on
    the ``Agent`` and ``Target`` records passed to ``tick``.

    Tie-break: captures are resolved in agent creation order, and each agent
    takes the first free target in list order it is within reach of. Only one
    agent can fertilize a given target because the flag is checked and set in
    the same sequential pass.
    """

    def __init__(self, arena: Arena, noise: DeterministicRNG, end_policy: EndPolicy) -> None:
        self.arena = arena
        self.noise = noise
        self.end_policy = EndPolicy(end_policy)

    def move(self, agent: Agent) -> None:
        if not agent.eligible:
            return
        amplitude = agent.wiggle_amplitude
        wiggle = -amplitude + 2.0 * amplitude * self.noise.noise(agent.noise_offset)
        agent.x += agent.vx + wiggle
        agent.y += agent.vy
        agent.noise_offset += agent.noise_step
        if not self.arena.contains(agent.x, agent.y):
            agent.off_screen = True

    def tick(self, agents: Sequence[Agent], targets: Sequence[Target]) -> TickResult:
        """Advance every agent one frame and report this frame's captures."""
        for agent in agents:
            self.move(agent)

        captures: list[Capture] = []
        for agent in agents:
            if not agent.eligible:
                continue
            for target in targets:
                if target.try_capture(agent):
                    captures.append(Capture(target_id=target.target_id, agent_id=agent.agent_id))
                    break
            if captures and self.end_policy == EndPolicy.FIRST_CAPTURE:
                break

        eligible = sum(1 for agent in agents if agent.eligible)
        if self.end_policy == EndPolicy.FIRST_CAPTURE:
            completed = bool(captures)
        else:
            completed = all(target.fertilized for target in targets)
        finished = completed or eligible == 0
        return TickResult(
            captures=tuple(captures),
            finished=finished,
            population_lost=finished and not any(target.fertilized for target in targets),
            eligible=eligible,
        )
