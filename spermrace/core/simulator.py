"""Frame-stepped simulator that drives one race variant plugin."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from spermrace.core.config_loader import load_config, validate_config
from spermrace.core.deterministic_rng import DeterministicRNG
from spermrace.core.plugin_registry import get_simulation_class
from spermrace.core.render_state import RenderState
from spermrace.core.state import SimulationState

LOGGER = logging.getLogger(__name__)


class SimulatorRuntimeError(RuntimeError):
    """Raised when a simulation plugin fails during execution."""


class Simulator:
    """Owns the variant plugin and its RNG; the caller owns the frame loop.

    A rendering loop calls ``step`` once per animation frame and reads
    ``render_state``; headless callers use ``run``.
    """

    def __init__(self, config: str | Path | Mapping[str, Any], strict: bool = True) -> None:
        if isinstance(config, Mapping):
            normalized = validate_config(config, strict=strict)
        else:
            normalized = load_config(config, strict=strict)
        self.config = normalized

        self.simulation_name = str(normalized["simulation"])
        self.simulation_config = dict(normalized["simulation_config"])
        self.run_config = dict(normalized["run_config"])
        self.logging_config = dict(normalized["logging_config"])

        self.seed = int(normalized["seed"])
        self.rng = DeterministicRNG(self.seed)
        self.max_frames = int(self.run_config["max_frames"])
        self.log_interval = int(self.logging_config["log_interval"])
        self.frame_count = 0

        simulation_class = get_simulation_class(self.simulation_name)
        try:
            self.sim = simulation_class(params=self.simulation_config, rng=self.rng)
            self.sim.reset()
        except Exception as exc:
            raise SimulatorRuntimeError(
                f"Failed to initialize simulation plugin '{self.simulation_name}': {exc}"
            ) from exc
        LOGGER.info("Simulator ready: %s (seed %d)", self.simulation_name, self.seed)

    @property
    def state(self) -> SimulationState:
        return self.sim.state

    def step(self) -> dict[str, float]:
        """Advance one frame and return the plugin's metrics."""
        try:
            self.sim.step()
            metrics = self.sim.get_metrics()
        except Exception as exc:
            raise SimulatorRuntimeError(
                f"Simulation plugin '{self.simulation_name}' crashed on frame {self.frame_count + 1}: {exc}"
            ) from exc
        self.frame_count += 1
        if self.log_interval > 0 and self.frame_count % self.log_interval == 0:
            LOGGER.debug("Frame %d: %s", self.frame_count, metrics)
        return metrics

    def run(self, frames: int | None = None) -> list[dict[str, float]]:
        """Step up to ``frames`` frames (default ``run.max_frames``).

        Stops early once the plugin is settled, i.e. waiting for a click.
        """
        budget = self.max_frames if frames is None else int(frames)
        if budget < 0:
            raise ValueError("frames must be non-negative")

        metrics: list[dict[str, float]] = []
        for _ in range(budget):
            if self.sim.is_settled():
                break
            metrics.append(self.step())
        return metrics

    def click(self) -> bool:
        """Forward the user's restart trigger to the plugin."""
        accepted = self.sim.click()
        if not accepted:
            LOGGER.debug("Click ignored in phase %s", self.state.phase.value)
        return accepted

    def set_immune_strength(self, value: float) -> None:
        """Forward the immune-strength control; variants without it ignore it."""
        if hasattr(self.sim, "set_immune_strength"):
            self.sim.set_immune_strength(value)  # type: ignore[attr-defined]
        else:
            LOGGER.debug("Simulation '%s' has no immune control", self.simulation_name)

    def render_state(self) -> RenderState:
        return self.sim.get_render_state()

    def close(self) -> None:
        try:
            self.sim.close()
        except Exception as exc:
            raise SimulatorRuntimeError(
                f"Simulation plugin '{self.simulation_name}' failed during close: {exc}"
            ) from exc
