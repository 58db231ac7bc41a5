"""Command-line entry points for running races and rolling outcomes."""

from __future__ import annotations

import argparse
import logging
from collections import Counter

from spermrace.core.config_loader import load_config
from spermrace.core.deterministic_rng import DeterministicRNG
from spermrace.core.simulator import Simulator
from spermrace.engine.outcome import BirthOutcome, roll


def _summary_lines(simulator: Simulator) -> list[str]:
    state = simulator.state
    lines = [
        f"simulation: {simulator.simulation_name}",
        f"frames: {simulator.frame_count}",
        f"phase: {state.phase.value}",
    ]
    history = getattr(simulator.sim, "history", None)
    if history is not None:
        lines.append(f"generation: {state.generation_count}")
        if state.gene_pool is not None:
            lines.append(f"gene_pool: speed={state.gene_pool.speed:.2f} agility={state.gene_pool.agility:.2f}")
        for record in history:
            lines.append(
                f"gen {record.generation}: {record.winners}/{record.targets} "
                f"speed={record.avg_speed:.2f} agility={record.avg_agility:.2f} diversity={record.diversity:.3f}"
            )
        return lines

    lines.append(f"attempts: {state.attempt_count}")
    lines.append(f"outcome: {state.outcome}")
    if state.result_text:
        lines.append(state.result_text)
    return lines


def _run(args: argparse.Namespace) -> int:
    level = args.log_level or load_config(args.config)["logging_config"]["level"]
    logging.getLogger().setLevel(level.upper())
    simulator = Simulator(args.config)
    try:
        if args.immune is not None:
            simulator.set_immune_strength(args.immune)
        simulator.run(args.frames)
        for line in _summary_lines(simulator):
            print(line)

        if args.plot:
            history = getattr(simulator.sim, "history", None)
            if history is None:
                raise SystemExit(f"--plot needs a simulation with generation history, not '{simulator.simulation_name}'")
            from spermrace.visualization.plotting import plot_gene_pool_history

            print(plot_gene_pool_history(history, args.plot))
    finally:
        simulator.close()
    return 0


def _roll(args: argparse.Namespace) -> int:
    rng = DeterministicRNG(args.seed).stream("outcome")
    tally = Counter(roll(rng.random()) for _ in range(args.count))
    for outcome in BirthOutcome:
        print(f"{outcome.value}: {tally[outcome]}")
    return 0


def run_cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="spermrace")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="run a race variant headless")
    run_cmd.add_argument("--config", default="configs/evo_race.yaml")
    run_cmd.add_argument("--frames", type=int, default=None, help="frame budget (default: run.max_frames)")
    run_cmd.add_argument("--immune", type=float, default=None, help="immune strength 0-100 for chance_of_life")
    run_cmd.add_argument("--plot", default=None, help="write evo_race gene-pool chart to this path")
    run_cmd.add_argument("--log-level", default=None)

    roll_cmd = sub.add_parser("roll", help="tally birth outcomes for uniform draws")
    roll_cmd.add_argument("--count", type=int, default=10000)
    roll_cmd.add_argument("--seed", type=int, default=0)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command == "run":
        return _run(args)
    if args.command == "roll":
        return _roll(args)
    return 1


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
