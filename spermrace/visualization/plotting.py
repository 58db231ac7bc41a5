"""Plot utilities for evolutionary race history."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from spermrace.evolution.generation import GenerationRecord


def plot_gene_pool_history(history: Sequence[GenerationRecord], output_path: str | Path) -> Path:
    """Render winner trait averages and success per generation to an image."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    generations = [record.generation for record in history]
    avg_speed = [record.avg_speed for record in history]
    avg_agility = [record.avg_agility for record in history]
    success = [record.winners / record.targets if record.targets else 0.0 for record in history]

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(8, 6), sharex=True)
    ax1.plot(generations, avg_speed, label="avg_speed")
    ax1.plot(generations, avg_agility, label="avg_agility")
    ax1.set_ylabel("winner genes")
    ax1.legend()

    ax2.plot(generations, success, label="success_rate", color="tab:green")
    ax2.set_ylim(0.0, 1.05)
    ax2.set_ylabel("eggs fertilized")
    ax2.set_xlabel("generation")
    ax2.legend()

    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)
    return output
