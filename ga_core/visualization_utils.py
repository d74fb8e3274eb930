"""
Visualization utilities for the GA core.

Plots the fitness history of a run from its generation records.
"""

from pathlib import Path
from typing import Tuple, Union

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .data_models import GenerationRecord


def plot_fitness_history(
    records: list[GenerationRecord],
    output_path: Union[str, Path],
    figsize: Tuple[int, int] = (10, 6),
    title: str = "Fitness by generation"
) -> Path:
    """
    Plot best, mean and worst fitness per generation and save as PNG.

    The mean curve is drawn with a one standard deviation band.

    Args:
        records: Generation records, in breeding order
        output_path: Path to save PNG file
        figsize: Figure size (width, height) in inches
        title: Plot title

    Returns:
        Path to saved plot

    Raises:
        ValueError: If there are no records to plot
    """
    if not records:
        raise ValueError("No generation records to plot")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    generations = [r.generation for r in records]
    best = [r.best_fitness for r in records]
    mean = [r.mean_fitness for r in records]
    worst = [r.worst_fitness for r in records]
    lower = [r.mean_fitness - r.std_fitness for r in records]
    upper = [r.mean_fitness + r.std_fitness for r in records]

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(generations, best, color='green', label='best')
    ax.plot(generations, mean, color='blue', label='mean')
    ax.fill_between(generations, lower, upper, color='blue', alpha=0.15)
    ax.plot(generations, worst, color='red', label='worst')

    ax.set_xlabel('Generation')
    ax.set_ylabel('Fitness')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc='lower right')

    fig.tight_layout()
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    print(f"  Saved fitness plot: {output_path}")
    return output_path
