"""Visualization utilities for benchmark results and candidate grids."""

from __future__ import annotations
import os
from typing import List, Optional

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult
from ..core.grid import BOX_SIZE, EMPTY, CandidateGrid, Grid


def plot_candidate_heatmap(candidates: CandidateGrid, path: str, grid: Optional[Grid] = None) -> str:
    """
    Save a heatmap of how many candidates every cell still has.

    Args:
        candidates: Candidate grid to draw.
        path: Output image path.
        grid: Optional value grid; its filled digits are written on the map.

    Returns:
        The path written.
    """
    counts = np.array([[len(candidates.get(r, c)) for c in range(candidates.width)]
                       for r in range(candidates.height)])
    if grid is not None:
        labels = np.array([["" if grid.get(r, c) == EMPTY else str(grid.get(r, c))
                            for c in range(grid.width)]
                           for r in range(grid.height)])
    else:
        labels = counts.astype(str)

    fig, ax = plt.subplots(figsize=(7, 6))
    sns.heatmap(counts, annot=labels, fmt='', cmap="YlOrRd", vmin=0, vmax=9,
                linewidths=0.5, linecolor='white', square=True,
                cbar_kws={'label': 'Candidates left'}, ax=ax)

    # Box borders
    for i in range(0, candidates.height + 1, BOX_SIZE):
        ax.axhline(i, color='black', linewidth=2)
    for j in range(0, candidates.width + 1, BOX_SIZE):
        ax.axvline(j, color='black', linewidth=2)

    ax.set_title('Remaining Candidates per Cell', fontsize=14, fontweight='bold')
    ax.set_xticks([])
    ax.set_yticks([])

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return path


class Visualizer:
    """
    Visualization generator for solver benchmark results.

    Creates charts comparing solver configurations across various metrics.
    """

    # Color palette for solver configurations
    COLORS = {
        "Propagation": "#2ecc71",         # Green
        "Propagation (rows)": "#3498db",  # Blue
        "No bruteforce": "#e74c3c",       # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        # Set style
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    @property
    def algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_fill_comparison(),
            self.plot_time_distribution(),
        ]

    def _save(self, fig, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return path

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self.algorithms
        avg_times = [np.mean([r.time_seconds for r in self.results if r.algorithm == algo])
                     for algo in algorithms]
        colors = [self.COLORS.get(algo, "#95a5a6") for algo in algorithms]

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        for bar, time in zip(bars, avg_times):
            ax.annotate(f'{time:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Solver', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save(fig, "time_comparison.png")

    def plot_fill_comparison(self) -> str:
        """Create bar chart of average cells filled by each solver, labelled with accuracy."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self.algorithms
        gained, accuracies = [], []
        for algo in algorithms:
            algo_results = [r for r in self.results if r.algorithm == algo]
            gained.append(np.mean([r.filled_cells - r.clues for r in algo_results]))
            accuracies.append(100 * sum(r.solved for r in algo_results) / len(algo_results))
        colors = [self.COLORS.get(algo, "#95a5a6") for algo in algorithms]

        bars = ax.bar(algorithms, gained, color=colors, edgecolor='black', linewidth=0.5)

        for bar, acc in zip(bars, accuracies):
            ax.annotate(f'{acc:.0f}% solved',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Average Cells Filled', fontsize=12)
        ax.set_title('Cells Filled Beyond the Clues', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save(fig, "fill_comparison.png")

    def plot_time_distribution(self) -> str:
        """Create box plot showing time distribution."""
        fig, ax = plt.subplots(figsize=(12, 6))

        algorithms = self.algorithms
        x = [r.algorithm for r in self.results]
        y = [r.time_seconds for r in self.results]
        sns.boxplot(x=x, y=y, order=algorithms, hue=x, hue_order=algorithms,
                    palette=[self.COLORS.get(algo, "#95a5a6") for algo in algorithms],
                    legend=False, ax=ax)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution by Solver', fontsize=14, fontweight='bold')

        return self._save(fig, "time_distribution.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Solver | Accuracy | Avg Time | Avg Memory | Avg Hypotheses |",
            "|--------|----------|----------|------------|----------------|"
        ]

        for algo in self.algorithms:
            algo_results = [r for r in self.results if r.algorithm == algo]

            solved = sum(1 for r in algo_results if r.solved)
            accuracy = (solved / len(algo_results)) * 100

            avg_time = np.mean([r.time_seconds for r in algo_results])
            avg_memory = np.mean([r.memory_bytes / (1024 * 1024) for r in algo_results])
            avg_nodes = np.mean([r.nodes_explored for r in algo_results])

            lines.append(
                f"| {algo} | {accuracy:.1f}% | {avg_time:.4f}s | {avg_memory:.2f} MB | {avg_nodes:.1f} |"
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))

        return path
