"""Benchmark module for comparing solver configurations."""

from .benchmark import Benchmark, BenchmarkResult, load_puzzles
from .visualizer import Visualizer, plot_candidate_heatmap

__all__ = ["Benchmark", "BenchmarkResult", "load_puzzles", "Visualizer", "plot_candidate_heatmap"]
