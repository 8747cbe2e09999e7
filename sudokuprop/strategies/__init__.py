"""Deterministic move strategies.

A strategy is a function ``(candidates, grid) -> Field`` that proposes one
guaranteed-correct move, or ``NO_MOVE`` when it has nothing to offer.
"""

from typing import Callable, Tuple

from ..core.grid import CandidateGrid, Field, Grid
from .fill_box import fill_box
from .only_possibility import only_possibility

Strategy = Callable[[CandidateGrid, Grid], Field]

DEFAULT_STRATEGIES: Tuple[Strategy, ...] = (only_possibility, fill_box)

__all__ = ["Strategy", "DEFAULT_STRATEGIES", "only_possibility", "fill_box"]
