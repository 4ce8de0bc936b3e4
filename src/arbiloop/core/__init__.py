"""Core detection components."""

from .rate_graph import Edge, RateGraph
from .cycle_engine import CycleSearchEngine, classify, detect, normalize_cycle

__all__ = [
    "Edge",
    "RateGraph",
    "CycleSearchEngine",
    "classify",
    "detect",
    "normalize_cycle",
]
