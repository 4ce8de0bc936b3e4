"""
arbiloop - Detection of profitable currency conversion cycles.
"""

from .config import config
from .models import CycleCandidate, CycleType, RateRecord, ScanReport
from .core import CycleSearchEngine, RateGraph, detect, normalize_cycle
from .utils import format_path, format_percentage

__version__ = "1.0.0"
__all__ = [
    "config",
    "CycleCandidate",
    "CycleType",
    "RateRecord",
    "ScanReport",
    "CycleSearchEngine",
    "RateGraph",
    "detect",
    "normalize_cycle",
    "format_path",
    "format_percentage",
]
