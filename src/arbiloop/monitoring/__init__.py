"""Result presentation."""

from .monitor import CycleMonitor, format_cycle_line

__all__ = [
    "CycleMonitor",
    "format_cycle_line",
]
