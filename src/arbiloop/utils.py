"""Utility functions for arbiloop."""
from typing import Sequence


def format_percentage(value: float, decimals: int = 4) -> str:
    """Format percentage value."""
    return f"{value:.{decimals}f}%"


def format_path(path: Sequence[str], closed: bool = True) -> str:
    """Format a cycle path for display, repeating the start if ``closed``."""
    nodes = list(path)
    if closed and nodes:
        nodes.append(nodes[0])
    return " -> ".join(nodes)
