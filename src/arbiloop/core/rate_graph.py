"""Directed multigraph of currency conversion rates."""
import math
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Edge:
    """One quoted conversion out of a currency."""
    to: str
    weight: float  # -ln(rate)
    exchange: str


class RateGraph:
    """
    Append-only graph of conversion rates.

    Rates are stored as ``-ln(rate)`` weights so that a sequence of trades
    with a compounded rate above 1.0 becomes a closed walk with a negative
    weight sum. Parallel edges between the same pair of currencies are all
    kept, one per quote, since a cycle's classification depends on which
    exchanges it actually traverses.
    """

    def __init__(self):
        """Initialise an empty graph."""
        self.vertices: List[str] = []
        self.edges: Dict[str, List[Edge]] = {}

    def _register(self, currency: str):
        if currency not in self.edges:
            self.vertices.append(currency)
            self.edges[currency] = []

    def add_edge(self, from_currency: str, to_currency: str, rate: float, exchange: str):
        """
        Add a conversion from ``from_currency`` to ``to_currency``.

        Args:
            from_currency: Currency being sold
            to_currency: Currency being bought
            rate: Units of ``to_currency`` received per unit sold, must be > 0
            exchange: Market that quoted the rate

        The caller is responsible for filtering out non-positive rates;
        ``math.log`` raises ``ValueError`` on them.
        """
        weight = -math.log(rate)
        self._register(from_currency)
        self._register(to_currency)
        self.edges[from_currency].append(Edge(to_currency, weight, exchange))

    def outgoing(self, currency: str) -> List[Edge]:
        """Edges leaving ``currency`` in insertion order."""
        return self.edges.get(currency, [])

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return sum(len(out) for out in self.edges.values())

    def __len__(self) -> int:
        return len(self.vertices)

    def __contains__(self, currency: str) -> bool:
        return currency in self.edges

    def __repr__(self) -> str:
        return f"RateGraph(vertices={self.vertex_count}, edges={self.edge_count})"
