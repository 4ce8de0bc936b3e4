"""Concurrent, depth-bounded search for profitable conversion cycles."""
import math
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import Dict, List, Optional, Sequence, Set, Tuple
from loguru import logger
from ..infrastructure.error_handling import ConfigurationError
from ..models import CycleCandidate, CycleType
from .rate_graph import RateGraph

DEFAULT_MAX_HOPS = 5
DEFAULT_RESULT_LIMIT = 10
KEY_SEPARATOR = "->"


def normalize_cycle(path: Sequence[str]) -> str:
    """
    Canonical key of a cycle.

    ``path`` holds the cycle's vertices without the repeated closing vertex.
    The key is the lexicographically smallest rotation (code-point order on
    the currency tokens) joined with ``->``, so ``A->B->C`` found from ``B``
    or ``C`` maps to the same key.
    """
    if not path:
        return ""
    nodes = tuple(path)
    best = min(nodes[i:] + nodes[:i] for i in range(len(nodes)))
    return KEY_SEPARATOR.join(best)


def classify(exchanges: Sequence[str]) -> CycleType:
    """Inter-exchange iff the traversed edges carry more than one tag."""
    if len(set(exchanges)) > 1:
        return CycleType.INTER_EXCHANGE
    return CycleType.INTRA_EXCHANGE


class _CycleCollector:
    """Result sink shared by all per-vertex searches."""

    def __init__(self):
        self._lock = Lock()
        # canonical key -> (origin rank, candidate)
        self._found: Dict[str, Tuple[int, CycleCandidate]] = {}
        self.duplicates = 0

    def offer(
        self,
        origin_rank: int,
        path: Sequence[str],
        exchanges: Sequence[str],
        weight_sum: float,
    ) -> bool:
        """
        Register a profitable closure; returns False for a known cycle.

        When two searches find the same cycle, the one started from the
        earlier-inserted vertex wins, so the reported rotation does not
        depend on thread scheduling.
        """
        key = normalize_cycle(path)
        with self._lock:
            existing = self._found.get(key)
            if existing is not None and existing[0] <= origin_rank:
                self.duplicates += 1
                return False

            candidate = CycleCandidate(
                path=tuple(path),
                exchanges=tuple(exchanges),
                cycle_type=classify(exchanges),
                profit_ratio=math.exp(-weight_sum) - 1,
            )
            if existing is not None:
                self.duplicates += 1
            self._found[key] = (origin_rank, candidate)
            return True

    def ranked(self) -> List[CycleCandidate]:
        """Candidates by profit, best first; ties ordered by canonical key."""
        with self._lock:
            items = [(key, candidate) for key, (_, candidate) in self._found.items()]
        items.sort(key=lambda item: (-item[1].profit_ratio, item[0]))
        return [candidate for _, candidate in items]


class CycleSearchEngine:
    """Finds closed walks with a compounded rate above 1.0."""

    def __init__(
        self,
        max_hops: int = DEFAULT_MAX_HOPS,
        result_limit: int = DEFAULT_RESULT_LIMIT,
        max_workers: Optional[int] = None,
    ):
        """
        Initialise the engine.

        Args:
            max_hops: Longest cycle searched, in trades (inclusive)
            result_limit: Maximum number of cycles returned
            max_workers: Thread pool size, ``None`` for the executor default
        """
        self._validate(max_hops, result_limit)
        self.max_hops = max_hops
        self.result_limit = result_limit
        self.max_workers = max_workers

    @staticmethod
    def _validate(max_hops: int, result_limit: int):
        if max_hops < 1:
            raise ConfigurationError(f"max_hops must be at least 1, got {max_hops}")
        if result_limit < 0:
            raise ConfigurationError(f"result_limit must not be negative, got {result_limit}")

    def detect(
        self,
        graph: RateGraph,
        max_hops: Optional[int] = None,
        result_limit: Optional[int] = None,
    ) -> List[CycleCandidate]:
        """
        Search every vertex of ``graph`` for profitable cycles.

        One search task runs per vertex; the call returns once all of them
        have finished, with duplicates removed, sorted by profit and cut to
        ``result_limit`` entries.
        """
        max_hops = self.max_hops if max_hops is None else max_hops
        result_limit = self.result_limit if result_limit is None else result_limit
        self._validate(max_hops, result_limit)

        collector = _CycleCollector()
        if graph.vertex_count == 0:
            logger.debug("Empty rate graph, nothing to search")
            return []

        logger.debug(
            f"Searching {graph.vertex_count} currencies, "
            f"{graph.edge_count} rates, up to {max_hops} hops"
        )
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [
                pool.submit(self._search_from, graph, rank, start, max_hops, collector)
                for rank, start in enumerate(graph.vertices)
            ]
            for future in futures:
                future.result()

        cycles = collector.ranked()
        logger.info(
            f"Found {len(cycles)} profitable cycles across {graph.vertex_count} currencies"
        )
        if collector.duplicates:
            logger.debug(f"Suppressed {collector.duplicates} rotated duplicates")

        return cycles[:result_limit]

    def _search_from(
        self,
        graph: RateGraph,
        rank: int,
        start: str,
        max_hops: int,
        collector: _CycleCollector,
    ):
        """Depth-first search for cycles through ``start``."""
        # the origin stays marked for the whole search
        visited: Set[str] = {start}
        self._dfs(graph, rank, start, start, [start], [], 0, 0.0, visited, max_hops, collector)

    def _dfs(
        self,
        graph: RateGraph,
        rank: int,
        start: str,
        current: str,
        path: List[str],
        exchanges: List[str],
        depth: int,
        weight_sum: float,
        visited: Set[str],
        max_hops: int,
        collector: _CycleCollector,
    ):
        if depth > 0 and current == start:
            # negative weight sum == compounded rate above 1.0
            if weight_sum < 0:
                collector.offer(rank, path[:-1], exchanges, weight_sum)
            return

        if depth >= max_hops:
            return

        for edge in graph.outgoing(current):
            nxt = edge.to
            # a quote from a currency to itself is not a conversion; skipping
            # it keeps a single-vertex graph free of cycles
            if nxt == current:
                continue
            if nxt != start and nxt in visited:
                continue

            path.append(nxt)
            exchanges.append(edge.exchange)
            if nxt != start:
                visited.add(nxt)
                self._dfs(graph, rank, start, nxt, path, exchanges, depth + 1,
                          weight_sum + edge.weight, visited, max_hops, collector)
                visited.discard(nxt)
            else:
                self._dfs(graph, rank, start, nxt, path, exchanges, depth + 1,
                          weight_sum + edge.weight, visited, max_hops, collector)
            path.pop()
            exchanges.pop()


def detect(
    graph: RateGraph,
    max_hops: int = DEFAULT_MAX_HOPS,
    result_limit: int = DEFAULT_RESULT_LIMIT,
) -> List[CycleCandidate]:
    """Run a one-off search with a default engine."""
    return CycleSearchEngine(max_hops=max_hops, result_limit=result_limit).detect(graph)
