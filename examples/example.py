#!/usr/bin/env python3
"""Simple example showing how to use arbiloop."""
from pathlib import Path
from arbiloop.core import CycleSearchEngine
from arbiloop.loader import build_graph, load_records


def simple_scan_example():
    """Simple example: scan the bundled rate file."""
    records = load_records(Path(__file__).parent / "rates.json")
    graph, skipped = build_graph(records)
    print(f"Loaded {graph.vertex_count} currencies, {graph.edge_count} rates ({skipped} skipped)\n")

    engine = CycleSearchEngine(max_hops=4, result_limit=5)
    cycles = engine.detect(graph)

    print(f"Found {len(cycles)} profitable cycles\n")
    for i, cycle in enumerate(cycles, 1):
        print(f"{i}. {cycle.display_path()}")
        print(f"   Profit: {cycle.profit_percentage:.4f}%")
        print(f"   Type: {cycle.cycle_type.value} via {', '.join(cycle.exchanges)}")
        print()


if __name__ == "__main__":
    simple_scan_example()
