"""Console output for detected cycles."""
from typing import List, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape
from ..models import CycleCandidate, CycleType, ScanReport
from ..utils import format_path, format_percentage


def format_cycle_line(rank: int, cycle: CycleCandidate) -> str:
    """One-line description of a ranked cycle."""
    return (
        f"#{rank}: profit={format_percentage(cycle.profit_percentage)}, "
        f"{cycle.cycle_type.value} cycle (starts and ends with {cycle.start}): "
        f"{format_path(cycle.path)}"
    )


class CycleMonitor:
    """Prints scan reports as rich tables or plain lines."""

    def __init__(self, console: Optional[Console] = None, plain: bool = False):
        """Initialise monitor."""
        self.console = console or Console()
        self.plain = plain
        self.scans = 0
        self.total_cycles_found = 0

    def render_table(self, cycles: List[CycleCandidate]) -> Table:
        """Create table of cycles."""
        table = Table(show_header=True, header_style="bold magenta")

        table.add_column("#", justify="right")
        table.add_column("Cycle", style="cyan")
        table.add_column("Type")
        table.add_column("Hops", justify="right")
        table.add_column("Exchanges")
        table.add_column("Profit %", justify="right", style="green")

        for rank, cycle in enumerate(cycles, 1):
            profit_color = "green" if cycle.profit_percentage > 1.0 else "yellow"
            type_color = "blue" if cycle.cycle_type == CycleType.INTRA_EXCHANGE else "magenta"

            table.add_row(
                str(rank),
                escape(format_path(cycle.path)),
                f"[{type_color}]{cycle.cycle_type.value}[/]",
                str(cycle.hops),
                escape(", ".join(sorted(set(cycle.exchanges)))),
                f"[{profit_color}]{format_percentage(cycle.profit_percentage)}[/]",
            )

        return table

    def print_report(self, report: ScanReport):
        """Print the outcome of one scan."""
        self.scans += 1
        self.total_cycles_found += len(report.cycles)

        if self.plain:
            self.console.print(
                f"==== {report.source} at {report.timestamp.isoformat()} ====",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            for rank, cycle in enumerate(report.cycles, 1):
                self.console.print(
                    format_cycle_line(rank, cycle), markup=False, highlight=False, soft_wrap=True
                )
            return

        header = (
            f"[bold]{escape(report.source)}[/] at {report.timestamp:%Y-%m-%d %H:%M:%S}\n"
            f"{report.vertex_count} currencies, {report.edge_count} rates, "
            f"scanned in {report.duration_seconds * 1000:.1f} ms"
        )
        if report.memory_mb is not None:
            header += f", {report.memory_mb:.1f} MB resident"
        if report.skipped_records:
            header += f"\n[yellow]{report.skipped_records} non-positive rates skipped[/]"
        self.console.print(Panel(header, title="arbiloop", style="cyan"))

        if report.cycles:
            self.console.print(self.render_table(report.cycles))
        else:
            self.console.print("[yellow]No profitable cycles found[/]")
