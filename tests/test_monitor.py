"""Tests for the console presenter."""
from datetime import datetime
import pytest
from rich.console import Console
from rich.table import Table
from arbiloop.models import CycleCandidate, CycleType, ScanReport
from arbiloop.monitoring.monitor import CycleMonitor, format_cycle_line


@pytest.fixture
def intra_cycle():
    """Create a sample intra-exchange cycle."""
    return CycleCandidate(
        path=("USD", "EUR"),
        exchanges=("exchangeA", "exchangeA"),
        cycle_type=CycleType.INTRA_EXCHANGE,
        profit_ratio=0.08,
    )


@pytest.fixture
def inter_cycle():
    """Create a sample inter-exchange cycle."""
    return CycleCandidate(
        path=("EUR", "GBP", "USD"),
        exchanges=("exchangeA", "exchangeB", "exchangeA"),
        cycle_type=CycleType.INTER_EXCHANGE,
        profit_ratio=0.0123,
    )


@pytest.fixture
def report(intra_cycle, inter_cycle):
    """Create a sample scan report."""
    return ScanReport(
        timestamp=datetime(2024, 1, 2, 3, 4, 5),
        source="rates.json",
        vertex_count=3,
        edge_count=6,
        duration_seconds=0.0042,
        cycles=[intra_cycle, inter_cycle],
        skipped_records=1,
    )


def recording_console():
    return Console(record=True, width=160, color_system=None)


class TestFormatCycleLine:
    """Test the plain one-line format."""

    def test_intra_line(self, intra_cycle):
        """Test the line for a two-currency loop."""
        line = format_cycle_line(1, intra_cycle)

        assert line == (
            "#1: profit=8.0000%, intra-exchange cycle (starts and ends with USD): "
            "USD -> EUR -> USD"
        )

    def test_inter_line(self, inter_cycle):
        """Test the line for a three-currency loop."""
        line = format_cycle_line(2, inter_cycle)

        assert line.startswith("#2: profit=1.2300%, inter-exchange cycle")
        assert line.endswith("EUR -> GBP -> USD -> EUR")


class TestCycleMonitor:
    """Test suite for report rendering."""

    def test_render_table(self, intra_cycle, inter_cycle):
        """Test one row per cycle."""
        monitor = CycleMonitor(console=recording_console())

        table = monitor.render_table([intra_cycle, inter_cycle])

        assert isinstance(table, Table)
        assert table.row_count == 2
        assert len(table.columns) == 6

    def test_print_report_table(self, report):
        """Test rich output includes the header and every cycle."""
        console = recording_console()
        monitor = CycleMonitor(console=console)

        monitor.print_report(report)
        output = console.export_text()

        assert "rates.json" in output
        assert "USD -> EUR -> USD" in output
        assert "inter-exchange" in output
        assert "8.0000%" in output
        assert "1 non-positive rates skipped" in output
        assert monitor.scans == 1
        assert monitor.total_cycles_found == 2

    def test_print_report_plain(self, report):
        """Test plain mode prints ranked lines."""
        console = recording_console()
        monitor = CycleMonitor(console=console, plain=True)

        monitor.print_report(report)
        lines = console.export_text().splitlines()

        assert lines[0].startswith("==== rates.json at 2024-01-02T03:04:05")
        assert lines[1].startswith("#1: profit=8.0000%")
        assert lines[2].startswith("#2: profit=1.2300%")

    def test_print_empty_report(self):
        """Test the message shown when nothing is profitable."""
        console = recording_console()
        monitor = CycleMonitor(console=console)
        empty = ScanReport(
            timestamp=datetime.now(),
            source="stdin",
            vertex_count=0,
            edge_count=0,
            duration_seconds=0.0,
        )

        monitor.print_report(empty)

        assert "No profitable cycles found" in console.export_text()
        assert monitor.total_cycles_found == 0

    def test_memory_in_header(self, report):
        """Test the resident size is shown when the scanner measured it."""
        console = recording_console()
        report.memory_mb = 42.5

        CycleMonitor(console=console).print_report(report)

        assert "42.5 MB resident" in console.export_text()


class TestBracketedNames:
    """Test currency names that look like console markup are printed as-is."""

    @pytest.fixture
    def bracket_report(self):
        cycle = CycleCandidate(
            path=("USD", "[bold]"),
            exchanges=("[red]x", "[red]x"),
            cycle_type=CycleType.INTRA_EXCHANGE,
            profit_ratio=0.08,
        )
        return ScanReport(
            timestamp=datetime(2024, 1, 2, 3, 4, 5),
            source="[feed].json",
            vertex_count=2,
            edge_count=2,
            duration_seconds=0.001,
            cycles=[cycle],
        )

    def test_plain_keeps_brackets(self, bracket_report):
        console = recording_console()

        CycleMonitor(console=console, plain=True).print_report(bracket_report)
        lines = console.export_text().splitlines()

        assert lines[0].startswith("==== [feed].json at ")
        assert lines[1].endswith("(starts and ends with USD): USD -> [bold] -> USD")

    def test_table_keeps_brackets(self, bracket_report):
        console = recording_console()

        CycleMonitor(console=console).print_report(bracket_report)
        output = console.export_text()

        assert "[feed].json" in output
        assert "USD -> [bold] -> USD" in output
        assert "[red]x" in output


class TestModels:
    """Test derived fields of cycle candidates."""

    def test_candidate_properties(self, inter_cycle):
        assert inter_cycle.start == "EUR"
        assert inter_cycle.hops == 3
        assert inter_cycle.profit_percentage == pytest.approx(1.23)
        assert inter_cycle.canonical_key == "EUR->GBP->USD"
        assert inter_cycle.display_path() == "EUR -> GBP -> USD -> EUR"
        assert "inter-exchange" in str(inter_cycle)

    def test_report_best(self, report, intra_cycle):
        assert report.best == intra_cycle
