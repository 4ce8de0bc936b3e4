#!/usr/bin/env python3
"""Command-line entry point for arbiloop."""
import argparse
import asyncio
import signal
import sys
from datetime import datetime
from typing import List, Optional
from loguru import logger
from .config import Config, config as default_config
from .core.cycle_engine import CycleSearchEngine
from .infrastructure.error_handling import ArbiloopError, RateFeedError, error_handler
from .infrastructure.performance import ScanStats, ScanTimer
from .loader import STDIN_SOURCE, build_graph, load_records
from .models import ScanReport
from .monitoring.monitor import CycleMonitor


class RateScanner:
    """Loads a rate feed, searches it, and reports the result."""

    def __init__(
        self,
        engine: CycleSearchEngine,
        monitor: CycleMonitor,
        source: Optional[str] = None,
        interval_seconds: float = 5.0,
        stats: Optional[ScanStats] = None,
    ):
        """Initialise the scanner."""
        self.engine = engine
        self.monitor = monitor
        self.source = source
        self.interval_seconds = interval_seconds
        self.stats = stats or ScanStats()
        self.running = False
        self._stop_event: Optional[asyncio.Event] = None

    @property
    def source_name(self) -> str:
        return self.source or "stdin"

    def scan(self) -> ScanReport:
        """Run one full load-build-detect pass."""
        records = load_records(self.source)
        graph, skipped = build_graph(records)

        with ScanTimer() as timer:
            cycles = self.engine.detect(graph)

        report = ScanReport(
            timestamp=datetime.now(),
            source=self.source_name,
            vertex_count=graph.vertex_count,
            edge_count=graph.edge_count,
            duration_seconds=timer.seconds,
            cycles=cycles,
            skipped_records=skipped,
            memory_mb=self.stats.memory_mb(),
        )
        self.stats.record(report)
        return report

    async def run(self, max_scans: Optional[int] = None):
        """Re-scan every ``interval_seconds`` until stopped."""
        self.running = True
        self._stop_event = asyncio.Event()
        scans = 0

        logger.info(f"Scanning {self.source_name} every {self.interval_seconds}s")
        while self.running:
            try:
                report = await asyncio.to_thread(self.scan)
                self.monitor.print_report(report)
            except RateFeedError as e:
                # a bad refresh is reported, the next tick may succeed
                logger.error(f"Scan of {self.source_name} failed: {e}")
                error_handler.record_error("rate_feed")

            scans += 1
            if max_scans is not None and scans >= max_scans:
                break

            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

        self.running = False
        logger.info(f"Scanner stopped after {scans} scans")

    def stop(self):
        """Ask a running loop to finish after the current scan."""
        self.running = False
        if self._stop_event is not None:
            self._stop_event.set()


def configure_logging(cfg: Config, verbose: bool = False):
    """Route loguru output to stderr and, if configured, a rotating file."""
    level = "DEBUG" if verbose else cfg.log_level
    logger.remove()
    logger.add(sys.stderr, level=level)
    if cfg.log_file:
        logger.add(
            cfg.log_file,
            rotation="1 day",
            retention="7 days",
            level=level,
        )


def build_parser(cfg: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arbiloop",
        description="Find profitable currency conversion cycles in a JSON rate feed.",
    )
    parser.add_argument(
        "-f", "--file", default=cfg.feed.rates_file,
        help="JSON file with rate records (default stdin)",
    )
    parser.add_argument("--max-hops", type=int, default=cfg.search.max_hops,
                        help="longest cycle to search, in trades")
    parser.add_argument("--limit", type=int, default=cfg.search.result_limit,
                        help="number of cycles to report")
    parser.add_argument("--interval", type=float, default=cfg.feed.interval_seconds,
                        help="seconds between re-reads of --file")
    parser.add_argument("--once", action="store_true",
                        help="scan --file once instead of re-reading it")
    parser.add_argument("--plain", action="store_true",
                        help="plain text output instead of tables")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


async def _run_forever(scanner: RateScanner):
    # stops the loop cleanly on ctrl+c and kill signals
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, scanner.stop)
    await scanner.run()


def main(argv: Optional[List[str]] = None, cfg: Optional[Config] = None) -> int:
    """Main entry point."""
    cfg = cfg or default_config
    args = build_parser(cfg).parse_args(argv)
    configure_logging(cfg, args.verbose)

    try:
        engine = CycleSearchEngine(
            max_hops=args.max_hops,
            result_limit=args.limit,
            max_workers=cfg.search.max_workers,
        )
    except ArbiloopError as e:
        logger.error(str(e))
        return 2

    source = None if args.file in (None, STDIN_SOURCE) else args.file
    scanner = RateScanner(
        engine,
        CycleMonitor(plain=args.plain),
        source=source,
        interval_seconds=args.interval,
    )

    if source is None or args.once:
        try:
            scanner.monitor.print_report(scanner.scan())
        except RateFeedError as e:
            logger.error(str(e))
            return 1
        return 0

    asyncio.run(_run_forever(scanner))
    scanner.stats.log_summary()
    return 0


if __name__ == "__main__":
    sys.exit(main())
