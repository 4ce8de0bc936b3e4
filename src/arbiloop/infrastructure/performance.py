"""Timing and resource figures for cycle scans."""
import time
import psutil
from loguru import logger
from ..models import ScanReport


class ScanTimer:
    """Context manager measuring the wall time of one detect pass."""

    def __init__(self):
        self.seconds = 0.0
        self._started = 0.0

    def __enter__(self):
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.seconds = time.perf_counter() - self._started
        return False


class ScanStats:
    """
    Running totals over the reports of one scanner.

    Only completed scans are counted; a feed that fails to load never
    produces a report.
    """

    def __init__(self):
        self.scans = 0
        self.cycles_found = 0
        self.total_seconds = 0.0
        self._process = psutil.Process()

    def record(self, report: ScanReport):
        self.scans += 1
        self.cycles_found += len(report.cycles)
        self.total_seconds += report.duration_seconds

    @property
    def average_seconds(self) -> float:
        if self.scans == 0:
            return 0.0
        return self.total_seconds / self.scans

    def memory_mb(self) -> float:
        """Resident set size of this process."""
        return self._process.memory_info().rss / 1024 / 1024

    def log_summary(self):
        logger.info(
            f"{self.scans} scans, {self.cycles_found} cycles reported, "
            f"avg detect {self.average_seconds * 1000:.2f}ms, "
            f"memory {self.memory_mb():.1f} MB"
        )
