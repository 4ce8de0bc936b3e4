"""Data models for arbitrage cycle detection."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class CycleType(Enum):
    """Whether a cycle trades on one exchange or several."""
    INTRA_EXCHANGE = "intra-exchange"
    INTER_EXCHANGE = "inter-exchange"


class RateRecord(BaseModel):
    """A single quoted conversion rate, as read from a rate feed."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_currency: str = Field(alias="from")
    to_currency: str = Field(alias="to")
    rate: float = Field(allow_inf_nan=False)
    exchange: str = ""


@dataclass(frozen=True)
class CycleCandidate:
    """A profitable closed walk through the rate graph."""
    path: Tuple[str, ...]  # e.g. ('USD', 'EUR'), closing 'USD' is implicit
    exchanges: Tuple[str, ...]
    cycle_type: CycleType
    profit_ratio: float  # 0.02 == 2%

    @property
    def start(self) -> str:
        """Currency the cycle starts and ends with."""
        return self.path[0]

    @property
    def hops(self) -> int:
        """Number of trades in the cycle."""
        return len(self.path)

    @property
    def profit_percentage(self) -> float:
        return self.profit_ratio * 100

    @property
    def canonical_key(self) -> str:
        """Rotation-invariant identity of the cycle."""
        # imported here, the engine module imports this one
        from .core.cycle_engine import normalize_cycle
        return normalize_cycle(self.path)

    def display_path(self) -> str:
        """Path with the closing currency written out."""
        return " -> ".join(self.path + (self.start,))

    def __str__(self) -> str:
        return (
            f"{self.display_path()} | {self.cycle_type.value} | "
            f"Profit: {self.profit_percentage:.4f}%"
        )


@dataclass
class ScanReport:
    """Result of one scan over a rate feed."""
    timestamp: datetime
    source: str
    vertex_count: int
    edge_count: int
    duration_seconds: float
    cycles: List[CycleCandidate] = field(default_factory=list)
    skipped_records: int = 0
    memory_mb: Optional[float] = None  # resident size of the process after the scan

    @property
    def best(self) -> Optional[CycleCandidate]:
        """Most profitable cycle in the report, if any."""
        return self.cycles[0] if self.cycles else None
