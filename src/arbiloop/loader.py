"""Reading rate feeds and turning them into rate graphs."""
import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union
from loguru import logger
from pydantic import TypeAdapter, ValidationError
from .core.rate_graph import RateGraph
from .infrastructure.error_handling import RateFeedError, retry_with_backoff
from .models import RateRecord

STDIN_SOURCE = "-"

_records_adapter = TypeAdapter(List[RateRecord])


def parse_records(payload: Union[str, bytes]) -> List[RateRecord]:
    """
    Parse a JSON array of rate records.

    Each entry looks like
    ``{"from": "USD", "to": "EUR", "rate": 0.9, "exchange": "A"}``.

    Raises:
        RateFeedError: if the payload is not valid JSON or not a list of records
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise RateFeedError(f"decode: {e}") from e

    if not isinstance(data, list):
        raise RateFeedError(f"expected a JSON array of rates, got {type(data).__name__}")

    try:
        return _records_adapter.validate_python(data)
    except ValidationError as e:
        raise RateFeedError(f"invalid rate record: {e}") from e


@retry_with_backoff(retries=2, exceptions=(RateFeedError,))
def _read_file(path: Path) -> List[RateRecord]:
    # a producer may be rewriting the file; a half-written read is retried
    try:
        payload = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RateFeedError(f"open: {e}") from e
    return parse_records(payload)


def load_records(source: Optional[Union[str, Path]] = None) -> List[RateRecord]:
    """Read rate records from a file, or from stdin if ``source`` is ``None`` or ``-``."""
    if source is None or str(source) == STDIN_SOURCE:
        return parse_records(sys.stdin.read())

    path = Path(source)
    if not path.exists():
        raise RateFeedError(f"open: rates file not found: {path}")
    return _read_file(path)


def build_graph(records: Iterable[RateRecord]) -> Tuple[RateGraph, int]:
    """
    Build a rate graph from records.

    Records with a non-positive rate are skipped, since their log-weight is
    undefined. Returns the graph and the number of records skipped.
    """
    graph = RateGraph()
    skipped = 0

    for record in records:
        if record.rate <= 0:
            skipped += 1
            logger.warning(
                f"Skipping {record.from_currency}/{record.to_currency} on "
                f"'{record.exchange}': non-positive rate {record.rate}"
            )
            continue
        graph.add_edge(record.from_currency, record.to_currency, record.rate, record.exchange)

    logger.debug(f"Built {graph!r}, skipped {skipped} records")
    return graph, skipped
