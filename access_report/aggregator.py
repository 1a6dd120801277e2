"""Turns per-entry labels into a ranked, thresholded percentage report."""

import logging
import math
from collections import Counter
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from access_report.extractors import DimensionExtractor
from access_report.models import (
    DimensionEntry,
    DimensionReport,
    LogEntry,
    OTHER_LABEL,
    UNKNOWN_LABEL,
)

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 1.0

_CENT = Decimal("0.01")


def _percentage(count: int, total: int) -> Decimal:
    """count/total as a percentage, rounded half away from zero to 2 places."""
    return (Decimal(count) * 100 / Decimal(total)).quantize(_CENT, rounding=ROUND_HALF_UP)


def aggregate(
    entries: Sequence[LogEntry],
    extractor: DimensionExtractor,
    threshold: float = DEFAULT_THRESHOLD,
) -> DimensionReport:
    """Build the distribution report for one dimension.

    Labels below ``threshold`` percent are folded into a trailing ``Other``
    entry; the ``Unknown`` label is always reported on its own. An empty
    entry set yields a report with no entries.
    """
    if not math.isfinite(threshold) or threshold < 0:
        raise ValueError(f"threshold must be a non-negative number, got {threshold}")

    total = len(entries)
    if total == 0:
        logger.info("No entries to aggregate for %s", extractor.dimension_name)
        return DimensionReport(dimension_name=extractor.dimension_name)

    counts = Counter(extractor.extract(entry) for entry in entries)
    limit = Decimal(str(threshold))

    kept: list[tuple[str, Decimal]] = []
    collapsed = Decimal(0)
    for label, count in counts.items():
        pct = _percentage(count, total)
        if pct >= limit or label == UNKNOWN_LABEL:
            kept.append((label, pct))
        else:
            collapsed += pct

    kept.sort(key=lambda item: (-item[1], item[0]))
    result = [DimensionEntry(label=label, percentage=float(pct)) for label, pct in kept]

    other = collapsed.quantize(_CENT, rounding=ROUND_HALF_UP)
    if other > 0:
        result.append(DimensionEntry(label=OTHER_LABEL, percentage=float(other)))

    logger.info(
        "Aggregated %s: %d distinct labels, %d reported",
        extractor.dimension_name, len(counts), len(result),
    )
    return DimensionReport(dimension_name=extractor.dimension_name, entries=tuple(result))
