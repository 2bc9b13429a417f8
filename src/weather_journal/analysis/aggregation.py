"""Scatter and monthly-average views over stored observation documents.

Both functions take the raw document dicts returned by
``DocumentStore.list_all()`` so that a single malformed document can be
skipped instead of failing the whole view. Skips are logged at WARNING and,
for the monthly view, reported back in ``MonthlySummary.skipped``.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING, Any

from weather_journal.errors import UnknownMetric
from weather_journal.schemas import Metric, MonthlyAverage, ScatterPoint

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

_INT_TEXT = re.compile(r"\s*[+-]?\d+\s*")


@dataclass
class MonthlySummary:
    """Monthly averages plus the documents that could not be bucketed."""

    averages: dict[str, int] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)

    @property
    def series(self) -> list[MonthlyAverage]:
        """Averages as bar-chart entries, ascending by month."""
        return [MonthlyAverage(month=m, average=a) for m, a in self.averages.items()]


def round_half_away_from_zero(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` to the nearest integer, ties away from zero.

    Integer arithmetic only, so it is exact for values of any size: 10.5
    becomes 11 and -10.5 becomes -11.
    """
    quotient, remainder = divmod(abs(numerator), denominator)
    if 2 * remainder >= denominator:
        quotient += 1
    return quotient if numerator >= 0 else -quotient


def scatter_series(
    documents: Iterable[Mapping[str, Any]],
    metric: Metric | str,
) -> list[ScatterPoint]:
    """One (value, metric) point per document, in input order.

    Args:
        documents: Stored observation documents.
        metric: ``temperature`` or ``relativeHumidity`` (aliases accepted).

    Returns:
        Points with ``x`` = logged value, ``y`` = the chosen weather reading.

    Raises:
        UnknownMetric: If ``metric`` names neither weather reading.
    """
    try:
        metric = Metric(metric)
    except ValueError as exc:
        raise UnknownMetric(metric) from exc
    key = metric.document_key
    points: list[ScatterPoint] = []
    skipped = 0
    for doc in documents:
        x = _as_int(doc.get("value"))
        y = _as_number(doc.get(key))
        if x is None or y is None:
            skipped += 1
            logger.warning("Document %s has no plottable %s, skipped", _doc_id(doc), metric)
            continue
        points.append(ScatterPoint(x=x, y=y, timestamp=_as_int(doc.get("ts"))))
    if skipped:
        logger.warning("Scatter series skipped %d document(s)", skipped)
    return points


def summarize_months(
    documents: Iterable[Mapping[str, Any]],
    tz: tzinfo = UTC,
) -> MonthlySummary:
    """Bucket documents by calendar month of ``ts`` in ``tz`` and average ``value``.

    Months with no documents are absent. Keys are two-digit month numbers in
    ascending order. Documents without a usable timestamp or integer value
    are excluded and listed in ``skipped``.
    """
    buckets: dict[str, list[int]] = defaultdict(list)
    summary = MonthlySummary()
    for doc in documents:
        month = _month_key(doc.get("ts"), tz)
        value = _as_int(doc.get("value"))
        if month is None or value is None:
            summary.skipped.append(_doc_id(doc))
            logger.warning("Document %s has no usable timestamp or value, skipped", _doc_id(doc))
            continue
        buckets[month].append(value)

    summary.averages = {
        month: round_half_away_from_zero(sum(values), len(values))
        for month, values in sorted(buckets.items())
    }
    if summary.skipped:
        logger.warning("Monthly averages skipped %d document(s)", len(summary.skipped))
    return summary


def monthly_averages(
    documents: Iterable[Mapping[str, Any]],
    tz: tzinfo = UTC,
) -> dict[str, int]:
    """Mapping of ``"01".."12"`` to the rounded mean value logged in that month."""
    return summarize_months(documents, tz).averages


def _month_key(ts: Any, tz: tzinfo) -> str | None:
    seconds = _as_number(ts)
    if seconds is None:
        return None
    try:
        moment = datetime.fromtimestamp(seconds, tz=tz)
    except (OverflowError, OSError, ValueError):
        return None
    return f"{moment.month:02d}"


def _as_int(value: Any) -> int | None:
    """Integer from an int, an integral float, or integer text; else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and _INT_TEXT.fullmatch(value):
        return int(value)
    return None


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _doc_id(doc: Mapping[str, Any]) -> str:
    return str(doc.get("_id", "<no id>"))
