"""Projections of the stored observation documents.

Dependency rule: analysis/ works on document dicts already loaded from the
store. It never fetches data, writes to the store, or renders anything.

Modules:
  - aggregation: documents -> scatter pairs, documents -> monthly averages
"""

from weather_journal.analysis.aggregation import (
    MonthlySummary,
    monthly_averages,
    round_half_away_from_zero,
    scatter_series,
    summarize_months,
)

__all__ = [
    "MonthlySummary",
    "monthly_averages",
    "round_half_away_from_zero",
    "scatter_series",
    "summarize_months",
]
