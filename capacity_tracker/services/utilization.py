"""
Utilization math shared by the resource snapshot and the weekly history.

Both paths go through ``classify_utilization`` so that a stored
``load_percentage`` and its ``rag_status`` always agree.
"""
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Tuple

from capacity_tracker.models.resource import RAGStatus

# Load percentage thresholds (inclusive AMBER band)
AMBER_THRESHOLD = 80.0
RED_THRESHOLD = 100.0

DEFAULT_WEEKLY_AVAILABILITY = 40.0
DEFAULT_WEEKLY_WORKLOAD = 0.0

WEEK_LENGTH_DAYS = 7


class Utilization(NamedTuple):
    load_percentage: float
    rag_status: RAGStatus


def round2(value: float) -> float:
    """Round to two decimal places, half away from zero."""
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def rag_status_for(load_percentage: float) -> RAGStatus:
    """Map a load percentage onto GREEN (<80), AMBER (80..100) or RED (>100)."""
    if load_percentage < AMBER_THRESHOLD:
        return RAGStatus.GREEN
    if load_percentage <= RED_THRESHOLD:
        return RAGStatus.AMBER
    return RAGStatus.RED


def classify_utilization(availability: float, workload: float) -> Utilization:
    """
    Derive load percentage and RAG status from weekly hours.

    A resource with no declared availability is reported as 0% / GREEN
    rather than overloaded. The status is taken from the rounded
    percentage, which is the value that gets stored.
    """
    if availability <= 0:
        return Utilization(0.0, RAGStatus.GREEN)

    load_percentage = round2(workload / availability * 100)
    return Utilization(load_percentage, rag_status_for(load_percentage))


def week_window(week_start_date: date) -> Tuple[date, date]:
    """Return the inclusive (start, end) span of the week starting on the given date."""
    return week_start_date, week_start_date + timedelta(days=WEEK_LENGTH_DAYS - 1)
