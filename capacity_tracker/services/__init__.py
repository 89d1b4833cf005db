# capacity_tracker/services/__init__.py
"""
Service layer: utilization math and capacity business rules.
"""

from capacity_tracker.services.capacity_service import CapacityService
from capacity_tracker.services.utilization import classify_utilization, rag_status_for, week_window

__all__ = [
    "CapacityService",
    "classify_utilization",
    "rag_status_for",
    "week_window",
]
