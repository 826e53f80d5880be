"""Audit Query Rules — bounds for log queries, stats windows and retention cleanup.

Invariants:
    - top ∈ [1, 500]
    - start_date ≤ end_date when both are present
    - stats window days ∈ [1, 365]
    - retention_days ∈ [1, 180]
"""

from datetime import datetime

MAX_TOP: int = 500
DEFAULT_TOP: int = 100
MAX_STATS_DAYS: int = 365
MAX_RETENTION_DAYS: int = 180


def validate_log_query(
    top: int, start_date: datetime | None, end_date: datetime | None,
) -> list[str]:
    errors = []
    if not 1 <= top <= MAX_TOP:
        errors.append(f"Top must be between 1 and {MAX_TOP}.")
    if start_date and end_date and start_date > end_date:
        errors.append("Start date cannot be after end date.")
    return errors


def validate_stats_days(days: int) -> list[str]:
    if not 1 <= days <= MAX_STATS_DAYS:
        return [f"Days must be between 1 and {MAX_STATS_DAYS}."]
    return []


def validate_retention_days(retention_days: int) -> list[str]:
    if not 1 <= retention_days <= MAX_RETENTION_DAYS:
        return [f"Retention days must be between 1 and {MAX_RETENTION_DAYS}."]
    return []
