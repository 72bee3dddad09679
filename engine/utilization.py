"""Utilization arithmetic and risk classification shared by every view."""

import math
from typing import Optional

from config.defaults import (
    RISK_OVERFLOW_THRESHOLD, RISK_THRESHOLD, WARNING_THRESHOLD,
    RISK_CLOSED, RISK_OVERFLOW, RISK_RISK, RISK_WARNING, RISK_OK,
    UTILIZATION_DECIMALS,
)


def round_half_up(value: float, decimals: int = UTILIZATION_DECIMALS) -> float:
    """Round halves away from zero for non-negative values (12.25 -> 12.3)."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def raw_utilization(occupied: int, capacity: int) -> float:
    if capacity <= 0:
        return 0.0
    return occupied / capacity * 100


def utilization_pct(occupied: int, capacity: int) -> float:
    """Utilization percent rounded to one decimal; 0 when capacity is 0."""
    return round_half_up(raw_utilization(occupied, capacity))


def available_seats(capacity: int, occupied: int) -> int:
    return max(0, capacity - occupied)


def get_risk_status(
    utilization: float,
    is_closed: bool = False,
    rule_config: Optional[dict] = None,
) -> str:
    """Classify a utilization percent.

    CLOSED > OVERFLOW (> 100) > RISK (95..100) > WARNING (85..<95) > OK.
    """
    cfg = rule_config or {}
    overflow = cfg.get("overflow_threshold", RISK_OVERFLOW_THRESHOLD)
    risk = cfg.get("risk_threshold", RISK_THRESHOLD)
    warning = cfg.get("warning_threshold", WARNING_THRESHOLD)

    if is_closed:
        return RISK_CLOSED
    if utilization > overflow:
        return RISK_OVERFLOW
    if utilization >= risk:
        return RISK_RISK
    if utilization >= warning:
        return RISK_WARNING
    return RISK_OK
