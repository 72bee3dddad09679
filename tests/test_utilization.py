"""Tests for utilization arithmetic, risk classification and year-month helpers."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from engine.errors import InvalidInputError
from engine.months import (
    parse_year_month, format_year_month, month_name,
    months_after_through_december, december_of,
)
from engine.utilization import (
    round_half_up, raw_utilization, utilization_pct, available_seats, get_risk_status,
)


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(12.25) == 12.3
        assert round_half_up(87.5, decimals=0) == 88.0

    def test_plain_values_unchanged(self):
        assert round_half_up(50.0) == 50.0
        assert round_half_up(33.33333) == 33.3

    def test_utilization_pct(self):
        assert utilization_pct(1, 3) == 33.3
        assert utilization_pct(2, 3) == 66.7
        assert utilization_pct(45, 50) == 90.0


class TestRawUtilization:
    def test_zero_capacity_is_zero(self):
        assert raw_utilization(10, 0) == 0.0
        assert utilization_pct(10, 0) == 0.0

    def test_over_capacity(self):
        assert raw_utilization(55, 50) == pytest.approx(110.0)

    def test_available_never_negative(self):
        assert available_seats(50, 55) == 0
        assert available_seats(50, 20) == 30


class TestRiskStatus:
    def test_bands(self):
        assert get_risk_status(50.0) == "OK"
        assert get_risk_status(84.9) == "OK"
        assert get_risk_status(85.0) == "WARNING"
        assert get_risk_status(94.9) == "WARNING"

    def test_boundaries(self):
        assert get_risk_status(95.0) == "RISK"
        assert get_risk_status(100.0) == "RISK"
        assert get_risk_status(100.01) == "OVERFLOW"

    def test_closed_wins(self):
        assert get_risk_status(150.0, is_closed=True) == "CLOSED"
        assert get_risk_status(0.0, is_closed=True) == "CLOSED"

    def test_rule_config_overrides(self):
        cfg = {"warning_threshold": 70.0, "risk_threshold": 80.0, "overflow_threshold": 90.0}
        assert get_risk_status(72.0, rule_config=cfg) == "WARNING"
        assert get_risk_status(80.0, rule_config=cfg) == "RISK"
        assert get_risk_status(90.5, rule_config=cfg) == "OVERFLOW"

    def test_partial_rule_config_keeps_defaults(self):
        cfg = {"warning_threshold": 50.0}
        assert get_risk_status(60.0, rule_config=cfg) == "WARNING"
        assert get_risk_status(96.0, rule_config=cfg) == "RISK"


class TestYearMonths:
    def test_parse_and_format(self):
        assert parse_year_month("2025-03") == (2025, 3)
        assert format_year_month(2025, 3) == "2025-03"

    def test_invalid(self):
        with pytest.raises(InvalidInputError):
            parse_year_month("2025-13")
        with pytest.raises(InvalidInputError):
            parse_year_month("March 2025")
        with pytest.raises(InvalidInputError):
            parse_year_month(None)

    def test_months_after_through_december(self):
        assert months_after_through_december("2025-10") == ["2025-11", "2025-12"]
        assert months_after_through_december("2025-12") == []

    def test_december_and_name(self):
        assert december_of("2025-04") == "2025-12"
        assert month_name("2025-04") == "April"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
