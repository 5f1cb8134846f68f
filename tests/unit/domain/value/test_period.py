"""Unit tests for Period and BudgetCaps."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from langrank.domain.value import BudgetCaps, Period


class TestPeriod:
    """Tests for the YYYY-MM month key."""

    @pytest.mark.parametrize("value", ["2025-01", "1999-12", "2030-10"])
    def test_accepts_month_keys(self, value):
        assert str(Period(value)) == value

    @pytest.mark.parametrize("value", ["2025-13", "2025-00", "2025-1", "25-01", "lifetime"])
    def test_rejects_malformed_keys(self, value):
        with pytest.raises(ValidationError):
            Period(value)

    def test_from_datetime_uses_utc(self):
        """23:30 on Jan 31 at UTC-2 is already February in UTC."""
        moment = datetime(2025, 1, 31, 23, 30, tzinfo=timezone(timedelta(hours=-2)))

        assert Period.from_datetime(moment) == Period("2025-02")

    def test_periods_compare_by_value(self):
        assert Period("2025-04") == Period("2025-04")
        assert Period("2025-04") != Period("2025-05")


class TestBudgetCaps:
    """Tests for cap consistency."""

    def test_defaults(self):
        caps = BudgetCaps()

        assert (caps.monthly_points, caps.language_points) == (10, 5)
        assert (caps.min_points, caps.max_points) == (1, 5)

    def test_vote_maximum_cannot_exceed_language_cap(self):
        with pytest.raises(ValidationError):
            BudgetCaps(language_points=3, max_points=5)
