"""Tests for savings goal input coercion."""

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from venus.core.modules.savings.validators import is_missing, parse_amount, parse_lock_until
from venus.errors import ValidationError


class TestParseAmount:
    """Tests for amount coercion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.01, Decimal("0.01")), (5, Decimal("5")), ("12.50", Decimal("12.50")), (" 3 ", Decimal("3"))],
    )
    def test_positive_amounts_accepted(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.parametrize("value", [0, -5, "0", "-0.01", "abc", "NaN", "Infinity", True, [1]])
    def test_invalid_amounts_rejected(self, value):
        with pytest.raises(ValidationError, match="amount must be a positive number"):
            parse_amount(value)

    @pytest.mark.parametrize("value", ["1e400", "1e-400", "0.12345678901234567890123456789012345"])
    def test_unrepresentable_amounts_rejected(self, value):
        """Test that amounts which overflow a JSON number or exceed Decimal128 precision are rejected."""
        with pytest.raises(ValidationError, match="amount must be a positive number"):
            parse_amount(value)

    def test_max_decimal128_precision_accepted(self):
        value = "0.1234567890123456789012345678901234"
        assert parse_amount(value) == Decimal(value)


class TestParseLockUntil:
    def test_iso_string(self):
        assert parse_lock_until("2025-12-31") == date(2025, 12, 31)

    def test_date_passthrough(self):
        assert parse_lock_until(date(2025, 12, 31)) == date(2025, 12, 31)

    def test_datetime_truncated_to_date(self):
        assert parse_lock_until(datetime(2025, 12, 31, 15, 30, tzinfo=UTC)) == date(2025, 12, 31)

    @pytest.mark.parametrize("value", ["31/12/2025", "tomorrow", 20251231])
    def test_invalid_dates_rejected(self, value):
        with pytest.raises(ValidationError, match="lock date"):
            parse_lock_until(value)


class TestIsMissing:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value):
        assert is_missing(value) is True

    @pytest.mark.parametrize("value", ["x", 0, False])
    def test_present(self, value):
        """Test that falsy non-string values count as present and are validated later."""
        assert is_missing(value) is False
