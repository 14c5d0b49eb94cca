"""
Tests for Allocation Engine.

Covers:
- Largest-remainder allocation by integer ratios
- Equal allocation
- Tie-breaking by ascending index
- Negative totals
- Working scale selection (total, caller, engine default)
- Edge cases and error handling
- Structured log output
"""

import pytest

from money_engines.allocation import AllocationEngine
from money_kernel.domain.big_decimal import BigDecimal
from money_kernel.domain.money import Money
from money_kernel.exceptions import InvalidPartitionError, RoundingNecessaryError


def _strs(parts) -> list[str]:
    return [str(part) for part in parts]


class TestAllocateMoney:
    """Tests for allocating Money totals."""

    def setup_method(self):
        self.engine = AllocationEngine()

    def test_three_way_split(self):
        """The leftover cent goes to the first part on a full tie."""
        parts = self.engine.allocate(Money.of("10.00", "USD"), [1, 1, 1])
        assert _strs(parts) == ["3.34 USD", "3.33 USD", "3.33 USD"]

    def test_weighted_split(self):
        parts = self.engine.allocate(Money.of("100.00", "USD"), [1, 2, 3])
        assert _strs(parts) == ["16.67 USD", "33.33 USD", "50.00 USD"]

    def test_largest_remainder_wins(self):
        """Remainders 1 and 2 (of 3): the second part receives the unit."""
        parts = self.engine.allocate(Money.of("0.10", "USD"), [1, 2])
        assert _strs(parts) == ["0.03 USD", "0.07 USD"]

    def test_more_parts_than_units(self):
        parts = self.engine.allocate(Money.of("0.05", "USD"), [1] * 7)
        assert _strs(parts) == ["0.01 USD"] * 5 + ["0.00 USD"] * 2

    def test_zero_decimal_currency(self):
        parts = self.engine.allocate(Money.of("100", "JPY"), [1, 1, 1])
        assert _strs(parts) == ["34 JPY", "33 JPY", "33 JPY"]

    def test_negative_total(self):
        """Floor shares on signed counts; the parts still sum to the total."""
        total = Money.of("-10.00", "USD")
        parts = self.engine.allocate(total, [1, 1, 1])
        assert _strs(parts) == ["-3.33 USD", "-3.33 USD", "-3.34 USD"]
        assert Money.total(*parts) == total

    def test_zero_total(self):
        parts = self.engine.allocate(Money.zero("EUR"), [2, 5])
        assert _strs(parts) == ["0.00 EUR", "0.00 EUR"]

    def test_single_ratio_gets_everything(self):
        total = Money.of("12.34", "GBP")
        assert self.engine.allocate(total, [7]) == (total,)

    def test_parts_carry_currency(self):
        parts = self.engine.allocate(Money.of("9.99", "EUR"), [3, 1])
        assert all(part.currency_code == "EUR" for part in parts)

    def test_returns_tuple_in_ratio_order(self):
        parts = self.engine.allocate(Money.of("1.00", "USD"), [3, 1])
        assert isinstance(parts, tuple)
        assert _strs(parts) == ["0.75 USD", "0.25 USD"]

    def test_wider_scale(self):
        parts = self.engine.allocate(Money.of("10.00", "USD"), [1, 1, 1], scale=4)
        assert _strs(parts) == ["3.3334 USD", "3.3333 USD", "3.3333 USD"]

    def test_money_keeps_own_wide_scale(self):
        total = Money.of("1.0000", "USD", scale=4)
        parts = self.engine.allocate(total, [1, 2])
        assert _strs(parts) == ["0.3333 USD", "0.6667 USD"]

    def test_narrow_engine_default_keeps_currency_scale(self):
        engine = AllocationEngine(default_scale=0)
        parts = engine.allocate(Money.of("10.00", "USD"), [1, 1, 1])
        assert _strs(parts) == ["3.34 USD", "3.33 USD", "3.33 USD"]

    def test_narrow_caller_scale_keeps_currency_scale(self):
        parts = self.engine.allocate(Money.of("0.05", "EUR"), [1, 1], scale=0)
        assert _strs(parts) == ["0.03 EUR", "0.02 EUR"]

    def test_engine_default_narrows_wide_money_exactly(self):
        engine = AllocationEngine(default_scale=2)
        parts = engine.allocate(Money.of("1.0000", "USD", scale=4), [1, 1])
        assert _strs(parts) == ["0.50 USD", "0.50 USD"]

    def test_generator_ratios(self):
        parts = self.engine.allocate(Money.of("1.00", "USD"), (r for r in [3, 1]))
        assert _strs(parts) == ["0.75 USD", "0.25 USD"]

    def test_deterministic(self):
        total = Money.of("1234.56", "USD")
        ratios = [7, 11, 13, 17]
        first = self.engine.allocate(total, ratios)
        for _ in range(5):
            assert self.engine.allocate(total, ratios) == first


class TestAllocateDecimal:
    """Tests for allocating BigDecimal totals."""

    def setup_method(self):
        self.engine = AllocationEngine()

    def test_own_scale(self):
        parts = self.engine.allocate(BigDecimal.parse("1.000"), [1, 1])
        assert _strs(parts) == ["0.500", "0.500"]
        assert all(isinstance(part, BigDecimal) for part in parts)

    def test_integer_scale(self):
        parts = self.engine.allocate(BigDecimal.parse("10"), [1, 1, 1])
        assert _strs(parts) == ["4", "3", "3"]

    def test_coercible_total(self):
        assert _strs(self.engine.allocate("0.07", [1, 1])) == ["0.04", "0.03"]

    def test_caller_scale(self):
        parts = self.engine.allocate(BigDecimal.parse("1"), [1, 2], scale=2)
        assert _strs(parts) == ["0.33", "0.67"]

    def test_narrower_scale_must_be_exact(self):
        with pytest.raises(RoundingNecessaryError):
            self.engine.allocate(BigDecimal.parse("1.25"), [1, 1], scale=1)

    def test_narrower_exact_scale_allowed(self):
        parts = self.engine.allocate(BigDecimal.parse("1.20"), [1, 1], scale=1)
        assert _strs(parts) == ["0.6", "0.6"]

    def test_engine_default_scale(self):
        engine = AllocationEngine(default_scale=4)
        parts = engine.allocate(BigDecimal.parse("1"), [1, 2])
        assert _strs(parts) == ["0.3333", "0.6667"]
        assert engine.default_scale == 4

    def test_float_total_rejected(self):
        with pytest.raises(TypeError):
            self.engine.allocate(1.5, [1, 1])


class TestAllocateEqual:
    """Tests for allocate_equal."""

    def setup_method(self):
        self.engine = AllocationEngine()

    def test_equal_split(self):
        parts = self.engine.allocate_equal(Money.of("10.00", "USD"), 3)
        assert _strs(parts) == ["3.34 USD", "3.33 USD", "3.33 USD"]

    def test_parts_differ_by_at_most_one_unit(self):
        parts = self.engine.allocate_equal(Money.of("100.00", "USD"), 7)
        units = [part.minor_units for part in parts]
        assert max(units) - min(units) <= 1
        assert sum(units) == 10000

    @pytest.mark.parametrize("count", [0, -1, True, 2.0])
    def test_invalid_count(self, count):
        with pytest.raises(InvalidPartitionError):
            self.engine.allocate_equal(Money.of("1.00", "USD"), count)


class TestValidation:
    """Tests for ratio validation."""

    def setup_method(self):
        self.engine = AllocationEngine()

    @pytest.mark.parametrize("ratios", [
        [],
        [1, 0],
        [1, -1],
        [1, 1.5],
        [True, 1],
        ["1", 1],
    ])
    def test_invalid_ratios(self, ratios):
        with pytest.raises(InvalidPartitionError) as exc_info:
            self.engine.allocate(Money.of("1.00", "USD"), ratios)
        assert exc_info.value.code == "INVALID_PARTITION"

    @pytest.mark.parametrize("scale", [-1, True, 1.5])
    def test_invalid_default_scale(self, scale):
        with pytest.raises(ValueError):
            AllocationEngine(default_scale=scale)

    def test_ratios_may_be_any_sequence(self):
        parts = self.engine.allocate(Money.of("1.00", "USD"), (1, 1))
        assert _strs(parts) == ["0.50 USD", "0.50 USD"]


class TestLogging:
    """Tests for structured allocation log records."""

    def test_started_and_completed(self, captured_logs):
        AllocationEngine().allocate(Money.of("10.00", "USD"), [1, 1, 1])

        logs = captured_logs()
        started = [r for r in logs if r["message"] == "allocation_started"]
        completed = [r for r in logs if r["message"] == "allocation_completed"]
        assert len(started) == 1
        assert started[0]["part_count"] == 3
        assert started[0]["total"] == "10.00 USD"
        assert completed[0]["leftover_units"] == 1
        assert completed[0]["parts"] == ["3.34", "3.33", "3.33"]

    def test_engine_trace_emitted(self, captured_logs):
        AllocationEngine().allocate(Money.of("10.00", "USD"), [1, 1, 1])

        traces = [r for r in captured_logs() if r["message"] == "MONEY_ENGINE_TRACE"]
        assert len(traces) == 1
        assert traces[0]["engine_name"] == "allocation"
        assert traces[0]["engine_version"] == "1.0"
        assert len(traces[0]["input_fingerprint"]) == 16

    def test_trace_fingerprint_is_stable(self, captured_logs):
        engine = AllocationEngine()
        engine.allocate(Money.of("10.00", "USD"), [1, 2])
        engine.allocate(total=Money.of("10.00", "USD"), ratios=[1, 2])
        engine.allocate(Money.of("10.00", "USD"), [2, 1])

        fps = [r["input_fingerprint"] for r in captured_logs() if r["message"] == "MONEY_ENGINE_TRACE"]
        assert fps[0] == fps[1]
        assert fps[0] != fps[2]

    def test_no_trace_on_failure(self, captured_logs):
        with pytest.raises(InvalidPartitionError):
            AllocationEngine().allocate(Money.of("1.00", "USD"), [])
        assert not [r for r in captured_logs() if r["message"] == "MONEY_ENGINE_TRACE"]
