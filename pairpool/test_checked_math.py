"""
Checked u128 arithmetic: every failure is explicit, nothing wraps.
"""
import pytest

from pairpool.checked_math import (
    U128_MAX,
    checked_add,
    checked_div,
    checked_div_ceil,
    checked_mul,
    checked_sub,
    require_u128,
)
from pairpool.errors import AmountOverflowError, DivideByZeroError, ValidationError


class TestCheckedAdd:
    def test_in_range(self):
        assert checked_add(2, 3) == 5

    def test_exactly_max(self):
        assert checked_add(U128_MAX - 1, 1) == U128_MAX

    def test_overflow(self):
        with pytest.raises(AmountOverflowError):
            checked_add(U128_MAX, 1)


class TestCheckedSub:
    def test_in_range(self):
        assert checked_sub(5, 3) == 2

    def test_to_zero(self):
        assert checked_sub(7, 7) == 0

    def test_underflow_is_overflow_error(self):
        with pytest.raises(OverflowError):
            checked_sub(3, 4)


class TestCheckedMul:
    def test_in_range(self):
        assert checked_mul(150, 300) == 45000

    def test_boundary(self):
        assert checked_mul(1 << 64, (1 << 64) - 1) < U128_MAX

    def test_overflow(self):
        with pytest.raises(AmountOverflowError):
            checked_mul(1 << 64, 1 << 64)


class TestCheckedDiv:
    def test_floor(self):
        assert checked_div(10000, 101) == 99

    def test_ceil(self):
        assert checked_div_ceil(10000, 101) == 100
        assert checked_div_ceil(45000, 200) == 225

    def test_ceil_of_zero(self):
        assert checked_div_ceil(0, 7) == 0

    def test_divide_by_zero(self):
        with pytest.raises(DivideByZeroError):
            checked_div(1, 0)
        with pytest.raises(ZeroDivisionError):
            checked_div_ceil(1, 0)


class TestRequireU128:
    def test_accepts_bounds(self):
        assert require_u128(0) == 0
        assert require_u128(U128_MAX) == U128_MAX

    def test_rejects_negative(self):
        with pytest.raises(AmountOverflowError):
            require_u128(-1)

    def test_rejects_too_large(self):
        with pytest.raises(AmountOverflowError):
            require_u128(U128_MAX + 1)

    @pytest.mark.parametrize("value", [1.5, "10", None, True])
    def test_rejects_non_integers(self, value):
        with pytest.raises(ValidationError, match="must be an integer"):
            require_u128(value, "deposit")
