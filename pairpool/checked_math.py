"""
Checked unsigned 128-bit arithmetic.

Python integers never overflow, so the reserve range is enforced here
explicitly. Every helper either returns an exact in-range result or raises;
nothing wraps, truncates or saturates.
"""
from pairpool.errors import AmountOverflowError, DivideByZeroError, ValidationError

U128_BITS = 128
U128_MAX = (1 << U128_BITS) - 1


def require_u128(value: int, name: str = "amount") -> int:
    """
    Validate that an operand is an unsigned 128-bit integer.

    Args:
        value: Operand to check
        name: Label used in the error message

    Returns:
        The value unchanged

    Raises:
        ValidationError: value is not an int
        AmountOverflowError: value is negative or above U128_MAX
    """
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > U128_MAX:
        raise AmountOverflowError(f"{name} {value} is outside the u128 range")
    return value


def checked_add(a: int, b: int) -> int:
    result = a + b
    if result > U128_MAX:
        raise AmountOverflowError(f"Overflow: {a} + {b}")
    return result


def checked_sub(a: int, b: int) -> int:
    result = a - b
    if result < 0:
        raise AmountOverflowError(f"Underflow: {a} - {b}")
    return result


def checked_mul(a: int, b: int) -> int:
    result = a * b
    if result > U128_MAX:
        raise AmountOverflowError(f"Overflow: {a} * {b}")
    return result


def checked_div(a: int, b: int) -> int:
    """Floor division; operands are non-negative so this truncates toward zero."""
    if b == 0:
        raise DivideByZeroError(f"Cannot divide {a} by zero")
    return a // b


def checked_div_ceil(a: int, b: int) -> int:
    """Division rounded up; never exceeds ``a`` for b >= 1, so it cannot overflow."""
    if b == 0:
        raise DivideByZeroError(f"Cannot divide {a} by zero")
    quotient, remainder = divmod(a, b)
    if remainder:
        quotient += 1
    return quotient
