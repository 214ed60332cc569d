"""
Error types raised by the pool core.

Every operation validates its inputs and computes the new state before
writing anything, so any of these errors means the pool was left untouched.
"""


class ValidationError(Exception):
    """Raised when validation fails."""
    pass


class AmountOverflowError(ValidationError, OverflowError):
    """An add, subtract or multiply left the unsigned 128-bit range."""
    pass


class DivideByZeroError(ValidationError, ZeroDivisionError):
    """A computed denominator was zero."""
    pass


class UnbalancedLiquidityError(ValidationError):
    """Deposit ratio does not match the current pool ratio."""

    def __init__(self, deposit1: int, deposit2: int, reserve1: int, reserve2: int):
        self.deposit1 = deposit1
        self.deposit2 = deposit2
        self.reserve1 = reserve1
        self.reserve2 = reserve2
        super().__init__(
            f"Unbalanced liquidity: deposit {deposit1}:{deposit2} "
            f"does not match pool {reserve1}:{reserve2}"
        )


class SlippageError(ValidationError):
    """Swap output fell below the caller's minimum."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Slippage: got {actual}, expected at least {expected}")


class StorageError(ValidationError):
    """State could not be read from or written to the host store."""
    pass
