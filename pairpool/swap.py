"""
Constant-product swaps.

Implements x * y = k without fees. The output is what remains of the output
reserve once k is restored against the enlarged input reserve:

    remaining = k / (input_total + input_amount)
    output = output_total - remaining

``remaining`` is rounded up by default, so the trader receives the exact
curve output rounded down and the pool never ends a swap below k. FLOOR
rounds ``remaining`` down instead, matching ledgers that were built with plain
integer division; under FLOOR the output can exceed the exact curve by one
unit.
"""
import logging
from enum import Enum

from pairpool.checked_math import (
    checked_add,
    checked_div,
    checked_div_ceil,
    checked_mul,
    checked_sub,
    require_u128,
)
from pairpool.errors import SlippageError
from pairpool.pool_state import PoolState, TokenSelection
from pairpool.response import Response

logger = logging.getLogger(__name__)


class Rounding(str, Enum):
    POOL = 'pool'
    FLOOR = 'floor'


def calculate_output_amount(input_amount: int, input_total: int, output_total: int,
                            rounding: Rounding = Rounding.POOL) -> int:
    """
    Calculate swap output using the constant product formula.

    Args:
        input_amount: Amount paid into the pool
        input_total: Reserve of the input asset before the swap
        output_total: Reserve of the output asset before the swap
        rounding: How the remaining output reserve is rounded

    The deployed contract this pool replaces divided with FLOOR. POOL is the
    default because FLOOR can leave k below its pre-swap value.

    Returns:
        Amount of the output asset owed to the trader

    Raises:
        AmountOverflowError: k or the new input reserve exceeds u128
        DivideByZeroError: the new input reserve is zero (empty pool, zero input)
    """
    k = checked_mul(input_total, output_total)
    new_input_total = checked_add(input_total, input_amount)
    if Rounding(rounding) is Rounding.FLOOR:
        remaining = checked_div(k, new_input_total)
    else:
        remaining = checked_div_ceil(k, new_input_total)
    return checked_sub(output_total, remaining)


class SwapEngine:
    def __init__(self, state: PoolState, custody_address: str,
                 rounding: Rounding = Rounding.POOL):
        self.state = state
        self.custody_address = custody_address
        self.rounding = Rounding(rounding)

    def _reserves(self, selection: TokenSelection):
        input_token = self.state.slot(selection)
        output_token = self.state.slot(selection.other)
        return input_token, output_token

    def quote(self, selection: TokenSelection, input_amount: int) -> int:
        """Output a swap would produce right now, without committing it."""
        selection = TokenSelection.parse(selection)
        require_u128(input_amount, "input_amount")
        input_token, output_token = self._reserves(selection)
        return calculate_output_amount(
            input_amount, input_token.amount, output_token.amount, self.rounding
        )

    def swap(self, sender: str, selection: TokenSelection, input_amount: int,
             min_output: int) -> Response:
        """
        Swap ``input_amount`` of the selected asset for the other one.

        Args:
            sender: Trader; pays the input and receives the output
            selection: Slot of the input asset
            input_amount: Amount paid in
            min_output: Smallest acceptable output

        Returns:
            Response with the settlement transfers and swap attributes

        Raises:
            SlippageError: computed output is below ``min_output``
            AmountOverflowError, DivideByZeroError: see calculate_output_amount
        """
        selection = TokenSelection.parse(selection)
        require_u128(input_amount, "input_amount")
        require_u128(min_output, "min_output")

        input_token, output_token = self._reserves(selection)

        output_amount = calculate_output_amount(
            input_amount, input_token.amount, output_token.amount, self.rounding
        )
        logger.debug(
            f"Swap quote: {input_amount} in against {input_token.amount}:{output_token.amount} "
            f"-> {output_amount} out"
        )

        if output_amount < min_output:
            logger.warning(f"Swap rejected: output {output_amount} below minimum {min_output}")
            raise SlippageError(expected=min_output, actual=output_amount)

        new_input_total = checked_add(input_token.amount, input_amount)
        new_output_total = checked_sub(output_token.amount, output_amount)

        if selection is TokenSelection.TOKEN1:
            self.state.write(new_input_total, new_output_total)
        else:
            self.state.write(new_output_total, new_input_total)

        response = Response()
        if input_amount > 0:
            pull = input_token.asset.transfer_from(sender, self.custody_address, input_amount)
            if pull is not None:
                response.add_message(pull)
        if output_amount > 0:
            response.add_message(output_token.asset.transfer(sender, output_amount))

        response.add_attributes([
            ('action', 'swap'),
            ('input_token', selection.value),
            ('input_amount', input_amount),
            ('output_amount', output_amount),
        ])

        logger.info(
            f"Swap by {sender}: {input_amount} {input_token.asset} -> "
            f"{output_amount} {output_token.asset}"
        )
        return response
