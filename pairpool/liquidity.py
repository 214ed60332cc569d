"""
Balanced liquidity deposits.

A deposit into an active pool must preserve the current reserve ratio
exactly. The check cross-multiplies instead of dividing, so no rounding is
involved:

    deposit2 * reserve1 == deposit1 * reserve2

An empty pool accepts any pair; the first deposit sets the price.
"""
import logging

from pairpool.checked_math import checked_add, checked_div, checked_mul, require_u128
from pairpool.errors import UnbalancedLiquidityError
from pairpool.pool_state import PoolState
from pairpool.response import Response

logger = logging.getLogger(__name__)


class LiquidityEngine:
    def __init__(self, state: PoolState, custody_address: str):
        """
        Args:
            state: Pool reserves to validate against and update
            custody_address: Address that receives deposited tokens
        """
        self.state = state
        self.custody_address = custody_address

    def provide_liquidity(self, sender: str, deposit1: int, deposit2: int) -> Response:
        """
        Validate and apply a deposit of both assets.

        Args:
            sender: Depositor; owner of any tokenized funds to pull
            deposit1: Amount of token1
            deposit2: Amount of token2

        Returns:
            Response with a TransferFrom per tokenized slot and the audit
            attributes ``token1_amount`` and ``token2_amount``

        Raises:
            UnbalancedLiquidityError: deposit ratio differs from the pool ratio
            AmountOverflowError: cross product or new reserve exceeds u128
        """
        require_u128(deposit1, "deposit1")
        require_u128(deposit2, "deposit2")

        asset1, reserve1, asset2, reserve2 = self.state.read()

        if reserve1 != 0 or reserve2 != 0:
            if checked_mul(deposit2, reserve1) != checked_mul(deposit1, reserve2):
                logger.warning(
                    f"Rejected deposit {deposit1}:{deposit2} against pool {reserve1}:{reserve2}"
                )
                raise UnbalancedLiquidityError(deposit1, deposit2, reserve1, reserve2)

        new_reserve1 = checked_add(reserve1, deposit1)
        new_reserve2 = checked_add(reserve2, deposit2)

        self.state.write(new_reserve1, new_reserve2)

        response = Response()
        for asset, amount in ((asset1, deposit1), (asset2, deposit2)):
            message = asset.transfer_from(sender, self.custody_address, amount)
            if message is not None:
                response.add_message(message)

        response.add_attributes([
            ('token1_amount', deposit1),
            ('token2_amount', deposit2),
        ])

        logger.info(
            f"Liquidity provided by {sender}: {deposit1} {asset1} + {deposit2} {asset2}, "
            f"reserves now {new_reserve1}:{new_reserve2}"
        )
        return response

    def quote_deposit(self, deposit1: int) -> int:
        """
        Calculate the token2 amount that balances a token1 deposit.

        Maintains pool ratio: deposit2 / deposit1 = reserve2 / reserve1

        Raises:
            DivideByZeroError: reserve1 is zero, so there is no ratio to match
            UnbalancedLiquidityError: no whole token2 amount balances deposit1
        """
        require_u128(deposit1, "deposit1")
        _, reserve1, _, reserve2 = self.state.read()

        numerator = checked_mul(deposit1, reserve2)
        deposit2 = checked_div(numerator, reserve1)
        if checked_mul(deposit2, reserve1) != numerator:
            raise UnbalancedLiquidityError(deposit1, deposit2, reserve1, reserve2)
        return deposit2
