"""
Host-facing pool object.

Wires the reserve state, both engines and the custody address together, and
reports every operation to the log and, when configured, to a PoolMonitor.
"""
import logging
import time
from decimal import Decimal
from typing import Optional

from pairpool.asset import Asset
from pairpool.errors import ValidationError
from pairpool.liquidity import LiquidityEngine
from pairpool.monitoring import PoolMonitor
from pairpool.pool_state import PoolState, TokenSelection
from pairpool.response import Response
from pairpool.storage import PoolStore
from pairpool.swap import Rounding, SwapEngine

logger = logging.getLogger(__name__)


class Pool:
    def __init__(self, store: PoolStore, custody_address: str,
                 monitor: Optional[PoolMonitor] = None,
                 rounding: Rounding = Rounding.POOL):
        self.state = PoolState(store)
        self.custody_address = custody_address
        self.monitor = monitor
        self.liquidity = LiquidityEngine(self.state, custody_address)
        self.swaps = SwapEngine(self.state, custody_address, rounding)

    @classmethod
    def instantiate(cls, store: PoolStore, asset1: Asset, asset2: Asset,
                    custody_address: str, **kwargs) -> 'Pool':
        """Create a new empty pool in ``store`` and return it."""
        PoolState.instantiate(store, asset1, asset2)
        pool = cls(store, custody_address, **kwargs)
        pool._report_reserves()
        return pool

    @classmethod
    def open(cls, store: PoolStore, custody_address: str, **kwargs) -> 'Pool':
        """Attach to a pool that already exists in ``store``."""
        pool = cls(store, custody_address, **kwargs)
        # Fails with StorageError if the slots are missing
        pool.state.read()
        return pool

    def _run(self, operation: str, fn, *args) -> Response:
        start = time.perf_counter()
        try:
            response = fn(*args)
        except ValidationError as e:
            logger.warning(f"{operation} failed: {e}")
            if self.monitor:
                self.monitor.record_operation(operation, type(e).__name__, time.perf_counter() - start)
            raise

        if self.monitor:
            self.monitor.record_operation(operation, 'success', time.perf_counter() - start)
        self._report_reserves()
        return response

    def _report_reserves(self):
        if self.monitor:
            _, amount1, _, amount2 = self.state.read()
            self.monitor.update_reserves(amount1, amount2)

    def provide_liquidity(self, sender: str, deposit1: int, deposit2: int) -> Response:
        return self._run('provide_liquidity', self.liquidity.provide_liquidity,
                         sender, deposit1, deposit2)

    def swap(self, sender: str, selection: TokenSelection, input_amount: int,
             min_output: int = 0) -> Response:
        return self._run('swap', self.swaps.swap, sender, selection, input_amount, min_output)

    def quote_swap(self, selection: TokenSelection, input_amount: int) -> int:
        return self.swaps.quote(selection, input_amount)

    def quote_deposit(self, deposit1: int) -> int:
        return self.liquidity.quote_deposit(deposit1)

    def query(self) -> dict:
        """
        Snapshot of the pool for display.

        Price is token2 per token1, or None while token1 has no reserve.
        """
        asset1, amount1, asset2, amount2 = self.state.read()
        price = None
        if amount1 > 0:
            price = Decimal(amount2) / Decimal(amount1)
        return {
            'token1': {'asset': asset1.to_dict(), 'amount': amount1},
            'token2': {'asset': asset2.to_dict(), 'amount': amount2},
            'k': amount1 * amount2,
            'price': price,
        }

    def __repr__(self) -> str:
        return f"Pool(custody={self.custody_address}, state={self.state!r})"
