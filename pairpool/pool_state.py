"""
Two-slot pool reserve state.

Each slot holds an amount and the asset it is denominated in. The assets are
fixed when the pool is instantiated; only the amounts change afterwards, and
both amounts are always written together.
"""
import logging
from enum import Enum

from pairpool.asset import Asset, asset_from_dict
from pairpool.checked_math import require_u128
from pairpool.errors import StorageError, ValidationError
from pairpool.storage import PoolStore

logger = logging.getLogger(__name__)


class TokenSelection(str, Enum):
    """Names one of the two pool slots."""
    TOKEN1 = 'token1'
    TOKEN2 = 'token2'

    @classmethod
    def parse(cls, value) -> 'TokenSelection':
        """Accept a member or its slot name."""
        try:
            return cls(value)
        except ValueError as e:
            raise ValidationError(f"Unknown token selection: {value!r}") from e

    @property
    def other(self) -> 'TokenSelection':
        if self is TokenSelection.TOKEN1:
            return TokenSelection.TOKEN2
        return TokenSelection.TOKEN1


class PoolToken:
    """
    One slot of the pool: a reserve amount and its asset.
    """

    def __init__(self, amount: int, asset: Asset):
        self.amount = require_u128(amount)
        self.asset = asset

    @classmethod
    def from_dict(cls, data: dict) -> 'PoolToken':
        if not isinstance(data, dict):
            raise StorageError(f"Malformed pool slot: {data!r}")
        amount = data.get('amount')
        # Amounts are written as plain decimal strings; anything else is corrupt
        if not isinstance(amount, str) or not (amount.isascii() and amount.isdigit()):
            raise StorageError(f"Malformed pool slot amount: {amount!r}")
        try:
            return cls(int(amount), asset_from_dict(data.get('asset')))
        except ValidationError as e:
            raise StorageError(f"Malformed pool slot: {data!r}") from e

    def to_dict(self) -> dict:
        """
        Convert to dict for storage.

        The amount is kept as a string; msgpack cannot carry 128-bit ints.
        """
        return {
            'amount': str(self.amount),
            'asset': self.asset.to_dict(),
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, PoolToken):
            return NotImplemented
        return self.amount == other.amount and self.asset == other.asset

    def __repr__(self) -> str:
        return f"PoolToken(amount={self.amount}, asset={self.asset!r})"


class PoolState:
    """
    Reserve pair of a single pool, backed by an injected PoolStore.

    This class only stores; ratio and pricing rules belong to the engines.
    """

    SLOTS = (TokenSelection.TOKEN1, TokenSelection.TOKEN2)

    def __init__(self, store: PoolStore):
        self.store = store

    @classmethod
    def instantiate(cls, store: PoolStore, asset1: Asset, asset2: Asset) -> 'PoolState':
        """
        Create a new pool with both reserves at zero.

        Raises:
            ValidationError: a pool already exists in this store
        """
        if any(store.exists(slot.value) for slot in cls.SLOTS):
            raise ValidationError("Pool already instantiated")

        store.save_many({
            TokenSelection.TOKEN1.value: PoolToken(0, asset1).to_dict(),
            TokenSelection.TOKEN2.value: PoolToken(0, asset2).to_dict(),
        })
        logger.info(f"Pool instantiated: token1={asset1}, token2={asset2}")
        return cls(store)

    def slot(self, selection: TokenSelection) -> PoolToken:
        """Load one slot by name."""
        selection = TokenSelection.parse(selection)
        data = self.store.load(selection.value)
        if data is None:
            raise StorageError(f"Pool slot {selection.value} not found")
        return PoolToken.from_dict(data)

    def read(self) -> tuple:
        """
        Returns:
            (asset1, amount1, asset2, amount2)
        """
        token1 = self.slot(TokenSelection.TOKEN1)
        token2 = self.slot(TokenSelection.TOKEN2)
        return token1.asset, token1.amount, token2.asset, token2.amount

    def write(self, amount1: int, amount2: int):
        """Replace both reserve amounts in a single batch."""
        token1 = self.slot(TokenSelection.TOKEN1)
        token2 = self.slot(TokenSelection.TOKEN2)
        token1.amount = require_u128(amount1, "amount1")
        token2.amount = require_u128(amount2, "amount2")

        self.store.save_many({
            TokenSelection.TOKEN1.value: token1.to_dict(),
            TokenSelection.TOKEN2.value: token2.to_dict(),
        })

    def invariant(self) -> int:
        """Constant product k = amount1 * amount2 (unbounded, for reporting)."""
        _, amount1, _, amount2 = self.read()
        return amount1 * amount2

    def is_active(self) -> bool:
        """True once either reserve is non-zero."""
        _, amount1, _, amount2 = self.read()
        return amount1 > 0 or amount2 > 0

    def __repr__(self) -> str:
        asset1, amount1, asset2, amount2 = self.read()
        return (
            f"PoolState("
            f"token1={amount1} {asset1}, "
            f"token2={amount2} {asset2})"
        )
