"""
Two-asset constant-product liquidity pool core.
"""
from pairpool.asset import Native, Tokenized
from pairpool.pool import Pool
from pairpool.pool_state import PoolState, TokenSelection
from pairpool.storage import MemoryDB, PoolStore
from pairpool.swap import Rounding

__all__ = [
    'Native',
    'Tokenized',
    'Pool',
    'PoolState',
    'TokenSelection',
    'MemoryDB',
    'PoolStore',
    'Rounding',
]
