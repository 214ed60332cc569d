"""
Slot storage for pool state.

A pool persists two named slots. PoolStore maps slot names onto keys of a
key-value backend and msgpack-encodes the slot records. Backends expose
``get``, ``put``, ``delete`` and a ``write_batch`` context manager; the LevelDB
backend lives in ``pairpool.db`` and an in-memory one is provided here.
"""
import logging
from contextlib import contextmanager
from typing import Optional

import msgpack

from pairpool.errors import StorageError

logger = logging.getLogger(__name__)

SLOT_PREFIX = b'slot:'


class MemoryDB:
    """Dict-backed key-value store with the same interface as ``DB``."""

    def __init__(self):
        self._data = {}
        self._closed = False

    def get(self, key: bytes) -> Optional[bytes]:
        if self._closed:
            raise StorageError("Database is closed")
        return self._data.get(key)

    def put(self, key: bytes, value: bytes):
        if self._closed:
            raise StorageError("Database is closed")
        self._data[key] = value

    def delete(self, key: bytes):
        if self._closed:
            raise StorageError("Database is closed")
        self._data.pop(key, None)

    def exists(self, key: bytes) -> bool:
        return self.get(key) is not None

    @contextmanager
    def write_batch(self):
        """
        Collect writes and apply them together when the block exits cleanly.

        If the block raises, nothing is applied.
        """
        if self._closed:
            raise StorageError("Database is closed")

        batch = _MemoryBatch()
        yield batch
        for op, key, value in batch.ops:
            if op == 'put':
                self._data[key] = value
            else:
                self._data.pop(key, None)

    def close(self):
        self._closed = True

    def is_closed(self) -> bool:
        return self._closed


class _MemoryBatch:
    def __init__(self):
        self.ops = []

    def put(self, key: bytes, value: bytes):
        self.ops.append(('put', key, value))

    def delete(self, key: bytes):
        self.ops.append(('delete', key, None))


class PoolStore:
    """
    Load and save slot records by name.

    Records are plain dicts. Integers wider than 64 bits cannot be packed by
    msgpack, so callers store amounts as decimal strings.
    """

    def __init__(self, db):
        self.db = db

    @staticmethod
    def _key(name: str) -> bytes:
        return SLOT_PREFIX + name.encode()

    def load(self, name: str) -> Optional[dict]:
        """Return the record stored under ``name``, or None if absent."""
        raw = self.db.get(self._key(name))
        if raw is None:
            return None
        try:
            return msgpack.unpackb(raw, raw=False)
        except (msgpack.UnpackException, ValueError) as e:
            logger.error(f"Corrupt record in slot {name}: {e}")
            raise StorageError(f"Corrupt record in slot {name}") from e

    def save(self, name: str, record: dict):
        self.db.put(self._key(name), msgpack.packb(record, use_bin_type=True))

    def save_many(self, records: dict):
        """Write several slots in one batch; either all land or none do."""
        encoded = {
            self._key(name): msgpack.packb(record, use_bin_type=True)
            for name, record in records.items()
        }
        with self.db.write_batch() as batch:
            for key, value in encoded.items():
                batch.put(key, value)
        logger.debug(f"Saved slots: {', '.join(records)}")

    def exists(self, name: str) -> bool:
        return self.db.get(self._key(name)) is not None
