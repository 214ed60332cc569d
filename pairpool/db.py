"""
LevelDB backend for pool storage.
"""
import plyvel
import logging
from typing import Optional
from contextlib import contextmanager

from pairpool.errors import StorageError
from pairpool.storage import MemoryDB

logger = logging.getLogger(__name__)


class DB:
    def __init__(self, db_path: str, create_if_missing: bool = True,
                 write_buffer_size: int = 4 * 1024 * 1024,  # 4MB
                 max_open_files: int = 100):
        """
        Open a LevelDB database.

        Args:
            db_path: Path to database directory
            create_if_missing: Create database if it doesn't exist
            write_buffer_size: Size of write buffer
            max_open_files: Maximum number of open files
        """
        try:
            self._db = plyvel.DB(
                db_path,
                create_if_missing=create_if_missing,
                write_buffer_size=write_buffer_size,
                max_open_files=max_open_files,
            )
            self._closed = False
            logger.info(f"Database opened at {db_path}")
        except plyvel.Error as e:
            logger.error(f"Failed to open database at {db_path}: {e}")
            raise StorageError(f"Failed to open database at {db_path}") from e

    def get(self, key: bytes) -> Optional[bytes]:
        """
        Get value by key.

        Returns None if key doesn't exist.
        """
        if self._closed:
            raise StorageError("Database is closed")

        try:
            return self._db.get(key)
        except plyvel.Error as e:
            logger.error(f"Error getting key {key!r}: {e}")
            raise StorageError(f"Error getting key {key!r}") from e

    def put(self, key: bytes, value: bytes):
        """Put a key-value pair."""
        if self._closed:
            raise StorageError("Database is closed")

        try:
            self._db.put(key, value, sync=True)
        except plyvel.Error as e:
            logger.error(f"Error putting key {key!r}: {e}")
            raise StorageError(f"Error putting key {key!r}") from e

    def delete(self, key: bytes):
        """Delete a key."""
        if self._closed:
            raise StorageError("Database is closed")

        try:
            self._db.delete(key)
        except plyvel.Error as e:
            logger.error(f"Error deleting key {key!r}: {e}")
            raise StorageError(f"Error deleting key {key!r}") from e

    def exists(self, key: bytes) -> bool:
        """Check if key exists."""
        return self.get(key) is not None

    @contextmanager
    def write_batch(self):
        """
        Context manager for atomic batch writes.

        Example:
            with db.write_batch() as batch:
                batch.put(b'key1', b'value1')
                batch.put(b'key2', b'value2')
        """
        if self._closed:
            raise StorageError("Database is closed")

        # transaction=True discards the batch if the block raises
        try:
            with self._db.write_batch(transaction=True, sync=True) as batch:
                yield batch
        except plyvel.Error as e:
            logger.error(f"Error in batch write: {e}")
            raise StorageError("Batch write failed") from e

    def close(self):
        """Close the database."""
        if not self._closed:
            self._db.close()
            self._closed = True
            logger.info("Database closed")

    def is_closed(self) -> bool:
        """Check if database is closed."""
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def open_db(config):
    """
    Open the backend described by a ``DatabaseConfig``.
    """
    if config.backend == 'memory':
        return MemoryDB()
    if config.backend == 'leveldb':
        return DB(
            config.path,
            write_buffer_size=config.write_buffer_size,
            max_open_files=config.max_open_files,
        )
    raise ValueError(f"Unknown database backend: {config.backend}")
