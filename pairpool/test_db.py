"""
LevelDB backend tests.
"""
import shutil
import tempfile

import pytest

pytest.importorskip("plyvel")

from pairpool.config import DatabaseConfig
from pairpool.db import DB, open_db
from pairpool.errors import StorageError, ValidationError
from pairpool.pool_state import PoolState
from pairpool.asset import Native, Tokenized
from pairpool.storage import MemoryDB, PoolStore


@pytest.fixture
def db():
    temp_dir = tempfile.mkdtemp()
    database = DB(temp_dir)
    yield database
    database.close()
    shutil.rmtree(temp_dir)


def test_put_get(db):
    db.put(b'key', b'value')
    assert db.get(b'key') == b'value'
    assert db.exists(b'key')
    db.delete(b'key')
    assert db.get(b'key') is None


def test_batch_rolls_back_on_error(db):
    db.put(b'a', b'old')
    with pytest.raises(RuntimeError):
        with db.write_batch() as batch:
            batch.put(b'a', b'new')
            batch.put(b'b', b'new')
            raise RuntimeError("abort")
    assert db.get(b'a') == b'old'
    assert db.get(b'b') is None


def test_closed_db_raises():
    temp_dir = tempfile.mkdtemp()
    try:
        database = DB(temp_dir)
        database.close()
        assert database.is_closed()
        with pytest.raises(StorageError):
            database.get(b'key')
    finally:
        shutil.rmtree(temp_dir)


def test_pool_survives_reopen():
    temp_dir = tempfile.mkdtemp()
    try:
        with DB(temp_dir) as database:
            state = PoolState.instantiate(PoolStore(database), Native('uatom'), Tokenized('cw20'))
            state.write(2**100, 3)

        with DB(temp_dir) as database:
            state = PoolState(PoolStore(database))
            assert state.read() == (Native('uatom'), 2**100, Tokenized('cw20'), 3)
    finally:
        shutil.rmtree(temp_dir)


def test_open_db_backends(tmp_path):
    assert isinstance(open_db(DatabaseConfig(backend='memory')), MemoryDB)

    database = open_db(DatabaseConfig(backend='leveldb', path=str(tmp_path / 'db')))
    try:
        assert isinstance(database, DB)
    finally:
        database.close()

    with pytest.raises(ValidationError):
        open_db(DatabaseConfig(backend='sqlite'))


def test_second_open_of_locked_path(tmp_path):
    path = str(tmp_path / 'locked')
    with DB(path):
        # LevelDB holds an exclusive lock on the directory
        with pytest.raises(StorageError, match="Failed to open"):
            DB(path)
