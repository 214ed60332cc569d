import msgpack
import pytest

from pairpool.errors import StorageError
from pairpool.storage import MemoryDB, PoolStore, SLOT_PREFIX


@pytest.fixture
def db():
    memory = MemoryDB()
    yield memory
    memory.close()


@pytest.fixture
def store(db):
    return PoolStore(db)


class TestMemoryDB:
    def test_put_get_delete(self, db):
        db.put(b'k', b'v')
        assert db.get(b'k') == b'v'
        assert db.exists(b'k')
        db.delete(b'k')
        assert db.get(b'k') is None

    def test_batch_applies_on_success(self, db):
        with db.write_batch() as batch:
            batch.put(b'a', b'1')
            batch.put(b'b', b'2')
            # Not visible until the batch completes
            assert db.get(b'a') is None
        assert db.get(b'a') == b'1'
        assert db.get(b'b') == b'2'

    def test_batch_discarded_on_error(self, db):
        db.put(b'a', b'old')
        with pytest.raises(RuntimeError):
            with db.write_batch() as batch:
                batch.put(b'a', b'new')
                raise RuntimeError("boom")
        assert db.get(b'a') == b'old'

    def test_closed_db_raises(self):
        db = MemoryDB()
        db.close()
        assert db.is_closed()
        with pytest.raises(StorageError):
            db.get(b'k')


class TestPoolStore:
    def test_load_missing(self, store):
        assert store.load('token1') is None
        assert not store.exists('token1')

    def test_save_and_load(self, store, db):
        store.save('token1', {'amount': '5', 'asset': {'native': 'uatom'}})
        assert store.load('token1') == {'amount': '5', 'asset': {'native': 'uatom'}}
        assert db.get(SLOT_PREFIX + b'token1') is not None

    def test_save_many(self, store):
        store.save_many({'token1': {'amount': '1'}, 'token2': {'amount': '2'}})
        assert store.load('token1') == {'amount': '1'}
        assert store.load('token2') == {'amount': '2'}

    def test_unencodable_record_writes_nothing(self, store):
        with pytest.raises(TypeError):
            store.save_many({'token1': {'amount': '1'}, 'token2': {'amount': object()}})
        assert store.load('token1') is None

    def test_corrupt_record(self, store, db):
        db.put(SLOT_PREFIX + b'token1', msgpack.packb({'amount': '1'})[:-1])
        with pytest.raises(StorageError, match="Corrupt"):
            store.load('token1')
