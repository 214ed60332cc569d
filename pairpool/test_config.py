"""
Configuration loading and saving.
"""
import json
import os
import shutil
import tempfile
import unittest

from pairpool.asset import Native, Tokenized
from pairpool.config import Config, DatabaseConfig, PoolConfig
from pairpool.errors import ValidationError


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_default(self):
        config = Config.default()
        self.assertEqual(config.database.backend, 'leveldb')
        self.assertEqual(config.pool.rounding, 'pool')
        self.assertFalse(config.monitoring.enabled)
        self.assertEqual(config.logging.level, 'INFO')

    def test_file_round_trip(self):
        path = os.path.join(self.test_dir, 'nested', 'pool.json')
        config = Config.default()
        config.pool.custody_address = 'custody'
        config.database.backend = 'memory'
        config.to_file(path)

        loaded = Config.from_file(path)
        self.assertEqual(loaded.to_dict(), config.to_dict())

    def test_partial_file_uses_defaults(self):
        path = os.path.join(self.test_dir, 'pool.json')
        with open(path, 'w') as f:
            json.dump({'pool': {'custody_address': 'vault'}}, f)

        loaded = Config.from_file(path)
        self.assertEqual(loaded.pool.custody_address, 'vault')
        self.assertEqual(loaded.monitoring.port, 9090)

    def test_assets(self):
        pool = PoolConfig(asset1={'native': 'uatom'}, asset2={'tokenized': 'cw20'})
        self.assertEqual(pool.assets(), (Native('uatom'), Tokenized('cw20')))

    def test_invalid_asset(self):
        pool = PoolConfig(asset1={'native': ''})
        with self.assertRaises(ValidationError):
            pool.assets()

    def test_unknown_rounding_rejected(self):
        with self.assertRaises(ValidationError):
            PoolConfig(rounding='nearest')

    def test_unknown_backend_rejected(self):
        with self.assertRaises(ValidationError):
            DatabaseConfig(backend='sqlite')

    def test_invalid_file_rejected(self):
        path = os.path.join(self.test_dir, 'pool.json')
        with open(path, 'w') as f:
            json.dump({'pool': {'rounding': 'bogus'}}, f)

        with self.assertRaisesRegex(ValidationError, 'Unknown rounding mode'):
            Config.from_file(path)


if __name__ == '__main__':
    unittest.main()
