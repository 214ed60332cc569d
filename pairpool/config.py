"""
Configuration management for a pool deployment.
"""
import json
import os
from dataclasses import dataclass, asdict, field

from pairpool.asset import Asset, asset_from_dict
from pairpool.errors import ValidationError

ROUNDING_MODES = ("pool", "floor")
DATABASE_BACKENDS = ("leveldb", "memory")


@dataclass
class PoolConfig:
    """Pool configuration."""
    asset1: dict = field(default_factory=lambda: {'native': 'uatom'})
    asset2: dict = field(default_factory=lambda: {'tokenized': 'token-contract'})
    custody_address: str = "pool"
    rounding: str = "pool"  # "pool" or "floor"

    def __post_init__(self):
        if self.rounding not in ROUNDING_MODES:
            raise ValidationError(f"Unknown rounding mode: {self.rounding!r}")

    def assets(self) -> tuple:
        """Parsed (asset1, asset2)."""
        asset1: Asset = asset_from_dict(self.asset1)
        asset2: Asset = asset_from_dict(self.asset2)
        return asset1, asset2


@dataclass
class DatabaseConfig:
    """Database configuration."""
    backend: str = "leveldb"  # "leveldb" or "memory"
    path: str = "./pool_data"
    write_buffer_size: int = 4 * 1024 * 1024  # 4MB
    max_open_files: int = 100

    def __post_init__(self):
        if self.backend not in DATABASE_BACKENDS:
            raise ValidationError(f"Unknown database backend: {self.backend!r}")


@dataclass
class MonitoringConfig:
    """Monitoring configuration."""
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 9090


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"


@dataclass
class Config:
    """Main configuration."""
    pool: PoolConfig
    database: DatabaseConfig
    monitoring: MonitoringConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            pool=PoolConfig(),
            database=DatabaseConfig(),
            monitoring=MonitoringConfig(),
            logging=LoggingConfig()
        )

    @classmethod
    def from_file(cls, path: str) -> 'Config':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)

        return cls(
            pool=PoolConfig(**data.get('pool', {})),
            database=DatabaseConfig(**data.get('database', {})),
            monitoring=MonitoringConfig(**data.get('monitoring', {})),
            logging=LoggingConfig(**data.get('logging', {}))
        )

    def to_file(self, path: str):
        """Save configuration to JSON file."""
        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'pool': asdict(self.pool),
            'database': asdict(self.database),
            'monitoring': asdict(self.monitoring),
            'logging': asdict(self.logging)
        }
