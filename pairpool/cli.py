"""
Pool operator tool.

Creates a pool from a configuration file and applies deposits and swaps to
its database, printing the resulting state and the transfer instructions the
host has to execute.
"""
import argparse
import json
import logging
import sys

from pairpool.config import Config
from pairpool.db import open_db
from pairpool.errors import StorageError, ValidationError
from pairpool.monitoring import PoolMonitor
from pairpool.pool import Pool
from pairpool.pool_state import TokenSelection
from pairpool.storage import PoolStore

logger = logging.getLogger(__name__)


def _print_json(data):
    print(json.dumps(data, indent=2, default=str))


def generate_sample_config(output_path: str):
    """Writes a default configuration file."""
    Config.default().to_file(output_path)
    print(f"Generated sample configuration at: {output_path}")
    print("Please review the pool assets and custody address before running init.")


def _open_pool(config: Config, store: PoolStore, monitor=None) -> Pool:
    return Pool.open(store, config.pool.custody_address,
                     monitor=monitor, rounding=config.pool.rounding)


def run(args, config: Config) -> int:
    try:
        db = open_db(config.database)
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    monitor = None
    try:
        if config.monitoring.enabled:
            monitor = PoolMonitor(config.monitoring.host, config.monitoring.port)
            monitor.start_server()

        store = PoolStore(db)

        if args.command == "init":
            asset1, asset2 = config.pool.assets()
            pool = Pool.instantiate(store, asset1, asset2, config.pool.custody_address,
                                    monitor=monitor, rounding=config.pool.rounding)
            _print_json(pool.query())

        elif args.command == "provide":
            pool = _open_pool(config, store, monitor)
            response = pool.provide_liquidity(args.sender, args.amount1, args.amount2)
            _print_json({'response': response.to_dict(), 'pool': pool.query()})

        elif args.command == "swap":
            pool = _open_pool(config, store, monitor)
            response = pool.swap(args.sender, TokenSelection(args.token),
                                 args.amount, args.min_output)
            _print_json({'response': response.to_dict(), 'pool': pool.query()})

        elif args.command == "quote":
            pool = _open_pool(config, store, monitor)
            _print_json({'output_amount': pool.quote_swap(TokenSelection(args.token), args.amount)})

        elif args.command == "show":
            pool = _open_pool(config, store, monitor)
            _print_json(pool.query())

        return 0

    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    finally:
        if monitor:
            monitor.stop_server()
        db.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Two-asset constant-product pool tool")
    parser.add_argument("--config", type=str, default="pool.json", help="Path to config file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_sample = subparsers.add_parser("sample-config", help="Generate a sample pool.json")
    parser_sample.add_argument("--output", type=str, default="pool.json", help="Output file path")

    subparsers.add_parser("init", help="Create an empty pool from the config")
    subparsers.add_parser("show", help="Print reserves, k and price")

    parser_provide = subparsers.add_parser("provide", help="Deposit both assets")
    parser_provide.add_argument("--sender", type=str, required=True)
    parser_provide.add_argument("amount1", type=int)
    parser_provide.add_argument("amount2", type=int)

    parser_swap = subparsers.add_parser("swap", help="Swap one asset for the other")
    parser_swap.add_argument("--sender", type=str, required=True)
    parser_swap.add_argument("--min-output", type=int, default=0)
    parser_swap.add_argument("token", choices=[t.value for t in TokenSelection])
    parser_swap.add_argument("amount", type=int)

    parser_quote = subparsers.add_parser("quote", help="Preview a swap without applying it")
    parser_quote.add_argument("token", choices=[t.value for t in TokenSelection])
    parser_quote.add_argument("amount", type=int)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "sample-config":
        generate_sample_config(args.output)
        return 0

    try:
        config = Config.from_file(args.config)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logging.basicConfig(level=getattr(logging, config.logging.level.upper(), logging.INFO))
    return run(args, config)


if __name__ == '__main__':
    sys.exit(main())
