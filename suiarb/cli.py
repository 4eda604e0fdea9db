"""Command line options for the arbitrage bot."""

from __future__ import annotations

import argparse
import os
from typing import Dict, List, Mapping, Optional

DEFAULT_RPC_URL = "http://localhost:9000"
DEFAULT_TEST_PATH = (
    "0x3c3dd05e348fba5d8bf6958369cc3b33c8e8be85c96e10b1ca6413ad1b2d7787,"
    "0xe356c686eb19972e076b6906de12354a1a7ce1b09691416e9d852b04fd21b9a6,"
    "0xade90c3bc407eaa34068129d63bba5d1cf7889a2dbaabe5eb9b3efbbf53891ea,"
    "0xda49f921560e39f15d801493becf79d47c89fb6db81e0cbbe7bf6d3318117a00"
)

_ENV_PREFIX = "SUI_"

# Options that fall back to the environment variable SUI_<DEST>, then to a default;
# a default of None means the value is required.
_ENV_DEFAULTS: Dict[str, Optional[str]] = {
    "rpc_url": DEFAULT_RPC_URL,
    "private_key": None,
    "tx_socket_path": "/tmp/sui_tx.sock",
    "db_path": "/home/ubuntu/sui/db/live/store",
    "config_path": "/home/ubuntu/sui/fullnode.yaml",
    "update_cache_socket": "/tmp/sui_cache_updates.sock",
    "preload_path": "/home/ubuntu/suiflow-relay/pool_related_ids.txt",
}


def _env_var(dest: str) -> str:
    return _ENV_PREFIX + dest.upper()


def _add_http_config(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("http config")
    group.add_argument("--rpc-url", default=None, help=f"RPC endpoint [env: SUI_RPC_URL] (default {DEFAULT_RPC_URL})")
    group.add_argument("--ipc-path", default=None, help="deprecated")


def _add_start_bot(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("start-bot", help="Run the arbitrage bot")
    parser.add_argument("--private-key", default=None, help="signing key [env: SUI_PRIVATE_KEY]")
    parser.add_argument("--shio-use-rpc", action="store_true", help="shio executor uses RPC to submit bid")
    _add_http_config(parser)

    collector = parser.add_argument_group("collector config")
    collector.add_argument("--relay-ws-url", default=None, help="relay tx collector")
    collector.add_argument("--shio-ws-url", default=None, help="shio collector")
    collector.add_argument("--tx-socket-path", default=None, help="public tx collector [env: SUI_TX_SOCKET_PATH]")

    db_sim = parser.add_argument_group("db simulator config")
    db_sim.add_argument("--db-path", default=None, help="needed for db simulator [env: SUI_DB_PATH]")
    db_sim.add_argument("--config-path", default=None, help="needed for db simulator [env: SUI_CONFIG_PATH]")
    db_sim.add_argument(
        "--update-cache-socket", default=None, help="socket receiving object changes [env: SUI_UPDATE_CACHE_SOCKET]"
    )
    db_sim.add_argument("--preload-path", default=None, help="pool related objects path [env: SUI_PRELOAD_PATH]")
    db_sim.add_argument("--use-db-simulator", action="store_true", help="use db simulator")
    db_sim.add_argument("--catchup-interval", type=int, default=60, help="catchup interval in seconds")

    worker = parser.add_argument_group("worker config")
    worker.add_argument("--workers", type=int, default=8, help="number of workers to process events")
    worker.add_argument("--num-simulators", type=int, default=32, help="number of simulators in the pool")
    worker.add_argument(
        "--max-recent-arbs", type=int, default=20, help="skip a coin processed within this many recent arbs"
    )
    worker.add_argument("--dedicated-short-interval", type=int, default=50, help="milliseconds")
    worker.add_argument("--dedicated-long-interval", type=int, default=200, help="milliseconds")


def _add_pool_ids(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "pool-ids", help="Generate a file with objectIDs of all pools and their underlying objects"
    )
    parser.add_argument("--result-path", default="./pool_related_ids.txt")
    _add_http_config(parser)
    parser.add_argument("--test", action="store_true", help="Run test only")
    parser.add_argument("--with-fallback", action="store_true", help="Simulate with fallback")
    parser.add_argument("--amount-in", type=int, default=10000000)
    parser.add_argument("--path", default=DEFAULT_TEST_PATH)
    parser.add_argument("--delete-objects", default=None, help="Delete objects before simulation")


def build_parser() -> argparse.ArgumentParser:
    """The top-level parser with its subcommands."""
    parser = argparse.ArgumentParser(prog="arb")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_start_bot(subparsers)
    _add_pool_ids(subparsers)
    return parser


def parse_args(
    argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None
) -> argparse.Namespace:
    """Parse arguments; options not given fall back to the environment, then to defaults."""
    env = os.environ if environ is None else environ
    parser = build_parser()
    args = parser.parse_args(argv)
    for dest, default in _ENV_DEFAULTS.items():
        if not hasattr(args, dest) or getattr(args, dest) is not None:
            continue
        var = _env_var(dest)
        value = env.get(var, default)
        if value is None:
            parser.error(f"--{dest.replace('_', '-')} is required (or set {var})")
        setattr(args, dest, value)
    if args.command == "pool-ids" and args.amount_in < 0:
        parser.error("--amount-in must be non-negative")
    return args