#!/usr/bin/env python3
"""
nemwallet command line — create and inspect wallet accounts.

Accounts are read as serialized JSON from a file (or ``-`` for stdin) and
written back to stdout; nothing is stored on disk by this tool.

Usage:
    python run_wallet.py create --with-remote-key > account.json
    python run_wallet.py show account.json
    python run_wallet.py remote-key account.json
    python run_wallet.py set-endpoint account.json --host 10.0.0.5 --port 7890
    python run_wallet.py set-endpoint account.json --clear

Environment variables (alternative to flags):
    NEMWALLET_NETWORK, NEMWALLET_HARVEST_HOST, NEMWALLET_HARVEST_PORT,
    NEMWALLET_HARVEST_PROTOCOL, NEMWALLET_LOG_LEVEL, NEMWALLET_LOG_FMT
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from nemwallet_core.config import NemWalletConfig, load_config  # noqa: E402
from nemwallet_core.endpoint import NodeEndpoint  # noqa: E402
from nemwallet_core.logging_config import setup_logging  # noqa: E402
from nemwallet_core.serialization import from_json, to_json  # noqa: E402
from nemwallet_core.wallet_account import WalletAccount  # noqa: E402

logger = logging.getLogger("nemwallet.cli")


def _read_account(source: str, version: int) -> WalletAccount:
    if source == "-":
        text = sys.stdin.read()
    else:
        with open(source, encoding="utf-8") as f:
            text = f.read()
    return from_json(text, lambda d: WalletAccount.deserialize(d, version))


def _emit(account: WalletAccount) -> None:
    print(to_json(account, indent=2))


# ===================================================================
#  Commands
# ===================================================================

def cmd_create(args, cfg: NemWalletConfig) -> None:
    account = WalletAccount.create(cfg.network.version)
    if args.with_remote_key:
        account.ensure_remote_key()
    logger.info("Created account %s", account)
    _emit(account)


def cmd_show(args, cfg: NemWalletConfig) -> None:
    account = _read_account(args.input, cfg.network.version)
    endpoint = account.remote_endpoint
    print(f"address:         {account}")
    print(f"remote key:      {'present' if account.remote_key is not None else 'absent'}")
    print(f"remote endpoint: {endpoint.base_url if endpoint else 'none'}")


def cmd_remote_key(args, cfg: NemWalletConfig) -> None:
    account = _read_account(args.input, cfg.network.version)
    had_key = account.remote_key is not None
    account.ensure_remote_key()
    if not had_key:
        logger.info("Generated remote harvesting key for %s", account)
    _emit(account)


def cmd_set_endpoint(args, cfg: NemWalletConfig) -> None:
    account = _read_account(args.input, cfg.network.version)
    if args.clear:
        account.remote_endpoint = None
    else:
        defaults = cfg.harvesting
        account.remote_endpoint = NodeEndpoint(
            args.protocol or defaults.protocol,
            args.host or defaults.host,
            args.port if args.port is not None else defaults.port,
        )
    _emit(account)


# ===================================================================
#  Main entry point
# ===================================================================

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="nemwallet", description="nemwallet account tool")
    p.add_argument("--config", default=None, help="Path to nemwallet.toml config file")
    p.add_argument("--network", default=None, help="Network name (mainnet / testnet)")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    sub = p.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create a fresh account")
    create.add_argument("--with-remote-key", action="store_true",
                        help="Also generate a remote harvesting key")
    create.set_defaults(func=cmd_create)

    show = sub.add_parser("show", help="Describe a serialized account")
    show.add_argument("input", help="Account JSON file, or - for stdin")
    show.set_defaults(func=cmd_show)

    remote = sub.add_parser("remote-key", help="Ensure the account has a remote harvesting key")
    remote.add_argument("input", help="Account JSON file, or - for stdin")
    remote.set_defaults(func=cmd_remote_key)

    endpoint = sub.add_parser("set-endpoint", help="Set or clear the remote harvesting endpoint")
    endpoint.add_argument("input", help="Account JSON file, or - for stdin")
    endpoint.add_argument("--protocol", default=None)
    endpoint.add_argument("--host", default=None)
    endpoint.add_argument("--port", type=int, default=None)
    endpoint.add_argument("--clear", action="store_true", help="Remove the endpoint")
    endpoint.set_defaults(func=cmd_set_endpoint)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        # Load config (TOML + env overrides); CLI flags override config
        cfg = load_config(args.config)
        if args.network:
            cfg.network.name = args.network
        if args.log_level:
            cfg.logging.level = args.log_level.upper()
        setup_logging(cfg.logging.level, cfg.logging.format, cfg.logging.file)

        args.func(args, cfg)
    except (ValueError, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
