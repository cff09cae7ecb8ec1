"""Command line interface for the MDM database bootstrap.

Usage examples (from repository root):

  python -m mdm_init.cli init-db
  python -m mdm_init.cli init-db --max-attempts 10 --strict-seed
  python -m mdm_init.cli show-config

Connection settings are read from MDM_API_MONGODB_* and RETRY_CONNECTION_*
environment variables (or `.env`); command line flags override them.
"""
from __future__ import annotations

import argparse
import sys
from typing import List

from mdm_init.config import load_settings
from mdm_init.persistence.initializer import initialize_database


def _overrides(args: argparse.Namespace) -> dict:
    overrides = {}
    if args.strict_seed:
        overrides["MDM_INIT_STRICT_SEED"] = True
    if args.unique_ids:
        overrides["MDM_API_MONGODB_UNIQUE_IDS"] = True
    if args.max_attempts is not None:
        overrides["RETRY_CONNECTION_MAX_ATTEMPTS"] = args.max_attempts
    return overrides


def _print_config(settings) -> None:
    values = settings.describe()
    print(
        f"MongoDB config: //{values['MDM_API_MONGODB_USERNAME']}@"
        f"{values['MDM_API_MONGODB_HOST']}:{values['MDM_API_MONGODB_PORT']}/"
        f"{values['MDM_API_MONGODB_DATABASE']}")


def _cmd_init_db(args: argparse.Namespace) -> int:
    """Create collections, indexes and sample data unless already present.

    Safe to run multiple times: once both collections exist the command exits
    0 without writing anything.
    """
    settings = load_settings(**_overrides(args))
    _print_config(settings)
    return initialize_database(settings)


def _cmd_show_config(_: argparse.Namespace) -> int:
    settings = load_settings()
    for key, value in settings.describe().items():
        print(f"{key}={value}")
    return 0


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdm-init",
        description="MDM patient-management database bootstrap",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_init = sub.add_parser(
        "init-db", help="Create MongoDB collections, indexes & sample data (idempotent)")
    p_init.add_argument("--strict-seed", action="store_true",
                        help="Exit with code 1 when sample data cannot be written")
    p_init.add_argument("--unique-ids", action="store_true",
                        help="Declare the 'id' indexes unique")
    p_init.add_argument("--max-attempts", type=_positive_int, default=None,
                        help="Give up after this many connection attempts (default: retry forever)")
    p_init.set_defaults(func=_cmd_init_db)

    p_cfg = sub.add_parser(
        "show-config", help="Print the resolved configuration (password masked)")
    p_cfg.set_defaults(func=_cmd_show_config)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
