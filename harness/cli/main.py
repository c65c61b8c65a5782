"""Harness CLI — inspect a learner's project from the shell.

Usage:
    harness contract <address>          Print the resolved state of a contract
    harness last-command [-n N]         Print a command from the bash history
    harness hash <text>                 Print the SHA-256 digest of text
    harness config                      Show current configuration

Examples:
    harness contract 1a2b3c --cwd learn-smart-contracts-by-building-a-fundraiser
    harness contract 1a2b3c --cwd fundraiser --no-pool
    harness last-command -n 1
"""

from __future__ import annotations

import argparse
import json
import sys

from harness import __version__
from harness.core.config import get_settings
from harness.core.errors import HarnessError
from harness.core.logging import setup_logging


# ── Coloured output helpers ──────────────────────────────────────────────────

_RESET = "\033[0m"
_BOLD = "\033[1m"
_RED = "\033[91m"
_DIM = "\033[2m"


def _c(text: str, code: str) -> str:
    return f"{code}{text}{_RESET}"


# ── CLI argument parser ─────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="harness",
        description="Curriculum harness — project, terminal and ledger helpers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command")

    # ── contract ─────────────────────────────────────────────────────────────
    contract_p = sub.add_parser("contract", help="Resolve a contract from ledger and pool")
    contract_p.add_argument("address", help="Contract address")
    contract_p.add_argument(
        "--cwd",
        default="",
        help="Project directory holding the store files, relative to the project root",
    )
    contract_p.add_argument(
        "--no-pool", action="store_true", help="Ignore pending contracts in the pool"
    )

    # ── last-command ─────────────────────────────────────────────────────────
    last_p = sub.add_parser("last-command", help="Print a command from the bash history")
    last_p.add_argument(
        "-n", "--how-many-back", type=int, default=0, help="Commands to count back (default: 0)"
    )

    # ── hash ─────────────────────────────────────────────────────────────────
    hash_p = sub.add_parser("hash", help="SHA-256 digest of text")
    hash_p.add_argument("text", help="Text to hash")

    # ── config ───────────────────────────────────────────────────────────────
    sub.add_parser("config", help="Show current configuration")

    return parser


# ── Commands ─────────────────────────────────────────────────────────────────


def _run_contract(args: argparse.Namespace) -> int:
    from harness.ledger.store import get_contract

    contract = get_contract(args.address, args.cwd, include_pool=not args.no_pool)
    if contract is None:
        print(_c(f"Contract not found: {args.address}", _RED), file=sys.stderr)
        return 1
    print(json.dumps(contract.to_dict(), indent=2, default=str))
    return 0


def _run_last_command(args: argparse.Namespace) -> int:
    from harness.workspace.terminal import get_last_command

    command = get_last_command(args.how_many_back)
    if command is None:
        print(_c("History is shorter than requested", _RED), file=sys.stderr)
        return 1
    print(command)
    return 0


def _run_hash(args: argparse.Namespace) -> int:
    from harness.crypto.signing import generate_hash

    print(generate_hash(args.text))
    return 0


def _run_config() -> int:
    """Print current settings (redacted)."""
    s = get_settings()
    print(f"\n{_BOLD}Harness Configuration{_RESET}\n")
    for field_name in sorted(type(s).model_fields.keys()):
        val = getattr(s, field_name, "")
        if any(kw in field_name for kw in ("password", "secret", "key", "token")):
            val = "****" if val else "(not set)"
        print(f"  {_DIM}{field_name}:{_RESET}  {val}")
    print()
    return 0


# ── Entrypoint ───────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"harness {__version__}")
        return 0

    if not args.command:
        parser.print_help()
        return 0

    settings = get_settings()
    setup_logging(settings.app_env, "DEBUG" if args.verbose else settings.log_level)

    handlers = {
        "contract": _run_contract,
        "last-command": _run_last_command,
        "hash": _run_hash,
    }

    if args.command == "config":
        return _run_config()

    try:
        return handlers[args.command](args)
    except HarnessError as exc:
        print(
            json.dumps(exc.to_envelope().model_dump(), indent=2, default=str),
            file=sys.stderr,
        )
        return 2


if __name__ == "__main__":
    sys.exit(main())
