"""Command-line interface for the health factor engine."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config import AppConfig, load_config
from .engine import aggregate, resolve
from .errors import HealthFactorError
from .inputs import load_compute_args, load_raw
from .logging_setup import configure_logging
from .models import ComputeArgs
from .protocols.kamino import build_compute_args
from .report import build_summary
from .services import HealthFactorRecorder

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 1
EXIT_COMPUTATION_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="healthfactor",
        description="Q64.64 fixed-point health factor engine",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    compute_parser = sub.add_parser("compute", help="Compute HF from a positions file")
    compute_parser.add_argument("positions", help="YAML/JSON positions file")

    kamino_parser = sub.add_parser(
        "kamino", help="Compute HF from a Kamino obligation snapshot"
    )
    kamino_parser.add_argument("snapshot", help="YAML/JSON obligation snapshot")

    record_parser = sub.add_parser(
        "record", help="Compute, store and announce a user's HF"
    )
    record_parser.add_argument("positions", help="YAML/JSON positions file")
    record_parser.add_argument("--user", required=True, help="User identifier")

    return parser


def _print_summary(args: ComputeArgs, config: AppConfig, label: str) -> None:
    totals = aggregate(args, config.engine.price_scale)
    hf = resolve(totals)
    print(build_summary(hf, totals, config.thresholds, label=label))


def _load_kamino(path: str) -> ComputeArgs:
    raw = load_raw(path)
    if not isinstance(raw, dict):
        raise ValueError("Snapshot data must be a mapping")
    return build_compute_args(raw.get("obligation") or {}, raw.get("reserves") or {})


async def _record(args: argparse.Namespace, config: AppConfig) -> None:
    recorder = HealthFactorRecorder.from_config(config)
    state = await recorder.compute_and_record(
        args.user, load_compute_args(args.positions)
    )
    print(
        f"user={state.user} last_hf_q64={state.last_hf_q64} "
        f"last_update_slot={state.last_update_slot}"
    )


def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "compute":
        _print_summary(load_compute_args(args.positions), config, args.positions)
    elif args.command == "kamino":
        _print_summary(_load_kamino(args.snapshot), config, args.snapshot)
    elif args.command == "record":
        asyncio.run(_record(args, config))
    else:
        build_parser().print_help()
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        _run(args)
    except HealthFactorError as e:
        logger.error("%s: %s", e.code, e)
        sys.exit(EXIT_COMPUTATION_ERROR)
    except (ValueError, FileNotFoundError) as e:
        logger.error("%s", e)
        sys.exit(EXIT_INPUT_ERROR)
