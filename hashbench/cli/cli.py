#!/usr/bin/env python3
"""
Command-line interface for the hash benchmark harness.
"""
import argparse
import sys
from typing import Optional, Sequence

from hashbench.consts.MemoryProbeType import MemoryProbeType


def build_env_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the common --env option.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: parser preconfigured with the --env argument.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'dev'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )
    return parser


def build_benchmark_parser() -> argparse.ArgumentParser:
    ap = build_env_parser("Compare a standard-library hash against a native extension implementation")
    ap.add_argument("--iterations", "-n", type=int, default=None,
                    help="Timed calls per implementation and input (default: from config)")
    ap.add_argument("--warmup", type=int, default=None,
                    help="Untimed warmup calls before each measurement (default: from config)")
    ap.add_argument("--reference", type=str, default=None, metavar="MODULE:ATTR",
                    help="Reference implementation, e.g. hashlib:md5")
    ap.add_argument("--reference-name", type=str, default=None,
                    help="Display name for the reference implementation")
    ap.add_argument("--candidate", type=str, default=None, metavar="MODULE:ATTR",
                    help="Candidate implementation, e.g. qzoke:md5")
    ap.add_argument("--candidate-name", type=str, default=None,
                    help="Display name for the candidate implementation")
    ap.add_argument("--extension", type=str, default=None, metavar="PATH",
                    help="Shared library to load the candidate module from")
    ap.add_argument("--memory-probe", choices=[t.value for t in MemoryProbeType], default=None,
                    help="Memory introspection backend (default: from config)")
    ap.add_argument("--random-payloads", action="store_true",
                    help="Random content at the same sizes, plus an extra random input")
    ap.add_argument("--seed", type=int, default=None,
                    help="Seed for --random-payloads (reproducible random inputs)")
    ap.add_argument("--out", type=str, default="",
                    help="If set, write all results as JSON to this path")
    ap.add_argument("--verbose", "-v", action="store_true",
                    help="Enable debug logging")
    return ap


def validate_benchmark_args(args: argparse.Namespace):
    if args.iterations is not None and args.iterations < 1:
        print(f"Error: --iterations must be >= 1, got {args.iterations}", file=sys.stderr)
        sys.exit(1)
    if args.warmup is not None and args.warmup < 0:
        print(f"Error: --warmup must be >= 0, got {args.warmup}", file=sys.stderr)
        sys.exit(1)
    if args.seed is not None and not args.random_payloads:
        print("[Info] --seed has no effect without --random-payloads")


def parse_benchmark_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    args = build_benchmark_parser().parse_args(argv)
    validate_benchmark_args(args)
    return args
