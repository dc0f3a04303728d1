#!/usr/bin/env python3
"""
Hash benchmark runner.

Loads configuration, checks that both implementations are available, then
for every input runs the reference and the candidate through the benchmark
runner and prints a comparison.
"""
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from hashbench.cli.cli import parse_benchmark_args
from hashbench.config.benchmark_config import BenchmarkConfig
from hashbench.config.config_loader import ConfigLoader, apply_cli_overrides
from hashbench.errors import HashBenchError
from hashbench.models.benchmark_result import ComparisonRecord
from hashbench.models.payload import TestPayload
from hashbench.monitor.memory_probe import MemoryProbe, create_memory_probe
from hashbench.service import reporter
from hashbench.service.implementations import LoadedImplementation, load_implementation, runtime_description
from hashbench.service.payloads import build_payloads
from hashbench.service.runner.benchmark_runner import BenchmarkRunner
from hashbench.util.log_config import configure_package_logging, setup_logger

logger = setup_logger(__name__)


def run_comparisons(runner: BenchmarkRunner,
                    reference: LoadedImplementation,
                    candidate: LoadedImplementation,
                    payloads: Dict[str, TestPayload],
                    iterations: int) -> List[ComparisonRecord]:
    """
    Benchmark reference then candidate on each payload, printing one section
    per payload. Failed runs are reported in place and do not stop the loop.
    """
    records = []
    for label, payload in payloads.items():
        print(reporter.render_section_title(payload))
        print()

        runner.memory_probe.force_reclaim()
        reference_result = runner.run(reference.name, reference.fn, payload, iterations)
        candidate_result = runner.run(candidate.name, candidate.fn, payload, iterations)

        record = reporter.compare(payload, reference_result, candidate_result)
        records.append(record)

        print(reporter.render_table(record))
        print()
        print(f"  {reporter.render_verdict(record)}")
        print()
    return records


def _startup(config: BenchmarkConfig):
    """Load both implementations before anything is measured."""
    reference = load_implementation(config.reference)
    candidate = load_implementation(config.candidate)
    return reference, candidate


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Entry point.

    Returns:
        Process exit status: 0 on completion (even if some runs failed),
        1 on a startup error such as an unavailable implementation.
    """
    args = parse_benchmark_args(argv)

    try:
        config = apply_cli_overrides(ConfigLoader(env=args.env).config_data, args)
        log_file = Path(config.log_file) if config.log_file else None
        if args.verbose or log_file:
            configure_package_logging(logging.DEBUG if args.verbose else logging.INFO, log_file)
        if args.env:
            logger.info(f"Loaded configuration with environment override: {args.env}")
        reference, candidate = _startup(config)
        memory_probe: MemoryProbe = create_memory_probe(config.memory_probe)
    except HashBenchError as e:
        logger.error(f"Startup failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    payloads = build_payloads(config.random_payloads, config.random_size, config.seed)
    if config.random_payloads and config.seed is None:
        logger.info("Random payloads without a seed: inputs differ from run to run")

    print()
    print(reporter.render_header(
        algorithm=config.algorithm,
        iterations=config.iterations,
        reference_name=reference.name,
        candidate_name=candidate.name,
        runtime=runtime_description(),
        extension=candidate.describe(),
        memory_probe=memory_probe.name,
    ))
    print()

    runner = BenchmarkRunner(memory_probe, warmup_iterations=config.warmup_iterations)
    try:
        records = run_comparisons(runner, reference, candidate, payloads, config.iterations)
    finally:
        memory_probe.close()

    print("--- Summary ---")
    print()
    print(reporter.render_summary(records))
    print()

    if args.out:
        meta = {
            "algorithm": config.algorithm,
            "iterations": config.iterations,
            "warmup_iterations": config.warmup_iterations,
            "runtime": runtime_description(),
            "reference": reference.describe(),
            "candidate": candidate.describe(),
            "memory_probe": memory_probe.name,
            "random_payloads": config.random_payloads,
        }
        reporter.write_json_report(records, Path(args.out), meta)

    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
