"""
Result aggregation and reporting.

Pairs reference and candidate results per payload and renders them as text:
header block, per-payload table with verdict, and a closing summary.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from tabulate import tabulate

from hashbench.models.benchmark_result import BenchmarkResult, ComparisonRecord
from hashbench.models.payload import TestPayload
from hashbench.util.format_utils import NOT_MEASURABLE, format_bytes, format_rate, format_time
from hashbench.util.log_config import setup_logger

logger = setup_logger(__name__)

RULE = "=" * 64
FAILED = "FAILED"
NOT_MEASURABLE_VERDICT = "not measurable at this resolution"

TABLE_HEADERS = ["Function", "Total Time", "Avg/Call", "Ops/sec", "Mem Delta", "Mem Peak"]
TABLE_ALIGN = ("left", "right", "right", "right", "right", "right")


def compare(payload: TestPayload, reference: BenchmarkResult, candidate: BenchmarkResult) -> ComparisonRecord:
    return ComparisonRecord(payload=payload, reference=reference, candidate=candidate)


def render_header(algorithm: str, iterations: int, reference_name: str, candidate_name: str,
                  runtime: str, extension: str, memory_probe: str) -> str:
    lines = [
        RULE,
        f"  {algorithm} Benchmark: {reference_name} vs {candidate_name}",
        RULE,
        f"  Iterations: {iterations:,}",
        f"  Python Version: {runtime}",
        f"  Extension: {extension}",
        f"  Memory Probe: {memory_probe}",
        RULE,
    ]
    return "\n".join(lines)


def render_section_title(payload: TestPayload) -> str:
    return f"--- Input: {payload.label} ({format_bytes(payload.size)}) ---"


def _result_row(result: BenchmarkResult) -> List[str]:
    if result.failed:
        return [result.implementation_name, FAILED, FAILED, FAILED, "-", "-"]
    if not result.throughput_measurable:
        total = average = NOT_MEASURABLE
    else:
        total = format_time(result.total_elapsed)
        average = format_time(result.average_per_call)
    return [
        result.implementation_name,
        total,
        average,
        format_rate(result.throughput),
        format_bytes(result.memory_delta),
        format_bytes(result.peak_memory),
    ]


def render_table(record: ComparisonRecord) -> str:
    """Results table for one payload, followed by any failure details."""
    rows = [_result_row(record.reference), _result_row(record.candidate)]
    table = tabulate(rows, headers=TABLE_HEADERS, tablefmt="simple", colalign=TABLE_ALIGN)
    lines = [table]
    for result in (record.reference, record.candidate):
        if result.failed:
            lines.append(f"{result.implementation_name} failed on '{result.payload_label}': {result.error}")
    return "\n".join(lines)


def render_verdict(record: ComparisonRecord, candidate_label: Optional[str] = None,
                   reference_label: Optional[str] = None) -> str:
    """
    Single-line verdict. The multiplier is always >= 1; the direction word
    says which way it goes.
    """
    candidate_label = candidate_label or record.candidate.implementation_name
    reference_label = reference_label or record.reference.implementation_name

    failed = [r.implementation_name for r in (record.reference, record.candidate) if r.failed]
    if failed:
        return f"No comparison for '{record.payload.label}': {' and '.join(failed)} failed"

    verdict = record.verdict()
    if verdict is None:
        return f"{candidate_label} vs {reference_label}: {NOT_MEASURABLE_VERDICT}"
    multiplier, direction = verdict
    return f"{candidate_label} is {multiplier:.2f}x {direction} than {reference_label}"


def _average_cell(result: BenchmarkResult) -> str:
    if result.failed:
        return "-"
    if not result.throughput_measurable:
        return NOT_MEASURABLE
    return format_time(result.average_per_call)


def render_summary(records: List[ComparisonRecord]) -> str:
    rows = []
    for record in records:
        verdict = record.verdict()
        if record.reference.failed or record.candidate.failed:
            speedup = FAILED
        elif verdict is None:
            speedup = "not measurable"
        else:
            speedup = f"{verdict[0]:.2f}x {verdict[1]}"
        rows.append([
            record.payload.label,
            format_bytes(record.payload.size),
            _average_cell(record.reference),
            _average_cell(record.candidate),
            speedup,
        ])
    headers = ["Input", "Size", "Reference Avg", "Candidate Avg", "Candidate"]
    return tabulate(rows, headers=headers, tablefmt="simple",
                    colalign=("left", "right", "right", "right", "left"))


def build_report(records: List[ComparisonRecord], meta: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "meta": meta,
        "results": {record.payload.label: record.to_dict() for record in records},
    }


def write_json_report(records: List[ComparisonRecord], path: Path, meta: Dict[str, Any]) -> None:
    """Write a machine-readable snapshot of this run."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(build_report(records, meta), f, ensure_ascii=False, indent=2)
    logger.info(f"✓ Results written to: {path.resolve()}")
