import hashlib
import statistics

import pytest

from hashbench.models.payload import TestPayload
from hashbench.service.reporter import compare
from hashbench.service.runner.benchmark_runner import BenchmarkRunner


def test_successful_run_statistics(null_probe, small_payload):
    runner = BenchmarkRunner(null_probe, warmup_iterations=10)
    result = runner.run("md5", hashlib.md5, small_payload, 200)

    assert not result.failed
    assert result.iterations == 200
    assert result.average_per_call > 0
    assert result.total_elapsed == pytest.approx(200 * result.average_per_call)
    assert result.throughput == pytest.approx(200 / result.total_elapsed)


def test_warmup_excluded_from_timing_and_memory(clock, fake_probe, small_payload):
    calls = {"count": 0}

    def slow_then_fast(data):
        calls["count"] += 1
        if calls["count"] <= 100:
            clock.advance(1.0)
            fake_probe.allocate(1000)
        else:
            clock.advance(0.001)

    runner = BenchmarkRunner(fake_probe, warmup_iterations=100, timer=clock)
    result = runner.run("adaptive", slow_then_fast, small_payload, 50)

    assert calls["count"] == 150
    assert result.total_elapsed == pytest.approx(0.05)
    assert result.average_per_call == pytest.approx(0.001)
    assert result.memory_delta == 0


def test_memory_baseline_taken_after_reclaim(fake_probe, small_payload):
    runner = BenchmarkRunner(fake_probe, warmup_iterations=1)
    runner.run("md5", lambda data: fake_probe.allocate(10), small_payload, 3)

    assert fake_probe.events == ["reclaim", "reset_peak", "current", "current", "peak"]


def test_memory_delta_and_peak_come_from_timed_phase(fake_probe, small_payload):
    runner = BenchmarkRunner(fake_probe, warmup_iterations=0)
    result = runner.run("grow", lambda data: fake_probe.allocate(len(data)), small_payload, 5)

    expected = sum(len(small_payload.variant(i)) for i in range(5))
    assert result.memory_delta == expected
    assert result.peak_memory == 10_000 + expected


def test_each_timed_call_gets_distinct_input(null_probe):
    seen = []
    payload = TestPayload("tiny", b"abc")
    runner = BenchmarkRunner(null_probe, warmup_iterations=3)
    runner.run("recorder", seen.append, payload, 5)

    timed = seen[3:]
    assert timed == [b"abc0", b"abc1", b"abc2", b"abc3", b"abc4"]
    assert len(set(timed)) == 5
    assert seen[:3] == [b"abc"] * 3
    assert payload.data == b"abc"


def test_zero_elapsed_is_flagged_not_infinite(null_probe, small_payload):
    runner = BenchmarkRunner(null_probe, warmup_iterations=0, timer=lambda: 5.0)
    result = runner.run("instant", hashlib.md5, small_payload, 10)

    assert not result.failed
    assert result.total_elapsed == 0
    assert result.average_per_call == 0
    assert result.throughput is None
    assert not result.throughput_measurable


def test_failure_during_warmup_is_contained(null_probe, small_payload):
    def broken(data):
        raise RuntimeError("boom")

    runner = BenchmarkRunner(null_probe, warmup_iterations=5)
    result = runner.run("broken", broken, small_payload, 10)

    assert result.failed
    assert "RuntimeError: boom" in result.error
    assert "warmup" in result.error
    assert result.total_elapsed is None
    assert result.average_per_call is None
    assert result.throughput is None


def test_failure_during_timed_phase_is_contained(null_probe, small_payload):
    def fails_on_variants(data):
        if data != small_payload.data:
            raise ValueError("unexpected input")

    runner = BenchmarkRunner(null_probe, warmup_iterations=5)
    result = runner.run("picky", fails_on_variants, small_payload, 10)

    assert result.failed
    assert "timed phase" in result.error
    assert result.total_elapsed is None


def test_null_probe_reports_memory_unavailable(null_probe, small_payload):
    result = BenchmarkRunner(null_probe, warmup_iterations=0).run("md5", hashlib.md5, small_payload, 5)
    assert result.memory_delta is None
    assert result.peak_memory is None


def test_invalid_counts_rejected(null_probe, small_payload):
    with pytest.raises(ValueError):
        BenchmarkRunner(null_probe, warmup_iterations=-1)
    with pytest.raises(ValueError):
        BenchmarkRunner(null_probe).run("md5", hashlib.md5, small_payload, 0)


def test_identical_implementations_are_roughly_even(null_probe):
    payload = TestPayload("small", b"Hello, World!")
    runner = BenchmarkRunner(null_probe)

    ratios = []
    for _ in range(5):
        reference = runner.run("hashlib md5()", hashlib.md5, payload, 1000)
        candidate = runner.run("hashlib md5() again", hashlib.md5, payload, 1000)
        ratios.append(compare(payload, reference, candidate).speedup_ratio)

    assert 0.8 <= statistics.median(ratios) <= 1.25
