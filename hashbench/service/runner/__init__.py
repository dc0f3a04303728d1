from .benchmark_runner import BenchmarkRunner, DEFAULT_WARMUP_ITERATIONS

__all__ = ["BenchmarkRunner", "DEFAULT_WARMUP_ITERATIONS"]
