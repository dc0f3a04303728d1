"""Micro-benchmark harness comparing interchangeable hash implementations."""

__version__ = "0.1.0"
