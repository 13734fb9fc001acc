"""
Benchmark domain module
"""
from .service import BenchmarkService

__all__ = ["BenchmarkService"]
