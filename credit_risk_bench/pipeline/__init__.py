"""
Pipeline Module

Provides the benchmark orchestration.
"""

from credit_risk_bench.pipeline.orchestrator import BenchmarkPipeline, BenchmarkResult

__all__ = [
    "BenchmarkPipeline",
    "BenchmarkResult",
]
