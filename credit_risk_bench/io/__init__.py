"""
IO Module

Provides artifact and report output management.
"""

from credit_risk_bench.io.output_manager import OutputManager

__all__ = [
    "OutputManager",
]
