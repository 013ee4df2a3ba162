"""
Config Module

Pydantic-based configuration for the benchmark.
"""

from credit_risk_bench.config.schema import (
    BenchmarkConfig,
    DataConfig,
    SplittingConfig,
    ComputeConfig,
    ModelSpec,
    EnsembleConfig,
    PersistenceConfig,
    OutputConfig,
    LoggingConfig,
    MODEL_FAMILIES,
)
from credit_risk_bench.config.loader import load_config, save_config

__all__ = [
    "BenchmarkConfig",
    "DataConfig",
    "SplittingConfig",
    "ComputeConfig",
    "ModelSpec",
    "EnsembleConfig",
    "PersistenceConfig",
    "OutputConfig",
    "LoggingConfig",
    "MODEL_FAMILIES",
    "load_config",
    "save_config",
]
