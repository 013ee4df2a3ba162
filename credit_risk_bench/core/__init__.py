"""
Credit Risk Benchmark - Core Package

This package provides the core infrastructure for the benchmark:
- Base classes for all components
- Logging utilities
- Custom exceptions
"""

from credit_risk_bench.core.base import PipelineComponent, PandasComponent
from credit_risk_bench.core.logger import get_logger, setup_logging, PipelineLogger
from credit_risk_bench.core.exceptions import (
    PipelineException,
    ConfigurationError,
    DataReaderError,
    DataValidationError,
    SchemaValidationError,
    ModelTrainingError,
    FormulaError,
    PredictionError,
    EvaluationError,
    ArtifactError,
)

__all__ = [
    # Base classes
    "PipelineComponent",
    "PandasComponent",
    # Logging
    "get_logger",
    "setup_logging",
    "PipelineLogger",
    # Exceptions
    "PipelineException",
    "ConfigurationError",
    "DataReaderError",
    "DataValidationError",
    "SchemaValidationError",
    "ModelTrainingError",
    "FormulaError",
    "PredictionError",
    "EvaluationError",
    "ArtifactError",
]
