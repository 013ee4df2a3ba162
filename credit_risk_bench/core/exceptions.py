"""
Benchmark Exceptions

Every failure in the benchmark is fatal. Components catch library errors
at their boundary, wrap them in one of the classes below (keeping the
original as ``cause``) and re-raise.

Subclasses declare the extra context they carry in ``_context``; each
entry is an (attribute, label) pair that becomes a keyword argument, an
attribute and a ``| Label: value`` suffix of ``str(error)``.
"""

from typing import Any, Dict, List, Optional, Tuple


class PipelineException(Exception):
    """Root of the benchmark error hierarchy."""

    _context: Tuple[Tuple[str, str], ...] = ()

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        **context: Any
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

        for attr, _ in self._context:
            setattr(self, attr, context.pop(attr, None))
        if context:
            raise TypeError(
                f"{self.__class__.__name__} got unexpected context: {sorted(context)}"
            )

    def _suffixes(self) -> List[str]:
        parts = []
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        for attr, label in self._context:
            value = getattr(self, attr, None)
            if value:
                parts.append(f"{label}: {value}")
        return parts

    def __str__(self) -> str:
        return " | ".join([self.message] + self._suffixes())

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for structured logs and run metadata."""
        payload = {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }
        for attr, _ in self._context:
            payload[attr] = getattr(self, attr, None)
        return payload


class ConfigurationError(PipelineException):
    """Malformed YAML, out-of-range values or dangling model references."""


class DataReaderError(PipelineException):
    """The input CSV or its Parquet copy is missing or cannot be parsed."""

    _context = (("source", "Source"),)


class DataValidationError(PipelineException):
    """
    The dataset breaks an invariant: non-binary or null target, duplicate
    account identifiers, or nothing left to split.
    """

    def __init__(
        self,
        message: str,
        validation_errors: Optional[List[Dict[str, Any]]] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors or []

    def _suffixes(self) -> List[str]:
        parts = super()._suffixes()
        if self.validation_errors:
            parts.append(f"{len(self.validation_errors)} validation error(s)")
        return parts


class SchemaValidationError(DataValidationError):
    """Expected columns are absent from the input file."""

    _context = (("expected_schema", "Expected"), ("actual_schema", "Actual"))

    def _suffixes(self) -> List[str]:
        # The full schemas are too long for a log line
        return [p for p in super()._suffixes() if not p.startswith(("Expected", "Actual"))]


class ModelTrainingError(PipelineException):
    """A model variant could not be fitted on the training partition."""

    _context = (("model_name", "Model"),)


class FormulaError(ModelTrainingError):
    """A model formula is malformed or names a field the dataset lacks."""


class PredictionError(PipelineException):
    """Scoring an unfitted model, or asking the vote ensemble for probabilities."""

    _context = (("model_name", "Model"),)


class EvaluationError(PipelineException):
    """Labels and predictions cannot be compared (length, non-binary values)."""

    _context = (("metric_name", "Metric"),)


class ArtifactError(PipelineException):
    """The persisted model cannot be written, read or recognized."""

    _context = (("artifact_path", "Path"),)
