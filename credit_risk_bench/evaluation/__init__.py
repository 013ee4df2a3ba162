"""
Evaluation Module

Provides classification metrics and the model comparison report.
"""

from credit_risk_bench.evaluation.metrics import ClassificationMetrics
from credit_risk_bench.evaluation.evaluator import ModelEvaluator, EvaluationResult, REPORT_COLUMNS

__all__ = [
    "ClassificationMetrics",
    "ModelEvaluator",
    "EvaluationResult",
    "REPORT_COLUMNS",
]
