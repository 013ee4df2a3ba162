"""
Classification Metrics

Confusion-matrix metrics and AUC for binary credit default models.
"""

from typing import Any, Dict, Optional
import math

import numpy as np

from sklearn.metrics import (
    accuracy_score, confusion_matrix, f1_score,
    precision_score, recall_score, roc_auc_score
)

from credit_risk_bench.core.exceptions import EvaluationError


class ClassificationMetrics:
    """
    Binary classification metrics.

    Includes:
    - Accuracy, precision, recall, F1 (positive class = 1)
    - Confusion matrix counts
    - ROC AUC, NaN when no score is available
    """

    @staticmethod
    def _as_binary(values: Any, name: str) -> np.ndarray:
        array = np.asarray(values)
        if array.ndim != 1:
            raise EvaluationError(f"{name} must be one-dimensional", metric_name=name)
        if array.size and not set(np.unique(array)).issubset({0, 1}):
            raise EvaluationError(f"{name} must only contain 0/1 labels", metric_name=name)
        return array.astype(int)

    @staticmethod
    def auc(y_true: np.ndarray, y_score: Optional[np.ndarray]) -> float:
        """
        Area under the ROC curve of the positive class.

        Returns:
            AUC in [0, 1], or NaN when y_score is None or y_true holds a
            single class
        """
        if y_score is None:
            return math.nan
        if len(np.unique(y_true)) < 2:
            return math.nan
        return float(roc_auc_score(y_true, y_score))

    @staticmethod
    def calculate(
        y_true: Any,
        y_pred: Any,
        y_score: Optional[Any] = None
    ) -> Dict[str, Any]:
        """
        Calculate all metrics of one model on one partition.

        Args:
            y_true: True labels
            y_pred: Predicted classes
            y_score: Positive-class probabilities (None if unsupported)

        Returns:
            Dictionary of metrics

        Raises:
            EvaluationError: On length mismatch or non-binary labels
        """
        y_true = ClassificationMetrics._as_binary(y_true, "y_true")
        y_pred = ClassificationMetrics._as_binary(y_pred, "y_pred")

        if len(y_true) != len(y_pred):
            raise EvaluationError(
                f"Prediction count {len(y_pred)} does not match label count {len(y_true)}",
                metric_name="y_pred"
            )
        if len(y_true) == 0:
            raise EvaluationError("Cannot evaluate on an empty partition")

        if y_score is not None:
            y_score = np.asarray(y_score, dtype=float)
            if len(y_score) != len(y_true):
                raise EvaluationError(
                    f"Score count {len(y_score)} does not match label count {len(y_true)}",
                    metric_name="y_score"
                )

        cm = confusion_matrix(y_true, y_pred, labels=[0, 1])
        tn, fp, fn, tp = cm.ravel()

        return {
            'accuracy': float(accuracy_score(y_true, y_pred)),
            'precision': float(precision_score(y_true, y_pred, zero_division=0)),
            'recall': float(recall_score(y_true, y_pred, zero_division=0)),
            'f1_score': float(f1_score(y_true, y_pred, zero_division=0)),
            'auc': ClassificationMetrics.auc(y_true, y_score),
            'confusion_matrix': {
                'tn': int(tn),
                'fp': int(fp),
                'fn': int(fn),
                'tp': int(tp)
            },
        }
