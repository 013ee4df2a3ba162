"""
Model Evaluator

Evaluates models on the testing partition and assembles the
side-by-side comparison report.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
import math

import numpy as np
import pandas as pd

from credit_risk_bench.core.base import PandasComponent
from credit_risk_bench.core.exceptions import EvaluationError
from credit_risk_bench.evaluation.metrics import ClassificationMetrics
from credit_risk_bench.models.base_model import BaseModel


REPORT_COLUMNS = ['model', 'accuracy', 'recall', 'precision', 'auc', 'training_time']


@dataclass
class EvaluationResult:
    """Predictions and metrics of one model on one partition."""
    model_name: str
    y_pred: np.ndarray
    y_score: Optional[np.ndarray]
    metrics: Dict[str, Any]
    training_time: float
    sample_size: int
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def has_scores(self) -> bool:
        return self.y_score is not None


class ModelEvaluator(PandasComponent):
    """
    Evaluates models and compares performance.

    Features:
    - Evaluate single models
    - Evaluate several models, keeping training order
    - Build and format the comparison report
    - Pick the best model by a metric
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ):
        """
        Initialize the evaluator.

        Args:
            config: Evaluation configuration (needs 'target_column')
            name: Optional evaluator name
        """
        super().__init__(config or {}, name or "ModelEvaluator")
        self.target_column = self.get_config('target_column', 'bad_flag')
        self.evaluation_history: List[EvaluationResult] = []

    def run(
        self,
        model: BaseModel,
        test_df: pd.DataFrame
    ) -> EvaluationResult:
        """Run evaluation."""
        return self.evaluate(model, test_df)

    def evaluate(
        self,
        model: BaseModel,
        test_df: pd.DataFrame
    ) -> EvaluationResult:
        """
        Evaluate a single model.

        Probabilities are only requested from models that support them;
        the others report AUC as NaN.

        Args:
            model: Fitted model
            test_df: Testing partition with the target column

        Returns:
            EvaluationResult
        """
        if self.target_column not in test_df.columns:
            raise EvaluationError(
                f"Target column '{self.target_column}' not in testing partition",
                metric_name=self.target_column
            )

        y_true = test_df[self.target_column].to_numpy()
        y_pred = model.predict(test_df)
        y_score = model.predict_proba(test_df) if model.supports_proba else None

        metrics = ClassificationMetrics.calculate(y_true, y_pred, y_score)
        training_time = model.training_time if model.training_time is not None else 0.0

        result = EvaluationResult(
            model_name=model.name,
            y_pred=y_pred,
            y_score=y_score,
            metrics=metrics,
            training_time=training_time,
            sample_size=len(test_df),
        )
        self.evaluation_history.append(result)

        self.logger.info(
            f"{model.name}: accuracy={metrics['accuracy']:.4f}, "
            f"recall={metrics['recall']:.4f}, precision={metrics['precision']:.4f}"
            + (f", AUC={metrics['auc']:.4f}" if result.has_scores else ", AUC undefined (no scores)")
        )
        return result

    def evaluate_multiple(
        self,
        models: Dict[str, BaseModel],
        test_df: pd.DataFrame
    ) -> Dict[str, EvaluationResult]:
        """
        Evaluate multiple models.

        Returns:
            Dictionary of model name to result, in the order of models
        """
        return {name: self.evaluate(model, test_df) for name, model in models.items()}

    def compare_models(
        self,
        results: Dict[str, EvaluationResult]
    ) -> pd.DataFrame:
        """
        Build the comparison report.

        One row per model in insertion (training) order.

        Returns:
            DataFrame with REPORT_COLUMNS
        """
        rows = []
        for model_name, result in results.items():
            metrics = result.metrics
            rows.append({
                'model': model_name,
                'accuracy': metrics['accuracy'],
                'recall': metrics['recall'],
                'precision': metrics['precision'],
                'auc': metrics['auc'],
                'training_time': result.training_time,
            })
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)

    @staticmethod
    def format_report(report: pd.DataFrame, decimals: int = 4) -> str:
        """Render the comparison report as a fixed-width table."""
        return report.to_string(
            index=False,
            float_format=lambda v: f"{v:.{decimals}f}",
            na_rep="NaN",
        )

    def select_best(
        self,
        results: Dict[str, EvaluationResult],
        metric: str = 'auc'
    ) -> Tuple[str, EvaluationResult]:
        """
        Get the best performing model.

        Models whose metric is NaN are skipped; ties keep the earlier model.

        Raises:
            EvaluationError: If no model has a defined value for the metric
        """
        best_name = None
        best_score = -np.inf

        for name, result in results.items():
            score = result.metrics.get(metric)
            if score is None or math.isnan(score):
                continue
            if score > best_score:
                best_score = score
                best_name = name

        if best_name is None:
            raise EvaluationError(f"No model has a defined {metric}", metric_name=metric)

        self.logger.info(f"Best model: {best_name} with {metric}={best_score:.4f}")
        return best_name, results[best_name]
