"""
Logistic Regression Model

Standardized L2 logistic regression: the linear baseline of the benchmark.
"""

from typing import Any, Dict, Optional
import numpy as np
import pandas as pd

from sklearn.linear_model import LogisticRegression
from sklearn.preprocessing import StandardScaler

from credit_risk_bench.models.base_model import BaseModel


class LogisticRegressionModel(BaseModel):
    """
    Linear baseline. Predictors are standardized before fitting, so the
    signed coefficients are comparable across features; their absolute
    values serve as feature importances. ``unbalanced_sets`` switches on
    balanced class weights.
    """

    model_type = "logistic_regression"

    def __init__(
        self,
        config: Dict[str, Any],
        name: Optional[str] = None
    ):
        super().__init__(config, name or "LogisticRegressionModel")

        self.default_params = {
            'max_iter': 1000,
            'solver': 'lbfgs',
            'C': 1.0,
            'random_state': self.get_config('random_state', 42),
        }
        self.default_params.update(self.get_config('default_params', {}))

        self.scaler = StandardScaler()
        self._coefficients: Dict[str, float] = {}

    def _fit_matrix(self, X: pd.DataFrame, y: pd.Series) -> None:
        params = self.default_params.copy()
        if self.unbalanced_sets:
            params['class_weight'] = 'balanced'

        X_scaled = self.scaler.fit_transform(X)

        self.model = LogisticRegression(**params)
        self.model.fit(X_scaled, y)

        coefficients = self.model.coef_[0]
        self.feature_importances_ = dict(zip(self.feature_names, np.abs(coefficients)))
        self._coefficients = dict(zip(self.feature_names, coefficients))

    def _predict_matrix(self, X: pd.DataFrame) -> np.ndarray:
        return self.model.predict(self.scaler.transform(X))

    def _predict_proba_matrix(self, X: pd.DataFrame) -> np.ndarray:
        # Return only the positive class probability (column 1)
        return self.model.predict_proba(self.scaler.transform(X))[:, 1]

    def get_coefficients(self) -> Dict[str, float]:
        """
        Get model coefficients (signed, on standardized features).

        Returns:
            Dictionary of feature name to coefficient
        """
        return self._coefficients

    def _to_artifact(self) -> Dict[str, Any]:
        artifact = super()._to_artifact()
        artifact['scaler'] = self.scaler
        artifact['coefficients'] = self._coefficients
        return artifact

    def _restore(self, artifact: Dict[str, Any]) -> None:
        super()._restore(artifact)
        self.scaler = artifact['scaler']
        self._coefficients = artifact.get('coefficients', {})
