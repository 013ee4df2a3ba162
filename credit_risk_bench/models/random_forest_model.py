"""
Random Forest Model

Random Forest classifier wrapper.
"""

from typing import Any, Dict, Optional
import numpy as np
import pandas as pd

from sklearn.ensemble import RandomForestClassifier

from credit_risk_bench.models.base_model import BaseModel


class RandomForestModel(BaseModel):
    """
    Random Forest classifier for credit scoring.

    Hyperparameters of interest: tree count (n_estimators), leaf count
    (max_leaf_nodes) and minimum split size (min_samples_split).
    """

    model_type = "random_forest"

    def __init__(
        self,
        config: Dict[str, Any],
        name: Optional[str] = None
    ):
        super().__init__(config, name or "RandomForestModel")

        self.default_params = {
            'n_estimators': 100,
            'max_leaf_nodes': None,
            'min_samples_split': 2,
            'random_state': self.get_config('random_state', 42),
            'n_jobs': self.get_config('n_jobs', -1),
        }
        self.default_params.update(self.get_config('default_params', {}))

    def _fit_matrix(self, X: pd.DataFrame, y: pd.Series) -> None:
        params = self.default_params.copy()
        if self.unbalanced_sets:
            params['class_weight'] = 'balanced'

        self.model = RandomForestClassifier(**params)
        self.model.fit(X, y)

        self.feature_importances_ = dict(zip(
            self.feature_names,
            self.model.feature_importances_
        ))

    def _predict_matrix(self, X: pd.DataFrame) -> np.ndarray:
        return self.model.predict(X)

    def _predict_proba_matrix(self, X: pd.DataFrame) -> np.ndarray:
        return self.model.predict_proba(X)[:, 1]
