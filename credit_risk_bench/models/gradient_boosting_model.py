"""
Gradient Boosting Model

XGBoost classifier wrapper with leaf-limited trees and imbalance handling.
"""

from typing import Any, Dict, Optional
import numpy as np
import pandas as pd

import xgboost as xgb

from credit_risk_bench.models.base_model import BaseModel
from credit_risk_bench.core.exceptions import ModelTrainingError


class GradientBoostingModel(BaseModel):
    """
    XGBoost classifier for credit scoring.

    Features:
    - Loss-guided trees capped by leaf count (max_leaves)
    - Tree count, learning rate and minimum split weight from config
    - scale_pos_weight = negatives / positives when unbalanced_sets is set
    - Feature importance extraction
    """

    model_type = "gradient_boosting"

    def __init__(
        self,
        config: Dict[str, Any],
        name: Optional[str] = None
    ):
        super().__init__(config, name or "GradientBoostingModel")

        self.default_params = {
            'objective': 'binary:logistic',
            'eval_metric': 'auc',
            'tree_method': 'hist',
            'grow_policy': 'lossguide',
            'max_depth': 0,
            'max_leaves': 20,
            'learning_rate': 0.2,
            'n_estimators': 100,
            'min_child_weight': 10,
            'random_state': self.get_config('random_state', 42),
            'n_jobs': self.get_config('n_jobs', -1),
            'verbosity': 0
        }
        self.default_params.update(self.get_config('default_params', {}))

    def _fit_matrix(self, X: pd.DataFrame, y: pd.Series) -> None:
        params = self.default_params.copy()

        if self.unbalanced_sets:
            neg_count = int((y == 0).sum())
            pos_count = int((y == 1).sum())
            if pos_count == 0:
                raise ModelTrainingError(
                    "Cannot balance classes: no positive samples in training data",
                    model_name=self.name
                )
            params['scale_pos_weight'] = neg_count / pos_count
            self.logger.info(f"Auto scale_pos_weight: {params['scale_pos_weight']:.2f}")

        self.model = xgb.XGBClassifier(**params)
        self.model.fit(X, y)

        self.feature_importances_ = dict(zip(
            self.feature_names,
            self.model.feature_importances_
        ))

    def _predict_matrix(self, X: pd.DataFrame) -> np.ndarray:
        return self.model.predict(X)

    def _predict_proba_matrix(self, X: pd.DataFrame) -> np.ndarray:
        return self.model.predict_proba(X)[:, 1]
