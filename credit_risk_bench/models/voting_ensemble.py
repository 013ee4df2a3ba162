"""
Voting Ensemble

Combines the class predictions of several models by majority vote.
"""

from typing import Any, Dict, List, Optional
import numpy as np
import pandas as pd

from credit_risk_bench.core.exceptions import ModelTrainingError, PredictionError
from credit_risk_bench.models.base_model import BaseModel


class VotingEnsemble(BaseModel):
    """
    Majority-vote ensemble.

    Every member is trained on the same partition. A row is predicted
    positive only when strictly more than half of the members vote for it,
    so ties fall to the negative class. The ensemble exposes no class
    probability.
    """

    model_type = "vote_ensemble"
    supports_proba = False

    def __init__(
        self,
        config: Dict[str, Any],
        members: Optional[List[BaseModel]] = None,
        name: Optional[str] = None
    ):
        super().__init__(config, name or "VotingEnsemble")
        self.model: List[BaseModel] = list(members or [])

    @property
    def members(self) -> List[BaseModel]:
        return self.model

    def fit(self, df: pd.DataFrame) -> 'VotingEnsemble':
        """
        Fit every member on the training partition.

        Raises:
            ModelTrainingError: If there are no members or a member fails
        """
        if not self.members:
            raise ModelTrainingError("Ensemble has no members", model_name=self.name)

        self._start_execution()
        try:
            for member in self.members:
                member.fit(df)
        finally:
            self._end_execution()

        self.feature_names = list(self.members[0].feature_names)
        self.is_fitted = True
        self.logger.info(f"Ensemble of {len(self.members)} members fitted on {len(df):,} samples")
        return self

    def member_votes(self, df: pd.DataFrame) -> np.ndarray:
        """Class predictions of each member, one column per member."""
        if not self.is_fitted:
            raise PredictionError("Model not fitted", model_name=self.name)
        return np.column_stack([member.predict(df) for member in self.members])

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        votes = self.member_votes(df)
        positive_votes = votes.sum(axis=1)
        return (positive_votes * 2 > votes.shape[1]).astype(int)

    def predict_proba(self, df: pd.DataFrame) -> np.ndarray:
        raise PredictionError(
            "Vote ensemble exposes no class probabilities",
            model_name=self.name
        )

    # Member models do the estimator work
    def _fit_matrix(self, X: pd.DataFrame, y: pd.Series) -> None:
        raise NotImplementedError

    def _predict_matrix(self, X: pd.DataFrame) -> np.ndarray:
        raise NotImplementedError

    def _predict_proba_matrix(self, X: pd.DataFrame) -> np.ndarray:
        raise NotImplementedError

    def get_params(self) -> Dict[str, Any]:
        return {
            'combine': 'vote',
            'members': [member.name for member in self.members],
        }

    def _to_artifact(self) -> Dict[str, Any]:
        artifact = super()._to_artifact()
        artifact['model'] = [member._to_artifact() for member in self.members]
        return artifact

    def _restore(self, artifact: Dict[str, Any]) -> None:
        from credit_risk_bench.models.model_factory import ModelFactory

        super()._restore(artifact)
        self.model = [ModelFactory.from_artifact(member) for member in artifact['model']]
