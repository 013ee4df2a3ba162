"""
Base Model

Abstract base class for all classification models.
"""

from abc import abstractmethod
from typing import Any, Dict, List, Optional
import pickle
import numpy as np
import pandas as pd

from credit_risk_bench.core.base import PandasComponent
from credit_risk_bench.core.exceptions import (
    ArtifactError,
    FormulaError,
    ModelTrainingError,
    PredictionError,
)
from credit_risk_bench.data.design_matrix import DesignMatrixBuilder
from credit_risk_bench.models.formula import Formula


class BaseModel(PandasComponent):
    """
    Abstract base class for benchmark models.

    A model is configured by a formula and family hyperparameters and is
    fitted directly on a partition DataFrame. Subclasses only supply the
    estimator-level hooks; formula binding, encoding, timing and error
    wrapping live here.

    Config keys:
        formula: "target ~ a + b" or "target ~ ."
        id_column: Column never used as a predictor
        default_params: Estimator hyperparameters
        unbalanced_sets: Re-weight classes for imbalance
        n_jobs: Compute context worker count
        random_state: Seed handed to the estimator
    """

    model_type: str = "base"
    supports_proba: bool = True

    def __init__(
        self,
        config: Dict[str, Any],
        name: Optional[str] = None
    ):
        """
        Initialize the model.

        Args:
            config: Model configuration dictionary
            name: Optional model name
        """
        super().__init__(config, name)
        self.model = None
        self.is_fitted = False
        self.formula: Optional[Formula] = None
        self.design: Optional[DesignMatrixBuilder] = None
        self.feature_names: List[str] = []
        self.feature_importances_: Optional[Dict[str, float]] = None

    @property
    def unbalanced_sets(self) -> bool:
        return bool(self.get_config('unbalanced_sets', False))

    @property
    def training_time(self) -> Optional[float]:
        """Wall-clock seconds spent in the last fit."""
        return self.execution_duration

    @abstractmethod
    def _fit_matrix(self, X: pd.DataFrame, y: pd.Series) -> None:
        """Fit the underlying estimator on an encoded feature matrix."""
        pass

    @abstractmethod
    def _predict_matrix(self, X: pd.DataFrame) -> np.ndarray:
        """Class predictions for an encoded feature matrix."""
        pass

    @abstractmethod
    def _predict_proba_matrix(self, X: pd.DataFrame) -> np.ndarray:
        """Positive-class probabilities for an encoded feature matrix."""
        pass

    def fit(self, df: pd.DataFrame) -> 'BaseModel':
        """
        Fit the model to a training partition.

        Args:
            df: Training partition holding the formula fields

        Returns:
            Self

        Raises:
            FormulaError: If the formula references unknown fields
            ModelTrainingError: If the estimator fails to fit
        """
        self._start_execution()

        try:
            formula = self._resolve_formula(df)
            design = DesignMatrixBuilder(list(formula.predictors))
            X = design.fit_transform(df)
            y = df[formula.target].astype(int)

            if len(X) == 0:
                raise ValueError("Training partition is empty")

            self.formula = formula
            self.design = design
            self.feature_names = list(X.columns)

            self._fit_matrix(X, y)

            self.is_fitted = True
            self.logger.info(f"Model fitted on {len(X):,} samples ({len(self.feature_names)} features)")

        except ModelTrainingError:
            raise
        except Exception as e:
            raise ModelTrainingError(
                f"{self.model_type} training failed: {e}",
                model_name=self.name,
                cause=e
            )
        finally:
            self._end_execution()

        return self

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        """0/1 class labels, one per row of ``df``."""
        X = self._prepare(df)
        return np.asarray(self._predict_matrix(X)).astype(int)

    def predict_proba(self, df: pd.DataFrame) -> np.ndarray:
        """Probability of the bad (positive) class, one per row of ``df``."""
        X = self._prepare(df)
        return np.asarray(self._predict_proba_matrix(X), dtype=float)

    def run(self, df: pd.DataFrame, **kwargs) -> 'BaseModel':
        return self.fit(df, **kwargs)

    def get_params(self) -> Dict[str, Any]:
        """Estimator hyperparameters, or the configured ones before fitting."""
        if self.model is not None and hasattr(self.model, 'get_params'):
            return self.model.get_params()
        return dict(self.get_config('default_params', {}))

    def get_feature_importance(self, top_n: Optional[int] = None) -> Dict[str, float]:
        """Importances ranked by magnitude, optionally cut to the first ``top_n``."""
        if self.feature_importances_ is None:
            return {}

        ranked = sorted(self.feature_importances_.items(), key=lambda kv: abs(kv[1]), reverse=True)
        return dict(ranked[:top_n] if top_n else ranked)

    def save(self, path: str) -> None:
        """
        Save model to disk.

        Args:
            path: Path to save model
        """
        import joblib

        if not self.is_fitted:
            raise ArtifactError("Cannot save an unfitted model", artifact_path=str(path))

        try:
            joblib.dump(self._to_artifact(), path)
        except (OSError, TypeError, ValueError, AttributeError, pickle.PicklingError) as e:
            raise ArtifactError(f"Failed to save model {self.name}", artifact_path=str(path), cause=e)

        self.logger.info(f"Model saved to {path}")

    def load(self, path: str) -> 'BaseModel':
        """
        Load model from disk.

        Args:
            path: Path to load model from

        Returns:
            Self
        """
        import joblib

        try:
            artifact = joblib.load(path)
        except (OSError, EOFError, ValueError, pickle.UnpicklingError) as e:
            raise ArtifactError("Failed to load model", artifact_path=str(path), cause=e)

        self._restore(artifact)
        self.logger.info(f"Model loaded from {path}")
        return self

    def _to_artifact(self) -> Dict[str, Any]:
        return {
            'model_type': self.model_type,
            'name': self.name,
            'model': self.model,
            'formula': str(self.formula) if self.formula else None,
            'design': self.design,
            'feature_names': self.feature_names,
            'feature_importances': self.feature_importances_,
            'config': self.config,
            'training_time': self.training_time,
        }

    def _restore(self, artifact: Dict[str, Any]) -> None:
        if artifact.get('model_type') != self.model_type:
            raise ArtifactError(
                f"Artifact holds a '{artifact.get('model_type')}' model, "
                f"expected '{self.model_type}'"
            )
        self.model = artifact['model']
        self.formula = Formula.parse(artifact['formula']) if artifact.get('formula') else None
        self.design = artifact.get('design')
        self.feature_names = artifact.get('feature_names', [])
        self.feature_importances_ = artifact.get('feature_importances')
        self.is_fitted = True

    def _resolve_formula(self, df: pd.DataFrame) -> Formula:
        text = self.get_config('formula')
        if not text:
            raise FormulaError("Model has no formula configured", model_name=self.name)
        formula = Formula.parse(text)
        id_column = self.get_config('id_column')
        try:
            return formula.resolve(df.columns, exclude=[id_column] if id_column else None)
        except FormulaError as e:
            e.model_name = self.name
            raise

    def _prepare(self, df: pd.DataFrame) -> pd.DataFrame:
        if not self.is_fitted:
            raise PredictionError("Model not fitted", model_name=self.name)

        missing = [c for c in self.formula.predictors if c not in df.columns]
        if missing:
            raise PredictionError(f"Missing predictor columns: {missing}", model_name=self.name)

        return self.design.transform(df)
