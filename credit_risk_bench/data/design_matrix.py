"""
Design Matrix Builder

Turns formula predictors into a numeric feature matrix. Categorical
predictors are one-hot encoded; the column layout learned on the training
partition is reused for every later transform.

Encoded column names never contain ``[``, ``]`` or ``<``: banded levels
such as ``[12,16)`` or ``<12 years`` become ``(12,16)`` and ``lt12 years``,
which XGBoost accepts as feature names.
"""

from typing import Dict, List, Optional

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype


_UNSAFE_CHARS = str.maketrans({'[': '(', ']': ')', '<': 'lt'})


def safe_feature_names(names: List[str]) -> Dict[str, str]:
    """Map raw column names to unique names free of ``[``, ``]`` and ``<``."""
    mapping: Dict[str, str] = {}
    taken = set()
    for raw in names:
        candidate = base = str(raw).translate(_UNSAFE_CHARS)
        suffix = 2
        while candidate in taken:
            candidate = f"{base}_{suffix}"
            suffix += 1
        taken.add(candidate)
        mapping[raw] = candidate
    return mapping


class DesignMatrixBuilder:
    """One-hot encodes categorical predictors with a fixed column layout."""

    def __init__(self, predictors: List[str], categorical_columns: Optional[List[str]] = None):
        self.predictors = list(predictors)
        self._declared_categoricals = categorical_columns
        self.categorical_columns: List[str] = []
        self.columns: Optional[List[str]] = None
        self._renames: Dict[str, str] = {}

    @property
    def is_fitted(self) -> bool:
        return self.columns is not None

    def fit(self, df: pd.DataFrame) -> "DesignMatrixBuilder":
        """Learn which predictors are categorical and the encoded layout."""
        frame = df[self.predictors]
        if self._declared_categoricals is not None:
            self.categorical_columns = [
                c for c in self.predictors if c in self._declared_categoricals
            ]
        else:
            self.categorical_columns = [
                c for c in self.predictors
                if not is_numeric_dtype(frame[c]) or is_bool_dtype(frame[c])
            ]
        self._renames = safe_feature_names(list(self._encode(frame).columns))
        self.columns = list(self._renames.values())
        return self

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Encode df and align it to the fitted layout (absent dummies are 0)."""
        if self.columns is None:
            raise ValueError("DesignMatrixBuilder is not fitted")
        encoded = self._encode(df[self.predictors])
        aligned = encoded.reindex(columns=list(self._renames), fill_value=0)
        return aligned.rename(columns=self._renames).astype(float)

    def fit_transform(self, df: pd.DataFrame) -> pd.DataFrame:
        return self.fit(df).transform(df)

    def _encode(self, frame: pd.DataFrame) -> pd.DataFrame:
        if not self.categorical_columns:
            return frame
        return pd.get_dummies(frame, columns=self.categorical_columns, dtype=float)
