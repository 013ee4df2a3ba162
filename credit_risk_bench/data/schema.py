"""
Dataset Schema

Describes and validates the credit dataset layout: one identifier,
one binary target and a fixed set of numeric/categorical predictors.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from credit_risk_bench.config.schema import DataConfig
from credit_risk_bench.core.exceptions import DataValidationError, SchemaValidationError


@dataclass(frozen=True)
class DatasetSchema:
    """Expected columns of the credit dataset."""
    id_column: str = "account_id"
    target_column: str = "bad_flag"
    numeric_columns: List[str] = field(default_factory=list)
    categorical_columns: List[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: DataConfig) -> "DatasetSchema":
        return cls(
            id_column=config.id_column,
            target_column=config.target_column,
            numeric_columns=list(config.numeric_columns),
            categorical_columns=list(config.categorical_columns),
        )

    @property
    def predictor_columns(self) -> List[str]:
        return self.numeric_columns + self.categorical_columns

    @property
    def required_columns(self) -> List[str]:
        return [self.id_column, self.target_column] + self.predictor_columns

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id_column': self.id_column,
            'target_column': self.target_column,
            'numeric_columns': self.numeric_columns,
            'categorical_columns': self.categorical_columns,
        }

    def validate(self, df: pd.DataFrame) -> None:
        """
        Validate a DataFrame against the schema.

        Checks that every expected column is present, that the target only
        holds 0/1 and that the identifier is unique.

        Args:
            df: DataFrame to validate

        Raises:
            SchemaValidationError: If expected columns are missing
            DataValidationError: If target or identifier invariants fail
        """
        missing = [c for c in self.required_columns if c not in df.columns]
        if missing:
            raise SchemaValidationError(
                f"Missing expected columns: {missing}",
                expected_schema=self.to_dict(),
                actual_schema={'columns': list(df.columns)},
                validation_errors=[{'column': c, 'error': 'missing'} for c in missing],
            )

        errors: List[Dict[str, Any]] = []

        target = df[self.target_column]
        if target.isna().any():
            errors.append({
                'column': self.target_column,
                'error': 'null target values',
                'count': int(target.isna().sum()),
            })
        observed = set(pd.unique(target.dropna()))
        if not observed.issubset({0, 1}):
            errors.append({
                'column': self.target_column,
                'error': 'target is not binary',
                'values': sorted(str(v) for v in observed - {0, 1}),
            })

        duplicated = df[self.id_column].duplicated()
        if duplicated.any():
            errors.append({
                'column': self.id_column,
                'error': 'duplicate identifiers',
                'count': int(duplicated.sum()),
            })

        if errors:
            raise DataValidationError(
                "Dataset failed validation",
                validation_errors=errors,
            )
