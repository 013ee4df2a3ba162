"""
Data Splitter

Assigns every record to the training or testing partition by a seeded
weighted random draw.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass

import numpy as np
import pandas as pd

from credit_risk_bench.config.schema import SplittingConfig
from credit_risk_bench.core.base import PandasComponent
from credit_risk_bench.core.exceptions import DataValidationError


TRAIN = "train"
TEST = "test"


@dataclass
class DataSplit:
    """Container for the train/test partitions."""
    train: pd.DataFrame
    test: pd.DataFrame
    assignment: pd.Series

    @property
    def sizes(self) -> Dict[str, int]:
        return {TRAIN: len(self.train), TEST: len(self.test)}


class DataSplitter(PandasComponent):
    """
    Splits a dataset into training and testing partitions.

    Each row draws independently from {train, test} with probabilities
    (train_fraction, 1 - train_fraction) using numpy's Generator seeded
    with the configured seed. The same seed and row order always give
    the same assignment.
    """

    def __init__(
        self,
        config: SplittingConfig,
        name: Optional[str] = None
    ):
        """
        Initialize the data splitter.

        Args:
            config: Splitting configuration
            name: Optional splitter name
        """
        super().__init__(config.model_dump(), name or "DataSplitter")
        self.train_fraction = config.train_fraction
        self.seed = config.seed

    def validate(self) -> bool:
        """Validate split configuration."""
        if not 0.0 < self.train_fraction < 1.0:
            self.logger.error(f"train_fraction ({self.train_fraction}) must be in (0, 1)")
            return False
        return True

    def run(self, df: pd.DataFrame) -> DataSplit:
        """Run the splitting."""
        return self.split(df)

    def assign(self, n_rows: int) -> np.ndarray:
        """
        Draw the partition label of each row.

        Args:
            n_rows: Number of rows to assign

        Returns:
            Array of 'train'/'test' labels
        """
        rng = np.random.default_rng(self.seed)
        return rng.choice(
            [TRAIN, TEST],
            size=n_rows,
            p=[self.train_fraction, 1.0 - self.train_fraction],
        )

    def split(self, df: pd.DataFrame) -> DataSplit:
        """
        Split data into train/test partitions.

        Both partitions keep the input row order; together they hold every
        input row exactly once.

        Args:
            df: Dataset to split

        Returns:
            DataSplit with train and test DataFrames
        """
        if len(df) == 0:
            raise DataValidationError("Cannot split an empty dataset")

        self._start_execution()

        labels = self.assign(len(df))
        assignment = pd.Series(labels, index=df.index, name="partition")
        is_train = assignment == TRAIN

        result = DataSplit(
            train=df.loc[is_train],
            test=df.loc[~is_train],
            assignment=assignment,
        )

        total = len(df)
        for label, count in result.sizes.items():
            self.logger.info(f"{label.title()} set: {count:,} rows ({count/total*100:.1f}%)")

        self._end_execution()
        return result

    def split_stats(self, split: DataSplit, target_column: str) -> Dict[str, Any]:
        """Per-partition row counts and bad rates."""
        stats = {}
        for label, part in ((TRAIN, split.train), (TEST, split.test)):
            stats[label] = {
                'rows': len(part),
                'bad_rate': float(part[target_column].mean()) if len(part) else float('nan'),
            }
        return stats
