"""
Data Ingestion

Reads the delimited credit file, validates it, encodes categorical
fields as enumerated factors and converts it to Parquet.
"""

from pathlib import Path
from typing import Any, Dict, Optional
import logging

import pandas as pd

from credit_risk_bench.config.schema import DataConfig
from credit_risk_bench.core.base import PandasComponent
from credit_risk_bench.core.exceptions import DataReaderError
from credit_risk_bench.data.schema import DatasetSchema


logger = logging.getLogger(__name__)


def convert_csv_to_parquet(
    csv_path: str,
    parquet_path: str,
    schema: DatasetSchema,
    delimiter: str = ",",
) -> pd.DataFrame:
    """
    Convert a delimited file to Parquet and read it back.

    Any existing file at parquet_path is overwritten.

    Args:
        csv_path: Path to the delimited input file.
        parquet_path: Destination Parquet path.
        schema: Expected dataset schema.
        delimiter: Field delimiter of the input file.

    Returns:
        DataFrame re-read from the Parquet file.

    Raises:
        DataReaderError: If the input file is missing or unreadable.
        SchemaValidationError: If expected columns are missing.
        DataValidationError: If target/identifier invariants fail.
    """
    source = Path(csv_path)
    if not source.exists():
        raise DataReaderError("Input file not found", source=str(csv_path))

    logger.info(f"Reading {csv_path}")
    try:
        df = pd.read_csv(source, sep=delimiter)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataReaderError("Could not parse input file", source=str(csv_path), cause=e)

    logger.info(f"Loaded {len(df):,} rows, {len(df.columns):,} columns")

    schema.validate(df)

    df[schema.target_column] = df[schema.target_column].astype(int)
    for col in schema.categorical_columns:
        df[col] = df[col].astype('category')

    destination = Path(parquet_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(destination, index=False)
    logger.info(f"Wrote Parquet file to {destination}")

    return read_parquet(str(destination))


def read_parquet(parquet_path: str) -> pd.DataFrame:
    """
    Read a converted Parquet dataset.

    Raises:
        DataReaderError: If the file is missing or unreadable.
    """
    path = Path(parquet_path)
    if not path.exists():
        raise DataReaderError("Parquet file not found", source=str(parquet_path))
    try:
        return pd.read_parquet(path)
    except (OSError, ValueError) as e:
        raise DataReaderError("Could not read Parquet file", source=str(parquet_path), cause=e)


class DatasetLoader(PandasComponent):
    """
    Loads the credit dataset for the benchmark.

    Wraps convert_csv_to_parquet with component timing and logging.
    """

    def __init__(
        self,
        config: DataConfig,
        name: Optional[str] = None
    ):
        """
        Initialize the loader.

        Args:
            config: Data configuration
            name: Optional loader name
        """
        super().__init__(config.model_dump(), name or "DatasetLoader")
        self.data_config = config
        self.schema = DatasetSchema.from_config(config)

    def run(self) -> pd.DataFrame:
        """Run the ingestion."""
        return self.load()

    def load(self) -> pd.DataFrame:
        """
        Convert the configured CSV to Parquet and return the dataset.

        Returns:
            Dataset with categorical fields as pandas categories
        """
        self._start_execution()
        df = convert_csv_to_parquet(
            self.data_config.input_path,
            self.data_config.parquet_path,
            self.schema,
            delimiter=self.data_config.delimiter,
        )
        self.logger.info(
            f"Dataset ready: {len(df):,} rows, "
            f"bad rate {df[self.schema.target_column].mean():.2%}"
        )
        self._end_execution()
        return df

    def summary(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Basic statistics of a loaded dataset."""
        memory = self.check_memory_usage(df)
        return {
            'rows': len(df),
            'columns': len(df.columns),
            'bad_rate': float(df[self.schema.target_column].mean()) if len(df) else 0.0,
            'memory_mb': round(memory['total_mb'], 3),
        }
