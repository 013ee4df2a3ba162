"""
Data Module

Provides ingestion, validation, splitting and encoding of the credit dataset.
"""

from credit_risk_bench.data.schema import DatasetSchema
from credit_risk_bench.data.ingest import DatasetLoader, convert_csv_to_parquet, read_parquet
from credit_risk_bench.data.data_splitter import DataSplitter, DataSplit
from credit_risk_bench.data.design_matrix import DesignMatrixBuilder
from credit_risk_bench.data.sample_data import generate_credit_data, write_credit_data

__all__ = [
    "DatasetSchema",
    "DatasetLoader",
    "convert_csv_to_parquet",
    "read_parquet",
    "DataSplitter",
    "DataSplit",
    "DesignMatrixBuilder",
    "generate_credit_data",
    "write_credit_data",
]
