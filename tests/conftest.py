"""
Pytest Configuration and Shared Fixtures

Provides common fixtures for all test modules including:
- Synthetic credit data with a known layout
- A CSV copy of that data in a temporary directory
- Benchmark configurations with fast model settings
- Pre-split train/test partitions
"""

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest
import numpy as np
import pandas as pd
import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from credit_risk_bench.config.loader import load_config
from credit_risk_bench.config.schema import BenchmarkConfig, SplittingConfig
from credit_risk_bench.data.data_splitter import DataSplitter
from credit_risk_bench.data.sample_data import generate_credit_data


# ===================================================================
# DATA FIXTURES
# ===================================================================

@pytest.fixture
def credit_data() -> pd.DataFrame:
    """1,000 synthetic accounts generated with seed 42."""
    return generate_credit_data(n_rows=1000, seed=42)


@pytest.fixture
def small_credit_data() -> pd.DataFrame:
    """Small dataset for quick schema and ingestion tests."""
    return generate_credit_data(n_rows=60, seed=7)


@pytest.fixture
def credit_csv(tmp_path, credit_data) -> Path:
    """The 1,000-row dataset written as a comma-separated file."""
    path = tmp_path / "input" / "credit_data.csv"
    path.parent.mkdir(parents=True, exist_ok=True)
    credit_data.to_csv(path, index=False)
    return path


@pytest.fixture
def split_data(credit_data):
    """Default 70/30 split of credit_data with seed 42."""
    return DataSplitter(SplittingConfig()).split(credit_data)


@pytest.fixture
def train_df(split_data) -> pd.DataFrame:
    return split_data.train


@pytest.fixture
def test_df(split_data) -> pd.DataFrame:
    return split_data.test


# ===================================================================
# MODEL FIXTURES
# ===================================================================

@pytest.fixture
def model_config() -> Dict[str, Any]:
    """Component config for a directly constructed model."""
    return {
        'formula': 'bad_flag ~ .',
        'id_column': 'account_id',
        'default_params': {},
        'unbalanced_sets': False,
        'n_jobs': 1,
        'random_state': 42,
    }


def _fast_model_specs() -> List[Dict[str, Any]]:
    tree_params = {'max_leaves': 20, 'min_child_weight': 10}
    return [
        {
            'name': 'logistic_regression',
            'family': 'logistic_regression',
            'params': {'max_iter': 500},
        },
        {
            'name': 'random_forest',
            'family': 'random_forest',
            'params': {'n_estimators': 20, 'max_leaf_nodes': 20, 'min_samples_split': 10},
        },
        {
            'name': 'boosted_trees_100',
            'family': 'gradient_boosting',
            'params': {**tree_params, 'n_estimators': 20, 'learning_rate': 0.2},
        },
        {
            'name': 'boosted_trees_300',
            'family': 'gradient_boosting',
            'params': {**tree_params, 'n_estimators': 40, 'learning_rate': 0.1},
        },
        {
            'name': 'boosted_trees_100_unbalanced',
            'family': 'gradient_boosting',
            'params': {**tree_params, 'n_estimators': 20, 'learning_rate': 0.2},
            'unbalanced_sets': True,
        },
        {
            'name': 'boosted_trees_300_unbalanced',
            'family': 'gradient_boosting',
            'params': {**tree_params, 'n_estimators': 40, 'learning_rate': 0.1},
            'unbalanced_sets': True,
        },
    ]


@pytest.fixture
def fast_config_dict(tmp_path, credit_csv) -> Dict[str, Any]:
    """Benchmark config dict with small tree counts and tmp_path outputs."""
    return {
        'data': {
            'input_path': str(credit_csv),
            'parquet_path': str(tmp_path / 'data' / 'credit_data.parquet'),
        },
        'compute': {'mode': 'sequential'},
        'models': _fast_model_specs(),
        'persistence': {'path': str(tmp_path / 'models' / 'credit_risk_model.joblib')},
        'output': {'base_dir': str(tmp_path / 'outputs')},
    }


@pytest.fixture
def fast_config(fast_config_dict) -> BenchmarkConfig:
    return load_config(overrides=fast_config_dict)


@pytest.fixture
def fast_config_yaml(tmp_path, fast_config_dict) -> Path:
    """fast_config_dict written to a YAML file."""
    path = tmp_path / 'config' / 'benchmark.yaml'
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.safe_dump(fast_config_dict, f, sort_keys=False)
    return path


@pytest.fixture
def binary_labels():
    """Hand-made labels, predictions and scores with known metrics."""
    y_true = np.array([0, 0, 0, 0, 1, 1, 1, 0, 1, 0])
    y_pred = np.array([0, 0, 1, 0, 1, 1, 0, 0, 1, 0])
    y_score = np.array([0.1, 0.2, 0.7, 0.3, 0.9, 0.8, 0.4, 0.2, 0.6, 0.1])
    return y_true, y_pred, y_score
