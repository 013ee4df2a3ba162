"""
End-to-End Benchmark Tests

Runs the default configuration (six models plus the vote ensemble) on
1,000 generated rows with seed 42 and a 70/30 split.
"""

import math

import pandas as pd
import pytest

from credit_risk_bench.config.loader import load_config
from credit_risk_bench.pipeline.orchestrator import BenchmarkPipeline


@pytest.fixture
def default_config(tmp_path, credit_csv):
    """Default models and split; only paths point into tmp_path."""
    return load_config(overrides={
        'data': {
            'input_path': str(credit_csv),
            'parquet_path': str(tmp_path / 'data' / 'credit_data.parquet'),
        },
        'compute': {'mode': 'sequential'},
        'persistence': {'path': str(tmp_path / 'models' / 'credit_risk_model.joblib')},
        'output': {'base_dir': str(tmp_path / 'outputs')},
    })


class TestEndToEnd:
    """Full benchmark with the default configuration."""

    def test_seven_report_rows(self, default_config):
        """Test six models plus one ensemble give seven bounded rows."""
        result = BenchmarkPipeline(default_config).run()
        report = result.report

        assert len(report) == 7
        for metric in ('accuracy', 'recall', 'precision'):
            assert report[metric].between(0.0, 1.0).all()
        for name, auc in zip(report['model'], report['auc']):
            if name == 'vote_ensemble':
                assert math.isnan(auc)
            else:
                assert 0.0 <= auc <= 1.0
        assert (report['training_time'] >= 0).all()

    def test_predictions_cover_test_partition(self, default_config):
        result = BenchmarkPipeline(default_config).run()

        for evaluation in result.results.values():
            assert len(evaluation.y_pred) == len(result.split.test)

    def test_repeat_runs_identical_partitions(self, default_config):
        """Test two runs with the same seed and input split identically."""
        first = BenchmarkPipeline(default_config).run()
        second = BenchmarkPipeline(default_config).run()

        pd.testing.assert_series_equal(first.split.assignment, second.split.assignment)
        assert first.split.test['account_id'].tolist() == second.split.test['account_id'].tolist()
