"""
Tests for the Command Line Interface
"""

import logging
from pathlib import Path

import pytest

from credit_risk_bench.cli import main, parse_args


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestParseArgs:
    """Test suite for argument parsing."""

    def test_defaults(self):
        args = parse_args([])

        assert args.config is None
        assert args.seed is None
        assert args.save_report is False
        assert args.dry_run is False

    def test_values(self):
        args = parse_args(['--seed', '7', '--train-fraction', '0.8', '--model-path', 'm.joblib'])

        assert args.seed == 7
        assert args.train_fraction == 0.8
        assert args.model_path == 'm.joblib'


class TestMain:
    """Test suite for main."""

    def test_dry_run(self, fast_config_yaml):
        assert main(['--config', str(fast_config_yaml), '--dry-run']) == 0

    def test_missing_config(self, tmp_path):
        assert main(['--config', str(tmp_path / 'missing.yaml'), '--dry-run']) == 1

    def test_invalid_override(self, fast_config_yaml):
        """Test an out-of-range training fraction fails validation."""
        assert main(['--config', str(fast_config_yaml), '--train-fraction', '1.5', '--dry-run']) == 1

    def test_missing_input(self, fast_config_yaml, tmp_path):
        """Test a failing run exits with status 1."""
        code = main([
            '--config', str(fast_config_yaml),
            '--input', str(tmp_path / 'missing.csv'),
        ])

        assert code == 1

    def test_full_run(self, fast_config_yaml, tmp_path):
        """Test a full run writes the model and the report."""
        model_path = tmp_path / 'cli' / 'model.joblib'
        output_dir = tmp_path / 'cli' / 'outputs'

        code = main([
            '--config', str(fast_config_yaml),
            '--model-path', str(model_path),
            '--output-dir', str(output_dir),
            '--seed', '7',
            '--save-report',
        ])

        assert code == 0
        assert model_path.exists()
        assert len(list(Path(output_dir).glob('model_comparison_*.csv'))) == 1
