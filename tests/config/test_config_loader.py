"""
Tests for Benchmark Configuration

Tests the pydantic schema defaults and validators, and load_config/save_config.
"""

import pytest
import yaml

from credit_risk_bench.config.loader import load_config, save_config
from credit_risk_bench.config.schema import (
    BenchmarkConfig,
    ComputeConfig,
    SplittingConfig,
)
from credit_risk_bench.core.exceptions import ConfigurationError


class TestSchemaDefaults:
    """Test suite for the default configuration."""

    def test_default_split(self):
        """Test default 70/30 split seeded with 42."""
        config = BenchmarkConfig()

        assert config.splitting.train_fraction == pytest.approx(0.70)
        assert config.splitting.test_fraction == pytest.approx(0.30)
        assert config.splitting.seed == 42

    def test_default_models(self):
        """Test the six default model variants in training order."""
        config = BenchmarkConfig()

        assert [spec.name for spec in config.models] == [
            'logistic_regression',
            'random_forest',
            'boosted_trees_100',
            'boosted_trees_300',
            'boosted_trees_100_unbalanced',
            'boosted_trees_300_unbalanced',
        ]

    def test_boosted_tree_hyperparameters(self):
        """Test tree count and learning rate pairs of the boosted variants."""
        config = BenchmarkConfig()

        small = config.get_model_spec('boosted_trees_100')
        large = config.get_model_spec('boosted_trees_300_unbalanced')

        assert small.params['n_estimators'] == 100
        assert small.params['learning_rate'] == 0.2
        assert small.unbalanced_sets is False
        assert large.params['n_estimators'] == 300
        assert large.params['learning_rate'] == 0.1
        assert large.unbalanced_sets is True

    def test_default_ensemble(self):
        """Test the ensemble votes over the four boosted variants."""
        config = BenchmarkConfig()

        assert config.ensemble.enabled is True
        assert config.ensemble.name == 'vote_ensemble'
        assert len(config.ensemble.members) == 4

    def test_frozen(self):
        """Test the config cannot be mutated."""
        config = BenchmarkConfig()

        with pytest.raises(Exception):
            config.splitting = SplittingConfig(seed=1)

    def test_get_model_spec_unknown(self):
        with pytest.raises(KeyError):
            BenchmarkConfig().get_model_spec('does_not_exist')


class TestComputeConfig:
    """Test suite for the compute context."""

    def test_sequential_uses_one_worker(self):
        assert ComputeConfig(mode='sequential', n_jobs=8).resolved_n_jobs == 1

    def test_parallel_uses_n_jobs(self):
        assert ComputeConfig(mode='parallel', n_jobs=4).resolved_n_jobs == 4

    def test_zero_workers_rejected(self):
        with pytest.raises(ValueError):
            ComputeConfig(n_jobs=0)


class TestLoadConfig:
    """Test suite for load_config."""

    def test_no_yaml_gives_defaults(self):
        """Test loading without a file returns the defaults."""
        assert load_config() == BenchmarkConfig()

    def test_load_yaml(self, fast_config_yaml, fast_config_dict):
        """Test values from the YAML file are applied."""
        config = load_config(str(fast_config_yaml))

        assert config.compute.mode == 'sequential'
        assert config.get_model_spec('random_forest').params['n_estimators'] == 20
        assert config.data.input_path == fast_config_dict['data']['input_path']

    def test_cli_overrides(self, fast_config_yaml):
        """Test dot-notation overrides win over the YAML."""
        config = load_config(
            str(fast_config_yaml),
            cli_overrides={'splitting.seed': 7, 'output.base_dir': None}
        )

        assert config.splitting.seed == 7
        assert config.output.base_dir.endswith('outputs')

    def test_nested_overrides(self):
        """Test nested programmatic overrides are merged."""
        config = load_config(overrides={'splitting': {'train_fraction': 0.8}})

        assert config.splitting.train_fraction == pytest.approx(0.8)
        assert config.splitting.seed == 42

    def test_relative_input_resolved_against_yaml(self, tmp_path):
        """Test a data path next to the YAML file is made absolute."""
        (tmp_path / 'credit.csv').write_text('account_id,bad_flag\n')
        yaml_path = tmp_path / 'benchmark.yaml'
        yaml_path.write_text(yaml.safe_dump({'data': {'input_path': 'credit.csv'}}))

        config = load_config(str(yaml_path))

        assert config.data.input_path == str((tmp_path / 'credit.csv').resolve())

    def test_parquet_follows_input_directory(self, tmp_path):
        """Test a not-yet-written Parquet file is placed beside the found input."""
        (tmp_path / 'credit.csv').write_text('account_id,bad_flag\n')
        yaml_path = tmp_path / 'benchmark.yaml'
        yaml_path.write_text(yaml.safe_dump({
            'data': {'input_path': 'credit.csv', 'parquet_path': 'cache/credit.parquet'}
        }))

        config = load_config(str(yaml_path))

        assert config.data.parquet_path == str((tmp_path / 'cache' / 'credit.parquet').resolve())

    def test_paths_stay_relative_without_input_beside_yaml(self, tmp_path):
        """Test a leftover Parquet file beside the YAML does not move the path."""
        (tmp_path / 'credit.parquet').write_bytes(b'')
        yaml_path = tmp_path / 'benchmark.yaml'
        yaml_path.write_text(yaml.safe_dump({
            'data': {'input_path': 'credit.csv', 'parquet_path': 'credit.parquet'}
        }))

        config = load_config(str(yaml_path))

        assert config.data.input_path == 'credit.csv'
        assert config.data.parquet_path == 'credit.parquet'

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / 'missing.yaml'))

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML raises ConfigurationError."""
        yaml_path = tmp_path / 'bad.yaml'
        yaml_path.write_text("data: [unclosed\n")

        with pytest.raises(ConfigurationError):
            load_config(str(yaml_path))

    def test_non_mapping_yaml(self, tmp_path):
        yaml_path = tmp_path / 'list.yaml'
        yaml_path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            load_config(str(yaml_path))

    def test_train_fraction_out_of_range(self):
        """Test the training fraction must lie strictly between 0 and 1."""
        with pytest.raises(ConfigurationError):
            load_config(overrides={'splitting': {'train_fraction': 1.0}})

    def test_duplicate_model_names(self):
        spec = {'name': 'twice', 'family': 'random_forest'}
        with pytest.raises(ConfigurationError):
            load_config(overrides={'models': [spec, spec], 'ensemble': {'enabled': False}})

    def test_unknown_family(self):
        with pytest.raises(ConfigurationError):
            load_config(overrides={
                'models': [{'name': 'svm', 'family': 'support_vector_machine'}],
                'ensemble': {'enabled': False},
            })

    def test_ensemble_member_must_be_boosted(self):
        """Test a non-boosted ensemble member is rejected."""
        with pytest.raises(ConfigurationError):
            load_config(overrides={'ensemble': {'members': ['random_forest']}})

    def test_ensemble_member_must_exist(self):
        with pytest.raises(ConfigurationError):
            load_config(overrides={'ensemble': {'members': ['boosted_trees_999']}})

    def test_ensemble_name_clash(self):
        with pytest.raises(ConfigurationError):
            load_config(overrides={'ensemble': {'name': 'random_forest'}})

    def test_persisted_model_must_exist(self):
        """Test an explicit persisted model must be configured."""
        with pytest.raises(ConfigurationError):
            load_config(overrides={'persistence': {'model_name': 'neural_net'}})

    def test_persisted_model_may_be_ensemble(self):
        config = load_config(overrides={'persistence': {'model_name': 'vote_ensemble'}})

        assert config.persistence.model_name == 'vote_ensemble'


class TestSaveConfig:
    """Test suite for save_config."""

    def test_yaml_snapshot_reloads(self, tmp_path, fast_config):
        """Test a saved YAML snapshot loads back to the same config."""
        path = tmp_path / 'snapshot' / 'config.yaml'

        save_config(fast_config, str(path))

        assert path.exists()
        assert load_config(str(path)) == fast_config

    def test_json_snapshot(self, tmp_path, fast_config):
        path = tmp_path / 'config.json'

        save_config(fast_config, str(path))

        assert '"splitting"' in path.read_text()
