"""
Tests for Model Wrappers

Tests the logistic regression, random forest and gradient boosting
families through the shared BaseModel interface.
"""

import numpy as np
import pytest

from credit_risk_bench.core.exceptions import (
    ArtifactError,
    FormulaError,
    ModelTrainingError,
    PredictionError,
)
from credit_risk_bench.models.base_model import BaseModel
from credit_risk_bench.models.gradient_boosting_model import GradientBoostingModel
from credit_risk_bench.models.logistic_model import LogisticRegressionModel
from credit_risk_bench.models.model_factory import load_model
from credit_risk_bench.models.random_forest_model import RandomForestModel


FAST_PARAMS = {
    LogisticRegressionModel: {'max_iter': 500},
    RandomForestModel: {'n_estimators': 20, 'max_leaf_nodes': 20},
    GradientBoostingModel: {'n_estimators': 20},
}


@pytest.fixture(params=[LogisticRegressionModel, RandomForestModel, GradientBoostingModel])
def model_class(request):
    return request.param


@pytest.fixture
def make_model(model_config):
    def _make(model_class, **overrides):
        config = dict(model_config)
        config['default_params'] = dict(FAST_PARAMS[model_class])
        config.update(overrides)
        return model_class(config)
    return _make


class TestModelFamilies:
    """Behaviour shared by every model family."""

    def test_predictions_match_test_rows(self, model_class, make_model, train_df, test_df):
        """Test one 0/1 prediction per testing row."""
        model = make_model(model_class).fit(train_df)

        y_pred = model.predict(test_df)

        assert len(y_pred) == len(test_df)
        assert set(np.unique(y_pred)) <= {0, 1}

    def test_probabilities_in_unit_interval(self, model_class, make_model, train_df, test_df):
        model = make_model(model_class).fit(train_df)

        y_score = model.predict_proba(test_df)

        assert y_score.shape == (len(test_df),)
        assert ((y_score >= 0) & (y_score <= 1)).all()

    def test_training_time_recorded(self, model_class, make_model, train_df):
        model = make_model(model_class)
        assert model.training_time is None

        model.fit(train_df)

        assert model.training_time >= 0
        assert model.is_fitted is True

    def test_identifier_not_a_feature(self, model_class, make_model, train_df):
        """Test '.' excludes the identifier and one-hot encodes categoricals."""
        model = make_model(model_class).fit(train_df)

        assert 'account_id' not in model.feature_names
        assert 'bad_flag' not in model.feature_names
        assert 'sex_F' in model.feature_names

    def test_explicit_formula(self, model_class, make_model, train_df, test_df):
        model = make_model(model_class, formula='bad_flag ~ age + income + sex').fit(train_df)

        assert model.feature_names == ['age', 'income', 'sex_F', 'sex_M']
        assert len(model.predict(test_df)) == len(test_df)

    def test_unknown_formula_field(self, model_class, make_model, train_df):
        """Test a formula naming an absent field fails training."""
        model = make_model(model_class, formula='bad_flag ~ age + tenure')

        with pytest.raises(FormulaError):
            model.fit(train_df)

    def test_predict_before_fit(self, model_class, make_model, test_df):
        with pytest.raises(PredictionError):
            make_model(model_class).predict(test_df)

    def test_predict_missing_column(self, model_class, make_model, train_df, test_df):
        model = make_model(model_class).fit(train_df)

        with pytest.raises(PredictionError):
            model.predict(test_df.drop(columns=['income']))

    def test_feature_importance(self, model_class, make_model, train_df):
        model = make_model(model_class).fit(train_df)

        top = model.get_feature_importance(top_n=3)

        assert len(top) == 3
        assert set(top) <= set(model.feature_names)

    def test_save_and_load(self, model_class, make_model, train_df, test_df, tmp_path):
        """Test a persisted model reloads with identical predictions."""
        model = make_model(model_class).fit(train_df)
        path = tmp_path / 'model.joblib'

        model.save(str(path))
        restored = load_model(str(path))

        assert isinstance(restored, model_class)
        np.testing.assert_array_equal(restored.predict(test_df), model.predict(test_df))
        np.testing.assert_allclose(restored.predict_proba(test_df), model.predict_proba(test_df))

    def test_save_unfitted(self, model_class, make_model, tmp_path):
        with pytest.raises(ArtifactError):
            make_model(model_class).save(str(tmp_path / 'model.joblib'))

    def test_save_unpicklable(self, model_class, make_model, train_df, tmp_path):
        """Test a pickling failure is reported as ArtifactError."""
        model = make_model(model_class).fit(train_df)
        model.model = lambda X: X

        with pytest.raises(ArtifactError):
            model.save(str(tmp_path / 'model.joblib'))


class TestLogisticRegressionModel:
    """Logistic regression specifics."""

    def test_coefficients(self, make_model, train_df):
        model = make_model(LogisticRegressionModel).fit(train_df)

        coefficients = model.get_coefficients()

        assert set(coefficients) == set(model.feature_names)

    def test_balanced_class_weight(self, make_model, train_df):
        model = make_model(LogisticRegressionModel, unbalanced_sets=True).fit(train_df)

        assert model.get_params()['class_weight'] == 'balanced'


class TestRandomForestModel:
    """Random forest specifics."""

    def test_hyperparameters_applied(self, make_model, train_df):
        model = make_model(RandomForestModel).fit(train_df)

        params = model.get_params()
        assert params['n_estimators'] == 20
        assert params['max_leaf_nodes'] == 20
        assert params['n_jobs'] == 1


class TestGradientBoostingModel:
    """Gradient boosting specifics."""

    def test_leaf_limited_trees(self, make_model, train_df):
        model = make_model(GradientBoostingModel).fit(train_df)

        params = model.get_params()
        assert params['grow_policy'] == 'lossguide'
        assert params['max_leaves'] == 20
        assert params['min_child_weight'] == 10

    def test_balanced_scale_pos_weight(self, make_model, train_df):
        """Test unbalanced_sets weights positives by the negative/positive ratio."""
        model = make_model(GradientBoostingModel, unbalanced_sets=True).fit(train_df)

        y = train_df['bad_flag']
        expected = (y == 0).sum() / (y == 1).sum()

        assert model.get_params()['scale_pos_weight'] == pytest.approx(expected)

    def test_balanced_without_positives(self, make_model, train_df):
        """Test balancing a partition without positives fails training."""
        model = make_model(GradientBoostingModel, unbalanced_sets=True)

        with pytest.raises(ModelTrainingError):
            model.fit(train_df.assign(bad_flag=0))

    def test_banded_category_levels(self, make_model, train_df, test_df):
        """Test levels containing brackets and '<' train and score."""
        bands = {
            'high_school': '<12 years',
            'bachelor': '[12,16)',
            'master': '[16,18)',
            'doctorate': '18+',
        }

        def banded(df):
            return df.assign(education=df['education'].astype(str).map(bands))

        model = make_model(GradientBoostingModel).fit(banded(train_df))

        y_score = model.predict_proba(banded(test_df))

        assert y_score.shape == (len(test_df),)
        assert 'education_(12,16)' in model.feature_names

    def test_load_wrong_type(self, make_model, train_df, tmp_path):
        """Test loading another family's artifact into a model is rejected."""
        path = tmp_path / 'rf.joblib'
        make_model(RandomForestModel).fit(train_df).save(str(path))

        with pytest.raises(ArtifactError):
            make_model(GradientBoostingModel).load(str(path))


class TestBaseModel:
    """Test suite for the abstract base."""

    def test_cannot_instantiate(self, model_config):
        with pytest.raises(TypeError):
            BaseModel(model_config)

    def test_missing_formula(self, make_model, train_df):
        model = make_model(RandomForestModel, formula=None)

        with pytest.raises(FormulaError):
            model.fit(train_df)
