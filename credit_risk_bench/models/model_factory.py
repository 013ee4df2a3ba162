"""
Model Factory

Factory pattern for creating model instances from configuration.
"""

from typing import Any, Dict, List, Optional, Type
import pickle

from credit_risk_bench.config.schema import BenchmarkConfig, ModelSpec
from credit_risk_bench.core.exceptions import ArtifactError
from credit_risk_bench.models.base_model import BaseModel
from credit_risk_bench.models.gradient_boosting_model import GradientBoostingModel
from credit_risk_bench.models.logistic_model import LogisticRegressionModel
from credit_risk_bench.models.random_forest_model import RandomForestModel
from credit_risk_bench.models.voting_ensemble import VotingEnsemble


class ModelFactory:
    """
    Builds benchmark models from their family name or from a ModelSpec.

    Families map to model classes in a class-level registry; ``register``
    adds new ones.
    """

    _models: Dict[str, Type[BaseModel]] = {
        'logistic_regression': LogisticRegressionModel,
        'random_forest': RandomForestModel,
        'gradient_boosting': GradientBoostingModel,
        'vote_ensemble': VotingEnsemble,
    }

    @classmethod
    def register(cls, name: str, model_class: Type[BaseModel]) -> None:
        if not issubclass(model_class, BaseModel):
            raise TypeError(f"{model_class} must be a subclass of BaseModel")
        cls._models[name] = model_class

    @classmethod
    def create(
        cls,
        model_type: str,
        config: Dict[str, Any],
        name: Optional[str] = None
    ) -> BaseModel:
        """Instantiate an unfitted model of family ``model_type`` (case-insensitive)."""
        model_class = cls._models.get(model_type.lower())
        if model_class is None:
            raise ValueError(
                f"Unknown model family '{model_type}', expected one of {sorted(cls.list_models())}"
            )
        return model_class(config, name=name)

    @classmethod
    def spec_to_config(
        cls,
        spec: ModelSpec,
        benchmark_config: BenchmarkConfig
    ) -> Dict[str, Any]:
        """Build the component config dictionary of a model spec."""
        data = benchmark_config.data
        return {
            'formula': spec.formula or f"{data.target_column} ~ .",
            'id_column': data.id_column,
            'default_params': dict(spec.params),
            'unbalanced_sets': spec.unbalanced_sets,
            'n_jobs': benchmark_config.compute.resolved_n_jobs,
            'random_state': benchmark_config.splitting.seed,
        }

    @classmethod
    def create_from_spec(
        cls,
        spec: ModelSpec,
        benchmark_config: BenchmarkConfig
    ) -> BaseModel:
        """Create an unfitted model from a spec."""
        return cls.create(
            spec.family,
            cls.spec_to_config(spec, benchmark_config),
            name=spec.name
        )

    @classmethod
    def create_from_config(
        cls,
        benchmark_config: BenchmarkConfig
    ) -> Dict[str, BaseModel]:
        """
        Create every configured model variant.

        Returns:
            Dictionary of model name to model instance, in configuration order
        """
        return {
            spec.name: cls.create_from_spec(spec, benchmark_config)
            for spec in benchmark_config.models
        }

    @classmethod
    def create_ensemble(
        cls,
        benchmark_config: BenchmarkConfig
    ) -> Optional[VotingEnsemble]:
        """
        Create the vote ensemble with fresh, unfitted members.

        Returns:
            VotingEnsemble, or None when the ensemble is disabled
        """
        ensemble_config = benchmark_config.ensemble
        if not ensemble_config.enabled:
            return None

        members: List[BaseModel] = [
            cls.create_from_spec(benchmark_config.get_model_spec(member), benchmark_config)
            for member in ensemble_config.members
        ]
        return VotingEnsemble(
            {'combine': ensemble_config.combine, 'members': list(ensemble_config.members)},
            members=members,
            name=ensemble_config.name,
        )

    @classmethod
    def from_artifact(cls, artifact: Dict[str, Any]) -> BaseModel:
        """Rebuild a fitted model from its saved artifact dictionary."""
        model_class = cls.get_model_class(artifact.get('model_type', ''))
        if model_class is None:
            raise ArtifactError(f"Unknown model type in artifact: {artifact.get('model_type')}")
        model = model_class(artifact.get('config', {}), name=artifact.get('name'))
        model._restore(artifact)
        return model

    @classmethod
    def list_models(cls) -> list:
        """Registered family names."""
        return list(cls._models.keys())

    @classmethod
    def get_model_class(cls, model_type: str) -> Optional[Type[BaseModel]]:
        """Get model class by family name."""
        return cls._models.get(model_type.lower())


def load_model(path: str) -> BaseModel:
    """
    Load any persisted model.

    Args:
        path: Path written by BaseModel.save

    Returns:
        Fitted model ready for predict()/predict_proba()

    Raises:
        ArtifactError: If the file is missing or not a model artifact
    """
    import joblib

    try:
        artifact = joblib.load(path)
    except (OSError, EOFError, ValueError, pickle.UnpicklingError) as e:
        raise ArtifactError("Failed to load model", artifact_path=str(path), cause=e)

    if not isinstance(artifact, dict) or 'model_type' not in artifact:
        raise ArtifactError("File is not a model artifact", artifact_path=str(path))

    return ModelFactory.from_artifact(artifact)
