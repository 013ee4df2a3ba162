"""
Pydantic Configuration Schema

Defines all configuration models for the benchmark.
Defaults reproduce the reference workflow: a 70/30 split seeded with 42,
six model variants and a four-member vote ensemble.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator


MODEL_FAMILIES = ("logistic_regression", "random_forest", "gradient_boosting")

DEFAULT_NUMERIC_COLUMNS = [
    "amount_6",
    "pur_6",
    "avg_pur_amt_6",
    "avg_interval_pur_6",
    "credit_limit",
    "age",
    "income",
]

DEFAULT_CATEGORICAL_COLUMNS = ["sex", "education", "marital_status"]


class DataConfig(BaseModel):
    """Input data configuration."""

    model_config = {"frozen": True}

    input_path: str = "data/credit_data.csv"
    parquet_path: str = "data/credit_data.parquet"
    id_column: str = "account_id"
    target_column: str = "bad_flag"
    numeric_columns: List[str] = Field(default_factory=lambda: list(DEFAULT_NUMERIC_COLUMNS))
    categorical_columns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORICAL_COLUMNS)
    )
    delimiter: str = ","


class SplittingConfig(BaseModel):
    """Train/test splitting configuration."""

    model_config = {"frozen": True}

    train_fraction: float = Field(default=0.70, gt=0.0, lt=1.0)
    seed: int = 42

    @property
    def test_fraction(self) -> float:
        return 1.0 - self.train_fraction


class ComputeConfig(BaseModel):
    """Compute context handed to the training libraries."""

    model_config = {"frozen": True}

    mode: Literal["sequential", "parallel"] = "parallel"
    n_jobs: int = -1

    @field_validator("n_jobs")
    @classmethod
    def n_jobs_not_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("n_jobs must be a positive count or -1 (all cores)")
        return value

    @property
    def resolved_n_jobs(self) -> int:
        """Number of workers the libraries should use."""
        return 1 if self.mode == "sequential" else self.n_jobs


class ModelSpec(BaseModel):
    """Configuration of a single trained model variant."""

    model_config = {"frozen": True}

    name: str
    family: Literal["logistic_regression", "random_forest", "gradient_boosting"]
    formula: Optional[str] = None
    params: Dict[str, Any] = Field(default_factory=dict)
    unbalanced_sets: bool = False


class EnsembleConfig(BaseModel):
    """Vote ensemble over boosted-tree variants."""

    model_config = {"frozen": True}

    enabled: bool = True
    name: str = "vote_ensemble"
    members: List[str] = Field(
        default_factory=lambda: [
            "boosted_trees_100",
            "boosted_trees_300",
            "boosted_trees_100_unbalanced",
            "boosted_trees_300_unbalanced",
        ]
    )
    combine: Literal["vote"] = "vote"


class PersistenceConfig(BaseModel):
    """Which model to serialize, and where."""

    model_config = {"frozen": True, "protected_namespaces": ()}

    enabled: bool = True
    path: str = "models/credit_risk_model.joblib"
    model_name: Optional[str] = None
    selection_metric: Literal["auc", "accuracy", "precision", "recall"] = "auc"


class OutputConfig(BaseModel):
    """Output configuration."""

    model_config = {"frozen": True}

    base_dir: str = "outputs/benchmark"
    save_report: bool = False
    report_format: Literal["csv", "xlsx"] = "csv"
    save_config: bool = False
    save_metadata: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None


def _default_models() -> List[ModelSpec]:
    tree_params = {"max_leaves": 20, "min_child_weight": 10}
    return [
        ModelSpec(
            name="logistic_regression",
            family="logistic_regression",
            params={"max_iter": 1000, "C": 1.0},
        ),
        ModelSpec(
            name="random_forest",
            family="random_forest",
            params={"n_estimators": 100, "max_leaf_nodes": 20, "min_samples_split": 10},
        ),
        ModelSpec(
            name="boosted_trees_100",
            family="gradient_boosting",
            params={**tree_params, "n_estimators": 100, "learning_rate": 0.2},
        ),
        ModelSpec(
            name="boosted_trees_300",
            family="gradient_boosting",
            params={**tree_params, "n_estimators": 300, "learning_rate": 0.1},
        ),
        ModelSpec(
            name="boosted_trees_100_unbalanced",
            family="gradient_boosting",
            params={**tree_params, "n_estimators": 100, "learning_rate": 0.2},
            unbalanced_sets=True,
        ),
        ModelSpec(
            name="boosted_trees_300_unbalanced",
            family="gradient_boosting",
            params={**tree_params, "n_estimators": 300, "learning_rate": 0.1},
            unbalanced_sets=True,
        ),
    ]


class BenchmarkConfig(BaseModel):
    """Top-level benchmark configuration combining all sections."""

    model_config = {"frozen": True}

    data: DataConfig = Field(default_factory=DataConfig)
    splitting: SplittingConfig = Field(default_factory=SplittingConfig)
    compute: ComputeConfig = Field(default_factory=ComputeConfig)
    models: List[ModelSpec] = Field(default_factory=_default_models)
    ensemble: EnsembleConfig = Field(default_factory=EnsembleConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def model_references_valid(self) -> "BenchmarkConfig":
        names = [spec.name for spec in self.models]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate model names: {duplicates}")

        if self.ensemble.enabled:
            if self.ensemble.name in names:
                raise ValueError(
                    f"Ensemble name '{self.ensemble.name}' clashes with a model name"
                )
            if not self.ensemble.members:
                raise ValueError("Ensemble needs at least one member")
            by_name = {spec.name: spec for spec in self.models}
            for member in self.ensemble.members:
                if member not in by_name:
                    raise ValueError(f"Ensemble member '{member}' is not a configured model")
                if by_name[member].family != "gradient_boosting":
                    raise ValueError(
                        f"Ensemble member '{member}' must be a gradient_boosting model"
                    )

        chosen = self.persistence.model_name
        if chosen is not None:
            known = set(names)
            if self.ensemble.enabled:
                known.add(self.ensemble.name)
            if chosen not in known:
                raise ValueError(f"Persisted model '{chosen}' is not a configured model")
        return self

    def get_model_spec(self, name: str) -> ModelSpec:
        """Look up a model spec by name."""
        for spec in self.models:
            if spec.name == name:
                return spec
        raise KeyError(f"Model spec not found: {name}")
