"""
Benchmark Pipeline

Runs the benchmark top to bottom: ingest, split, train every model
variant and the vote ensemble, evaluate on the testing partition,
report, and persist the selected model.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
import time

import pandas as pd

from credit_risk_bench.config.schema import BenchmarkConfig
from credit_risk_bench.core.logger import PipelineLogger
from credit_risk_bench.data.data_splitter import DataSplit, DataSplitter
from credit_risk_bench.data.ingest import DatasetLoader
from credit_risk_bench.evaluation.evaluator import EvaluationResult, ModelEvaluator
from credit_risk_bench.io.output_manager import OutputManager
from credit_risk_bench.models.base_model import BaseModel
from credit_risk_bench.models.model_factory import ModelFactory


@dataclass
class BenchmarkResult:
    """Aggregate result of a full benchmark run.

    Attributes:
        data: Dataset as re-read from Parquet.
        split: Train/test partitions.
        models: Fitted models in training order (ensemble last).
        results: Evaluation result per model, same order.
        report: Comparison table.
        persisted_model: Name of the serialized model, if any.
        persisted_path: Where it was written.
        total_duration: Total wall-clock time in seconds.
        status: 'success' or 'failed'.
    """

    data: Optional[pd.DataFrame] = None
    split: Optional[DataSplit] = None
    models: Dict[str, BaseModel] = field(default_factory=dict)
    results: Dict[str, EvaluationResult] = field(default_factory=dict)
    report: Optional[pd.DataFrame] = None
    persisted_model: Optional[str] = None
    persisted_path: Optional[Path] = None
    total_duration: float = 0.0
    status: str = "pending"

    def summary(self) -> str:
        """Human-readable multi-line summary of the run."""
        lines = [f"Benchmark {self.status} in {self.total_duration:.1f}s"]
        if self.split is not None:
            lines.append(
                f"  Partitions: train={len(self.split.train):,}, test={len(self.split.test):,}"
            )
        lines.append(f"  Models trained: {len(self.models)}")
        if self.persisted_model:
            lines.append(f"  Persisted: {self.persisted_model} -> {self.persisted_path}")
        return "\n".join(lines)


class BenchmarkPipeline:
    """Orchestrates the benchmark workflow.

    Every step is fatal on failure: the error is logged, the run is
    marked failed and the exception propagates.

    Args:
        config: Frozen benchmark configuration.
        output_manager: OutputManager for the run (created if omitted).
    """

    def __init__(
        self,
        config: BenchmarkConfig,
        output_manager: Optional[OutputManager] = None
    ):
        self._config = config
        self._output_manager = output_manager or OutputManager(config)
        self._log = PipelineLogger(__name__)
        self._log.set_context(run_id=self._output_manager.run_id)
        self._evaluator = ModelEvaluator({'target_column': config.data.target_column})

    @property
    def config(self) -> BenchmarkConfig:
        return self._config

    def load_data(self) -> pd.DataFrame:
        """Ingest the CSV into Parquet and read it back."""
        loader = DatasetLoader(self._config.data)
        df = loader.load()
        summary = loader.summary(df)
        self._log.metric("dataset.bad_rate", f"{summary['bad_rate']:.4f}")
        self._log.metric("dataset.memory_mb", summary['memory_mb'])
        return df

    def split_data(self, df: pd.DataFrame) -> DataSplit:
        """Split into training and testing partitions."""
        splitter = DataSplitter(self._config.splitting)
        split = splitter.split(df)
        stats = splitter.split_stats(split, self._config.data.target_column)
        for label, partition in stats.items():
            self._log.metric(f"{label}.bad_rate", f"{partition['bad_rate']:.4f}")
        return split

    def train_models(self, train_df: pd.DataFrame) -> Dict[str, BaseModel]:
        """Fit every configured model variant, then the ensemble.

        Returns:
            Fitted models keyed by name, in training order.
        """
        models = ModelFactory.create_from_config(self._config)
        ensemble = ModelFactory.create_ensemble(self._config)
        if ensemble is not None:
            models[ensemble.name] = ensemble

        for name, model in models.items():
            self._log.info(f"TRAIN | {name} ({model.model_type})")
            model.fit(train_df)
            self._log.metric(f"{name}.training_time", f"{model.training_time:.2f}s")

        return models

    def select_model(self, results: Dict[str, EvaluationResult]) -> str:
        """Name of the model to persist.

        An explicit persistence.model_name wins; otherwise the best model
        by persistence.selection_metric, skipping undefined values.
        """
        persistence = self._config.persistence
        if persistence.model_name:
            return persistence.model_name
        best_name, _ = self._evaluator.select_best(results, persistence.selection_metric)
        return best_name

    def run(self) -> BenchmarkResult:
        """Run the whole benchmark.

        Returns:
            BenchmarkResult with the fitted models, evaluations and report.
        """
        result = BenchmarkResult()
        start_time = time.time()
        self._log.set_context(seed=self._config.splitting.seed)

        try:
            with self._log.step("ingest"):
                result.data = self.load_data()
                self._log.data_stats("dataset", len(result.data), len(result.data.columns))

            with self._log.step("split"):
                result.split = self.split_data(result.data)
                self._log.data_stats("train", len(result.split.train))
                self._log.data_stats("test", len(result.split.test))

            with self._log.step("train"):
                result.models = self.train_models(result.split.train)

            with self._log.step("evaluate"):
                result.results = self._evaluator.evaluate_multiple(result.models, result.split.test)
                result.report = self._evaluator.compare_models(result.results)
                self._log.info("REPORT |\n" + self._evaluator.format_report(result.report))

            if self._config.output.save_report:
                self._output_manager.save_report(result.report)

            if self._config.persistence.enabled:
                with self._log.step("persist"):
                    chosen = self.select_model(result.results)
                    result.persisted_path = self._output_manager.save_model(result.models[chosen])
                    result.persisted_model = chosen

            result.status = "success"

        except Exception:
            result.status = "failed"
            self._log.exception("BENCHMARK | Failed")
            self._output_manager.mark_failed()
            raise

        finally:
            result.total_duration = time.time() - start_time
            self._finalize(result)

        self._log.info("BENCHMARK | " + result.summary())
        return result

    def _finalize(self, result: BenchmarkResult) -> None:
        if result.status == "success":
            self._output_manager.mark_complete("success")
        try:
            if self._config.output.save_config:
                self._output_manager.save_config_snapshot()
            if self._config.output.save_metadata:
                self._output_manager.save_run_metadata()
        except Exception:
            # A failed run re-raises its own error, not this one
            if result.status == "success":
                raise
            self._log.exception("Could not write the outputs of the failed run")
