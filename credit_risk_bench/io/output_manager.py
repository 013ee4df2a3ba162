"""
Output Manager

Writes the persisted model, the optional comparison report, a config
snapshot and run metadata.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import hashlib
import importlib.metadata
import json
import logging
import platform
import sys

import pandas as pd

from credit_risk_bench.config.schema import BenchmarkConfig
from credit_risk_bench.core.exceptions import ArtifactError
from credit_risk_bench.models.base_model import BaseModel


logger = logging.getLogger(__name__)


# Distributions whose versions are recorded with every run
_TRACKED_PACKAGES = ("pandas", "numpy", "scikit-learn", "xgboost", "pydantic")


def _installed_version(distribution: str) -> str:
    try:
        return importlib.metadata.version(distribution)
    except importlib.metadata.PackageNotFoundError:
        return "not installed"


def _md5_of(path: str) -> str:
    """Hex MD5 of the input file, so a rerun can prove it read the same data."""
    source = Path(path)
    if not source.exists():
        return "missing"
    digest = hashlib.md5()
    with open(source, "rb") as f:
        for block in iter(lambda: f.read(1 << 20), b""):
            digest.update(block)
    return digest.hexdigest()


class OutputManager:
    """Manages the artifacts written by a benchmark run.

    The persisted model goes to the fixed path of persistence.path
    (relative to the working directory). Reports, config snapshots and
    metadata go under output.base_dir.

    Args:
        config: The benchmark configuration.
        run_start: Optional datetime for the run start. Defaults to now.
    """

    def __init__(self, config: BenchmarkConfig, run_start: Optional[datetime] = None):
        self._config = config
        self._run_start = run_start or datetime.now()
        self._run_end: Optional[datetime] = None
        self._status = "running"

        config_json = config.model_dump_json()
        short_hash = hashlib.md5(config_json.encode()).hexdigest()[:6]
        self._run_id = f"{self._run_start.strftime('%Y%m%d_%H%M%S')}_{short_hash}"
        self._base_dir = Path(config.output.base_dir)

    @property
    def run_id(self) -> str:
        """The unique identifier for this run."""
        return self._run_id

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def status(self) -> str:
        return self._status

    def save_model(self, model: BaseModel, path: Optional[str] = None) -> Path:
        """Serialize a fitted model, overwriting any existing file.

        Args:
            model: Fitted model to persist.
            path: Destination; defaults to persistence.path.

        Returns:
            Path of the written artifact.
        """
        target = Path(path or self._config.persistence.path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactError("Cannot create model directory", artifact_path=str(target), cause=e)

        model.save(str(target))
        logger.info("Persisted model '%s' to %s", model.name, target)
        return target

    def save_report(self, report: pd.DataFrame, fmt: Optional[str] = None) -> Path:
        """Save the comparison report as CSV or XLSX.

        Args:
            report: Comparison DataFrame.
            fmt: 'csv' or 'xlsx'; defaults to output.report_format.

        Returns:
            Path to the saved report.
        """
        fmt = fmt or self._config.output.report_format
        self._base_dir.mkdir(parents=True, exist_ok=True)

        if fmt == "xlsx":
            path = self._base_dir / f"model_comparison_{self._run_id}.xlsx"
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                report.to_excel(writer, sheet_name="comparison", index=False)
        elif fmt == "csv":
            path = self._base_dir / f"model_comparison_{self._run_id}.csv"
            report.to_csv(path, index=False)
        else:
            raise ArtifactError(f"Unsupported report format: {fmt}")

        logger.info("Report saved to %s", path)
        return path

    def save_config_snapshot(self) -> Path:
        """Save the frozen config next to the run outputs."""
        from credit_risk_bench.config.loader import save_config

        path = self._base_dir / f"config_{self._run_id}.yaml"
        save_config(self._config, str(path))
        return path

    def _collect_metadata(self) -> dict:
        self._run_end = self._run_end or datetime.now()
        return {
            "run_id": self._run_id,
            "status": self._status,
            "run_start": self._run_start.isoformat(),
            "run_end": self._run_end.isoformat(),
            "duration_seconds": round((self._run_end - self._run_start).total_seconds(), 2),
            "split_seed": self._config.splitting.seed,
            "input_file_hash": _md5_of(self._config.data.input_path),
            "python_version": sys.version,
            "package_versions": {name: _installed_version(name) for name in _TRACKED_PACKAGES},
            "os_info": {
                "system": platform.system(),
                "release": platform.release(),
                "machine": platform.machine(),
            },
        }

    def save_run_metadata(self) -> Path:
        """Write run_metadata_<run_id>.json: timing, seed, input hash and environment."""
        self._base_dir.mkdir(parents=True, exist_ok=True)
        path = self._base_dir / f"run_metadata_{self._run_id}.json"
        path.write_text(json.dumps(self._collect_metadata(), indent=2), encoding="utf-8")

        logger.info("Run metadata saved to %s", path)
        return path

    def mark_complete(self, status: str = "success") -> None:
        self._status = status
        self._run_end = datetime.now()

    def mark_failed(self) -> None:
        self.mark_complete(status="failed")
