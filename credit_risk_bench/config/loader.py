"""
Config Loader

Builds a frozen BenchmarkConfig in three layers, later layers winning:
the YAML file, dot-notation overrides from the command line, and nested
overrides passed by code (tests, notebooks).
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging

import yaml
from pydantic import ValidationError

from credit_risk_bench.config.schema import BenchmarkConfig
from credit_risk_bench.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

_DATA_FILE_KEYS = ("input_path", "parquet_path")


def _read_yaml(yaml_file: Path) -> Dict[str, Any]:
    if not yaml_file.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_file}")

    try:
        raw = yaml.safe_load(yaml_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {yaml_file}", cause=e)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Top level of {yaml_file} is not a mapping")
    return raw


def _anchor_data_files(raw: Dict[str, Any], base_dir: Path) -> None:
    """Resolve relative data paths against the YAML directory.

    Both paths move together, and only when the input file is found
    beside the YAML; otherwise both stay relative to the working directory.
    """
    data = raw.get("data") or {}
    input_path = data.get("input_path")
    if not input_path or Path(input_path).is_absolute():
        return
    if not (base_dir / input_path).exists():
        return
    for key in _DATA_FILE_KEYS:
        value = data.get(key)
        if value and not Path(value).is_absolute():
            data[key] = str((base_dir / value).resolve())


def _apply_dotted(raw: Dict[str, Any], dotted: Dict[str, Any]) -> None:
    # None means "flag not given"
    for key, value in dotted.items():
        if value is None:
            continue
        *parents, leaf = key.split(".")
        node = raw
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _merge(current, value)
        else:
            base[key] = value


def load_config(
    yaml_path: Optional[str] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> BenchmarkConfig:
    """Load and validate the benchmark configuration.

    Args:
        yaml_path: YAML file; the built-in defaults are used when omitted.
        cli_overrides: Flat mapping such as ``{"splitting.seed": 7}``.
            Entries whose value is None are skipped.
        overrides: Nested mapping merged last.

    Raises:
        FileNotFoundError: The YAML file does not exist.
        ConfigurationError: The YAML cannot be parsed or the merged values
            fail validation (ranges, model references, duplicate names).
    """
    raw: Dict[str, Any] = {}
    if yaml_path is not None:
        yaml_file = Path(yaml_path)
        raw = _read_yaml(yaml_file)
        _anchor_data_files(raw, yaml_file.parent)
        logger.info("Loaded config from %s", yaml_path)

    _apply_dotted(raw, cli_overrides or {})
    _merge(raw, overrides or {})

    try:
        return BenchmarkConfig(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid benchmark configuration",
            details={"errors": e.errors(include_url=False)},
            cause=e,
        )


def save_config(config: BenchmarkConfig, path: str) -> None:
    """Write a config snapshot; ``.yaml``/``.yml`` give YAML, anything else JSON."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump()

    with open(out_path, "w", encoding="utf-8") as f:
        if out_path.suffix in (".yaml", ".yml"):
            yaml.dump(payload, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(payload, f, indent=2, default=str)

    logger.info("Config snapshot written to %s", out_path)
