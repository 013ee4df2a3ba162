"""
Component Base Classes

Loaders, splitters, models and the evaluator share one shape: a config
mapping, a logger named after the component, and a wall-clock timer
around their main call. Model training time is read from that timer.
"""

from abc import ABC, abstractmethod
from functools import reduce
from typing import Any, Dict, Optional
import logging
import time


_MISSING = object()


class PipelineComponent(ABC):
    """
    Base class of every benchmark component.

    Args:
        config: Component settings (plain dict, nested sections allowed)
        name: Component name; also the logger name. Defaults to the class name.
    """

    def __init__(self, config: Dict[str, Any], name: Optional[str] = None):
        self.config = config
        self.name = name or type(self).__name__
        self.logger = logging.getLogger(self.name)
        self._started_at: Optional[float] = None
        self._elapsed: Optional[float] = None

    @abstractmethod
    def run(self, *args, **kwargs) -> Any:
        """Main entry point of the component."""

    @abstractmethod
    def validate(self) -> bool:
        """Whether the component's settings are usable."""

    def get_config(self, key: str, default: Any = None) -> Any:
        """Look up ``key`` in the config; dots descend into nested dicts."""
        def step(node, part):
            if isinstance(node, dict):
                return node.get(part, _MISSING)
            return _MISSING

        value = reduce(step, key.split('.'), self.config)
        return default if value is _MISSING else value

    def _start_execution(self) -> None:
        self._started_at = time.perf_counter()
        self._elapsed = None
        self.logger.debug(f"{self.name} started")

    def _end_execution(self) -> None:
        if self._started_at is None:
            return
        self._elapsed = time.perf_counter() - self._started_at
        self.logger.info(f"{self.name} finished in {self._elapsed:.2f}s")

    @property
    def execution_duration(self) -> Optional[float]:
        """Seconds between the last start/end pair, or None if not finished."""
        return self._elapsed


class PandasComponent(PipelineComponent):
    """Component working on in-memory pandas DataFrames."""

    def validate(self) -> bool:
        return True

    def check_memory_usage(self, df: Any) -> Dict[str, Any]:
        """Deep memory footprint of a DataFrame, total and per column."""
        per_column = df.memory_usage(deep=True)
        total = int(per_column.sum())
        return {
            'total_bytes': total,
            'total_mb': total / 2 ** 20,
            'per_column': {str(k): int(v) for k, v in per_column.items()},
        }
