"""
Logging Utilities

One root configuration for the benchmark (console plus optional rotating
file) and a small structured logger for the workflow step banners.
"""

from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional
import logging
import sys
import time


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that log chatty INFO messages during training
_NOISY_LOGGERS = ("xgboost", "numexpr", "urllib3")

_BANNER = "=" * 20

_loggers: Dict[str, logging.Logger] = {}

# Handlers added to the root logger by the last setup_logging call
_installed: List[logging.Handler] = []


def _build_handlers(
    formatter: logging.Formatter,
    log_file: Optional[str],
    max_bytes: int,
    backup_count: int
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    config: Optional[Dict[str, Any]] = None,
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_format: Optional[str] = None
) -> None:
    """
    Configure the root logger. Handlers from a previous call are closed
    and replaced; handlers installed by anything else are left alone.

    Values in ``config`` (the ``logging`` section: level, format, log_file,
    max_bytes, backup_count) take precedence over the keyword defaults,
    except that an explicit ``log_file`` argument wins.
    """
    config = config or {}
    level = (config.get('level') or log_level).upper()
    fmt = config.get('format') or log_format or DEFAULT_FORMAT

    handlers = _build_handlers(
        logging.Formatter(fmt),
        log_file or config.get('log_file'),
        max_bytes=config.get('max_bytes', 10 * 2 ** 20),
        backup_count=config.get('backup_count', 5),
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level))
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed[:] = handlers
    for handler in handlers:
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``, cached in a module registry."""
    return _loggers.setdefault(name, logging.getLogger(name))


class PipelineLogger:
    """
    Logger for the benchmark workflow.

    Messages are prefixed with the run context (``[run_id=... seed=...]``)
    and use fixed markers: step banners, ``METRIC |`` and ``DATA |`` lines.
    """

    def __init__(self, name: str):
        self.logger = get_logger(name)
        self._context: Dict[str, Any] = {}

    def set_context(self, **kwargs) -> None:
        self._context.update(kwargs)

    def clear_context(self) -> None:
        self._context.clear()

    def _format_message(self, message: str) -> str:
        if not self._context:
            return message
        prefix = " ".join(f"{key}={value}" for key, value in self._context.items())
        return f"[{prefix}] {message}"

    def _log(self, level: int, message: str, **kwargs) -> None:
        self.logger.log(level, self._format_message(message), **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Error with the active traceback attached."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def step_start(self, step_name: str) -> None:
        self.info(f"{_BANNER} Starting: {step_name} {_BANNER}")

    def step_complete(self, step_name: str, duration: Optional[float] = None) -> None:
        timing = f" ({duration:.2f}s)" if duration is not None else ""
        self.info(f"{_BANNER} Completed: {step_name}{timing} {_BANNER}")

    @contextmanager
    def step(self, step_name: str) -> Iterator[None]:
        """Banner around a workflow step; the completion banner carries its duration."""
        self.step_start(step_name)
        started = time.perf_counter()
        yield
        self.step_complete(step_name, time.perf_counter() - started)

    def metric(self, name: str, value: Any) -> None:
        self.info(f"METRIC | {name}: {value}")

    def data_stats(self, name: str, count: int, columns: Optional[int] = None) -> None:
        shape = f"{count:,} rows" + (f", {columns} columns" if columns else "")
        self.info(f"DATA | {name}: {shape}")
