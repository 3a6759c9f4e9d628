"""Structured logging for stlview, built on structlog over stdlib logging.

Events go to stderr so that command output on stdout stays clean. A log file,
when enabled, always receives JSON lines whatever the console format is.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Any, Optional

import structlog

from stlview.core.config import LoggingConfig

LOG_FILE_NAME = "stlview.log"

# Libraries that are chatty at DEBUG and never carry stlview events
QUIET_LIBRARIES = ("trimesh", "numpy")


def _pre_chain(config: LoggingConfig) -> list:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt=config.timestamp_format),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(config: LoggingConfig):
    if config.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=config.colorize and sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def _handler(
    handler: logging.Handler, pre_chain: list, renderer
) -> logging.Handler:
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def _resolve_log_file(
    config: LoggingConfig, log_file: Optional[Path]
) -> Optional[Path]:
    if log_file is not None:
        return log_file
    if not config.log_to_file or config.log_dir is None:
        return None
    config.log_dir.mkdir(parents=True, exist_ok=True)
    return config.log_dir / LOG_FILE_NAME


def setup_logging(
    config: Optional[LoggingConfig] = None,
    log_file: Optional[Path] = None,
) -> structlog.stdlib.BoundLogger:
    """Route structlog and stdlib logging through the configured handlers.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        config: Logging configuration, defaults apply when omitted
        log_file: Explicit log file; otherwise ``log_dir/stlview.log`` is used
            when the config enables file logging

    Returns:
        The ``stlview`` logger
    """
    config = config or LoggingConfig()
    pre_chain = _pre_chain(config)

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers = [_handler(logging.StreamHandler(sys.stderr), pre_chain, _renderer(config))]
    path = _resolve_log_file(config, log_file)
    if path is not None:
        handlers.append(
            _handler(logging.FileHandler(path), pre_chain, structlog.processors.JSONRenderer())
        )

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(config.level)

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    return structlog.get_logger("stlview")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class StructuredLogger:
    """Log the start and outcome of one operation with its elapsed time.

    Emits ``<operation>_started`` on entry, then ``<operation>_completed`` or
    ``<operation>_failed`` on exit. Exceptions are never suppressed.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        operation: str,
        **context: Any,
    ):
        self.logger = logger
        self.operation = operation
        self.context = context
        self._started_at: Optional[float] = None

    @property
    def duration_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        return round((time.perf_counter() - self._started_at) * 1000, 2)

    def update_context(self, **kwargs: Any) -> None:
        """Attach more fields to the closing event."""
        self.context.update(kwargs)

    def __enter__(self) -> "StructuredLogger":
        self._started_at = time.perf_counter()
        self.logger.info(f"{self.operation}_started", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.logger.info(
                f"{self.operation}_completed",
                duration_ms=self.duration_ms,
                **self.context,
            )
            return
        self.logger.error(
            f"{self.operation}_failed",
            duration_ms=self.duration_ms,
            error=str(exc_val),
            error_type=exc_type.__name__,
            **self.context,
        )
