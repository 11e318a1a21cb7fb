"""Structured logging configuration."""

import logging
import sys
import structlog
from typing import Any, Optional
from datetime import datetime, timezone


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = True
) -> None:
    """Configure structured logging for the application."""

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    # Replace handlers so repeated app creation does not duplicate output
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


class LoggerMixin:
    """Mixin to add logging capabilities to classes."""

    @property
    def logger(self) -> structlog.BoundLogger:
        """Get logger bound to class name."""
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger

    def log_event(
        self,
        event: str,
        level: str = "info",
        **kwargs: Any
    ) -> None:
        """Log an event with structured data."""
        log_method = getattr(self.logger, level)
        log_method(event, **kwargs)

    def log_error(
        self,
        error: Exception,
        event: str = "error_occurred",
        **kwargs: Any
    ) -> None:
        """Log an error with context."""
        self.logger.error(
            event,
            error_type=type(error).__name__,
            error_message=str(error),
            **kwargs
        )


class RequestLogger:
    """Context manager for request logging."""

    def __init__(
        self,
        logger: structlog.BoundLogger,
        request_id: str,
        operation: str
    ):
        self.logger = logger
        self.request_id = request_id
        self.operation = operation
        self.start_time: Optional[datetime] = None

    def __enter__(self):
        self.start_time = datetime.now(timezone.utc)
        self.logger.info(
            "request_started",
            request_id=self.request_id,
            operation=self.operation
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (datetime.now(timezone.utc) - self.start_time).total_seconds() * 1000

        if exc_type:
            self.logger.error(
                "request_failed",
                request_id=self.request_id,
                operation=self.operation,
                duration_ms=duration_ms,
                error_type=exc_type.__name__,
                error_message=str(exc_val)
            )
        else:
            self.logger.info(
                "request_completed",
                request_id=self.request_id,
                operation=self.operation,
                duration_ms=duration_ms
            )
