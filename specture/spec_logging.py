"""Logging and observability utilities for Specture.

This module provides structured logging, operation timing, and
observability hooks for the Specture workspace and reporting layers.
"""

from __future__ import annotations

import json
import time
import logging as std_logging
from collections import deque
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Optional, Union

LOGGER_NAME = "specture"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# Configure structured logging
def setup_logging(log_level: Union[str, int] = std_logging.INFO, log_file: Optional[Path] = None) -> None:
    """Setup structured logging for Specture."""

    logger = std_logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # Close and drop existing handlers
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    detailed_formatter = std_logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = std_logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(detailed_formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = std_logging.FileHandler(log_file)
        file_handler.setLevel(std_logging.DEBUG)
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)

    logger.info("Specture logging initialized")


class JsonFormatter(std_logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: std_logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, default=str)


class PerformanceMonitor:
    """Keep recent timing metrics for Specture operations in memory.

    Each metric name keeps at most ``max_samples`` entries; older ones are
    dropped so a long-running server does not grow without bound.
    """

    DEFAULT_MAX_SAMPLES = 1000

    def __init__(self, max_samples: int = DEFAULT_MAX_SAMPLES):
        self.max_samples = max_samples
        self.metrics: Dict[str, Deque[Dict[str, Any]]] = {}

    def record_metric(self, name: str, value: Any, tags: Optional[Dict[str, str]] = None) -> None:
        """Record a performance metric."""
        metric = {
            "timestamp": _utc_timestamp(),
            "name": name,
            "value": value,
            "tags": tags or {}
        }
        self.metrics.setdefault(name, deque(maxlen=self.max_samples)).append(metric)

        logger = std_logging.getLogger(f"{LOGGER_NAME}.performance")
        logger.debug(f"Metric recorded: {name}={value}", extra={"extra_fields": metric})

    def get_metrics(self, name: Optional[str] = None) -> Dict[str, List[Dict[str, Any]]]:
        """Get recorded metrics."""
        if name:
            return {name: list(self.metrics.get(name, ()))}
        return {key: list(samples) for key, samples in self.metrics.items()}

    def clear(self) -> None:
        self.metrics.clear()


# Global performance monitor instance
performance_monitor = PerformanceMonitor()


def log_performance(operation_name: str):
    """Decorator to log performance metrics for operations."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            logger = std_logging.getLogger(f"{LOGGER_NAME}.performance")

            try:
                logger.debug(f"Starting operation: {operation_name}")
                result = func(*args, **kwargs)

                duration = time.perf_counter() - start_time
                performance_monitor.record_metric(
                    f"{operation_name}_duration",
                    duration,
                    {"status": "success"}
                )
                logger.info(
                    f"Completed operation: {operation_name} in {duration:.3f}s",
                    extra={"extra_fields": {
                        "operation": operation_name,
                        "duration": duration,
                        "status": "success"
                    }}
                )
                return result

            except Exception as e:
                duration = time.perf_counter() - start_time
                performance_monitor.record_metric(
                    f"{operation_name}_duration",
                    duration,
                    {"status": "error", "error_type": type(e).__name__}
                )
                logger.error(
                    f"Failed operation: {operation_name} after {duration:.3f}s - {e}",
                    extra={"extra_fields": {
                        "operation": operation_name,
                        "duration": duration,
                        "status": "error",
                        "error_type": type(e).__name__,
                        "error_message": str(e)
                    }}
                )
                raise

        return wrapper
    return decorator


@contextmanager
def log_operation(operation_name: str, **extra_fields):
    """Context manager to log operations with custom fields."""
    logger = std_logging.getLogger(f"{LOGGER_NAME}.operations")
    start_time = time.perf_counter()

    logger.debug(f"Starting operation: {operation_name}", extra={"extra_fields": {
        "operation": operation_name,
        "status": "started",
        **extra_fields
    }})

    try:
        yield

        duration = time.perf_counter() - start_time
        logger.info(f"Completed operation: {operation_name} in {duration:.3f}s", extra={"extra_fields": {
            "operation": operation_name,
            "status": "completed",
            "duration": duration,
            **extra_fields
        }})

    except Exception as e:
        duration = time.perf_counter() - start_time
        logger.error(f"Failed operation: {operation_name} after {duration:.3f}s - {e}", extra={"extra_fields": {
            "operation": operation_name,
            "status": "failed",
            "duration": duration,
            "error_type": type(e).__name__,
            "error_message": str(e),
            **extra_fields
        }})
        raise


class ObservabilityHooks:
    """Observability hooks for spec events."""

    def __init__(self):
        self.hooks: Dict[str, List[Callable[..., Any]]] = {}
        self.logger = std_logging.getLogger(f"{LOGGER_NAME}.observability")

    def register_hook(self, event_type: str, callback: Callable[..., Any]) -> None:
        """Register a callback for a specific event type."""
        self.hooks.setdefault(event_type, []).append(callback)
        self.logger.debug(f"Registered hook for event: {event_type}")

    def unregister_hook(self, event_type: str, callback: Callable[..., Any]) -> None:
        """Remove a previously registered callback."""
        callbacks = self.hooks.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def trigger_hooks(self, event_type: str, **data) -> None:
        """Trigger all callbacks for a specific event type.

        A failing hook is logged and does not stop the remaining hooks.
        """
        callbacks = list(self.hooks.get(event_type, []))
        if not callbacks:
            return
        self.logger.debug(f"Triggering {len(callbacks)} hooks for event: {event_type}")
        for hook in callbacks:
            try:
                hook(**data)
            except Exception:
                self.logger.exception(f"Hook failed for event {event_type}")

    def log_event(self, event_type: str, **data) -> None:
        """Log an event and trigger hooks."""
        event_data = {
            "timestamp": _utc_timestamp(),
            "event_type": event_type,
            **data
        }

        self.logger.info(f"Spec event: {event_type}", extra={"extra_fields": event_data})

        # event_type is passed positionally, keep it out of the hook kwargs
        hook_data = {k: v for k, v in event_data.items() if k != "event_type"}
        self.trigger_hooks(event_type, **hook_data)


# Global observability hooks instance
observability_hooks = ObservabilityHooks()


def log_error_with_context(error: Exception, context: Dict[str, Any], **extra_fields):
    """Log an error with rich context information."""
    logger = std_logging.getLogger(f"{LOGGER_NAME}.errors")

    error_data = {
        "timestamp": _utc_timestamp(),
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context,
        **extra_fields
    }

    logger.error(
        f"Error in {context.get('operation', 'unknown operation')}: {error}",
        extra={"extra_fields": error_data}
    )


def log_spec_event(event_type: str, path: Optional[str] = None, **extra_fields):
    """Log a spec-related event."""
    observability_hooks.log_event(event_type, path=path, **extra_fields)


# Convenience functions for common operations
def log_specs_parsed(specs_dir: str, count: int, **extra_fields):
    """Log that a specs directory has been parsed."""
    log_spec_event("specs_parsed", path=specs_dir, count=count, **extra_fields)


def log_validation_completed(valid_count: int, invalid_count: int, **extra_fields):
    """Log the outcome of a validation run."""
    log_spec_event(
        "validation_completed",
        valid_count=valid_count,
        invalid_count=invalid_count,
        **extra_fields
    )
