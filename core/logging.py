# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Core - Structured logging with probe context
# PURPOSE: Tag every log line with the probe that produced it
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Live and ready probes interleave in the log, so every line written while a
probe is handled carries that probe's kind, number and transform.

Features:
- Thread-local probe context (log_context)
- Component-tagged loggers (get_logger)
- Human or JSON output (configure_logging)
- Named checkpoints for state transitions (baseline learned, latch set)

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger(__name__, ComponentType.PROBE)

    with log_context(probe_kind="live", probe_count=7, transform="copy"):
        logger.info("Running canary")
"""

import json
import logging
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


class ComponentType(str, Enum):
    """Component types for logging categorization."""
    PROBE = "probe"
    TRANSFORM = "transform"
    STORAGE = "storage"
    API = "api"


@dataclass
class LogContext:
    """Probe fields attached to log lines on the current thread."""
    probe_kind: Optional[str] = None
    probe_count: Optional[int] = None
    transform: Optional[str] = None
    component: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only, with extra merged in."""
        result = {k: v for k, v in asdict(self).items() if v is not None and k != "extra"}
        result.update(self.extra)
        return result

    def tag(self) -> str:
        """Short inline form, e.g. "probe=live, n=12, transform=copy"."""
        parts = []
        if self.probe_kind:
            parts.append(f"probe={self.probe_kind}")
        if self.probe_count is not None:
            parts.append(f"n={self.probe_count}")
        if self.transform:
            parts.append(f"transform={self.transform}")
        return ", ".join(parts)


_local = threading.local()


def _get_context_stack() -> list:
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


def get_current_context() -> LogContext:
    """Innermost context on this thread (empty if none)."""
    stack = _get_context_stack()
    return stack[-1] if stack else LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Add probe fields for the duration of the block.

    Fields not given are inherited from the enclosing context; extra
    dicts are merged.
    """
    parent = get_current_context()
    context = LogContext(
        probe_kind=kwargs.get("probe_kind", parent.probe_kind),
        probe_count=kwargs.get("probe_count", parent.probe_count),
        transform=kwargs.get("transform", parent.transform),
        component=kwargs.get("component", parent.component),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    stack = _get_context_stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StructuredFormatter(logging.Formatter):
    """One JSON object per line for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": _utc_now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            log_data["context"] = context

        data = getattr(record, "extra", None)
        if data:
            log_data["data"] = data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line format with the probe tag inline."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = _utc_now().strftime("%Y-%m-%d %H:%M:%S")
        tag = get_current_context().tag()
        tag = f" [{tag}]" if tag else ""

        result = f"{timestamp} {record.levelname:<8} {record.name}{tag}: {record.getMessage()}"
        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"
        return result


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that copies the probe context onto each record."""

    def process(self, msg, kwargs):
        extra = kwargs.get("extra", {})
        extra.update(get_current_context().to_dict())

        # Logger's own component unless the context already names one
        component = self.extra.get("component")
        if component is not None and "component" not in extra:
            extra["component"] = component.value

        # Stored as an attribute for formatter access
        kwargs["extra"] = {"extra": extra}
        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """Context-aware logger tagged with a component."""
    return ContextLogger(logging.getLogger(name), {"component": component})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure the root logger for the service.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: JSON lines instead of the human format
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if json_output else HumanFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)


# ============================================================================
# CHECKPOINT LOGGING
# ============================================================================

def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named checkpoint.

    Checkpoints mark probe state transitions ("baseline_learned",
    "permanent_failure_latched") so they can be found in aggregated logs.

    Args:
        name: Checkpoint name
        data: Optional checkpoint data
        logger: Logger to use (the "checkpoint" logger if None)
    """
    if logger is None:
        logger = logging.getLogger("checkpoint")

    checkpoint_data: Dict[str, Any] = {"checkpoint": name}
    checkpoint_data.update(get_current_context().to_dict())
    if data:
        checkpoint_data["data"] = data

    logger.info(f"CHECKPOINT: {name}", extra={"extra": checkpoint_data})


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
