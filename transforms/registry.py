# ============================================================================
# TRANSFORM REGISTRY
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Core - Transform registration and lookup
# PURPOSE: Register transforms together with their canary probe defaults
# CREATED: 19 OCT 2026
# ============================================================================
"""
Transform Registry

Central registry for transform capabilities. The probe controller looks up
the transform to use for canaries here, along with the defaults its probe
should start from (fixture, expected output size, thresholds).

Design:
- Transforms are registered at import time via decorator
- A transform is a plain callable: transform(source_path, target_path)
- Fail-fast on duplicate registration
- Probe defaults travel with the transform; environment overrides are
  applied later by ProbeConfig
"""

import logging
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


# ============================================================================
# TRANSFORM TYPES
# ============================================================================

# Transform function type: reads source, writes target, raises on failure
TransformFunc = Callable[[Path, Path], None]


@dataclass(frozen=True)
class ProbeDefaults:
    """
    Canary settings supplied by a transform.

    Values for the tunables are defaults only; the orchestrator can
    override them through the environment.
    """
    source_filename: str
    target_filename: str
    expected_size: int
    tolerance: int
    liveness_percent: int = 150
    max_transforms: int = 10000
    max_transform_seconds: int = 900
    liveness_period_seconds: int = 600


@dataclass(frozen=True)
class TransformSpec:
    """A registered transform and its probe defaults."""
    name: str
    func: TransformFunc
    probe: ProbeDefaults
    description: str = ""


# ============================================================================
# EXCEPTIONS
# ============================================================================

class TransformError(Exception):
    """Base exception for transform errors."""
    pass


class TransformNotFoundError(TransformError):
    """Raised when a transform is not found in the registry."""
    def __init__(self, transform_name: str):
        self.transform_name = transform_name
        super().__init__(f"Transform not found: {transform_name}")


class DuplicateTransformError(TransformError):
    """Raised when a transform name is already registered."""
    def __init__(self, transform_name: str):
        self.transform_name = transform_name
        super().__init__(f"Transform already registered: {transform_name}")


# ============================================================================
# REGISTRY
# ============================================================================

_transforms: Dict[str, TransformSpec] = {}
_transform_metadata: Dict[str, Dict[str, Any]] = {}


def register_transform(
    name: str,
    *,
    probe: ProbeDefaults,
    description: str = "",
) -> Callable[[TransformFunc], TransformFunc]:
    """
    Decorator to register a transform function.

    Args:
        name: Transform name (must be unique)
        probe: Canary defaults for this transform
        description: Human-readable description

    Returns:
        Decorator function

    Example:
        @register_transform(
            "copy",
            probe=ProbeDefaults("quick.txt", "quick.txt", expected_size=123, tolerance=0),
        )
        def copy_transform(source: Path, target: Path) -> None:
            shutil.copyfile(source, target)
    """
    def decorator(func: TransformFunc) -> TransformFunc:
        if name in _transforms:
            raise DuplicateTransformError(name)

        _transforms[name] = TransformSpec(
            name=name,
            func=func,
            probe=probe,
            description=description,
        )
        _transform_metadata[name] = {
            "name": name,
            "description": description,
            "function": func.__name__,
            "module": func.__module__,
            "probe": asdict(probe),
            "registered_at": datetime.now(timezone.utc).isoformat(),
        }

        logger.debug(f"Registered transform: {name} ({func.__module__}.{func.__name__})")
        return func

    return decorator


def get_transform(name: str) -> Optional[TransformSpec]:
    """Get a transform by name, or None if not registered."""
    return _transforms.get(name)


def get_transform_or_raise(name: str) -> TransformSpec:
    """
    Get a transform by name, raising if not found.

    Raises:
        TransformNotFoundError if transform not found
    """
    spec = _transforms.get(name)
    if spec is None:
        raise TransformNotFoundError(name)
    return spec


def list_transforms() -> List[Dict[str, Any]]:
    """List all registered transforms with metadata."""
    return list(_transform_metadata.values())


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TransformFunc",
    "ProbeDefaults",
    "TransformSpec",
    "register_transform",
    "get_transform",
    "get_transform_or_raise",
    "list_transforms",
    "TransformError",
    "TransformNotFoundError",
    "DuplicateTransformError",
]
