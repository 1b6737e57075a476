# ============================================================================
# TRANSFORMS MODULE
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Core - Transform capabilities
# PURPOSE: Transform registry and bundled example transforms
# CREATED: 19 OCT 2026
# ============================================================================
"""
Transforms module.

Import this module to register the bundled transforms:
    import transforms
    spec = transforms.get_transform_or_raise("copy")
"""

from transforms.registry import (
    TransformFunc,
    ProbeDefaults,
    TransformSpec,
    register_transform,
    get_transform,
    get_transform_or_raise,
    list_transforms,
    TransformError,
    TransformNotFoundError,
    DuplicateTransformError,
)

# Import example transforms to trigger registration
from transforms import examples  # noqa: F401

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
