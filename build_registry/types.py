"""Shared type definitions for build_registry.

This module contains enums and type aliases shared across modules to
avoid circular imports.
"""

from enum import Enum
from typing import TypeAlias

Labels: TypeAlias = dict[str, str]


class ComponentState(str, Enum):
    """Tracking state of a component within an iteration."""

    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    BUILT = "built"


class BuildStatus(str, Enum):
    """Status of a build as reported to the registry."""

    UNSET = "unset"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


__all__ = [
    "BuildStatus",
    "ComponentState",
    "Labels",
]
