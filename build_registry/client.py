"""Registry collaborator interface.

This module defines the protocol the Bucket uses to report builds to a
remote artifact registry, and an in-memory implementation for local runs
and tests. Transport-backed implementations live outside this package.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Protocol

from build_registry.models import BuildSnapshot

logger = logging.getLogger(__name__)


class RegistryService(Protocol):
    """Capability to create and update build records in a remote registry."""

    def create_build(
        self,
        bucket_slug: str,
        iteration_id: str | None,
        build: BuildSnapshot,
        timeout: float | None = None,
    ) -> str:
        """Create a build record and return its registry identifier."""
        ...

    def update_build(
        self,
        bucket_slug: str,
        iteration_id: str | None,
        build: BuildSnapshot,
        timeout: float | None = None,
    ) -> None:
        """Push the current state of an existing build record."""
        ...


@dataclass
class RecordedCall:
    """A call received by MockRegistryService."""

    method: str
    bucket_slug: str
    iteration_id: str | None
    build: BuildSnapshot
    timeout: float | None = None


@dataclass
class MockRegistryService:
    """In-memory registry service.

    Records every call and hands out random build ids. Components listed
    in ``fail_on`` raise ``ConnectionError`` to simulate an unreachable
    registry.
    """

    fail_on: set[str] = field(default_factory=set)
    calls: list[RecordedCall] = field(default_factory=list)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def _record(
        self,
        method: str,
        bucket_slug: str,
        iteration_id: str | None,
        build: BuildSnapshot,
        timeout: float | None,
    ) -> None:
        if build.component_type in self.fail_on:
            raise ConnectionError(
                f"registry unavailable for component {build.component_type}"
            )
        with self._lock:
            self.calls.append(
                RecordedCall(method, bucket_slug, iteration_id, build, timeout)
            )

    def create_build(
        self,
        bucket_slug: str,
        iteration_id: str | None,
        build: BuildSnapshot,
        timeout: float | None = None,
    ) -> str:
        self._record("create_build", bucket_slug, iteration_id, build, timeout)
        build_id = uuid.uuid4().hex
        logger.debug("Mock registry created build %s for %s", build_id, bucket_slug)
        return build_id

    def update_build(
        self,
        bucket_slug: str,
        iteration_id: str | None,
        build: BuildSnapshot,
        timeout: float | None = None,
    ) -> None:
        self._record("update_build", bucket_slug, iteration_id, build, timeout)

    def calls_for(self, method: str) -> list[RecordedCall]:
        with self._lock:
            return [call for call in self.calls if call.method == method]


__all__ = ["MockRegistryService", "RecordedCall", "RegistryService"]
