"""Iteration bookkeeping.

An Iteration is one versioned sweep of builds. It owns the map of
component name to Build and the per-component tracking state. Only the
owning Bucket writes to it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from build_registry.config import get_settings
from build_registry.errors import BuildAlreadyExistsError, ComponentNotRegisteredError
from build_registry.types import ComponentState

if TYPE_CHECKING:
    from build_registry.config import Settings
    from build_registry.models import Build

logger = logging.getLogger(__name__)


@dataclass
class IterationOptions:
    """Options for creating an Iteration.

    Attributes:
        fingerprint: Build fingerprint; falls back to settings when unset.
        iteration_id: Registry identifier, if already known.
    """

    fingerprint: str | None = None
    iteration_id: str | None = None


class Iteration:
    """Thread-safe map of component builds for a single run."""

    def __init__(self, fingerprint: str, iteration_id: str | None = None) -> None:
        if not fingerprint:
            raise ValueError("iteration fingerprint must not be empty")
        self.fingerprint = fingerprint
        self.iteration_id = iteration_id
        self._builds: dict[str, Build] = {}
        self._states: dict[str, ComponentState] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_options(
        cls,
        options: IterationOptions,
        settings: Settings | None = None,
    ) -> Iteration:
        """Create an Iteration from options, reading settings for defaults.

        Raises:
            ValueError: If no fingerprint is given or configured.
        """
        fingerprint = options.fingerprint
        if fingerprint is None:
            if settings is None:
                settings = get_settings()
            fingerprint = settings.build_fingerprint
        if not fingerprint:
            raise ValueError(
                "no build fingerprint configured; "
                "set BUILD_REGISTRY_BUILD_FINGERPRINT or pass one explicitly"
            )
        return cls(fingerprint, iteration_id=options.iteration_id)

    def load(self, component: str) -> tuple[Build | None, bool]:
        with self._lock:
            build = self._builds.get(component)
        return build, build is not None

    def store(self, component: str, build: Build) -> None:
        """Insert a build for a component.

        Raises:
            ComponentNotRegisteredError: If the component was never registered.
            BuildAlreadyExistsError: If the component already has a build.
        """
        with self._lock:
            if component not in self._states:
                raise ComponentNotRegisteredError(component)
            if component in self._builds:
                raise BuildAlreadyExistsError(component)
            self._builds[component] = build
            self._states[component] = ComponentState.BUILT

    def builds(self) -> list[Build]:
        """Return all stored builds, in no particular order."""
        with self._lock:
            return list(self._builds.values())

    def state(self, component: str) -> ComponentState:
        with self._lock:
            return self._states.get(component, ComponentState.UNREGISTERED)

    def registered_components(self) -> list[str]:
        """Return names of all registered or built components."""
        with self._lock:
            return sorted(self._states)

    def register(self, component: str) -> None:
        """Mark a component as expected; no-op if already known."""
        with self._lock:
            if component in self._states:
                logger.debug(
                    "Component %s already %s", component, self._states[component].value
                )
                return
            self._states[component] = ComponentState.REGISTERED
        logger.debug("Registered component %s", component)

    def reserve(self, component: str) -> None:
        """Claim a registered component for build creation.

        Moves the component to BUILT before the Build is stored so that
        concurrent creators for the same component see it as taken.

        Raises:
            ComponentNotRegisteredError: If the component was never registered.
            BuildAlreadyExistsError: If the component is already built.
        """
        with self._lock:
            state = self._states.get(component, ComponentState.UNREGISTERED)
            if state is ComponentState.UNREGISTERED:
                raise ComponentNotRegisteredError(component)
            if state is ComponentState.BUILT:
                raise BuildAlreadyExistsError(component)
            self._states[component] = ComponentState.BUILT

    def release(self, component: str) -> None:
        """Return a reserved component without a build to REGISTERED."""
        with self._lock:
            if component in self._builds:
                return
            if self._states.get(component) is ComponentState.BUILT:
                self._states[component] = ComponentState.REGISTERED
        logger.debug("Released reservation for component %s", component)


__all__ = ["Iteration", "IterationOptions"]
