"""Bucket operations consumed by the build orchestration layer.

This module provides the Bucket, which owns one Iteration and mediates
every write to its build map:
- register_build_for_component(): declare a component to be built
- create_initial_build_for_iteration(): create its Build record
- update_labels_for_build(): merge labels produced by build steps
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from build_registry.config import get_settings
from build_registry.errors import BuildNotFoundError, RegistryServiceError
from build_registry.iteration import Iteration, IterationOptions
from build_registry.models import Build
from build_registry.types import BuildStatus, ComponentState, Labels

if TYPE_CHECKING:
    from build_registry.client import RegistryService
    from build_registry.config import Settings
    from build_registry.models import Artifact, BuildSnapshot

logger = logging.getLogger(__name__)


class Bucket:
    """Named collection of build metadata for one pipeline run.

    Attributes:
        slug: Human-readable bucket name.
        description: Free-form bucket description.
        build_labels: Global labels seeded into every new Build.
        bucket_labels: Labels describing the bucket itself.
        iteration: The Iteration owned by this bucket.
        registry_timeout: Default timeout in seconds for registry calls.
    """

    def __init__(
        self,
        slug: str,
        iteration: Iteration,
        client: RegistryService | None = None,
        build_labels: Mapping[str, str] | None = None,
        bucket_labels: Mapping[str, str] | None = None,
        description: str = "",
        registry_timeout: float | None = None,
    ) -> None:
        self.slug = slug
        self.description = description
        self.build_labels: Labels = dict(build_labels or {})
        self.bucket_labels: Labels = dict(bucket_labels or {})
        self.iteration = iteration
        self.client = client
        self.registry_timeout = registry_timeout

    @classmethod
    def with_iteration(
        cls,
        options: IterationOptions,
        slug: str | None = None,
        client: RegistryService | None = None,
        settings: Settings | None = None,
    ) -> Bucket:
        """Create a Bucket together with a fresh Iteration.

        Args:
            options: Iteration options.
            slug: Bucket name; falls back to the configured bucket slug.
            client: Registry collaborator.
            settings: Optional settings instance.

        Returns:
            New Bucket.
        """
        if settings is None:
            settings = get_settings()
        iteration = Iteration.from_options(options, settings=settings)
        return cls(
            slug or settings.bucket_slug or "",
            iteration,
            client=client,
            registry_timeout=settings.registry_timeout,
        )

    def register_build_for_component(self, component: str) -> None:
        """Declare that a build is expected for a component.

        Registering a component twice, or after it was built, is a no-op.
        """
        self.iteration.register(component)

    def is_expecting_build_for_component(self, component: str) -> bool:
        """Return True if the component is registered but not yet built."""
        return self.iteration.state(component) is ComponentState.REGISTERED

    def create_initial_build_for_iteration(
        self,
        component: str,
        timeout: float | None = None,
    ) -> Build:
        """Create the initial Build record for a registered component.

        The new Build gets a copy of the current global build labels.
        When a registry client is set, the build is created there first and
        the returned id is kept on the Build.

        Args:
            component: Component name.
            timeout: Timeout in seconds for the registry call; defaults to
                the bucket registry timeout.

        Returns:
            The stored Build.

        Raises:
            ComponentNotRegisteredError: If the component was never registered.
            BuildAlreadyExistsError: If the component already has a build.
            RegistryServiceError: If the registry call fails.
        """
        self.iteration.reserve(component)
        try:
            build = Build(
                component,
                labels=self.build_labels,
                fingerprint=self.iteration.fingerprint,
            )
            if self.client is not None:
                try:
                    build.build_id = self.client.create_build(
                        self.slug,
                        self.iteration.iteration_id,
                        build.snapshot(),
                        timeout=self._timeout(timeout),
                    )
                except Exception as e:
                    logger.warning(
                        "Registry failed to create build for %s: %s", component, e
                    )
                    raise RegistryServiceError(
                        f"Failed to create build for {component}: {e}",
                        component=component,
                    ) from e
            self.iteration.store(component, build)
        except BaseException:
            self.iteration.release(component)
            raise

        logger.info(
            "Created initial build for %s in bucket %s", component, self.slug
        )
        return build

    def get_build(self, component: str) -> Build:
        """Get the Build for a component.

        Raises:
            BuildNotFoundError: If no build exists for the component.
        """
        build, ok = self.iteration.load(component)
        if not ok or build is None:
            raise BuildNotFoundError(component)
        return build

    def update_labels_for_build(
        self, component: str, labels: Mapping[str, str]
    ) -> None:
        """Merge labels into a component's Build.

        Raises:
            BuildNotFoundError: If no build exists for the component.
        """
        self.get_build(component).merge_labels(labels)

    def update_artifacts_for_build(
        self, component: str, artifacts: Iterable[Artifact]
    ) -> None:
        """Attach artifacts to a component's Build.

        Raises:
            BuildNotFoundError: If no build exists for the component.
            BuildFinalizedError: If the build is already done.
        """
        self.get_build(component).add_artifacts(artifacts)

    def update_build_status(
        self,
        component: str,
        status: BuildStatus,
        timeout: float | None = None,
    ) -> None:
        """Push a new status to the registry, then set it on the build.

        The local status only changes once the registry accepted it, so a
        failed push can be retried with the same status.

        Args:
            component: Component name.
            status: New build status.
            timeout: Timeout in seconds for the registry call; defaults to
                the bucket registry timeout.

        Raises:
            BuildNotFoundError: If no build exists for the component.
            BuildFinalizedError: If the build is already done.
            RegistryServiceError: If the registry call fails.
        """
        build = self.get_build(component)
        if self.client is not None:
            snapshot = build.snapshot(status=status)
            try:
                self.client.update_build(
                    self.slug,
                    self.iteration.iteration_id,
                    snapshot,
                    timeout=self._timeout(timeout),
                )
            except Exception as e:
                logger.warning(
                    "Registry failed to update build for %s: %s", component, e
                )
                raise RegistryServiceError(
                    f"Failed to update build for {component}: {e}",
                    component=component,
                ) from e
        build.set_status(status)
        logger.debug("Build for %s is now %s", component, status.value)

    def export_builds(self) -> list[BuildSnapshot]:
        """Return snapshots of every build in the iteration."""
        return [build.snapshot() for build in self.iteration.builds()]

    def _timeout(self, timeout: float | None) -> float | None:
        return self.registry_timeout if timeout is None else timeout


__all__ = ["Bucket"]
