"""Build record models.

This module defines the Build record tracked per component, plus the
pydantic models used to hand build state to the registry collaborator.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from build_registry.errors import BuildFinalizedError
from build_registry.types import BuildStatus, Labels

logger = logging.getLogger(__name__)


class Artifact(BaseModel):
    """Schema for an artifact produced by a build.

    Attributes:
        image_id: Provider-specific identifier of the image.
        provider_name: Cloud or platform the image lives on.
        provider_region: Region of the image, if any.
        labels: Artifact-level labels.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    image_id: str = Field(description="Provider image identifier")
    provider_name: str = Field(description="Provider the image was built for")
    provider_region: str | None = Field(default=None)
    labels: dict[str, str] = Field(default_factory=dict)


class BuildSnapshot(BaseModel):
    """Point-in-time copy of a Build, as reported to the registry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    component_type: str
    fingerprint: str
    status: BuildStatus
    build_id: str | None = None
    cloud_provider: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    artifacts: list[Artifact] = Field(default_factory=list)


class Build:
    """Metadata record for one component's build output.

    Labels, status and artifacts may be changed from several threads;
    every access goes through a per-build lock. The component type is
    fixed at construction.

    Attributes:
        component_type: Component that produced this build.
        fingerprint: Iteration fingerprint, stored as given.
        build_id: Identifier assigned by the registry, if any.
        cloud_provider: Provider of the first artifact, if any.
    """

    def __init__(
        self,
        component_type: str,
        labels: Mapping[str, str] | None = None,
        fingerprint: str = "",
        status: BuildStatus = BuildStatus.UNSET,
        build_id: str | None = None,
        cloud_provider: str | None = None,
        artifacts: Iterable[Artifact] | None = None,
    ) -> None:
        self._component_type = component_type
        self._labels: Labels = dict(labels or {})
        self._status = status
        self._artifacts: list[Artifact] = list(artifacts or [])
        self._cloud_provider = cloud_provider
        if self._cloud_provider is None and self._artifacts:
            self._cloud_provider = self._artifacts[0].provider_name
        self._lock = threading.Lock()
        self.fingerprint = fingerprint
        self.build_id = build_id

    def __repr__(self) -> str:
        return (
            f"Build(component_type={self._component_type!r}, "
            f"status={self.status.value!r}, labels={self.labels!r})"
        )

    @property
    def component_type(self) -> str:
        return self._component_type

    @property
    def labels(self) -> Labels:
        """Return a copy of the current labels."""
        with self._lock:
            return dict(self._labels)

    @property
    def status(self) -> BuildStatus:
        with self._lock:
            return self._status

    @property
    def cloud_provider(self) -> str | None:
        with self._lock:
            return self._cloud_provider

    @property
    def artifacts(self) -> list[Artifact]:
        with self._lock:
            return list(self._artifacts)

    def merge_labels(self, labels: Mapping[str, str]) -> None:
        """Merge labels into this build.

        New keys are added, colliding keys take the incoming value, and
        keys not present in ``labels`` are kept.

        Args:
            labels: Labels to merge.
        """
        with self._lock:
            self._labels.update(labels)
        logger.debug(
            "Merged %d label(s) into build for %s", len(labels), self._component_type
        )

    def set_status(self, status: BuildStatus) -> None:
        """Set the build status.

        Raises:
            BuildFinalizedError: If the build is already done.
        """
        with self._lock:
            if self._status is BuildStatus.DONE:
                raise BuildFinalizedError(self._component_type)
            self._status = status

    def add_artifacts(self, artifacts: Iterable[Artifact]) -> None:
        """Attach artifacts to this build.

        The cloud provider is taken from the first artifact when not yet set.

        Raises:
            BuildFinalizedError: If the build is already done.
        """
        with self._lock:
            if self._status is BuildStatus.DONE:
                raise BuildFinalizedError(self._component_type)
            for artifact in artifacts:
                if self._cloud_provider is None:
                    self._cloud_provider = artifact.provider_name
                self._artifacts.append(artifact)

    def snapshot(self, status: BuildStatus | None = None) -> BuildSnapshot:
        """Take a consistent copy of the build state.

        Args:
            status: Status to report in place of the current one. The build
                itself is left unchanged.

        Raises:
            BuildFinalizedError: If ``status`` is given and the build is done.
        """
        with self._lock:
            if status is not None and self._status is BuildStatus.DONE:
                raise BuildFinalizedError(self._component_type)
            return BuildSnapshot(
                component_type=self._component_type,
                fingerprint=self.fingerprint,
                status=self._status if status is None else status,
                build_id=self.build_id,
                cloud_provider=self._cloud_provider,
                labels=dict(self._labels),
                artifacts=list(self._artifacts),
            )


__all__ = ["Artifact", "Build", "BuildSnapshot"]
