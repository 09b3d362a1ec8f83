"""Error definitions for build registry bookkeeping.

Every error carries a stable ``code`` so callers can tell failure kinds
apart without matching on messages.
"""

# Error code constants
COMPONENT_NOT_REGISTERED = "component_not_registered"
BUILD_ALREADY_EXISTS = "build_already_exists"
BUILD_NOT_FOUND = "build_not_found"
BUILD_FINALIZED = "build_finalized"
REGISTRY_SERVICE_ERROR = "registry_service_error"


class RegistryError(Exception):
    """Base error for build registry operations."""

    def __init__(self, message: str, code: str = "registry_error") -> None:
        super().__init__(message)
        self.code = code


class ComponentNotRegisteredError(RegistryError):
    """Raised when a build is created for a component never registered."""

    def __init__(self, component: str, code: str = COMPONENT_NOT_REGISTERED) -> None:
        super().__init__(f"Component not registered: {component}", code)
        self.component = component


class BuildAlreadyExistsError(RegistryError):
    """Raised when a component already has a build in the iteration."""

    def __init__(self, component: str, code: str = BUILD_ALREADY_EXISTS) -> None:
        super().__init__(f"Build already exists for component: {component}", code)
        self.component = component


class BuildNotFoundError(RegistryError):
    """Raised when no build exists for a component."""

    def __init__(self, component: str, code: str = BUILD_NOT_FOUND) -> None:
        super().__init__(f"Build not found for component: {component}", code)
        self.component = component


class BuildFinalizedError(RegistryError):
    """Raised when a build marked done is modified."""

    def __init__(self, component: str, code: str = BUILD_FINALIZED) -> None:
        super().__init__(f"Build is already done for component: {component}", code)
        self.component = component


class RegistryServiceError(RegistryError):
    """Raised when the remote registry collaborator fails."""

    def __init__(
        self,
        message: str,
        component: str | None = None,
        code: str = REGISTRY_SERVICE_ERROR,
    ) -> None:
        super().__init__(message, code)
        self.component = component


__all__ = [
    "BUILD_ALREADY_EXISTS",
    "BUILD_FINALIZED",
    "BUILD_NOT_FOUND",
    "COMPONENT_NOT_REGISTERED",
    "REGISTRY_SERVICE_ERROR",
    "BuildAlreadyExistsError",
    "BuildFinalizedError",
    "BuildNotFoundError",
    "ComponentNotRegisteredError",
    "RegistryError",
    "RegistryServiceError",
]
