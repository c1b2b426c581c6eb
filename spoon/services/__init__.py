"""Service layer for abstracting Docker operations."""

from .docker_service import DockerService
from .exceptions import (
    ServiceError,
    DockerServiceError,
    ConfigError,
    ImageNotFoundError,
    ContainerNotFoundError,
)

__all__ = [
    "DockerService",
    "ServiceError",
    "DockerServiceError",
    "ConfigError",
    "ImageNotFoundError",
    "ContainerNotFoundError",
]
