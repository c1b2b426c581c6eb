"""Custom exceptions for service layer."""


class ServiceError(Exception):
    """Base exception for all service-related errors."""

    pass


class DockerServiceError(ServiceError):
    """Exception raised for Docker service operations."""

    pass


class ConfigError(ServiceError):
    """Exception raised when the spoon config cannot be loaded."""

    pass


class ImageNotFoundError(DockerServiceError):
    """Exception raised when a Docker image is not found."""

    pass


class ContainerNotFoundError(DockerServiceError):
    """Exception raised when a Docker container is not found."""

    pass
