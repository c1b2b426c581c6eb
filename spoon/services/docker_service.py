"""Docker service for abstracting Docker operations."""

import logging
import os
from typing import Any, Iterator, Optional

import docker
import docker.errors
import requests.exceptions
from docker.models.containers import Container
from docker.models.images import Image

from ..core.constants import (
    CONTAINER_ENTRYPOINT,
    DESTROY_WAIT_TIMEOUT,
    SSH_PROTOCOL,
    UNTAGGED_IMAGE_TAG,
)
from ..utils.naming import has_prefix
from .exceptions import (
    ContainerNotFoundError,
    DockerServiceError,
    ImageNotFoundError,
)

logger = logging.getLogger(__name__)


class DockerService:
    """Service for Docker operations with clean abstractions."""

    def __init__(self, url: Optional[str] = None):
        """Initialize Docker service and test connection.

        Args:
            url: Docker engine URL, or None to use DOCKER_HOST. TLS settings
                always come from DOCKER_TLS_VERIFY and DOCKER_CERT_PATH.
        """
        environment = dict(os.environ)
        if url:
            environment["DOCKER_HOST"] = url

        try:
            self.client = docker.from_env(environment=environment)
            self.client.ping()
        except docker.errors.DockerException as e:
            if "connection refused" in str(e).lower() or "cannot connect" in str(e).lower():
                raise DockerServiceError(
                    "Docker daemon is not running. Please start Docker Desktop or the Docker service."
                ) from e
            else:
                raise DockerServiceError(f"Failed to connect to Docker: {e}") from e
        except requests.exceptions.ConnectionError as e:
            raise DockerServiceError(f"Failed to connect to Docker at {url}: {e}") from e

    def list_images(self) -> list[Image]:
        """List images, leaving out untagged ones.

        Returns:
            Images whose tags are anything but the untagged sentinel

        Raises:
            DockerServiceError: If listing fails
        """
        logger.debug("Listing images")
        try:
            images = self.client.images.list()
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to list images: {e}") from e

        return [
            image for image in images
            if image.attrs.get("RepoTags") != [UNTAGGED_IMAGE_TAG]
        ]

    def build_image(self, path: str, tag: str, rm: bool = True) -> Iterator[dict[str, Any]]:
        """Build a Docker image, yielding log chunks as the engine sends them.

        Args:
            path: Path to the build context containing the Dockerfile
            tag: Tag for the image
            rm: Remove intermediate containers after build

        Yields:
            Decoded build log chunks

        Raises:
            DockerServiceError: If the engine rejects the build or reports
                an error in the log stream
        """
        logger.debug(f"Building {path} as {tag}")
        error = None
        try:
            for chunk in self.client.api.build(path=path, tag=tag, rm=rm, decode=True):
                if "error" in chunk:
                    error = chunk["error"]
                yield chunk
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to build image: {e}") from e

        if error:
            raise DockerServiceError(f"Failed to build image: {error}")

    def list_containers(self, prefix: str = "") -> list[Container]:
        """List running containers whose name starts with a prefix.

        Args:
            prefix: Container name prefix

        Returns:
            Matching containers

        Raises:
            DockerServiceError: If listing fails
        """
        logger.debug(f"Listing containers with prefix {prefix!r}")
        try:
            containers = self.client.containers.list()
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to list containers: {e}") from e

        return [c for c in containers if has_prefix(c.name, prefix)]

    def get_container(self, name: str) -> Optional[Container]:
        """Find a container by exact name.

        The engine's name filter is a substring match, so results are
        checked again here.

        Args:
            name: Full container name

        Returns:
            The container, or None if no container has that name

        Raises:
            DockerServiceError: If listing fails
        """
        logger.debug(f"Looking up container {name}")
        try:
            containers = self.client.containers.list(all=True, filters={"name": name})
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to list containers: {e}") from e

        for container in containers:
            if container.name == name:
                return container
        return None

    def create_and_start(self, name: str, image: str, hostname: str) -> Container:
        """Create a pairing container and start it.

        Args:
            name: Full container name
            image: Image name
            hostname: Hostname inside the container

        Returns:
            Started container

        Raises:
            ImageNotFoundError: If image not found
            DockerServiceError: If creation or start fails
        """
        logger.debug(f"Creating container {name} from {image}")
        try:
            container = self.client.containers.create(
                image=image,
                name=name,
                entrypoint=CONTAINER_ENTRYPOINT,
                hostname=hostname,
                publish_all_ports=True,
            )
        except docker.errors.ImageNotFound as e:
            raise ImageNotFoundError(f"Image '{image}' not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to create container: {e}") from e

        self.start_container(container)
        return container

    def start_container(self, container: Container) -> None:
        """Start a container.

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If start fails
        """
        try:
            container.start()
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError("Container not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to start container: {e}") from e

    def destroy_container(self, container: Container) -> list[str]:
        """Kill, wait for and force-remove a container.

        Each step runs even if the previous one failed.

        Args:
            container: Container object

        Returns:
            Messages for the steps that failed
        """
        failures = []

        logger.debug(f"Killing container {container.id}")
        try:
            container.kill()
        except docker.errors.APIError as e:
            logger.debug(f"Kill of {container.id} failed: {e}")
            failures.append(f"Failed to kill container {container.id}")

        logger.debug(f"Waiting up to {DESTROY_WAIT_TIMEOUT}s for container {container.id}")
        try:
            container.wait(timeout=DESTROY_WAIT_TIMEOUT)
        except (docker.errors.APIError, requests.exceptions.RequestException) as e:
            logger.debug(f"Wait for {container.id} failed: {e}")
            failures.append(f"Failed to wait for container {container.id}")

        logger.debug(f"Removing container {container.id}")
        try:
            container.remove(force=True)
        except docker.errors.APIError as e:
            logger.debug(f"Removal of {container.id} failed: {e}")
            failures.append(f"Failed to remove container {container.id}")

        return failures

    def get_host_port(self, container: Container, port: str, protocol: str = SSH_PROTOCOL) -> int:
        """Get the host port published for a container port.

        Args:
            container: Container object
            port: Container port number
            protocol: Port protocol

        Returns:
            First host port bound to port/protocol

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If the port is not published
        """
        try:
            container.reload()
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError("Container not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to inspect container: {e}") from e

        bindings = (container.ports or {}).get(f"{port}/{protocol}")
        if not bindings:
            raise DockerServiceError(
                f"Container {container.name} does not publish port {port}/{protocol}"
            )
        return int(bindings[0]["HostPort"])
