"""CLI Helper Functions for spoon.

This module provides reusable helper functions for the spoon actions so they
share error handling and output formatting:
- Docker connection setup
- Logging setup
- Build log printing
- Table formatting for image lists
"""

import logging
import sys
from typing import Any, List, Optional, Union

import click
from tabulate import tabulate

from spoon.services.docker_service import DockerService
from spoon.services.exceptions import DockerServiceError


def get_docker_service(url: str) -> DockerService:
    """Initialize Docker service with error handling.

    Args:
        url: Docker engine URL

    Returns:
        DockerService instance

    Note:
        Exits with error message if Docker is not available.
    """
    try:
        return DockerService(url)
    except DockerServiceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


_log_handler: Optional[logging.Handler] = None


def configure_logging(log_level: str = "warning", debug: bool = False) -> None:
    """Set up root logging for a spoon run.

    Records from the docker SDK and urllib3 go through the same handler, so
    --debug shows the engine requests as well.

    Args:
        log_level: Level name chosen with --log-level
        debug: Force DEBUG regardless of log_level
    """
    global _log_handler

    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.WARNING)
    root = logging.getLogger()
    if _log_handler is not None:
        root.removeHandler(_log_handler)

    _log_handler = logging.StreamHandler()
    _log_handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    root.addHandler(_log_handler)
    root.setLevel(level)


def print_parsed_response(response: Union[dict, list, Any]) -> None:
    """Print a decoded Docker build response.

    ``stream`` values are printed as-is, every other key as ``key: value``.
    Lists are printed element by element.
    """
    if isinstance(response, dict):
        for key, value in response.items():
            if key == "stream":
                click.echo(value, nl=not str(value).endswith("\n"))
            else:
                click.echo(f"{key}: {value}")
    elif isinstance(response, list):
        for item in response:
            print_parsed_response(item)


def format_image_table(
    images: List[Any],
    headers: Optional[List[str]] = None,
) -> str:
    """Format images as a table.

    Args:
        images: Docker image objects
        headers: Column headers

    Returns:
        Formatted table string
    """
    if headers is None:
        headers = ["Image ID", "Tags"]

    rows = []
    for image in images:
        tags = image.attrs.get("RepoTags") or []
        rows.append([image.short_id, ", ".join(tags)])

    return tabulate(rows, headers=headers, tablefmt="simple")
