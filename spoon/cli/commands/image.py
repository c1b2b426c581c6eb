"""Image actions for spoon."""

import logging
import subprocess
import sys

import click

from spoon.cli.helpers import format_image_table, get_docker_service, print_parsed_response
from ...models.options import SpoonOptions

logger = logging.getLogger(__name__)


def list_images(options: SpoonOptions):
    """List available spoon images"""
    docker_service = get_docker_service(options.url)
    images = docker_service.list_images()

    if not images:
        click.echo("No images found")
        return

    click.echo(format_image_table(images))


def run_pre_build_commands(commands):
    """Run each pre-build command through the shell, stopping on failure."""
    for command in commands:
        logger.debug(f"Running pre-build command: {command}")
        result = subprocess.run(command, shell=True)
        if result.returncode != 0:
            click.echo(
                f"Error: pre-build command failed with exit code {result.returncode}: {command}",
                err=True,
            )
            sys.exit(1)


def build_image(options: SpoonOptions):
    """Build image from Dockerfile using the configured image name"""
    run_pre_build_commands(options.pre_build_commands)
    logger.debug("pre-build commands complete, building Docker image")

    docker_service = get_docker_service(options.url)
    click.echo(f"Building {options.image} from {options.builddir}")

    for chunk in docker_service.build_image(path=str(options.builddir), tag=options.image):
        print_parsed_response(chunk)

    click.echo(f"Image built: {options.image}")
