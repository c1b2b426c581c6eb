"""Instance actions for spoon."""

import logging
import sys

import click
from rich.console import Console

from spoon.cli.helpers import get_docker_service
from ...core.constants import SSH_CONTAINER_PORT
from ...core.port_waiter import PortState, wait_for_port
from ...core.ssh import build_ssh_command, run_ssh, ssh_host_from_url
from ...models.options import SpoonOptions
from ...utils.naming import apply_prefix, remove_prefix

logger = logging.getLogger(__name__)


def list_instances(options: SpoonOptions):
    """List available spoon instances"""
    docker_service = get_docker_service(options.url)
    click.echo("List of available spoon containers:")
    for container in docker_service.list_containers(options.prefix):
        click.echo(remove_prefix(container.name, options.prefix))


def destroy_instance(options: SpoonOptions, instance: str):
    """Destroy the spoon instance named instance"""
    console = Console()
    name = apply_prefix(instance, options.prefix)
    docker_service = get_docker_service(options.url)

    container = docker_service.get_container(name)
    if container is None:
        console.print(f"[yellow]No container named: {name}[/yellow]")
        return

    click.echo(f"Destroying {name}")
    for failure in docker_service.destroy_container(container):
        console.print(f"[red]{failure}[/red]")
    click.echo("Done!")


def connect_instance(options: SpoonOptions, instance: str, command: str = "") -> int:
    """Connect to a spoon instance, creating it first if needed.

    Returns:
        Exit status of the ssh session
    """
    console = Console()
    name = apply_prefix(instance, options.prefix)
    docker_service = get_docker_service(options.url)

    container = docker_service.get_container(name)
    if container is None:
        click.echo(f"The `{name}` container doesn't exist, creating...")
        docker_service.create_and_start(name, options.image, hostname=instance)
    elif container.status != "running":
        click.echo(f"The `{name}` container is {container.status}, starting...")
        docker_service.start_container(container)

    # Look the container up again so the port map is current
    container = docker_service.get_container(name)
    if container is None:
        console.print(f"[yellow]No container named: {name}[/yellow]")
        return 0

    click.echo(f"Connecting to `{name}`")
    host = ssh_host_from_url(options.url)
    ssh_port = docker_service.get_host_port(container, SSH_CONTAINER_PORT)
    logger.debug(f"{name} publishes ssh on {host}:{ssh_port}")

    state = wait_for_port(
        host,
        ssh_port,
        timeout=options.wait_timeout,
        on_wait=lambda: click.echo(f"Waiting for {name}:{ssh_port}..."),
    )
    if state is not PortState.READY:
        click.echo(
            f"Error: {name}:{ssh_port} did not become reachable within {options.wait_timeout}s",
            err=True,
        )
        sys.exit(1)

    ssh_command = build_ssh_command(
        host,
        ssh_port,
        command=command or options.command,
        strict_host_key_checking=options.strict_host_key_checking,
    )
    try:
        return run_ssh(ssh_command)
    except FileNotFoundError:
        click.echo("Error: ssh executable not found on PATH", err=True)
        sys.exit(1)
