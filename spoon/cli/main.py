"""Main CLI entry point for spoon."""

import logging

import click

from .. import __version__
from ..services.exceptions import ServiceError
from ..utils.config_manager import ConfigManager
from .commands import build_image, connect_instance, destroy_instance, list_images, list_instances
from .helpers import configure_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ['debug', 'info', 'warning', 'error', 'critical']


@click.command(context_settings={'allow_interspersed_args': False})
@click.option('-l', '--list', 'list_flag', is_flag=True, help='List available spoon instances')
@click.option('-d', '--destroy', metavar='NAME', help='Destroy spoon instance with NAME')
@click.option('-b', '--build', 'build_flag', is_flag=True,
              help='Build image from Dockerfile using name passed to --image')
@click.option('--builddir', metavar='DIR', type=click.Path(file_okay=False),
              help='Directory containing Dockerfile')
@click.option('--pre-build-commands', metavar='CMD', multiple=True,
              help='Command to run locally before building image (repeatable)')
@click.option('-u', '--url', metavar='URL', help='Docker url to connect to')
@click.option('-L', '--list-images', 'list_images_flag', is_flag=True, help='List available spoon images')
@click.option('-i', '--image', metavar='NAME', help='Use image for spoon instance')
@click.option('-p', '--prefix', metavar='PREFIX', help='Prefix for container names')
@click.option('-c', '--config', metavar='FILE', type=click.Path(dir_okay=False),
              help='Config file to use for spoon options')
@click.option('--wait-timeout', metavar='SECONDS', type=float,
              help='Give up waiting for the SSH port after SECONDS (default: wait forever)')
@click.option('--debug', is_flag=True, help='Enable debug')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default='warning',
              show_default=True, help='Set the logging level')
@click.version_option(__version__, prog_name='spoon')
@click.argument('instance', required=False)
@click.argument('command', nargs=-1)
@click.pass_context
def cli(ctx, list_flag, destroy, build_flag, builddir, pre_build_commands, url, list_images_flag,
        image, prefix, config, wait_timeout, debug, log_level, instance, command):
    """Create & Connect to pairing environments in Docker

    Connect to INSTANCE, creating it if needed. Any words after INSTANCE are
    run as the remote COMMAND.
    """
    configure_logging(log_level, debug)

    try:
        options = ConfigManager(config).resolve_options({
            'url': url,
            'image': image,
            'prefix': prefix,
            'builddir': builddir,
            'pre_build_commands': list(pre_build_commands) or None,
            'wait_timeout': wait_timeout,
            'debug': debug or None,
        })
        if options.debug and not debug:
            configure_logging(log_level, debug=True)
        logger.debug(f"Options: {options!r}")

        if list_flag:
            list_instances(options)
        elif list_images_flag:
            list_images(options)
        elif build_flag:
            build_image(options)
        elif destroy:
            destroy_instance(options, destroy)
        elif instance:
            status = connect_instance(options, instance, ' '.join(command))
            ctx.exit(status)
        else:
            raise click.UsageError(
                "You either need to provide an action or an instance to connect to", ctx=ctx
            )
    except ServiceError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


if __name__ == '__main__':
    cli()
