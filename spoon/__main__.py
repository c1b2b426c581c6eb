"""Allow running spoon with python -m spoon."""

from spoon.cli.main import cli

if __name__ == '__main__':
    cli()
