"""Allow running containerdev as ``python -m containerdev``."""

from .cli.main import cli

if __name__ == '__main__':
    cli()
