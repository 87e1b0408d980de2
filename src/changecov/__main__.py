"""Allow ``python -m changecov``."""

from changecov.cli.main import cli

if __name__ == "__main__":
    cli()
