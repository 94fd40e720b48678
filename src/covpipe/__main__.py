"""Entry point for ``python -m covpipe``."""

from covpipe.cli.main import cli

if __name__ == "__main__":
    cli()
