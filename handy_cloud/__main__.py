"""Entry point: python -m handy_cloud."""

from handy_cloud.cli.main import cli


if __name__ == "__main__":
    cli()
