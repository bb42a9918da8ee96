"""Allow running csrtool as ``python -m csrtool``."""

from csrtool.cli.main import cli

if __name__ == "__main__":
    cli()
