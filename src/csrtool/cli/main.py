"""Main CLI entry point for csrtool.

This module provides the main Click command group for the csrtool CLI.
"""

import os
from pathlib import Path
from typing import Optional

import click

from csrtool import __version__
from csrtool.bindings import generate_from_json
from csrtool.cli.generate_commands import generate
from csrtool.config import load_config
from csrtool.logging_audit import configure_logging
from csrtool.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="csrtool")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.option(
    "--redact-secrets",
    is_flag=True,
    help="Redact challenge passwords and private keys from logs",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
    redact_secrets: bool,
) -> None:
    """csrtool - A tool for generating private keys and CSRs.

    Common usage:

        # Generate an RSA 2048 key and CSR
        csrtool generate --common-name example.com

        # EC P-384 key with alternate names
        csrtool generate -n example.com --key-type ec384 --dns-name www.example.com

        # Answer a JSON request document
        csrtool request request.json

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
        ctx.obj["config"] = config_obj
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    ctx.obj["verbose"] = verbose
    ctx.obj["redact_secrets"] = redact_secrets
    ctx.obj["log_file"] = log_file

    # Precedence: CLI flags > config file > defaults
    log_level = "DEBUG" if verbose else config_obj.logging.level
    log_file_path = log_file if log_file else config_obj.logging.log_file
    redact_setting = redact_secrets or config_obj.logging.redact_secrets

    configure_logging(
        level=log_level, log_file=log_file_path, redact_secrets=redact_setting
    )


cli.add_command(generate)


@cli.command()
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def request(json_file: Path) -> None:
    """Generate a key and CSR from a JSON request file.

    Prints the JSON response ({"privateKey", "csr"} or {"error"}) to stdout.
    Exits with 1 when the response carries an error.

    Example:
        csrtool request request.json > response.json
    """
    response = generate_from_json(json_file.read_bytes())
    click.echo(response.to_json())
    if response.error:
        raise click.exceptions.Exit(1)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        csrtool config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)
    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
    click.echo(f"\nConfiguration file: {config_file}")

    click.echo("\nGenerate:")
    click.echo(f"  Key type:    {config_obj.generate.key_type}")
    click.echo(f"  Output key:  {config_obj.generate.output_key}")
    click.echo(f"  Output CSR:  {config_obj.generate.output_csr}")

    subject = config_obj.subject
    click.echo("\nSubject defaults:")
    click.echo(f"  O:   {', '.join(subject.organization) or 'Not configured'}")
    click.echo(f"  OU:  {', '.join(subject.organizational_unit) or 'Not configured'}")
    click.echo(f"  C:   {', '.join(subject.country) or 'Not configured'}")
    click.echo(f"  ST:  {', '.join(subject.province) or 'Not configured'}")
    click.echo(f"  L:   {', '.join(subject.locality) or 'Not configured'}")

    click.echo("\nLogging:")
    click.echo(f"  Level:          {config_obj.logging.level}")
    click.echo(f"  Log file:       {config_obj.logging.log_file}")
    click.echo(f"  Redact secrets: {config_obj.logging.redact_secrets}")


cli.add_command(config)


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"csrtool version {__version__}")
    click.echo(f"Build time: {os.getenv('CSRTOOL_BUILD_TIME', 'unknown')}")
    click.echo(f"Git commit: {os.getenv('CSRTOOL_GIT_COMMIT', 'unknown')}")


if __name__ == "__main__":
    cli()
