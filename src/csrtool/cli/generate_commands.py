"""Generate CLI command module.

This module provides the ``generate`` command: create (or load) a private key,
build a PKCS#10 CSR for it and write both to disk.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Tuple

import click

from csrtool.config.schema import Config
from csrtool.csr import build_csr, classify_key
from csrtool.keys import (
    KeyType,
    generate_private_key,
    load_pem_private_key,
    private_key_to_pem,
)
from csrtool.logging_audit import log_audit_event
from csrtool.models import SubjectIdentity
from csrtool.utils.exceptions import CSRToolError, create_error_info
from csrtool.utils.output_manager import OutputManager, OutputPaths

logger = logging.getLogger(__name__)


def _merge(cli_values: Tuple[str, ...], defaults: list[str]) -> list[str]:
    """Command line values win; config defaults apply only when none were given."""
    values = list(cli_values) if cli_values else list(defaults)
    return [v for v in values if v]


@click.command(name="generate")
@click.option(
    "--common-name",
    "-n",
    required=True,
    help="Common Name (CN) for the certificate",
)
@click.option(
    "--key-type",
    type=click.Choice([k.value for k in KeyType], case_sensitive=False),
    default=None,
    help="Type of key to generate (default from config: rsa2048)",
)
@click.option(
    "--key",
    "key_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Use an existing PEM private key instead of generating one",
)
@click.option(
    "--output-key",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file for the private key (default: private.key)",
)
@click.option(
    "--output-csr",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file for the CSR (default: request.csr)",
)
@click.option("--organization", "-o", multiple=True, help="Organization (O)")
@click.option("--organizational-unit", multiple=True, help="Organizational Unit (OU)")
@click.option("--country", multiple=True, help="Country (C)")
@click.option("--province", multiple=True, help="Province/State (ST)")
@click.option("--locality", multiple=True, help="Locality (L)")
@click.option("--dns-name", "dns_names", multiple=True, help="DNS name (subjectAltName)")
@click.option(
    "--challenge-password",
    default="",
    help="Challenge password for the CSR (PrintableString characters only)",
)
@click.option("--force", is_flag=True, help="Overwrite existing output files")
@click.pass_context
def generate(
    ctx: click.Context,
    common_name: str,
    key_type: Optional[str],
    key_file: Optional[Path],
    output_key: Optional[Path],
    output_csr: Optional[Path],
    organization: Tuple[str, ...],
    organizational_unit: Tuple[str, ...],
    country: Tuple[str, ...],
    province: Tuple[str, ...],
    locality: Tuple[str, ...],
    dns_names: Tuple[str, ...],
    challenge_password: str,
    force: bool,
) -> None:
    """Generate a new private key and CSR.

    Exit Codes:
        0: Success
        1: Invalid input, key, encoding or output error

    Examples:
        # RSA 2048 key and CSR in the current directory
        $ csrtool generate --common-name example.com

        # EC P-256 key with subject and alternate names
        $ csrtool generate -n example.com --key-type ec256 -o "Example Org" \\
            --country US --dns-name example.com --dns-name www.example.com

        # CSR for an existing key (the key file is not rewritten)
        $ csrtool generate -n example.com --key existing.key --output-csr new.csr
    """
    start_time = time.time()
    config: Config = (ctx.obj or {}).get("config") or Config()

    if not common_name.strip():
        click.echo("Error: --common-name must not be empty", err=True)
        raise click.exceptions.Exit(1)

    subject_defaults = config.subject
    subject = SubjectIdentity.from_fields(
        common_name,
        organization=_merge(organization, subject_defaults.organization),
        organizational_unit=_merge(
            organizational_unit, subject_defaults.organizational_unit
        ),
        country=_merge(country, subject_defaults.country),
        province=_merge(province, subject_defaults.province),
        locality=_merge(locality, subject_defaults.locality),
    )
    alternate_names = [name.strip() for name in dns_names if name.strip()]

    paths = OutputPaths(
        key_path=output_key or config.generate.output_key,
        csr_path=output_csr or config.generate.output_csr,
    )
    # An existing key is not rewritten, so only the CSR path is checked for it
    if key_file is not None:
        paths.key_path = key_file

    effective_key_type = (key_type or config.generate.key_type).lower()
    audit_key_type = effective_key_type

    try:
        manager = OutputManager(paths, overwrite=force)

        if key_file is not None:
            manager.check_writable(include_key=False)
            private_key = load_pem_private_key(key_file)
            audit_key_type = classify_key(private_key).value
        else:
            manager.check_writable()
            private_key = generate_private_key(effective_key_type)

        csr_pem = build_csr(
            private_key,
            subject,
            alternate_names=alternate_names,
            challenge_password=challenge_password,
        )

        if key_file is None:
            manager.write_private_key(private_key_to_pem(private_key))
            click.echo(f"Private key saved to: {paths.key_path}")
        manager.write_csr(csr_pem)
        click.echo(f"CSR saved to: {paths.csr_path}")

    except CSRToolError as e:
        error_info = create_error_info(e)
        log_audit_event(
            "CSR_FAILED",
            {
                "status": "failure",
                "subject": subject.rfc4514_string(),
                "key_type": audit_key_type,
                "duration": time.time() - start_time,
                "error_message": str(e),
            },
        )
        click.echo(click.style("✗", fg="red", bold=True) + f" {e}", err=True)
        click.echo(f"Fix: {error_info.remediation}", err=True)
        raise click.exceptions.Exit(1)

    log_audit_event(
        "CSR_GENERATED",
        {
            "status": "success",
            "subject": subject.rfc4514_string(),
            "key_type": audit_key_type,
            "output_file": str(paths.csr_path),
            "duration": time.time() - start_time,
        },
    )
