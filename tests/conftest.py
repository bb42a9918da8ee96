"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across all test suites
(unit and integration tests).
"""

from pathlib import Path
from typing import Any

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from csrtool.models import SubjectIdentity


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def src_dir(project_root: Path) -> Path:
    """
    Return the src directory path.

    Args:
        project_root: Project root directory fixture.

    Returns:
        Path: Absolute path to the src directory.
    """
    return project_root / "src"


@pytest.fixture
def tests_dir(project_root: Path) -> Path:
    """
    Return the tests directory path.

    Args:
        project_root: Project root directory fixture.

    Returns:
        Path: Absolute path to the tests directory.
    """
    return project_root / "tests"


# Keys are expensive to generate (RSA especially), so they are shared per session.


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    """RSA 2048 private key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec256_key() -> ec.EllipticCurvePrivateKey:
    """EC P-256 private key."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec384_key() -> ec.EllipticCurvePrivateKey:
    """EC P-384 private key."""
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def ed25519_key() -> ed25519.Ed25519PrivateKey:
    """Ed25519 private key (not supported by the CSR encoder)."""
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture(params=["rsa", "ec256", "ec384"])
def supported_key(
    request: pytest.FixtureRequest,
    rsa_key: Any,
    ec256_key: Any,
    ec384_key: Any,
) -> Any:
    """Each supported key family in turn."""
    return {"rsa": rsa_key, "ec256": ec256_key, "ec384": ec384_key}[request.param]


@pytest.fixture
def basic_subject() -> SubjectIdentity:
    """Subject with a Common Name and an Organization."""
    return SubjectIdentity.from_fields(
        common_name="example.com",
        organization=["Example Organization"],
    )


@pytest.fixture
def key_pem_file(tmp_path: Path, ec256_key: Any) -> Path:
    """Unencrypted PKCS#8 PEM file holding the P-256 key."""
    key_file = tmp_path / "existing.key"
    key_file.write_bytes(
        ec256_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return key_file
