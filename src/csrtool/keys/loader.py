"""Loading existing private keys for CSR generation."""

import logging
from pathlib import Path
from typing import Any, Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from csrtool.utils.exceptions import KeyLoadError

logger = logging.getLogger(__name__)


def load_pem_private_key(key_path: Path, password: Optional[bytes] = None) -> Any:
    """Load private key from PEM file.

    Any key type cryptography understands is returned; the CSR encoder
    decides whether it can sign with it.

    Args:
        key_path: Path to PEM private key file
        password: Optional password for encrypted private key

    Returns:
        Loaded private key

    Raises:
        KeyLoadError: If private key cannot be loaded

    Example:
        >>> key = load_pem_private_key(Path("private.key"))
        >>> print(f"Key size: {key.key_size}")
    """
    if not key_path.exists():
        raise KeyLoadError(
            f"Private key file not found: {key_path}. "
            f"Ensure the file exists and path is correct."
        )

    try:
        key_data = key_path.read_bytes()
    except OSError as e:
        raise KeyLoadError(f"Failed to read private key file {key_path}: {e}") from e

    try:
        private_key = serialization.load_pem_private_key(key_data, password=password)
    except TypeError as e:
        raise KeyLoadError(
            f"Failed to load private key from {key_path}: Incorrect password. "
            f"If key is encrypted, provide correct password."
        ) from e
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyLoadError(
            f"Failed to load PEM private key from {key_path}: {e}. "
            f"Ensure file is valid PEM format and password is correct if encrypted."
        ) from e

    logger.info(f"Loaded PEM private key from: {key_path.name}")
    # Never log private key contents

    return private_key
