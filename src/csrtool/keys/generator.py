"""Private key generation for the CSR workflow.

Offers the four fixed key types of the command line tool. The CSR encoder
itself never generates keys; it only accepts one.
"""

import logging
from enum import Enum
from typing import Any, Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import Encoding, PrivateFormat

from csrtool.utils.exceptions import KeyGenerationError

logger = logging.getLogger(__name__)

RSA_PUBLIC_EXPONENT = 65537


class KeyType(Enum):
    """Key types the generator can produce."""

    RSA2048 = "rsa2048"
    RSA4096 = "rsa4096"
    EC256 = "ec256"
    EC384 = "ec384"

    @classmethod
    def parse(cls, value: str) -> "KeyType":
        """Parse a key type name, case-insensitively.

        Args:
            value: Key type name (rsa2048, rsa4096, ec256, ec384)

        Returns:
            Matching KeyType

        Raises:
            KeyGenerationError: If the name is not a known key type
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise KeyGenerationError(
                f"Unsupported key type: {value}. "
                f"Must be one of: {', '.join(k.value for k in cls)}"
            )


def generate_private_key(key_type: KeyType | str) -> Any:
    """Generate a new private key of the given type.

    Args:
        key_type: KeyType or its name

    Returns:
        cryptography RSA or EC private key

    Raises:
        KeyGenerationError: If the type is unknown or generation fails

    Example:
        >>> key = generate_private_key("ec256")
        >>> key.curve.name
        'secp256r1'
    """
    if isinstance(key_type, str):
        key_type = KeyType.parse(key_type)

    try:
        if key_type is KeyType.RSA2048:
            key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=2048)
        elif key_type is KeyType.RSA4096:
            key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=4096)
        elif key_type is KeyType.EC256:
            key = ec.generate_private_key(ec.SECP256R1())
        else:
            key = ec.generate_private_key(ec.SECP384R1())
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyGenerationError(f"Failed to generate {key_type.value} key: {e}") from e

    logger.info(f"Generated {key_type.value} private key")
    return key


def private_key_to_pem(private_key: Any, password: Optional[bytes] = None) -> bytes:
    """Serialize a private key as PKCS#8 PEM ("PRIVATE KEY").

    Args:
        private_key: Private key to serialize
        password: Optional password to encrypt the key

    Returns:
        Private key in PEM format as bytes
    """
    encryption = (
        serialization.BestAvailableEncryption(password)
        if password
        else serialization.NoEncryption()
    )

    return private_key.private_bytes(
        encoding=Encoding.PEM,
        format=PrivateFormat.PKCS8,
        encryption_algorithm=encryption,
    )
