"""Key adapter for CSR building.

Maps a private key onto one of the supported key families and provides the
two operations the encoder needs from it: the SubjectPublicKeyInfo to embed
and a digest-and-sign over the serialized request info.

The public key info is never assembled field by field. The key's standard
X.509 SubjectPublicKeyInfo DER is produced by cryptography, decomposed with
asn1crypto, and the original bytes are embedded unchanged.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from asn1crypto import algos, core
from asn1crypto import keys as asn1_keys
from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from csrtool.models.csr import KeyFamily, PublicKeyInfo
from csrtool.utils.exceptions import EncodingError, SigningError, UnsupportedKeyTypeError

logger = logging.getLogger(__name__)


def _sign_pkcs1v15(
    private_key: Any, message: bytes, hash_algorithm: hashes.HashAlgorithm
) -> bytes:
    return private_key.sign(message, padding.PKCS1v15(), hash_algorithm)


def _sign_ecdsa(
    private_key: Any, message: bytes, hash_algorithm: hashes.HashAlgorithm
) -> bytes:
    # cryptography returns the DER Ecdsa-Sig-Value (r, s)
    return private_key.sign(message, ec.ECDSA(hash_algorithm))


@dataclass(frozen=True)
class SignatureScheme:
    """Signing policy for one key family.

    Attributes:
        algorithm: asn1crypto name of the signature algorithm OID
        hash_factory: Digest applied to the message before signing
        null_parameters: Whether the algorithm identifier carries NULL parameters
        signer: Signature primitive for the family
    """

    algorithm: str
    hash_factory: Callable[[], hashes.HashAlgorithm]
    null_parameters: bool
    signer: Callable[[Any, bytes, hashes.HashAlgorithm], bytes]


# P-384 keeps SHA-256 and ecdsa-with-SHA256
SIGNATURE_SCHEMES: Dict[KeyFamily, SignatureScheme] = {
    KeyFamily.RSA: SignatureScheme(
        algorithm="sha256_rsa",
        hash_factory=hashes.SHA256,
        null_parameters=True,
        signer=_sign_pkcs1v15,
    ),
    KeyFamily.EC_P256: SignatureScheme(
        algorithm="sha256_ecdsa",
        hash_factory=hashes.SHA256,
        null_parameters=False,
        signer=_sign_ecdsa,
    ),
    KeyFamily.EC_P384: SignatureScheme(
        algorithm="sha256_ecdsa",
        hash_factory=hashes.SHA256,
        null_parameters=False,
        signer=_sign_ecdsa,
    ),
}

_CURVE_FAMILIES = {
    ec.SECP256R1.name: KeyFamily.EC_P256,
    ec.SECP384R1.name: KeyFamily.EC_P384,
}


def classify_key(private_key: Any, stage: str = "key") -> KeyFamily:
    """Determine the key family of a private key.

    Args:
        private_key: cryptography private key object
        stage: Build stage reported if the key is rejected

    Returns:
        KeyFamily of the key

    Raises:
        UnsupportedKeyTypeError: If the key is not RSA or EC on P-256/P-384

    Example:
        >>> from cryptography.hazmat.primitives.asymmetric import ec
        >>> classify_key(ec.generate_private_key(ec.SECP256R1()))
        <KeyFamily.EC_P256: 'EC_P256'>
    """
    if isinstance(private_key, rsa.RSAPrivateKey):
        return KeyFamily.RSA

    if isinstance(private_key, ec.EllipticCurvePrivateKey):
        family = _CURVE_FAMILIES.get(private_key.curve.name)
        if family is None:
            raise UnsupportedKeyTypeError(
                f"Unsupported elliptic curve: {private_key.curve.name}. "
                f"Supported curves: P-256 (secp256r1), P-384 (secp384r1)",
                stage=stage,
            )
        return family

    raise UnsupportedKeyTypeError(
        f"Unsupported private key type: {type(private_key).__name__}. "
        f"Supported key types: RSA, EC P-256, EC P-384",
        stage=stage,
    )


def public_key_info(private_key: Any) -> PublicKeyInfo:
    """Derive the SubjectPublicKeyInfo of the key's public half.

    Args:
        private_key: RSA or EC (P-256/P-384) private key

    Returns:
        PublicKeyInfo with algorithm identifier, key bits and the raw DER

    Raises:
        UnsupportedKeyTypeError: If the key family is not supported
        EncodingError: If the standard encoding cannot be decomposed
    """
    family = classify_key(private_key, stage="public_key_info")

    try:
        spki_der = private_key.public_key().public_bytes(
            Encoding.DER, PublicFormat.SubjectPublicKeyInfo
        )
        spki = asn1_keys.PublicKeyInfo.load(spki_der)
        algorithm = spki["algorithm"]
        bit_string = spki["public_key"]
        unused_bits = bit_string.contents[0]
        key_bits = bit_string.contents[1:]
    except (ValueError, TypeError, IndexError) as e:
        raise EncodingError(
            f"Failed to decompose SubjectPublicKeyInfo for {family.value} key: {e}",
            stage="public_key_info",
        ) from e

    if unused_bits != 0 or spki.dump() != spki_der:
        raise EncodingError(
            f"SubjectPublicKeyInfo for {family.value} key does not survive "
            f"re-encoding unchanged",
            stage="public_key_info",
        )

    logger.debug(
        "Derived public key info: family=%s algorithm=%s size=%d bytes",
        family.value,
        algorithm["algorithm"].dotted,
        len(spki_der),
    )
    return PublicKeyInfo(algorithm=algorithm, public_key_bits=key_bits, raw=spki_der)


def signature_algorithm(private_key: Any) -> algos.SignedDigestAlgorithm:
    """Return the signature algorithm identifier used for the key.

    Args:
        private_key: RSA or EC (P-256/P-384) private key

    Returns:
        SignedDigestAlgorithm (sha256WithRSAEncryption with NULL parameters,
        or ecdsa-with-SHA256 without parameters)

    Raises:
        UnsupportedKeyTypeError: If the key family is not supported
    """
    scheme = SIGNATURE_SCHEMES[classify_key(private_key, stage="signature")]
    identifier: Dict[str, Any] = {"algorithm": scheme.algorithm}
    if scheme.null_parameters:
        identifier["parameters"] = core.Null()
    return algos.SignedDigestAlgorithm(identifier)


def sign(
    private_key: Any, message: bytes
) -> Tuple[algos.SignedDigestAlgorithm, bytes]:
    """Digest and sign a message with the key's signature scheme.

    ECDSA consumes fresh randomness for every signature, so two signatures
    over the same message differ. RSA PKCS#1 v1.5 is deterministic.

    Args:
        private_key: RSA or EC (P-256/P-384) private key
        message: Bytes to sign (the DER CertificationRequestInfo)

    Returns:
        Tuple of (signature algorithm identifier, signature bytes)

    Raises:
        UnsupportedKeyTypeError: If the key family is not supported
        SigningError: If the signature primitive fails
    """
    family = classify_key(private_key, stage="signature")
    scheme = SIGNATURE_SCHEMES[family]

    try:
        signature = scheme.signer(private_key, message, scheme.hash_factory())
    except (ValueError, TypeError, UnsupportedAlgorithm, InternalError) as e:
        raise SigningError(
            f"Failed to sign request info with {family.value} key: {e}",
            stage="signature",
        ) from e

    logger.debug(
        "Signed %d bytes with %s (%s)", len(message), family.value, scheme.algorithm
    )
    return signature_algorithm(private_key), signature
