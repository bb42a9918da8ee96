"""PKCS#10 certificate signing request encoder.

Builds the CertificationRequestInfo from a subject, the key's public key info
and the PKCS#9 attributes, signs its DER encoding once, and wraps the signed
bytes into the outer CertificationRequest (RFC 2986).

The request info is serialized exactly once. The same bytes are signed and
re-embedded in the outer structure, so the signature always covers what is
emitted.
"""

import logging
import string
from typing import Any, List, Sequence

from asn1crypto import csr as asn1_csr
from asn1crypto import pem
from asn1crypto import x509 as asn1_x509

from csrtool.csr import keys
from csrtool.models.csr import SignedRequest, SubjectIdentity
from csrtool.utils.exceptions import EncodingError

logger = logging.getLogger(__name__)

PEM_LABEL = "CERTIFICATE REQUEST"

# X.680 PrintableString alphabet plus '*', which wildcard names rely on
PRINTABLE_CHARACTERS = frozenset(string.ascii_letters + string.digits + " '()*+,-./:=?")


def _directory_string(value: str) -> asn1_x509.DirectoryString:
    if all(c in PRINTABLE_CHARACTERS for c in value):
        return asn1_x509.DirectoryString(name="printable_string", value=value)
    return asn1_x509.DirectoryString(name="utf8_string", value=value)


def encode_subject(subject: SubjectIdentity) -> bytes:
    """Encode a subject as a DER Name (RDNSequence).

    Each attribute becomes its own single-valued RDN, in the order the
    subject lists them. Values use PrintableString when possible and
    UTF8String otherwise.

    Args:
        subject: Subject identity to encode

    Returns:
        DER encoding of the Name

    Raises:
        EncodingError: If a value cannot be represented

    Example:
        >>> subject = SubjectIdentity.from_fields(common_name="example.com")
        >>> encode_subject(subject)[:2]
        b'0\\x16'
    """
    try:
        rdns = [
            asn1_x509.RelativeDistinguishedName(
                [
                    asn1_x509.NameTypeAndValue(
                        {
                            "type": name_attribute.attribute.value,
                            "value": _directory_string(name_attribute.value),
                        }
                    )
                ]
            )
            for name_attribute in subject.attributes
        ]
        return asn1_x509.Name(name="", value=asn1_x509.RDNSequence(rdns)).dump()
    except (ValueError, TypeError) as e:
        raise EncodingError(
            f"Failed to encode subject '{subject.rfc4514_string()}': {e}",
            stage="subject",
        ) from e


def build_attributes(
    alternate_names: Sequence[str] = (), challenge_password: str = ""
) -> asn1_csr.CRIAttributes:
    """Build the PKCS#9 attribute set of the request.

    - challengePassword (1.2.840.113549.1.9.7) with a single PrintableString
      value, when ``challenge_password`` is non-empty.
    - extensionRequest (1.2.840.113549.1.9.14) holding a subjectAltName
      extension with one dNSName per entry, when ``alternate_names`` is
      non-empty. Internationalized names are converted to their IDNA
      A-label form (``bücher.de`` becomes ``xn--bcher-kva.de``).

    With neither, the result is an empty set (still encoded as ``[0]``).

    Args:
        alternate_names: DNS names for the subjectAltName extension
        challenge_password: Challenge password; empty means absent

    Returns:
        CRIAttributes set

    Raises:
        EncodingError: If the password is not a valid PrintableString or a
            DNS name cannot be converted to IDNA (e.g. a label longer than
            63 characters)
    """
    attributes: List[asn1_csr.CRIAttribute] = []

    if challenge_password:
        invalid = sorted({c for c in challenge_password if c not in PRINTABLE_CHARACTERS})
        if invalid:
            raise EncodingError(
                f"Challenge password contains characters outside the "
                f"PrintableString alphabet: {''.join(invalid)!r}",
                stage="attributes",
            )
        attributes.append(
            asn1_csr.CRIAttribute(
                {
                    "type": "challenge_password",
                    "values": [
                        asn1_x509.DirectoryString(
                            name="printable_string", value=challenge_password
                        )
                    ],
                }
            )
        )

    if alternate_names:
        try:
            general_names = [
                asn1_x509.GeneralName(name="dns_name", value=dns_name)
                for dns_name in alternate_names
            ]
            san_extension = asn1_x509.Extension(
                {"extn_id": "subject_alt_name", "extn_value": general_names}
            )
            attributes.append(
                asn1_csr.CRIAttribute(
                    {
                        "type": "extension_request",
                        "values": asn1_csr.SetOfExtensions([[san_extension]]),
                    }
                )
            )
        except (ValueError, TypeError) as e:
            raise EncodingError(
                f"Failed to encode alternate names {list(alternate_names)}: {e}",
                stage="attributes",
            ) from e

    # SET OF members are DER-sorted by asn1crypto when dumped
    return asn1_csr.CRIAttributes(attributes)


def build_signed_request(
    private_key: Any,
    subject: SubjectIdentity,
    alternate_names: Sequence[str] = (),
    challenge_password: str = "",
) -> SignedRequest:
    """Build and sign a PKCS#10 CertificationRequest.

    Args:
        private_key: RSA or EC (P-256/P-384) private key
        subject: Subject identity, encoded in the given order
        alternate_names: DNS names for the subjectAltName extension request
        challenge_password: Challenge password; empty means absent

    Returns:
        SignedRequest with the signed info bytes and the complete DER

    Raises:
        UnsupportedKeyTypeError: If the key family is not supported
        EncodingError: If any ASN.1 marshal step fails
        SigningError: If the signature primitive fails
    """
    subject_der = encode_subject(subject)
    key_info = keys.public_key_info(private_key)
    attributes = build_attributes(alternate_names, challenge_password)

    try:
        info_der = asn1_csr.CertificationRequestInfo(
            {
                "version": "v1",
                "subject": asn1_x509.Name.load(subject_der),
                "subject_pk_info": key_info.to_asn1(),
                "attributes": attributes,
            }
        ).dump()
    except (ValueError, TypeError) as e:
        raise EncodingError(
            f"Failed to encode CertificationRequestInfo: {e}", stage="request_info"
        ) from e

    signature_algorithm, signature = keys.sign(private_key, info_der)

    try:
        request_der = asn1_csr.CertificationRequest(
            {
                "certification_request_info": asn1_csr.CertificationRequestInfo.load(
                    info_der
                ),
                "signature_algorithm": signature_algorithm,
                "signature": signature,
            }
        ).dump()
    except (ValueError, TypeError) as e:
        raise EncodingError(
            f"Failed to encode CertificationRequest: {e}", stage="request"
        ) from e

    logger.debug(
        "Built CSR for %s: info=%d bytes, request=%d bytes, attributes=%d",
        subject.rfc4514_string(),
        len(info_der),
        len(request_der),
        len(attributes),
    )
    return SignedRequest(
        info_der=info_der,
        signature_algorithm=signature_algorithm,
        signature=signature,
        der=request_der,
    )


def build_csr(
    private_key: Any,
    subject: SubjectIdentity,
    alternate_names: Sequence[str] = (),
    challenge_password: str = "",
) -> bytes:
    """Build, sign and PEM-armor a certificate signing request.

    Args:
        private_key: RSA or EC (P-256/P-384) private key
        subject: Subject identity, encoded in the given order
        alternate_names: DNS names for the subjectAltName extension request
        challenge_password: Challenge password; empty means absent

    Returns:
        PEM bytes with a single CERTIFICATE REQUEST block

    Raises:
        UnsupportedKeyTypeError: If the key family is not supported
        EncodingError: If any ASN.1 marshal step fails
        SigningError: If the signature primitive fails

    Example:
        >>> from cryptography.hazmat.primitives.asymmetric import ec
        >>> key = ec.generate_private_key(ec.SECP256R1())
        >>> subject = SubjectIdentity.from_fields(common_name="example.com")
        >>> build_csr(key, subject).startswith(b"-----BEGIN CERTIFICATE REQUEST-----")
        True
    """
    signed_request = build_signed_request(
        private_key, subject, alternate_names, challenge_password
    )
    return pem.armor(PEM_LABEL, signed_request.der)
