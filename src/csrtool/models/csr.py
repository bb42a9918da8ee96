"""Data models for certificate signing requests.

This module defines the subject identity, key families, public key info and
signed request structures shared by the CSR encoder and its collaborators.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from asn1crypto import algos, keys


class SubjectAttribute(Enum):
    """Distinguished name attributes accepted in a CSR subject.

    Values are the asn1crypto attribute type names.
    """

    COMMON_NAME = "common_name"
    ORGANIZATION = "organization_name"
    ORGANIZATIONAL_UNIT = "organizational_unit_name"
    COUNTRY = "country_name"
    PROVINCE = "state_or_province_name"
    LOCALITY = "locality_name"

    @property
    def short_name(self) -> str:
        """Return the RFC 4514 short name (CN, O, OU, C, ST, L)."""
        return _SHORT_NAMES[self]


_SHORT_NAMES = {
    SubjectAttribute.COMMON_NAME: "CN",
    SubjectAttribute.ORGANIZATION: "O",
    SubjectAttribute.ORGANIZATIONAL_UNIT: "OU",
    SubjectAttribute.COUNTRY: "C",
    SubjectAttribute.PROVINCE: "ST",
    SubjectAttribute.LOCALITY: "L",
}


@dataclass(frozen=True)
class NameAttribute:
    """A single attribute of the subject distinguished name.

    Attributes:
        attribute: Attribute type
        value: Attribute value, encoded verbatim
    """

    attribute: SubjectAttribute
    value: str


@dataclass(frozen=True)
class SubjectIdentity:
    """Ordered subject distinguished name.

    The encoded name keeps the order of ``attributes`` exactly. Content is
    not validated or deduplicated.

    Attributes:
        attributes: Name attributes in encoding order

    Example:
        >>> subject = SubjectIdentity.from_fields(
        ...     common_name="example.com",
        ...     organization=["Example Organization"],
        ... )
        >>> subject.rfc4514_string()
        'CN=example.com,O=Example Organization'
    """

    attributes: Tuple[NameAttribute, ...]

    @classmethod
    def from_fields(
        cls,
        common_name: str,
        organization: Iterable[str] = (),
        organizational_unit: Iterable[str] = (),
        country: Iterable[str] = (),
        province: Iterable[str] = (),
        locality: Iterable[str] = (),
    ) -> "SubjectIdentity":
        """Build a subject from individual fields.

        Attributes are ordered CN, O, OU, C, ST, L; repeated values keep
        the order they were given in.

        Args:
            common_name: Common Name (CN)
            organization: Organization (O) values
            organizational_unit: Organizational Unit (OU) values
            country: Country (C) values
            province: State or province (ST) values
            locality: Locality (L) values

        Returns:
            SubjectIdentity with the attributes in field order
        """
        fields = [
            (SubjectAttribute.ORGANIZATION, organization),
            (SubjectAttribute.ORGANIZATIONAL_UNIT, organizational_unit),
            (SubjectAttribute.COUNTRY, country),
            (SubjectAttribute.PROVINCE, province),
            (SubjectAttribute.LOCALITY, locality),
        ]
        attributes = [NameAttribute(SubjectAttribute.COMMON_NAME, common_name)]
        for attribute, values in fields:
            attributes.extend(NameAttribute(attribute, value) for value in values)
        return cls(attributes=tuple(attributes))

    @property
    def common_name(self) -> Optional[str]:
        """Return the first Common Name value, if any."""
        for name_attribute in self.attributes:
            if name_attribute.attribute is SubjectAttribute.COMMON_NAME:
                return name_attribute.value
        return None

    def rfc4514_string(self) -> str:
        """Render the subject for display and logging, in encoding order."""
        return ",".join(
            f"{a.attribute.short_name}={a.value}" for a in self.attributes
        )


class KeyFamily(Enum):
    """Closed set of key families the CSR encoder can sign with."""

    RSA = "RSA"
    EC_P256 = "EC_P256"
    EC_P384 = "EC_P384"


@dataclass(frozen=True)
class PublicKeyInfo:
    """SubjectPublicKeyInfo decomposed from the standard DER encoding.

    Attributes:
        algorithm: Public key algorithm identifier (OID and parameters)
        public_key_bits: Contents of the subjectPublicKey bit string
        raw: The complete SubjectPublicKeyInfo DER, embedded verbatim
    """

    algorithm: keys.PublicKeyAlgorithm
    public_key_bits: bytes
    raw: bytes

    def to_asn1(self) -> keys.PublicKeyInfo:
        """Return an asn1crypto value that dumps to ``raw`` unchanged."""
        return keys.PublicKeyInfo.load(self.raw)


@dataclass(frozen=True)
class SignedRequest:
    """A signed PKCS#10 request.

    Built once per call. The signature covers ``info_der`` exactly; any
    change to the request info requires a rebuild.

    Attributes:
        info_der: DER encoding of CertificationRequestInfo that was signed
        signature_algorithm: Signature algorithm identifier
        signature: Raw signature bytes
        der: DER encoding of the complete CertificationRequest
    """

    info_der: bytes
    signature_algorithm: algos.SignedDigestAlgorithm
    signature: bytes
    der: bytes
