"""CSR module.

This module provides the PKCS#10 encoder and the key adapter it signs with.
"""

from csrtool.csr.encoder import (
    PEM_LABEL,
    build_attributes,
    build_csr,
    build_signed_request,
    encode_subject,
)
from csrtool.csr.keys import classify_key, public_key_info, sign, signature_algorithm

__all__ = [
    "PEM_LABEL",
    "build_attributes",
    "build_csr",
    "build_signed_request",
    "classify_key",
    "encode_subject",
    "public_key_info",
    "sign",
    "signature_algorithm",
]
