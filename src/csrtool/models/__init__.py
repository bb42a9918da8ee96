"""Models module.

This module provides data models and dataclasses for the application.
"""

from csrtool.models.csr import (
    KeyFamily,
    NameAttribute,
    PublicKeyInfo,
    SignedRequest,
    SubjectAttribute,
    SubjectIdentity,
)

__all__ = [
    "KeyFamily",
    "NameAttribute",
    "PublicKeyInfo",
    "SignedRequest",
    "SubjectAttribute",
    "SubjectIdentity",
]
