"""JSON request/response binding for CSR generation.

Accepts the same JSON document the browser form submits and answers with
``{"privateKey": ..., "csr": ...}`` or ``{"privateKey": "", "csr": "", "error": ...}``.
"""

import json
import logging
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from csrtool.csr import build_csr
from csrtool.keys import generate_private_key, private_key_to_pem
from csrtool.models import SubjectIdentity
from csrtool.utils.exceptions import CSRToolError

logger = logging.getLogger(__name__)


class CSRRequest(BaseModel):
    """CSR generation request as submitted by a JSON client."""

    model_config = ConfigDict(populate_by_name=True)

    common_name: str = Field(default="", alias="commonName")
    key_type: str = Field(default="rsa2048", alias="keyType")
    country: str = ""
    state: str = ""
    locality: str = ""
    org: str = ""
    org_unit: str = Field(default="", alias="orgUnit")
    dns_names: Optional[List[str]] = Field(default=None, alias="dnsNames")
    challenge_password: str = Field(default="", alias="challengePassword")

    def subject(self) -> SubjectIdentity:
        """Build the subject, omitting empty single-valued fields."""
        return SubjectIdentity.from_fields(
            self.common_name,
            organization=_present(self.org),
            organizational_unit=_present(self.org_unit),
            country=_present(self.country),
            province=_present(self.state),
            locality=_present(self.locality),
        )

    def alternate_names(self) -> List[str]:
        return [name.strip() for name in self.dns_names or [] if name.strip()]


class CSRResponse(BaseModel):
    """Generated key and CSR, or the error that prevented them."""

    model_config = ConfigDict(populate_by_name=True)

    private_key: str = Field(default="", alias="privateKey")
    csr: str = ""
    error: Optional[str] = None

    def to_json(self) -> str:
        """Serialize with camelCase keys; ``error`` is left out on success."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


def _present(value: str) -> List[str]:
    return [value] if value else []


def _failure(message: str) -> CSRResponse:
    logger.error(f"CSR request failed: {message}")
    return CSRResponse(error=message)


def generate_from_json(payload: Union[str, bytes, dict[str, Any]]) -> CSRResponse:
    """Generate a private key and CSR from a JSON request.

    Never raises for bad input; failures are reported in ``error`` with
    ``privateKey`` and ``csr`` left empty.

    Args:
        payload: JSON text, raw JSON bytes (UTF-8, -16 or -32) or an
            already decoded mapping

    Returns:
        CSRResponse

    Example:
        >>> response = generate_from_json('{"commonName": "example.com", "keyType": "ec256"}')
        >>> response.csr.startswith("-----BEGIN CERTIFICATE REQUEST-----")
        True
    """
    try:
        if isinstance(payload, (str, bytes)):
            payload = json.loads(payload)
        if not isinstance(payload, dict):
            return _failure("request must be a JSON object")
        request = CSRRequest.model_validate(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return _failure(f"invalid JSON: {e}")
    except ValidationError as e:
        return _failure(f"invalid request: {e}")

    if not request.common_name.strip():
        return _failure("commonName is required")

    try:
        private_key = generate_private_key(request.key_type)
        csr_pem = build_csr(
            private_key,
            request.subject(),
            alternate_names=request.alternate_names(),
            challenge_password=request.challenge_password,
        )
        key_pem = private_key_to_pem(private_key)
    except CSRToolError as e:
        return _failure(str(e))

    logger.info(f"CSR generated for {request.subject().rfc4514_string()}")
    return CSRResponse(private_key=key_pem.decode("ascii"), csr=csr_pem.decode("ascii"))
