"""Programmatic CSR generation example.

This module demonstrates building a CSR with the library API for a key the
caller generated itself, and how to react to the different error categories.
"""

import logging
from pathlib import Path

from cryptography.hazmat.primitives.asymmetric import rsa

from csrtool.csr import build_csr
from csrtool.models import SubjectIdentity
from csrtool.utils.exceptions import CSRError, ErrorCategory, create_error_info
from csrtool.utils.output_manager import OutputManager, OutputPaths

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main() -> None:
    # Any RSA key or EC key on P-256/P-384 can be used
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

    subject = SubjectIdentity.from_fields(
        common_name="example.com",
        organization=["Example Organization"],
        organizational_unit=["Example Unit"],
        country=["US"],
        province=["California"],
        locality=["San Francisco"],
    )

    try:
        csr_pem = build_csr(
            private_key,
            subject,
            alternate_names=["example.com", "www.example.com"],
            challenge_password="hello321",
        )
    except CSRError as e:
        error_info = create_error_info(e)
        logger.error(f"CSR generation failed: {error_info.message}")
        if error_info.category == ErrorCategory.TRANSIENT:
            logger.info("The signing failure may be retried")
        logger.info(f"Remediation: {error_info.remediation}")
        raise

    manager = OutputManager(
        OutputPaths(key_path=Path("example.key"), csr_path=Path("example.csr")),
        overwrite=True,
    )
    manager.write_csr(csr_pem)
    print("CSR generated successfully and saved to example.csr")


if __name__ == "__main__":
    main()
