"""Custom log formatters for csrtool.

This module provides specialized formatters for logging, including redaction
of challenge passwords and private key material.
"""

import logging
import re
from typing import List, Tuple


class SecretRedactingFormatter(logging.Formatter):
    """Formatter that redacts secrets from log messages.

    Masks challenge passwords and PEM private key blocks (any
    ``-----BEGIN ... PRIVATE KEY-----`` armor) when redaction is enabled.

    Attributes:
        redact_secrets: Whether to enable redaction
        patterns: List of (regex_pattern, replacement_text) tuples for redaction

    Example:
        >>> formatter = SecretRedactingFormatter(
        ...     fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        ...     redact_secrets=True
        ... )
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_secrets: bool = False,
    ) -> None:
        """Initialize the SecretRedactingFormatter.

        Args:
            fmt: Log message format string
            datefmt: Date format string (optional)
            redact_secrets: Whether to enable redaction
        """
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_secrets = redact_secrets

        self.patterns: List[Tuple[re.Pattern[str], str]] = [
            # -----BEGIN (ENCRYPTED |RSA |EC )PRIVATE KEY----- ... -----END ...-----
            (
                re.compile(
                    r"-----BEGIN ([A-Z ]*)PRIVATE KEY-----[\s\S]*?-----END \1PRIVATE KEY-----"
                ),
                "[PRIVATE-KEY-REDACTED]",
            ),
            # challenge_password=secret, challengePassword: "secret"
            (
                re.compile(
                    r"(challenge[_ ]?password[\"']?\s*[=:]\s*)[\"']?[^\"'\s,|}]+[\"']?",
                    re.IGNORECASE,
                ),
                r"\1[PASSWORD-REDACTED]",
            ),
        ]

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with optional secret redaction.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with secrets redacted if enabled
        """
        original = super().format(record)

        if self.redact_secrets:
            for pattern, replacement in self.patterns:
                original = pattern.sub(replacement, original)

        return original
