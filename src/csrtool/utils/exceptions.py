"""Custom exception classes for csrtool.

All exceptions inherit from CSRToolError to allow catching all custom exceptions.
The CSR core raises only CSRError subclasses; the remaining classes belong to
the collaborators around it (key generation and loading, output, configuration).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CSRToolError(Exception):
    """Base exception for all csrtool custom exceptions."""

    pass


class CSRError(CSRToolError):
    """Base exception for failures while building a certificate signing request.

    Attributes:
        stage: Name of the build step that failed (e.g. "subject",
            "public_key_info", "attributes", "request_info", "signature",
            "request", "pem")
    """

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.stage = stage

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage:
            return f"[{self.stage}] {message}"
        return message


class UnsupportedKeyTypeError(CSRError):
    """Raised when the private key is not RSA or EC on P-256/P-384.

    Examples:
        - Ed25519 or Ed448 key
        - DSA key
        - EC key on secp521r1 or secp256k1
    """

    pass


class EncodingError(CSRError):
    """Raised when an ASN.1 marshaling step fails.

    Indicates a programming defect or an unrepresentable input value,
    never a transient condition.

    Examples:
        - Challenge password outside the PrintableString alphabet
        - Subject value that cannot be encoded as UTF-8
        - Re-encoded SubjectPublicKeyInfo differs from the standard encoding
    """

    pass


class SigningError(CSRError):
    """Raised when the underlying signature primitive fails.

    Examples:
        - Entropy source unavailable
        - Backend refused the key/digest combination
    """

    pass


class KeyGenerationError(CSRToolError):
    """Raised when a private key cannot be generated.

    Examples:
        - Unknown key type name
        - Backend failure while generating the key
    """

    pass


class KeyLoadError(CSRToolError):
    """Raised when an existing private key cannot be loaded.

    Examples:
        - Key file not found
        - Invalid PEM format
        - Incorrect password for encrypted key
    """

    pass


class OutputError(CSRToolError):
    """Raised when generated files cannot be written.

    Examples:
        - Output file already exists and overwrite was not requested
        - Permission denied
        - Parent directory cannot be created
    """

    pass


class ConfigurationError(CSRToolError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Invalid configuration file format
        - Unknown key type in defaults
        - Invalid log level
    """

    pass


class ErrorCategory(Enum):
    """Error categorization for handling strategy.

    Attributes:
        TRANSIENT: Caller may retry after a delay (signing primitive failures)
        PERMANENT: Caller must change its input (unsupported key, bad key file)
        CRITICAL: Halt immediately (encoding defects, configuration errors)

    Example:
        >>> category = categorize_error(SigningError("entropy unavailable"))
        >>> category == ErrorCategory.TRANSIENT
        True
    """

    TRANSIENT = "TRANSIENT"
    PERMANENT = "PERMANENT"
    CRITICAL = "CRITICAL"


@dataclass
class ErrorInfo:
    """Structured error information for actionable error handling.

    Attributes:
        category: Error category (TRANSIENT, PERMANENT, CRITICAL)
        error_type: Exception class name (e.g., "SigningError")
        message: User-friendly error message
        remediation: Actionable guidance for resolving the error
        is_retryable: Whether the caller may retry the operation
        stage: CSR build stage that failed, if any
        technical_details: Optional technical details for debugging
    """

    category: ErrorCategory
    error_type: str
    message: str
    remediation: str
    is_retryable: bool
    stage: Optional[str] = None
    technical_details: Optional[str] = None


def categorize_error(exception: Exception) -> ErrorCategory:
    """Categorize exception for error handling strategy.

    Args:
        exception: The exception to categorize

    Returns:
        ErrorCategory indicating handling strategy

    Example:
        >>> categorize_error(UnsupportedKeyTypeError("Ed25519"))
        <ErrorCategory.PERMANENT: 'PERMANENT'>
    """
    if isinstance(exception, SigningError):
        return ErrorCategory.TRANSIENT

    if isinstance(exception, (EncodingError, ConfigurationError)):
        return ErrorCategory.CRITICAL

    # Unsupported keys, unreadable key files and output conflicts are caller errors
    return ErrorCategory.PERMANENT


def create_error_info(exception: Exception) -> ErrorInfo:
    """Create structured error information from exception.

    Args:
        exception: Exception that occurred

    Returns:
        ErrorInfo with categorization and remediation guidance
    """
    category = categorize_error(exception)

    technical_details = None
    if exception.__cause__ is not None:
        technical_details = (
            f"Caused by: {type(exception.__cause__).__name__}: {exception.__cause__}"
        )

    return ErrorInfo(
        category=category,
        error_type=type(exception).__name__,
        message=str(exception),
        remediation=_generate_remediation(exception),
        is_retryable=category == ErrorCategory.TRANSIENT,
        stage=getattr(exception, "stage", None),
        technical_details=technical_details,
    )


def _generate_remediation(exception: Exception) -> str:
    """Generate actionable remediation message for an error.

    Args:
        exception: Exception that occurred

    Returns:
        Actionable remediation message
    """
    if isinstance(exception, UnsupportedKeyTypeError):
        return (
            "Use an RSA key or an EC key on P-256 or P-384. "
            "Generate one with: csrtool generate --key-type ec256"
        )

    if isinstance(exception, SigningError):
        return (
            "The signature primitive failed. Check that the system randomness "
            "source is available and retry."
        )

    if isinstance(exception, EncodingError):
        return (
            "A value could not be encoded. Challenge passwords must only use "
            "letters, digits, spaces and ' ( ) + , - . / : = ?"
        )

    if isinstance(exception, KeyLoadError):
        return (
            "Check the key file path and format (PEM). "
            "If the key is encrypted, provide the correct password."
        )

    if isinstance(exception, OutputError):
        return "Choose another output path or pass --force to overwrite."

    if isinstance(exception, ConfigurationError):
        return (
            "Check config.json for missing or invalid values. "
            "Use examples/config.example.json as template."
        )

    return "Review the error message and re-run with --verbose for details."
