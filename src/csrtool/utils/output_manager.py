"""Output file management for generated keys and CSRs.

Private keys are written owner-readable only (0600); CSRs are public (0644).
Existing files are never replaced unless overwrite is requested.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from csrtool.utils.exceptions import OutputError

logger = logging.getLogger(__name__)

PRIVATE_KEY_MODE = 0o600
CSR_MODE = 0o644


@dataclass
class OutputPaths:
    """Destination paths for one generate run.

    Attributes:
        key_path: Where the PEM private key is written
        csr_path: Where the PEM CSR is written
    """

    key_path: Path
    csr_path: Path

    def existing(self, include_key: bool = True) -> list[Path]:
        """Return the output paths that already exist."""
        candidates = (self.key_path, self.csr_path) if include_key else (self.csr_path,)
        return [p for p in candidates if p.exists()]


class OutputManager:
    """Writes generated key and CSR files with the right permissions.

    Attributes:
        paths: OutputPaths for this run
        overwrite: Whether existing files may be replaced

    Example:
        >>> manager = OutputManager(OutputPaths(Path("private.key"), Path("request.csr")))
        >>> manager.check_writable()
        >>> manager.write_private_key(key_pem)
        >>> manager.write_csr(csr_pem)
    """

    def __init__(self, paths: OutputPaths, overwrite: bool = False) -> None:
        self.paths = paths
        self.overwrite = overwrite
        logger.debug(
            "OutputManager initialized: key=%s csr=%s overwrite=%s",
            paths.key_path,
            paths.csr_path,
            overwrite,
        )

    def check_writable(self, include_key: bool = True) -> None:
        """Fail early if any output file exists and overwrite is off.

        Args:
            include_key: False when an existing key is reused and only the
                CSR will be written

        Raises:
            OutputError: If an output file already exists
        """
        if self.overwrite:
            return
        existing = self.paths.existing(include_key)
        if existing:
            raise OutputError(
                f"Output file already exists: {', '.join(str(p) for p in existing)}. "
                f"Use --force to overwrite."
            )

    def write_private_key(self, pem: bytes) -> Path:
        """Write the PEM private key with mode 0600.

        Args:
            pem: PEM-encoded private key

        Returns:
            Path to the written file

        Raises:
            OutputError: If the file exists (without overwrite) or cannot be written
        """
        self._write(self.paths.key_path, pem, PRIVATE_KEY_MODE)
        logger.info("Private key saved to: %s", self.paths.key_path)
        return self.paths.key_path

    def write_csr(self, pem: bytes) -> Path:
        """Write the PEM CSR with mode 0644.

        Args:
            pem: PEM-encoded certificate signing request

        Returns:
            Path to the written file

        Raises:
            OutputError: If the file exists (without overwrite) or cannot be written
        """
        self._write(self.paths.csr_path, pem, CSR_MODE)
        logger.info("CSR saved to: %s", self.paths.csr_path)
        return self.paths.csr_path

    def _write(self, path: Path, data: bytes, mode: int) -> None:
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
        if not self.overwrite:
            flags |= os.O_EXCL

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(path, flags, mode)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            # umask or a pre-existing file may have left other bits set
            os.chmod(path, mode)
        except FileExistsError as e:
            raise OutputError(
                f"Output file already exists: {path}. Use --force to overwrite."
            ) from e
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            raise OutputError(
                f"Failed to write output file: {path}. "
                f"Ensure write permissions are available. Error: {e}"
            ) from e

        logger.debug("Wrote %d bytes to %s (mode %o)", len(data), path, mode)
