"""csrtool - private key and PKCS#10 certificate signing request generator."""

__version__ = "0.1.0"
