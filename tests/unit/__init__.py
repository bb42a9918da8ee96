"""
Unit tests package.

Covers the CSR encoder, key handling, configuration, logging and CLI
modules of csrtool in isolation.
"""
