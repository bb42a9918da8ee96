"""Utils module.

This module provides shared exceptions and file output helpers.
"""
