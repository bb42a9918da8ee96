"""Keys module.

This module provides private key generation, serialization and loading.
"""

from csrtool.keys.generator import KeyType, generate_private_key, private_key_to_pem
from csrtool.keys.loader import load_pem_private_key

__all__ = [
    "KeyType",
    "generate_private_key",
    "load_pem_private_key",
    "private_key_to_pem",
]
