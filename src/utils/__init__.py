"""Utilities package - Flat structure (no nested directories)"""

# Hash utilities
from .hash_utils import hash_string, fingerprint_config, fingerprint_params, generate_fragment_key, generate_tag_key

# URL utilities
from .url_utils import build_url, collect_ids

__all__ = [
    # hash
    "hash_string",
    "fingerprint_config",
    "fingerprint_params",
    "generate_fragment_key",
    "generate_tag_key",
    # url
    "build_url",
    "collect_ids",
]
