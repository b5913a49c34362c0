"""
Identifier derivation for attachments and resources.
"""

import hashlib

ID_LENGTH = 16


def content_id(data: bytes) -> str:
    """Derive a stable id from raw bytes.

    Args:
        data: Full content to hash

    Returns:
        First 16 hex characters of the SHA-256 digest
    """
    return hashlib.sha256(data).hexdigest()[:ID_LENGTH]


def path_id(path: str) -> str:
    """Derive an id from a filesystem path string (not the file's content)."""
    return content_id(path.encode('utf-8'))
