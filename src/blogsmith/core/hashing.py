"""Content hashes identifying hydratable components."""

from __future__ import annotations

import base64
import hashlib


HASH_LENGTH = 24


def component_hash(identity: str) -> str:
    """Return the base64 MD5 digest of a component identity.

    The result is always ``HASH_LENGTH`` characters long and ends with ``==``.
    """
    digest = hashlib.md5(identity.encode("utf-8"), usedforsecurity=False).digest()
    return base64.b64encode(digest).decode("ascii")


def is_component_hash(value: str) -> bool:
    """Check whether ``value`` has the shape of a component hash."""
    if len(value) != HASH_LENGTH or not value.endswith("=="):
        return False
    try:
        return len(base64.b64decode(value, validate=True)) == 16
    except ValueError:
        return False


__all__ = ["HASH_LENGTH", "component_hash", "is_component_hash"]
