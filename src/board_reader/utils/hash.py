"""Hashing helpers built on BLAKE3."""

from __future__ import annotations

from blake3 import blake3


def blake3_digest(data: bytes) -> bytes:
    """Return the byte digest of the supplied data."""
    return blake3(data).digest()
