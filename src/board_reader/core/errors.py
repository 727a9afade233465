"""Exceptions raised by the read path.

Only storage failures escape the reader. Missing and forbidden records are
reported as ``None`` so callers cannot tell them apart.
"""

from __future__ import annotations


class ReaderError(RuntimeError):
    """Base exception raised for read-path failures."""


class StorageError(ReaderError):
    """Raised when the underlying store fails to execute a query.

    This is never folded into the "not found" outcome; the request-handling
    layer surfaces it as a service error.
    """


class MnemonicError(ValueError):
    """Raised when a mnemonic cannot be derived from a stored address."""
