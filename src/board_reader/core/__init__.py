"""Core configuration and error types."""

from .errors import MnemonicError, ReaderError, StorageError

__all__ = ["MnemonicError", "ReaderError", "StorageError"]
