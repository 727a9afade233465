# src/board_reader/services/__init__.py
"""Read-path services for the board reader."""

from .access import AccessPolicy, Ident
from .reader import Reader

__all__ = ["AccessPolicy", "Ident", "Reader"]
