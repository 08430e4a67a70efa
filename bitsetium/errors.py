# bitsetium/errors.py
"""
Bitset Error Types
==================

Every failure the library can raise is one of two fatal classes:

  1. Checked precondition violation: a mutating call received an index
     beyond the statically declared bound of the value.
  2. Structurally unsupported operation: the value's type parameters
     cannot honour the request (e.g. unsetting a layered bitset whose
     bottom segments cannot re-test emptiness).

Queries (test, search, subset, disjoint) and the composition operators are
total and never raise.

Error Hierarchy
───────────────
┌─────────────────────────────────────────────────────────────────────┐
│  BitsetError (base)                                                 │
│  ├── IndexOutOfBoundsError     BITS-1001  (also an IndexError)      │
│  ├── UnsupportedOperationError BITS-2001  (also a TypeError)        │
│  ├── ConfigurationError        BITS-3001  (also a ValueError)       │
│  └── ExpressionError           BITS-4001  (also a ValueError)       │
└─────────────────────────────────────────────────────────────────────┘

The secondary built-in base lets callers that only know the standard
exception types keep working (``except IndexError`` catches an
out-of-range ``set``).
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Optional


# ═══════════════════════════════════════════════════════════════════════════
# ERROR CODES
# ═══════════════════════════════════════════════════════════════════════════

@unique
class ErrorCode(Enum):
    """
    Stable error codes, ``BITS-NNNN``.

    Ranges:
      - 1000-1999: index bound violations
      - 2000-2999: structurally unsupported operations
      - 3000-3999: type parameter / configuration errors
      - 4000-4999: set-expression errors
    """

    INDEX_OUT_OF_BOUNDS = 1001
    UNSUPPORTED_OPERATION = 2001
    INVALID_CONFIGURATION = 3001
    MALFORMED_EXPRESSION = 4001

    @property
    def code(self) -> str:
        return f"BITS-{self.value:04d}"

    def __str__(self) -> str:
        return self.code


# ═══════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════

class BitsetError(Exception):
    """
    Base exception for all bitset errors.

    Carries a structured ``ErrorCode`` and an optional hint shown after
    the message.
    """

    default_code: ErrorCode = ErrorCode.UNSUPPORTED_OPERATION

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint

    def with_hint(self, hint: str) -> "BitsetError":
        """Attach a hint to this error."""
        self.hint = hint
        return self

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message}"
        if self.hint:
            text += f" (hint: {self.hint})"
        return text


class IndexOutOfBoundsError(BitsetError, IndexError):
    """Checked mutation with an index beyond the declared bound."""

    default_code = ErrorCode.INDEX_OUT_OF_BOUNDS

    def __init__(self, index: int, bound: int, operation: str = "set") -> None:
        super().__init__(
            f"cannot {operation} bit {index}: index exceeds bound {bound}",
        )
        self.index = index
        self.bound = bound
        self.operation = operation


class UnsupportedOperationError(BitsetError, TypeError):
    """The value's structure cannot perform the requested operation."""

    default_code = ErrorCode.UNSUPPORTED_OPERATION


class ConfigurationError(BitsetError, ValueError):
    """Invalid type parameters or runtime configuration."""

    default_code = ErrorCode.INVALID_CONFIGURATION


class ExpressionError(BitsetError, ValueError):
    """Malformed set expression."""

    default_code = ErrorCode.MALFORMED_EXPRESSION

    def __init__(self, message: str, form: object = None) -> None:
        super().__init__(message)
        self.form = form


__all__ = [
    "ErrorCode",
    "BitsetError",
    "IndexOutOfBoundsError",
    "UnsupportedOperationError",
    "ConfigurationError",
    "ExpressionError",
]
