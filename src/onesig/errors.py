"""Typed error conditions raised by the OneSig core.

Every failure the core detects itself is an ``OneSigCoreError`` carrying
an ``ErrorCode`` so callers can branch on the kind of failure rather
than on message text. Errors raised by external signers are never
wrapped.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Optional


class ErrorCode(str, enum.Enum):
    """Named failure kinds."""
    LEAF_SEEN_TWICE = "LEAF_SEEN_TWICE"
    NONCE_ID_SEEN_TWICE = "NONCE_ID_SEEN_TWICE"
    INVALID_SIGNATURE_INPUT = "INVALID_SIGNATURE_INPUT"
    ONE_SIGNER_REQUIRED = "ONE_SIGNER_REQUIRED"
    ADDRESS_SIGNATURE_LENGTH_MISMATCH = "ADDRESS_SIGNATURE_LENGTH_MISMATCH"
    CANNOT_CONCAT_INPUT = "CANNOT_CONCAT_INPUT"
    INVALID_HEADER = "INVALID_HEADER"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"


class OneSigCoreError(Exception):
    """A domain failure with a machine-readable code."""

    def __init__(self, code: ErrorCode | str, message: str) -> None:
        self.code = ErrorCode(code)
        super().__init__(f"[{self.code.value}] {message}")

    @staticmethod
    def is_error(value: Any, code: ErrorCode | str | None = None) -> bool:
        """True if ``value`` is an OneSigCoreError (of ``code``, if given)."""
        if not isinstance(value, OneSigCoreError):
            return False
        if code is None:
            return True
        return value.code == ErrorCode(code)


def error_code_from_call(method: Callable[[], Any]) -> Optional[ErrorCode]:
    """Run ``method`` and return the code of the OneSigCoreError it raised.

    Returns None if the call succeeds. Any other exception propagates.
    """
    try:
        method()
    except OneSigCoreError as error:
        return error.code
    return None
