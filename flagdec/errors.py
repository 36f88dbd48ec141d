# flagdec/errors.py
"""
flagdec Error Types

Every failure this tool can hit is a user-input problem: a malformed command
line or a value token that does not parse.  Each one is reported immediately
and ends the run; nothing is retried and no partial decoding of a malformed
token is attempted.

Error Hierarchy:
────────────────
┌─────────────────────────────────────────────────────────────────────────────┐
│  FlagdecError (base)                                                        │
│  ├── UsageError               - Malformed invocation                        │
│  ├── UnparsableValueError     - Value token is not a 32-bit integer         │
│  └── UnrecognizedDomainError  - Unknown keyword where one was required      │
└─────────────────────────────────────────────────────────────────────────────┘

Error Codes:
────────────
Each error carries a code of the form FLAG-NNNN:
  - 0001: usage errors
  - 0002: value parsing errors
  - 0003: domain lookup errors
  - 9000: internal errors

Example Usage:
──────────────
    from flagdec.errors import UnparsableValueError

    try:
        value = parse_value(token)
    except UnparsableValueError as exc:
        print(exc.code, exc.token)
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Optional


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════════

@unique
class ErrorCategory(Enum):
    """Coarse classification of flagdec errors."""

    USAGE = "usage"
    VALUE = "value"
    DOMAIN = "domain"
    INTERNAL = "internal"


class ErrorCode:
    """
    Structured error code.

    Codes follow the pattern ``FLAG-NNNN``; comparing against the plain
    string form is supported so tests and callers can write
    ``exc.code == "FLAG-0002"``.
    """

    __slots__ = ("prefix", "number", "category")

    def __init__(self, prefix: str, number: int, category: ErrorCategory) -> None:
        self.prefix = prefix
        self.number = number
        self.category = category

    @property
    def code(self) -> str:
        """Get the full error code string."""
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.category.name})"

    def __hash__(self) -> int:
        return hash((self.prefix, self.number))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.prefix == other.prefix and self.number == other.number
        if isinstance(other, str):
            return self.code == other
        return False


# ───────────────────────────────────────────────────────────────────────────────
# PREDEFINED ERROR CODES
# ───────────────────────────────────────────────────────────────────────────────

class FlagdecErrorCodes:
    """Predefined error codes."""

    USAGE = ErrorCode("FLAG", 1, ErrorCategory.USAGE)
    UNPARSABLE_VALUE = ErrorCode("FLAG", 2, ErrorCategory.VALUE)
    UNRECOGNIZED_DOMAIN = ErrorCode("FLAG", 3, ErrorCategory.DOMAIN)
    INTERNAL_ERROR = ErrorCode("FLAG", 9000, ErrorCategory.INTERNAL)


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

class FlagdecError(Exception):
    """
    Base exception for all flagdec errors.

    Carries a structured code and an optional hint shown under the message.
    """

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or FlagdecErrorCodes.INTERNAL_ERROR
        self.hint = hint

    def with_hint(self, hint: str) -> "FlagdecError":
        """Attach a hint to this error."""
        self.hint = hint
        return self

    def format(self) -> str:
        """Render the message, followed by the hint when there is one."""
        if self.hint:
            return f"{self.message}\n  hint: {self.hint}"
        return self.message

    def __str__(self) -> str:
        return self.message


class UsageError(FlagdecError):
    """Malformed invocation (missing value argument, stray tokens...)."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(message=message, code=FlagdecErrorCodes.USAGE, **kwargs)


class UnparsableValueError(FlagdecError):
    """A value token is empty or has characters left over after parsing."""

    def __init__(self, token: str, **kwargs) -> None:
        super().__init__(
            message=f"Unparsable value: <{token}>",
            code=FlagdecErrorCodes.UNPARSABLE_VALUE,
            **kwargs,
        )
        self.token = token


class UnrecognizedDomainError(FlagdecError):
    """A token that had to be a domain keyword is not one."""

    def __init__(self, keyword: str, known: Optional[list] = None, **kwargs) -> None:
        super().__init__(
            message=f"Unrecognized domain: <{keyword}>",
            code=FlagdecErrorCodes.UNRECOGNIZED_DOMAIN,
            **kwargs,
        )
        self.keyword = keyword
        self.known = list(known) if known else []
        if self.known and not self.hint:
            self.hint = f"Expected one of: {', '.join(self.known)}"
