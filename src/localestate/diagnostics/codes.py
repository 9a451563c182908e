"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages attached to
localestate exceptions.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Identifier errors (malformed language, subtags, tags)
        2000-2999: Lookup errors (unsupported languages)
        3000-3999: Persistence errors (storage reads and writes)
        4000-4999: Lifecycle errors (resolver state machine misuse)
    """

    # Identifier errors (1000-1999)
    LANGUAGE_INVALID = 1001
    SUBTAG_INVALID = 1002
    TAG_MALFORMED = 1003
    EXTENSION_UNSUPPORTED = 1004

    # Lookup errors (2000-2999)
    LANGUAGE_UNSUPPORTED = 2001

    # Persistence errors (3000-3999)
    STORAGE_READ_FAILED = 3001
    STORAGE_WRITE_FAILED = 3002

    # Lifecycle errors (4000-4999)
    INITIALIZATION_IN_PROGRESS = 4001
    RESOLVER_NOT_READY = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        input_value: Offending input, when the error concerns one
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    input_value: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Example output:
            error[LANGUAGE_INVALID]: Invalid language code 'e'
              = input: 'e'
              = help: Use a 2-3 letter ISO 639 code such as 'en' or 'fil'

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.input_value is not None:
            lines.append(f"  = input: {self.input_value!r}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
