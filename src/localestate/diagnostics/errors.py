"""Locale-state exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic for rich error information.
Concrete errors also derive from the matching builtin (ValueError,
LookupError, RuntimeError) so generic handlers keep working.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ConcurrentInitializationError",
    "InvalidLocaleError",
    "LocaleError",
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
    "ResolverStateError",
    "UnsupportedLanguageError",
]


class LocaleError(Exception):
    """Base exception for all localestate errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocaleError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidLocaleError(LocaleError, ValueError):
    """Malformed locale input to build() or decode().

    Raised before any state changes, so the previous locale stays intact.
    """


class UnsupportedLanguageError(LocaleError, LookupError):
    """Language code is outside the configured supported set."""


class PersistenceError(LocaleError):
    """Storage backend failure.

    Attributes:
        key: Storage slot involved in the failure
    """

    def __init__(self, message: str | Diagnostic, *, key: str = "") -> None:
        """Initialize PersistenceError.

        Args:
            message: Error message string OR Diagnostic object
            key: Storage slot involved in the failure
        """
        super().__init__(message)
        self.key = key


class PersistenceReadError(PersistenceError):
    """Storage read failed. The resolver treats the slot as absent."""


class PersistenceWriteError(PersistenceError):
    """Storage write failed. The resolver logs and continues."""


class ConcurrentInitializationError(LocaleError, RuntimeError):
    """initialize(coalesce=False) called while another call is in flight."""


class ResolverStateError(LocaleError, RuntimeError):
    """Mutator called while the resolver is not READY."""
