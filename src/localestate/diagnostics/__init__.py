"""Diagnostic system for localestate errors.

Provides structured error diagnostics with codes, hints, and the offending
input, plus the exception hierarchy that carries them.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConcurrentInitializationError,
    InvalidLocaleError,
    LocaleError,
    PersistenceError,
    PersistenceReadError,
    PersistenceWriteError,
    ResolverStateError,
    UnsupportedLanguageError,
)
from .templates import ErrorTemplate

__all__ = [
    "ConcurrentInitializationError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "InvalidLocaleError",
    "LocaleError",
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
    "ResolverStateError",
    "UnsupportedLanguageError",
]
