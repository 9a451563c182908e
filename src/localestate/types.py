"""Type aliases for the locale-state domain.

Provides semantic type aliases used throughout the package and by user code
when annotating resolver call sites and subscriber callbacks.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable
from typing import TypeAlias, TypeVar

_T = TypeVar("_T")

__all__ = [
    "CountryCode",
    "CurrencyCode",
    "LanguageCode",
    "LocaleTag",
    "Listener",
    "TriggerListener",
]

LanguageCode: TypeAlias = str
"""ISO 639 language code (e.g., 'en', 'ar', 'fil')."""

CountryCode: TypeAlias = str
"""ISO 3166-1 alpha-2 or UN M.49 region code (e.g., 'US', '419')."""

CurrencyCode: TypeAlias = str
"""ISO 4217 currency code (e.g., 'USD', 'EUR')."""

LocaleTag: TypeAlias = str
"""Canonical BCP 47 tag (e.g., 'sr-Latn-RS-u-nu-latn')."""

Listener: TypeAlias = Callable[[_T], object]
"""Subscriber callback for a replay stream carrying values of type T."""

TriggerListener: TypeAlias = Callable[[], object]
"""Subscriber callback for a payload-less trigger stream."""
