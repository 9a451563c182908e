"""Enumerations for localestate type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they compare equal to the plain
values stored in configuration files and storage backends.

Python 3.13+.
"""

from enum import StrEnum

from localestate.constants import CURRENCY_SLOT, LOCALE_SLOT


class TextDirection(StrEnum):
    """Writing direction of a supported language.

    StrEnum provides automatic string conversion: str(TextDirection.RTL) == "rtl"
    """

    LTR = "ltr"
    """Left-to-right scripts (Latin, Cyrillic, CJK, ...)."""

    RTL = "rtl"
    """Right-to-left scripts (Arabic, Hebrew, ...)."""


class ResolverState(StrEnum):
    """Lifecycle state of a LocaleResolver.

    Transitions: UNINITIALIZED -> INITIALIZING -> READY. A failed
    initialization returns to UNINITIALIZED.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class StorageKey(StrEnum):
    """Persistence slot names understood by every PersistenceGateway."""

    LOCALE = LOCALE_SLOT
    """Canonical tag of the resolved default locale."""

    CURRENCY = CURRENCY_SLOT
    """ISO 4217 code of the resolved currency."""


__all__ = [
    "ResolverState",
    "StorageKey",
    "TextDirection",
]
