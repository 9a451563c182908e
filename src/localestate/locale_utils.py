"""Locale utilities: tag normalization, runtime language detection, Babel bridge.

Centralizes locale format conversion used throughout the package and the
CLDR lookups (via Babel) that the configuration layer relies on.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from localestate.constants import (
    DEFAULT_RUNTIME_LANGUAGE_VARS,
    LANGUAGE_PATTERN,
    POSIX_SEPARATOR,
    TAG_SEPARATOR,
)
from localestate.enums import TextDirection

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "bare_language",
    "clear_locale_cache",
    "cldr_text_direction",
    "detect_runtime_language",
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace(TAG_SEPARATOR, POSIX_SEPARATOR)


def bare_language(locale_code: str | None) -> str | None:
    """Reduce a host-reported locale to its bare language code.

    Strips the region suffix and any POSIX encoding or modifier, so
    "en-US", "pt_BR.UTF-8" and "de_DE@euro" become "en", "pt" and "de".

    Args:
        locale_code: Reported locale, or None

    Returns:
        Bare language code, or None when the input is empty or None

    Example:
        >>> bare_language("en-US")
        'en'
        >>> bare_language("") is None
        True
    """
    if not locale_code:
        return None
    code = locale_code.split(".", 1)[0].split("@", 1)[0]
    code = normalize_locale(code).split(POSIX_SEPARATOR, 1)[0]
    return code or None


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> locale = get_babel_locale("en-US")
        >>> locale.territory
        'US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Clear the Babel Locale cache used by get_babel_locale()."""
    get_babel_locale.cache_clear()


def cldr_text_direction(language_code: str) -> TextDirection:
    """Look up the writing direction of a language in CLDR.

    Languages Babel does not know default to left-to-right.

    Args:
        language_code: Bare language code (e.g., "ar", "en")

    Returns:
        TextDirection.RTL for right-to-left character order, else LTR

    Example:
        >>> cldr_text_direction("he")
        <TextDirection.RTL: 'rtl'>
    """
    from babel import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(language_code)
    except (UnknownLocaleError, ValueError):
        return TextDirection.LTR
    if locale.character_order == "right-to-left":
        return TextDirection.RTL
    return TextDirection.LTR


def detect_runtime_language(
    env_vars: tuple[str, ...] = DEFAULT_RUNTIME_LANGUAGE_VARS,
) -> str | None:
    """Detect the host's preferred language as a bare language code.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. Environment variables in ``env_vars`` order
       (LC_ALL, LC_MESSAGES, LANG, LANGUAGE by default)

    Filters out "C" and "POSIX" pseudo-locales. LANGUAGE may hold a
    colon-separated priority list; its first entry is used.

    Args:
        env_vars: Environment variable names to consult, in order

    Returns:
        Bare language code (e.g., "de"), or None when nothing usable is set

    Example:
        >>> import os
        >>> os.environ['LANG'] = 'de_DE.UTF-8'
        >>> detect_runtime_language()
        'de'
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
    except (ValueError, AttributeError):
        system_locale = None
    if system_locale and system_locale not in ("C", "POSIX"):
        detected = bare_language(system_locale)
        if detected and LANGUAGE_PATTERN.fullmatch(detected):
            return detected

    for var in env_vars:
        value = os.environ.get(var, "").split(":", 1)[0]
        if value and value not in ("C", "POSIX"):
            detected = bare_language(value)
            if detected and LANGUAGE_PATTERN.fullmatch(detected):
                return detected

    return None
