"""Language matching against the configured supported set.

Pure functions: exact, case-sensitive code comparison. No fuzzy matching,
no script or region fallback.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from localestate.diagnostics import ErrorTemplate, UnsupportedLanguageError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from localestate.config import SupportedLanguage
    from localestate.enums import TextDirection
    from localestate.types import LanguageCode

__all__ = ["language_direction", "match_language"]


def match_language(
    language_code: LanguageCode | None,
    supported: Iterable[SupportedLanguage],
) -> tuple[SupportedLanguage, ...]:
    """Return the supported entries whose code equals ``language_code``.

    Args:
        language_code: Code to look up; None or "" never matches
        supported: Supported languages in declaration order

    Returns:
        Matching entries (empty tuple when nothing matches)

    Example:
        >>> langs = (SupportedLanguage("en"), SupportedLanguage("ar", "rtl"))
        >>> match_language("ar", langs)
        (SupportedLanguage(code='ar', direction=<TextDirection.RTL: 'rtl'>),)
        >>> match_language("EN", langs)
        ()
    """
    if not language_code:
        return ()
    return tuple(entry for entry in supported if entry.code == language_code)


def language_direction(
    language_code: LanguageCode,
    supported: Iterable[SupportedLanguage],
) -> TextDirection:
    """Return the writing direction of a supported language.

    Args:
        language_code: Code to look up
        supported: Supported languages in declaration order

    Returns:
        Direction of the first matching entry

    Raises:
        UnsupportedLanguageError: If no supported entry matches
    """
    supported = tuple(supported)
    matched = match_language(language_code, supported)
    if not matched:
        available = tuple(entry.code for entry in supported)
        raise UnsupportedLanguageError(
            ErrorTemplate.unsupported_language(language_code, available)
        )
    return matched[0].direction
