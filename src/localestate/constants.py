"""Shared constants for localestate.

Centralizes subtag grammar, separators, and storage slot names so the
identifier codec, configuration, and persistence layers agree on a single
source of truth.

Constants are grouped by domain:
- Subtag grammar: Regular expressions for BCP 47 subtags
- Encoding: Separators and Unicode extension keys
- Persistence: Storage slot names

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Subtag grammar
    "LANGUAGE_PATTERN",
    "SCRIPT_PATTERN",
    "COUNTRY_PATTERN",
    "KEYWORD_VALUE_PATTERN",
    # Encoding
    "TAG_SEPARATOR",
    "POSIX_SEPARATOR",
    "UNICODE_EXTENSION",
    "NUMBERING_SYSTEM_KEY",
    "CALENDAR_KEY",
    # Persistence
    "LOCALE_SLOT",
    "CURRENCY_SLOT",
    # Defaults
    "DEFAULT_RUNTIME_LANGUAGE_VARS",
]

# ============================================================================
# SUBTAG GRAMMAR
# ============================================================================
#
# Minimal syntactic checks, not registry lookups. A language subtag is an
# ISO 639 style code of 2-3 letters; a script is ISO 15924 (4 letters); a
# country is ISO 3166-1 alpha-2 or a UN M.49 area code (3 digits). Unicode
# extension type values are 3-8 alphanumerics per RFC 6067.

LANGUAGE_PATTERN: re.Pattern[str] = re.compile(r"[A-Za-z]{2,3}")
SCRIPT_PATTERN: re.Pattern[str] = re.compile(r"[A-Za-z]{4}")
COUNTRY_PATTERN: re.Pattern[str] = re.compile(r"[A-Za-z]{2}|[0-9]{3}")
KEYWORD_VALUE_PATTERN: re.Pattern[str] = re.compile(r"[A-Za-z0-9]{3,8}")

# ============================================================================
# ENCODING
# ============================================================================

TAG_SEPARATOR: str = "-"
POSIX_SEPARATOR: str = "_"
UNICODE_EXTENSION: str = "u"
NUMBERING_SYSTEM_KEY: str = "nu"
CALENDAR_KEY: str = "ca"

# ============================================================================
# PERSISTENCE
# ============================================================================

LOCALE_SLOT: str = "defaultLocale"
CURRENCY_SLOT: str = "currency"

# ============================================================================
# DEFAULTS
# ============================================================================

# Environment variables consulted for the runtime language, in precedence order.
DEFAULT_RUNTIME_LANGUAGE_VARS: tuple[str, ...] = ("LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE")
