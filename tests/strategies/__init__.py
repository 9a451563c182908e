"""Hypothesis strategies for localestate property-based testing.

Usage:
    from tests.strategies import locale_identifiers, malformed_tags
    from tests.strategies.locale import language_codes, country_codes
"""

from .locale import (
    country_codes,
    keyword_values,
    language_codes,
    locale_fields,
    locale_identifiers,
    malformed_tags,
    script_codes,
)

__all__ = [
    "country_codes",
    "keyword_values",
    "language_codes",
    "locale_fields",
    "locale_identifiers",
    "malformed_tags",
    "script_codes",
]
