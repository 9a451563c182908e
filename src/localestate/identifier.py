"""Locale identifier value type and its canonical BCP 47 encoding.

A LocaleIdentifier is the resolved (language, country, script, numbering
system, calendar) tuple. It is immutable: "rebuilding" a locale produces a
new identifier, and holders swap their reference in a single assignment so
subscribers never observe a half-updated locale.

Canonical encoding:
    language[-Script][-COUNTRY][-u[-nu-<numbering>][-ca-<calendar>]]

    >>> LocaleIdentifier.build("sr", "RS", "Latn", "latn", "gregory").encode()
    'sr-Latn-RS-u-nu-latn-ca-gregory'

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from localestate.constants import (
    CALENDAR_KEY,
    COUNTRY_PATTERN,
    KEYWORD_VALUE_PATTERN,
    LANGUAGE_PATTERN,
    NUMBERING_SYSTEM_KEY,
    POSIX_SEPARATOR,
    SCRIPT_PATTERN,
    TAG_SEPARATOR,
    UNICODE_EXTENSION,
)
from localestate.diagnostics import ErrorTemplate, InvalidLocaleError
from localestate.locale_utils import get_babel_locale

if TYPE_CHECKING:
    import re

    from babel import Locale

    from localestate.types import CountryCode, LanguageCode, LocaleTag

__all__ = ["LocaleIdentifier"]

# (field name, pattern, description) for every optional field
_OPTIONAL_FIELDS: tuple[tuple[str, re.Pattern[str], str], ...] = (
    ("country", COUNTRY_PATTERN, "2 letters or 3 digits (e.g., 'US', '419')"),
    ("script", SCRIPT_PATTERN, "4 letters (e.g., 'Latn', 'Cyrl')"),
    ("numbering_system", KEYWORD_VALUE_PATTERN, "3-8 alphanumerics (e.g., 'latn', 'arab')"),
    ("calendar", KEYWORD_VALUE_PATTERN, "3-8 alphanumerics (e.g., 'gregory', 'islamic')"),
)


@dataclass(frozen=True, slots=True)
class LocaleIdentifier:
    """Immutable resolved locale.

    Absent optional fields are None, never the empty string. Equality and
    hashing are structural over all five fields.

    Use LocaleIdentifier.build() to construct from loosely typed input
    (empty strings are accepted there as "absent"); direct construction
    validates the same rules but rejects empty strings.

    Attributes:
        language: ISO 639 language code (2-3 letters)
        country: Region code (2 letters or 3 digits) or None
        script: ISO 15924 script code (4 letters) or None
        numbering_system: Unicode numbering system (e.g., 'latn') or None
        calendar: Unicode calendar (e.g., 'gregory') or None
    """

    language: LanguageCode
    country: CountryCode | None = None
    script: str | None = None
    numbering_system: str | None = None
    calendar: str | None = None

    def __post_init__(self) -> None:
        """Validate every field against its subtag grammar.

        Raises:
            InvalidLocaleError: If language is empty or not 2-3 letters, or
                an optional field is present but malformed.
        """
        if not isinstance(self.language, str) or not LANGUAGE_PATTERN.fullmatch(self.language):
            raise InvalidLocaleError(ErrorTemplate.invalid_language(str(self.language)))
        for field_name, pattern, expected in _OPTIONAL_FIELDS:
            value = getattr(self, field_name)
            if value is None:
                continue
            if not isinstance(value, str) or not pattern.fullmatch(value):
                raise InvalidLocaleError(
                    ErrorTemplate.invalid_subtag(field_name, str(value), expected)
                )

    @classmethod
    def build(
        cls,
        language: LanguageCode,
        country: CountryCode | None = None,
        script: str | None = None,
        numbering_system: str | None = None,
        calendar: str | None = None,
    ) -> LocaleIdentifier:
        """Build an identifier from the full field set.

        Empty strings for optional fields are normalized to None.

        Args:
            language: Language code (required)
            country: Country/region code
            script: Script code
            numbering_system: Numbering system keyword value
            calendar: Calendar keyword value

        Returns:
            New validated LocaleIdentifier

        Raises:
            InvalidLocaleError: If any field is malformed
        """
        return cls(
            language,
            country or None,
            script or None,
            numbering_system or None,
            calendar or None,
        )

    @classmethod
    def decode(cls, tag: LocaleTag) -> LocaleIdentifier:
        """Parse a canonical tag back into an identifier.

        Accepts "_" as an alternative separator and the Unicode extension
        keywords in either order.

        Args:
            tag: Encoded locale (e.g., "fr-CA", "ar-EG-u-nu-arab")

        Returns:
            Decoded LocaleIdentifier

        Raises:
            InvalidLocaleError: If the tag is empty, has empty subtags,
                unknown subtags, unsupported extensions, or repeated keywords

        Example:
            >>> LocaleIdentifier.decode("zh-Hant-TW").encode()
            'zh-Hant-TW'
        """
        if not isinstance(tag, str) or not tag:
            raise InvalidLocaleError(ErrorTemplate.malformed_tag(str(tag), "empty tag"))

        subtags = tag.replace(POSIX_SEPARATOR, TAG_SEPARATOR).split(TAG_SEPARATOR)
        if "" in subtags:
            raise InvalidLocaleError(ErrorTemplate.malformed_tag(tag, "empty subtag"))

        count = len(subtags)
        language = subtags[0]
        index = 1

        script: str | None = None
        if index < count and SCRIPT_PATTERN.fullmatch(subtags[index]):
            script = subtags[index]
            index += 1

        country: str | None = None
        if index < count and COUNTRY_PATTERN.fullmatch(subtags[index]):
            country = subtags[index]
            index += 1

        keywords: dict[str, str] = {}
        if index < count:
            if subtags[index].lower() != UNICODE_EXTENSION:
                raise InvalidLocaleError(ErrorTemplate.unsupported_extension(tag, subtags[index]))
            index += 1
            if index == count:
                raise InvalidLocaleError(
                    ErrorTemplate.malformed_tag(tag, "empty Unicode extension")
                )
            while index < count:
                key = subtags[index].lower()
                if key not in (NUMBERING_SYSTEM_KEY, CALENDAR_KEY):
                    raise InvalidLocaleError(
                        ErrorTemplate.unsupported_extension(tag, subtags[index])
                    )
                if key in keywords:
                    raise InvalidLocaleError(
                        ErrorTemplate.malformed_tag(tag, f"keyword {key!r} repeated")
                    )
                if index + 1 == count:
                    raise InvalidLocaleError(
                        ErrorTemplate.malformed_tag(tag, f"keyword {key!r} has no value")
                    )
                keywords[key] = subtags[index + 1]
                index += 2

        return cls(
            language,
            country,
            script,
            keywords.get(NUMBERING_SYSTEM_KEY),
            keywords.get(CALENDAR_KEY),
        )

    def encode(self) -> LocaleTag:
        """Produce the canonical tag.

        Returns:
            Tag in the form language[-Script][-COUNTRY][-u[-nu-x][-ca-y]]
        """
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.country:
            parts.append(self.country)
        if self.numbering_system or self.calendar:
            parts.append(UNICODE_EXTENSION)
            if self.numbering_system:
                parts.extend((NUMBERING_SYSTEM_KEY, self.numbering_system))
            if self.calendar:
                parts.extend((CALENDAR_KEY, self.calendar))
        return TAG_SEPARATOR.join(parts)

    @property
    def locale_code(self) -> LocaleTag:
        """Language and country only (e.g., "en-US", or "en" without a country)."""
        if self.country:
            return f"{self.language}{TAG_SEPARATOR}{self.country}"
        return self.language

    def to_posix(self) -> str:
        """Babel/POSIX form without keywords (e.g., "sr_Latn_RS")."""
        return POSIX_SEPARATOR.join(
            part for part in (self.language, self.script, self.country) if part
        )

    def to_babel(self) -> Locale:
        """Resolve to a cached Babel Locale for downstream formatters.

        Numbering system and calendar are not part of Babel's Locale
        identity; formatters receive them separately.

        Raises:
            babel.core.UnknownLocaleError: If CLDR has no data for the locale
        """
        return get_babel_locale(self.to_posix())

    def __str__(self) -> str:
        """Return the canonical tag."""
        return self.encode()
