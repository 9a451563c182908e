"""Static locale configuration.

Provides the immutable configuration object assembled at startup (supported
languages and defaults) and a fluent builder for assembling it in
application bootstrap code.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Self

from localestate.constants import LANGUAGE_PATTERN
from localestate.enums import TextDirection
from localestate.identifier import LocaleIdentifier
from localestate.locale_utils import cldr_text_direction

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from localestate.types import CountryCode, CurrencyCode, LanguageCode

__all__ = [
    "LocaleConfigBuilder",
    "StaticLocaleConfig",
    "SupportedLanguage",
]


@dataclass(frozen=True, slots=True)
class SupportedLanguage:
    """A language the application ships translations for.

    Attributes:
        code: Language code, matched exactly (case-sensitive)
        direction: Writing direction; "ltr"/"rtl" strings are coerced
    """

    code: LanguageCode
    direction: TextDirection = TextDirection.LTR

    def __post_init__(self) -> None:
        """Validate code and coerce direction to TextDirection.

        Raises:
            ValueError: If code is not a 2-3 letter language code or
                direction is not "ltr"/"rtl"
        """
        if not isinstance(self.code, str) or not LANGUAGE_PATTERN.fullmatch(self.code):
            msg = f"Invalid supported language code {self.code!r}"
            raise ValueError(msg)
        try:
            direction = TextDirection(self.direction)
        except ValueError:
            msg = f"Invalid direction {self.direction!r} for language {self.code!r}"
            raise ValueError(msg) from None
        object.__setattr__(self, "direction", direction)


@dataclass(frozen=True, slots=True)
class StaticLocaleConfig:
    """Immutable startup configuration read by LocaleResolver.

    Defaults are optional: a config with neither language nor country
    leaves the locale to persisted state alone.

    Attributes:
        languages: Supported languages in declaration order (codes unique)
        language: Default language
        country: Default country
        script: Default script
        numbering_system: Default numbering system
        calendar: Default calendar
        currency: Default ISO 4217 currency code

    Example:
        >>> config = StaticLocaleConfig(
        ...     languages=(SupportedLanguage("en"), SupportedLanguage("ar", "rtl")),
        ...     language="en",
        ...     country="US",
        ...     currency="USD",
        ... )
        >>> config.language_codes
        ('en', 'ar')
    """

    languages: tuple[SupportedLanguage, ...] = ()
    language: LanguageCode | None = None
    country: CountryCode | None = None
    script: str | None = None
    numbering_system: str | None = None
    calendar: str | None = None
    currency: CurrencyCode | None = None

    def __post_init__(self) -> None:
        """Validate supported-language uniqueness and the default locale.

        Raises:
            ValueError: If a language code appears more than once
            InvalidLocaleError: If the default locale fields are malformed
        """
        languages = tuple(self.languages)
        object.__setattr__(self, "languages", languages)
        seen: set[str] = set()
        for entry in languages:
            if entry.code in seen:
                msg = f"Duplicate supported language {entry.code!r}"
                raise ValueError(msg)
            seen.add(entry.code)

        # Fail fast: the resolver builds from these fields during initialize()
        self.default_identifier()

    def default_identifier(self) -> LocaleIdentifier | None:
        """Identifier built from the full static default, or None without a language."""
        if not self.language:
            return None
        return LocaleIdentifier.build(
            self.language, self.country, self.script, self.numbering_system, self.calendar
        )

    @property
    def language_codes(self) -> tuple[LanguageCode, ...]:
        """Codes of the supported languages, in declaration order."""
        return tuple(entry.code for entry in self.languages)

    @property
    def has_full_locale(self) -> bool:
        """True when both a default language and a default country are set."""
        return bool(self.language) and bool(self.country)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StaticLocaleConfig:
        """Build a config from parsed JSON/TOML data.

        ``languages`` entries may be bare codes (direction looked up in
        CLDR) or mappings with ``code`` and optional ``direction``.

        Args:
            data: Mapping with optional keys languages, language, country,
                script, numbering_system, calendar, currency

        Returns:
            Validated StaticLocaleConfig

        Raises:
            ValueError: On unknown keys, malformed language entries,
                duplicates, or invalid directions

        Example:
            >>> StaticLocaleConfig.from_mapping({
            ...     "languages": ["en", {"code": "he", "direction": "rtl"}],
            ...     "language": "en",
            ... }).language_codes
            ('en', 'he')
        """
        unknown = set(data) - {
            "languages",
            "language",
            "country",
            "script",
            "numbering_system",
            "calendar",
            "currency",
        }
        if unknown:
            msg = f"Unknown locale configuration keys: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        builder = LocaleConfigBuilder()
        for entry in data.get("languages", ()):
            match entry:
                case str():
                    builder.add_language(entry)
                case {"code": str() as code, **rest}:
                    builder.add_language(code, rest.get("direction"))
                case _:
                    msg = f"Invalid supported language entry: {entry!r}"
                    raise ValueError(msg)
        return cls(
            languages=builder.languages,
            language=data.get("language"),
            country=data.get("country"),
            script=data.get("script"),
            numbering_system=data.get("numbering_system"),
            calendar=data.get("calendar"),
            currency=data.get("currency"),
        )


@dataclass(slots=True)
class LocaleConfigBuilder:
    """Fluent builder for StaticLocaleConfig.

    Every define/add method returns the builder, so bootstrap code reads as
    one chained expression.

    Example:
        >>> config = (
        ...     LocaleConfigBuilder()
        ...     .add_language("en")
        ...     .add_language("ar", "rtl")
        ...     .define_default_locale("en", "US")
        ...     .define_currency("USD")
        ...     .build()
        ... )
        >>> config.country
        'US'
    """

    _languages: dict[str, SupportedLanguage] = field(default_factory=dict)
    _language: str | None = None
    _country: str | None = None
    _script: str | None = None
    _numbering_system: str | None = None
    _calendar: str | None = None
    _currency: str | None = None

    @property
    def languages(self) -> tuple[SupportedLanguage, ...]:
        """Languages added so far, in insertion order."""
        return tuple(self._languages.values())

    def add_language(
        self, code: LanguageCode, direction: TextDirection | str | None = None
    ) -> Self:
        """Add a supported language.

        Re-adding a code replaces its direction but keeps its position.

        Args:
            code: Language code
            direction: "ltr"/"rtl"; looked up in CLDR when omitted
        """
        resolved = cldr_text_direction(code) if direction is None else TextDirection(direction)
        self._languages[code] = SupportedLanguage(code, resolved)
        return self

    def add_languages(self, codes: Iterable[LanguageCode]) -> Self:
        """Add several languages with CLDR-derived directions."""
        for code in codes:
            self.add_language(code)
        return self

    def define_language(self, code: LanguageCode) -> Self:
        """Set the default language and clear any default country/script/keywords."""
        self._language = code
        self._country = None
        self._script = None
        self._numbering_system = None
        self._calendar = None
        return self

    def define_default_locale(
        self,
        language: LanguageCode,
        country: CountryCode,
        script: str | None = None,
        numbering_system: str | None = None,
        calendar: str | None = None,
    ) -> Self:
        """Set the full default locale."""
        self._language = language
        self._country = country
        self._script = script
        self._numbering_system = numbering_system
        self._calendar = calendar
        return self

    def define_currency(self, code: CurrencyCode) -> Self:
        """Set the default currency."""
        self._currency = code
        return self

    def build(self) -> StaticLocaleConfig:
        """Freeze the accumulated settings.

        Returns:
            Validated StaticLocaleConfig
        """
        return StaticLocaleConfig(
            languages=self.languages,
            language=self._language,
            country=self._country,
            script=self._script,
            numbering_system=self._numbering_system,
            calendar=self._calendar,
            currency=self._currency,
        )
