"""Quickstart example for localestate.

This example demonstrates resolving, changing and observing the application
locale and currency, and feeding the result to Babel formatters.

Note: Examples use MemoryStorage so they leave nothing on disk. Use
JSONFileStorage (or your own PersistenceGateway) to keep the user's choice
across restarts.
"""

import asyncio
import tempfile
from decimal import Decimal
from pathlib import Path

from babel.numbers import format_currency, format_decimal

from localestate import (
    JSONFileStorage,
    LocaleBinding,
    LocaleConfigBuilder,
    LocaleResolver,
    MemoryStorage,
    detect_runtime_language,
)

# Example 1: Configure and initialize
print("=" * 50)
print("Example 1: Configure and Initialize")
print("=" * 50)

config = (
    LocaleConfigBuilder()
    .add_languages(["en", "es", "ar"])
    .define_language("en")
    .define_currency("USD")
    .build()
)
print(config.languages)
# Output: (SupportedLanguage(code='en', ...), ..., SupportedLanguage(code='ar', ...RTL...))

resolver = LocaleResolver(config, MemoryStorage())
asyncio.run(resolver.initialize(runtime_language="es-MX"))
print(resolver.default_locale, resolver.currency, resolver.language_direction())
# Output: es USD ltr

# Example 2: Observe changes
print("\n" + "=" * 50)
print("Example 2: Change Notifications")
print("=" * 50)

channel = resolver.channel
channel.locale_changed.subscribe(lambda tag: print(f"locale -> {tag}"))
# Replay: subscribing after initialize() still delivers the current value
channel.language_changed.subscribe(lambda code: print(f"language -> {code}"))
# Output: language -> es
channel.reload_translations.subscribe(lambda: print("reload translations"))

resolver.set_locale("es", "MX")
# Output: locale -> es-MX
# Output: reload translations

resolver.set_locale("es", "MX")
# (no output: unchanged locale is a no-op)

resolver.set_language("ar")
# Output: language -> ar
# Output: reload translations
print(resolver.language_direction())
# Output: rtl

# Example 3: Binding for formatters
print("\n" + "=" * 50)
print("Example 3: Formatting with a Binding")
print("=" * 50)

with LocaleBinding(resolver) as binding:
    resolver.set_locale("de", "AT")
    resolver.set_currency("EUR")
    print(format_currency(Decimal("1234.5"), binding.currency, locale=binding.babel_locale))
    # Output: € 1.234,50

    resolver.set_locale("ar", "EG", numbering_system="arab")
    print(binding.default_locale)
    # Output: ar-EG-u-nu-arab
    print(
        format_decimal(
            Decimal("1234.5"),
            locale=binding.babel_locale,
            numbering_system=resolver.numbering_system,
        )
    )
    # Output: ١٬٢٣٤٫٥

# Example 4: Persistent storage
print("\n" + "=" * 50)
print("Example 4: Persistence Across Restarts")
print("=" * 50)

with tempfile.TemporaryDirectory() as tmp:
    path = Path(tmp) / "locale.json"

    first_run = LocaleResolver(config, JSONFileStorage(path))
    asyncio.run(first_run.initialize(detect_runtime_language()))
    first_run.set_locale("es", "AR")
    print(path.read_text(encoding="utf-8"))
    # Output: {"currency": "USD", "defaultLocale": "es-AR"} (pretty-printed)

    second_run = LocaleResolver(config, JSONFileStorage(path))
    asyncio.run(second_run.initialize("en"))
    print(second_run.default_locale)
    # Output: es-AR (persisted locale wins over the runtime language)

print("\n" + "=" * 50)
print("All examples completed successfully!")
print("=" * 50)
