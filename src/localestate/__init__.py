"""localestate - effective locale and currency resolution with change notification.

Resolves the application-wide locale (language, country, script, numbering
system, calendar) and currency from persisted state, static configuration
and the host's reported language; persists them; and announces every
effective change on replayable notification streams so translation loaders
and formatters stay in sync.

Public API:
    LocaleResolver - Resolution state machine and mutators
    LocaleIdentifier - Immutable locale value with canonical BCP 47 encoding
    StaticLocaleConfig - Startup configuration (supported languages, defaults)
    LocaleConfigBuilder - Fluent builder for StaticLocaleConfig
    SupportedLanguage - Supported language with text direction
    ChangeNotificationChannel - language/locale/currency/reload streams
    LocaleBinding - Attribute mirror of resolver state for formatters
    MemoryStorage, JSONFileStorage - Reference persistence gateways
    detect_runtime_language - Host language detection (OS locale, env vars)

Exceptions:
    LocaleError - Base exception class
    InvalidLocaleError - Malformed locale input
    UnsupportedLanguageError - Language outside the supported set
    PersistenceReadError / PersistenceWriteError - Storage failures
    ConcurrentInitializationError - initialize(coalesce=False) while in flight
    ResolverStateError - Mutator called before the resolver is ready

Submodules:
    localestate.matcher - match_language, language_direction
    localestate.persistence - PersistenceGateway protocol
    localestate.diagnostics - Diagnostic codes and templates
"""

from .binding import LocaleBinding
from .channel import ChangeNotificationChannel, ReplayStream, Subscription, TriggerStream
from .config import LocaleConfigBuilder, StaticLocaleConfig, SupportedLanguage
from .diagnostics import (
    ConcurrentInitializationError,
    InvalidLocaleError,
    LocaleError,
    PersistenceError,
    PersistenceReadError,
    PersistenceWriteError,
    ResolverStateError,
    UnsupportedLanguageError,
)
from .enums import ResolverState, StorageKey, TextDirection
from .identifier import LocaleIdentifier
from .locale_utils import detect_runtime_language
from .persistence import JSONFileStorage, MemoryStorage, PersistenceGateway
from .resolver import LocaleResolver

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("localestate")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ChangeNotificationChannel",
    "ConcurrentInitializationError",
    "InvalidLocaleError",
    "JSONFileStorage",
    "LocaleBinding",
    "LocaleConfigBuilder",
    "LocaleError",
    "LocaleIdentifier",
    "LocaleResolver",
    "MemoryStorage",
    "PersistenceError",
    "PersistenceGateway",
    "PersistenceReadError",
    "PersistenceWriteError",
    "ReplayStream",
    "ResolverState",
    "ResolverStateError",
    "StaticLocaleConfig",
    "StorageKey",
    "Subscription",
    "SupportedLanguage",
    "TextDirection",
    "TriggerStream",
    "UnsupportedLanguageError",
    "__version__",
    "detect_runtime_language",
]
