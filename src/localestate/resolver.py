"""Locale resolution state machine.

Decides the effective locale and currency from persisted state, static
configuration and the runtime language signal, then keeps them current as
the application changes them, persisting and announcing every effective
change exactly once.

Key architectural decisions:
- Explicit dependency injection: config, storage and channel are
  constructor arguments; nothing is looked up globally
- Immutable LocaleIdentifier swapped in one assignment, so subscribers
  never observe a half-built locale
- Field-by-field equality guard in every mutator: no spurious events, no
  redundant catalog reloads
- Concurrent initialize() calls share one asyncio.Task

Resolution precedence (applied once, during initialize()):
    1. Persisted locale, verbatim
    2. Static default language + country (full static locale)
    3. Static default language only: the runtime language when it is
       supported, otherwise the static language
    Currency: persisted value, otherwise the static default.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from localestate.channel import ChangeNotificationChannel
from localestate.diagnostics import (
    ConcurrentInitializationError,
    ErrorTemplate,
    InvalidLocaleError,
    PersistenceError,
    ResolverStateError,
)
from localestate.enums import ResolverState, StorageKey
from localestate.identifier import LocaleIdentifier
from localestate.locale_utils import bare_language
from localestate.matcher import language_direction, match_language

if TYPE_CHECKING:
    from localestate.config import StaticLocaleConfig
    from localestate.enums import TextDirection
    from localestate.persistence import PersistenceGateway
    from localestate.types import CountryCode, CurrencyCode, LanguageCode, LocaleTag

__all__ = ["LocaleResolver"]

logger = logging.getLogger(__name__)


class LocaleResolver:
    """Resolves, persists and announces the effective locale and currency.

    Lifecycle: UNINITIALIZED -> INITIALIZING -> READY. Mutators are only
    accepted in READY, which serializes them against initialize().

    Example:
        >>> config = (
        ...     LocaleConfigBuilder()
        ...     .add_languages(["en", "es"])
        ...     .define_language("en")
        ...     .define_currency("USD")
        ...     .build()
        ... )
        >>> resolver = LocaleResolver(config, MemoryStorage())
        >>> asyncio.run(resolver.initialize(runtime_language="es-MX"))
        >>> resolver.default_locale, resolver.currency
        ('es', 'USD')
        >>> resolver.set_locale("es", "MX")
        >>> resolver.default_locale
        'es-MX'
    """

    __slots__ = (
        "_channel",
        "_config",
        "_currency",
        "_identifier",
        "_init_task",
        "_last_write",
        "_pending_writes",
        "_state",
        "_storage",
    )

    def __init__(
        self,
        config: StaticLocaleConfig,
        storage: PersistenceGateway,
        *,
        channel: ChangeNotificationChannel | None = None,
    ) -> None:
        """Initialize an unresolved resolver.

        Args:
            config: Supported languages and defaults
            storage: Backend for the "defaultLocale" and "currency" slots
            channel: Notification channel to publish to (a fresh one when None)
        """
        self._config = config
        self._storage = storage
        self._channel = channel if channel is not None else ChangeNotificationChannel()
        self._state = ResolverState.UNINITIALIZED
        self._identifier: LocaleIdentifier | None = None
        self._currency: CurrencyCode | None = None
        self._init_task: asyncio.Task[None] | None = None
        self._pending_writes: set[asyncio.Task[None]] = set()
        self._last_write: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    async def initialize(
        self,
        runtime_language: LanguageCode | None = None,
        *,
        coalesce: bool = True,
    ) -> None:
        """Resolve the effective locale and currency.

        Idempotent: once READY, further calls return immediately without
        reading, writing or emitting. A call made while another is in flight
        joins it (its ``runtime_language`` is ignored), so resolution never
        runs twice.

        Persistence read failures are logged and treated as "absent".

        Args:
            runtime_language: Host-reported language; reduced to its bare
                language ("en-US" -> "en") before matching
            coalesce: When False, a call made during an in-flight
                initialization raises instead of joining it

        Raises:
            ConcurrentInitializationError: If coalesce is False and an
                initialization is already in flight
        """
        match self._state:
            case ResolverState.READY:
                logger.debug("Locale resolver already initialized")
                return
            case ResolverState.INITIALIZING:
                if not coalesce:
                    raise ConcurrentInitializationError(ErrorTemplate.initialization_in_progress())
                logger.debug(
                    "Joining in-flight initialization; runtime language %r ignored",
                    runtime_language,
                )
            case ResolverState.UNINITIALIZED:
                self._state = ResolverState.INITIALIZING
                self._init_task = asyncio.ensure_future(self._run_initialize(runtime_language))
                # Waiters cancelled before a failure detach from the task
                self._init_task.add_done_callback(_retrieve_exception)

        task = self._init_task
        if task is None:  # pragma: no cover - INITIALIZING always has a task
            return
        # Shield: one cancelled waiter must not cancel the shared resolution
        await asyncio.shield(task)

    async def _run_initialize(self, runtime_language: LanguageCode | None) -> None:
        try:
            await self._resolve(bare_language(runtime_language))
        except BaseException:
            self._state = ResolverState.UNINITIALIZED
            raise
        finally:
            self._init_task = None

    async def _resolve(self, runtime_language: LanguageCode | None) -> None:
        stored_locale = await self._read(StorageKey.LOCALE)
        stored_currency = await self._read(StorageKey.CURRENCY)

        identifier, from_storage = self._resolve_locale(stored_locale, runtime_language)
        currency = stored_currency or self._config.currency or None

        # Persist only what was computed here, never echo a stored value back
        if identifier is not None and not from_storage:
            await self._write(StorageKey.LOCALE, identifier.encode())
        if currency is not None and stored_currency is None:
            await self._write(StorageKey.CURRENCY, currency)

        self._identifier = identifier
        self._currency = currency
        self._state = ResolverState.READY
        logger.info(
            "Locale resolver ready: locale=%s currency=%s",
            self.default_locale or "<unset>",
            currency or "<unset>",
        )

        if identifier is not None:
            self._announce_locale(identifier)
        if currency is not None:
            self._channel.currency_changed.emit(currency)

    def _resolve_locale(
        self,
        stored_locale: LocaleTag | None,
        runtime_language: LanguageCode | None,
    ) -> tuple[LocaleIdentifier | None, bool]:
        """Apply the precedence rules.

        Returns:
            (identifier or None, True when the identifier came from storage)
        """
        if stored_locale is not None:
            try:
                identifier = LocaleIdentifier.decode(stored_locale)
            except InvalidLocaleError as e:
                logger.warning("Ignoring undecodable persisted locale %r: %s", stored_locale, e)
            else:
                logger.debug("Using persisted locale %s", stored_locale)
                return identifier, True

        config = self._config
        if config.has_full_locale:
            logger.debug("Using static default locale")
            return config.default_identifier(), False

        if config.language:
            if match_language(runtime_language, config.languages):
                logger.debug("Using runtime language %s", runtime_language)
                return LocaleIdentifier.build(runtime_language), False
            logger.debug(
                "Runtime language %r not supported; using static language %s",
                runtime_language,
                config.language,
            )
            return LocaleIdentifier.build(config.language), False

        logger.debug("No persisted or static locale; locale left unset")
        return None, False

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def _read(self, key: StorageKey) -> str | None:
        try:
            value = await self._storage.read(key)
        except (PersistenceError, OSError, ValueError) as e:
            logger.warning("Treating storage slot %r as absent: %s", str(key), e)
            return None
        return value or None

    async def _write(self, key: StorageKey, value: str) -> None:
        try:
            await self._storage.write(key, value)
        except (PersistenceError, OSError, ValueError) as e:
            logger.warning("Failed to persist %s=%r: %s", key, value, e)

    def _persist(self, key: StorageKey, value: str) -> None:
        """Write from a synchronous mutator.

        Scheduled on the running loop when there is one (await flush() to
        wait for it); otherwise run to completion before returning. Each
        scheduled write waits for the previous one, so the gateway sees
        writes in mutation order.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._write(key, value))
            return
        task = loop.create_task(self._write_after(self._last_write, key, value))
        self._last_write = task
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write_after(
        self, previous: asyncio.Task[None] | None, key: StorageKey, value: str
    ) -> None:
        if previous is not None and not previous.done():
            await asyncio.wait((previous,))
        await self._write(key, value)

    async def flush(self) -> None:
        """Wait until every scheduled persistence write has finished."""
        while self._pending_writes:
            await asyncio.gather(*tuple(self._pending_writes))

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _announce_locale(self, identifier: LocaleIdentifier) -> None:
        """Emit the change event for ``identifier``, then the reload trigger.

        A bare-language identifier is a language change; anything richer is
        a locale change.
        """
        if identifier == LocaleIdentifier(identifier.language):
            self._channel.language_changed.emit(identifier.language)
        else:
            self._channel.locale_changed.emit(identifier.encode())
        self._channel.reload_translations.emit()

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def _require_ready(self, operation: str) -> None:
        if self._state is not ResolverState.READY:
            raise ResolverStateError(ErrorTemplate.resolver_not_ready(operation, self._state))

    def set_language(self, language_code: LanguageCode) -> None:
        """Switch to a bare language, clearing country, script and keywords.

        No-op when ``language_code`` equals the current language.

        Args:
            language_code: New language

        Raises:
            InvalidLocaleError: If language_code is empty or malformed
            ResolverStateError: If the resolver is not READY
        """
        self._require_ready("set_language")
        identifier = LocaleIdentifier.build(language_code)
        if self._identifier is not None and self._identifier.language == identifier.language:
            logger.debug("Language unchanged (%s); nothing to do", language_code)
            return

        self._identifier = identifier
        self._persist(StorageKey.LOCALE, identifier.encode())
        self._channel.language_changed.emit(identifier.language)
        self._channel.reload_translations.emit()

    def set_locale(
        self,
        language_code: LanguageCode,
        country_code: CountryCode | None,
        script_code: str | None = None,
        numbering_system: str | None = None,
        calendar: str | None = None,
    ) -> None:
        """Switch to a full locale.

        No-op when every field equals the current locale.

        Args:
            language_code: Language
            country_code: Country/region
            script_code: Script
            numbering_system: Numbering system keyword value
            calendar: Calendar keyword value

        Raises:
            InvalidLocaleError: If any field is malformed
            ResolverStateError: If the resolver is not READY
        """
        self._require_ready("set_locale")
        identifier = LocaleIdentifier.build(
            language_code, country_code, script_code, numbering_system, calendar
        )
        if identifier == self._identifier:
            logger.debug("Locale unchanged (%s); nothing to do", identifier)
            return

        self._identifier = identifier
        encoded = identifier.encode()
        self._persist(StorageKey.LOCALE, encoded)
        self._channel.locale_changed.emit(encoded)
        self._channel.reload_translations.emit()

    def set_currency(self, currency_code: CurrencyCode) -> None:
        """Switch currency. No-op when unchanged.

        Args:
            currency_code: ISO 4217 code

        Raises:
            ValueError: If currency_code is empty
            ResolverStateError: If the resolver is not READY
        """
        self._require_ready("set_currency")
        if not currency_code:
            msg = "Currency code must not be empty"
            raise ValueError(msg)
        if currency_code == self._currency:
            logger.debug("Currency unchanged (%s); nothing to do", currency_code)
            return

        self._currency = currency_code
        self._persist(StorageKey.CURRENCY, currency_code)
        self._channel.currency_changed.emit(currency_code)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> ResolverState:
        """Current lifecycle state."""
        return self._state

    @property
    def config(self) -> StaticLocaleConfig:
        """Static configuration (read-only)."""
        return self._config

    @property
    def channel(self) -> ChangeNotificationChannel:
        """Notification channel this resolver publishes to."""
        return self._channel

    @property
    def identifier(self) -> LocaleIdentifier | None:
        """Resolved identifier, or None while unset."""
        return self._identifier

    @property
    def language(self) -> LanguageCode:
        """Current language ("" while unset)."""
        return self._identifier.language if self._identifier else ""

    @property
    def country(self) -> CountryCode:
        """Current country ("" when absent)."""
        return (self._identifier.country or "") if self._identifier else ""

    @property
    def script(self) -> str:
        """Current script ("" when absent)."""
        return (self._identifier.script or "") if self._identifier else ""

    @property
    def numbering_system(self) -> str:
        """Current numbering system ("" when absent)."""
        return (self._identifier.numbering_system or "") if self._identifier else ""

    @property
    def calendar(self) -> str:
        """Current calendar ("" when absent)."""
        return (self._identifier.calendar or "") if self._identifier else ""

    @property
    def default_locale(self) -> LocaleTag:
        """Full canonical tag of the current locale ("" while unset)."""
        return self._identifier.encode() if self._identifier else ""

    @property
    def current_locale(self) -> LocaleTag:
        """Language and country only, e.g. "en-US" ("" while unset)."""
        return self._identifier.locale_code if self._identifier else ""

    @property
    def currency(self) -> CurrencyCode:
        """Current currency ("" while unset)."""
        return self._currency or ""

    @property
    def available_languages(self) -> tuple[LanguageCode, ...]:
        """Codes of the supported languages, in configuration order."""
        return self._config.language_codes

    def language_direction(self, language_code: LanguageCode | None = None) -> TextDirection:
        """Writing direction of a supported language.

        Args:
            language_code: Language to look up (defaults to the current one)

        Returns:
            TextDirection.LTR or TextDirection.RTL

        Raises:
            UnsupportedLanguageError: If the language is not supported
        """
        code = self.language if language_code is None else language_code
        return language_direction(code, self._config.languages)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LocaleResolver(state={self._state.value}, "
            f"locale={self.default_locale!r}, currency={self.currency!r})"
        )


def _retrieve_exception(task: asyncio.Task[None]) -> None:
    """Mark a finished task's exception as retrieved."""
    if not task.cancelled():
        task.exception()
