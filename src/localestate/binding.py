"""Binding adapter mirroring resolver state for formatting consumers.

LocaleBinding is the minimal UI-side collaborator: it subscribes to a
resolver's replay streams and keeps plain attributes (default_locale,
language, currency) current, so number/date/currency formatters can read
them without touching the resolver. A binding created after initialization
starts from the resolver's current state.

Python 3.13+. Uses Babel for the formatter-facing Locale.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from localestate.identifier import LocaleIdentifier

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from babel import Locale

    from localestate.channel import Subscription
    from localestate.resolver import LocaleResolver

__all__ = ["LocaleBinding"]


class LocaleBinding:
    """Attribute mirror of the resolved locale and currency.

    Example:
        >>> binding = LocaleBinding(resolver)
        >>> binding.default_locale
        'en-US'
        >>> resolver.set_currency("EUR")
        >>> binding.currency
        'EUR'
        >>> binding.close()

    Attributes:
        default_locale: Canonical tag of the latest locale or language ("" until known)
        language: Language of default_locale ("" until known)
        currency: Latest currency ("" until known)
    """

    __slots__ = ("_on_change", "_subscriptions", "currency", "default_locale", "language")

    def __init__(
        self,
        resolver: LocaleResolver,
        *,
        on_change: Callable[[], object] | None = None,
    ) -> None:
        """Subscribe to the resolver's channel.

        Args:
            resolver: Resolver to mirror
            on_change: Called after any attribute update that happens after
                construction (e.g. to mark a view for re-render)
        """
        self.default_locale = ""
        self.language = ""
        self.currency = ""
        self._on_change: Callable[[], object] | None = None
        channel = resolver.channel
        self._subscriptions: list[Subscription] = [
            channel.language_changed.subscribe(self._update_locale),
            channel.locale_changed.subscribe(self._update_locale),
            channel.currency_changed.subscribe(self._update_currency),
        ]
        # language_changed and locale_changed each replay their own latest
        # value, so the replay order says nothing about which one is current
        self.default_locale = resolver.default_locale
        self.language = resolver.language
        self.currency = resolver.currency
        self._on_change = on_change

    def _update_locale(self, tag: str) -> None:
        self.default_locale = tag
        self.language = LocaleIdentifier.decode(tag).language
        self._changed()

    def _update_currency(self, currency: str) -> None:
        self.currency = currency
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    @property
    def identifier(self) -> LocaleIdentifier | None:
        """Decoded default_locale, or None until a locale is known."""
        if not self.default_locale:
            return None
        return LocaleIdentifier.decode(self.default_locale)

    @property
    def babel_locale(self) -> Locale | None:
        """Babel Locale for formatters, or None until a locale is known.

        Raises:
            babel.core.UnknownLocaleError: If CLDR has no data for the locale
        """
        identifier = self.identifier
        return identifier.to_babel() if identifier is not None else None

    @property
    def closed(self) -> bool:
        """True once close() has detached the binding."""
        return not self._subscriptions

    def close(self) -> None:
        """Stop mirroring. Attributes keep their last values."""
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"LocaleBinding(default_locale={self.default_locale!r}, currency={self.currency!r})"
