"""Hypothesis strategies for locale identifier property-based testing.

Provides strategies for generating valid subtags, full identifier field
sets, and malformed tags.

Event-Emitting Strategies (HypoFuzz-Optimized):
- locale_identifiers: Emits locale_fields=N (number of optional fields set)
- malformed_tags: Emits malformed_tag=<kind>

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

from localestate.identifier import LocaleIdentifier

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn, SearchStrategy

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Subtags
    "language_codes",
    "country_codes",
    "script_codes",
    "keyword_values",
    # Composites
    "locale_fields",
    "locale_identifiers",
    "malformed_tags",
]

# ============================================================================
# SUBTAGS
# ============================================================================

language_codes: SearchStrategy[str] = st.from_regex(r"[a-z]{2,3}", fullmatch=True)

country_codes: SearchStrategy[str] = st.one_of(
    st.from_regex(r"[A-Z]{2}", fullmatch=True),
    st.from_regex(r"[0-9]{3}", fullmatch=True),
)

script_codes: SearchStrategy[str] = st.from_regex(r"[A-Z][a-z]{3}", fullmatch=True)

keyword_values: SearchStrategy[str] = st.from_regex(r"[a-z0-9]{3,8}", fullmatch=True)


# ============================================================================
# COMPOSITES
# ============================================================================


@st.composite
def locale_fields(
    draw: DrawFn,
) -> tuple[str, str | None, str | None, str | None, str | None]:
    """Generate (language, country, script, numbering_system, calendar).

    Events emitted:
    - locale_fields=N where N is the number of optional fields present
    """
    fields = (
        draw(language_codes),
        draw(st.none() | country_codes),
        draw(st.none() | script_codes),
        draw(st.none() | keyword_values),
        draw(st.none() | keyword_values),
    )
    event(f"locale_fields={sum(f is not None for f in fields[1:])}")
    return fields


@st.composite
def locale_identifiers(draw: DrawFn) -> LocaleIdentifier:
    """Generate valid LocaleIdentifier instances."""
    return LocaleIdentifier.build(*draw(locale_fields()))


@st.composite
def malformed_tags(draw: DrawFn) -> str:
    """Generate tags decode() must reject.

    Events emitted:
    - malformed_tag=empty_subtag|bad_language|private_use|dangling_extension|
      unknown_keyword
    """
    identifier = draw(locale_identifiers())
    base = identifier.locale_code
    kind = draw(
        st.sampled_from(
            ["empty_subtag", "bad_language", "private_use", "dangling_extension", "unknown_keyword"]
        )
    )
    event(f"malformed_tag={kind}")
    match kind:
        case "empty_subtag":
            return f"{base}--"
        case "bad_language":
            return draw(
                st.one_of(
                    st.from_regex(r"[a-z]{4,8}", fullmatch=True),
                    st.from_regex(r"[a-z]", fullmatch=True),
                    st.from_regex(r"[0-9]{2,3}", fullmatch=True),
                )
            )
        case "private_use":
            return f"{base}-x-{draw(keyword_values)}"
        case "dangling_extension":
            return f"{base}-u"
        case _:
            return f"{base}-u-hc-h23"
