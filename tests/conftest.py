"""Pytest configuration for the localestate test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

from __future__ import annotations

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from localestate.config import LocaleConfigBuilder, StaticLocaleConfig
from localestate.resolver import LocaleResolver
from tests.helpers.storage import RecordingStorage

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Development profile: thorough local testing (500 examples, silent)
settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

# CI profile: fast feedback for GitHub Actions (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def language_only_config() -> StaticLocaleConfig:
    """Supported en/es/ar with a language-only default of en and USD."""
    return (
        LocaleConfigBuilder()
        .add_language("en", "ltr")
        .add_language("es", "ltr")
        .add_language("ar", "rtl")
        .define_language("en")
        .define_currency("USD")
        .build()
    )


@pytest.fixture
def full_locale_config() -> StaticLocaleConfig:
    """Supported en/fr with a full en-US default and USD."""
    return (
        LocaleConfigBuilder()
        .add_language("en", "ltr")
        .add_language("fr", "ltr")
        .define_default_locale("en", "US")
        .define_currency("USD")
        .build()
    )


@pytest.fixture
def storage() -> RecordingStorage:
    """Empty recording storage."""
    return RecordingStorage()


@pytest.fixture
def resolver(language_only_config: StaticLocaleConfig, storage: RecordingStorage) -> LocaleResolver:
    """Uninitialized resolver over the language-only config."""
    return LocaleResolver(language_only_config, storage)
