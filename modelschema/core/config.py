from __future__ import annotations

import os
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Must match the keys of ``modelschema.synthesis.identity.NAMING_CONVENTIONS``.
# The synthesis package imports this module, so the registry is not imported.
_KNOWN_CONVENTIONS: frozenset[str] = frozenset({"simple", "qualified"})


class Settings(BaseSettings):
    """
    Library defaults, loaded from environment variables or a *.env* file.

    None of these values are read by the engine directly; they only supply
    defaults when a caller does not inject its own configuration.
    """

    # Read by host applications: ``configure_logging(get_settings().debug)``
    debug: bool = False

    # Naming convention used to turn a type into a schema id
    model_id_convention: str = "simple"

    # Expand list/dict element types instead of emitting opaque leaves
    expand_containers: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # ``model_id_convention`` would otherwise clash with pydantic's
        # reserved ``model_`` namespace.
        protected_namespaces=("protect_", "private_"),
    )

    @field_validator("model_id_convention")
    @classmethod
    def validate_model_id_convention(cls, v: str) -> str:
        """Normalise and validate the naming convention name."""
        name = v.strip().lower()
        if name not in _KNOWN_CONVENTIONS:
            raise ValueError(
                f"MODEL_ID_CONVENTION must be one of {sorted(_KNOWN_CONVENTIONS)}"
            )
        return name


# Public accessor – manual caching to support special behaviour in tests
_CACHED_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:  # noqa: D401 – accessor helper
    """Return a **singleton** Settings instance unless running under pytest.

    Tests tweak the environment through ``monkeypatch`` and expect every call
    to observe those changes, so a fresh instance is built whenever
    ``PYTEST_CURRENT_TEST`` is present in the environment.
    """

    global _CACHED_SETTINGS  # noqa: PLW0603 – module-level singleton

    if "PYTEST_CURRENT_TEST" in os.environ:
        return Settings()

    if _CACHED_SETTINGS is None:
        _CACHED_SETTINGS = Settings()

    return _CACHED_SETTINGS


def _clear_settings_cache() -> None:  # noqa: D401 – helper for tests
    """Clear the internal Settings singleton."""

    global _CACHED_SETTINGS
    _CACHED_SETTINGS = None


get_settings.cache_clear = _clear_settings_cache  # type: ignore[attr-defined]
