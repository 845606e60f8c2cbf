from __future__ import annotations

import pytest
from pydantic import ValidationError

from modelschema.core.config import _KNOWN_CONVENTIONS, Settings, get_settings
from modelschema.synthesis.identity import NAMING_CONVENTIONS


def test_defaults() -> None:
    """Settings defaults apply when the environment is clean."""
    settings = Settings()

    assert settings.debug is False
    assert settings.model_id_convention == "simple"
    assert settings.expand_containers is True


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables are picked up case-insensitively."""
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("MODEL_ID_CONVENTION", "Qualified")
    monkeypatch.setenv("EXPAND_CONTAINERS", "0")

    settings = Settings()

    assert settings.debug is True
    assert settings.model_id_convention == "qualified"
    assert settings.expand_containers is False


def test_unknown_convention_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(model_id_convention="camel")


def test_known_conventions_match_registry() -> None:
    """Every convention the registry offers is accepted by the validator."""
    for name in NAMING_CONVENTIONS:
        assert Settings(model_id_convention=name).model_id_convention == name


def test_known_conventions_mirror_registry() -> None:
    """The validator's copy of the convention names stays in sync."""
    assert _KNOWN_CONVENTIONS == set(NAMING_CONVENTIONS)


def test_get_settings_fresh_instance_under_pytest(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Under pytest every call observes the current environment."""
    first = get_settings()
    monkeypatch.setenv("MODEL_ID_CONVENTION", "qualified")
    second = get_settings()

    assert first is not second
    assert first.model_id_convention == "simple"
    assert second.model_id_convention == "qualified"


def test_get_settings_singleton_outside_pytest(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Outside pytest the instance is cached until ``cache_clear``."""
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    get_settings.cache_clear()  # type: ignore[attr-defined]
    try:
        first = get_settings()
        assert get_settings() is first

        get_settings.cache_clear()  # type: ignore[attr-defined]
        assert get_settings() is not first
    finally:
        get_settings.cache_clear()  # type: ignore[attr-defined]
