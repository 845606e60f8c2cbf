# ruff: noqa: E402
from __future__ import annotations

import sys
from pathlib import Path

# Ensure repository root is first on sys.path
_repo_root: Path = Path(__file__).resolve().parent.parent  # tests/ -> repo root
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

import pytest

from modelschema.synthesis.identity import simple_name


class MockSettings:  # Does NOT inherit from real Settings
    """Mock Settings class for testing."""

    debug: bool = False
    model_id_convention: str = "simple"
    expand_containers: bool = True

    def __init__(self, **kwargs):
        """Initialize with optional overrides for any attribute."""
        for key, value in self.__class__.__dict__.items():
            if not key.startswith("__") and not callable(value):
                setattr(self, key, value)

        for key, value in kwargs.items():
            setattr(self, key, value)


@pytest.fixture
def mock_settings():
    """Provide a plain MockSettings instance."""
    settings = MockSettings()
    yield settings


@pytest.fixture
def synthesizer():
    """Engine with the simple naming convention and container expansion on."""
    from modelschema.synthesis.engine import SchemaSynthesizer

    return SchemaSynthesizer(simple_name, expand_containers=True)


@pytest.fixture(autouse=True)
def _disable_dotenv(monkeypatch):
    """Prevent the Settings class from reading the developer *.env* file.

    Unit-tests must operate against a *clean* environment: the fixture patches
    ``Settings.model_config['env_file']`` to ``None`` and removes the
    variables the Settings fields are loaded from.  Individual tests remain
    free to set them again via ``monkeypatch``.
    """

    from modelschema.core.config import Settings  # Imported here to avoid circularity

    monkeypatch.setitem(Settings.model_config, "env_file", None)

    for name in ("DEBUG", "MODEL_ID_CONVENTION", "EXPAND_CONTAINERS"):
        monkeypatch.delenv(name, raising=False)
