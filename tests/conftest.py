"""Pytest configuration: load .env, and keep the settings file inside tmp_path."""
from pathlib import Path

import pytest

# Load .env from project root (parent of tests/)
_root = Path(__file__).resolve().parent.parent
_env = _root / ".env"
if _env.exists():
    from dotenv import load_dotenv
    load_dotenv(_env)


@pytest.fixture(autouse=True)
def settings_file(monkeypatch, tmp_path):
    """Settings store points at a temp file so tests never read data/settings.json."""
    f = tmp_path / "settings.json"
    monkeypatch.setattr("settings.config.SETTINGS_FILE", str(f))
    yield f
