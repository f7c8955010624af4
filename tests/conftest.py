import sys
from pathlib import Path

import pytest


def _ensure_local_package_on_path() -> None:
    root_dir = Path(__file__).resolve().parents[1]
    if str(root_dir) not in sys.path:
        sys.path.insert(0, str(root_dir))


_ensure_local_package_on_path()

from translation_gateway.core.config import AppSettings, get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep host environment variables from leaking into AppSettings."""
    for alias in AppSettings.setting_aliases():
        monkeypatch.delenv(alias, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
