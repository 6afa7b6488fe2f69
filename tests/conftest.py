import pytest

from permissions_hook import config

HOME = "/home/dev"


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """Pin home and allowed dirs, and keep the audit log out of the real home."""
    monkeypatch.setattr(config, "HOME_DIR", HOME)
    monkeypatch.setattr(
        config,
        "ALLOWED_DIRS",
        (f"{HOME}/workspace", "/etc/ig", f"{HOME}/.config/zl"),
    )
    monkeypatch.setattr(config, "LOG_LEVEL", "off")
    monkeypatch.setattr(config, "DB_PATH", tmp_path / "audit.db")
