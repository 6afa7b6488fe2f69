"""Tests for the extra-dirs loader and --validate checks"""

import json

import pytest

from permissions_hook import config


@pytest.fixture
def dirs_file(tmp_path):
    def _write(content):
        path = tmp_path / "dirs.json"
        path.write_text(content if isinstance(content, str) else json.dumps(content))
        return str(path)

    return _write


class TestLoadExtraDirs:
    def test_valid(self, dirs_file):
        assert config.load_extra_dirs(dirs_file(["/opt/docs", "/srv"])) == ["/opt/docs", "/srv"]

    def test_invalid_entries_skipped(self, dirs_file):
        path = dirs_file(["/opt/docs", "relative", "", 42, None])
        assert config.load_extra_dirs(path) == ["/opt/docs"]

    @pytest.mark.parametrize(
        "content",
        ["{broken", "42", "null"],
        ids=["broken-json", "number", "null"],
    )
    def test_bad_file_ignored(self, dirs_file, content):
        assert config.load_extra_dirs(dirs_file(content)) == []

    def test_missing_file(self, tmp_path):
        assert config.load_extra_dirs(str(tmp_path / "nope.json")) == []

    def test_env_var(self, dirs_file, monkeypatch):
        monkeypatch.setenv("PERMISSIONS_HOOK_EXTRA_DIRS", dirs_file(["/opt/docs"]))
        assert config.load_extra_dirs() == ["/opt/docs"]

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("PERMISSIONS_HOOK_EXTRA_DIRS", raising=False)
        assert config.load_extra_dirs() == []


class TestValidateExtraDirsFile:
    def test_valid(self, dirs_file):
        issues, count = config.validate_extra_dirs_file(dirs_file(["/opt/docs", "/srv"]))
        assert issues == []
        assert count == 2

    @pytest.mark.parametrize(
        "content, fragment",
        [
            ("{broken", "invalid JSON"),
            ({"dirs": ["/opt"]}, "expected JSON array, got dict"),
            ([], "empty array"),
            ([7], "expected string, got int"),
            ([""], "empty path"),
            (["opt/docs"], "'opt/docs' is not an absolute path"),
        ],
        ids=["broken", "object", "empty-array", "number", "empty-string", "relative"],
    )
    def test_issues(self, dirs_file, content, fragment):
        issues, _ = config.validate_extra_dirs_file(dirs_file(content))
        assert len(issues) == 1
        assert fragment in issues[0]

    def test_entry_index_reported(self, dirs_file):
        issues, count = config.validate_extra_dirs_file(dirs_file(["/ok", "bad"]))
        assert issues == ["PERMISSIONS_HOOK_EXTRA_DIRS[1]: 'bad' is not an absolute path"]
        assert count == 2

    def test_file_not_found(self, tmp_path):
        issues, count = config.validate_extra_dirs_file(str(tmp_path / "missing.json"))
        assert "file not found" in issues[0]
        assert count == 0


class TestValidateConfig:
    def test_nothing_configured(self, monkeypatch, capsys):
        monkeypatch.delenv("PERMISSIONS_HOOK_EXTRA_DIRS", raising=False)
        assert config.validate_config() == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_success_on_stdout(self, dirs_file, monkeypatch, capsys):
        path = dirs_file(["/opt/docs"])
        monkeypatch.setenv("PERMISSIONS_HOOK_EXTRA_DIRS", path)
        assert config.validate_config() == 0
        captured = capsys.readouterr()
        assert captured.out.strip() == f"Permissions hook config: 1 extra allowed dir(s) from {path}"
        assert captured.err == ""

    def test_failure_on_stderr(self, dirs_file, monkeypatch, capsys):
        monkeypatch.setenv("PERMISSIONS_HOOK_EXTRA_DIRS", dirs_file(["relative"]))
        assert config.validate_config() == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "validation failed" in captured.err
        assert "✗" in captured.err
