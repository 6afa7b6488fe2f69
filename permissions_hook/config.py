"""Environment-driven configuration.

All settings are read once at import. Tests that need different values
monkeypatch the module attributes directly.
"""

import json
import os
import sys
import tempfile
from pathlib import Path

HOME_DIR = os.environ.get("PERMISSIONS_HOOK_HOME") or str(Path.home())

# Directories that are always allowed for read access, in addition to the cwd
DEFAULT_ALLOWED_DIRS = (
    f"{HOME_DIR}/workspace",
    "/etc/ig",
    f"{HOME_DIR}/.config/zl",
)

LOG_LEVEL = os.environ.get("PERMISSIONS_HOOK_LOG_LEVEL", "actions").lower()


def _validate_user_path(p, default):
    """Ensure path is within user's home or temp directory. Falls back to default."""
    try:
        resolved = Path(p).resolve()
        home = Path.home().resolve()
        tmp = Path(tempfile.gettempdir()).resolve()
        if str(resolved).startswith(str(home)) or str(resolved).startswith(str(tmp)):
            return resolved
    except (OSError, ValueError):
        pass
    return default


_DEFAULT_DB_PATH = Path.home() / ".claude" / "logs" / "permissions-hook.db"
DB_PATH = _validate_user_path(
    os.environ.get("PERMISSIONS_HOOK_DB_PATH", str(_DEFAULT_DB_PATH)),
    _DEFAULT_DB_PATH,
)


def load_extra_dirs(path=None):
    """Load additional always-allowed directories from a JSON file.

    Set PERMISSIONS_HOOK_EXTRA_DIRS to the path of a JSON file containing
    an array of absolute directory prefixes, e.g.

        ["/opt/shared/docs", "/Users/me/notes"]

    Entries that are not non-empty absolute strings are skipped.
    """
    dirs_path = path or os.environ.get("PERMISSIONS_HOOK_EXTRA_DIRS")
    if not dirs_path:
        return []
    try:
        with open(dirs_path) as f:
            raw = json.load(f)
        return [d for d in raw if isinstance(d, str) and d.startswith("/")]
    except (OSError, json.JSONDecodeError, TypeError):
        return []  # Fail silently: bad config should not break the hook


ALLOWED_DIRS = DEFAULT_ALLOWED_DIRS + tuple(load_extra_dirs())


def validate_extra_dirs_file(path, env_var="PERMISSIONS_HOOK_EXTRA_DIRS"):
    """Validate an extra-dirs JSON file. Returns (issues, count) tuple."""
    issues = []
    if not os.path.exists(path):
        issues.append(f"{env_var}: file not found: {path}")
        return issues, 0
    try:
        with open(path) as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        issues.append(f"{env_var}: invalid JSON: {e}")
        return issues, 0
    except OSError as e:
        issues.append(f"{env_var}: cannot read file: {e}")
        return issues, 0
    if not isinstance(raw, list):
        issues.append(f"{env_var}: expected JSON array, got {type(raw).__name__}")
        return issues, 0
    if not raw:
        issues.append(f"{env_var}: file contains empty array (no directories)")
        return issues, 0

    for i, entry in enumerate(raw):
        pfx = f"{env_var}[{i}]"
        if not isinstance(entry, str):
            issues.append(f"{pfx}: expected string, got {type(entry).__name__}")
        elif not entry:
            issues.append(f"{pfx}: empty path (would allow every path)")
        elif not entry.startswith("/"):
            issues.append(f"{pfx}: {entry!r} is not an absolute path")
    return issues, len(raw)


def validate_config():
    """Validate configuration files named in the environment.

    Output channels follow hook conventions:
      - Success (exit 0): stdout (shown in transcript)
      - Failure (exit 2): stderr (fed back to the agent)
    """
    dirs_path = os.environ.get("PERMISSIONS_HOOK_EXTRA_DIRS")
    if not dirs_path:
        return 0  # Nothing configured, nothing to validate

    issues, count = validate_extra_dirs_file(dirs_path)
    if issues:
        print("Permissions hook config: validation failed:", file=sys.stderr)
        for issue in issues:
            print(f"  ✗ {issue}", file=sys.stderr)
        return 2
    print(f"Permissions hook config: {count} extra allowed dir(s) from {dirs_path}")
    return 0
