"""SQLite audit log: one row per hook decision.

Only the CLI writes here, after the decision is made. Logging never affects
a decision: database and filesystem errors are swallowed.
"""

import contextlib
import datetime
import os
import sqlite3

from . import config

# Permissions recorded at the "actions" level; "all" adds allow and abstain
_ACTION_PERMISSIONS = frozenset({"deny", "ask"})

# Payload fields tried in order for the row's subject
_SUBJECT_FIELDS = ("command", "file_path", "path", "pattern", "url", "query")
_MAX_SUBJECT_LEN = 500

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS decisions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        ts TEXT NOT NULL,
        session_id TEXT,
        tool_use_id TEXT,
        hook TEXT NOT NULL,
        tool TEXT,
        permission TEXT NOT NULL,
        rule TEXT,
        reason TEXT,
        subject TEXT
    );
    CREATE INDEX IF NOT EXISTS idx_decisions_session ON decisions(session_id);
    CREATE INDEX IF NOT EXISTS idx_decisions_ts ON decisions(ts);
"""


def _should_record(decision):
    if config.LOG_LEVEL == "off":
        return False
    permission = decision.permission or "abstain"
    return config.LOG_LEVEL == "all" or permission in _ACTION_PERMISSIONS


def _connect(db_path):
    """Open the audit database owner-only, in WAL mode, creating the schema."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with contextlib.suppress(OSError):
        os.chmod(str(db_path.parent), 0o700)
    # WAL/SHM side files inherit the umask
    old_umask = os.umask(0o177)
    try:
        conn = sqlite3.connect(str(db_path), timeout=5)
    finally:
        os.umask(old_umask)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA busy_timeout=1000")
    conn.executescript(_SCHEMA)
    os.chmod(str(db_path), 0o600)
    return conn


def _subject(hook_input):
    for key in _SUBJECT_FIELDS:
        value = hook_input.get_input_str(key)
        if value:
            return value[:_MAX_SUBJECT_LEN]
    return None


def record(hook_type, hook_input, decision):
    """Write one decision row, if the configured level asks for it."""
    if not _should_record(decision):
        return
    row = (
        datetime.datetime.now(datetime.timezone.utc).isoformat(),
        hook_input.session_id,
        hook_input.tool_use_id,
        hook_type or "unknown",
        hook_input.tool_name,
        decision.permission or "abstain",
        getattr(decision, "rule", None),
        getattr(decision, "reason", None),
        _subject(hook_input),
    )
    try:
        with contextlib.closing(_connect(config.DB_PATH)) as conn, conn:
            conn.execute(
                "INSERT INTO decisions "
                "(ts, session_id, tool_use_id, hook, tool, permission, rule, reason, subject) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                row,
            )
    except (sqlite3.Error, OSError):
        pass
