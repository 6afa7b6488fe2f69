"""Lexical path helpers: normalization, allowed directories, secrets files.

Nothing here touches the filesystem. Paths that do not exist are handled
exactly like paths that do, and symlinks are never followed.
"""

from . import config

SECRETS_BASENAMES = frozenset({".env", ".dev.vars"})
SECRETS_PREFIX = ".env."

# Lower-cased fragments that mark a glob pattern as aimed at secrets files
_SECRETS_GLOB_FRAGMENTS = (".env", ".dev.vars")


def normalize_path(path: str, cwd: str) -> str:
    """Resolve *path* against *cwd*, collapsing ``.`` and ``..`` components.

    ``~`` on its own maps to the configured home directory. A ``..`` with
    nothing left to pop is discarded; the root of an absolute path is never
    popped. With an empty *cwd* a relative path stays relative.
    """
    if path == "~":
        path = config.HOME_DIR

    if path.startswith("/"):
        absolute = path
    elif cwd:
        absolute = f"{cwd.rstrip('/')}/{path}"
    else:
        absolute = path

    parts = []
    for part in absolute.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if parts:
                parts.pop()
            continue
        parts.append(part)

    joined = "/".join(parts)
    if absolute.startswith("/"):
        return "/" + joined
    return joined


def is_in_allowed_dir(path: str, cwd: str) -> bool:
    """Check if a normalized path is within the cwd or an allowed directory.

    This is a plain string-prefix test, not a path-component test:
    ``/etc/ignition`` is treated as inside ``/etc/ig``. An empty cwd never
    matches.
    """
    if cwd and path.startswith(cwd):
        return True
    return any(path.startswith(d) for d in config.ALLOWED_DIRS)


def _basename(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1]


def is_secrets_file(path: str) -> bool:
    """Check if the final component is a secrets file (.env, .env.*, .dev.vars)."""
    name = _basename(path)
    return name in SECRETS_BASENAMES or name.startswith(SECRETS_PREFIX)


def glob_targets_secrets(pattern: str) -> bool:
    lower = pattern.lower()
    return any(fragment in lower for fragment in _SECRETS_GLOB_FRAGMENTS)


def strip_quotes(s: str) -> str:
    """Strip one layer of matching surrounding single or double quotes."""
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        return s[1:-1]
    return s


def args_reference_secrets(args) -> bool:
    """Check if any non-flag argument token names a secrets file.

    Tokens are whitespace-split words; anything starting with ``-`` after
    quote stripping is a flag and skipped, including ``--file=.env``.
    """
    for arg in args:
        stripped = strip_quotes(arg)
        if stripped.startswith("-"):
            continue
        if is_secrets_file(stripped):
            return True
    return False
