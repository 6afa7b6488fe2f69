"""Classify one command segment.

Tokens are whitespace-split words. Quote characters stay attached to the
tokens; only the secrets check strips one layer of them.
"""

import enum
from typing import NamedTuple

from . import paths

# ── Rule tables ──

# Safe read-only commands (first token whitelist)
SAFE_COMMANDS = frozenset(
    {
        "cat", "head", "tail", "less", "more", "wc", "file", "stat", "du", "df",
        "ls", "find", "grep", "rg", "ag", "sort", "uniq", "diff", "comm", "tr",
        "cut", "jq", "yq", "which", "type", "command", "echo", "printf", "date",
        "uname", "whoami", "hostname", "pwd", "env", "printenv", "id", "groups",
        "test", "true", "false",
    }
)  # fmt: skip

# Read-only git subcommands
SAFE_GIT_SUBCOMMANDS = frozenset(
    {
        "status", "log", "diff", "show", "branch", "tag", "remote", "describe",
        "rev-parse", "ls-files", "ls-tree", "blame", "shortlog",
    }
)  # fmt: skip

GIT_CONFIG_READ_FLAGS = frozenset({"--get", "--get-all", "--get-regexp", "--list", "-l"})

# Build/lint/test tools, allowed with any arguments (cargo is narrowed below)
SAFE_BUILD_COMMANDS = frozenset(
    {
        "cargo", "pytest", "mypy", "ruff", "black", "flake8", "pylint",
        "eslint", "prettier", "tsc", "biome", "golangci-lint", "make", "cmake",
        "curl", "wget", "brew",
    }
)  # fmt: skip

SAFE_CARGO_SUBCOMMANDS = frozenset({"test", "build", "check", "clippy", "fmt"})

PKG_MANAGERS = frozenset({"npm", "pnpm", "yarn", "bun"})
SAFE_PKG_SUBCOMMANDS = frozenset({"test", "run", "build", "lint", "typecheck", "check", "exec"})

# Package runners act as transparent wrappers around the command they run
PKG_RUNNERS = frozenset({"npx", "uvx", "pnpx", "bunx"})
# Runner flags that consume the following token as their value
PKG_RUNNER_VALUE_FLAGS = frozenset({"-p", "--package"})
MAX_UNWRAP_DEPTH = 4

SAFE_GO_SUBCOMMANDS = frozenset({"test", "vet", "build"})

PYTHON_INTERPRETERS = frozenset({"python", "python3"})
SAFE_PYTHON_MODULES = frozenset({"pytest", "mypy", "ruff", "black"})

GH_ALWAYS_SAFE_SUBCOMMANDS = frozenset({"api", "status", "search"})
# Only safe when followed by a read-only sub-subcommand
GH_SUBCOMMANDS_NEEDING_CHECK = frozenset(
    {"pr", "issue", "repo", "run", "workflow", "release", "label", "project"}
)
SAFE_GH_SUB_SUBCOMMANDS = frozenset({"view", "list", "diff", "checks", "status", "ls"})

DESTRUCTIVE_COMMANDS = frozenset({"rm", "mv", "chmod", "chown"})
DESTRUCTIVE_GIT_SUBCOMMANDS = frozenset({"rm", "rebase", "clean"})
FORCE_FLAGS = frozenset({"-f", "--force"})


class Verdict(enum.Enum):
    DIRECTORY_CHANGE = "cd"
    HARD_DENY = "hard-deny"
    SECRET_DENY = "secret-deny"
    DESTRUCTIVE_ASK = "destructive-ask"
    SAFE_ALLOW = "safe-allow"
    UNRECOGNIZED = "unrecognized"


class Classification(NamedTuple):
    verdict: Verdict
    rule: str | None = None
    cwd: str | None = None


_SAFE = Classification(Verdict.SAFE_ALLOW)
_UNRECOGNIZED = Classification(Verdict.UNRECOGNIZED)


def extract_cd_target(tokens, current_dir):
    """Return the directory a ``cd`` segment moves to, or None if not a cd."""
    if not tokens or tokens[0] != "cd":
        return None
    target = tokens[1] if len(tokens) > 1 else "~"
    return paths.normalize_path(target, current_dir)


def is_rm_rf(tokens):
    """Check if a command is ``rm`` with both recursive and force flags, in any form."""
    if not tokens or tokens[0] != "rm":
        return False

    has_recursive = False
    has_force = False
    for token in tokens[1:]:
        if not token.startswith("-"):
            continue
        if token == "--recursive":
            has_recursive = True
        elif token == "--force":
            has_force = True
        elif not token.startswith("--"):
            # Short flag cluster: -rf, -fr, -rfi. Only lowercase r counts
            has_recursive = has_recursive or "r" in token
            has_force = has_force or "f" in token
    return has_recursive and has_force


def is_destructive(tokens):
    """Return a rule name if the command needs confirmation, else None."""
    if not tokens:
        return None
    cmd = tokens[0]
    if cmd in DESTRUCTIVE_COMMANDS:
        return cmd
    if cmd != "git" or len(tokens) < 2:
        return None

    subcmd = tokens[1]
    if subcmd in DESTRUCTIVE_GIT_SUBCOMMANDS:
        return f"git-{subcmd}"
    if subcmd == "reset" and "--hard" in tokens:
        return "git-reset-hard"
    if subcmd == "checkout" and "." in tokens:
        return "git-checkout-dot"
    if any(t in FORCE_FLAGS for t in tokens[2:]):
        return "git-force"
    return None


def unwrap_pkg_runner(tokens):
    """Strip a package runner and its leading flags, returning the inner command."""
    i = 1
    while i < len(tokens) and tokens[i].startswith("-"):
        flag = tokens[i]
        i += 1
        if flag in PKG_RUNNER_VALUE_FLAGS and i < len(tokens):
            i += 1
    return tokens[i:]


def _is_safe_git(tokens):
    if len(tokens) < 2:
        return False
    subcmd = tokens[1]
    if subcmd in SAFE_GIT_SUBCOMMANDS:
        return True
    if subcmd == "stash":
        return len(tokens) > 2 and tokens[2] == "list"
    if subcmd == "config":
        return any(t in GIT_CONFIG_READ_FLAGS for t in tokens)
    return False


def _is_safe_gh(tokens):
    if len(tokens) < 2:
        return False
    subcmd = tokens[1]
    if subcmd in GH_ALWAYS_SAFE_SUBCOMMANDS:
        return True
    if subcmd in GH_SUBCOMMANDS_NEEDING_CHECK:
        # Bare `gh pr` / `gh issue` with no action is not safe
        return len(tokens) > 2 and tokens[2] in SAFE_GH_SUB_SUBCOMMANDS
    return False


def _second_in(tokens, allowed):
    return len(tokens) > 1 and tokens[1] in allowed


def is_safe_command(tokens):
    """Check the whitelist tables. Package runners are handled by the caller."""
    if not tokens:
        return False
    cmd = tokens[0]

    if cmd in SAFE_COMMANDS:
        return True
    if cmd in SAFE_BUILD_COMMANDS:
        if cmd == "cargo":
            return _second_in(tokens, SAFE_CARGO_SUBCOMMANDS)
        return True
    if cmd == "git":
        return _is_safe_git(tokens)
    if cmd == "gh":
        return _is_safe_gh(tokens)
    if cmd in PKG_MANAGERS:
        return _second_in(tokens, SAFE_PKG_SUBCOMMANDS)
    if cmd == "go":
        return _second_in(tokens, SAFE_GO_SUBCOMMANDS)
    if cmd in PYTHON_INTERPRETERS:
        return len(tokens) > 2 and tokens[1] == "-m" and tokens[2] in SAFE_PYTHON_MODULES
    return False


def _classify_tokens(tokens, depth):
    """Steps after cd tracking: hard deny, secrets, destructive, whitelist."""
    if not tokens:
        return _UNRECOGNIZED
    if is_rm_rf(tokens):
        return Classification(Verdict.HARD_DENY, "rm-rf")
    if paths.args_reference_secrets(tokens[1:]):
        return Classification(Verdict.SECRET_DENY, "secrets")
    rule = is_destructive(tokens)
    if rule:
        return Classification(Verdict.DESTRUCTIVE_ASK, rule)

    if tokens[0] in PKG_RUNNERS:
        if depth >= MAX_UNWRAP_DEPTH:
            return _UNRECOGNIZED
        return _classify_tokens(unwrap_pkg_runner(tokens), depth + 1)
    if is_safe_command(tokens):
        return _SAFE
    return _UNRECOGNIZED


def classify_segment(segment: str, cwd: str) -> Classification:
    """Classify one trimmed, non-empty command segment.

    A ``cd`` reports the resolved directory and nothing else is checked.
    Otherwise the first matching rule wins, in this order: ``rm`` with
    recursive and force flags, any secrets-file argument, a destructive
    command, the whitelist tables. Package runners (``npx`` and friends) are
    unwrapped and the command they run is classified in their place.
    """
    tokens = segment.split()
    new_dir = extract_cd_target(tokens, cwd)
    if new_dir is not None:
        return Classification(Verdict.DIRECTORY_CHANGE, "cd", new_dir)
    return _classify_tokens(tokens, 0)
