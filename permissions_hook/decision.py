"""Decision variants and the hook payload record."""

from dataclasses import dataclass, field

REASON_RM_RF = "rm -rf is never allowed"
REASON_SECRETS = "Access to secrets files (.env, .dev.vars) is blocked"
REASON_DESTRUCTIVE = "Command contains destructive operations"
REASON_SAFE_COMMAND = "Safe read-only/build command"
REASON_FILE_ALLOWED = "File within allowed directories"
REASON_PATH_ALLOWED = "Path within allowed directories"
REASON_GLOB_SECRETS = "Glob pattern targets secrets files"
REASON_WRITE_SECRETS = "Writing to secrets files (.env, .dev.vars) is blocked"
REASON_WEB = "Web operations auto-approved"
REASON_OVERSIZED = "Command too large for permission analysis"

# `rule` names the rule that produced a decision, for the audit log only.
# It never takes part in equality.


@dataclass(frozen=True)
class Allow:
    reason: str
    rule: str | None = field(default=None, compare=False)
    permission = "allow"


@dataclass(frozen=True)
class Deny:
    reason: str
    rule: str | None = field(default=None, compare=False)
    permission = "deny"


@dataclass(frozen=True)
class Ask:
    reason: str
    rule: str | None = field(default=None, compare=False)
    permission = "ask"


@dataclass(frozen=True)
class Abstain:
    """No opinion: the agent falls back to its own permission settings."""

    permission = None


ABSTAIN = Abstain()

Decision = Allow | Deny | Ask | Abstain


@dataclass
class HookInput:
    """One PreToolUse payload as read from stdin."""

    tool_name: str | None = None
    tool_input: dict | None = None
    cwd: str | None = None
    session_id: str | None = None
    tool_use_id: str | None = field(default=None, repr=False)

    @classmethod
    def from_payload(cls, data: dict) -> "HookInput":
        """Build from decoded JSON, dropping fields of the wrong type."""

        def _str(key):
            value = data.get(key)
            return value if isinstance(value, str) else None

        tool_input = data.get("tool_input")
        return cls(
            tool_name=_str("tool_name"),
            tool_input=tool_input if isinstance(tool_input, dict) else None,
            cwd=_str("cwd"),
            session_id=_str("session_id"),
            tool_use_id=_str("tool_use_id"),
        )

    def get_input_str(self, key: str) -> str | None:
        if not self.tool_input:
            return None
        value = self.tool_input.get(key)
        return value if isinstance(value, str) else None
