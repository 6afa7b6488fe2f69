"""Hook entry point: read one payload from stdin, print one decision.

Usage: permissions-hook bash|read|write|web
       permissions-hook --validate
"""

import json
import sys

from . import audit, bash_hook, config, read_hook, web_hook, write_hook
from .decision import ABSTAIN, REASON_OVERSIZED, Abstain, Deny, HookInput

_MAX_INPUT = 10 * 1024 * 1024  # 10 MB
MAX_COMMAND_LEN = 100_000  # 100KB, generous for any real command

HOOK_EVALUATORS = {
    "bash": bash_hook.evaluate,
    "read": read_hook.evaluate,
    "write": write_hook.evaluate,
    "web": web_hook.evaluate,
}


def _parse_hook_input():
    """Read and parse the JSON hook payload from stdin. Returns None to fail open."""
    raw = sys.stdin.buffer.read(_MAX_INPUT + 1)
    if len(raw) > _MAX_INPUT:
        return None
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, ValueError):
        print("permissions-hook: malformed/empty JSON input, abstaining", file=sys.stderr)
        return None
    if not isinstance(data, dict):
        return None
    return HookInput.from_payload(data)


def format_output(decision):
    """Render a decision as hookSpecificOutput JSON, or None for Abstain."""
    if isinstance(decision, Abstain):
        return None
    return json.dumps(
        {
            "hookSpecificOutput": {
                "hookEventName": "PreToolUse",
                "permissionDecision": decision.permission,
                "permissionDecisionReason": decision.reason,
            }
        }
    )


def run_hook(hook_type, hook_input):
    """Dispatch to the evaluator for *hook_type* and return its decision."""
    evaluator = HOOK_EVALUATORS.get(hook_type)
    if evaluator is None:
        print(f"Unknown hook type: {hook_type}", file=sys.stderr)
        return ABSTAIN

    if hook_type == "bash":
        command = hook_input.get_input_str("command") or ""
        # Too large to analyse, so it is denied
        if len(command) > MAX_COMMAND_LEN:
            return Deny(REASON_OVERSIZED, rule="oversized")

    return evaluator(hook_input)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    if "--validate" in argv:
        return config.validate_config()

    hook_type = argv[0] if argv else ""
    hook_input = _parse_hook_input()
    if hook_input is None:
        return 0

    decision = run_hook(hook_type, hook_input)
    audit.record(hook_type, hook_input, decision)

    output = format_output(decision)
    if output is not None:
        print(output)
    return 0


def entrypoint():
    sys.exit(main())
