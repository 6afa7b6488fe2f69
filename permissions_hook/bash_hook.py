"""Bash tool policy: fold per-segment classifications into one decision."""

from .classifier import Verdict, classify_segment
from .decision import (
    ABSTAIN,
    REASON_DESTRUCTIVE,
    REASON_RM_RF,
    REASON_SAFE_COMMAND,
    REASON_SECRETS,
    Allow,
    Ask,
    Decision,
    Deny,
    HookInput,
)
from .splitter import split_compound_command


def evaluate_command(command: str, cwd: str) -> Decision:
    """Evaluate a possibly-compound shell command run from *cwd*.

    Segments are checked left to right. ``cd`` segments move the working
    directory for the segments after them. A hard deny, a secrets deny, or
    an unrecognized segment ends evaluation at once; destructive segments
    are remembered and turn the final Allow into an Ask.

    Pure: no I/O and no state kept between calls. The rule behind a Deny or
    Ask is carried on the decision's ``rule`` for the caller to log.
    """
    command = command.strip()
    if not command:
        return ABSTAIN

    ask_rule = None
    current_dir = cwd

    for segment in split_compound_command(command):
        seg = segment.strip()
        if not seg:
            continue

        result = classify_segment(seg, current_dir)
        verdict = result.verdict

        if verdict is Verdict.DIRECTORY_CHANGE:
            current_dir = result.cwd
        elif verdict is Verdict.HARD_DENY:
            return Deny(REASON_RM_RF, rule=result.rule)
        elif verdict is Verdict.SECRET_DENY:
            return Deny(REASON_SECRETS, rule=result.rule)
        elif verdict is Verdict.DESTRUCTIVE_ASK:
            # First destructive rule is the one reported
            ask_rule = ask_rule or result.rule
        elif verdict is Verdict.UNRECOGNIZED:
            return ABSTAIN

    if ask_rule:
        return Ask(REASON_DESTRUCTIVE, rule=ask_rule)
    return Allow(REASON_SAFE_COMMAND, rule="safe")


def evaluate(hook_input: HookInput) -> Decision:
    """Evaluate a Bash tool invocation."""
    command = hook_input.get_input_str("command")
    if command is None:
        return ABSTAIN
    return evaluate_command(command, hook_input.cwd or "")
