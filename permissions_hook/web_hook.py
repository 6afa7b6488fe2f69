"""WebFetch and WebSearch are always allowed."""

from .decision import REASON_WEB, Allow, Decision, HookInput


def evaluate(hook_input: HookInput) -> Decision:
    return Allow(REASON_WEB)
