"""Write and Edit tool policy.

Only writes to secrets files are decided here; everything else falls through
to the agent's default approval.
"""

from . import paths
from .decision import ABSTAIN, REASON_WRITE_SECRETS, Decision, Deny, HookInput


def evaluate(hook_input: HookInput) -> Decision:
    file_path = hook_input.get_input_str("file_path")
    if file_path is None:
        return ABSTAIN

    normalized = paths.normalize_path(file_path, hook_input.cwd or "")
    if paths.is_secrets_file(normalized):
        return Deny(REASON_WRITE_SECRETS)
    return ABSTAIN
