"""Read, Glob and Grep tool policy."""

from . import paths
from .decision import (
    ABSTAIN,
    REASON_FILE_ALLOWED,
    REASON_GLOB_SECRETS,
    REASON_PATH_ALLOWED,
    REASON_SECRETS,
    Allow,
    Decision,
    Deny,
    HookInput,
)


def _evaluate_read(hook_input, cwd):
    file_path = hook_input.get_input_str("file_path")
    if file_path is None:
        return ABSTAIN

    normalized = paths.normalize_path(file_path, cwd)
    if paths.is_secrets_file(normalized):
        return Deny(REASON_SECRETS)
    if paths.is_in_allowed_dir(normalized, cwd):
        return Allow(REASON_FILE_ALLOWED)
    return ABSTAIN


def _evaluate_glob(hook_input, cwd):
    pattern = hook_input.get_input_str("pattern")
    if pattern is not None and paths.glob_targets_secrets(pattern):
        return Deny(REASON_GLOB_SECRETS)

    # No path means the search runs from the cwd
    path = hook_input.get_input_str("path")
    if path is None:
        path = cwd
    if not path:
        return ABSTAIN

    normalized = paths.normalize_path(path, cwd)
    if paths.is_in_allowed_dir(normalized, cwd):
        return Allow(REASON_PATH_ALLOWED)
    return ABSTAIN


def _evaluate_grep(hook_input, cwd):
    path = hook_input.get_input_str("path")
    if path is None:
        path = cwd
    if not path:
        return ABSTAIN

    normalized = paths.normalize_path(path, cwd)
    if paths.is_secrets_file(normalized):
        return Deny(REASON_SECRETS)
    if paths.is_in_allowed_dir(normalized, cwd):
        return Allow(REASON_PATH_ALLOWED)
    return ABSTAIN


_EVALUATORS = {
    "Read": _evaluate_read,
    "Glob": _evaluate_glob,
    "Grep": _evaluate_grep,
}


def evaluate(hook_input: HookInput) -> Decision:
    evaluator = _EVALUATORS.get(hook_input.tool_name or "")
    if evaluator is None:
        return ABSTAIN
    return evaluator(hook_input, hook_input.cwd or "")
