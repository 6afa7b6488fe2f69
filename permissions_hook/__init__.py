"""PreToolUse permission hook: auto-approve safe tool calls, block secrets and rm -rf."""

__version__ = "0.1.0"
