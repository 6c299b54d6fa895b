"""
resolvediff.commands - CLI command implementations
"""

__all__ = [
    "config_cmd",
    "diff_cmd",
    "init",
]
