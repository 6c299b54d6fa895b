"""
resolvediff.config.defaults - Built-in configuration values
"""

CONFIG_FILE_NAME = ".resolvediff.toml"

ENV_PREFIX = "RESOLVEDIFF_"

OUTPUT_FORMATS = ("text", "json", "markdown", "csv")

DEFAULT_CONFIG = {
    "diff": {
        # Workspace member names always treated as modified
        "modified": [],
        # URL prefix of workspace members living on the local filesystem
        "scheme": "path+file://",
        # 0 = unlimited
        "max_depth": 0,
        # Check every edge of both snapshots before diffing
        "strict": False,
    },
    "output": {
        "format": "text",
        "paths": True,
    },
}
