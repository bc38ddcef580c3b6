# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "NOTELEAF_APP_NAME": "App display name (default: noteleaf).",
    "NOTELEAF_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "NOTELEAF_DATA_DIR": "Local data directory (default: .local/noteleaf).",
    "NOTELEAF_LOG_DIR": "Log directory (default: <data_dir>/logs).",
    # Tasks
    "NOTELEAF_STATUS_TAXONOMY": (
        "Status taxonomy for new tasks: 'current' (todo/in-progress/blocked/done/abandoned) "
        "or 'legacy' (pending/completed/deleted). Default: current."
    ),
}
