# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKNEST_APP_NAME": "App display name (default: tasknest).",
    "TASKNEST_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TASKNEST_DATA_DIR": "Local directory for the log file (default: .local/tasknest).",
    "TASKNEST_LOG_TO_FILE": "Write <data_dir>/tasknest.log at DEBUG level (true/false, default: true).",
    # Task store
    "TASKNEST_SEED_DEFAULT_TAGS": "Start with work/personal/urgent/shopping/health tags (default: true).",
    "TASKNEST_RANDOM_SEED": "Integer seed for tag colors and task ids (default: unset, random).",
    "TASKNEST_FALLBACK_COLOR": "Color shown for unknown tags (default: bg-gray-500).",
    # Console
    "TASKNEST_COLOR_OUTPUT": "Show color tokens next to tags (true/false, default: true).",
}
