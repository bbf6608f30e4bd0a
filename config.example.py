# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TRACKER_APP_NAME": "App display name (default: tracker).",
    "TRACKER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TRACKER_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
    # Storage
    "TRACKER_STORAGE_BACKEND": "Key-value backend for the task snapshot: sqlite | json (default: sqlite).",
    "TRACKER_STORAGE_KEY": "Key the task snapshot is stored under (default: tasks).",
    "TRACKER_VALIDATE_INPUT": (
        "Reject blank titles and non YYYY-MM-DD deadlines (true/false, default: true)."
    ),
    # Paths (gitignored)
    "TRACKER_DATA_DIR": "Local data directory, also holds tracker.log (default: .local/tracker).",
    "TRACKER_DB_PATH": "SQLite path (default: <data_dir>/tasks.sqlite3).",
    "TRACKER_JSON_PATH": "JSON file path (default: <data_dir>/tasks.json).",
}
