# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "VELVET_APP_NAME": "App display name (default: VelvetTodo).",
    "VELVET_LOG_LEVEL": "Console logging level (default: WARNING; the log file always gets DEBUG).",
    # LLM / OpenRouter
    "VELVET_OPENROUTER_API_KEY": "OpenRouter API key. Without it the app runs in offline demo mode.",
    "VELVET_OPENROUTER_BASE_URL": "OpenAI-compatible base URL (default: https://openrouter.ai/api/v1).",
    "VELVET_LLM_MODEL": "Model used to parse notes into tasks (default: google/gemini-2.5-flash).",
    "VELVET_LLM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "VELVET_LLM_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 60).",
    "VELVET_HTTP_REFERER": "Optional OpenRouter metadata header.",
    "VELVET_APP_TITLE": "Optional OpenRouter metadata header title.",
    # Paths (gitignored)
    "VELVET_DATA_DIR": "Local data directory (default: .local/velvet).",
    "VELVET_TASKS_DB_PATH": "Key/value SQLite path (default: <data_dir>/storage.sqlite3).",
    "VELVET_STORAGE_KEY": "Key holding the JSON task array (default: velvet-tasks).",
    # Calendar sync
    "VELVET_SYNC_LIMIT": "How many tasks /sync opens at most (default: 3).",
    "VELVET_OPEN_LINKS": "Open links in a browser (true) or just print them (false).",
}
