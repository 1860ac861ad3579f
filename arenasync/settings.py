import os

# Remote store: both are required, but their absence only fails store calls, not startup
STORE_URL = os.environ.get("STORE_URL", "")
STORE_KEY = os.environ.get("STORE_KEY", "")

REDIS_URL = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
SESSION_KEY = os.environ.get("SESSION_KEY", "arena_sync_user")

DESK_USERNAME = os.environ.get("DESK_USERNAME", "admin")
DESK_PASSWORD = os.environ.get("DESK_PASSWORD", "arena2024")
IDENTITY_URL = os.environ.get("IDENTITY_URL", "")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", "8000"))
