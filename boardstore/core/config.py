import os
from pathlib import Path

ENV = os.getenv("APP_ENV", "production").lower()
LOG_LEVEL = os.getenv("BOARDSTORE_LOG_LEVEL", "INFO").upper()

BOARDS_DIRNAME = "boards"
DB_FILENAME = "boards.db"
LEGACY_INDEX_FILENAME = "index.json"

ACTIVE_BOARD_KEY = "active_board_id"
LEGACY_MIGRATED_KEY = "legacy_json_migrated"


def get_data_dir() -> Path:
    """Per-install data directory, re-read from the environment on each call."""
    configured = os.getenv("BOARDSTORE_DATA_DIR")
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".boardstore"
