"""
Application settings.

Read once at import time. Every value can be overridden with a DRAUGHTS_* environment variable.
"""

import os

DATABASE_URL: str = os.environ.get("DRAUGHTS_DATABASE_URL", "sqlite:///draughts.db")
DATABASE_ECHO: bool = os.environ.get("DRAUGHTS_DATABASE_ECHO", "0") == "1"

DEFAULT_VARIANT: str = os.environ.get("DRAUGHTS_DEFAULT_VARIANT", "international")

# Draw rules
REPETITION_THRESHOLD: int = int(os.environ.get("DRAUGHTS_REPETITION_THRESHOLD", "3"))
FIFTY_MOVE_LIMIT: int = int(os.environ.get("DRAUGHTS_FIFTY_MOVE_LIMIT", "50"))

# Only the newest positions are kept for repetition checks
POSITION_HISTORY_LIMIT: int = int(
    os.environ.get("DRAUGHTS_POSITION_HISTORY_LIMIT", "200")
)
