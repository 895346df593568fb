import os
from pathlib import Path

# Debug logging knobs
DEBUG = os.getenv("AI_EDIT_DEBUG", "").lower() in ("1", "true", "yes")
DEBUG_LOG_PATH = os.getenv(
    "AI_EDIT_DEBUG_LOG", str(Path.home() / ".ai_edit" / "edit-debug.log")
)
# AI_EDIT_DEBUG_DUMP_VERBOSE=1: write full buffers to the debug log (no truncation).
# Default: false (truncated preview).
DEBUG_DUMP_VERBOSE = os.getenv("AI_EDIT_DEBUG_DUMP_VERBOSE", "false").lower() in ("1", "true", "yes")
DEBUG_DUMP_MAX_LINES = int(os.getenv("AI_EDIT_DEBUG_DUMP_MAX_LINES", "20"))
DEBUG_DUMP_MAX_CHARS = int(os.getenv("AI_EDIT_DEBUG_DUMP_MAX_CHARS", "2000"))

# Edit tool knobs
ROOT = Path(os.getenv("AI_EDIT_ROOT", os.getcwd())).resolve()
# Block-anchor scoring is quadratic per line pair; refuse files above this size.
MAX_CONTENT_CHARS = int(os.getenv("AI_EDIT_MAX_CONTENT_CHARS", "2000000"))
