import os
import sys
import time

from . import config


def _append_log(line: str) -> None:
    try:
        log_path = config.DEBUG_LOG_PATH
        os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)
        with open(log_path, "a") as f:
            f.write(line)
    except OSError:
        pass


def dbg(message: str):
    if not config.DEBUG:
        return
    ts = time.strftime("%Y-%m-%d %H:%M:%S")
    line = f"[debug] [{ts} pid={os.getpid()}] {message}"
    print(line, file=sys.stderr)
    _append_log(line + "\n")


def dbg_dump(label: str, text: str):
    """Dump a buffer to the debug log. Truncated unless AI_EDIT_DEBUG_DUMP_VERBOSE=true."""
    if not config.DEBUG:
        return
    content = text or ""
    if config.DEBUG_DUMP_VERBOSE:
        _append_log(f"\n[debug_dump] {label}\n{content}\n")
        return
    # Truncated: header + first N non-empty lines / max chars
    max_lines = config.DEBUG_DUMP_MAX_LINES
    max_chars = config.DEBUG_DUMP_MAX_CHARS
    lines = [ln for ln in content.splitlines() if ln.strip()]
    preview = "\n".join(lines[:max_lines])
    if len(preview) > max_chars:
        preview = preview[:max_chars]
    truncated = len(lines) > max_lines or len(content) > max_chars
    _append_log(
        f"\n[debug_dump] {label} (len={len(content)})"
        f"{' …(truncated)' if truncated else ''}\n"
        f"{preview}\n"
    )
