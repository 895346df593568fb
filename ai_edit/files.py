import difflib
import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Tuple

from . import config
from .utils import dbg

ROOT_PATH = config.ROOT


def _norm_rel_path(p: str) -> str:
    p = (p or "").strip().replace("\\", "/")
    p = re.sub(r"^\./+", "", p)
    return Path(p).as_posix()


def get_root() -> Path:
    return ROOT_PATH


def resolve_edit_path(path_str: str, root: Optional[Path] = None) -> Tuple[str, Path]:
    """Resolve path to (rel_path, abs_path). Path can be relative or absolute under root."""
    root = Path(root or get_root()).resolve()
    path_str = (path_str or "").strip().strip('"\'')
    if not path_str:
        raise ValueError("path is empty")
    # Absolute path - must be under root
    if path_str.startswith("/") or (len(path_str) > 1 and path_str[1] == ":"):
        abs_path = Path(path_str).resolve()
        try:
            rel = abs_path.relative_to(root)
        except ValueError:
            raise ValueError(f"path outside root: {path_str}")
        return rel.as_posix(), abs_path
    rel_path = _norm_rel_path(path_str)
    abs_path = (root / rel_path).resolve()
    try:
        abs_path.relative_to(root)
    except ValueError:
        raise ValueError(f"path outside root: {path_str}")
    return rel_path, abs_path


def read_file_text(path_str: str, root: Optional[Path] = None) -> str:
    """Read a file under root without translating line endings."""
    rel_path, target = resolve_edit_path(path_str, root)
    if not target.is_file():
        raise FileNotFoundError(rel_path)
    with open(target, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_atomic(target: Path, content: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        delete=False,
        dir=str(target.parent),
        prefix=target.name + ".tmp.",
        encoding="utf-8",
        newline="",
    ) as tmp:
        tmp.write(content)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_path = Path(tmp.name)
    tmp_path.replace(target)


def write_file_text(path_str: str, content: str, root: Optional[Path] = None) -> str:
    """Write content to a file under root, creating parent dirs. Returns the rel path."""
    rel_path, target = resolve_edit_path(path_str, root)
    if target.exists() and not target.is_file():
        raise IsADirectoryError(rel_path)
    _write_atomic(target, content)
    dbg(f"files: wrote {rel_path} ({len(content)} chars)")
    return rel_path


def generate_diff(
    old_content: str,
    new_content: str,
    filepath: str,
    context_lines: int = 3,
) -> str:
    """Unified diff between old and new content."""
    old_lines = (old_content or "").splitlines(keepends=True)
    new_lines = (new_content or "").splitlines(keepends=True)
    diff = difflib.unified_diff(
        old_lines,
        new_lines,
        fromfile=str(filepath),
        tofile=str(filepath),
        n=context_lines,
    )
    return "".join(diff)
