"""File-level edit tool built on the replace engine.

edit_file reads a file under the workspace root, applies one old/new block
replacement, writes the result back and reports an EditOutcome. Failures are
returned as error outcomes with a message meant to be handed back to the model.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from . import config
from .files import generate_diff, read_file_text, resolve_edit_path, write_file_text
from .search_replace import InvalidArgumentsError, SearchReplaceError, replace_with_report
from .utils import dbg

# (rel_path, commit_message) -> commit hash or None
CommitCallback = Callable[[str, str], Optional[str]]

_STYLE_EXTS = (".css", ".scss", ".less", ".sass")


@dataclass
class EditOutcome:
    status: str  # "done" | "error"
    message: str
    path: str = ""
    strategy: str = ""
    replacements: int = 0
    commit_hash: Optional[str] = None
    diff: str = ""
    new_content: Optional[str] = None
    error: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "done"

    def to_model_output(self) -> Dict[str, str]:
        return {
            "type": "text" if self.ok else "error-text",
            "value": self.message,
        }


def commit_type(change_description: str, file_path: str) -> str:
    """Conventional Commit type for a change to file_path."""
    desc = change_description.lower()
    file_name = os.path.basename(file_path).lower()

    if desc == "created":
        return "feat"
    if desc == "overwritten" or "edited" in desc or desc.startswith("executed:"):
        return "chore"

    if "fix" in desc or "bug" in desc:
        return "fix"
    if "add" in desc or "new" in desc:
        return "feat"
    if any(word in desc for word in ("remove", "delete", "update", "change")):
        return "chore"

    if "test" in file_name or file_name.endswith((".spec.ts", ".spec.js")):
        return "test"
    if file_name.startswith("readme") or file_name.endswith(".md"):
        return "docs"
    if file_name.endswith(_STYLE_EXTS):
        return "style"
    return "chore"


def commit_message(change_description: str, file_path: str) -> str:
    """e.g. 'feat(utils.py): created'."""
    kind = commit_type(change_description, file_path)
    return f"{kind}({os.path.basename(file_path)}): {change_description}"


def format_rich_error(
    action: str, args: Optional[Dict[str, Any]], error: Any
) -> Tuple[str, Dict[str, str]]:
    """Build a model-facing error message that echoes the call parameters."""
    fields = {"message": str(error)}
    message = f"Error during {action}: {fields['message']}"
    if args:
        message += f"\nParameters: {json.dumps(args, indent=2, default=str)}"
    return message, fields


def _commit(on_commit: Optional[CommitCallback], rel_path: str, description: str) -> Optional[str]:
    if on_commit is None:
        return None
    message = commit_message(description, rel_path)
    commit_hash = on_commit(rel_path, message)
    dbg(f"edit_file: commit {message!r} -> {commit_hash}")
    return commit_hash


def edit_file(
    file_path: str,
    old_string: str,
    new_string: str,
    replace_all: bool = False,
    *,
    root: Optional[Path] = None,
    on_commit: Optional[CommitCallback] = None,
    stage_only: bool = False,
) -> EditOutcome:
    """Replace old_string with new_string in file_path. An empty old_string creates the file.

    With stage_only the new content and diff are reported but nothing is
    written and on_commit is not called.
    """
    args = {
        "filePath": file_path,
        "oldString": old_string,
        "newString": new_string,
        "replaceAll": replace_all,
    }

    try:
        if not file_path:
            raise InvalidArgumentsError("filePath is required")
        if old_string == new_string:
            raise InvalidArgumentsError("old_string and new_string must be different")
        rel_path, abs_path = resolve_edit_path(file_path, root)

        if old_string == "":
            old_content = ""
            if abs_path.is_file():
                old_content = read_file_text(rel_path, root)
            diff = generate_diff(old_content, new_string, rel_path)
            commit_hash = None
            if not stage_only:
                write_file_text(rel_path, new_string, root)
                commit_hash = _commit(on_commit, rel_path, "created")
            return EditOutcome(
                status="done",
                message=f"Successfully created file: {rel_path}",
                path=rel_path,
                strategy="empty_search",
                commit_hash=commit_hash,
                diff=diff,
                new_content=new_string,
            )

        content = read_file_text(rel_path, root)
        if len(content) > config.MAX_CONTENT_CHARS:
            raise ValueError(
                f"file too large to edit ({len(content)} chars, limit {config.MAX_CONTENT_CHARS})"
            )

        result = replace_with_report(content, old_string, new_string, replace_all)

        # Fuzzy matches replace the matched candidate, not old_string itself
        occurrences = content.count(old_string) or result.replacements
        replacements = occurrences if replace_all else 1
        description = "edited (replace all)" if replace_all and occurrences > 1 else "edited"
        diff = generate_diff(content, result.content, rel_path)
        commit_hash = None
        if not stage_only:
            write_file_text(rel_path, result.content, root)
            commit_hash = _commit(on_commit, rel_path, description)
        dbg(f"edit_file: {rel_path} via {result.strategy}, {replacements} replacement(s)")
        plural = "" if replacements == 1 else "s"
        return EditOutcome(
            status="done",
            message=f"Successfully replaced {replacements} occurrence{plural} in {rel_path}",
            path=rel_path,
            strategy=result.strategy,
            replacements=replacements,
            commit_hash=commit_hash,
            diff=diff,
            new_content=result.content,
        )
    except (SearchReplaceError, OSError, ValueError) as e:
        dbg(f"edit_file: {file_path} failed: {e}")
        message, fields = format_rich_error("edit file", args, e)
        return EditOutcome(status="error", message=message, path=file_path or "", error=fields)
