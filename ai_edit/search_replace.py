"""Replace an old text block with a new one inside a buffer.

The old block is located with the strategies in edit_match, tried strictest
first. The first candidate that occurs exactly once in the buffer wins; with
replace_all the first candidate found at all wins and every occurrence is
replaced. Nothing here touches the filesystem.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .edit_match import iter_candidates
from .utils import dbg, dbg_dump


class SearchReplaceError(Exception):
    """Base error for find-and-replace."""
    pass


class InvalidArgumentsError(SearchReplaceError):
    """The edit is malformed (e.g. old and new strings are identical)."""
    pass


class NotFoundError(SearchReplaceError):
    """No strategy produced a candidate that occurs in the content."""
    pass


class AmbiguousMatchError(SearchReplaceError):
    """Candidates were found but each occurs more than once."""
    pass


@dataclass
class MatchReport:
    strategy: str
    candidate: str
    index: int
    occurrences: int


@dataclass
class ReplaceResult:
    content: str
    strategy: str
    candidate: str
    replacements: int


def validate_single_edit(
    old_string: Any,
    new_string: Any,
    replace_all: Any = None,
    index: Optional[int] = None,
) -> Tuple[str, str, bool]:
    """Validate a single edit. Returns (old_string, new_string, replace_all)."""
    ctx = f"edit at index {index}: " if index is not None else ""
    if old_string is None or not isinstance(old_string, str):
        raise InvalidArgumentsError(f"{ctx}old_string is required")
    if new_string is None or not isinstance(new_string, str):
        raise InvalidArgumentsError(f"{ctx}new_string is required")
    if old_string == new_string:
        raise InvalidArgumentsError(f"{ctx}old_string and new_string must be different")
    if replace_all is not None and not isinstance(replace_all, bool):
        raise InvalidArgumentsError(f"{ctx}replace_all must be a valid boolean")
    return (old_string, new_string, bool(replace_all))


def find_match(content: str, old_string: str, replace_all: bool = False) -> MatchReport:
    """Locate old_string in content. Raises NotFoundError or AmbiguousMatchError."""
    if old_string == "":
        return MatchReport(strategy="empty_search", candidate="", index=0, occurrences=0)

    found = False
    ambiguous: List[str] = []
    for strategy, candidate in iter_candidates(content, old_string):
        index = content.find(candidate)
        if index == -1:
            continue
        found = True
        if replace_all:
            return MatchReport(strategy, candidate, index, content.count(candidate))
        if index == content.rfind(candidate):
            return MatchReport(strategy, candidate, index, 1)
        ambiguous.append(strategy)

    if not found:
        dbg(f"search_replace: not found (len={len(old_string)})")
        dbg_dump("search_replace: old_string", old_string)
        raise NotFoundError("old_string not found in content")
    dbg(f"search_replace: ambiguous via {sorted(set(ambiguous))}")
    raise AmbiguousMatchError(
        "old_string found multiple times and requires more code context "
        "to uniquely identify the intended match"
    )


def replace_with_report(
    content: str,
    old_string: str,
    new_string: str,
    replace_all: bool = False,
) -> ReplaceResult:
    """Like replace(), also reporting which strategy matched and how many spots changed."""
    if old_string == new_string:
        raise InvalidArgumentsError("old_string and new_string must be different")

    # Empty old_string means "create file": prepend, no matching
    if old_string == "":
        return ReplaceResult(new_string + content, "empty_search", "", 0)

    match = find_match(content, old_string, replace_all=replace_all)
    if replace_all:
        new_content = content.replace(match.candidate, new_string)
    else:
        end = match.index + len(match.candidate)
        new_content = content[: match.index] + new_string + content[end:]
    dbg(
        f"search_replace: matched via {match.strategy} at {match.index} "
        f"({match.occurrences} occurrence(s), replace_all={replace_all})"
    )
    return ReplaceResult(new_content, match.strategy, match.candidate, match.occurrences)


def replace(
    content: str,
    old_string: str,
    new_string: str,
    replace_all: bool = False,
) -> str:
    """Return content with old_string replaced by new_string.

    Raises InvalidArgumentsError, NotFoundError or AmbiguousMatchError.
    """
    return replace_with_report(content, old_string, new_string, replace_all).content


def execute_multi_find_and_replace(
    file_content: str,
    edits: List[Dict[str, Any]],
) -> str:
    """Apply a list of edits in sequence; each edit sees the previous result."""
    result = file_content
    for i, edit in enumerate(edits):
        old_s, new_s, replace_all = validate_single_edit(
            edit.get("old_string"),
            edit.get("new_string"),
            edit.get("replace_all"),
            index=i,
        )
        try:
            result = replace(result, old_s, new_s, replace_all=replace_all)
        except SearchReplaceError as e:
            raise type(e)(f"edit at index {i}: {e}") from e
    return result
