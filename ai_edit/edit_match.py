"""Fuzzy search strategies for find-and-replace.

Each strategy takes (content, find) and lazily yields candidate substrings of
content that the caller should try to replace. Strategies are ordered from
strictest to fuzziest in MATCH_STRATEGIES; the caller verifies every
candidate against content and decides whether it is unique.
"""

import re
from typing import Callable, Iterator, List, Optional, Tuple

from .distance import line_similarity

Matcher = Callable[[str, str], Iterator[str]]

# Block anchor acceptance thresholds (average interior-line similarity).
SINGLE_CANDIDATE_THRESHOLD = 0.0
MULTIPLE_CANDIDATES_THRESHOLD = 0.3

_ESCAPE_RE = re.compile(r"\\(n|t|r|'|\"|`|\\|\n|\$)")
_ESCAPE_MAP = {"n": "\n", "t": "\t", "r": "\r", "\n": "\n"}


def _drop_trailing_empty(lines: List[str]) -> List[str]:
    if lines and lines[-1] == "":
        return lines[:-1]
    return lines


def _window(lines: List[str], start: int, size: int) -> str:
    """Raw text of lines[start:start + size], joined the way content was split."""
    return "\n".join(lines[start : start + size])


def _normalize_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _remove_indentation(text: str) -> str:
    """Strip the common leading-whitespace prefix length from every non-blank line."""
    lines = text.split("\n")
    non_empty = [line for line in lines if line.strip()]
    if not non_empty:
        return text
    min_indent = min(len(line) - len(line.lstrip()) for line in non_empty)
    return "\n".join(line[min_indent:] if line.strip() else line for line in lines)


def unescape_string(text: str) -> str:
    """Turn escape sequences such as \\n, \\t or \\" into the characters they stand for."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPE_MAP.get(m.group(1), m.group(1)), text)


def exact_match(content: str, find: str) -> Iterator[str]:
    """The search block itself; occurrence is checked by the caller."""
    yield find


def line_trimmed_match(content: str, find: str) -> Iterator[str]:
    """Blocks whose lines equal the search lines after stripping each line."""
    content_lines = content.split("\n")
    search_lines = _drop_trailing_empty(find.split("\n"))
    if not search_lines:
        return
    size = len(search_lines)
    trimmed_search = [line.strip() for line in search_lines]

    for i in range(len(content_lines) - size + 1):
        if all(content_lines[i + j].strip() == trimmed_search[j] for j in range(size)):
            yield _window(content_lines, i, size)


def whitespace_normalized_match(content: str, find: str) -> Iterator[str]:
    """Single lines or line blocks equal to find once whitespace runs are collapsed."""
    normalized_find = _normalize_whitespace(find)
    lines = content.split("\n")

    for line in lines:
        normalized_line = _normalize_whitespace(line)
        if normalized_line == normalized_find:
            yield line
        elif normalized_find in normalized_line:
            # Recover the raw substring of the line that matched
            words = find.split()
            if not words:
                continue
            pattern = r"\s+".join(re.escape(word) for word in words)
            try:
                m = re.search(pattern, line)
            except re.error:
                continue
            if m:
                yield m.group(0)

    find_lines = find.split("\n")
    if len(find_lines) > 1:
        size = len(find_lines)
        for i in range(len(lines) - size + 1):
            block = _window(lines, i, size)
            if _normalize_whitespace(block) == normalized_find:
                yield block


def indentation_flexible_match(content: str, find: str) -> Iterator[str]:
    """Blocks that differ from find only by a uniform indentation shift."""
    normalized_find = _remove_indentation(find)
    content_lines = content.split("\n")
    size = len(find.split("\n"))

    for i in range(len(content_lines) - size + 1):
        block = _window(content_lines, i, size)
        if _remove_indentation(block) == normalized_find:
            yield block


def escape_normalized_match(content: str, find: str) -> Iterator[str]:
    """Matches after resolving escape sequences such as a literal backslash-n."""
    unescaped_find = unescape_string(find)
    if unescaped_find in content:
        yield unescaped_find

    lines = content.split("\n")
    size = len(unescaped_find.split("\n"))
    for i in range(len(lines) - size + 1):
        block = _window(lines, i, size)
        if unescape_string(block) == unescaped_find:
            yield block


def _interior_similarity(
    content_lines: List[str], search_lines: List[str], start: int, end: int
) -> float:
    """Average similarity of the lines between the anchors; 1.0 when there are none."""
    search_size = len(search_lines)
    actual_size = end - start + 1
    lines_to_check = min(search_size - 2, actual_size - 2)
    if lines_to_check <= 0:
        return 1.0
    total = 0.0
    for j in range(1, lines_to_check + 1):
        total += line_similarity(content_lines[start + j].strip(), search_lines[j].strip())
    return total / lines_to_check


def block_anchor_match(content: str, find: str) -> Iterator[str]:
    """Blocks whose first and last lines match find, scored on the lines between them."""
    search_lines = find.split("\n")
    if len(search_lines) < 3:
        return
    search_lines = _drop_trailing_empty(search_lines)

    content_lines = content.split("\n")
    first_anchor = search_lines[0].strip()
    last_anchor = search_lines[-1].strip()

    candidates: List[Tuple[int, int]] = []
    for i, line in enumerate(content_lines):
        if line.strip() != first_anchor:
            continue
        for j in range(i + 2, len(content_lines)):
            if content_lines[j].strip() == last_anchor:
                candidates.append((i, j))
                break

    if not candidates:
        return

    if len(candidates) == 1:
        start, end = candidates[0]
        similarity = _interior_similarity(content_lines, search_lines, start, end)
        if similarity >= SINGLE_CANDIDATE_THRESHOLD:
            yield _window(content_lines, start, end - start + 1)
        return

    best: Optional[Tuple[int, int]] = None
    max_similarity = -1.0
    for start, end in candidates:
        similarity = _interior_similarity(content_lines, search_lines, start, end)
        if similarity > max_similarity:
            max_similarity = similarity
            best = (start, end)

    if best is not None and max_similarity >= MULTIPLE_CANDIDATES_THRESHOLD:
        start, end = best
        yield _window(content_lines, start, end - start + 1)


# Order matters: stricter strategies pre-empt fuzzier ones.
MATCH_STRATEGIES: List[Tuple[str, Matcher]] = [
    ("exact", exact_match),
    ("line_trimmed", line_trimmed_match),
    ("whitespace_normalized", whitespace_normalized_match),
    ("indentation_flexible", indentation_flexible_match),
    ("escape_normalized", escape_normalized_match),
    ("block_anchor", block_anchor_match),
]


def iter_candidates(content: str, find: str) -> Iterator[Tuple[str, str]]:
    """Yield (strategy_name, candidate) across all strategies in priority order."""
    for name, strategy in MATCH_STRATEGIES:
        for candidate in strategy(content, find):
            yield name, candidate
