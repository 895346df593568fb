"""Edit distance helpers used to score fuzzy block matches."""

from typing import List


def levenshtein(a: str, b: str) -> int:
    """Levenshtein distance (insert/delete/substitute each cost 1)."""
    if a == "" or b == "":
        return max(len(a), len(b))
    # Two rolling rows of the DP matrix; row i holds distances for a[:i].
    prev: List[int] = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        cur = [i] + [0] * len(b)
        ca = a[i - 1]
        for j in range(1, len(b) + 1):
            cost = 0 if ca == b[j - 1] else 1
            cur[j] = min(
                prev[j] + 1,
                cur[j - 1] + 1,
                prev[j - 1] + cost,
            )
        prev = cur
    return prev[len(b)]


def line_similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]: 1 - distance / longer length. Two empty strings are identical."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / max_len
