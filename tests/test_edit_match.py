"""Tests for the individual fuzzy match strategies."""

import unittest

from ai_edit.edit_match import (
    MATCH_STRATEGIES,
    block_anchor_match,
    escape_normalized_match,
    exact_match,
    indentation_flexible_match,
    iter_candidates,
    line_trimmed_match,
    unescape_string,
    whitespace_normalized_match,
)


class TestStrategyOrder(unittest.TestCase):
    def test_strictest_first(self):
        self.assertEqual(
            [name for name, _ in MATCH_STRATEGIES],
            [
                "exact",
                "line_trimmed",
                "whitespace_normalized",
                "indentation_flexible",
                "escape_normalized",
                "block_anchor",
            ],
        )

    def test_iter_candidates_tags_strategy(self):
        pairs = list(iter_candidates("x = 1\n", "x = 1"))
        self.assertEqual(pairs[0], ("exact", "x = 1"))
        self.assertIn(("line_trimmed", "x = 1"), pairs)


class TestExactMatch(unittest.TestCase):
    def test_yields_find_unconditionally(self):
        self.assertEqual(list(exact_match("abc", "zzz")), ["zzz"])


class TestLineTrimmedMatch(unittest.TestCase):
    def test_preserves_original_whitespace(self):
        content = "def f():\n    return 1\n"
        self.assertEqual(
            list(line_trimmed_match(content, "def f():\nreturn 1\n")),
            ["def f():\n    return 1"],
        )

    def test_every_matching_window(self):
        content = "  a\nb\n\ta\n"
        self.assertEqual(list(line_trimmed_match(content, "a")), ["  a", "\ta"])


class TestWhitespaceNormalizedMatch(unittest.TestCase):
    def test_whole_line(self):
        self.assertEqual(list(whitespace_normalized_match("x =   1\ny = 2", "x = 1")), ["x =   1"])

    def test_substring_of_line(self):
        content = "    if  (a  and b):"
        self.assertEqual(list(whitespace_normalized_match(content, "a and b")), ["a  and b"])

    def test_multi_line_window(self):
        content = "foo(a,\n      b)\nbar()"
        self.assertIn("foo(a,\n      b)", list(whitespace_normalized_match(content, "foo(a,\n b)")))

    def test_regex_metacharacters_are_literal(self):
        content = "total = (a  +  b) * c"
        self.assertEqual(list(whitespace_normalized_match(content, "(a + b)")), ["(a  +  b)"])


class TestIndentationFlexibleMatch(unittest.TestCase):
    def test_uniform_shift(self):
        content = "class A:\n    def f(self):\n        return 1\n"
        self.assertEqual(
            list(indentation_flexible_match(content, "def f(self):\n    return 1")),
            ["    def f(self):\n        return 1"],
        )

    def test_relative_indent_must_agree(self):
        content = "    def f(self):\n    return 1\n"
        self.assertEqual(list(indentation_flexible_match(content, "def f(self):\n    return 1")), [])


class TestEscapeNormalizedMatch(unittest.TestCase):
    def test_unescape_string(self):
        self.assertEqual(unescape_string("a\\nb\\t\\\"c\\\\"), 'a\nb\t"c\\')
        self.assertEqual(unescape_string("cost: \\$5"), "cost: $5")
        self.assertEqual(unescape_string("plain"), "plain")

    def test_literal_backslash_n_matches_real_newline(self):
        candidates = list(escape_normalized_match("line1\nline2", "line1\\nline2"))
        self.assertEqual(candidates[0], "line1\nline2")

    def test_raw_window_with_literal_escape(self):
        # Content holds a backslash-t; the search block holds a real tab
        self.assertEqual(
            list(escape_normalized_match('print("a\\tb")', 'print("a\tb")')),
            ['print("a\\tb")'],
        )


class TestBlockAnchorMatch(unittest.TestCase):
    def test_needs_three_lines(self):
        self.assertEqual(list(block_anchor_match("a\nb\nc", "a\nc")), [])

    def test_single_candidate_tolerates_interior_edit(self):
        content = "def f():\n    x = 1\n    return x\nprint(f())"
        self.assertEqual(
            list(block_anchor_match(content, "def f():\n    x = 2\n    return x")),
            ["def f():\n    x = 1\n    return x"],
        )

    def test_single_candidate_accepted_regardless_of_interior(self):
        self.assertEqual(list(block_anchor_match("start\nabc\nend", "start\nzzzzzz\nend")), ["start\nabc\nend"])

    def test_multiple_candidates_pick_most_similar(self):
        content = "if a:\n    foo(1)\nend\nif a:\n    bar(2)\nend"
        self.assertEqual(
            list(block_anchor_match(content, "if a:\n    bar(3)\nend")),
            ["if a:\n    bar(2)\nend"],
        )

    def test_multiple_candidates_below_threshold(self):
        content = "if a:\n    xxxxxxxx\nend\nif a:\n    yyyyyyyy\nend"
        self.assertEqual(list(block_anchor_match(content, "if a:\n    qqqqqqqq\nend")), [])

    def test_no_anchor(self):
        self.assertEqual(list(block_anchor_match("a\nb\nc", "x\nb\nc")), [])


if __name__ == "__main__":
    unittest.main()
