"""
Testy klasyfikacji węzłów wg poziomu parsowania (compiler/partitioner.py).

Run: python -m pytest tests/test_partitioner.py -q
"""

import pytest

from compiler import build_tree, classify, emitted_nodes, extract_intro, is_valid_parse_level
from data_model import NodeKind, Section


def _tree(*specs):
    """specs: (depth, body)"""
    return build_tree([
        Section(title=f"S{i}", depth=d, body=body) for i, (d, body) in enumerate(specs)
    ])


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

class TestClassify:
    def test_coarsest_level_all_top_nodes_are_leaves(self):
        tree = classify(_tree((2, "a\n=== S1\nb"), (3, "b")), 2)
        assert tree[0].kind is NodeKind.LEAF
        assert tree[0].intro is None

    def test_aggregator_when_descendant_within_level(self):
        tree = classify(_tree((2, "Intro.\n=== S1\nb"), (3, "b")), 3)
        assert tree[0].kind is NodeKind.AGGREGATOR
        assert tree[0].intro == "Intro."
        assert tree[1].kind is NodeKind.LEAF

    def test_descendant_beyond_level_keeps_leaf(self):
        tree = classify(_tree((2, "a\n==== S1\nb"), (4, "b")), 3)
        assert tree[0].kind is NodeKind.LEAF

    def test_depth_at_level_is_leaf(self):
        tree = classify(_tree((3, "a\n==== S1\nb"), (4, "b")), 3)
        assert tree[0].kind is NodeKind.LEAF

    def test_depth_skip_child_beyond_level(self):
        # == S0 / ==== S1 / === S2 przy L=3: S0 agregator, S1 liść mimo głębokości 4
        tree = classify(_tree((2, "x"), (4, "y"), (3, "z")), 3)
        assert tree[0].kind is NodeKind.AGGREGATOR
        assert tree[1].kind is NodeKind.LEAF
        assert tree[2].kind is NodeKind.LEAF

    def test_whitespace_only_intro_dropped(self):
        tree = classify(_tree((2, "   \n=== S1\nb"), (3, "b")), 3)
        assert tree[0].kind is NodeKind.AGGREGATOR
        assert tree[0].intro is None

    @pytest.mark.parametrize("level", [1, 0, -3, True, "3", 2.5, None])
    def test_invalid_level_raises(self, level):
        with pytest.raises(ValueError):
            classify(_tree((2, "x")), level)


class TestIsValidParseLevel:
    def test_values(self):
        assert is_valid_parse_level(2)
        assert is_valid_parse_level(7)
        assert not is_valid_parse_level(1)
        assert not is_valid_parse_level(False)
        assert not is_valid_parse_level("2")


# ---------------------------------------------------------------------------
# extract_intro
# ---------------------------------------------------------------------------

class TestExtractIntro:
    def test_text_before_first_heading(self):
        assert extract_intro("Intro text.\n\n=== Child\nChild text.") == "Intro text."

    def test_no_text(self):
        assert extract_intro("=== Child\nChild text.") is None

    def test_heading_inside_fence_ignored(self):
        body = "Intro.\n----\n=== nie\n----\nMore.\n=== Child\nc"
        assert extract_intro(body) == "Intro.\n----\n=== nie\n----\nMore."


# ---------------------------------------------------------------------------
# emitted_nodes
# ---------------------------------------------------------------------------

class TestEmittedNodes:
    def test_children_of_leaves_not_emitted(self):
        tree = classify(_tree((2, "a"), (3, "b"), (4, "c"), (2, "d")), 3)
        # S0 agregator → S1 liść (S2 w treści S1) → S3 liść
        assert [n.index for n in emitted_nodes(tree)] == [0, 1, 3]

    def test_everything_emitted_at_deep_level(self):
        tree = classify(_tree((2, "a"), (3, "b"), (4, "c"), (2, "d")), 4)
        assert [n.index for n in emitted_nodes(tree)] == [0, 1, 2, 3]
