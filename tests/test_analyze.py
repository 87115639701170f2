"""Tests for snapshot stats, validation and the isometry report."""

from analyze import (
    black_height,
    collect_keys,
    count_colors,
    count_nodes,
    isometry_report,
    tree_height,
    tree_stats,
    validate_bst,
    validate_rb,
)
from btree import BTree
from isometry import BLACK, RED, RedBlackTree


def node(key, color, left=None, right=None):
    return {"key": key, "color": color, "left": left, "right": right}


class TestStats:
    def test_scenario_c_stats(self, scenario_c):
        state = RedBlackTree(scenario_c).snapshot()
        assert tree_height(state) == 3
        assert count_nodes(state) == 5
        assert count_colors(state) == (4, 1)
        assert black_height(state) == 2
        assert collect_keys(state) == [1, 3, 5, 7, 9]

    def test_single_pass_stats(self, mixed_tree):
        stats = tree_stats(RedBlackTree(mixed_tree).snapshot())
        assert stats["nodes"] == 20
        assert (stats["black"], stats["red"]) == (10, 10)
        assert stats["height"] == 5
        assert stats["keys"] == mixed_tree.inorder()

    def test_empty(self):
        assert tree_height(None) == 0
        assert count_nodes(None) == 0
        assert count_colors(None) == (0, 0)
        assert collect_keys(None) == []


class TestValidateRb:
    def test_valid_tree(self):
        ok, bh, errors = validate_rb(node(5, BLACK, node(2, RED), node(8, RED)))
        assert ok and bh == 2 and errors == []

    def test_red_root(self):
        ok, _, errors = validate_rb(node(5, RED))
        assert not ok
        assert any("Root violation" in e for e in errors)

    def test_red_red(self):
        ok, _, errors = validate_rb(
            node(5, BLACK, node(2, RED, node(1, RED)), node(8, RED)))
        assert not ok
        assert any("Red violation" in e for e in errors)

    def test_black_height_mismatch(self):
        ok, _, errors = validate_rb(node(5, BLACK, node(2, BLACK), None))
        assert not ok
        assert any("Black-height violation" in e for e in errors)


class TestValidateBst:
    def test_equal_items_allowed(self):
        state = RedBlackTree(BTree.from_nested([3, 3, 3])).snapshot()
        assert validate_bst(state) == (True, [])

    def test_ordered(self):
        assert validate_bst(node("m", BLACK, node("c", RED), node("x", RED))) == (True, [])

    def test_out_of_order(self):
        ok, errors = validate_bst(node(5, BLACK, node(7, RED), node(8, RED)))
        assert not ok
        assert errors == ["BST violation: node 7 > 5"]


class TestIsometryReport:
    def test_report_on_valid_trees(self, mixed_tree, random_trees):
        for src in random_trees + [mixed_tree]:
            report = isometry_report(src, RedBlackTree(src))
            assert report["errors"] == []
            assert report["keys_match"] and report["size_match"]
            assert report["rb_valid"] and report["bst_valid"]
            assert report["height_match"]

    def test_black_height_equals_btree_height(self, mixed_tree):
        report = isometry_report(mixed_tree, RedBlackTree(mixed_tree).root)
        assert report["black_height"] == report["btree_height"] == 3

    def test_duplicate_items_report_clean(self):
        src = BTree.from_nested(([3], [[3, 3], [3]]))
        report = isometry_report(src, RedBlackTree(src))
        assert report["errors"] == []
        assert report["bst_valid"]

    def test_empty(self):
        report = isometry_report(BTree(), RedBlackTree())
        assert report["keys_match"] and report["height_match"]
        assert report["black_height"] == 0

    def test_detects_mismatch(self, scenario_c):
        tampered = RedBlackTree(scenario_c).snapshot()
        tampered["left"] = None
        report = isometry_report(scenario_c, tampered)
        assert not report["keys_match"]
        assert not report["size_match"]
        assert not report["rb_valid"]
        assert any("Key mismatch" in e for e in report["errors"])
