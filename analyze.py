#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════╗
║        2-3-4 -> Red-Black Isometry  v1.0  --  ANALYZE            ║
║                                                                  ║
║  Pure checks over red-black snapshot dicts                       ║
║  ({key, color, left, right}, color True = RED) and a report      ║
║  that compares a 2-3-4 tree with its red-black encoding.         ║
║                                                                  ║
║  Used for:                                                       ║
║    • Stats (height, node count, black-height, colour counts)     ║
║    • RB-property validation with readable error lists            ║
║    • Isometry report (keys, size, black-height vs 2-3-4 height)  ║
║                                                                  ║
║  Author  : Arshanhp                                              ║
║  License : MIT                                                   ║
╚══════════════════════════════════════════════════════════════════╝
"""

# ══════════════════════════════════════════════════════════════
#  IMPORTS
# ══════════════════════════════════════════════════════════════
import btree
import isometry
from isometry import RED, BLACK


# ══════════════════════════════════════════════════════════════
#  STATS -- one in-order pass over a snapshot dict-tree
#
#  Walked with an explicit stack so snapshots of trees from the
#  iterative builder never hit the recursion limit.
# ══════════════════════════════════════════════════════════════

def tree_stats(node) -> dict:
    """
    Gather the numbers shown for a snapshot dict-tree in one pass.

    Args:
        node (dict|None): Snapshot root.

    Returns:
        dict with keys:
            height (int)  : node levels on the longest path (0 if empty)
            nodes  (int)  : total node count
            black  (int)  : BLACK node count
            red    (int)  : RED node count
            keys   (list) : keys in in-order sequence
    """
    stats = {"height": 0, "nodes": 0, "black": 0, "red": 0, "keys": []}
    stack = []
    depth = 1
    while stack or node is not None:
        while node is not None:
            stack.append((node, depth))
            node = node.get("left")
            depth += 1
        node, depth = stack.pop()
        stats["height"] = max(stats["height"], depth)
        stats["nodes"] += 1
        stats["red" if node.get("color") == RED else "black"] += 1
        stats["keys"].append(node["key"])
        node = node.get("right")
        depth += 1
    return stats


def tree_height(node):
    return tree_stats(node)["height"]


def count_nodes(node):
    return tree_stats(node)["nodes"]


def count_colors(node):
    """(black_count, red_count) of a snapshot dict-tree."""
    stats = tree_stats(node)
    return stats["black"], stats["red"]


def collect_keys(node):
    return tree_stats(node)["keys"]


def black_height(node):
    """
    BLACK nodes on the left spine.  Equals the black-height of every
    path only if validate_rb() passes.
    """
    bh = 0
    while node is not None:
        if node.get("color") != RED:
            bh += 1
        node = node.get("left")
    return bh


# ══════════════════════════════════════════════════════════════
#  VALIDATION FUNCTIONS -- BST + Red-Black Property Checks
# ══════════════════════════════════════════════════════════════

def validate_rb(node, parent_color=None) -> tuple:
    """
    Validate Red-Black tree properties on a snapshot dict-tree.

    Checks:
      1. Root is BLACK (only when called without parent_color)
      2. No two consecutive RED nodes
      3. Equal black-height on all paths

    Args:
        node:         Snapshot root (or None)
        parent_color: Colour of the parent (None at the root)

    Returns:
        (is_valid, black_height, error_list); NIL counts as height 1.
    """
    if node is None:
        return True, 1, []

    errors = []
    color = node.get("color")
    if parent_color is None and color == RED:
        errors.append(f"Root violation: root {node['key']} is RED")
    if color == RED and parent_color == RED:
        errors.append(
            f"Red violation: node {node['key']} and its parent are both RED")

    # Children get an explicit colour so they are never taken for a root
    child_parent = RED if color == RED else BLACK
    _, left_bh, left_err = validate_rb(node.get("left"), child_parent)
    _, right_bh, right_err = validate_rb(node.get("right"), child_parent)
    errors.extend(left_err)
    errors.extend(right_err)

    if left_bh != right_bh:
        errors.append(
            f"Black-height violation at node {node['key']}: "
            f"left={left_bh}, right={right_bh}")

    bh = left_bh + (1 if color == BLACK else 0)
    return len(errors) == 0, bh, errors


def validate_bst(node, lo=None, hi=None) -> tuple:
    """
    Validate BST ordering on a snapshot dict-tree.

    Each key must satisfy lo <= key <= hi (None = unbounded).
    Equal items are legal: a 2-3-4 node [3, 3] becomes black 3
    with a red 3 on its right.  Only the item ordering is used,
    so any totally ordered type works.

    Returns:
        (is_valid, error_list)
    """
    if node is None:
        return True, []

    errors = []
    key = node["key"]
    if lo is not None and key < lo:
        errors.append(f"BST violation: node {key} < {lo}")
    if hi is not None and hi < key:
        errors.append(f"BST violation: node {key} > {hi}")

    _, lerr = validate_bst(node.get("left"), lo, key)
    _, rerr = validate_bst(node.get("right"), key, hi)
    errors.extend(lerr)
    errors.extend(rerr)
    return len(errors) == 0, errors


# ══════════════════════════════════════════════════════════════
#  ISOMETRY REPORT
# ══════════════════════════════════════════════════════════════

def isometry_report(source, rb) -> dict:
    """
    Compare a 2-3-4 tree with the red-black tree built from it.

    For a balanced 2-3-4 tree the red-black black-height (NIL
    excluded) equals the 2-3-4 height.

    Args:
        source: BTree (or any holder with .root), BTreeNode or None.
        rb    : RedBlackTree, RBTreeNode, snapshot dict, or None.

    Returns:
        dict with keys:
            keys_match   (bool) : in-order sequences are identical
            size_match   (bool) : node count == item count
            rb_valid     (bool) : validate_rb() passed
            bst_valid    (bool) : validate_bst() passed
            black_height (int)  : red-black black-height (NIL excluded)
            btree_height (int)  : 2-3-4 height in node levels
            height_match (bool) : black_height == btree_height
            stats        (dict) : tree_stats() of the red-black tree
            errors       (list) : all violation messages
    """
    src_root = getattr(source, "root", source)
    if isinstance(rb, isometry.RedBlackTree):
        state = rb.snapshot()
    elif isinstance(rb, isometry.RBTreeNode):
        state = isometry.snapshot(rb)
    else:
        state = rb

    stats    = tree_stats(state)
    src_keys = btree.inorder(src_root)
    rb_ok, bh, rb_errors = validate_rb(state)
    bst_ok, bst_errors = validate_bst(state)
    b_height = btree.height(src_root)

    errors = rb_errors + bst_errors
    if src_keys != stats["keys"]:
        errors.append(f"Key mismatch: 2-3-4 {src_keys} "
                      f"vs red-black {stats['keys']}")

    return {
        "keys_match":   src_keys == stats["keys"],
        "size_match":   btree.item_count(src_root) == stats["nodes"],
        "rb_valid":     rb_ok,
        "bst_valid":    bst_ok,
        "black_height": bh - 1,
        "btree_height": b_height,
        "height_match": bh - 1 == b_height,
        "stats":        stats,
        "errors":       errors,
    }
