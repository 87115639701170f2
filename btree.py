#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════╗
║        2-3-4 -> Red-Black Isometry  v1.0  --  SOURCE TREE        ║
║                                                                  ║
║  Read-only 2-3-4 (B-tree of order 4) node used as the input      ║
║  of the isometry builder in isometry.py.                         ║
║                                                                  ║
║  A node holds 1..3 ascending items and either no children        ║
║  (leaf) or exactly items + 1 children.  Construction and         ║
║  balancing of the 2-3-4 tree are NOT done here: callers hand     ║
║  in an already-correct tree, e.g. via BTree.from_nested().       ║
║                                                                  ║
║  Nested List Format                                              ║
║  ──────────────────                                              ║
║    [5]                         -> leaf holding 5                 ║
║    ([3, 7], [[1], [5], [9]])   -> 2-item node with 3 leaves      ║
║                                                                  ║
║  Snapshot Dict Schema                                            ║
║  ────────────────────                                            ║
║  { "items"   : [item, ...],                                      ║
║    "children": [snapshot, ...] }   # [] for a leaf               ║
║                                                                  ║
║  Author : Arshanhp                                               ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""

# ═════════════════════════════════════════════════════════════════
#  CONSTANTS
# ═════════════════════════════════════════════════════════════════
MIN_ITEMS = 1
MAX_ITEMS = 3


class MalformedSourceNode(ValueError):
    """Raised when a 2-3-4 node has an illegal item or child count."""


# ═════════════════════════════════════════════════════════════════
#  B-TREE NODE
#
#  Items and children are stored as tuples so the node cannot be
#  changed once handed to the builder.
# ═════════════════════════════════════════════════════════════════
class BTreeNode:
    """
    A single node of a 2-3-4 tree.

    Attributes:
        items    (tuple)           : 1..3 items in ascending order.
        children (tuple[BTreeNode]): () for a leaf, else len(items) + 1.
    """
    __slots__ = ('items', 'children')

    def __init__(self, items, children=None):
        self.items    = tuple(items)
        self.children = tuple(children or ())

    def __repr__(self):
        if not self.children:
            return f"BTreeNode({list(self.items)})"
        return f"BTreeNode({list(self.items)}, {list(self.children)})"

    # ── Accessors used by the builder ───────────────────────────
    def get_item_count(self) -> int:
        return len(self.items)

    def get_item_at(self, i: int):
        if not 0 <= i < len(self.items):
            raise IndexError(f"item index {i} out of range "
                             f"[0, {len(self.items)})")
        return self.items[i]

    def get_children_count(self) -> int:
        return len(self.children)

    def get_child_at(self, i: int) -> "BTreeNode":
        if not 0 <= i < len(self.children):
            raise IndexError(f"child index {i} out of range "
                             f"[0, {len(self.children)})")
        return self.children[i]

    def is_leaf(self) -> bool:
        return not self.children

    # ── Shape check ─────────────────────────────────────────────
    def check(self) -> None:
        """
        Validate this node's shape (not its descendants).

        Raises:
            MalformedSourceNode: item count outside 1..3, or a child
                count that is neither 0 nor item count + 1.
        """
        check_shape(self)


def check_shape(node) -> None:
    """
    Shape check for any object exposing the 2-3-4 accessor protocol.

    Args:
        node: Object with get_item_count() / get_children_count().

    Raises:
        MalformedSourceNode: On an illegal item or child count.
    """
    n_items = node.get_item_count()
    if not MIN_ITEMS <= n_items <= MAX_ITEMS:
        raise MalformedSourceNode(
            f"2-3-4 node must hold {MIN_ITEMS}..{MAX_ITEMS} items, "
            f"got {n_items}")
    n_children = node.get_children_count()
    if n_children not in (0, n_items + 1):
        raise MalformedSourceNode(
            f"2-3-4 node with {n_items} item(s) must have 0 or "
            f"{n_items + 1} children, got {n_children}")


# ═════════════════════════════════════════════════════════════════
#  B-TREE HOLDER
# ═════════════════════════════════════════════════════════════════
class BTree:
    """
    Holder for the root of a 2-3-4 tree.

    Attributes:
        root (BTreeNode|None): Root node, None for an empty tree.
    """

    def __init__(self, root=None):
        self.root = root

    @classmethod
    def from_nested(cls, nested) -> "BTree":
        """
        Build a tree from the nested list format (see module header).

        Args:
            nested (list|tuple|None): Root entry; None gives an empty tree.

        Returns:
            BTree
        """
        return cls(node_from_nested(nested))

    def snapshot(self):
        return snapshot(self.root)

    def inorder(self) -> list:
        return inorder(self.root)

    def __len__(self):
        return item_count(self.root)


def node_from_nested(nested):
    """
    Convert one nested entry into a BTreeNode (recursively).

    A bare list is a leaf's items; a 2-tuple is (items, children).
    """
    if nested is None:
        return None
    if isinstance(nested, tuple):
        items, children = nested
        return BTreeNode(items, [node_from_nested(c) for c in children])
    return BTreeNode(nested)


# ═════════════════════════════════════════════════════════════════
#  TRAVERSAL HELPERS
#
#  All helpers accept any object exposing the accessor protocol,
#  not only BTreeNode.
# ═════════════════════════════════════════════════════════════════

def snapshot(node):
    """
    Serialise a 2-3-4 subtree into nested dicts for rendering.

    Returns:
        dict|None: {"items": [...], "children": [...]} or None.
    """
    if node is None:
        return None
    items = [node.get_item_at(i) for i in range(node.get_item_count())]
    children = [snapshot(node.get_child_at(i))
                for i in range(node.get_children_count())]
    return {"items": items, "children": children}


def inorder(node) -> list:
    """
    B-tree in-order flattening:
    child0, item0, child1, item1, ..., itemN-1, childN.
    """
    out = []

    def _walk(n):
        if n is None:
            return
        leaf = n.get_children_count() == 0
        for i in range(n.get_item_count()):
            if not leaf:
                _walk(n.get_child_at(i))
            out.append(n.get_item_at(i))
        if not leaf:
            _walk(n.get_child_at(n.get_item_count()))

    _walk(node)
    return out


def item_count(node) -> int:
    """Total number of items stored in a 2-3-4 subtree."""
    if node is None:
        return 0
    return node.get_item_count() + sum(
        item_count(node.get_child_at(i))
        for i in range(node.get_children_count()))


def height(node) -> int:
    """Number of node levels on the leftmost path (0 for empty)."""
    h = 0
    while node is not None:
        h += 1
        node = node.get_child_at(0) if node.get_children_count() else None
    return h


def leaf_depths_uniform(node) -> bool:
    """True if every leaf of the subtree sits at the same depth."""
    depths = set()

    def _walk(n, d):
        if n.get_children_count() == 0:
            depths.add(d)
            return
        for i in range(n.get_children_count()):
            _walk(n.get_child_at(i), d + 1)

    if node is not None:
        _walk(node, 0)
    return len(depths) <= 1
