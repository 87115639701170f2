#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════╗
║        2-3-4 -> Red-Black Isometry  v1.0  --  BUILD ENGINE       ║
║                                                                  ║
║  Builds the red-black tree that is isometric to a given 2-3-4    ║
║  tree, plus the two colour helpers (is_red, flip_colors) used    ║
║  by rebalancing code elsewhere.                                  ║
║                                                                  ║
║  Architecture                                                    ║
║  ────────────                                                    ║
║  ┌─────────────┐   expand    ┌──────────────┐   snapshot         ║
║  │ BTreeNode   │ ──cluster─► │ RBTreeNode   │ ──dict──► analyze  ║
║  │ (btree.py)  │  per node   │ cluster 1..3 │          / render  ║
║  └─────────────┘             └──────────────┘                    ║
║                                                                  ║
║  Cluster Shapes                                                  ║
║  ──────────────                                                  ║
║    [a]        ->   B(a)                                          ║
║                   /    \\                                         ║
║                 c0      c1                                       ║
║                                                                  ║
║    [a, b]     ->   B(a)                                          ║
║                   /    \\                                         ║
║                 c0     R(b)                                      ║
║                       /    \\                                     ║
║                     c1      c2                                   ║
║                                                                  ║
║    [a, b, c]  ->        B(b)                                     ║
║                       /      \\                                   ║
║                    R(a)      R(c)                                ║
║                   /   \\      /   \\                               ║
║                 c0    c1   c2    c3                              ║
║                                                                  ║
║  Step Dict Schema (record=True)                                  ║
║  ──────────────────────────────                                  ║
║  { "action"    : str,   # expand1 / expand2 / expand3 / done     ║
║    "desc"      : str,   # human-readable explanation             ║
║    "highlight" : [item],# items of the cluster just emitted      ║
║    "tree_state": dict?  # recursive snapshot at that moment      ║
║  }                                                               ║
║                                                                  ║
║  Author : Arshanhp                                               ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""

# ═════════════════════════════════════════════════════════════════
#  IMPORTS
# ═════════════════════════════════════════════════════════════════
import logging

from btree import check_shape

logger = logging.getLogger(__name__)

# ═════════════════════════════════════════════════════════════════
#  GLOBAL CONSTANTS
# ═════════════════════════════════════════════════════════════════
RED   = True          # RB-Tree color constant: RED   = True
BLACK = False         # RB-Tree color constant: BLACK = False


class PreconditionViolated(RuntimeError):
    """Raised when a colour helper is called on a node it cannot handle."""


# ═════════════════════════════════════════════════════════════════
#  RB TREE NODE
#
#  No parent pointer: the builder never walks upward, and each
#  node is owned by exactly one parent slot (or the tree root).
#  None in a child slot is a NIL leaf and counts as BLACK.
# ═════════════════════════════════════════════════════════════════
class RBTreeNode:
    """
    A single node of the red-black tree.

    Attributes:
        item  (any)            : Payload, set once at construction.
        color (bool)           : RED (True) or BLACK (False).
        left  (RBTreeNode|None): Left child.
        right (RBTreeNode|None): Right child.
    """
    __slots__ = ('_item', 'color', 'left', 'right')

    def __init__(self, item, color=BLACK, left=None, right=None):
        self._item = item
        self.color = color
        self.left  = left
        self.right = right

    @property
    def item(self):
        return self._item

    @property
    def is_black(self) -> bool:
        return self.color == BLACK

    def __repr__(self):
        c = "R" if self.color == RED else "B"
        return f"RBTreeNode({self._item!r}, {c})"


# ═════════════════════════════════════════════════════════════════
#  COLOUR HELPERS
# ═════════════════════════════════════════════════════════════════

def is_red(node) -> bool:
    """
    Return whether a node is red.  None (NIL leaf) is black.

    Args:
        node (RBTreeNode|None): Node to test.
    """
    return node is not None and node.color == RED


def flip_colors(node) -> None:
    """
    Invert the colour of a node and of both its children.

    Args:
        node (RBTreeNode): Node whose left AND right children exist.

    Raises:
        PreconditionViolated: node or either child is missing.
    """
    if node is None:
        raise PreconditionViolated("flip_colors called on an absent node")
    if node.left is None or node.right is None:
        raise PreconditionViolated(
            f"flip_colors needs both children of {node!r} to be present")
    node.color       = not node.color
    node.left.color  = not node.left.color
    node.right.color = not node.right.color


# ═════════════════════════════════════════════════════════════════
#  CLUSTER EXPANSION
#
#  Turns ONE 2-3-4 node into its 1..3 red-black nodes.  Returns
#  the cluster's black top plus the attachment slots, in the
#  order the 2-3-4 children must be wired into them:
#      slots[i] = (rb_node, is_left)   for child i
# ═════════════════════════════════════════════════════════════════

def _expand(r):
    check_shape(r)
    n = r.get_item_count()
    if n == 3:
        top = RBTreeNode(r.get_item_at(1), BLACK)
        top.left  = RBTreeNode(r.get_item_at(0), RED)
        top.right = RBTreeNode(r.get_item_at(2), RED)
        slots = [(top.left, True), (top.left, False),
                 (top.right, True), (top.right, False)]
    elif n == 2:
        top = RBTreeNode(r.get_item_at(0), BLACK)
        top.right = RBTreeNode(r.get_item_at(1), RED)
        slots = [(top, True), (top.right, True), (top.right, False)]
    else:
        top = RBTreeNode(r.get_item_at(0), BLACK)
        slots = [(top, True), (top, False)]
    return top, slots


def _attach(parent, is_left, child) -> None:
    if is_left:
        parent.left = child
    else:
        parent.right = child


# ═════════════════════════════════════════════════════════════════
#  ISOMETRY BUILDERS
# ═════════════════════════════════════════════════════════════════

def build_red_black_tree(r):
    """
    Build the red-black tree isometric to the 2-3-4 tree rooted at r.

    Each 2-3-4 node becomes a cluster with a black top and red
    siblings; the node's children are converted recursively and
    wired into the cluster's free slots.  A leaf (no children)
    leaves every slot empty.

    Args:
        r: 2-3-4 root (BTreeNode or anything with the same
           accessors), or None.

    Returns:
        RBTreeNode|None: Root of the red-black tree.

    Raises:
        MalformedSourceNode: A node has an illegal item/child count.
    """
    if r is None:
        return None
    top, slots = _expand(r)
    if r.get_children_count() != 0:
        for i, (parent, is_left) in enumerate(slots):
            _attach(parent, is_left, build_red_black_tree(r.get_child_at(i)))
    return top


def build_red_black_tree_iterative(r, on_expand=None):
    """
    Same result as build_red_black_tree(), using an explicit stack.

    Depth is bounded by memory instead of the interpreter's
    recursion limit.  Clusters are attached to their parent slot
    before their own children are visited, so the partially built
    tree is always connected.

    Args:
        r         : 2-3-4 root or None.
        on_expand : Optional callback(root, cluster_top, source_node)
                    called right after each cluster is attached.

    Returns:
        RBTreeNode|None: Root of the red-black tree.
    """
    if r is None:
        return None
    root = None
    stack = [(r, None, True)]          # (source node, parent, is_left)
    while stack:
        src, parent, is_left = stack.pop()
        top, slots = _expand(src)
        if parent is None:
            root = top
        else:
            _attach(parent, is_left, top)
        if on_expand is not None:
            on_expand(root, top, src)
        if src.get_children_count() != 0:
            # Reversed so child 0 is expanded first
            for i in range(len(slots) - 1, -1, -1):
                slot_parent, slot_left = slots[i]
                stack.append((src.get_child_at(i), slot_parent, slot_left))
    return root


# ═════════════════════════════════════════════════════════════════
#  SNAPSHOT HELPERS
#
#  Explicit stacks throughout, so trees from the iterative builder
#  can be walked at any height.
# ═════════════════════════════════════════════════════════════════

def snapshot(node):
    """
    Serialise a red-black subtree into nested dicts.

    Returns:
        dict|None: {"key", "color", "left", "right"} or None.
    """
    if node is None:
        return None
    holder = {}
    stack = [(node, holder, "root")]
    while stack:
        n, parent, side = stack.pop()
        d = {"key": n.item, "color": n.color, "left": None, "right": None}
        parent[side] = d
        if n.right is not None:
            stack.append((n.right, d, "right"))
        if n.left is not None:
            stack.append((n.left, d, "left"))
    return holder["root"]


def to_tuple(node):
    """
    Nested tuple (item, color, left_tuple, right_tuple) for structural
    comparison.  Two trees are identical iff their tuples match.
    """
    if node is None:
        return None
    order, stack = [], [node]
    while stack:
        n = stack.pop()
        order.append(n)
        stack.extend(c for c in (n.left, n.right) if c is not None)
    # Children always come after their parent in `order`
    done = {None: None}
    for n in reversed(order):
        done[n] = (n.item, n.color, done[n.left], done[n.right])
    return done[node]


def _inorder(node, out):
    stack = []
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        out.append(node.item)
        node = node.right


# ═════════════════════════════════════════════════════════════════
#  RED-BLACK TREE
# ═════════════════════════════════════════════════════════════════
class RedBlackTree:
    """
    Red-black tree built once from a 2-3-4 tree.

    Attributes:
        root  (RBTreeNode|None): Root of the tree (None if empty).
        steps (list)           : Step dicts, filled when record=True.
    """

    def __init__(self, tree=None, record=False):
        """
        Args:
            tree   (BTree|BTreeNode|None): Source 2-3-4 tree: any holder
                                           with a .root, or a bare node.
                                           None gives an empty tree.
            record (bool)                : Record one step per cluster.
        """
        self.root  = None
        self.steps = []
        source = getattr(tree, "root", tree)
        if record:
            self.root = build_red_black_tree_iterative(source,
                                                       self._on_expand)
            self._record("done", "Conversion complete", highlight=[])
        else:
            self.root = build_red_black_tree(source)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Built red-black tree with %d node(s)", len(self))

    # ─────────────────────────────────────────────────────────────
    #  STEP RECORDING
    # ─────────────────────────────────────────────────────────────

    def _on_expand(self, root, top, src):
        self.root = root
        items = [src.get_item_at(i) for i in range(src.get_item_count())]
        n = len(items)
        if n == 3:
            desc = (f"3-item node {items}: black {items[1]} with red "
                    f"{items[0]} (left) and red {items[2]} (right)")
        elif n == 2:
            desc = (f"2-item node {items}: black {items[0]} with red "
                    f"{items[1]} (right)")
        else:
            desc = f"1-item node {items}: black {items[0]}"
        self._record(f"expand{n}", desc, highlight=items)

    def _record(self, action, desc, highlight=None):
        self.steps.append({
            "action":     action,
            "desc":       desc,
            "highlight":  highlight or [],
            "tree_state": self.snapshot(),
        })

    # ─────────────────────────────────────────────────────────────
    #  QUERIES
    # ─────────────────────────────────────────────────────────────

    def get_all_keys(self) -> list:
        """In-order list of all items."""
        keys = []
        _inorder(self.root, keys)
        return keys

    def snapshot(self):
        return snapshot(self.root)

    def to_tuple(self):
        return to_tuple(self.root)

    def __len__(self):
        return len(self.get_all_keys())

    # ── Colour helpers (bound to this tree) ─────────────────────
    def is_red(self, node) -> bool:
        return is_red(node)

    def flip_colors(self, node) -> None:
        flip_colors(node)
