#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════╗
║        2-3-4 -> Red-Black Isometry  v1.0  --  RENDER             ║
║                                                                  ║
║  Off-screen Pillow rendering of both trees:                      ║
║    • render()        -- red-black snapshot (circles)             ║
║    • render_btree()  -- 2-3-4 snapshot (boxes of 1..3 items)     ║
║    • render_pair()   -- both side by side                        ║
║    • export_png()    -- save any rendered image                  ║
║                                                                  ║
║  Colours come from Settings, persisted as JSON in the user's     ║
║  home directory (theme + per-colour overrides + image size).     ║
║                                                                  ║
║  Dependencies                                                    ║
║  ────────────                                                    ║
║  Pillow -> image rendering (render methods return None if it     ║
║            cannot be imported)                                   ║
║                                                                  ║
║  Author : Arshanhp                                               ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""

# ═════════════════════════════════════════════════════════════════
#  STANDARD LIBRARY IMPORTS
# ═════════════════════════════════════════════════════════════════
import os, json, logging

from analyze import tree_height

# ─── Pillow: image rendering ────────────────────────────────────
try:
    from PIL import Image, ImageDraw, ImageFont
    HAS_PIL = True
except ImportError:
    HAS_PIL = False

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════
#  THEME DEFINITIONS
#  Two built-in Catppuccin-inspired palettes.
# ═════════════════════════════════════════════════════════════════
THEMES = {
    # ── Dark theme (Catppuccin Mocha) ────────────────────────────
    "dark": {
        "FG": "#cdd6f4",               # Primary foreground text
        "ACCENT": "#89b4fa",           # Titles
        "CANVAS_BG": "#1e1e2e",        # Image background
        "NODE_RED_FILL": "#f38ba8",    # Fill for RED nodes
        "NODE_BLACK_FILL": "#585b70",  # Fill for BLACK nodes
        "BNODE_FILL": "#45475a",       # Fill for 2-3-4 node boxes
        "NODE_TEXT": "#ffffff",        # Text inside nodes
        "EDGE": "#585b70",             # Lines connecting nodes
        "HIGHLIGHT": "#f9e2af",        # Node highlight ring colour
    },
    # ── Light theme (Catppuccin Latte) ───────────────────────────
    "light": {
        "FG": "#4c4f69",
        "ACCENT": "#1e66f5",
        "CANVAS_BG": "#e6e9ef",
        "NODE_RED_FILL": "#d20f39",
        "NODE_BLACK_FILL": "#4c4f69",
        "BNODE_FILL": "#7c7f93",
        "NODE_TEXT": "#ffffff",
        "EDGE": "#8c8fa1",
        "HIGHLIGHT": "#df8e1d",
    },
}


# ═════════════════════════════════════════════════════════════════
#  SETTINGS -- persisted user preferences
# ═════════════════════════════════════════════════════════════════
class Settings:
    """
    Persistent rendering preferences.

    Attributes:
        theme         (str) : Active theme name ("dark" / "light").
        custom_colors (dict): Key -> hex overrides on top of the theme.
        node_radius   (int) : Red-black node circle radius in pixels.
        image_width   (int) : Default image width in pixels.
        image_height  (int) : Default image height in pixels.

    File location:  ~/.rb234_v1.json unless ``path`` is given.
    """
    DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".rb234_v1.json")

    def __init__(self, path=None):
        self.path          = path or self.DEFAULT_PATH
        self.theme         = "dark"
        self.custom_colors = {}
        self.node_radius   = 22
        self.image_width   = 800
        self.image_height  = 500
        self._load()

    # ── Load from disk ──────────────────────────────────────────
    def _load(self):
        """Read settings JSON; a missing or corrupt file keeps defaults."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path) as f:
                d = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings %s: %s", self.path, e)
            return
        if not isinstance(d, dict):
            logger.warning("Ignoring settings %s: not a JSON object", self.path)
            return
        theme = d.get("theme", "dark")
        self.theme = theme if theme in THEMES else "dark"

        colors = d.get("custom_colors", {})
        if isinstance(colors, dict):
            self.custom_colors = colors
        else:
            logger.warning("Ignoring custom_colors in %s: not an object",
                           self.path)

        # Each size field falls back on its own
        for name in ("node_radius", "image_width", "image_height"):
            if name not in d:
                continue
            try:
                setattr(self, name, int(d[name]))
            except (TypeError, ValueError):
                logger.warning("Ignoring %s=%r in %s", name, d[name],
                               self.path)

    # ── Save to disk ────────────────────────────────────────────
    def save(self):
        with open(self.path, "w") as f:
            json.dump({"theme": self.theme,
                       "custom_colors": self.custom_colors,
                       "node_radius": self.node_radius,
                       "image_width": self.image_width,
                       "image_height": self.image_height}, f)
        logger.debug("Saved settings to %s", self.path)

    # ── Colour lookup ───────────────────────────────────────────
    def get(self, key):
        """
        Resolve a colour key to its hex value.

        Priority: custom_colors[key] -> THEMES[theme][key] -> "#ffffff"
        """
        if key in self.custom_colors:
            return self.custom_colors[key]
        return THEMES.get(self.theme, THEMES["dark"]).get(key, "#ffffff")


# ═════════════════════════════════════════════════════════════════
#  LAYOUT
#
#  Both layouts return normalised (0..1) x and integer depth y.
#  Positions are keyed by id() of the snapshot dict so duplicate
#  items never collide.
# ═════════════════════════════════════════════════════════════════

def layout_tree(node, depth, lo, hi, positions):
    """
    Red-black layout via in-order midpoint splitting.

    Args:
        node      (dict|None) : Current snapshot node.
        depth     (int)       : Current depth (0 = root).
        lo, hi    (float)     : Horizontal range [lo, hi) in [0, 1].
        positions (dict)      : Output -- id(node) -> (x, depth).
    """
    if node is None:
        return
    mid = (lo + hi) / 2.0
    positions[id(node)] = (mid, depth)
    layout_tree(node.get("left"),  depth + 1, lo, mid, positions)
    layout_tree(node.get("right"), depth + 1, mid, hi, positions)


def layout_btree(node, positions):
    """
    2-3-4 layout: leaves get evenly spaced slots left to right and
    each internal node sits above the mean of its children.

    Returns:
        int: Number of node levels.
    """
    leaves = []

    def _collect(n, d):
        if not n["children"]:
            leaves.append((n, d))
            return
        for c in n["children"]:
            _collect(c, d + 1)

    def _place(n, d):
        if not n["children"]:
            return positions[id(n)][0]
        xs = [_place(c, d + 1) for c in n["children"]]
        x = sum(xs) / len(xs)
        positions[id(n)] = (x, d)
        return x

    if node is None:
        return 0
    _collect(node, 0)
    for i, (leaf, d) in enumerate(leaves):
        positions[id(leaf)] = ((i + 0.5) / len(leaves), d)
    _place(node, 0)
    return max(d for _, d in leaves) + 1


# ═════════════════════════════════════════════════════════════════
#  TREE IMAGE RENDERER
# ═════════════════════════════════════════════════════════════════
class TreeImageRenderer:
    """
    Off-screen tree renderer using Pillow.

    Args:
        settings (Settings) : For colour lookups and default size.
        width    (int|None) : Image width in pixels.
        height   (int|None) : Image height in pixels.
    """

    def __init__(self, settings=None, width=None, height=None):
        self.settings    = settings or Settings()
        self.width       = width or self.settings.image_width
        self.height      = height or self.settings.image_height
        self.node_radius = self.settings.node_radius
        self.padding     = 50           # Horizontal margin

    # ── Font loading ────────────────────────────────────────────
    @staticmethod
    def _load_fonts():
        """
        Load a monospace font for labels, falling back to Pillow's
        built-in bitmap font.

        Returns:
            tuple[ImageFont, ImageFont]: (normal_14pt, title_16pt)
        """
        candidates_mono = [
            "consola.ttf",                                         # Windows
            "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf", # Debian/Ubuntu
            "/usr/share/fonts/TTF/DejaVuSansMono.ttf",             # Arch
            "/System/Library/Fonts/Menlo.ttc",                     # macOS
        ]
        for p in candidates_mono:
            try:
                return ImageFont.truetype(p, 14), ImageFont.truetype(p, 16)
            except OSError:
                continue
        font = ImageFont.load_default()
        return font, font

    def _canvas(self, title):
        s = self.settings
        img  = Image.new("RGB", (self.width, self.height), s.get("CANVAS_BG"))
        draw = ImageDraw.Draw(img)
        font, font_t = self._load_fonts()
        if title:
            draw.text((10, 8), title, fill=s.get("ACCENT"), font=font_t)
        return img, draw, font

    def _empty(self, draw, font):
        draw.text((self.width // 2 - 40, self.height // 2),
                  "Empty Tree", fill=self.settings.get("FG"), font=font)

    def _cx(self, x):
        return int(self.padding + x * (self.width - 2 * self.padding))

    def _cy(self, y, levels):
        return int(55 + y * (self.height - 100) / max(levels, 1))

    # ── Red-black tree ──────────────────────────────────────────
    def render(self, tree_state, highlight=None, title=""):
        """
        Render a red-black snapshot to a Pillow Image.

        Args:
            tree_state (dict|None) : Snapshot dict-tree.
            highlight  (list|None) : Keys to highlight with a ring.
            title      (str)       : Text drawn at the top of the image.

        Returns:
            Image|None: Rendered image, or None if Pillow unavailable.
        """
        if not HAS_PIL:
            return None

        s = self.settings
        highlight = [h for h in (highlight or []) if h is not None]
        img, draw, font = self._canvas(title)
        if tree_state is None:
            self._empty(draw, font)
            return img

        positions = {}
        layout_tree(tree_state, 0, 0.0, 1.0, positions)
        levels = tree_height(tree_state)

        def _draw(node, pp=None):
            if node is None:
                return
            x, y = positions[id(node)]
            x, y = self._cx(x), self._cy(y, levels)
            if pp:
                draw.line([pp, (x, y)], fill=s.get("EDGE"), width=2)

            # Edges first so nodes sit on top
            _draw(node.get("left"),  (x, y))
            _draw(node.get("right"), (x, y))

            r   = self.node_radius
            key = node["key"]
            fill    = s.get("NODE_RED_FILL") if node["color"] else s.get("NODE_BLACK_FILL")
            outline = s.get("HIGHLIGHT") if key in highlight else "white"
            ow      = 3 if key in highlight else 1
            draw.ellipse([x - r, y - r, x + r, y + r],
                         fill=fill, outline=outline, width=ow)
            self._label(draw, font, str(key), x, y)

        _draw(tree_state)
        logger.debug("Rendered red-black tree (%d levels)", levels)
        return img

    # ── 2-3-4 tree ──────────────────────────────────────────────
    def render_btree(self, btree_state, highlight=None, title=""):
        """
        Render a 2-3-4 snapshot ({items, children}) as a row of boxes
        per node.

        Returns:
            Image|None: Rendered image, or None if Pillow unavailable.
        """
        if not HAS_PIL:
            return None

        s = self.settings
        highlight = [h for h in (highlight or []) if h is not None]
        img, draw, font = self._canvas(title)
        if btree_state is None:
            self._empty(draw, font)
            return img

        positions = {}
        levels = layout_btree(btree_state, positions)
        cell = self.node_radius * 2
        half_h = self.node_radius

        def _draw(node):
            x, y = positions[id(node)]
            x, y = self._cx(x), self._cy(y, levels)
            for c in node["children"]:
                cx, cy = positions[id(c)]
                draw.line([(x, y), (self._cx(cx), self._cy(cy, levels))],
                          fill=s.get("EDGE"), width=2)
                _draw(c)
            left = x - cell * len(node["items"]) // 2
            for i, item in enumerate(node["items"]):
                x0 = left + i * cell
                hl = item in highlight
                draw.rectangle([x0, y - half_h, x0 + cell, y + half_h],
                               fill=s.get("BNODE_FILL"),
                               outline=s.get("HIGHLIGHT") if hl else "white",
                               width=3 if hl else 1)
                self._label(draw, font, str(item), x0 + cell // 2, y)

        _draw(btree_state)
        logger.debug("Rendered 2-3-4 tree (%d levels)", levels)
        return img

    # ── Both, side by side ──────────────────────────────────────
    def render_pair(self, btree_state, rb_state, title=""):
        """
        Render the 2-3-4 tree (left) next to its red-black encoding
        (right) on one image twice the configured width.
        """
        if not HAS_PIL:
            return None
        left  = self.render_btree(btree_state, title=title or "2-3-4 tree")
        right = self.render(rb_state, title="red-black tree")
        img = Image.new("RGB", (self.width * 2, self.height),
                        self.settings.get("CANVAS_BG"))
        img.paste(left, (0, 0))
        img.paste(right, (self.width, 0))
        return img

    def _label(self, draw, font, txt, x, y):
        bb  = draw.textbbox((0, 0), txt, font=font)
        tw, th = bb[2] - bb[0], bb[3] - bb[1]
        draw.text((x - tw // 2, y - th // 2), txt,
                  fill=self.settings.get("NODE_TEXT"), font=font)


def export_png(img, path):
    """
    Save a rendered image as PNG.

    Raises:
        RuntimeError: img is None (Pillow was unavailable).
    """
    if img is None:
        raise RuntimeError("Nothing to export: Pillow is not installed")
    img.save(path, "PNG")
    logger.debug("Exported %s", path)
