"""Tests for Settings persistence and Pillow rendering."""

import json

import pytest

from isometry import RedBlackTree
from render import (
    THEMES,
    Settings,
    TreeImageRenderer,
    export_png,
    layout_btree,
    layout_tree,
)

PIL = pytest.importorskip("PIL")


@pytest.fixture
def settings(tmp_path):
    return Settings(path=str(tmp_path / "settings.json"))


class TestSettings:
    def test_defaults_when_file_missing(self, settings):
        assert settings.theme == "dark"
        assert settings.get("CANVAS_BG") == THEMES["dark"]["CANVAS_BG"]
        assert settings.get("NO_SUCH_KEY") == "#ffffff"

    def test_round_trip(self, settings):
        settings.theme = "light"
        settings.custom_colors = {"EDGE": "#123456"}
        settings.image_width = 640
        settings.save()
        loaded = Settings(path=settings.path)
        assert loaded.theme == "light"
        assert loaded.get("EDGE") == "#123456"
        assert loaded.get("FG") == THEMES["light"]["FG"]
        assert loaded.image_width == 640

    def test_corrupt_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        assert Settings(path=str(path)).theme == "dark"

    def test_unknown_theme_falls_back(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"theme": "neon"}))
        assert Settings(path=str(path)).theme == "dark"

    @pytest.mark.parametrize("value", [None, "big", [1, 2]])
    def test_badly_typed_size_keeps_default(self, tmp_path, value):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"node_radius": value, "image_width": 640}))
        loaded = Settings(path=str(path))
        assert loaded.node_radius == 22
        assert loaded.image_width == 640
        assert TreeImageRenderer(loaded).node_radius == 22

    def test_non_object_custom_colors_ignored(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"custom_colors": 5, "theme": "light"}))
        loaded = Settings(path=str(path))
        assert loaded.custom_colors == {}
        assert loaded.theme == "light"
        assert loaded.get("EDGE") == THEMES["light"]["EDGE"]


class TestLayout:
    def test_red_black_layout(self, scenario_c):
        state = RedBlackTree(scenario_c).snapshot()
        positions = {}
        layout_tree(state, 0, 0.0, 1.0, positions)
        assert positions[id(state)] == (0.5, 0)
        assert positions[id(state["right"])] == (0.75, 1)
        assert len(positions) == 5

    def test_btree_layout(self, scenario_c):
        state = scenario_c.snapshot()
        positions = {}
        assert layout_btree(state, positions) == 2
        xs = [positions[id(c)][0] for c in state["children"]]
        assert xs == sorted(xs)
        assert positions[id(state)][0] == pytest.approx(0.5)

    def test_btree_layout_empty(self):
        assert layout_btree(None, {}) == 0


class TestRenderer:
    def test_render_red_black(self, settings, mixed_tree):
        img = TreeImageRenderer(settings, 400, 300).render(
            RedBlackTree(mixed_tree).snapshot(), highlight=[20], title="rb")
        assert img.size == (400, 300)

    def test_render_empty(self, settings):
        img = TreeImageRenderer(settings).render(None)
        assert img.size == (settings.image_width, settings.image_height)

    def test_render_pair_and_export(self, settings, scenario_c, tmp_path):
        renderer = TreeImageRenderer(settings, 300, 200)
        img = renderer.render_pair(scenario_c.snapshot(),
                                   RedBlackTree(scenario_c).snapshot())
        assert img.size == (600, 200)
        out = tmp_path / "pair.png"
        export_png(img, str(out))
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_export_without_image(self, tmp_path):
        with pytest.raises(RuntimeError):
            export_png(None, str(tmp_path / "x.png"))
