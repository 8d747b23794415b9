"""Tests for layout files and the children built from them."""
from __future__ import annotations

from pathlib import Path

import pytest

from cli.main import build_child, build_children, build_container
from common.config_loader import LoadedLayout, load_layout, load_yaml
from layout.child import Child, ConstraintError

ROOT = Path(__file__).resolve().parents[1]
SAMPLE_LAYOUT = ROOT / "config" / "columns.yaml"


def write_layout(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "layout.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadLayout:
    """Tests for reading layout files."""

    def test_sample_layout(self):
        layout = load_layout(SAMPLE_LAYOUT)

        assert layout.width == 50
        assert layout.margin_between == 1
        assert [c["content"] for c in layout.children] == [
            "name", "price", "quantity", "total", "comments", "vendor",
        ]

    def test_sample_layout_allocation(self):
        container = build_container(load_layout(SAMPLE_LAYOUT), 50)

        assert container.sizes() == [7, 8, 8, 8, 15, 0]

    def test_defaults(self, tmp_path):
        path = write_layout(tmp_path, "children:\n  - content: a\n")

        layout = load_layout(path)

        assert layout.width is None
        assert layout.margin_between == 0
        assert layout.children == [{"content": "a"}]

    def test_bare_names_become_children(self, tmp_path):
        path = write_layout(tmp_path, "children: [a, b]\n")

        assert load_layout(path).children == [{"content": "a"}, {"content": "b"}]

    def test_empty_file(self, tmp_path):
        path = write_layout(tmp_path, "")

        assert load_yaml(path) == {}
        assert load_layout(path).children == []

    def test_children_must_be_a_list(self, tmp_path):
        path = write_layout(tmp_path, "children:\n  a: 1\n")

        with pytest.raises(ConstraintError):
            load_layout(path)

    def test_layout_must_be_a_mapping(self, tmp_path):
        path = write_layout(tmp_path, "- a\n- b\n")

        with pytest.raises(ConstraintError):
            load_layout(path)

    @pytest.mark.parametrize(
        "text",
        [
            "margin_between: 1.9\n",
            "margin_between: true\n",
            "margin_between: -1\n",
            "width: 49.9\n",
            "width: \"50\"\n",
            "width: -3\n",
        ],
    )
    def test_sizes_must_be_non_negative_integers(self, tmp_path, text):
        """Layout-level sizes are rejected, never truncated or coerced."""
        path = write_layout(tmp_path, text + "children: [a]\n")

        with pytest.raises(ConstraintError):
            load_layout(path)

    def test_zero_width_and_margin_allowed(self, tmp_path):
        path = write_layout(tmp_path, "width: 0\nmargin_between: 0\nchildren: [a]\n")

        layout = load_layout(path)

        assert (layout.width, layout.margin_between) == (0, 0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_layout(tmp_path / "missing.yaml")


class TestBuildChild:
    """Tests for turning layout entries into children."""

    def test_clamp(self):
        assert build_child({"content": "name", "clamp": [5, 10]}) == Child("name").clamp(5, 10)

    def test_size_and_priority(self):
        child = build_child({"content": "price", "size": 8, "optional": 7})

        assert child == Child("price").with_size(8).optional_with_priority(7)

    def test_optional_true(self):
        child = build_child({"content": "quantity", "size": 8, "optional": True})

        assert child.is_optional
        assert child.priority == 0

    def test_priority_key_implies_optional(self):
        child = build_child({"content": "vendor", "priority": 3})

        assert child.is_optional
        assert child.priority == 3

    def test_min_max_fixed_grow(self):
        child = build_child({"content": "notes", "min": 2, "max": 20, "fixed": 6, "grow": 0.5})

        assert (child.min_size, child.max_size, child.fixed_size, child.grow) == (2, 20, 6, 0.5)

    def test_not_optional_by_default(self):
        assert not build_child({"content": "total", "optional": False}).is_optional

    def test_unknown_key_rejected(self):
        with pytest.raises(ConstraintError, match="colour"):
            build_child({"content": "a", "colour": "red"})

    def test_bad_clamp_rejected(self):
        with pytest.raises(ConstraintError):
            build_child({"content": "a", "clamp": [5]})

    def test_bad_optional_rejected(self):
        with pytest.raises(ConstraintError):
            build_child({"content": "a", "optional": "maybe"})

    def test_priority_contradicting_optional_false_rejected(self):
        with pytest.raises(ConstraintError, match="contradicts"):
            build_child({"content": "a", "optional": False, "priority": 3})

    def test_priority_contradicting_optional_priority_rejected(self):
        with pytest.raises(ConstraintError, match="contradicts"):
            build_child({"content": "a", "optional": 2, "priority": 3})

    def test_priority_agreeing_with_optional(self):
        assert build_child({"content": "a", "optional": True, "priority": 3}).priority == 3
        assert build_child({"content": "a", "optional": 3, "priority": 3}).priority == 3

    @pytest.mark.parametrize(
        "info",
        [
            {"content": "a", "min": 4, "size": 8},
            {"content": "a", "size": 8, "max": 10},
            {"content": "a", "size": 8, "fixed": 8},
            {"content": "a", "size": 8, "clamp": [1, 9]},
            {"content": "a", "clamp": [5, 10], "min": 12, "max": 20},
        ],
    )
    def test_conflicting_keys_rejected(self, info):
        """Keys setting the same bound twice are rejected instead of one silently winning."""
        with pytest.raises(ConstraintError, match="cannot be combined"):
            build_child(info)

    def test_min_and_max_independent_of_key_order(self):
        first = build_child({"content": "a", "max": 20, "min": 12})
        second = build_child({"content": "a", "min": 12, "max": 20})

        assert first == second == Child("a").clamp(12, 20)

    def test_inconsistent_bounds_rejected(self):
        with pytest.raises(ConstraintError):
            build_child({"content": "a", "min": 12, "max": 10})

    def test_build_children(self):
        layout = LoadedLayout(width=None, margin_between=0, children=[{"content": "a"}, {"content": "b", "size": 3}])

        assert build_children(layout) == [Child("a"), Child("b").with_size(3)]

    def test_margin_override(self):
        layout = LoadedLayout(width=None, margin_between=5, children=[{"content": "a"}, {"content": "b"}])

        assert build_container(layout, 10).sizes() == [3, 2]
        assert build_container(layout, 10, margin_between=0).sizes() == [5, 5]
