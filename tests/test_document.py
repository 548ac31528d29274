"""Tests for svg_tint.document module."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_tint.document import (
    Batch,
    ImageAsset,
    ItemOutcome,
    collect_svg_files,
    describe_asset,
    find_fill_color,
    load_asset,
    parse_asset,
    scan_images,
)
from svg_tint.utils import parse_svg_text


ICON_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24">'
    '<path fill="#111114" d="M0 0h24v24H0z"/>'
    "</svg>"
)

NO_FILL_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="16" height="16">'
    '<rect width="16" height="16"/>'
    "</svg>"
)


def write_svg(directory: Path, name: str, markup: str = ICON_SVG) -> Path:
    path = directory / name
    path.write_text(markup, encoding="utf-8")
    return path


class TestItemOutcome:
    """Tests for ItemOutcome dataclass."""

    def test_ok(self):
        assert ItemOutcome("a", "success").ok is True
        assert ItemOutcome("a", "skipped", "no fill").ok is False
        assert ItemOutcome("a", "failed", "bad").ok is False


class TestImageAsset:
    """Tests for ImageAsset dataclass."""

    def test_derive_keeps_identity(self):
        source = ImageAsset(
            base_name="icon",
            raw_markup=ICON_SVG,
            source_path=Path("icon.svg"),
            fill_color="#111114",
            declared_size=24,
        )
        derived = source.derive(raw_markup="<svg/>", fill_color="#ffffff", rendered_preview=b"png")
        assert derived.base_name == "icon"
        assert derived.declared_size == 24
        assert derived.source_path == Path("icon.svg")
        assert derived.fill_color == "#ffffff"
        assert derived.raw_markup == "<svg/>"
        assert derived.rendered_preview == b"png"
        # Source is untouched
        assert source.fill_color == "#111114"
        assert source.raw_markup == ICON_SVG


class TestFindFillColor:
    """Tests for find_fill_color function."""

    def test_first_fill(self):
        root = parse_svg_text(
            '<svg><path fill="#AAAAAA"/><path fill="#bbbbbb"/></svg>'
        )
        assert find_fill_color(root) == "#aaaaaa"

    def test_root_fill_ignored(self):
        root = parse_svg_text('<svg fill="#123456"><path fill="#111114"/></svg>')
        assert find_fill_color(root) == "#111114"

    def test_skips_non_color_fills(self):
        root = parse_svg_text('<svg><g fill="none"><path fill="#111114"/></g></svg>')
        assert find_fill_color(root) == "#111114"

    def test_no_fill(self):
        root = parse_svg_text(NO_FILL_SVG)
        assert find_fill_color(root) is None


class TestParseAsset:
    """Tests for parse_asset and load_asset."""

    def test_parse(self):
        asset = parse_asset(ICON_SVG, base_name="icon")
        assert asset.base_name == "icon"
        assert asset.fill_color == "#111114"
        assert asset.declared_size == 24
        assert asset.raw_markup == ICON_SVG
        assert asset.source_path is None

    def test_no_width(self):
        asset = parse_asset('<svg><path fill="#111114"/></svg>', base_name="x")
        assert asset.declared_size is None

    def test_load_from_file(self, tmp_path):
        path = write_svg(tmp_path, "arrow.svg")
        asset = load_asset(path)
        assert asset.base_name == "arrow"
        assert asset.source_path == path

    def test_load_invalid_utf8(self, tmp_path):
        path = tmp_path / "bad.svg"
        path.write_bytes(b"<svg>\xff\xfe</svg>")
        with pytest.raises(UnicodeDecodeError):
            load_asset(path)


class TestCollectSvgFiles:
    """Tests for collect_svg_files function."""

    def test_expands_directories(self, tmp_path):
        write_svg(tmp_path, "a.svg")
        write_svg(tmp_path, "b.SVG")
        (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
        (tmp_path / "sub").mkdir()
        write_svg(tmp_path / "sub", "nested.svg")

        files = collect_svg_files([tmp_path])
        assert sorted(p.name for p in files) == ["a.svg", "b.SVG"]

    def test_filters_files(self, tmp_path):
        svg = write_svg(tmp_path, "a.svg")
        png = tmp_path / "a.png"
        png.write_bytes(b"")
        assert collect_svg_files([svg, png]) == [svg]


class TestScanImages:
    """Tests for scan_images function."""

    def test_sorted_by_file_name(self, tmp_path):
        dirs = [tmp_path / "x", tmp_path / "y"]
        for d in dirs:
            d.mkdir()
        paths = [
            write_svg(dirs[0], "b.svg"),
            write_svg(dirs[1], "a.svg"),
            write_svg(dirs[1], "B.svg"),
        ]
        batch = scan_images(paths)
        # Ordinal compare: upper case sorts before lower case
        assert [a.base_name for a in batch.assets] == ["B", "a", "b"]

    def test_order_independent_of_input_order(self, tmp_path):
        paths = [write_svg(tmp_path, n) for n in ("c.svg", "a.svg", "b.svg")]
        first = scan_images(paths)
        second = scan_images(list(reversed(paths)))
        assert [a.base_name for a in first.assets] == [a.base_name for a in second.assets]

    def test_failures_dropped(self, tmp_path):
        good = write_svg(tmp_path, "good.svg")
        bad_xml = write_svg(tmp_path, "bad.svg", "<svg><path></svg>")
        not_svg = write_svg(tmp_path, "html.svg", "<html/>")
        missing = tmp_path / "missing.svg"

        batch = scan_images([good, bad_xml, not_svg, missing])

        assert len(batch) == 1
        assert batch.assets[0].base_name == "good"
        assert batch.failed_count == 3
        statuses = {o.name: o.status for o in batch.outcomes}
        assert statuses == {
            "bad.svg": "failed",
            "good.svg": "success",
            "html.svg": "failed",
            "missing.svg": "failed",
        }

    def test_html_entity_not_recovered(self, tmp_path):
        markup = (
            '<svg xmlns="http://www.w3.org/2000/svg" width="24">'
            '<text fill="#111114">a&nbsp;b</text></svg>'
        )
        batch = scan_images([write_svg(tmp_path, "entity.svg", markup)])
        assert len(batch) == 0
        assert batch.outcomes[0].status == "failed"

    def test_asset_without_fill_kept(self, tmp_path):
        batch = scan_images([write_svg(tmp_path, "plain.svg", NO_FILL_SVG)])
        assert len(batch) == 1
        assert batch.assets[0].fill_color is None
        assert batch.assets[0].declared_size == 16

    def test_empty(self):
        batch = scan_images([])
        assert batch == Batch()


class TestDescribeAsset:
    """Tests for describe_asset function."""

    def test_fields(self, tmp_path):
        asset = load_asset(write_svg(tmp_path, "icon.svg"))
        data = describe_asset(asset)
        assert data == {
            "name": "icon",
            "file": str(tmp_path / "icon.svg"),
            "fill_color": "#111114",
            "declared_size": 24,
        }
