from __future__ import annotations

import io
import logging

import numpy as np
import pytest

from tilemaze.tilemap import TERRAIN_VALUE_LIMIT, TerrainTile, TileGrid, TileOutOfBoundsError


def test_parse_data_section() -> None:
    grid = TileGrid.parse("!data\n 1, 2\n 3, 4\n".splitlines(), value_limit=5)

    assert (grid.num_rows, grid.num_cols) == (2, 2)
    assert grid.to_array().tolist() == [[1, 2], [3, 4]]
    assert not grid.has_parse_issues


def test_parse_properties_before_data() -> None:
    text = "# comment\nname = test map\npos_pac=(3,4)\n\n!data\n0,1\n"
    grid = TileGrid.from_text(text)

    assert grid.properties == {"name": "test map", "pos_pac": "(3,4)"}
    assert grid.get_tile_property("pos_pac") == (3, 4)


def test_parse_hex_entries() -> None:
    grid = TileGrid.from_text("!data\n#0A,0x0B, 12\n", TERRAIN_VALUE_LIMIT)

    assert grid.to_array().tolist() == [[10, 11, 12]]


def test_parse_skips_blank_data_lines() -> None:
    grid = TileGrid.from_text("!data\n1,2\n\n3,4\n\n", value_limit=5)

    assert grid.to_array().tolist() == [[1, 2], [3, 4]]


def test_invalid_entries_become_empty(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        grid = TileGrid.from_text("!data\n 1, x\n 7, 2\n", value_limit=5)

    assert grid.to_array().tolist() == [[1, 0], [0, 2]]
    assert [(i.row, i.col, i.text) for i in grid.parse_issues] == [
        (0, 1, "x"),
        (1, 0, "7"),
    ]
    assert "Invalid tile map entry 'x'" in caplog.text
    assert "Invalid tile map value 7" in caplog.text


def test_inconsistent_row_width_uses_first_row(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        grid = TileGrid.from_text("!data\n1,2,3\n4,1\n2,3,4,1\n", value_limit=5)

    assert (grid.num_rows, grid.num_cols) == (3, 3)
    assert grid.to_array().tolist() == [[1, 2, 3], [4, 1, 0], [2, 3, 4]]
    assert len(grid.parse_issues) == 2
    assert "Inconsistent tile map data" in caplog.text


def test_missing_data_section_gives_empty_grid(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        grid = TileGrid.from_text("a=b\n")

    assert (grid.num_rows, grid.num_cols) == (0, 0)
    assert grid.properties == {"a": "b"}
    assert grid.has_parse_issues


def test_invalid_property_line_is_recorded() -> None:
    grid = TileGrid.from_text("no separator here\n!data\n0\n")

    assert grid.parse_issues[0].text == "no separator here"
    assert grid.get(0, 0) == 0


def test_print_parse_round_trip() -> None:
    grid = TileGrid(3, 4, TERRAIN_VALUE_LIMIT)
    grid.set(0, 0, TerrainTile.CORNER_NW)
    grid.set(2, 3, TerrainTile.DCORNER_ANGULAR_SW)
    grid.set_property("pos_pac", "(1,2)")
    grid.set_property("color", "#ffb8ae")

    parsed = TileGrid.from_text(grid.to_text(), TERRAIN_VALUE_LIMIT)

    assert parsed == grid
    assert not parsed.has_parse_issues


def test_round_trip_keeps_separators_inside_values() -> None:
    grid = TileGrid(2, 2, TERRAIN_VALUE_LIMIT)
    grid.set_property("note", "a=b: c # d")
    grid.set_property("empty", "")

    parsed = TileGrid.from_text(grid.to_text(), TERRAIN_VALUE_LIMIT)

    assert parsed == grid
    assert parsed.properties == {"note": "a=b: c # d", "empty": ""}


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("note", "a\n!data\n 5, 5"),
        ("note", "a\rb"),
        ("#hidden", "x"),
        ("!hidden", "x"),
        ("k", " padded "),
        (" k", "x"),
        ("a:b", "x"),
        ("a\nb", "x"),
        ("", "x"),
    ],
)
def test_set_property_rejects_pairs_that_do_not_round_trip(key: str, value: str) -> None:
    grid = TileGrid(2, 2, TERRAIN_VALUE_LIMIT)

    with pytest.raises(ValueError):
        grid.set_property(key, value)

    assert grid.properties == {}
    assert TileGrid.from_text(grid.to_text(), TERRAIN_VALUE_LIMIT) == grid


def test_replace_properties_validates_every_pair() -> None:
    grid = TileGrid(1, 1)
    grid.set_property("k", "v")

    with pytest.raises(ValueError):
        grid.replace_properties({"ok": "1", "bad": "x\ny"})

    assert grid.properties == {"k": "v"}


def test_print_format() -> None:
    grid = TileGrid.from_text("b=2\na=1\n!data\n1,12\n0,3\n", TERRAIN_VALUE_LIMIT)
    out = io.StringIO()

    grid.print(out)

    assert out.getvalue() == "a=1\nb=2\n!data\n 1,12\n 0, 3\n"


class TestBounds:
    def test_get_out_of_bounds_raises(self) -> None:
        grid = TileGrid(2, 3)
        with pytest.raises(TileOutOfBoundsError):
            grid.get(2, 0)
        with pytest.raises(TileOutOfBoundsError):
            grid.get(0, -1)

    def test_set_out_of_bounds_raises(self) -> None:
        grid = TileGrid(2, 3)
        with pytest.raises(IndexError):
            grid.set(0, 3, 1)

    def test_set_code_above_limit_raises(self) -> None:
        grid = TileGrid(2, 3, value_limit=3)
        with pytest.raises(ValueError):
            grid.set(0, 0, 3)

    def test_negative_size_raises(self) -> None:
        with pytest.raises(ValueError):
            TileGrid(-1, 3)


class TestAddressing:
    def test_index_and_tile_agree(self) -> None:
        grid = TileGrid(3, 4)
        for i, tile in enumerate(grid.tiles()):
            assert grid.index(tile) == i
            assert grid.tile(i) == tile

    def test_tiles_are_row_major_and_restartable(self) -> None:
        grid = TileGrid(2, 2)
        expected = [(0, 0), (1, 0), (0, 1), (1, 1)]
        assert list(grid.tiles()) == expected
        assert list(grid.tiles()) == expected

    def test_tiles_with(self) -> None:
        grid = TileGrid.from_text("!data\n1,0,1\n0,1,0\n", value_limit=2)
        assert list(grid.tiles_with(1)) == [(0, 0), (2, 0), (1, 1)]

    def test_get_tile_uses_x_y(self) -> None:
        grid = TileGrid(2, 3)
        grid.set_tile((2, 1), 5)
        assert grid.get(1, 2) == 5
        assert grid.get_tile((2, 1)) == 5


class TestCopies:
    def test_to_array_is_a_copy(self) -> None:
        grid = TileGrid(2, 2)
        cells = grid.to_array()
        cells[0, 0] = 9
        assert grid.get(0, 0) == 0

    def test_copy_is_independent(self) -> None:
        grid = TileGrid(2, 2)
        grid.set_property("k", "v")
        other = grid.copy()
        other.set(1, 1, 4)
        other.set_property("k", "changed")

        assert grid.get(1, 1) == 0
        assert grid.get_property("k") == "v"

    def test_from_array_rejects_codes_above_limit(self) -> None:
        with pytest.raises(ValueError):
            TileGrid.from_array(np.array([[0, 5]]), value_limit=5)

    def test_clear_and_fill(self) -> None:
        grid = TileGrid(2, 2, value_limit=4)
        grid.fill(3)
        assert np.all(grid.to_array() == 3)
        grid.clear()
        assert np.all(grid.to_array() == 0)


class TestTileProperties:
    def test_unparsable_value_falls_back_to_default(self) -> None:
        grid = TileGrid(1, 1)
        grid.set_property("pos", "13,26")
        assert grid.get_tile_property("pos", (1, 1)) == (1, 1)

    def test_missing_property_falls_back_to_default(self) -> None:
        grid = TileGrid(1, 1)
        assert grid.get_tile_property("pos") is None
        assert grid.get_tile_property("pos", (0, 2)) == (0, 2)

    def test_set_tile_property_formats_position(self) -> None:
        grid = TileGrid(1, 1)
        grid.set_tile_property("pos", (13, 26))
        assert grid.get_property("pos") == "(13,26)"
        assert grid.property_names() == ["pos"]
