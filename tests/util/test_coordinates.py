from __future__ import annotations

import pytest

from tilemaze.util.coordinates import (
    Rect,
    add,
    format_tile,
    inverse,
    is_valid_tile_pos,
    parse_tile,
    scale,
    tile_origin,
)


class TestRect:
    def test_bounds_and_size(self) -> None:
        rect = Rect(2, 3, 4, 5)

        assert (rect.x1, rect.y1, rect.x2, rect.y2) == (2, 3, 6, 8)
        assert (rect.width, rect.height, rect.area) == (4, 5, 20)
        assert Rect.from_bounds(2, 3, 6, 8) == rect

    def test_negative_size_raises(self) -> None:
        with pytest.raises(ValueError):
            Rect(0, 0, -1, 2)

    def test_contains_is_half_open(self) -> None:
        rect = Rect(0, 0, 2, 2)

        assert rect.contains((0, 0))
        assert rect.contains((1, 1))
        assert not rect.contains((2, 1))

    def test_shared_edge_is_not_overlap(self) -> None:
        assert not Rect(0, 0, 10, 4).overlaps(Rect(0, 4, 6, 4))
        assert Rect(0, 0, 10, 4).overlaps(Rect(9, 3, 2, 2))

    def test_hashable(self) -> None:
        assert len({Rect(0, 0, 1, 1), Rect(0, 0, 1, 1), Rect(1, 0, 1, 1)}) == 2


def test_vector_helpers() -> None:
    assert add((1, 2), (3, -4)) == (4, -2)
    assert scale((0, -1), 8) == (0, -8)
    assert inverse((4, -4)) == (-4, 4)
    assert tile_origin((2, 3), 8) == (16, 24)


def test_is_valid_tile_pos() -> None:
    assert is_valid_tile_pos((0, 0), 3, 2)
    assert is_valid_tile_pos((2, 1), 3, 2)
    assert not is_valid_tile_pos((3, 0), 3, 2)
    assert not is_valid_tile_pos((0, -1), 3, 2)


@pytest.mark.parametrize(
    ("text", "tile"),
    [
        ("(13,26)", (13, 26)),
        (" (0,0) ", (0, 0)),
        ("13,26", None),
        ("(13, 26)", None),
        ("(-1,2)", None),
        ("", None),
    ],
)
def test_parse_tile(text: str, tile: tuple[int, int] | None) -> None:
    assert parse_tile(text) == tile


def test_format_tile() -> None:
    assert format_tile((13, 26)) == "(13,26)"
