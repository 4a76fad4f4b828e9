from __future__ import annotations

import pytest

from tilemaze.obstacles import (
    ArcParameters,
    CornerSegment,
    Obstacle,
    StraightSegment,
    arc_parameters,
)
from tilemaze.tilemap import Corner, TerrainTile

H = 4


@pytest.mark.parametrize(
    ("corner", "ccw", "vector"),
    [
        (Corner.NW, True, (-H, H)),
        (Corner.NW, False, (H, -H)),
        (Corner.NE, True, (-H, -H)),
        (Corner.NE, False, (H, H)),
        (Corner.SE, True, (H, -H)),
        (Corner.SE, False, (-H, H)),
        (Corner.SW, True, (H, H)),
        (Corner.SW, False, (-H, -H)),
    ],
)
def test_corner_vectors(corner: Corner, ccw: bool, vector: tuple[int, int]) -> None:
    assert CornerSegment(corner, ccw, TerrainTile.CORNER_NW).vector == vector


def test_straight_segment_must_be_axis_aligned() -> None:
    with pytest.raises(ValueError):
        StraightSegment((8, 8), TerrainTile.WALL_H)
    with pytest.raises(ValueError):
        StraightSegment((0, 0), TerrainTile.WALL_H)


def test_straight_segment_orientation() -> None:
    horizontal = StraightSegment((-16, 0), TerrainTile.WALL_H)
    vertical = StraightSegment((0, 24), TerrainTile.WALL_V)

    assert horizontal.is_horizontal and not horizontal.is_vertical
    assert vertical.is_vertical and vertical.length == 24


class TestArcParameters:
    def test_nw_arc(self) -> None:
        segment = CornerSegment(Corner.NW, True, TerrainTile.CORNER_NW)
        assert arc_parameters(segment, (16, 12)) == ArcParameters((16, 16), H, 90)

    def test_ne_arc_same_for_both_windings(self) -> None:
        ccw = CornerSegment(Corner.NE, True, TerrainTile.CORNER_NE)
        cw = CornerSegment(Corner.NE, False, TerrainTile.CORNER_NE)
        # Entered from below, or from the left
        assert arc_parameters(ccw, (28, 16)) == ArcParameters((24, 16), H, 0)
        assert arc_parameters(cw, (24, 12)) == ArcParameters((24, 16), H, 0)

    def test_angular_corner_and_straight_have_no_arc(self) -> None:
        angular = CornerSegment(Corner.SE, True, TerrainTile.DCORNER_ANGULAR_SE, angular=True)
        straight = StraightSegment((8, 0), TerrainTile.WALL_H)
        assert arc_parameters(angular, (0, 0)) is None
        assert arc_parameters(straight, (0, 0)) is None


class TestObstacle:
    def _square(self) -> Obstacle:
        obstacle = Obstacle((16, 12))
        for segment in [
            CornerSegment(Corner.NW, True, TerrainTile.CORNER_NW),
            CornerSegment(Corner.SW, True, TerrainTile.CORNER_SW),
            StraightSegment((8, 0), TerrainTile.WALL_H),
            CornerSegment(Corner.SE, True, TerrainTile.CORNER_SE),
            CornerSegment(Corner.NE, True, TerrainTile.CORNER_NE),
            StraightSegment((-8, 0), TerrainTile.WALL_H),
        ]:
            obstacle.add_segment(segment)
        return obstacle

    def test_points_follow_segments(self) -> None:
        obstacle = self._square()
        assert obstacle.points() == [
            (12, 16),
            (16, 20),
            (24, 20),
            (28, 16),
            (24, 12),
            (16, 12),
        ]
        assert obstacle.end_point == obstacle.start_point
        assert obstacle.is_closed

    def test_empty_obstacle_is_open(self) -> None:
        assert not Obstacle((0, 0)).is_closed

    def test_corner_polygon_uses_tile_centres(self) -> None:
        assert self._square().corner_polygon() == [(12, 12), (12, 20), (28, 20), (28, 12)]

    def test_optimized_merges_straight_runs(self) -> None:
        obstacle = Obstacle((0, 4), border_obstacle=True, double_walls=True)
        for _ in range(3):
            obstacle.add_segment(StraightSegment((8, 0), TerrainTile.DWALL_H))
        obstacle.add_segment(StraightSegment((8, 0), TerrainTile.DOOR))

        optimized = obstacle.optimized()

        assert optimized.segments == [
            StraightSegment((24, 0), TerrainTile.DWALL_H),
            StraightSegment((8, 0), TerrainTile.DOOR),
        ]
        assert optimized.end_point == obstacle.end_point
        assert optimized.border_obstacle and optimized.double_walls
        assert obstacle.num_segments == 4

    def test_inner_area_of_open_obstacle_raises(self) -> None:
        obstacle = Obstacle((0, 4))
        obstacle.add_segment(StraightSegment((8, 0), TerrainTile.DWALL_H))
        with pytest.raises(ValueError):
            obstacle.inner_area_rectangles()
