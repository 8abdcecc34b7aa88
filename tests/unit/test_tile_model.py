"""Tests for the tile and pattern models."""

import pytest
from pydantic import ValidationError

from kolamgen.models.pattern import Dimensions, PathPoint
from kolamgen.models.tile import CurvePoint, Tile


class TestCurvePoint:
    def test_plain_point(self):
        point = CurvePoint(x=0.5, y=0)
        assert not point.has_control

    def test_control_point(self):
        point = CurvePoint(x=0.5, y=0, control_x=0.5, control_y=-0.3)
        assert point.has_control

    def test_half_control_is_not_a_control(self):
        assert not CurvePoint(x=0, y=0, control_x=1).has_control

    def test_frozen(self):
        point = CurvePoint(x=0, y=0)
        with pytest.raises(ValidationError):
            point.x = 1


class TestTile:
    def test_empty_tile(self):
        tile = Tile(id=1)
        assert tile.is_empty
        assert not tile.connects_outward
        assert not tile.connects_anywhere
        assert tile.edge_signature == "----"

    def test_edge_signature(self):
        tile = Tile(id=13, points=(CurvePoint(x=0, y=0), CurvePoint(x=1, y=0)),
                    touches_top_edge=True, touches_right_edge=True, touches_bottom_edge=True)
        assert tile.edge_signature == "TRB-"

    @pytest.mark.parametrize("flags,outward", [
        ({"touches_right_edge": True}, True),
        ({"touches_bottom_edge": True}, True),
        ({"touches_top_edge": True}, False),
        ({"touches_left_edge": True}, False),
    ])
    def test_connects_outward(self, flags, outward):
        tile = Tile(id=5, points=(CurvePoint(x=0, y=0), CurvePoint(x=1, y=0)), **flags)
        assert tile.connects_outward is outward
        assert tile.connects_anywhere

    def test_edge_without_points_is_not_empty(self):
        assert not Tile(id=2, touches_top_edge=True).is_empty

    @pytest.mark.parametrize("tile_id", [0, 17, -3])
    def test_id_range(self, tile_id):
        with pytest.raises(ValidationError):
            Tile(id=tile_id)

    def test_catalog_tiles_mirror_signatures(self, catalog, rules):
        for tile in catalog:
            mirrored = catalog[rules.mirror_horizontal(tile.id)]
            assert mirrored.touches_left_edge == tile.touches_right_edge
            assert mirrored.touches_right_edge == tile.touches_left_edge
            assert mirrored.edge_signature[0::2] == tile.edge_signature[0::2]


class TestPatternPrimitives:
    def test_path_point_control(self):
        assert PathPoint(x=1, y=2, control_x=3, control_y=4).has_control
        assert not PathPoint(x=1, y=2).has_control

    def test_dimensions(self):
        dims = Dimensions(width=120, height=60)
        assert (dims.width, dims.height) == (120.0, 60.0)
