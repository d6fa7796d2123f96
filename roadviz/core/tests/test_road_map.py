# Copyright (C) 2020. Huawei Technologies Co., Ltd. All rights reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.
import pytest

from roadviz.core.controls import ControlMap, StopSign
from roadviz.core.road_map import IntersectionID, LaneID, LaneType, Road, RoadID
from roadviz.core.tests.helpers.maps import DST_I, SRC_I, straight_road_map
from roadviz.core.utils.custom_exceptions import MissingControlStateError
from roadviz.core.utils.geometry import PolyLine


@pytest.fixture
def two_way_road():
    return Road(
        id=RoadID(1),
        center_pts=PolyLine([(0, 0), (10, 0)]),
        children_forwards=(LaneID(1), LaneID(2)),
        children_backwards=(LaneID(3), LaneID(4), LaneID(5)),
        osm_tags={"name": "Elm"},
    )


def test_dir_and_offset(two_way_road):
    assert two_way_road.dir_and_offset(LaneID(1)) == (True, 0)
    assert two_way_road.dir_and_offset(LaneID(2)) == (True, 1)
    assert two_way_road.dir_and_offset(LaneID(3)) == (False, 0)
    assert two_way_road.dir_and_offset(LaneID(5)) == (False, 2)
    with pytest.raises(KeyError):
        two_way_road.dir_and_offset(LaneID(99))


def test_canonical_lane(two_way_road):
    assert [
        lane for lane in two_way_road.all_lanes() if two_way_road.is_canonical_lane(lane)
    ] == [LaneID(1)]

    backwards_only = Road(
        id=RoadID(2),
        center_pts=PolyLine([(0, 0), (10, 0)]),
        children_backwards=(LaneID(7), LaneID(8)),
    )
    assert backwards_only.is_canonical_lane(LaneID(7))
    assert not backwards_only.is_canonical_lane(LaneID(8))


def test_road_tags_are_read_only(two_way_road):
    assert two_way_road.name == "Elm"
    with pytest.raises(TypeError):
        two_way_road.osm_tags["name"] = "Oak"


@pytest.mark.parametrize(
    "length, spots", [(10.0, 0), (20.0, 1), (40.0, 4), (65.0, 8)]
)
def test_number_parking_spots(length, spots):
    road_map = straight_road_map(length=length, lane_types=[LaneType.Parking])
    assert road_map.get_l(LaneID(10)).number_parking_spots() == spots


def test_only_parking_lanes_have_spots():
    road_map = straight_road_map(length=100, lane_types=[LaneType.Driving])
    assert road_map.get_l(LaneID(10)).number_parking_spots() == 0


def test_intersection_lookups():
    road_map = straight_road_map()
    assert road_map.get_source_intersection(LaneID(10)).id == SRC_I
    assert road_map.get_destination_intersection(LaneID(10)).id == DST_I
    assert road_map.get_parent(LaneID(11)).id == RoadID(100)


def test_default_control_map_skips_signals():
    road_map = straight_road_map(has_traffic_signal=True)
    control_map = ControlMap.new(road_map)
    assert set(control_map.stop_signs) == {SRC_I}
    with pytest.raises(MissingControlStateError):
        control_map.stop_sign(DST_I)


def test_stop_sign_priority_edits_are_copies():
    sign = StopSign(IntersectionID(5))
    prioritized = sign.with_priority(LaneID(1), True)
    assert not sign.is_priority_lane(LaneID(1))
    assert prioritized.is_priority_lane(LaneID(1))
    assert not prioritized.with_priority(LaneID(1), False).is_priority_lane(LaneID(1))

    control_map = ControlMap.from_stop_signs([sign])
    edited = control_map.with_stop_sign(prioritized)
    assert not control_map.stop_sign(IntersectionID(5)).is_priority_lane(LaneID(1))
    assert edited.stop_sign(IntersectionID(5)).is_priority_lane(LaneID(1))
