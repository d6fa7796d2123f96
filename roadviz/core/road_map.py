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
# to allow for typing to refer to class being defined (RoadMap)
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, NewType, Tuple

from roadviz.core.coordinates import Angle, Point
from roadviz.core.utils.geometry import Line, PolyLine

LaneID = NewType("LaneID", int)
RoadID = NewType("RoadID", int)
IntersectionID = NewType("IntersectionID", int)

# meters
PARKING_SPOT_LENGTH = 6.4


class LaneType(Enum):
    """What a lane is used for."""

    Driving = "driving"
    Parking = "parking"
    Sidewalk = "sidewalk"
    Biking = "biking"


@dataclass(frozen=True)
class Lane:
    """A single traffic, pedestrian or parking channel within a road."""

    id: LaneID
    parent: RoadID
    lane_type: LaneType
    lane_center_pts: PolyLine
    src_i: IntersectionID
    dst_i: IntersectionID
    probably_broken: bool = False
    """Set by map building when the geometry looks suspicious."""

    def length(self) -> float:
        """Length of the center line, in meters."""
        return self.lane_center_pts.length

    def first_line(self) -> Line:
        return self.lane_center_pts.first_line()

    def last_line(self) -> Line:
        return self.lane_center_pts.last_line()

    def dist_along(self, dist: float) -> Tuple[Point, Angle]:
        return self.lane_center_pts.dist_along(dist)

    def safe_dist_along(self, dist: float):
        return self.lane_center_pts.safe_dist_along(dist)

    def is_driving(self) -> bool:
        return self.lane_type == LaneType.Driving

    def number_parking_spots(self, spot_length: float = PARKING_SPOT_LENGTH) -> int:
        """How many parking spots fit, leaving room at both ends. 0 for non-parking lanes."""
        if self.lane_type != LaneType.Parking:
            return 0
        spots = math.floor(self.length() / spot_length) - 2
        return max(spots, 0)


@dataclass(frozen=True, eq=False)
class Road:
    """A collection of parallel lanes sharing a center line.

    Lanes are listed from the center line outwards, separately for each
    direction of travel.
    """

    id: RoadID
    center_pts: PolyLine
    children_forwards: Tuple[LaneID, ...] = ()
    children_backwards: Tuple[LaneID, ...] = ()
    osm_tags: Mapping[str, str] = field(default_factory=dict)
    osm_way_id: int = 0

    def __post_init__(self):
        object.__setattr__(self, "children_forwards", tuple(self.children_forwards))
        object.__setattr__(self, "children_backwards", tuple(self.children_backwards))
        object.__setattr__(self, "osm_tags", MappingProxyType(dict(self.osm_tags)))

    @property
    def name(self) -> str:
        """The display name from the tags, or a placeholder."""
        return self.osm_tags.get("name", "???")

    def all_lanes(self) -> List[LaneID]:
        return list(self.children_forwards) + list(self.children_backwards)

    def is_canonical_lane(self, lane: LaneID) -> bool:
        """True for the one lane whose side of the road carries the orientation arrow."""
        if self.children_forwards:
            return lane == self.children_forwards[0]
        return bool(self.children_backwards) and lane == self.children_backwards[0]

    def dir_and_offset(self, lane: LaneID) -> Tuple[bool, int]:
        """(is_forwards, index counting outwards from the center line) for a lane of this road."""
        if lane in self.children_forwards:
            return True, self.children_forwards.index(lane)
        if lane in self.children_backwards:
            return False, self.children_backwards.index(lane)
        raise KeyError(f"Lane {lane} doesn't belong to road {self.id}")


@dataclass(frozen=True)
class Intersection:
    """A node joining roads."""

    id: IntersectionID
    point: Point
    elevation: float = 0.0
    """meters"""
    has_traffic_signal: bool = False


class RoadMap:
    """Read-only lookup over the lanes, roads and intersections of one map."""

    def __init__(
        self,
        lanes: Iterable[Lane],
        roads: Iterable[Road],
        intersections: Iterable[Intersection],
    ):
        self._lanes: Dict[LaneID, Lane] = {l.id: l for l in lanes}
        self._roads: Dict[RoadID, Road] = {r.id: r for r in roads}
        self._intersections: Dict[IntersectionID, Intersection] = {
            i.id: i for i in intersections
        }

    def get_l(self, lane_id: LaneID) -> Lane:
        return self._lanes[lane_id]

    def get_r(self, road_id: RoadID) -> Road:
        return self._roads[road_id]

    def get_i(self, intersection_id: IntersectionID) -> Intersection:
        return self._intersections[intersection_id]

    def get_parent(self, lane_id: LaneID) -> Road:
        return self.get_r(self.get_l(lane_id).parent)

    def get_source_intersection(self, lane_id: LaneID) -> Intersection:
        return self.get_i(self.get_l(lane_id).src_i)

    def get_destination_intersection(self, lane_id: LaneID) -> Intersection:
        return self.get_i(self.get_l(lane_id).dst_i)

    def all_lanes(self) -> List[Lane]:
        return list(self._lanes.values())

    def all_roads(self) -> List[Road]:
        return list(self._roads.values())

    def all_intersections(self) -> List[Intersection]:
        return list(self._intersections.values())
