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
"""Painted markings drawn on top of a lane's footprint.

Every generator here is a pure function of the lane, its parent road and the
intersection control state. When a marking would need a position past the end
of the lane it is left out rather than treated as an error.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from roadviz.core.colors import SceneColors
from roadviz.core.controls import ControlMap
from roadviz.core.road_map import Intersection, Lane, LaneType, Road
from roadviz.core.render.settings import RenderSettings
from roadviz.core.utils.geometry import Line

logger = logging.getLogger(__name__)


class MarkingKind(Enum):
    """Style category of a marking, only used to pick its color."""

    Orientation = SceneColors.RoadOrientation
    Sidewalk = SceneColors.SidewalkMarking
    Parking = SceneColors.ParkingMarking
    DrivingDash = SceneColors.DrivingLaneMarking
    StopLine = SceneColors.StopSignMarking

    @property
    def scene_color(self) -> SceneColors:
        return self.value


@dataclass(frozen=True)
class Marking:
    """A set of segments drawn with one style."""

    lines: Tuple[Line, ...]
    kind: MarkingKind
    thickness: float
    round: bool


def _tick(pt, angle, length: float) -> Line:
    # Any point down the direction of travel works; perp_line centers on the first.
    return Line(pt, pt.project_away(1.0, angle)).perp_line(length)


def calculate_markings(
    lane: Lane,
    road: Road,
    dst_intersection: Intersection,
    control_map: ControlMap,
    settings: RenderSettings,
) -> List[Marking]:
    """All markings of a lane, in the order they should be drawn."""
    markings: List[Marking] = []
    if road.is_canonical_lane(lane.id):
        markings.append(
            Marking(
                lines=tuple(road.center_pts.lines()),
                kind=MarkingKind.Orientation,
                thickness=settings.big_arrow_thickness,
                round=True,
            )
        )

    if lane.lane_type == LaneType.Sidewalk:
        markings.append(calculate_sidewalk_lines(lane, settings))
    elif lane.lane_type == LaneType.Parking:
        markings.append(calculate_parking_lines(lane, settings))
    elif lane.lane_type == LaneType.Driving:
        m = calculate_driving_lines(lane, road, settings)
        if m:
            markings.append(m)

    if lane.is_driving() and not dst_intersection.has_traffic_signal:
        m = calculate_stop_sign_line(lane, control_map, settings)
        if m:
            markings.append(m)
    return markings


def calculate_sidewalk_lines(lane: Lane, settings: RenderSettings) -> Marking:
    """Perpendicular ticks every lane-thickness, keeping one thickness clear of both ends."""
    tile_every = settings.lane_thickness
    length = lane.length()

    lines = []
    # Index based so the spacing doesn't drift with accumulated float error.
    idx = 1
    while idx * tile_every <= length - 2 * tile_every:
        found = lane.safe_dist_along(idx * tile_every)
        if found is None:
            break
        pt, angle = found
        lines.append(_tick(pt, angle, settings.lane_thickness))
        idx += 1

    return Marking(
        lines=tuple(lines),
        kind=MarkingKind.Sidewalk,
        thickness=settings.marking_thickness,
        round=False,
    )


def calculate_parking_lines(lane: Lane, settings: RenderSettings) -> Marking:
    """A "T" at the boundary between each pair of parking spots."""
    leg_length = settings.parking_leg_length

    lines = []
    num_spots = lane.number_parking_spots(settings.parking_spot_length)
    if num_spots > 0:
        for idx in range(num_spots + 1):
            pt, lane_angle = lane.dist_along(
                settings.parking_spot_length * (1.0 + idx)
            )
            # Left of travel, opposite to `Line.shift`.
            perp_angle = lane_angle.rotate_degs(90.0)
            # Stop short of the lane edge; the drawn line has thickness and must not
            # run into the neighbouring lane.
            t_pt = pt.project_away(
                settings.lane_thickness * settings.parking_inset, perp_angle
            )
            # The perp leg
            p1 = t_pt.project_away(leg_length, perp_angle.opposite())
            lines.append(Line(t_pt, p1))
            # Upper leg
            p2 = t_pt.project_away(leg_length, lane_angle)
            lines.append(Line(t_pt, p2))
            # Lower leg
            p3 = t_pt.project_away(leg_length, lane_angle.opposite())
            lines.append(Line(t_pt, p3))

    return Marking(
        lines=tuple(lines),
        kind=MarkingKind.Parking,
        thickness=settings.marking_thickness,
        round=False,
    )


def calculate_driving_lines(
    lane: Lane, parent: Road, settings: RenderSettings
) -> Optional[Marking]:
    """Dashes along the left edge of every driving lane but the one next to the center line."""
    # The lanes next to the center line don't have dashed white lines.
    if parent.dir_and_offset(lane.id)[1] == 0:
        return None

    # Project left, so reverse the points.
    center_pts = lane.lane_center_pts.reversed()
    lane_edge_pts = center_pts.shift_blindly(settings.lane_thickness / 2.0)

    # TODO walk the edge once instead of two arc-length lookups per dash; this also
    # doesn't follow bends properly.
    lane_len = lane_edge_pts.length
    dash_separation = settings.dash_separation
    dash_len = settings.dash_len

    lines = []
    start = dash_separation
    while start + dash_len < lane_len - dash_separation:
        pt1, _ = lane_edge_pts.dist_along(start)
        pt2, _ = lane_edge_pts.dist_along(start + dash_len)
        lines.append(Line(pt1, pt2))
        start += dash_len + dash_separation

    if not lines:
        logger.debug("Lane %s is too short for any lane dashes", lane.id)
        return None

    return Marking(
        lines=tuple(lines),
        kind=MarkingKind.DrivingDash,
        thickness=settings.marking_thickness,
        round=False,
    )


def calculate_stop_sign_line(
    lane: Lane, control_map: ControlMap, settings: RenderSettings
) -> Optional[Marking]:
    """A stop line near the end of a lane that has to yield at its stop sign."""
    if control_map.stop_sign(lane.dst_i).is_priority_lane(lane.id):
        return None

    found = lane.safe_dist_along(lane.length() - 2.0 * settings.lane_thickness)
    if found is None:
        logger.debug("Lane %s is too short for a stop line", lane.id)
        return None
    pt, angle = found
    return Marking(
        lines=(_tick(pt, angle, settings.lane_thickness),),
        kind=MarkingKind.StopLine,
        thickness=settings.stop_line_thickness,
        round=True,
    )
