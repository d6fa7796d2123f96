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
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from shapely.geometry import Polygon

from roadviz.core.colors import SceneColors
from roadviz.core.controls import ControlMap
from roadviz.core.coordinates import BoundingBox, Circle, Point
from roadviz.core.road_map import Lane, LaneID, LaneType, RoadMap
from roadviz.core.render.markings import Marking, calculate_markings
from roadviz.core.render.renderable import (
    ID,
    GfxCtx,
    Renderable,
    RenderContext,
    RenderOptions,
)
from roadviz.core.render.settings import RenderSettings
from roadviz.core.utils.geometry import Line

logger = logging.getLogger(__name__)

_LANE_COLORS = {
    LaneType.Driving: SceneColors.Road,
    LaneType.Parking: SceneColors.Parking,
    LaneType.Sidewalk: SceneColors.Sidewalk,
    LaneType.Biking: SceneColors.Biking,
}


class DrawLane(Renderable):
    """Everything needed to draw and pick one lane, built once from the map model.

    Nothing here refers back to mutable state, so rebuilding from the same
    lane, road and control state always gives the same artifact.
    """

    def __init__(
        self,
        lane: Lane,
        road_map: RoadMap,
        control_map: ControlMap,
        settings: Optional[RenderSettings] = None,
    ):
        settings = settings or RenderSettings()
        road = road_map.get_r(lane.parent)

        self.id: LaneID = lane.id
        self.lane_type = lane.lane_type
        self.probably_broken = lane.probably_broken
        self._settings = settings
        self.polygon: Polygon = lane.lane_center_pts.make_polygon(
            settings.lane_thickness
        )
        self._start_crossing, self._end_crossing = calculate_crossings(
            lane, settings.lane_thickness
        )
        self.markings: Tuple[Marking, ...] = tuple(
            calculate_markings(
                lane,
                road,
                road_map.get_i(lane.dst_i),
                control_map,
                settings,
            )
        )
        self.draw_id_at: Tuple[Point, ...] = tuple(
            calculate_id_positions(lane, settings) or ()
        )

    def get_start_crossing(self) -> Line:
        return self._start_crossing

    def get_end_crossing(self) -> Line:
        """The line marking the end of the lane, perpendicular to the direction of the lane."""
        return self._end_crossing

    def fill_color(self, opts: RenderOptions, ctx: RenderContext):
        """Highlight color if given, else broken color for suspicious lanes, else by lane type."""
        if opts.color is not None:
            return opts.color
        if self.probably_broken:
            return ctx.color_scheme.get(SceneColors.Broken)
        return ctx.color_scheme.get(_LANE_COLORS[self.lane_type])

    def get_id(self) -> ID:
        return ID.lane(self.id)

    def draw(self, g: GfxCtx, opts: RenderOptions, ctx: RenderContext):
        g.draw_polygon(self.fill_color(opts, ctx), self.polygon)

        if opts.cam_zoom >= self._settings.min_zoom_for_lane_markers:
            for m in self.markings:
                color = ctx.color_scheme.get(m.kind.scene_color)
                for line in m.lines:
                    if m.round:
                        g.draw_rounded_line(color, m.thickness, line)
                    else:
                        g.draw_line(color, m.thickness, line)

        if opts.debug_mode:
            self._draw_debug(g, ctx)

    def _draw_debug(self, g: GfxCtx, ctx: RenderContext):
        line_color = ctx.color_scheme.get(SceneColors.Debug)
        circle_color = ctx.color_scheme.get(SceneColors.BrightDebug)

        for l in ctx.road_map.get_l(self.id).lane_center_pts.lines():
            g.draw_line(line_color, self._settings.debug_line_thickness, l)
            g.draw_circle(circle_color, Circle(l.pt1, self._settings.debug_pt1_radius))
            g.draw_circle(circle_color, Circle(l.pt2, self._settings.debug_pt2_radius))

        for pt in self.draw_id_at:
            g.draw_text_at([str(self.id)], pt)

    def get_bounds(self) -> BoundingBox:
        return BoundingBox.from_shapely_bounds(self.polygon.bounds)

    def contains_pt(self, pt: Point) -> bool:
        return self.polygon.covers(Point(*pt).as_shapely)

    def tooltip_lines(self, road_map: RoadMap) -> List[str]:
        l = road_map.get_l(self.id)
        r = road_map.get_r(l.parent)
        lines = [
            f"{self.get_id()} is {r.name}",
            f"From OSM way {r.osm_way_id}, parent is Road #{r.id}",
            "Lane goes from {}m to {}m".format(
                road_map.get_source_intersection(self.id).elevation,
                road_map.get_destination_intersection(self.id).elevation,
            ),
            f"Lane is {l.length():.2f}m long",
        ]
        for k, v in sorted(r.osm_tags.items()):
            lines.append(f"{k} = {v}")
        return lines

    def __repr__(self):
        return f"DrawLane(id={self.id}, markings={[m.kind.name for m in self.markings]})"


def calculate_crossings(lane: Lane, thickness: float) -> Tuple[Line, Line]:
    """Perpendicular lines across the start and the end of the lane, both facing outwards."""
    start = lane.first_line().perp_line(thickness)
    end = lane.last_line().reverse().perp_line(thickness)
    return start, end


def calculate_id_positions(
    lane: Lane, settings: RenderSettings
) -> Optional[List[Point]]:
    """Where to write the lane id: two lane thicknesses in from each end.

    Only driving lanes get labels, and only when the two spots don't cross over.
    """
    if not lane.is_driving():
        return None

    margin = 2.0 * settings.lane_thickness
    if lane.length() < 2.0 * margin:
        logger.debug("Lane %s is too short to label", lane.id)
        return None

    near_end = lane.safe_dist_along(lane.length() - margin)
    near_start = lane.safe_dist_along(margin)
    if near_end is None or near_start is None:
        return None
    return [near_end[0], near_start[0]]
