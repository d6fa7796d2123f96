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

import functools
import logging
from concurrent import futures
from typing import Dict, List, Optional

import rtree
from shapely.geometry import box

from roadviz.core import config as engine_config
from roadviz.core.configuration import Config
from roadviz.core.controls import ControlMap
from roadviz.core.coordinates import BoundingBox, Point
from roadviz.core.road_map import Lane, LaneID, RoadMap
from roadviz.core.render.lane import DrawLane
from roadviz.core.render.settings import RenderSettings
from roadviz.core.utils.custom_exceptions import (
    DegenerateGeometryError,
    LaneBuildError,
    MissingControlStateError,
)
from roadviz.core.utils.logging import timeit

logger = logging.getLogger(__name__)


class DrawMap:
    """Drawable artifacts for every lane of a map, keyed by lane id.

    There is no incremental update: when the map or the control state changes,
    call `rebuild` and every artifact is thrown away and built again.
    """

    def __init__(
        self,
        road_map: RoadMap,
        control_map: ControlMap,
        settings: Optional[RenderSettings] = None,
        max_workers: Optional[int] = None,
    ):
        self._settings = settings or RenderSettings()
        self._max_workers = max_workers
        self._lanes: Dict[LaneID, DrawLane] = {}
        self._lane_list: List[DrawLane] = []
        self._lane_rtree: Optional[rtree.index.Index] = None
        self.rebuild(road_map, control_map)

    @classmethod
    def from_config(
        cls,
        road_map: RoadMap,
        control_map: ControlMap,
        config: Optional[Config] = None,
    ) -> DrawMap:
        """Build with settings and worker count taken from the engine configuration.

        Without an explicit `config`, the first `engine.ini` found by
        `roadviz.core.config` is used.
        """
        config = config or engine_config()
        workers = config.get_setting("core", "build_workers", cast=int)
        return cls(
            road_map,
            control_map,
            settings=RenderSettings.from_config(config),
            max_workers=workers or None,
        )

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    def rebuild(self, road_map: RoadMap, control_map: ControlMap):
        """Discard every cached artifact and build them all from scratch."""
        lanes = road_map.all_lanes()
        build = functools.partial(
            self._build_lane, road_map=road_map, control_map=control_map
        )
        with timeit(f"Building {len(lanes)} lanes", logger.info):
            if self._max_workers and self._max_workers > 1:
                with futures.ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                    built = list(pool.map(build, lanes))
            else:
                built = [build(l) for l in lanes]
        lane_rtree = _build_lane_r_tree(built)
        self._road_map = road_map
        self._control_map = control_map
        self._lanes = {d.id: d for d in built}
        self._lane_list = built
        self._lane_rtree = lane_rtree

    def _build_lane(
        self, lane: Lane, road_map: RoadMap, control_map: ControlMap
    ) -> DrawLane:
        try:
            return DrawLane(lane, road_map, control_map, self._settings)
        except (DegenerateGeometryError, MissingControlStateError, KeyError) as e:
            logger.error("Couldn't build lane %s: %s", lane.id, e)
            raise LaneBuildError(lane.id, str(e)) from e

    @property
    def road_map(self) -> RoadMap:
        return self._road_map

    @property
    def control_map(self) -> ControlMap:
        return self._control_map

    def get_l(self, lane_id: LaneID) -> DrawLane:
        return self._lanes[lane_id]

    def all_lanes(self) -> List[DrawLane]:
        return list(self._lanes.values())

    def lanes_in_bounds(self, bounds: BoundingBox) -> List[DrawLane]:
        """Lanes whose footprint touches the given box, e.g. the visible part of the canvas."""
        query = _as_rtree_bounds(bounds)
        area = box(*query)
        return [
            self._lane_list[i]
            for i in sorted(self._lane_rtree.intersection(query))
            if self._lane_list[i].polygon.intersects(area)
        ]

    def lanes_at(self, pt: Point) -> List[DrawLane]:
        """Every lane whose footprint covers the point, for mouse picking."""
        return [
            self._lane_list[i]
            for i in sorted(self._lane_rtree.intersection((pt.x, pt.y, pt.x, pt.y)))
            if self._lane_list[i].contains_pt(pt)
        ]


def _as_rtree_bounds(bounds: BoundingBox):
    return (bounds.min_pt.x, bounds.min_pt.y, bounds.max_pt.x, bounds.max_pt.y)


def _build_lane_r_tree(lanes: List[DrawLane]) -> rtree.index.Index:
    result = rtree.index.Index()
    result.interleaved = True
    for idx, lane in enumerate(lanes):
        result.add(idx, _as_rtree_bounds(lane.get_bounds()))
    return result
