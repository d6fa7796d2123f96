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
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping

from roadviz.core.road_map import IntersectionID, LaneID, RoadMap
from roadviz.core.utils.custom_exceptions import MissingControlStateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StopSign:
    """Stop-sign control at one intersection.

    Lanes in `priority_lanes` may proceed without stopping; every other
    incoming lane has to stop.
    """

    intersection_id: IntersectionID
    priority_lanes: FrozenSet[LaneID] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "priority_lanes", frozenset(self.priority_lanes))

    def is_priority_lane(self, lane: LaneID) -> bool:
        return lane in self.priority_lanes

    def with_priority(self, lane: LaneID, priority: bool) -> StopSign:
        """A copy of this sign with the lane's priority changed."""
        if priority:
            lanes = self.priority_lanes | {lane}
        else:
            lanes = self.priority_lanes - {lane}
        return replace(self, priority_lanes=lanes)


@dataclass(frozen=True)
class ControlMap:
    """The stop-sign state of every intersection that isn't signal controlled."""

    stop_signs: Mapping[IntersectionID, StopSign] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "stop_signs", MappingProxyType(dict(self.stop_signs))
        )

    @classmethod
    def new(cls, road_map: RoadMap) -> ControlMap:
        """Default control: an all-way stop at every intersection without a traffic signal."""
        signs = [
            StopSign(i.id)
            for i in road_map.all_intersections()
            if not i.has_traffic_signal
        ]
        logger.debug("Created %d default stop signs", len(signs))
        return cls.from_stop_signs(signs)

    @classmethod
    def from_stop_signs(cls, signs: Iterable[StopSign]) -> ControlMap:
        return cls({s.intersection_id: s for s in signs})

    def stop_sign(self, intersection_id: IntersectionID) -> StopSign:
        """The stop sign at an intersection.

        Raises:
            MissingControlStateError: If the intersection has no entry.
        """
        try:
            return self.stop_signs[intersection_id]
        except KeyError as exc:
            raise MissingControlStateError.for_intersection(intersection_id) from exc

    def with_stop_sign(self, sign: StopSign) -> ControlMap:
        """A copy of this table with one sign replaced or added."""
        signs = dict(self.stop_signs)
        signs[sign.intersection_id] = sign
        return ControlMap(signs)
