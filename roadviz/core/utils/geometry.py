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

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from cached_property import cached_property
from shapely.geometry import LineString, MultiPolygon, Polygon
from shapely.geometry.base import CAP_STYLE, JOIN_STYLE

from roadviz.core.coordinates import Angle, Point
from roadviz.core.utils.custom_exceptions import DegenerateGeometryError
from roadviz.core.utils.math import cumulative_lengths, lerp

# Distances are floats accumulated along segments; allow this much slop at the end.
EPSILON_DIST = 1e-6


def buffered_shape(shape, width: float = 1.0) -> Polygon:
    """Generates a shape with a buffer of `width` around the original shape."""
    ls = LineString(shape).buffer(
        width / 2,
        1,
        cap_style=CAP_STYLE.flat,
        join_style=JOIN_STYLE.round,
        mitre_limit=5.0,
    )
    if isinstance(ls, MultiPolygon):
        # Sometimes it oddly outputs a MultiPolygon and then we need to turn it into a convex hull
        ls = ls.convex_hull
    elif not isinstance(ls, Polygon):
        raise RuntimeError("Shapely `object.buffer` behavior may have changed.")
    return ls


@dataclass(frozen=True)
class Line:
    """A directed segment from pt1 to pt2."""

    pt1: Point
    pt2: Point

    @property
    def angle(self) -> Angle:
        """Direction of travel from pt1 to pt2."""
        return Angle.from_points(self.pt1, self.pt2)

    @property
    def length(self) -> float:
        """Length of the segment."""
        return self.pt1.dist_to(self.pt2)

    def reverse(self) -> Line:
        """The same segment travelled the other way."""
        return Line(self.pt2, self.pt1)

    def shift(self, width: float) -> Line:
        """Move the segment sideways by `width`, to the right of its direction."""
        angle = self.angle.rotate_degs(-90)
        return Line(
            self.pt1.project_away(width, angle), self.pt2.project_away(width, angle)
        )

    def dist_along(self, dist: float) -> Point:
        """The point `dist` meters from pt1 towards pt2."""
        length = self.length
        if dist < 0 or dist > length + EPSILON_DIST:
            raise ValueError(f"Can't go {dist} along {self}, which is only {length}")
        if length == 0:
            return self.pt1
        p = min(dist / length, 1.0)
        return Point(lerp(self.pt1.x, self.pt2.x, p), lerp(self.pt1.y, self.pt2.y, p))

    def perp_line(self, length: float) -> Line:
        """A segment of `length` centered on pt1 and perpendicular to this one."""
        pt1 = self.shift(length / 2.0).pt1
        pt2 = self.reverse().shift(length / 2.0).pt2
        return Line(pt1, pt2)


class PolyLine:
    """An ordered chain of at least two points with a positive length.

    Consecutive duplicate points are dropped. Anything shorter raises a
    `DegenerateGeometryError`, since such a line can not be parametrized by
    arc-length.
    """

    def __init__(self, pts: Iterable[Sequence[float]]):
        deduped: List[Point] = []
        for p in pts:
            pt = Point(float(p[0]), float(p[1]))
            if not deduped or deduped[-1] != pt:
                deduped.append(pt)
        if len(deduped) < 2:
            raise DegenerateGeometryError.for_points(deduped)
        self._pts: Tuple[Point, ...] = tuple(deduped)
        if self.length <= 0:
            raise DegenerateGeometryError.for_points(deduped)

    @property
    def points(self) -> Tuple[Point, ...]:
        """The vertices of this line."""
        return self._pts

    @cached_property
    def _cumulative(self) -> np.ndarray:
        return cumulative_lengths(np.array(self._pts, dtype=np.float64))

    @cached_property
    def length(self) -> float:
        """Total arc-length."""
        return float(self._cumulative[-1])

    @cached_property
    def _lines(self) -> Tuple[Line, ...]:
        return tuple(Line(a, b) for a, b in zip(self._pts, self._pts[1:]))

    def lines(self) -> List[Line]:
        """Every segment, in order."""
        return list(self._lines)

    def first_line(self) -> Line:
        """The first segment."""
        return self._lines[0]

    def last_line(self) -> Line:
        """The last segment."""
        return self._lines[-1]

    def first_pt(self) -> Point:
        return self._pts[0]

    def last_pt(self) -> Point:
        return self._pts[-1]

    def reversed(self) -> PolyLine:
        """The same line with its points in the opposite order."""
        return PolyLine(reversed(self._pts))

    def shift_blindly(self, width: float) -> PolyLine:
        """Shift every segment `width` to its right, without fixing up the joints.

        At bends the shifted segments overlap or leave a gap; the result just
        chains each shifted segment's end point.
        """
        result: List[Point] = []
        for line in self._lines:
            shifted = line.shift(width)
            if not result:
                result.append(shifted.pt1)
            result.append(shifted.pt2)
        return PolyLine(result)

    def dist_along(self, dist: float) -> Tuple[Point, Angle]:
        """The point at `dist` meters along this line and the direction of travel there.

        Raises:
            ValueError: If `dist` is negative or beyond the end of the line.
        """
        if dist < 0 or dist > self.length + EPSILON_DIST:
            raise ValueError(
                f"Can't go {dist} along a polyline of length {self.length}"
            )
        dist = min(dist, self.length)
        idx = int(np.searchsorted(self._cumulative, dist, side="right")) - 1
        idx = min(max(idx, 0), len(self._lines) - 1)
        line = self._lines[idx]
        local = min(dist - float(self._cumulative[idx]), line.length)
        return line.dist_along(max(local, 0.0)), line.angle

    def safe_dist_along(self, dist: float) -> Optional[Tuple[Point, Angle]]:
        """Like `dist_along`, but returns None instead of raising when `dist` is out of range."""
        if dist < 0 or dist > self.length + EPSILON_DIST:
            return None
        return self.dist_along(dist)

    def make_polygon(self, width: float) -> Polygon:
        """Thicken this line into a polygon `width` across, with flat ends."""
        return buffered_shape(self._pts, width)

    def __len__(self):
        return len(self._pts)

    def __eq__(self, other) -> bool:
        return isinstance(other, PolyLine) and self._pts == other._pts

    def __hash__(self) -> int:
        return hash(self._pts)

    def __repr__(self):
        return f"PolyLine({list(self._pts)})"
