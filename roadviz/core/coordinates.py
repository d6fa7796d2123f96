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
import math
from dataclasses import dataclass
from typing import NamedTuple

from shapely.geometry import Point as SPoint

from roadviz.core.utils.math import constrain_angle, vec_to_radians


class Angle(float):
    """In this space we use radians, 0 is facing +x, and turn counter-clockwise."""

    def __new__(cls, x=0.0):
        """A override to constrain the angle to -pi to pi"""
        return float.__new__(cls, constrain_angle(float(x)))

    @classmethod
    def from_points(cls, pt1: "Point", pt2: "Point") -> "Angle":
        """The direction pointing from pt1 towards pt2."""
        return cls(vec_to_radians((pt2.x - pt1.x, pt2.y - pt1.y)))

    def rotate_degs(self, degrees: float) -> "Angle":
        """Rotate counter-clockwise by the given number of degrees."""
        return Angle(self + math.radians(degrees))

    def opposite(self) -> "Angle":
        """The angle facing the other way."""
        return Angle(self + math.pi)

    def __repr__(self):
        return f"Angle({super().__repr__()})"


class Point(NamedTuple):
    """A coordinate on the map plane, in meters."""

    x: float
    y: float

    @property
    def as_shapely(self) -> SPoint:
        """Convert this point to a shapely point."""
        return SPoint(self.x, self.y)

    def project_away(self, distance: float, angle: float) -> "Point":
        """The point `distance` meters away from this one in the direction of `angle`."""
        return Point(
            self.x + distance * math.cos(angle), self.y + distance * math.sin(angle)
        )

    def dist_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True)
class BoundingBox:
    """A 2-dimensional axis aligned box located in a [x, y] coordinate system."""

    min_pt: Point
    max_pt: Point

    @classmethod
    def from_shapely_bounds(cls, bounds) -> "BoundingBox":
        """Convert a shapely (minx, miny, maxx, maxy) tuple."""
        minx, miny, maxx, maxy = bounds
        return cls(min_pt=Point(minx, miny), max_pt=Point(maxx, maxy))


class Circle(NamedTuple):
    """A circle used for debug vertex markers."""

    center: Point
    radius: float
