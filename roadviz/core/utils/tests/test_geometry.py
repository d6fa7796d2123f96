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

import pytest

from roadviz.core.coordinates import Angle, Point
from roadviz.core.utils.custom_exceptions import DegenerateGeometryError
from roadviz.core.utils.geometry import Line, PolyLine


@pytest.fixture
def elbow():
    return PolyLine([(0, 0), (10, 0), (10, 10)])


def test_angle_transforms():
    east = Angle(0)
    assert math.isclose(east.rotate_degs(90), math.pi / 2)
    assert math.isclose(east.rotate_degs(270), -math.pi / 2)
    assert math.isclose(abs(east.opposite()), math.pi)
    assert math.isclose(Angle(5 * math.pi / 2), math.pi / 2)
    assert math.isclose(Angle.from_points(Point(0, 0), Point(0, -3)), -math.pi / 2)


def test_project_away():
    pt = Point(1, 1).project_away(2, Angle(math.pi / 2))
    assert pt.x == pytest.approx(1)
    assert pt.y == pytest.approx(3)


def test_line_shift_goes_right():
    line = Line(Point(0, 0), Point(10, 0))
    shifted = line.shift(1.0)
    assert shifted.pt1 == pytest.approx((0, -1))
    assert shifted.pt2 == pytest.approx((10, -1))
    assert line.reverse().shift(1.0).pt1 == pytest.approx((10, 1))


def test_perp_line_is_centered_on_first_point():
    perp = Line(Point(5, 5), Point(5, 15)).perp_line(4.0)
    assert perp.length == pytest.approx(4.0)
    mid = Point((perp.pt1.x + perp.pt2.x) / 2, (perp.pt1.y + perp.pt2.y) / 2)
    assert mid == pytest.approx((5, 5))
    assert perp.pt1.y == pytest.approx(5)
    assert perp.pt2.y == pytest.approx(5)


def test_polyline_length_and_lines(elbow):
    assert elbow.length == pytest.approx(20)
    assert len(elbow.lines()) == 2
    assert elbow.first_line() == Line(Point(0, 0), Point(10, 0))
    assert elbow.last_line() == Line(Point(10, 0), Point(10, 10))
    assert elbow.reversed().first_pt() == Point(10, 10)


def test_dist_along(elbow):
    pt, angle = elbow.dist_along(5)
    assert pt == pytest.approx((5, 0))
    assert angle == pytest.approx(0)

    pt, angle = elbow.dist_along(15)
    assert pt == pytest.approx((10, 5))
    assert angle == pytest.approx(math.pi / 2)

    pt, _ = elbow.dist_along(20)
    assert pt == pytest.approx((10, 10))


def test_dist_along_out_of_range(elbow):
    with pytest.raises(ValueError):
        elbow.dist_along(20.5)
    with pytest.raises(ValueError):
        elbow.dist_along(-1)
    assert elbow.safe_dist_along(20.5) is None
    assert elbow.safe_dist_along(-1) is None
    assert elbow.safe_dist_along(3) is not None


def test_shift_blindly_keeps_segment_count(elbow):
    shifted = elbow.shift_blindly(1.0)
    assert len(shifted) == len(elbow)
    # Right of travel on the first leg is -y.
    assert shifted.first_pt() == pytest.approx((0, -1))
    # Right of travel on the second leg (heading +y) is +x.
    assert shifted.last_pt() == pytest.approx((11, 10))


def test_make_polygon():
    line = PolyLine([(0, 0), (40, 0)])
    polygon = line.make_polygon(2.5)
    assert polygon.area == pytest.approx(100)
    minx, miny, maxx, maxy = polygon.bounds
    assert (minx, maxx) == pytest.approx((0, 40))
    assert (miny, maxy) == pytest.approx((-1.25, 1.25))


def test_duplicate_points_are_dropped():
    line = PolyLine([(0, 0), (0, 0), (3, 4), (3, 4)])
    assert len(line) == 2
    assert line.length == pytest.approx(5)


@pytest.mark.parametrize("pts", [[], [(1, 1)], [(1, 1), (1, 1)]])
def test_degenerate_polyline(pts):
    with pytest.raises(DegenerateGeometryError):
        PolyLine(pts)

