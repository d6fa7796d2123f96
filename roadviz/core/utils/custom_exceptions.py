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
class DegenerateGeometryError(ValueError):
    """An exception raised if a polyline cannot describe a lane: fewer than two points or no length."""

    @classmethod
    def for_points(cls, pts) -> "DegenerateGeometryError":
        """Generate a `DegenerateGeometryError` naming the offending points."""
        return cls(f"Polyline needs at least two distinct points, got {list(pts)}")


class MissingControlStateError(KeyError):
    """An exception raised if an intersection has no control entry.

    The map model and the control table are built together, so this means the
    two have drifted apart.
    """

    @classmethod
    def for_intersection(cls, intersection_id) -> "MissingControlStateError":
        """Generate a `MissingControlStateError` for the given intersection."""
        return cls(
            f"Intersection {intersection_id} has no traffic signal and no stop sign entry in the control map"
        )


class LaneBuildError(RuntimeError):
    """An exception raised if the drawable artifact for a lane cannot be built."""

    def __init__(self, lane_id, reason: str):
        super().__init__(f"Failed to build geometry for lane {lane_id}: {reason}")
        self.lane_id = lane_id
