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

from dataclasses import dataclass, fields

from roadviz.core.configuration import Config

_SECTION = "render"


@dataclass(frozen=True)
class RenderSettings:
    """Styling constants for lane geometry. All lengths are in meters."""

    lane_thickness: float = 2.5
    big_arrow_thickness: float = 0.5
    marking_thickness: float = 0.25
    stop_line_thickness: float = 0.45
    dash_len: float = 1.0
    dash_separation: float = 2.0
    parking_spot_length: float = 6.4
    parking_leg_length: float = 1.0
    parking_inset: float = 0.4
    """Fraction of the lane thickness the parking T is pulled in from the lane edge."""
    min_zoom_for_lane_markers: float = 5.0
    debug_line_thickness: float = 0.25
    debug_pt1_radius: float = 0.4
    debug_pt2_radius: float = 0.8

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(
                    f"Render setting `{f.name}` must be non-negative, got {value}"
                )
        if self.lane_thickness <= 0:
            raise ValueError("Lanes must have a thickness")

    @classmethod
    def from_config(cls, config: Config) -> RenderSettings:
        """Read the `[render]` section, falling back to the defaults above per option."""
        values = {}
        for f in fields(cls):
            values[f.name] = config.get_setting(
                _SECTION, f.name, default=f.default, cast=float
            )
        return cls(**values)
