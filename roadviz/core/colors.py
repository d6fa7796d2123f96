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
from enum import Enum
from typing import Mapping, Optional, Tuple

RGBA = Tuple[float, float, float, float]


# Color channel order: RGBA
class Colors(Enum):
    Red = (210 / 255, 30 / 255, 30 / 255, 1)
    Orange = (237 / 255, 109 / 255, 0, 1)
    Yellow = (255 / 255, 190 / 255, 40 / 255, 1)
    Green = (98 / 255, 178 / 255, 48 / 255, 1)
    Black = (0, 0, 0, 1)

    Blue = (0, 153 / 255, 1, 1)
    LightBlue = (173 / 255, 216 / 255, 230 / 255, 1)

    Purple = (127 / 255, 0, 127 / 255, 1)
    Magenta = (1, 0, 1, 1)

    DarkGrey = (80 / 255, 80 / 255, 80 / 255, 1)
    Grey = (119 / 255, 136 / 255, 153 / 255, 1)
    LightGrey = (170 / 255, 170 / 255, 170 / 255, 1)

    OffWhite = (200 / 255, 200 / 255, 200 / 255, 1)
    White = (1, 1, 1, 1)


class SceneColors(Enum):
    Road = Colors.Black.value
    Parking = Colors.DarkGrey.value
    Sidewalk = Colors.LightGrey.value
    Biking = Colors.Green.value
    Broken = Colors.Magenta.value

    RoadOrientation = Colors.Yellow.value
    SidewalkMarking = Colors.Grey.value
    ParkingMarking = Colors.White.value
    DrivingLaneMarking = Colors.OffWhite.value
    StopSignMarking = Colors.Red.value

    Debug = Colors.Purple.value
    BrightDebug = Colors.Orange.value


class ColorScheme:
    """Resolves semantic scene colors to RGBA, with optional per-key overrides."""

    def __init__(self, overrides: Optional[Mapping[str, RGBA]] = None):
        self._overrides = {}
        for name, rgba in (overrides or {}).items():
            if name not in SceneColors.__members__:
                raise ValueError(f"Unknown scene color `{name}`")
            self._overrides[name] = tuple(rgba)

    def get(self, color: SceneColors) -> RGBA:
        return self._overrides.get(color.name, color.value)
