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
# to allow for typing to refer to class being defined (Renderable)
from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence

from shapely.geometry import Polygon

from roadviz.core.colors import RGBA, ColorScheme
from roadviz.core.coordinates import BoundingBox, Circle, Point
from roadviz.core.road_map import RoadMap
from roadviz.core.utils.geometry import Line


class EntityKind(Enum):
    """The kinds of map objects that can be drawn and picked."""

    Lane = "lane"


class ID(NamedTuple):
    """Identity of a drawable map object."""

    kind: EntityKind
    value: int

    @classmethod
    def lane(cls, lane_id: int) -> ID:
        return cls(EntityKind.Lane, lane_id)

    def __str__(self):
        return f"{self.kind.name} #{self.value}"


@dataclass(frozen=True)
class RenderOptions:
    """Per-frame choices made by the caller."""

    color: Optional[RGBA] = None
    """Highlight color; replaces the object's own fill color."""
    cam_zoom: float = 1.0
    debug_mode: bool = False


@dataclass(frozen=True)
class RenderContext:
    """Read-only state shared by everything drawn in a frame."""

    road_map: RoadMap
    color_scheme: ColorScheme = field(default_factory=ColorScheme)


class GfxCtx(metaclass=ABCMeta):
    """The draw backend. Coordinates are map meters; the backend owns the camera."""

    @abstractmethod
    def draw_polygon(self, color: RGBA, polygon: Polygon):
        """Fill a polygon."""
        raise NotImplementedError

    @abstractmethod
    def draw_line(self, color: RGBA, thickness: float, line: Line):
        """Draw a segment with square ends."""
        raise NotImplementedError

    @abstractmethod
    def draw_rounded_line(self, color: RGBA, thickness: float, line: Line):
        """Draw a segment with round caps."""
        raise NotImplementedError

    @abstractmethod
    def draw_circle(self, color: RGBA, circle: Circle):
        """Fill a circle."""
        raise NotImplementedError

    @abstractmethod
    def draw_text_at(self, lines: Sequence[str], pt: Point):
        """Draw a block of text centered on a point."""
        raise NotImplementedError


class Renderable(metaclass=ABCMeta):
    """Capabilities every drawable map object provides to the render and hit-test layer."""

    @abstractmethod
    def get_id(self) -> ID:
        raise NotImplementedError

    @abstractmethod
    def draw(self, g: GfxCtx, opts: RenderOptions, ctx: RenderContext):
        raise NotImplementedError

    @abstractmethod
    def get_bounds(self) -> BoundingBox:
        raise NotImplementedError

    @abstractmethod
    def contains_pt(self, pt: Point) -> bool:
        raise NotImplementedError

    @abstractmethod
    def tooltip_lines(self, road_map: RoadMap) -> List[str]:
        raise NotImplementedError
