from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from caseplot.config import ChartConfig, Margin


@dataclass(frozen=True)
class ViewGeometry:
    margin: Margin
    width: int
    height: int
    plot_width: int
    plot_height: int
    wrap_height: int
    scope_y: int
    scope_height: int

    @classmethod
    def from_container(cls, width: int, height: int, config: ChartConfig) -> "ViewGeometry":
        if width <= 0 or height <= 0:
            raise ValueError("container width and height must be > 0")
        margin = config.margin
        usable_w = int(width) - config.chrome_inset
        usable_h = int(height) - config.chrome_inset
        plot_w = usable_w - margin.left - margin.right
        plot_h = usable_h - margin.top - margin.bottom
        if plot_w <= 1 or plot_h <= 1:
            raise ValueError(f"container {width}x{height} leaves no drawable plot area")
        scope_y = margin.top + plot_h + config.scope_offset
        return cls(
            margin=margin,
            width=plot_w + margin.left + margin.right,
            height=plot_h + margin.top + margin.bottom,
            plot_width=plot_w,
            plot_height=plot_h,
            wrap_height=plot_h + margin.top + margin.bottom,
            scope_y=scope_y,
            scope_height=config.scope_height,
        )

    @property
    def plot_rect(self) -> tuple[int, int, int, int]:
        return (self.margin.left, self.margin.top, self.plot_width, self.plot_height)

    @property
    def scope_rect(self) -> tuple[int, int, int, int]:
        return (self.margin.left, self.scope_y, self.plot_width, self.scope_height)

    def to_scope_coords(self, x: float, y: float) -> tuple[float, float]:
        return (float(x) - self.margin.left, float(y) - self.scope_y)


def measure_container(container: Any) -> tuple[int, int]:
    """Return ``(width, height)`` of a host container.

    Accepts an ``(H, W, C)`` matrix snapshot, an object exposing ``width`` and
    ``height``, or a plain ``(width, height)`` pair.
    """

    shape = getattr(container, "shape", None)
    if shape is not None:
        if len(shape) < 2:
            raise ValueError("container snapshot must be at least 2-D")
        return (int(shape[1]), int(shape[0]))
    if hasattr(container, "width") and hasattr(container, "height"):
        return (int(container.width), int(container.height))
    if isinstance(container, (tuple, list)) and len(container) == 2:
        return (int(container[0]), int(container[1]))
    raise TypeError(f"cannot measure container of type {type(container)!r}")
