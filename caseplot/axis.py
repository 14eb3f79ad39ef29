from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from caseplot.scales import LinearScale, format_ticks_for_axis


Orientation = Literal["bottom", "left"]


@dataclass(frozen=True)
class Tick:
    value: float
    position: float
    label: str


@dataclass(frozen=True)
class AxisVisual:
    orientation: Orientation
    ticks: tuple[Tick, ...]
    baseline: tuple[float, float]
    caption: str = ""

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(t.label for t in self.ticks)


def x_tick_target(plot_width: int) -> int:
    return max(5, plot_width // 120)


def y_tick_target(plot_height: int) -> int:
    return max(4, plot_height // 140)


def build_axis(scale: LinearScale, orientation: Orientation, *, target: int, caption: str = "") -> AxisVisual:
    """Tick set and baseline for ``scale`` at its current domain."""

    if orientation not in ("bottom", "left"):
        raise ValueError(f"unsupported axis orientation: {orientation}")
    values = scale.ticks(target)
    positions = scale(values)
    labels = format_ticks_for_axis(values)
    ticks = tuple(
        Tick(value=float(v), position=float(p), label=lbl)
        for v, p, lbl in zip(values.tolist(), positions.tolist(), labels, strict=True)
    )
    r0, r1 = scale.range
    return AxisVisual(
        orientation=orientation,
        ticks=ticks,
        baseline=(min(r0, r1), max(r0, r1)),
        caption=caption,
    )
