from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

import numpy as np

from caseplot.axis import AxisVisual, build_axis, x_tick_target, y_tick_target
from caseplot.brush import BrushController, BrushEvent, PointerEvent, parse_pointer_event
from caseplot.cases import FILTER_ALL, Case, attribute_value
from caseplot.config import RGBA, ChartConfig
from caseplot.filters import FILTER_ATTRIBUTES, Predicate, accept_all, apply_filter, build_predicate
from caseplot.geometry import ViewGeometry, measure_container
from caseplot.legend import LegendGroup, build_gender_legend, build_stage_legend
from caseplot.rasterize import paint_dynamic, paint_static
from caseplot.scales import LinearScale, ScaleSet, compute_scales, shape_for_gender


LOGGER = logging.getLogger(__name__)


def _union_rect(
    a: tuple[int, int, int, int] | None,
    b: tuple[int, int, int, int],
) -> tuple[int, int, int, int]:
    if a is None:
        return b
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    x0 = min(ax, bx)
    y0 = min(ay, by)
    x1 = max(ax + aw, bx + bw)
    y1 = max(ay + ah, by + bh)
    return (x0, y0, x1 - x0, y1 - y0)


@dataclass(frozen=True)
class PointMark:
    case: Case
    x: float
    y: float
    shape: str
    stroke: RGBA


@dataclass(frozen=True)
class RenderSummary:
    total: int
    filtered: int
    plotted: int
    excluded: int


class PointLayer:
    """Rendered point marks, stored column-wise in plot-area pixels."""

    def __init__(
        self,
        cases: tuple[Case, ...],
        days: np.ndarray,
        xs: np.ndarray,
        ys: np.ndarray,
        shapes: tuple[str, ...],
        strokes: tuple[RGBA, ...],
    ) -> None:
        self.cases = cases
        self._days = days
        self.xs = xs
        self.ys = ys
        self.shapes = shapes
        self.strokes = strokes

    @classmethod
    def build(
        cls,
        rows: tuple[Case, ...],
        scales: ScaleSet,
        shapes: tuple[str, ...] | None = None,
    ) -> "PointLayer":
        if shapes is None:
            shapes = tuple(shape_for_gender(c.gender) for c in rows)
        strokes = tuple(scales.pathologic_stage(attribute_value(c, "pathologic_stage")) for c in rows)
        days = np.fromiter((c.days_to_death for c in rows), dtype=np.float64, count=len(rows))
        ages = np.fromiter((c.age_at_diagnosis for c in rows), dtype=np.float64, count=len(rows))
        return cls(
            cases=rows,
            days=days,
            xs=np.asarray(scales.x(days), dtype=np.float64),
            ys=np.asarray(scales.y(ages), dtype=np.float64),
            shapes=shapes,
            strokes=strokes,
        )

    def reposition_x(self, x_scale: LinearScale) -> None:
        self.xs[:] = x_scale(self._days)

    def marks(self) -> tuple[PointMark, ...]:
        return tuple(
            PointMark(case=c, x=float(x), y=float(y), shape=shape, stroke=stroke)
            for c, x, y, shape, stroke in zip(
                self.cases, self.xs.tolist(), self.ys.tolist(), self.shapes, self.strokes, strict=True
            )
        )

    def __len__(self) -> int:
        return len(self.cases)


@dataclass
class ChartSurface:
    """Everything the chart currently has drawn."""

    x_axis: AxisVisual | None = None
    y_axis: AxisVisual | None = None
    scope_axis: AxisVisual | None = None
    points: PointLayer | None = None
    stage_legend: LegendGroup | None = None
    gender_legend: LegendGroup | None = None
    brush: BrushController | None = None
    generation: int = field(default=0)

    def clear(self) -> None:
        self.x_axis = None
        self.y_axis = None
        self.scope_axis = None
        self.points = None
        self.stage_legend = None
        self.gender_legend = None
        self.brush = None
        self.generation += 1


class ScatterPlotChart:
    """Age-at-diagnosis vs days-to-death scatter plot with a brushable scope axis."""

    def __init__(self, width: int, height: int, *, config: ChartConfig | None = None) -> None:
        self.config = config if config is not None else ChartConfig()
        self.geometry = ViewGeometry.from_container(width, height, self.config)
        self.scales = ScaleSet.for_geometry(self.geometry, self.config.palette)
        self.surface = ChartSurface()
        self._cases: tuple[Case, ...] = ()
        self._predicate: Predicate = accept_all
        self._filtered: tuple[Case, ...] = ()
        self._rendered = False
        self._dirty_rect: tuple[int, int, int, int] | None = None
        self._static_frame: tuple[int, np.ndarray] | None = None

    @classmethod
    def from_container(cls, container: Any, *, config: ChartConfig | None = None) -> "ScatterPlotChart":
        width, height = measure_container(container)
        return cls(width, height, config=config)

    @property
    def cases(self) -> tuple[Case, ...]:
        return self._cases

    @property
    def rendered(self) -> bool:
        return self._rendered

    def data(self, rows: Iterable[Case]) -> "ScatterPlotChart":
        self._cases = tuple(rows)
        return self

    def filter(self, predicate: Predicate | None) -> "ScatterPlotChart":
        self._predicate = predicate if predicate is not None else accept_all
        if self._rendered:
            self.render()
        return self

    def set_filter(self, constraints: Mapping[str, object]) -> "ScatterPlotChart":
        return self.filter(build_predicate(constraints))

    def render(self) -> RenderSummary:
        geo = self.geometry
        cfg = self.config
        filtered = apply_filter(self._cases, self._predicate)
        plotted = tuple(c for c in filtered if c.plottable)
        # Unknown genders abort before anything drawn is touched.
        shapes = tuple(shape_for_gender(c.gender) for c in plotted)

        self.surface.clear()
        compute_scales(self.scales, plotted)
        self._filtered = filtered

        x_target = x_tick_target(geo.plot_width)
        self.surface.x_axis = build_axis(self.scales.x, "bottom", target=x_target, caption=cfg.x_caption)
        self.surface.y_axis = build_axis(
            self.scales.y, "left", target=y_tick_target(geo.plot_height), caption=cfg.y_caption
        )

        self.surface.scope_axis = build_axis(self.scales.scope, "bottom", target=x_target)
        brush = BrushController(
            self.scales.scope,
            self.scales.x,
            width=geo.plot_width,
            height=geo.scope_height,
            on_change=self._on_brush,
        )
        self.surface.brush = brush
        brush.move()

        self.surface.points = PointLayer.build(plotted, self.scales, shapes)

        stage_legend = build_stage_legend(self.scales.pathologic_stage, geo, cfg)
        self.surface.stage_legend = stage_legend
        self.surface.gender_legend = build_gender_legend(
            self.scales.gender, geo, cfg, row_offset=len(stage_legend)
        )

        self._rendered = True
        self._dirty_rect = (0, 0, geo.width, geo.height)
        summary = RenderSummary(
            total=len(self._cases),
            filtered=len(filtered),
            plotted=len(plotted),
            excluded=len(filtered) - len(plotted),
        )
        LOGGER.debug(
            "rendered %d/%d cases (%d excluded) x=%s y=%s",
            summary.plotted,
            summary.total,
            summary.excluded,
            self.scales.x.domain,
            self.scales.y.domain,
        )
        return summary

    def _on_brush(self, event: BrushEvent) -> None:
        geo = self.geometry
        points = self.surface.points
        if points is not None:
            points.reposition_x(self.scales.x)
        self.surface.x_axis = build_axis(
            self.scales.x, "bottom", target=x_tick_target(geo.plot_width), caption=self.config.x_caption
        )
        top = max(0, geo.margin.top - self.config.marker_size)
        self._dirty_rect = _union_rect(self._dirty_rect, (0, top, geo.width, geo.height - top))

    def handle_pointer(self, event: PointerEvent) -> bool:
        """Route a pointer event given in chart pixel coordinates to the brush."""

        brush = self.surface.brush
        if brush is None:
            return False
        sx, sy = self.geometry.to_scope_coords(event.x, event.y)
        return brush.handle(PointerEvent(phase=event.phase, x=sx, y=sy))

    def handle_event(self, event_type: str, payload: object) -> bool:
        event = parse_pointer_event(event_type, payload)
        if event is None:
            return False
        return self.handle_pointer(event)

    def point_marks(self) -> tuple[PointMark, ...]:
        if self.surface.points is None:
            return ()
        return self.surface.points.marks()

    def filtered_cases(self) -> tuple[Case, ...]:
        return self._filtered

    def visible_domains(self) -> dict[str, list[str]]:
        """Per-attribute options from the current render's categorical scales."""

        return {attr: [FILTER_ALL, *self.scales.categorical(attr).domain] for attr in FILTER_ATTRIBUTES}

    def filter_options(self) -> dict[str, list[str]]:
        """Per-attribute options from the full dataset, unaffected by filters."""

        out: dict[str, list[str]] = {}
        for attr in FILTER_ATTRIBUTES:
            seen = dict.fromkeys(attribute_value(c, attr) for c in self._cases)
            out[attr] = [FILTER_ALL, *seen]
        return out

    def take_dirty_rect(self) -> tuple[int, int, int, int] | None:
        rect = self._dirty_rect
        self._dirty_rect = None
        return rect

    def _static_layer(self) -> np.ndarray:
        cached = self._static_frame
        if cached is None or cached[0] != self.surface.generation:
            cached = (self.surface.generation, paint_static(self))
            self._static_frame = cached
        return cached[1]

    def to_rgba(self) -> np.ndarray:
        frame = self._static_layer().copy()
        paint_dynamic(frame, self)
        return frame

    def render_patch(self, dirty_rect: tuple[int, int, int, int]) -> tuple[int, int, np.ndarray] | None:
        """Repaint only ``dirty_rect``: cached static layer plus the brush-driven layers."""

        x, y, width, height = dirty_rect
        x0 = max(0, int(x))
        y0 = max(0, int(y))
        x1 = min(self.geometry.width, x0 + int(width))
        y1 = min(self.geometry.height, y0 + int(height))
        if x1 <= x0 or y1 <= y0:
            return None
        patch = self._static_layer()[y0:y1, x0:x1].copy()
        paint_dynamic(patch, self, origin=(x0, y0))
        return (x0, y0, patch)
