from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from caseplot.axis import AxisVisual
from caseplot.config import ChartConfig
from caseplot.legend import LegendGroup
from caseplot.raster import (
    blit,
    draw_filled_rect,
    draw_hline,
    draw_marker_outline,
    draw_markers,
    draw_rect_outline,
    draw_text,
    draw_vline,
    new_canvas,
    text_size,
)

if TYPE_CHECKING:
    from caseplot.chart import ScatterPlotChart


TICK_LEN = 6
TICK_PAD = 3


def rasterize(chart: "ScatterPlotChart") -> np.ndarray:
    """Paint the chart's current surface into an ``(H, W, 4)`` uint8 frame."""

    frame = paint_static(chart)
    paint_dynamic(frame, chart)
    return frame


def paint_static(chart: "ScatterPlotChart") -> np.ndarray:
    """Layers that only change on a full render: backgrounds, y axis, captions, scope band and its axis."""

    geo = chart.geometry
    cfg = chart.config
    surface = chart.surface
    left, top, plot_w, plot_h = geo.plot_rect

    frame = new_canvas(geo.width, geo.height, color=cfg.background)
    draw_filled_rect(frame, left, top, left + plot_w - 1, top + plot_h - 1, cfg.plot_bg_color)

    if surface.x_axis is not None and surface.x_axis.caption:
        _, cap_h = text_size(surface.x_axis.caption, font_size_px=cfg.font_size_px)
        draw_text(
            frame,
            left + plot_w,
            top + plot_h - cap_h - TICK_LEN,
            surface.x_axis.caption,
            cfg.text_color,
            font_size_px=cfg.font_size_px,
            anchor="right",
        )
    if surface.y_axis is not None:
        _draw_left_axis(frame, surface.y_axis, cfg, x0=left, y0=top)

    sx, sy, sw, sh = geo.scope_rect
    draw_rect_outline(frame, sx, sy, sx + sw - 1, sy + sh - 1, cfg.axis_color)
    if surface.scope_axis is not None:
        _draw_bottom_axis(frame, surface.scope_axis, cfg, x0=sx, y0=sy + sh)
    return frame


def paint_dynamic(dst: np.ndarray, chart: "ScatterPlotChart", *, origin: tuple[int, int] = (0, 0)) -> None:
    """Paint the brush-driven layers into ``dst`` whose top-left sits at ``origin`` in the frame."""

    ox, oy = origin
    geo = chart.geometry
    cfg = chart.config
    surface = chart.surface
    left, top, plot_w, plot_h = geo.plot_rect

    if surface.x_axis is not None:
        _draw_bottom_axis(dst, surface.x_axis, cfg, x0=left - ox, y0=top + plot_h - oy)

    # Point marks are clipped to the plot area; the legend shares its origin.
    lx0 = max(left, ox)
    ly0 = max(top, oy)
    lx1 = min(left + plot_w, ox + dst.shape[1])
    ly1 = min(top + plot_h, oy + dst.shape[0])
    if lx1 > lx0 and ly1 > ly0:
        layer = new_canvas(lx1 - lx0, ly1 - ly0, color=(0, 0, 0, 0))
        shift = (left - lx0, top - ly0)
        points = surface.points
        if points is not None and len(points):
            draw_markers(
                layer, points.xs, points.ys, points.shapes, points.strokes, size=cfg.marker_size, offset=shift
            )
        for group in (surface.stage_legend, surface.gender_legend):
            if group is not None:
                _draw_legend(layer, group, cfg, offset=shift)
        blit(dst, layer, lx0 - ox, ly0 - oy)

    if surface.brush is not None and surface.brush.selection is not None:
        sx, sy, _, sh = geo.scope_rect
        b0, b1 = surface.brush.selection
        bx0 = sx + int(round(b0)) - ox
        bx1 = sx + int(round(b1)) - ox
        by0 = sy - oy
        draw_filled_rect(dst, bx0, by0 + 1, bx1, by0 + sh - 2, cfg.brush_fill)
        draw_vline(dst, bx0, by0, by0 + sh - 1, cfg.brush_stroke)
        draw_vline(dst, bx1, by0, by0 + sh - 1, cfg.brush_stroke)


def _draw_bottom_axis(frame: np.ndarray, axis: AxisVisual, cfg: ChartConfig, *, x0: int, y0: int) -> None:
    b0, b1 = axis.baseline
    draw_hline(frame, x0 + int(round(b0)), x0 + int(round(b1)), y0, cfg.axis_color)
    for tick in axis.ticks:
        tx = x0 + int(round(tick.position))
        draw_vline(frame, tx, y0, y0 + TICK_LEN, cfg.axis_color)
        draw_text(
            frame,
            tx,
            y0 + TICK_LEN + TICK_PAD,
            tick.label,
            cfg.text_color,
            font_size_px=cfg.font_size_px,
            anchor="middle",
        )


def _draw_left_axis(frame: np.ndarray, axis: AxisVisual, cfg: ChartConfig, *, x0: int, y0: int) -> None:
    b0, b1 = axis.baseline
    draw_vline(frame, x0, y0 + int(round(b0)), y0 + int(round(b1)), cfg.axis_color)
    for tick in axis.ticks:
        ty = y0 + int(round(tick.position))
        draw_hline(frame, x0 - TICK_LEN, x0, ty, cfg.axis_color)
        _, label_h = text_size(tick.label, font_size_px=cfg.font_size_px)
        draw_text(
            frame,
            x0 - TICK_LEN - TICK_PAD,
            ty - label_h // 2,
            tick.label,
            cfg.text_color,
            font_size_px=cfg.font_size_px,
            anchor="right",
        )
    if axis.caption:
        draw_text(frame, x0 + TICK_PAD, y0 + TICK_PAD, axis.caption, cfg.text_color, font_size_px=cfg.font_size_px, rotate_deg=90)


def _draw_legend(layer: np.ndarray, group: LegendGroup, cfg: ChartConfig, *, offset: tuple[int, int] = (0, 0)) -> None:
    dx, dy = offset
    for entry in group.entries:
        size = entry.glyph_size
        gx = entry.glyph_x + dx
        gy = entry.glyph_y + dy
        if entry.glyph == "swatch":
            draw_filled_rect(layer, gx, gy, gx + size - 1, gy + size - 1, entry.color)
        else:
            draw_marker_outline(layer, gx + size // 2, gy + size // 2, entry.glyph, entry.color, cfg.marker_size)
        _, label_h = text_size(entry.label, font_size_px=cfg.font_size_px)
        draw_text(
            layer,
            entry.label_x + dx,
            entry.label_y + dy - label_h // 2,
            entry.label,
            cfg.text_color,
            font_size_px=cfg.font_size_px,
            anchor="right",
        )
