from __future__ import annotations

import numpy as np

from caseplot.config import RGBA
from caseplot.raster.canvas import draw_rect_outline
from caseplot.raster.draw_lines import draw_polyline


def marker_outline(shape: str, x: int, y: int, size: int) -> list[tuple[int, int]]:
    """Closed outline vertices of a marker centered on ``(x, y)``."""

    r = max(1, size // 2)
    if shape == "square":
        return [(x - r, y - r), (x + r, y - r), (x + r, y + r), (x - r, y + r)]
    if shape == "triangle":
        base = int(round(r * 0.8))
        return [(x, y - r), (x + r, y + base), (x - r, y + base)]
    raise ValueError(f"unsupported marker shape: {shape}")


def draw_marker_outline(dst: np.ndarray, x: int, y: int, shape: str, color: RGBA, size: int) -> None:
    if shape == "square":
        r = max(1, size // 2)
        draw_rect_outline(dst, x - r, y - r, x + r, y + r, color)
        return
    draw_polyline(dst, marker_outline(shape, x, y, size), color, closed=True)


def draw_markers(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    shapes: tuple[str, ...],
    colors: tuple[RGBA, ...],
    size: int,
    offset: tuple[int, int] = (0, 0),
) -> None:
    """Outline markers at ``(xs, ys)`` rounded to pixels, then shifted by ``offset``."""

    px = np.rint(xs).astype(np.int64) + int(offset[0])
    py = np.rint(ys).astype(np.int64) + int(offset[1])
    r = max(1, size // 2)
    h, w = dst.shape[:2]
    for x, y, shape, color in zip(px.tolist(), py.tolist(), shapes, colors, strict=True):
        if x + r < 0 or y + r < 0 or x - r >= w or y - r >= h:
            continue
        draw_marker_outline(dst, x, y, shape, color, size)
