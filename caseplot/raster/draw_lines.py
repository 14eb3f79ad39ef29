from __future__ import annotations

from typing import Sequence

import numpy as np

from caseplot.config import RGBA
from caseplot.raster.canvas import draw_pixel


def draw_polyline(
    dst: np.ndarray,
    points: Sequence[tuple[int, int]],
    color: RGBA,
    *,
    closed: bool = False,
) -> None:
    if len(points) < 2:
        return
    path = list(points)
    if closed:
        path.append(path[0])
    # Joint vertices are drawn once.
    for i in range(len(path) - 1):
        (x0, y0), (x1, y1) = path[i], path[i + 1]
        _draw_segment(dst, int(x0), int(y0), int(x1), int(y1), color, skip_first=i > 0)


def _draw_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, *, skip_first: bool) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    first = True

    while True:
        if not (first and skip_first):
            draw_pixel(dst, x0, y0, color)
        first = False
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
