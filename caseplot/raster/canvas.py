from __future__ import annotations

import numpy as np

from caseplot.config import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def _blend(view: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    src = np.asarray(color[0:3], dtype=np.float32) * a
    view[..., :3] = (src + view[..., :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    view[..., 3] = 255


def blit(dst: np.ndarray, src: np.ndarray, x0: int = 0, y0: int = 0) -> None:
    """Alpha-composite ``src`` onto ``dst`` with its top-left at ``(x0, y0)``."""

    h, w, _ = src.shape
    sx0 = max(0, -x0)
    sy0 = max(0, -y0)
    dx0 = max(0, x0)
    dy0 = max(0, y0)
    dx1 = min(dst.shape[1], x0 + w)
    dy1 = min(dst.shape[0], y0 + h)
    if dx0 >= dx1 or dy0 >= dy1:
        return

    view = dst[dy0:dy1, dx0:dx1]
    patch = src[sy0 : sy0 + (dy1 - dy0), sx0 : sx0 + (dx1 - dx0)]
    alpha = patch[:, :, 3:4].astype(np.float32) / 255.0
    view[:, :, :3] = (patch[:, :, :3] * alpha + view[:, :, :3] * (1.0 - alpha)).astype(np.uint8)
    view[:, :, 3] = 255


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if 0 <= y < dst.shape[0] and 0 <= x < dst.shape[1]:
        _blend(dst[y, x], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa <= xb:
        _blend(dst[y, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya <= yb:
        _blend(dst[ya : yb + 1, x], color)


def draw_filled_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    left = max(0, min(x0, x1))
    right = min(dst.shape[1] - 1, max(x0, x1))
    top = max(0, min(y0, y1))
    bottom = min(dst.shape[0] - 1, max(y0, y1))
    if right < left or bottom < top:
        return
    _blend(dst[top : bottom + 1, left : right + 1], color)


def draw_rect_outline(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    draw_hline(dst, x0, x1, y0, color)
    draw_hline(dst, x0, x1, y1, color)
    draw_vline(dst, x0, y0 + 1, y1 - 1, color)
    draw_vline(dst, x1, y0 + 1, y1 - 1, color)
