from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from caseplot.config import RGBA


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 11.0
FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "helvetica",
    "arial",
    "liberationsans",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
    anchor: str = "left",
) -> None:
    """Blend ``text`` into ``dst``; ``(x, y)`` is the top edge at ``anchor``."""

    if not text:
        return
    mask = _render_mask(text, _load_font(DEFAULT_FONT_FAMILY, font_size_px))
    turns = _quarter_turns(rotate_deg)
    if turns:
        mask = np.rot90(mask, k=turns)
    w = mask.shape[1]
    if anchor == "right":
        x -= w
    elif anchor == "middle":
        x -= w // 2
    elif anchor != "left":
        raise ValueError(f"unsupported text anchor: {anchor}")
    _blend_mask(dst, x, y, mask, color)


def text_size(text: str, *, font_size_px: float = DEFAULT_FONT_SIZE_PX, rotate_deg: int = 0) -> tuple[int, int]:
    font = _load_font(DEFAULT_FONT_FAMILY, font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    if _quarter_turns(rotate_deg) % 2 == 1:
        return (h, w)
    return (w, h)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return
    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)

    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    patch[:, :, :3] = np.clip(out_rgb / safe_alpha[:, :, None], 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


@lru_cache(maxsize=256)
def _render_mask(text: str, font: Font) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=32)
def _load_font(font_family: str, font_size_px: float) -> Font:
    path = _resolve_font_path(font_family)
    if path is None:
        LOGGER.warning("no TrueType font found for %r; using the Pillow default font", font_family)
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(path), size=max(1, int(round(font_size_px))))
    except OSError:
        LOGGER.warning("failed to load font %s; using the Pillow default font", path)
        return ImageFont.load_default()


@lru_cache(maxsize=8)
def _resolve_font_path(font_family: str) -> Path | None:
    patterns = (font_family.strip().lower(),) + FONT_FALLBACK_PATTERNS
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if base.exists():
            for ext in ("*.ttf", "*.otf"):
                candidates.extend(base.rglob(ext))
    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            # Exact family or its Regular face before any prefix match.
            stem = path.stem.lower().replace(" ", "").replace("-", "")
            if stem == p or stem == p + "regular":
                return path
        for path in candidates:
            if p in path.stem.lower().replace(" ", "").replace("-", ""):
                return path
    return None


def _quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4
