from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace


LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]

# d3 "category10" qualitative palette.
CATEGORY10: tuple[RGBA, ...] = (
    (31, 119, 180, 255),
    (255, 127, 14, 255),
    (44, 160, 44, 255),
    (214, 39, 40, 255),
    (148, 103, 189, 255),
    (140, 86, 75, 255),
    (227, 119, 194, 255),
    (127, 127, 127, 255),
    (188, 189, 34, 255),
    (23, 190, 207, 255),
)


@dataclass(frozen=True)
class Margin:
    top: int = 20
    right: int = 20
    bottom: int = 80
    left: int = 40


@dataclass(frozen=True)
class ChartConfig:
    margin: Margin = field(default_factory=Margin)
    chrome_inset: int = 30
    scope_offset: int = 34
    scope_height: int = 24
    marker_size: int = 10
    legend_row_height: int = 20
    legend_swatch_size: int = 18
    legend_label_gap: int = 6
    palette: tuple[RGBA, ...] = CATEGORY10
    font_size_px: float = 11.0
    x_caption: str = "Days to death"
    y_caption: str = "Age at diagnosis"
    background: RGBA = (12, 16, 23, 255)
    plot_bg_color: RGBA = (20, 26, 36, 255)
    axis_color: RGBA = (124, 138, 156, 255)
    text_color: RGBA = (208, 218, 232, 255)
    brush_fill: RGBA = (119, 119, 119, 90)
    brush_stroke: RGBA = (255, 255, 255, 160)

    def __post_init__(self) -> None:
        if self.marker_size <= 0:
            raise ValueError("marker_size must be > 0")
        if self.legend_row_height <= 0:
            raise ValueError("legend_row_height must be > 0")
        if self.chrome_inset < 0:
            raise ValueError("chrome_inset must be >= 0")
        if self.font_size_px <= 0:
            raise ValueError("font_size_px must be > 0")
        if not self.palette:
            raise ValueError("palette must not be empty")

    @classmethod
    def from_env(cls, base: "ChartConfig | None" = None) -> "ChartConfig":
        cfg = base if base is not None else cls()
        overrides: dict[str, object] = {}
        marker = os.getenv("CASEPLOT_MARKER_SIZE")
        if marker:
            overrides["marker_size"] = int(marker)
        row_h = os.getenv("CASEPLOT_LEGEND_ROW_HEIGHT")
        if row_h:
            overrides["legend_row_height"] = int(row_h)
        inset = os.getenv("CASEPLOT_CHROME_INSET")
        if inset:
            overrides["chrome_inset"] = int(inset)
        font = os.getenv("CASEPLOT_FONT_SIZE")
        if font:
            overrides["font_size_px"] = float(font)
        if overrides:
            LOGGER.debug("chart config overrides from environment: %s", overrides)
        return replace(cfg, **overrides)
