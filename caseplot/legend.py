from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from caseplot.config import RGBA, ChartConfig
from caseplot.geometry import ViewGeometry
from caseplot.scales import OrdinalScale, shape_for_gender


Glyph = Literal["swatch", "triangle", "square"]


@dataclass(frozen=True)
class LegendEntry:
    label: str
    glyph: Glyph
    color: RGBA
    # Plot-area coordinates: glyph box top-left and the label's right anchor.
    glyph_x: int
    glyph_y: int
    glyph_size: int
    label_x: int
    label_y: int


@dataclass(frozen=True)
class LegendGroup:
    name: str
    entries: tuple[LegendEntry, ...]
    row_offset: int = 0

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(e.label for e in self.entries)


def _entry(
    label: str,
    glyph: Glyph,
    color: RGBA,
    row: int,
    geometry: ViewGeometry,
    config: ChartConfig,
) -> LegendEntry:
    size = config.legend_swatch_size
    glyph_x = geometry.plot_width - size
    glyph_y = row * config.legend_row_height
    return LegendEntry(
        label=label,
        glyph=glyph,
        color=color,
        glyph_x=glyph_x,
        glyph_y=glyph_y,
        glyph_size=size,
        label_x=glyph_x - config.legend_label_gap,
        label_y=glyph_y + size // 2,
    )


def build_stage_legend(scale: OrdinalScale[RGBA], geometry: ViewGeometry, config: ChartConfig) -> LegendGroup:
    entries = tuple(
        _entry(stage, "swatch", scale(stage), i, geometry, config) for i, stage in enumerate(scale.domain)
    )
    return LegendGroup(name="pathologic_stage", entries=entries)


def build_gender_legend(
    scale: OrdinalScale[RGBA],
    geometry: ViewGeometry,
    config: ChartConfig,
    *,
    row_offset: int,
) -> LegendGroup:
    entries = tuple(
        _entry(gender, shape_for_gender(gender), config.text_color, row_offset + i, geometry, config)  # type: ignore[arg-type]
        for i, gender in enumerate(scale.domain)
    )
    return LegendGroup(name="gender", entries=entries, row_offset=row_offset)
