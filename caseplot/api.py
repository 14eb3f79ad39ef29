from __future__ import annotations

from typing import Any

from caseplot.chart import ScatterPlotChart
from caseplot.config import ChartConfig


def scatter_chart(
    container: Any = None,
    *,
    width: int | None = None,
    height: int | None = None,
    config: ChartConfig | None = None,
) -> ScatterPlotChart:
    """Create a chart sized from ``container`` or from explicit dimensions."""

    if container is not None:
        if width is not None or height is not None:
            raise ValueError("pass either a container or width/height, not both")
        return ScatterPlotChart.from_container(container, config=config)
    if width is None or height is None:
        raise ValueError("width and height are required without a container")
    return ScatterPlotChart(width, height, config=config)
