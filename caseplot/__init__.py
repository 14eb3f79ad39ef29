from caseplot.api import scatter_chart
from caseplot.brush import BrushController, BrushEvent, PointerEvent, parse_pointer_event
from caseplot.cases import FILTER_ALL, Case, Gender
from caseplot.chart import PointMark, RenderSummary, ScatterPlotChart
from caseplot.config import ChartConfig
from caseplot.errors import CasePlotError, FilterError, PlotDataError, UnknownGenderError
from caseplot.filters import build_predicate
from caseplot.scales import LinearScale, OrdinalScale

__all__ = [
    "BrushController",
    "BrushEvent",
    "Case",
    "CasePlotError",
    "ChartConfig",
    "FILTER_ALL",
    "FilterError",
    "Gender",
    "LinearScale",
    "OrdinalScale",
    "PlotDataError",
    "PointMark",
    "PointerEvent",
    "RenderSummary",
    "ScatterPlotChart",
    "UnknownGenderError",
    "build_predicate",
    "parse_pointer_event",
    "scatter_chart",
]
