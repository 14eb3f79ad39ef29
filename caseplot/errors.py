from __future__ import annotations


class CasePlotError(Exception):
    """Base class for chart engine errors."""


class PlotDataError(CasePlotError):
    """Input rows violate the chart's data contract."""


class UnknownGenderError(PlotDataError):
    def __init__(self, value: object) -> None:
        super().__init__(f"no marker shape for gender value: {value!r}")
        self.value = value


class FilterError(CasePlotError):
    """A filter constraint names an attribute the chart does not filter on."""
