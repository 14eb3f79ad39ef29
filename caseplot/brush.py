from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Mapping

from caseplot.scales import LinearScale


LOGGER = logging.getLogger(__name__)

PointerPhase = Literal["down", "move", "up"]
BrushPhase = Literal["start", "brush", "end"]
BrushState = Literal["idle", "dragging"]

# Pixels from a selection edge that grab the edge instead of the whole selection.
EDGE_GRAB_PX = 6.0

_POINTER_PHASES: dict[str, PointerPhase] = {
    "pointer_down": "down",
    "pointer_move": "move",
    "pointer_up": "up",
}


@dataclass(frozen=True)
class PointerEvent:
    """Pointer sample in the coordinate space of whoever consumes it."""

    phase: PointerPhase
    x: float
    y: float


@dataclass(frozen=True)
class BrushEvent:
    phase: BrushPhase
    selection: tuple[float, float]
    domain: tuple[float, float]


def parse_pointer_event(event_type: str, payload: object) -> PointerEvent | None:
    """Parse a host ``pointer_*`` event into a :class:`PointerEvent`.

    Events without a usable ``x``/``y`` position are dropped.
    """

    phase = _POINTER_PHASES.get(event_type)
    if phase is None or not isinstance(payload, Mapping):
        return None
    try:
        x = float(payload["x"])
        y = float(payload["y"])
    except (KeyError, TypeError, ValueError):
        return None
    return PointerEvent(phase=phase, x=x, y=y)


def correct_selection(x0: float, x1: float, width: float) -> tuple[float, float]:
    lo = max(0.0, min(width, min(x0, x1)))
    hi = max(0.0, min(width, max(x0, x1)))
    if hi - lo <= 0.0:
        if lo + 1.0 <= width:
            hi = lo + 1.0
        else:
            lo = hi - 1.0
    return (lo, hi)


class BrushController:
    """Drag state machine over the scope band.

    The controller's only write is the domain of ``x_scale``; everything else
    the chart needs to refresh happens in ``on_change``.
    """

    def __init__(
        self,
        scope_scale: LinearScale,
        x_scale: LinearScale,
        *,
        width: float,
        height: float,
        on_change: Callable[[BrushEvent], None] | None = None,
    ) -> None:
        if width <= 1 or height <= 0:
            raise ValueError("brush extent must have positive size")
        self._scope = scope_scale
        self._x = x_scale
        self._width = float(width)
        self._height = float(height)
        self._on_change = on_change
        self._state: BrushState = "idle"
        self._selection: tuple[float, float] | None = None
        self._anchor = 0.0
        self._grab_offset: float | None = None

    @property
    def state(self) -> BrushState:
        return self._state

    @property
    def selection(self) -> tuple[float, float] | None:
        return self._selection

    @property
    def extent(self) -> tuple[float, float]:
        return (self._width, self._height)

    def contains(self, x: float, y: float) -> bool:
        return 0.0 <= x <= self._width and 0.0 <= y <= self._height

    def move(self, selection: tuple[float, float] | None = None) -> BrushEvent:
        """Set the selection programmatically; ``None`` selects the whole band."""

        if selection is None:
            selection = self._scope.range
        self._state = "idle"
        self._grab_offset = None
        self._selection = (float(selection[0]), float(selection[1]))
        return self._emit("end")

    def handle(self, event: PointerEvent) -> bool:
        if event.phase == "down":
            if self._state == "dragging" or not self.contains(event.x, event.y):
                return False
            self._begin(self._clamp(event.x))
            self._emit("start")
            return True
        if self._state != "dragging":
            return False
        self._track(self._clamp(event.x))
        if event.phase == "up":
            self._state = "idle"
            self._grab_offset = None
            self._emit("end")
        else:
            self._emit("brush")
        return True

    def _begin(self, px: float) -> None:
        self._state = "dragging"
        sel = self._selection
        self._grab_offset = None
        if sel is None:
            self._anchor = px
            self._selection = (px, px)
            return
        lo, hi = sel
        if abs(px - lo) <= EDGE_GRAB_PX:
            self._anchor = hi
            self._selection = (min(px, hi), max(px, hi))
        elif abs(px - hi) <= EDGE_GRAB_PX:
            self._anchor = lo
            self._selection = (min(px, lo), max(px, lo))
        elif lo < px < hi:
            self._grab_offset = px - lo
        else:
            self._anchor = px
            self._selection = (px, px)

    def _track(self, px: float) -> None:
        if self._grab_offset is not None and self._selection is not None:
            lo, hi = self._selection
            span = hi - lo
            start = max(0.0, min(self._width - span, px - self._grab_offset))
            self._selection = (start, start + span)
            return
        self._selection = (min(self._anchor, px), max(self._anchor, px))

    def _clamp(self, x: float) -> float:
        return max(0.0, min(self._width, float(x)))

    def _emit(self, phase: BrushPhase) -> BrushEvent:
        if self._selection is None:
            raise ValueError("brush has no selection to emit")
        self._selection = correct_selection(self._selection[0], self._selection[1], self._width)
        x0, x1 = self._selection
        lo = float(self._scope.invert(x0))
        hi = float(self._scope.invert(x1))
        self._x.set_domain(lo, hi)
        event = BrushEvent(phase=phase, selection=self._selection, domain=(lo, hi))
        LOGGER.debug("brush %s selection=%s domain=%s", phase, self._selection, event.domain)
        if self._on_change is not None:
            self._on_change(event)
        return event
