from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Generic, Iterable, Sequence, TypeVar

import numpy as np

from caseplot.cases import Case, Gender, attribute_value
from caseplot.config import RGBA
from caseplot.errors import UnknownGenderError
from caseplot.geometry import ViewGeometry


NICE_TICK_COUNT = 10
EMPTY_DOMAIN = (0.0, 1.0)

GENDER_SHAPES: dict[Gender, str] = {
    Gender.MALE: "triangle",
    Gender.FEMALE: "square",
}

T = TypeVar("T")


class LinearScale:
    """Continuous linear mapping from a numeric domain to a pixel range."""

    def __init__(
        self,
        domain: tuple[float, float] = EMPTY_DOMAIN,
        range: tuple[float, float] = (0.0, 1.0),
    ) -> None:
        self._domain = (float(domain[0]), float(domain[1]))
        self._range = (float(range[0]), float(range[1]))

    @property
    def domain(self) -> tuple[float, float]:
        return self._domain

    @property
    def range(self) -> tuple[float, float]:
        return self._range

    def set_domain(self, lo: float, hi: float) -> None:
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise ValueError(f"scale domain must be finite, got ({lo}, {hi})")
        self._domain = (float(lo), float(hi))

    def set_range(self, r0: float, r1: float) -> None:
        self._range = (float(r0), float(r1))

    def __call__(self, value):
        d0, d1 = self._domain
        r0, r1 = self._range
        arr = np.asarray(value, dtype=np.float64)
        if d1 == d0:
            out = np.full(arr.shape, (r0 + r1) * 0.5, dtype=np.float64)
        else:
            t = (arr - d0) / (d1 - d0)
            # Domain endpoints map exactly onto range endpoints.
            out = r0 * (1.0 - t) + r1 * t
        if out.ndim == 0:
            return float(out)
        return out

    def invert(self, pixel):
        d0, d1 = self._domain
        r0, r1 = self._range
        arr = np.asarray(pixel, dtype=np.float64)
        if r1 == r0:
            out = np.full(arr.shape, d0, dtype=np.float64)
        else:
            t = (arr - r0) / (r1 - r0)
            out = d0 * (1.0 - t) + d1 * t
        if out.ndim == 0:
            return float(out)
        return out

    def nice(self, target: int = NICE_TICK_COUNT) -> "LinearScale":
        self._domain = nice_domain(self._domain[0], self._domain[1], target)
        return self

    def ticks(self, target: int) -> np.ndarray:
        lo, hi = sorted(self._domain)
        ticks = generate_nice_ticks(lo, hi, target)
        return ticks_within_range(ticks, vmin=lo, vmax=hi)

    def __repr__(self) -> str:
        return f"LinearScale(domain={self._domain}, range={self._range})"


class OrdinalScale(Generic[T]):
    """Categorical scale assigning palette entries in first-seen order."""

    def __init__(self, palette: Sequence[T]) -> None:
        if not palette:
            raise ValueError("palette must not be empty")
        self._palette = tuple(palette)
        self._index: dict[str, int] = {}

    @property
    def domain(self) -> tuple[str, ...]:
        return tuple(self._index)

    @property
    def palette(self) -> tuple[T, ...]:
        return self._palette

    def set_domain(self, values: Iterable[str]) -> None:
        self._index = {}
        for value in values:
            if value not in self._index:
                self._index[value] = len(self._index)

    def __call__(self, value: str) -> T:
        idx = self._index.get(value)
        if idx is None:
            idx = len(self._index)
            self._index[value] = idx
        return self._palette[idx % len(self._palette)]

    def __len__(self) -> int:
        return len(self._index)


@dataclass
class ScaleSet:
    x: LinearScale
    y: LinearScale
    scope: LinearScale
    pathologic_stage: OrdinalScale[RGBA]
    disease_type: OrdinalScale[RGBA]
    gender: OrdinalScale[RGBA]

    @classmethod
    def for_geometry(cls, geometry: ViewGeometry, palette: Sequence[RGBA]) -> "ScaleSet":
        return cls(
            x=LinearScale(range=(0.0, float(geometry.plot_width))),
            y=LinearScale(range=(float(geometry.plot_height), 0.0)),
            scope=LinearScale(range=(0.0, float(geometry.plot_width))),
            pathologic_stage=OrdinalScale(palette),
            disease_type=OrdinalScale(palette),
            gender=OrdinalScale(palette),
        )

    def categorical(self, attribute: str) -> OrdinalScale[RGBA]:
        if attribute not in {"pathologic_stage", "disease_type", "gender"}:
            raise KeyError(attribute)
        return getattr(self, attribute)


def compute_scales(scales: ScaleSet, rows: Sequence[Case]) -> None:
    """Recompute every domain of ``scales`` from plottable ``rows``."""

    if rows:
        days = np.fromiter((c.days_to_death for c in rows), dtype=np.float64, count=len(rows))
        ages = np.fromiter((c.age_at_diagnosis for c in rows), dtype=np.float64, count=len(rows))
        x_domain = nice_domain(float(np.min(days)), float(np.max(days)))
        y_domain = nice_domain(float(np.min(ages)), float(np.max(ages)))
    else:
        x_domain = EMPTY_DOMAIN
        y_domain = EMPTY_DOMAIN

    scales.x.set_domain(*x_domain)
    scales.scope.set_domain(*x_domain)
    scales.y.set_domain(*y_domain)
    for attribute in ("pathologic_stage", "disease_type", "gender"):
        scales.categorical(attribute).set_domain(attribute_value(c, attribute) for c in rows)


def shape_for_gender(value: object) -> str:
    try:
        gender = Gender(value)
    except ValueError:
        raise UnknownGenderError(value) from None
    return GENDER_SHAPES[gender]


def nice_step(vmin: float, vmax: float, target: int) -> float:
    span = _nice_number(vmax - vmin, round_result=False)
    return _nice_number(span / max(target - 1, 1), round_result=True)


def nice_domain(vmin: float, vmax: float, target: int = NICE_TICK_COUNT) -> tuple[float, float]:
    if not (math.isfinite(vmin) and math.isfinite(vmax)):
        raise ValueError(f"cannot nice a non-finite extent ({vmin}, {vmax})")
    lo = float(min(vmin, vmax))
    hi = float(max(vmin, vmax))
    if lo == hi:
        lo -= 1.0
        hi += 1.0
    step = nice_step(lo, hi, target)
    nice_lo = float(np.floor(lo / step) * step)
    nice_hi = float(np.ceil(hi / step) * step)
    # Float drift must never leave the raw extent outside the domain.
    return (min(nice_lo, lo), max(nice_hi, hi))


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    step = nice_step(vmin, vmax, target)
    tick_min = np.floor(vmin / step) * step
    tick_max = np.ceil(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def ticks_within_range(ticks: np.ndarray, *, vmin: float, vmax: float) -> np.ndarray:
    if ticks.size == 0:
        return ticks
    step = float(abs(ticks[1] - ticks[0])) if ticks.size > 1 else max(1e-12, abs(vmax - vmin))
    eps = max(1e-12, step * 1e-6)
    return ticks[(ticks >= (vmin - eps)) & (ticks <= (vmax + eps))]


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
