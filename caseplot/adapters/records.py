from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from caseplot.cases import Case, Gender
from caseplot.errors import PlotDataError


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


_FIELDS = ("id", "gender", "disease_type", "pathologic_stage", "age_at_diagnosis", "days_to_death")
_HOST_PREFIX = "case_"


def coerce_cases(rows: Any) -> tuple[Case, ...]:
    """Build ``Case`` records from mappings or a pandas DataFrame.

    Column names may carry the ``case_`` prefix used by the TCGA export.
    """

    if pd is not None and isinstance(rows, pd.DataFrame):
        records: Iterable[Mapping[str, Any]] = rows.to_dict(orient="records")
    elif isinstance(rows, Iterable) and not isinstance(rows, (str, bytes, Mapping)):
        records = rows
    else:
        raise PlotDataError(f"unsupported rows input type: {type(rows)!r}")
    return tuple(coerce_case(row, index=i) for i, row in enumerate(records))


def coerce_case(row: Mapping[str, Any], *, index: int = 0) -> Case:
    if not isinstance(row, Mapping):
        raise PlotDataError(f"row {index} is not a mapping: {type(row)!r}")
    values = {field: _lookup(row, field) for field in _FIELDS}
    if values["id"] is None:
        raise PlotDataError(f"row {index} has no case id")
    return Case(
        id=str(values["id"]),
        gender=_coerce_gender(values["gender"]),
        disease_type=_coerce_text(values["disease_type"]),
        pathologic_stage=_coerce_text(values["pathologic_stage"]),
        age_at_diagnosis=_coerce_number(values["age_at_diagnosis"]),
        days_to_death=_coerce_number(values["days_to_death"]),
    )


def _lookup(row: Mapping[str, Any], field: str) -> Any:
    if field in row:
        return row[field]
    return row.get(_HOST_PREFIX + field)


def _coerce_text(raw: Any) -> str:
    if raw is None or (isinstance(raw, float) and math.isnan(raw)):
        return ""
    return str(raw).strip()


def _coerce_gender(raw: Any) -> Gender | str:
    text = _coerce_text(raw).upper()
    try:
        return Gender(text)
    except ValueError:
        return text


def _coerce_number(raw: Any) -> float:
    if raw is None:
        return math.nan
    if isinstance(raw, Decimal):
        return float(raw)
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return math.nan
    try:
        return float(raw)
    except (TypeError, ValueError):
        return math.nan
