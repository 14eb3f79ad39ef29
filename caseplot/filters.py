from __future__ import annotations

from typing import Callable, Iterable, Mapping

from caseplot.cases import FILTER_ALL, Case, attribute_value
from caseplot.errors import FilterError


Predicate = Callable[[Case], bool]

FILTER_ATTRIBUTES = ("gender", "disease_type", "pathologic_stage")
_HOST_PREFIX = "case_"


def accept_all(case: Case) -> bool:
    return True


def normalize_constraints(constraints: Mapping[str, object]) -> dict[str, str]:
    """Map host attribute names to case fields, dropping ``FILTER_ALL`` entries."""

    out: dict[str, str] = {}
    for raw_key, raw_value in constraints.items():
        key = raw_key[len(_HOST_PREFIX) :] if raw_key.startswith(_HOST_PREFIX) else raw_key
        if key not in FILTER_ATTRIBUTES:
            raise FilterError(f"cannot filter on attribute: {raw_key!r}")
        value = getattr(raw_value, "value", raw_value)
        if value is None or value == FILTER_ALL:
            continue
        out[key] = str(value)
    return out


def build_predicate(constraints: Mapping[str, object]) -> Predicate:
    required = normalize_constraints(constraints)
    if not required:
        return accept_all

    def predicate(case: Case) -> bool:
        return all(attribute_value(case, attr) == value for attr, value in required.items())

    return predicate


def apply_filter(rows: Iterable[Case], predicate: Predicate | None) -> tuple[Case, ...]:
    if predicate is None:
        return tuple(rows)
    return tuple(row for row in rows if predicate(row))
