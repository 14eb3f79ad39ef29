from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


FILTER_ALL = "All"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


@dataclass(frozen=True)
class Case:
    id: str
    gender: Gender | str
    disease_type: str
    pathologic_stage: str
    age_at_diagnosis: float
    days_to_death: float

    @property
    def plottable(self) -> bool:
        return math.isfinite(self.days_to_death) and math.isfinite(self.age_at_diagnosis)


def attribute_value(case: Case, attribute: str) -> str:
    value = getattr(case, attribute)
    # Gender members compare equal to their string value; normalize for hosts.
    if isinstance(value, Gender):
        return value.value
    return value
