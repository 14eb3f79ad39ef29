from __future__ import annotations

import math
import unittest

from caseplot.adapters import coerce_case, coerce_cases
from caseplot.cases import Gender
from caseplot.errors import PlotDataError

try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None


class CoerceCaseTests(unittest.TestCase):
    def test_prefixed_columns_are_accepted(self) -> None:
        case = coerce_case(
            {
                "case_id": "TCGA-01",
                "case_gender": "male",
                "case_disease_type": "LUSC",
                "case_pathologic_stage": " Stage IIB ",
                "case_age_at_diagnosis": "61",
                "case_days_to_death": 430,
            }
        )
        self.assertEqual(case.id, "TCGA-01")
        self.assertIs(case.gender, Gender.MALE)
        self.assertEqual(case.pathologic_stage, "Stage IIB")
        self.assertEqual((case.age_at_diagnosis, case.days_to_death), (61.0, 430.0))
        self.assertTrue(case.plottable)

    def test_missing_numbers_become_nan(self) -> None:
        case = coerce_case({"id": 7, "gender": "FEMALE", "age_at_diagnosis": "", "days_to_death": "--"})
        self.assertEqual(case.id, "7")
        self.assertTrue(math.isnan(case.age_at_diagnosis))
        self.assertTrue(math.isnan(case.days_to_death))
        self.assertFalse(case.plottable)
        self.assertEqual(case.disease_type, "")

    def test_unrecognized_gender_is_kept_verbatim(self) -> None:
        case = coerce_case({"id": "x", "gender": "not reported"})
        self.assertEqual(case.gender, "NOT REPORTED")

    def test_row_without_id_is_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            coerce_case({"gender": "MALE"}, index=3)
        with self.assertRaises(PlotDataError):
            coerce_cases([["not", "a", "mapping"]])

    def test_scalar_input_is_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            coerce_cases("id,gender")
        with self.assertRaises(PlotDataError):
            coerce_cases({"id": "a"})


@unittest.skipUnless(pd is not None, "pandas not installed")
class CoerceDataFrameTests(unittest.TestCase):
    def test_dataframe_rows_keep_order(self) -> None:
        frame = pd.DataFrame(
            {
                "case_id": ["a", "b"],
                "case_gender": ["FEMALE", "MALE"],
                "case_disease_type": ["LUAD", "LUSC"],
                "case_pathologic_stage": ["Stage IA", None],
                "case_age_at_diagnosis": [40.0, 50.0],
                "case_days_to_death": [100.0, float("nan")],
            }
        )
        cases = coerce_cases(frame)
        self.assertEqual([c.id for c in cases], ["a", "b"])
        self.assertEqual(cases[1].pathologic_stage, "")
        self.assertFalse(cases[1].plottable)


if __name__ == "__main__":
    unittest.main()
