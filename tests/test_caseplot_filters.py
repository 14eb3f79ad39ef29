from __future__ import annotations

import unittest

from caseplot.cases import FILTER_ALL, Gender
from caseplot.errors import FilterError
from caseplot.filters import accept_all, apply_filter, build_predicate, normalize_constraints

from _fixtures import three_case_dataset


class NormalizeConstraintsTests(unittest.TestCase):
    def test_strips_host_prefix_and_drops_all(self) -> None:
        out = normalize_constraints(
            {"case_gender": "MALE", "case_disease_type": FILTER_ALL, "pathologic_stage": None}
        )
        self.assertEqual(out, {"gender": "MALE"})

    def test_enum_values_are_unwrapped(self) -> None:
        self.assertEqual(normalize_constraints({"gender": Gender.FEMALE}), {"gender": "FEMALE"})

    def test_unknown_attribute_raises(self) -> None:
        with self.assertRaises(FilterError):
            normalize_constraints({"case_age_at_diagnosis": 40})


class PredicateTests(unittest.TestCase):
    def test_all_constraints_accept_every_row(self) -> None:
        predicate = build_predicate({"gender": FILTER_ALL, "disease_type": FILTER_ALL})
        self.assertIs(predicate, accept_all)
        self.assertEqual(apply_filter(three_case_dataset(), predicate), three_case_dataset())

    def test_constraints_combine_with_and(self) -> None:
        rows = three_case_dataset()
        predicate = build_predicate({"gender": "FEMALE", "pathologic_stage": "Stage IIIA"})
        self.assertEqual([c.id for c in apply_filter(rows, predicate)], ["c"])

    def test_no_match_gives_empty_tuple(self) -> None:
        predicate = build_predicate({"disease_type": "BRCA"})
        self.assertEqual(apply_filter(three_case_dataset(), predicate), ())

    def test_none_predicate_keeps_rows_in_order(self) -> None:
        rows = three_case_dataset()
        self.assertEqual(apply_filter(iter(rows), None), rows)


if __name__ == "__main__":
    unittest.main()
