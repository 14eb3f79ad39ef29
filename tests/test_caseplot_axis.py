from __future__ import annotations

import unittest

from caseplot.axis import build_axis, x_tick_target, y_tick_target
from caseplot.scales import LinearScale


class AxisRendererTests(unittest.TestCase):
    def test_bottom_axis_ticks_follow_scale(self) -> None:
        scale = LinearScale(domain=(0.0, 100.0), range=(0.0, 500.0))
        axis = build_axis(scale, "bottom", target=5, caption="Days to death")
        self.assertEqual(axis.labels, ("0", "20", "40", "60", "80", "100"))
        for tick, expected in zip(axis.ticks, [0.0, 100.0, 200.0, 300.0, 400.0, 500.0], strict=True):
            self.assertAlmostEqual(tick.position, expected)
        self.assertEqual(axis.baseline, (0.0, 500.0))
        self.assertEqual(axis.caption, "Days to death")

    def test_left_axis_on_inverted_range(self) -> None:
        scale = LinearScale(domain=(40.0, 60.0), range=(400.0, 0.0))
        axis = build_axis(scale, "left", target=4)
        self.assertEqual(axis.baseline, (0.0, 400.0))
        by_value = {t.value: t.position for t in axis.ticks}
        self.assertEqual(by_value[40.0], 400.0)
        self.assertEqual(by_value[60.0], 0.0)

    def test_ticks_stay_inside_a_brushed_domain(self) -> None:
        scale = LinearScale(domain=(13.0, 57.0), range=(0.0, 740.0))
        axis = build_axis(scale, "bottom", target=5)
        self.assertEqual(axis.labels, ("20", "30", "40", "50"))
        for tick in axis.ticks:
            self.assertGreaterEqual(tick.position, 0.0)
            self.assertLessEqual(tick.position, 740.0)

    def test_ticks_track_domain_changes(self) -> None:
        scale = LinearScale(domain=(0.0, 100.0), range=(0.0, 500.0))
        before = build_axis(scale, "bottom", target=5)
        scale.set_domain(0.0, 10.0)
        after = build_axis(scale, "bottom", target=5)
        self.assertNotEqual(before.labels, after.labels)
        self.assertEqual(after.labels[-1], "10")

    def test_unknown_orientation_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_axis(LinearScale(), "top", target=5)  # type: ignore[arg-type]

    def test_tick_density_rules(self) -> None:
        self.assertEqual(x_tick_target(300), 5)
        self.assertEqual(x_tick_target(1200), 10)
        self.assertEqual(y_tick_target(400), 4)
        self.assertEqual(y_tick_target(1400), 10)


if __name__ == "__main__":
    unittest.main()
