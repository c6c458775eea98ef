"""
Tests for the safety module.
"""

import unittest

from reactor_sim.constants import SafetyLimits
from reactor_sim.safety import SafetySystem, SafetyMode, TripCondition


class TestSafetySystem(unittest.TestCase):
    """Test trip evaluation."""

    def setUp(self):
        self.safety = SafetySystem()

    def test_default_limits(self):
        self.assertEqual(self.safety.limits, SafetyLimits())

    def test_nominal_no_trip(self):
        self.assertEqual(self.safety.evaluate(280.0, 150.0, 100.0), [])

    def test_limits_are_strict(self):
        """Test values exactly at a setpoint do not trip."""
        self.assertEqual(self.safety.evaluate(1000.0, 200.0, 10.0), [])

    def test_high_temperature(self):
        with self.assertLogs("reactor_sim.safety", level="WARNING"):
            trips = self.safety.evaluate(1000.5, 150.0, 100.0)
        self.assertEqual(trips, [TripCondition.HIGH_CORE_TEMPERATURE])

    def test_high_pressure(self):
        with self.assertLogs("reactor_sim.safety", level="WARNING"):
            trips = self.safety.evaluate(280.0, 200.5, 100.0)
        self.assertEqual(trips, [TripCondition.HIGH_PRESSURE])

    def test_low_coolant_flow(self):
        with self.assertLogs("reactor_sim.safety", level="WARNING"):
            trips = self.safety.evaluate(280.0, 150.0, 9.9)
        self.assertEqual(trips, [TripCondition.LOW_COOLANT_FLOW])

    def test_multiple_conditions(self):
        with self.assertLogs("reactor_sim.safety", level="WARNING") as logs:
            trips = self.safety.evaluate(1200.0, 610.0, 0.0)
        self.assertEqual(len(trips), 3)
        self.assertEqual(len(logs.records), 3)

    def test_custom_limits(self):
        safety = SafetySystem(SafetyLimits(max_core_temp=500.0))
        with self.assertLogs("reactor_sim.safety", level="WARNING"):
            trips = safety.evaluate(501.0, 150.0, 100.0)
        self.assertEqual(trips, [TripCondition.HIGH_CORE_TEMPERATURE])

    def test_safety_margins(self):
        margins = self.safety.get_safety_margins(280.0, 150.0, 100.0)
        self.assertEqual(margins["core_temp_margin"], 720.0)
        self.assertEqual(margins["pressure_margin"], 50.0)
        self.assertEqual(margins["coolant_flow_margin"], 90.0)

    def test_negative_margin_when_exceeded(self):
        margins = self.safety.get_safety_margins(280.0, 225.0, 100.0)
        self.assertLess(margins["pressure_margin"], 0.0)


class TestSafetyMode(unittest.TestCase):

    def test_modes(self):
        self.assertEqual({m.value for m in SafetyMode}, {"normal", "shutdown"})


if __name__ == "__main__":
    unittest.main()
