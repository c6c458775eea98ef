"""
Tests for the simulation module.
"""

import unittest
from unittest import mock
import numpy as np

from reactor_sim.reactor import Reactor
from reactor_sim.simulation import (
    OperatorCommand,
    SimulationResult,
    DEFAULT_COMMANDS,
    run_simulation,
)


class TestOperatorCommand(unittest.TestCase):
    """Test operator commands."""

    def test_apply_rods(self):
        reactor = Reactor()
        OperatorCommand(timestep=1, control_rods=30.0).apply(reactor)
        status = reactor.current_status()
        self.assertEqual(status.control_rods, 30.0)
        self.assertEqual(status.coolant_flow, 100.0)

    def test_apply_both(self):
        reactor = Reactor()
        OperatorCommand(timestep=1, control_rods=-5.0, coolant_flow=60.0).apply(reactor)
        status = reactor.current_status()
        self.assertEqual(status.control_rods, 0.0)
        self.assertEqual(status.coolant_flow, 60.0)

    def test_default_schedule(self):
        self.assertEqual(
            DEFAULT_COMMANDS,
            (
                OperatorCommand(timestep=3, control_rods=50.0),
                OperatorCommand(timestep=6, coolant_flow=80.0),
            ),
        )


class TestReferenceRun(unittest.TestCase):
    """Test the reference scenario: rods to 50% at step 3."""

    def setUp(self):
        self.reactor = Reactor()
        with self.assertLogs("reactor_sim", level="WARNING"):
            self.result = run_simulation(self.reactor)

    def test_trips_at_step_five(self):
        self.assertFalse(self.result.completed)
        self.assertEqual(self.result.shutdown_step, 5)
        self.assertEqual(len(self.result.records), 5)

    def test_final_status(self):
        status = self.result.final_status
        self.assertTrue(status.emergency_shutdown)
        self.assertEqual(status.control_rods, 100.0)
        self.assertAlmostEqual(status.core_temp, 430.0)
        self.assertAlmostEqual(status.pressure, 225.0)
        # Step 6 coolant command never reached
        self.assertEqual(status.coolant_flow, 100.0)

    def test_trajectory_arrays(self):
        arrays = self.result.as_arrays()
        np.testing.assert_array_equal(arrays["timestep"], [1, 2, 3, 4, 5])
        np.testing.assert_allclose(
            arrays["core_temp"], [250.0, 220.0, 290.0, 360.0, 430.0]
        )
        np.testing.assert_allclose(
            arrays["pressure"], [135.0, 120.0, 155.0, 190.0, 225.0]
        )
        np.testing.assert_allclose(
            arrays["power_output"], [0.0, 0.0, 1000.0, 1000.0, 1000.0]
        )

    def test_peak_values(self):
        peaks = self.result.peak_values()
        self.assertAlmostEqual(peaks["power_output"], 1000.0)
        self.assertAlmostEqual(peaks["core_temp"], 430.0)
        self.assertAlmostEqual(peaks["pressure"], 225.0)


class TestRunSimulation(unittest.TestCase):
    """Test the driver loop."""

    def test_no_commands_completes(self):
        result = run_simulation(timesteps=10, commands=())
        self.assertTrue(result.completed)
        self.assertIsNone(result.shutdown_step)
        self.assertEqual(len(result.records), 10)

    def test_zero_timesteps(self):
        result = run_simulation(timesteps=0)
        self.assertTrue(result.completed)
        self.assertEqual(result.records, [])
        self.assertIsNone(result.final_status)
        self.assertEqual(result.peak_values(), {})

    def test_on_step_callback(self):
        seen = []
        run_simulation(
            timesteps=3, commands=(), on_step=lambda t, s: seen.append((t, s.core_temp))
        )
        self.assertEqual([t for t, _ in seen], [1, 2, 3])
        self.assertAlmostEqual(seen[-1][1], 190.0)

    def test_commands_applied_before_step(self):
        commands = (OperatorCommand(timestep=1, control_rods=50.0),)
        result = run_simulation(timesteps=1, commands=commands)
        self.assertAlmostEqual(result.records[0][1].power_output, 1000.0)

    def test_step_delay_pacing(self):
        """Test sleeps happen between steps only."""
        with mock.patch("reactor_sim.simulation.time.sleep") as sleep:
            run_simulation(timesteps=4, commands=(), step_delay=0.5)
        self.assertEqual(sleep.call_count, 3)
        sleep.assert_called_with(0.5)

    def test_no_sleep_after_trip(self):
        with mock.patch("reactor_sim.simulation.time.sleep") as sleep:
            with self.assertLogs("reactor_sim", level="WARNING"):
                run_simulation(timesteps=10, step_delay=1.0)
        self.assertEqual(sleep.call_count, 4)

    def test_pacing_does_not_affect_model(self):
        with mock.patch("reactor_sim.simulation.time.sleep"):
            paced = run_simulation(timesteps=5, commands=(), step_delay=2.0)
        unpaced = run_simulation(timesteps=5, commands=())
        self.assertEqual(paced.records, unpaced.records)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            run_simulation(timesteps=-1)
        with self.assertRaises(ValueError):
            run_simulation(step_delay=-0.1)

    def test_reactor_tripped_before_run(self):
        """Test a trip from before the run is not reported as this run's."""
        reactor = Reactor()
        reactor.set_coolant_flow(0.0)
        with self.assertLogs("reactor_sim", level="WARNING"):
            reactor.advance_timestep()

        with self.assertLogs("reactor_sim", level="WARNING"):
            result = run_simulation(reactor, commands=())
        self.assertTrue(result.already_shutdown)
        self.assertIsNone(result.shutdown_step)
        self.assertFalse(result.completed)
        self.assertEqual(len(result.records), 1)

    def test_trip_during_run_not_already_shutdown(self):
        with self.assertLogs("reactor_sim", level="WARNING"):
            result = run_simulation()
        self.assertFalse(result.already_shutdown)
        self.assertEqual(result.shutdown_step, 5)

    def test_result_defaults(self):
        result = SimulationResult()
        self.assertFalse(result.completed)
        self.assertFalse(result.already_shutdown)
        self.assertIsNone(result.shutdown_step)


if __name__ == "__main__":
    unittest.main()
