import unittest

from neo_impact.entry import AtmosphericEntry
from neo_impact.models import Airburst, Impact
from neo_impact.thresholds import ENTRY_MODEL
from neo_impact.utils import kinetic_energy


class TestAtmosphericEntry(unittest.TestCase):
    def test_air_density_at_sea_level_and_scale_height(self):
        entry = AtmosphericEntry(50, 3000, 20, 45, 1.0)
        self.assertAlmostEqual(entry.air_density(0.0), 1.225, places=12)
        self.assertAlmostEqual(entry.air_density(8000.0) / entry.air_density(0.0), 0.36787944, places=6)

    def test_weak_body_bursts_aloft(self):
        state = AtmosphericEntry(17, 3300, 19, 20, 1.0).simulate()
        self.assertTrue(state.is_airburst)
        self.assertIsInstance(state.terminal, Airburst)
        # q = 1 MPa at v = 19 km/s is reached near 43 km
        self.assertGreater(state.terminal.altitude_m, 30000.0)
        self.assertLess(state.terminal.altitude_m, 50000.0)
        self.assertEqual(state.terminal.altitude_m, state.track[-1].height_m)
        self.assertEqual(state.terminal.downrange_m, state.track[-1].downrange_m)

    def test_strong_body_reaches_ground(self):
        state = AtmosphericEntry(1000, 3000, 20, 45, 1000.0).simulate()
        self.assertFalse(state.is_airburst)
        self.assertIsInstance(state.terminal, Impact)
        self.assertEqual(state.track[-1].height_m, 0.0)
        self.assertAlmostEqual(state.terminal.kinetic_energy_j,
                               kinetic_energy(state.terminal.mass_kg, state.terminal.velocity_ms))
        self.assertGreater(state.terminal.velocity_ms, 19000.0)

    def test_track_is_monotonic(self):
        state = AtmosphericEntry(1000, 3000, 20, 45, 1000.0).simulate()
        heights = [s.height_m for s in state.track]
        downrange = [s.downrange_m for s in state.track]
        self.assertEqual(heights, sorted(heights, reverse=True))
        self.assertEqual(downrange, sorted(downrange))
        self.assertTrue(all(s.mass_kg == state.track[0].mass_kg for s in state.track))

    def test_exhausted_loop_falls_back_to_last_sample(self):
        # Slow, shallow, very strong body: still high up after the step budget
        state = AtmosphericEntry(1, 100, 1, 5, 1e6).simulate()
        self.assertFalse(state.is_airburst)
        self.assertEqual(len(state.track), ENTRY_MODEL["max_steps"])
        last = state.track[-1]
        self.assertGreater(last.height_m, 0.0)
        self.assertEqual(state.terminal.velocity_ms, last.velocity_ms)
        self.assertEqual(state.terminal.mass_kg, last.mass_kg)


if __name__ == '__main__':
    unittest.main()
