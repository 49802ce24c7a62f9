import unittest

from neo_impact.mitigation import calculate_mitigation, is_favorable


class TestMitigation(unittest.TestCase):
    def test_none(self):
        self.assertEqual(calculate_mitigation("none", {}, 1e9, 20.0),
                         {"type": "none", "success_probability": 0.0, "energy_reduction": 0.0})

    def test_deflection_with_long_lead(self):
        result = calculate_mitigation("deflection", {"lead_time_days": 300, "delta_v_ms": 1.0}, 1e9, 20.0)
        self.assertAlmostEqual(result["success_probability"], 0.9)
        self.assertAlmostEqual(result["energy_reduction"], 0.06)
        self.assertEqual(result["impactor_mass_kg"], 1e9)
        self.assertEqual(result["impactor_velocity_kms"], 20.0)
        self.assertTrue(is_favorable(result))

    def test_deflection_with_short_lead_is_unfavorable(self):
        result = calculate_mitigation("deflection", {"lead_time_days": 30, "delta_v_ms": 1.0}, 1e9, 20.0)
        self.assertAlmostEqual(result["success_probability"], 0.18)
        self.assertFalse(is_favorable(result))

    def test_deflection_probability_is_capped(self):
        result = calculate_mitigation("deflection", {"lead_time_days": 3000, "delta_v_ms": 10.0}, 1e9, 20.0)
        self.assertEqual(result["success_probability"], 0.95)
        self.assertEqual(result["energy_reduction"], 0.6)

    def test_ablation(self):
        result = calculate_mitigation("ablation", {"lead_time_days": 600, "efficiency": 0.9}, 1e9, 20.0)
        self.assertAlmostEqual(result["success_probability"], 0.68)
        self.assertEqual(result["energy_reduction"], 0.5)

    def test_nuclear(self):
        result = calculate_mitigation("nuclear", {"yield_mt": 1.0, "efficiency": 0.5}, 1e9, 20.0)
        self.assertAlmostEqual(result["success_probability"], 0.51505, places=5)
        self.assertAlmostEqual(result["energy_reduction"], 0.026414, places=5)
        self.assertIn("notes", result)

    def test_efficiency_is_clamped(self):
        low = calculate_mitigation("ablation", {"lead_time_days": 60, "efficiency": 0.0}, 1e9, 20.0)
        floor = calculate_mitigation("ablation", {"lead_time_days": 60, "efficiency": 0.05}, 1e9, 20.0)
        self.assertEqual(low["energy_reduction"], floor["energy_reduction"])

    def test_malformed_params_use_defaults(self):
        result = calculate_mitigation("deflection", {"lead_time_days": "soon", "efficiency": "high"}, 1e9, 20.0)
        self.assertAlmostEqual(result["success_probability"], 0.1)
        self.assertEqual(result["energy_reduction"], 0.0)

    def test_known_types_carry_no_warning(self):
        for mitigation_type in ("deflection", "ablation", "nuclear"):
            result = calculate_mitigation(mitigation_type, {"lead_time_days": 100, "yield_mt": 1.0}, 1e9, 20.0)
            self.assertNotIn("warning", result)

    def test_unknown_type_warns(self):
        with self.assertLogs("neo_impact.mitigation", level="WARNING"):
            result = calculate_mitigation("laser", {}, 1e9, 20.0)
        self.assertEqual(result["type"], "laser")
        self.assertEqual(result["success_probability"], 0.0)
        self.assertEqual(result["energy_reduction"], 0.0)
        self.assertIn("warning", result)
        self.assertFalse(is_favorable(result))


if __name__ == '__main__':
    unittest.main()
