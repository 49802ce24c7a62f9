import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from neo_impact import run_simulation
from neo_impact.entry import AtmosphericEntry
from neo_impact.thresholds import ENTRY_MODEL


def fixed_clock():
    return "2026-01-01T00:00:00+00:00"


class TestPhysicsScenarios(unittest.TestCase):

    def test_scenario_a_chelyabinsk_airburst(self):
        print("\n=== Scenario A (Chelyabinsk-like airburst) ===")
        print("Parameters: D=17m, v=19km/s, rho=3300kg/m3, angle=20, strength=1 MPa")

        outcome = run_simulation({
            "diameter_m": 17,
            "density_kg_m3": 3300,
            "velocity_kms": 19,
            "impact_angle_deg": 20,
            "strength_mpa": 1,
            "lat": 54.8,
            "lng": 61.1,
        }, clock=fixed_clock)
        res = outcome["results"]

        print(f"Burst altitude: {res['burst_alt_km']:.1f} km")
        print(f"Energy: {res['energy_megatons_tnt']:.3f} Mt")
        print(f"Severe blast radius: {res['severe_blast_radius_km']:.2f} km")
        print(f"Threat level: {res['damage_assessment']['threat_level']}")

        self.assertEqual(res["mode"], "airburst")
        self.assertGreater(res["burst_alt_km"], 35.0)
        self.assertLess(res["burst_alt_km"], 50.0)
        self.assertGreater(res["severe_blast_radius_km"], 0.0)
        self.assertEqual(res["final_crater_d_m"], 0.0)
        self.assertEqual(res["damage_assessment"]["threat_level"], "MINIMAL")
        self.assertIn("Local damage only", res["damage_assessment"]["global_effects"])

    def test_scenario_b_large_ground_impact(self):
        print("\n=== Scenario B (1 km ground impact) ===")
        print("Parameters: D=1000m, v=20km/s, rho=3000kg/m3, angle=45, strength=1000 MPa")

        outcome = run_simulation({
            "diameter_m": 1000,
            "density_kg_m3": 3000,
            "velocity_kms": 20,
            "impact_angle_deg": 45,
            "strength_mpa": 1000,
            "lat": 0.0,
            "lng": 0.0,
        }, clock=fixed_clock)
        res = outcome["results"]

        print(f"Energy: {res['energy_megatons_tnt']:.3e} Mt")
        print(f"Final crater diameter: {res['final_crater_d_m'] / 1000:.2f} km")
        print(f"Seismic magnitude: {res['seismic_magnitude']:.1f}")
        print(f"Global effects: {res['damage_assessment']['global_effects']}")

        self.assertEqual(res["mode"], "ground")
        self.assertGreater(res["energy_megatons_tnt"], 5e4)
        self.assertLess(res["energy_megatons_tnt"], 1e5)
        self.assertEqual(res["damage_assessment"]["threat_level"], "EXTINCTION")
        self.assertIn("Mass extinction threat", res["damage_assessment"]["global_effects"])
        # km-scale crater from a km-scale impactor
        self.assertGreater(res["final_crater_d_m"], 5000.0)
        self.assertLess(res["final_crater_d_m"], 50000.0)
        self.assertEqual(res["seismic_magnitude"], 9.5)

    def test_scenario_c_entry_never_terminates(self):
        print("\n=== Scenario C (slow shallow entry) ===")
        print("Parameters: D=1m, v=1km/s, rho=100kg/m3, angle=5, strength=1e6 MPa")

        state = AtmosphericEntry(1, 100, 1, 5, 1e6).simulate()
        last = state.track[-1]
        print(f"Samples: {len(state.track)}, final altitude: {last.height_m / 1000:.1f} km")

        self.assertEqual(len(state.track), ENTRY_MODEL["max_steps"])
        self.assertGreater(last.height_m, 0.0)
        self.assertFalse(state.is_airburst)

        outcome = run_simulation({
            "diameter_m": 1,
            "density_kg_m3": 100,
            "velocity_kms": 1,
            "impact_angle_deg": 5,
            "strength_mpa": 1e6,
            "lat": 0.0,
            "lng": 0.0,
        }, clock=fixed_clock)
        self.assertTrue(outcome["ok"])
        self.assertEqual(outcome["results"]["mode"], "ground")
        self.assertEqual(len(outcome["entry_track"]), ENTRY_MODEL["max_steps"])

    def test_scenario_d_ocean_impact(self):
        print("\n=== Scenario D (ocean impact, 4 km deep) ===")

        outcome = run_simulation({
            "diameter_m": 200,
            "density_kg_m3": 3000,
            "velocity_kms": 18,
            "impact_angle_deg": 60,
            "strength_mpa": 500,
            "lat": 30.0,
            "lng": -40.0,
            "ocean_depth_m": 4000,
        }, clock=fixed_clock)
        res = outcome["results"]

        print(f"Wave height @100 km: {res['tsunami_100km_m']:.1f} m")
        print(f"Wave height @1000 km: {res['tsunami_1000km_m']:.1f} m")

        self.assertEqual(res["mode"], "ground")
        self.assertGreater(res["tsunami_100km_m"], res["tsunami_1000km_m"])
        self.assertEqual(res["tsunami_radius_km"], 500.0)


if __name__ == '__main__':
    unittest.main()
