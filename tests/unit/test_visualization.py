import unittest

from shapely.geometry import shape

from neo_impact.entry import AtmosphericEntry
from neo_impact.map_utils import create_circle_coordinates, create_ring_geometry, create_ring_outlines
from neo_impact.models import DamageRing, ImpactGeometry, TrajectoryResolution
from neo_impact.visualization_utils import (
    backtrack_position, calculate_ballistic_trajectory, generate_crater_profile, generate_debris_paths,
    generate_flyby_trajectory, generate_shockwave_progression, generate_timeline, project_entry_track,
)

GEOMETRY = ImpactGeometry(lat=10.0, lng=20.0, velocity_kms=20.0, impact_angle_deg=45.0)

RESULTS = {
    "mode": "ground",
    "energy_megatons_tnt": 50.0,
    "final_velocity_kms": 19.8,
    "minor_damage_radius_km": 90.0,
    "severe_blast_radius_km": 16.0,
    "peak_overpressure_psi": 20.0,
    "thermal_radiation_radius_km": 60.0,
    "seismic_damage_radius_km": 40.0,
    "ejecta_radius_km": 5.0,
    "ejecta_velocity_kms": 1.2,
    "final_crater_d_m": 1500.0,
    "crater_depth_m": 300.0,
    "crater_rim_height_m": 60.0,
    "central_peak_height_m": 75.0,
}


class TestTimeline(unittest.TestCase):
    def setUp(self):
        self.timeline = generate_timeline(GEOMETRY, RESULTS)

    def test_shape(self):
        self.assertEqual(len(self.timeline), 121)
        self.assertEqual(self.timeline[0]["time_to_impact_s"], -60)
        self.assertEqual(self.timeline[60]["time_to_impact_s"], 0)
        self.assertEqual(self.timeline[61]["time_to_impact_s"], 1)
        self.assertEqual(self.timeline[-1]["time_to_impact_s"], 296)

    def test_impact_instant(self):
        impact = self.timeline[60]
        self.assertEqual(impact["energy_released_mt"], 50.0)
        self.assertEqual(impact["position"], {"lat": 10.0, "lng": 20.0})
        self.assertEqual(impact["altitude_km"], 0.0)

    def test_descent_is_monotonic(self):
        altitudes = [entry["altitude_km"] for entry in self.timeline[:60]]
        self.assertEqual(altitudes, sorted(altitudes, reverse=True))
        self.assertGreater(altitudes[0], altitudes[-1])

    def test_effects_grow_and_saturate(self):
        post = self.timeline[61:]
        shock = [entry["effects"]["shockwave_radius_km"] for entry in post]
        self.assertEqual(shock, sorted(shock))
        self.assertEqual(shock[-1], 90.0)
        self.assertEqual(post[-1]["effects"]["seismic_radius_km"], 40.0)
        self.assertEqual(post[0]["effects"]["thermal_radius_km"], 60.0)

    def test_airburst_descent_ends_at_burst_altitude(self):
        results = dict(RESULTS, mode="airburst", burst_alt_km=41.0)
        del results["seismic_damage_radius_km"]
        timeline = generate_timeline(GEOMETRY, results)
        altitudes = [entry["altitude_km"] for entry in timeline[:61]]
        self.assertEqual(altitudes, sorted(altitudes, reverse=True))
        self.assertEqual(timeline[60]["altitude_km"], 41.0)
        self.assertGreater(timeline[59]["altitude_km"], 41.0)

    def test_airburst_has_no_seismic_growth(self):
        results = dict(RESULTS)
        del results["seismic_damage_radius_km"]
        timeline = generate_timeline(GEOMETRY, results)
        self.assertEqual(timeline[-1]["effects"]["seismic_radius_km"], 0.0)


class TestEntryTrack(unittest.TestCase):
    def test_track_ends_at_impact_point(self):
        state = AtmosphericEntry(1000, 3000, 20, 45, 1000.0).simulate()
        track = project_entry_track(state, GEOMETRY, state.track[0].mass_kg)
        self.assertEqual(len(track), len(state.track))
        self.assertAlmostEqual(track[-1]["lat"], GEOMETRY.lat)
        self.assertAlmostEqual(track[-1]["lng"], GEOMETRY.lng)
        # approach from the south for a northbound azimuth
        self.assertLess(track[0]["lat"], GEOMETRY.lat)
        self.assertEqual(track[0]["mass_fraction"], 1.0)

    def test_backtrack_zero_distance(self):
        self.assertEqual(backtrack_position(GEOMETRY, 0.0), {"lat": 10.0, "lng": 20.0})


class TestVisualizationGeometry(unittest.TestCase):
    def test_ballistic_arc(self):
        points = calculate_ballistic_trajectory(0.0, 0.0, 90.0, 100.0)
        self.assertEqual(len(points), 21)
        self.assertAlmostEqual(points[0]["altitude_km"], 0.0)
        self.assertAlmostEqual(points[-1]["altitude_km"], 0.0)
        self.assertAlmostEqual(points[10]["altitude_km"], 25.0)
        self.assertGreater(points[-1]["lng"], 0.0)

    def test_debris_paths(self):
        paths = generate_debris_paths(GEOMETRY, RESULTS)
        self.assertEqual(len(paths), 12)
        self.assertTrue(all(len(path) == 21 for path in paths))
        self.assertEqual(generate_debris_paths(GEOMETRY, {"ejecta_velocity_kms": 0.0}), [])

    def test_shockwave_progression(self):
        samples = generate_shockwave_progression(RESULTS)
        self.assertEqual(len(samples), 21)
        self.assertEqual(samples[0]["overpressure_psi"], 0.0)
        self.assertTrue(all(sample["radius_km"] <= 90.0 for sample in samples))
        self.assertEqual(generate_shockwave_progression({}), [])

    def test_crater_profile(self):
        profile = generate_crater_profile(RESULTS)
        self.assertEqual(profile["diameter_m"], 1500.0)
        self.assertEqual(profile["central_peak_m"], 75.0)
        self.assertIsNone(generate_crater_profile({"final_crater_d_m": 0.0}))

    def test_flyby_trajectory(self):
        resolution = TrajectoryResolution(impact=False, velocity_kms=7.4, miss_distance_km=38000.0)
        points = generate_flyby_trajectory(resolution)
        self.assertEqual(len(points), 21)
        self.assertEqual(points[10]["distance_km"], 38000.0)
        self.assertEqual(points[10]["time_offset_hours"], 0.0)
        self.assertEqual(points[0]["distance_km"], points[-1]["distance_km"])


class TestRingGeometry(unittest.TestCase):
    def test_circle_is_closed(self):
        coords = create_circle_coordinates(0.0, 0.0, 100.0)
        self.assertEqual(len(coords), 73)
        self.assertAlmostEqual(coords[0][0], coords[-1][0])
        self.assertAlmostEqual(coords[0][1], coords[-1][1])

    def test_simple_ring(self):
        geometry = create_ring_geometry(0.0, 0.0, 100.0)
        self.assertEqual(geometry.geom_type, "Polygon")
        self.assertTrue(geometry.contains(shape({"type": "Point", "coordinates": (0.0, 0.0)})))

    def test_antimeridian_ring_is_split(self):
        geometry = create_ring_geometry(0.0, 179.9, 100.0)
        self.assertEqual(geometry.geom_type, "MultiPolygon")
        minx, _, maxx, _ = geometry.bounds
        self.assertGreaterEqual(minx, -180.0)
        self.assertLessEqual(maxx, 180.0)

    def test_polar_ring_becomes_cap(self):
        north = create_ring_geometry(89.0, 0.0, 500.0)
        self.assertEqual(north.bounds[3], 90.0)
        self.assertEqual((north.bounds[0], north.bounds[2]), (-180.0, 180.0))
        south = create_ring_geometry(-89.0, 0.0, 500.0)
        self.assertEqual(south.bounds[1], -90.0)

    def test_global_ring(self):
        geometry = create_ring_geometry(0.0, 0.0, 25000.0)
        self.assertEqual(geometry.bounds, (-180.0, -90.0, 180.0, 90.0))

    def test_zero_radius(self):
        self.assertIsNone(create_ring_geometry(0.0, 0.0, 0.0))

    def test_outlines_skip_empty_rings(self):
        rings = [
            DamageRing(label="Severe blast", radius_km=10.0, color="#ff4d4f", kind="severe"),
            DamageRing(label="Vaporization", radius_km=0.0, color="#ff1744", kind="vaporization"),
        ]
        outlines = create_ring_outlines(0.0, 0.0, rings)
        self.assertEqual(len(outlines), 1)
        self.assertEqual(outlines[0]["type"], "severe")
        self.assertEqual(outlines[0]["geometry"]["type"], "Polygon")


if __name__ == '__main__':
    unittest.main()
