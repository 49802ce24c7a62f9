"""
NEO Impact Simulation - Visualization Utilities

Animation-ready data derived from a finished simulation: the projected entry
track, the impact timeline, debris ballistic paths, shockwave progression, the
crater cross-section, ring outlines and, for near misses, the flyby trajectory.
None of these functions alter the computed physical values.
"""

import math

import numpy as np

from neo_impact.map_utils import create_ring_outlines
from neo_impact.thresholds import TIMELINE
from neo_impact.utils import arc_from_meters, deg2rad, gc_destination, km_to_m, m_to_km


def backtrack_position(geometry, distance_km):
    """Point distance_km back along the approach path from the impact point."""
    if distance_km <= 0:
        return {"lat": geometry.lat, "lng": geometry.lng}
    lat, lng = gc_destination(geometry.lat, geometry.lng, geometry.azimuth_deg + 180.0,
                              arc_from_meters(km_to_m(distance_km)))
    return {"lat": lat, "lng": lng}


def project_entry_track(entry_state, geometry, original_mass_kg):
    """
    Place each integrator sample on the globe.

    The last sample sits at the impact (or burst) point; earlier samples are
    backtracked along the approach bearing by the downrange distance still to go.
    """
    if not entry_state.track:
        return []
    total_downrange = entry_state.track[-1].downrange_m
    track_points = []
    for sample in entry_state.track:
        position = backtrack_position(geometry, m_to_km(total_downrange - sample.downrange_m))
        track_points.append({
            "lat": position["lat"],
            "lng": position["lng"],
            "altitude_km": m_to_km(sample.height_m),
            "velocity_kms": m_to_km(sample.velocity_ms),
            "mass_fraction": sample.mass_kg / original_mass_kg if original_mass_kg > 0 else 1.0,
        })
    return track_points


# =============================================================================
# TIMELINE
# =============================================================================

def shockwave_radius_at(seconds, results):
    return min(TIMELINE["shockwave_speed_kms"] * seconds, results.get("minor_damage_radius_km", 0.0))


def seismic_radius_at(seconds, results):
    if "seismic_damage_radius_km" not in results:
        return 0.0
    return min(TIMELINE["p_wave_speed_kms"] * seconds, results["seismic_damage_radius_km"])


def generate_timeline(geometry, results):
    """
    Pre-impact descent (simplified kinematic backtrack, -60..-1 s), the impact
    instant, and post-impact effect growth at 5 s steps.
    """
    v_kms = geometry.velocity_kms
    theta = deg2rad(geometry.impact_angle_deg)
    impact_point = {"lat": geometry.lat, "lng": geometry.lng}
    # descent ends at the burst altitude for airbursts, at the ground otherwise
    end_altitude_km = results.get("burst_alt_km", 0.0)
    timeline = []

    for sec in range(TIMELINE["pre_impact_seconds"], 0, -1):
        path_km = sec * v_kms
        timeline.append({
            "time_to_impact_s": -sec,
            "altitude_km": end_altitude_km + path_km * math.sin(theta),
            "velocity_kms": v_kms * (1.0 - sec / TIMELINE["velocity_decay_window_s"]),
            "position": backtrack_position(geometry, path_km * math.cos(theta)),
            "effects": {},
        })

    timeline.append({
        "time_to_impact_s": 0,
        "altitude_km": results.get("burst_alt_km", 0.0),
        "velocity_kms": results["final_velocity_kms"],
        "energy_released_mt": results["energy_megatons_tnt"],
        "position": dict(impact_point),
        "effects": {"shockwave_radius_km": 0.0, "thermal_radius_km": 0.0},
    })

    post_times = np.arange(1, TIMELINE["post_impact_seconds"] + 1, TIMELINE["post_impact_step_s"]).tolist()
    for sec in post_times:
        timeline.append({
            "time_to_impact_s": sec,
            "altitude_km": 0.0,
            "velocity_kms": 0.0,
            "position": dict(impact_point),
            "effects": {
                "shockwave_radius_km": shockwave_radius_at(sec, results),
                "thermal_radius_km": results.get("thermal_radiation_radius_km", 0.0),
                "seismic_radius_km": seismic_radius_at(sec, results),
            },
        })
    return timeline


# =============================================================================
# VISUALIZATION GEOMETRY
# =============================================================================

def calculate_ballistic_trajectory(lat, lng, azimuth_deg, range_km, steps=TIMELINE["debris_path_steps"]):
    """Parabolic debris arc from the impact point out to range_km along azimuth_deg."""
    fractions = np.linspace(0.0, 1.0, steps + 1)
    altitudes = range_km * TIMELINE["debris_apex_ratio"] * 4.0 * fractions * (1.0 - fractions)
    points = []
    for frac, alt in zip(fractions.tolist(), altitudes.tolist()):
        p_lat, p_lng = gc_destination(lat, lng, azimuth_deg, arc_from_meters(km_to_m(range_km * frac)))
        points.append({"lat": p_lat, "lng": p_lng, "altitude_km": alt})
    return points


def generate_debris_paths(geometry, results):
    if results.get("ejecta_velocity_kms", 0.0) <= 0:
        return []
    count = TIMELINE["debris_path_count"]
    range_km = results.get("ejecta_radius_km", 0.0)
    return [
        calculate_ballistic_trajectory(geometry.lat, geometry.lng, (360.0 / count) * i, range_km)
        for i in range(count)
    ]


def overpressure_at_radius(radius_km, results):
    """Peak overpressure (psi) falling off as r^-2.5 from the severe-blast radius."""
    if radius_km <= 0:
        return 0.0
    peak = results.get("peak_overpressure_psi", 100.0)
    r0 = results.get("severe_blast_radius_km", 1.0)
    return peak * (r0 / radius_km) ** TIMELINE["overpressure_falloff"]


def generate_shockwave_progression(results):
    if "minor_damage_radius_km" not in results:
        return []
    times = np.arange(TIMELINE["shockwave_samples"]) * TIMELINE["post_impact_step_s"]
    radii = np.minimum(TIMELINE["shockwave_speed_kms"] * times, results["minor_damage_radius_km"])
    return [
        {"time_s": t, "radius_km": r, "overpressure_psi": overpressure_at_radius(r, results)}
        for t, r in zip(times.tolist(), radii.tolist())
    ]


def generate_crater_profile(results):
    if results.get("final_crater_d_m", 0.0) <= 0:
        return None
    return {
        "diameter_m": results["final_crater_d_m"],
        "depth_m": results["crater_depth_m"],
        "rim_height_m": results.get("crater_rim_height_m", 0.0),
        "central_peak_m": results.get("central_peak_height_m", 0.0),
    }


def generate_visualization_data(geometry, results, entry_track, rings):
    return {
        "entry_track": entry_track,
        "debris_paths": generate_debris_paths(geometry, results),
        "shockwave_progression": generate_shockwave_progression(results),
        "crater_profile": generate_crater_profile(results),
        "ring_outlines": create_ring_outlines(geometry.lat, geometry.lng, rings),
    }


def generate_flyby_trajectory(resolution):
    """Simplified flyby: hourly samples around closest approach, distance growing quadratically."""
    half = TIMELINE["flyby_half_window_h"]
    return [
        {
            "time_offset_hours": float(i),
            "distance_km": resolution.miss_distance_km + i ** 2 * TIMELINE["flyby_curvature_km"],
            "velocity_kms": resolution.velocity_kms,
        }
        for i in range(-half, half + 1)
    ]
