"""
NEO Impact Simulation - Simulation Engine

This module orchestrates the complete impact simulation pipeline and assembles the
structured outcome. It coordinates trajectory resolution, atmospheric entry, the
effect calculators, the damage assessment and the timeline/visualization payload.

Pipeline (fixed order):
1. Resolve inputs (direct parameters or orbital-trajectory verdict)
2. Atmospheric entry integration, branching on airburst vs. ground impact
3. Blast (and crater for ground impacts)
4. Thermal radiation
5. Seismic shaking (ground impacts only)
6. Atmospheric opacity effects
7. Ejecta blanket (ground impacts with a crater)
8. Tsunami (ocean impacts)
9. Mitigation rescale (favorable mitigation only)
10. Damage assessment, timeline and visualization geometry

A trajectory that misses Earth short-circuits to a near-miss outcome. Every run is
self-contained: results, rings and tracks are allocated per call.
"""

import logging
import math
from datetime import datetime, timezone

from neo_impact.atmospheric import calculate_atmospheric_effects
from neo_impact.blast import calculate_blast_radii, peak_overpressure_psi
from neo_impact.crater import calculate_crater, target_density
from neo_impact.ejecta import calculate_ejecta
from neo_impact.entry import AtmosphericEntry
from neo_impact.errors import ComputationError, ResolutionError, SimulationError
from neo_impact.mitigation import calculate_mitigation, is_favorable
from neo_impact.models import DamageRing, SimulationParameters, TrajectoryResolution
from neo_impact.seismic import calculate_seismic
from neo_impact.thermal import calculate_thermal
from neo_impact.thresholds import (
    DETECTION_RANGE_AU, EVACUATION_FACTOR, GLOBAL_EFFECT_THRESHOLDS,
    NEAR_MISS_THREAT_BANDS, NEAR_MISS_THREAT_MAX, RING_STYLES, SEISMIC_MODEL,
    SIMULATION_VERSION, THREAT_LEVEL_MAX, THREAT_LEVELS, TSUNAMI_MODEL,
)
from neo_impact.tsunami import calculate_tsunami
from neo_impact.utils import AU_KM, convert_energy_j_to_mt, deg2rad, kinetic_energy, m_to_km
from neo_impact.visualization_utils import (
    generate_flyby_trajectory, generate_timeline, generate_visualization_data, project_entry_track,
)

# Configure logging for monitoring simulation runs.
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(message)s')
logger = logging.getLogger(__name__)

CRATER_DIMENSION_KEYS = (
    "transient_crater_d_m", "final_crater_d_m", "crater_depth_m",
    "crater_rim_height_m", "central_peak_height_m",
)


def utc_timestamp():
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def make_ring(kind, radius_km, label=None):
    default_label, color = RING_STYLES[kind]
    return DamageRing(label=label or default_label, radius_km=radius_km, color=color, kind=kind)


# =============================================================================
# DAMAGE ASSESSMENT
# =============================================================================

def determine_threat_level(energy_mt):
    """Bucket energy (Mt TNT) into a threat level; boundaries are lower-inclusive."""
    for upper, label in THREAT_LEVELS:
        if energy_mt < upper:
            return label
    return THREAT_LEVEL_MAX


def determine_near_miss_threat(miss_distance_km):
    for upper, label in NEAR_MISS_THREAT_BANDS:
        if miss_distance_km <= upper:
            return label
    return NEAR_MISS_THREAT_MAX


def assess_global_effects(results, thresholds=GLOBAL_EFFECT_THRESHOLDS):
    energy_mt = results.get("energy_megatons_tnt", 0.0)
    effects = []
    if energy_mt < thresholds["local_only_below_mt"]:
        effects.append("Local damage only")
    if energy_mt >= thresholds["regional_climate_mt"]:
        effects.append("Regional climate impact")
    if energy_mt >= thresholds["global_cooling_mt"]:
        effects.append("Global cooling possible")
    if results.get("nuclear_winter_risk", 0.0) > thresholds["nuclear_winter_risk"]:
        effects.append("Nuclear winter risk")
    if energy_mt >= thresholds["mass_extinction_mt"]:
        effects.append("Mass extinction threat")
    if results.get("ozone_depletion_percent", 0.0) > thresholds["ozone_depletion_percent"]:
        effects.append("Ozone depletion")
    if results.get("tsunami_1000km_m", 0.0) > thresholds["global_tsunami_m"]:
        effects.append("Global tsunami")
    return effects


def calculate_warning_time(approach_kms):
    """Hours between detection at a fixed range and arrival at approach_kms."""
    detection_range_km = DETECTION_RANGE_AU * AU_KM
    return round(detection_range_km / approach_kms / 3600.0, 1)


def calculate_damage_assessment(results, approach_kms):
    minor_r = results.get("minor_damage_radius_km") or results.get("window_damage_radius_km") or 0.0
    severe_r = results.get("severe_blast_radius_km") or 0.0
    return {
        "threat_level": determine_threat_level(results["energy_megatons_tnt"]),
        "total_affected_area_km2": math.pi * minor_r ** 2,
        "severe_damage_area_km2": math.pi * severe_r ** 2,
        "evacuation_radius_km": severe_r * EVACUATION_FACTOR,
        "warning_time_hours": calculate_warning_time(approach_kms),
        "global_effects": assess_global_effects(results),
    }


# =============================================================================
# ENGINE
# =============================================================================

class ImpactEngine:
    """
    Runs one simulation request end to end.

    Parameters
    ----------
    params : dict or SimulationParameters
        The request; dicts are parsed and validated immediately, so invalid
        direct parameters raise ValidationError from the constructor.
    resolver : object or callable, optional
        Trajectory resolver, called as resolver.resolve(orbital_elements, encounter_time)
        or resolver(orbital_elements, encounter_time). Required for orbital requests.
    atmospheric : callable, optional
        Atmospheric opacity provider (energy_mt, burst_altitude_km, ejecta_volume_km3) -> dict.
    clock : callable, optional
        Returns the metadata timestamp string.
    """

    def __init__(self, params, resolver=None, atmospheric=calculate_atmospheric_effects, clock=utc_timestamp):
        if not isinstance(params, SimulationParameters):
            params = SimulationParameters.from_dict(params)
        self.params = params
        self.resolver = resolver
        self.atmospheric = atmospheric
        self.clock = clock

    def run(self):
        """
        Execute the pipeline.

        Returns
        -------
        dict
            An impact outcome, a near-miss outcome, or {"ok": False, "error", "error_type"}
        """
        try:
            return self._run()
        except SimulationError as e:
            logger.error(f"Simulation failed ({type(e).__name__}): {e}")
            return self._failure(e)
        except Exception as e:
            logger.error(f"Simulation failed with unexpected {type(e).__name__}: {e}")
            return self._failure(ComputationError(f"Simulation failed: {e}"))

    @staticmethod
    def _failure(error):
        return {"ok": False, "error": str(error), "error_type": type(error).__name__}

    def _run(self):
        params = self.params
        if params.is_orbital:
            resolution = self._resolve_trajectory(params.trajectory)
            if not resolution.impact:
                return self._near_miss_outcome(params, resolution)
            params = params.with_geometry(resolution.impact_geometry().validate())
        return self._impact_outcome(params)

    # ---------- Input resolution ----------
    def _resolve_trajectory(self, encounter):
        if self.resolver is None:
            raise ResolutionError("Orbital elements supplied but no trajectory resolver is configured")
        resolve = getattr(self.resolver, "resolve", self.resolver)

        logger.info(f"Calculating trajectory from orbital elements (encounter time: {encounter.encounter_time})")
        try:
            raw = resolve(encounter.orbital_elements, encounter.encounter_time)
        except Exception as exc:
            raise ResolutionError(f"Failed to calculate orbital trajectory: {exc}") from exc

        resolution = TrajectoryResolution.from_mapping(raw)
        if resolution.impact:
            logger.info(f"Trajectory resolves to an impact at ({resolution.lat}, {resolution.lng})")
        else:
            logger.info(f"Trajectory resolves to a near miss at {resolution.miss_distance_km} km")
        return resolution

    # ---------- Impact branch ----------
    def _impact_outcome(self, params):
        geometry = params.trajectory
        theta = deg2rad(geometry.impact_angle_deg)

        entry = AtmosphericEntry(
            diameter_m=params.diameter_m,
            density_kg_m3=params.density_kg_m3,
            velocity_kms=geometry.velocity_kms,
            impact_angle_deg=geometry.impact_angle_deg,
            strength_mpa=params.strength_mpa,
        ).simulate()

        results = {}
        rings = []
        if entry.is_airburst:
            self._process_airburst(entry.terminal, theta, results, rings)
        else:
            self._process_ground_impact(entry.terminal, theta, params, results, rings)

        self._add_thermal_effects(results, rings)
        if results["mode"] == "ground":
            self._add_seismic_effects(geometry, results, rings)
        self._add_atmospheric_effects(results)
        if results["mode"] == "ground" and results["final_crater_d_m"] > 0:
            self._add_ejecta_effects(theta, results, rings)
        if params.ocean_impact:
            self._add_tsunami_effects(params, theta, results, rings)
        if params.mitigation_type != "none":
            rings = self._apply_mitigation(params, geometry, results, rings)

        rings.sort(key=lambda ring: ring.radius_km)
        results["damage_assessment"] = calculate_damage_assessment(results, geometry.velocity_kms)

        entry_track = project_entry_track(entry, geometry, params.mass_kg)
        return {
            "ok": True,
            "impact": True,
            "near_miss": False,
            "results": results,
            "rings": [ring.to_dict() for ring in rings],
            "entry_track": entry_track,
            "timeline": generate_timeline(geometry, results),
            "visualization": generate_visualization_data(geometry, results, entry_track, rings),
            "metadata": self._impact_metadata(params),
        }

    @staticmethod
    def _blast_rings(radii, crater=None):
        rings = []
        if radii["vaporization_km"] > 0:
            rings.append(make_ring("vaporization", radii["vaporization_km"]))
        if crater is not None:
            rings.append(make_ring("crater", crater["final_diameter_m"] / 2000.0))
        rings.append(make_ring("severe", radii["severe_blast_km"]))
        rings.append(make_ring("moderate", radii["moderate_blast_km"]))
        rings.append(make_ring("minor", radii["window_damage_km"]))
        return rings

    @staticmethod
    def _blast_fields(radii):
        return {
            "peak_overpressure_psi": peak_overpressure_psi(),
            "vaporization_radius_km": radii["vaporization_km"],
            "severe_blast_radius_km": radii["severe_blast_km"],
            "moderate_blast_radius_km": radii["moderate_blast_km"],
            "window_damage_radius_km": radii["window_damage_km"],
            "minor_damage_radius_km": radii["minor_damage_km"],
        }

    def _process_airburst(self, burst, theta, results, rings):
        energy_j = burst.kinetic_energy_j
        radii = calculate_blast_radii(energy_j, theta, burst.altitude_m)

        results.update(
            mode="airburst",
            burst_alt_km=m_to_km(burst.altitude_m),
            energy_megatons_tnt=convert_energy_j_to_mt(energy_j),
            energy_joules=energy_j,
            final_velocity_kms=m_to_km(burst.velocity_ms),
            surviving_mass_kg=burst.mass_kg,
            transient_crater_d_m=0.0,
            final_crater_d_m=0.0,
            crater_depth_m=0.0,
        )
        results.update(self._blast_fields(radii))
        rings.extend(self._blast_rings(radii))

    def _process_ground_impact(self, impact, theta, params, results, rings):
        energy_j = impact.kinetic_energy_j
        crater = calculate_crater(
            mass_kg=impact.mass_kg,
            velocity_ms=impact.velocity_ms,
            angle_rad=theta,
            target_density_kg_m3=target_density(params.ocean_impact),
            impactor_density_kg_m3=params.density_kg_m3,
        )
        radii = calculate_blast_radii(energy_j, theta, 0.0)

        results.update(
            mode="ground",
            energy_megatons_tnt=convert_energy_j_to_mt(energy_j),
            energy_joules=energy_j,
            final_velocity_kms=m_to_km(impact.velocity_ms),
            surviving_mass_kg=impact.mass_kg,
            ground_coupled_energy_fraction=SEISMIC_MODEL["ground_coupled_fraction"],
            transient_crater_d_m=crater["transient_diameter_m"],
            final_crater_d_m=crater["final_diameter_m"],
            crater_depth_m=crater["depth_m"],
            crater_rim_height_m=crater["rim_height_m"],
            crater_rim_radius_km=crater["final_diameter_m"] / 2000.0,
            central_peak_height_m=crater["central_peak_m"],
        )
        results.update(self._blast_fields(radii))
        rings.extend(self._blast_rings(radii, crater))

    # ---------- Effect composition ----------
    def _add_thermal_effects(self, results, rings):
        thermal = calculate_thermal(results["energy_megatons_tnt"], results.get("burst_alt_km", 0.0))
        logger.debug(f"Thermal: {thermal}")
        results.update(thermal)
        if thermal["thermal_radiation_radius_km"] > 0:
            rings.append(make_ring("thermal", thermal["thermal_radiation_radius_km"]))

    def _add_seismic_effects(self, geometry, results, rings):
        ground_energy = results["energy_joules"] * results["ground_coupled_energy_fraction"]
        seismic = calculate_seismic(ground_energy, geometry.lat, geometry.lng)
        logger.debug(f"Seismic: {seismic}")
        results.update(seismic)
        if seismic["seismic_damage_radius_km"] > 0:
            rings.append(make_ring("seismic", seismic["seismic_damage_radius_km"]))

    def _add_atmospheric_effects(self, results):
        effects = self.atmospheric(
            results["energy_megatons_tnt"],
            results.get("burst_alt_km", 0.0),
            results.get("ejecta_volume_km3", 0.0),
        )
        logger.debug(f"Atmospheric: {effects}")
        results.update(effects)

    def _add_ejecta_effects(self, theta, results, rings):
        ejecta = calculate_ejecta(results["final_crater_d_m"], results["crater_depth_m"],
                                  results["energy_joules"], theta)
        logger.debug(f"Ejecta: {ejecta}")
        results.update(ejecta)
        if ejecta["ejecta_radius_km"] > 0:
            rings.append(make_ring("ejecta", ejecta["ejecta_radius_km"]))

    def _add_tsunami_effects(self, params, theta, results, rings):
        tsunami = calculate_tsunami(results["energy_joules"], params.ocean_depth_m, theta)
        logger.debug(f"Tsunami: {tsunami}")
        results.update(tsunami)
        threshold = TSUNAMI_MODEL["ring_height_threshold_m"]
        if tsunami["tsunami_100km_m"] > threshold:
            rings.append(make_ring("tsunami", 100.0, label=f"Tsunami ({tsunami['tsunami_100km_m']:.1f}m @100km)"))
        if tsunami["tsunami_1000km_m"] > threshold:
            rings.append(make_ring("tsunami_far", 1000.0))

    def _apply_mitigation(self, params, geometry, results, rings):
        mitigation = calculate_mitigation(params.mitigation_type, params.mitigation_params,
                                          params.mass_kg, geometry.velocity_kms)
        results["mitigation"] = mitigation
        if not is_favorable(mitigation):
            logger.warning(f"Mitigation '{params.mitigation_type}' not favorable "
                           f"(p = {mitigation['success_probability']:.2f}, "
                           f"reduction = {mitigation['energy_reduction']:.2f}); effects unchanged")
            return rings

        reduction = 1.0 - mitigation["energy_reduction"]
        scale = reduction ** (1.0 / 3.0)
        logger.info(f"Mitigation '{params.mitigation_type}' applied: energy x{reduction:.3f}, radii x{scale:.3f}")

        results["energy_megatons_tnt"] *= reduction
        results["energy_joules"] *= reduction
        for key in list(results):
            if key.endswith("_radius_km"):
                results[key] *= scale
        for key in CRATER_DIMENSION_KEYS:
            if key in results:
                results[key] *= scale
        return [ring.scaled(scale) for ring in rings]

    # ---------- Near-miss branch ----------
    def _near_miss_outcome(self, params, resolution):
        potential_energy_j = kinetic_energy(params.mass_kg, resolution.velocity_kms * 1000.0)
        return {
            "ok": True,
            "impact": False,
            "near_miss": True,
            "results": {
                "miss_distance_km": resolution.miss_distance_km,
                "closest_approach_distance_km": resolution.miss_distance_km,
                "relative_velocity_kms": resolution.velocity_kms,
                "encounter_time": resolution.encounter_time,
                "threat_level": determine_near_miss_threat(resolution.miss_distance_km),
                "diameter_m": params.diameter_m,
                "estimated_energy_mt": convert_energy_j_to_mt(potential_energy_j),
            },
            "visualization": {
                "flyby_trajectory": generate_flyby_trajectory(resolution),
                "earth_position": resolution.earth_position_km,
                "neo_position": resolution.neo_position_km,
                "relative_position": resolution.relative_position_km,
                "closest_approach_point": {
                    "distance_km": resolution.miss_distance_km,
                    "velocity_kms": resolution.velocity_kms,
                    "time": resolution.encounter_time,
                },
            },
            "metadata": {
                "simulation_version": SIMULATION_VERSION,
                "timestamp": self.clock(),
                "simulation_type": "near_miss",
                "parameters": {
                    "diameter_m": params.diameter_m,
                    "density_kg_m3": params.density_kg_m3,
                    "orbital_elements": params.trajectory.orbital_elements,
                    "encounter_time": params.trajectory.encounter_time,
                },
            },
        }

    def _impact_metadata(self, params):
        geometry = params.trajectory
        return {
            "simulation_version": SIMULATION_VERSION,
            "timestamp": self.clock(),
            "simulation_type": "impact",
            "parameters": {
                "diameter_m": params.diameter_m,
                "density_kg_m3": params.density_kg_m3,
                "velocity_kms": geometry.velocity_kms,
                "impact_angle_deg": geometry.impact_angle_deg,
                "azimuth_deg": geometry.azimuth_deg,
                "strength_mpa": params.strength_mpa,
                "location": {"lat": geometry.lat, "lng": geometry.lng},
                "ocean_depth_m": params.ocean_depth_m,
                "mitigation": params.mitigation_type,
            },
        }


def run_simulation(params, resolver=None, **kwargs):
    """
    Execute one simulation request.

    Invalid direct parameters raise ValidationError before anything runs; every
    later failure is returned as {"ok": False, ...}.
    """
    return ImpactEngine(params, resolver=resolver, **kwargs).run()
