"""
NEO Impact Simulation - Atmospheric Entry Integrator

Steps a falling body through an exponential atmosphere with explicit time stepping
and decides whether it bursts aloft or strikes the ground.

Model:
- Air density ρ(h) = ρ0 · exp(−h/H)
- Dynamic pressure q = ½ · ρ(h) · v²
- Drag deceleration a = C_D · q · A / m
- Airburst the first time q ≥ material strength while still above ground

Mass is held constant: ablation is not modelled.
"""

import logging
import math

from neo_impact.models import Airburst, EntryState, Impact, TrackSample
from neo_impact.thresholds import ENTRY_MODEL
from neo_impact.utils import deg2rad, kinetic_energy, sphere_mass

logger = logging.getLogger(__name__)


class AtmosphericEntry:
    """
    Explicit-Euler descent of a spherical body through the atmosphere.

    Parameters
    ----------
    diameter_m : float
        Impactor diameter in meters
    density_kg_m3 : float
        Impactor bulk density
    velocity_kms : float
        Entry velocity in km/s
    impact_angle_deg : float
        Trajectory angle measured from the horizontal
    strength_mpa : float
        Material strength; an airburst is triggered when dynamic pressure reaches it
    """

    def __init__(self, diameter_m, density_kg_m3, velocity_kms, impact_angle_deg, strength_mpa,
                 model=ENTRY_MODEL):
        self.diameter = float(diameter_m)
        self.density = float(density_kg_m3)
        self.v0 = float(velocity_kms) * 1000.0
        self.theta = deg2rad(float(impact_angle_deg))
        self.strength_pa = float(strength_mpa) * 1e6
        self.area = math.pi * (self.diameter / 2.0) ** 2
        self.mass = sphere_mass(self.diameter, self.density)
        self.model = model

    def air_density(self, altitude_m):
        """Exponential atmosphere density at altitude (kg/m³)."""
        return self.model["sea_level_density"] * math.exp(-altitude_m / self.model["scale_height_m"])

    def simulate(self):
        """
        Integrate the descent and classify the terminal state.

        Returns
        -------
        EntryState
            Airburst or Impact terminal state plus the step-by-step track
        """
        dt = self.model["time_step_s"]
        cd = self.model["drag_coefficient"]
        sin_t = math.sin(self.theta)
        cos_t = math.cos(self.theta)

        h = self.model["start_altitude_m"]
        v = self.v0
        m = self.mass
        s = 0.0
        track = []

        for _ in range(self.model["max_steps"]):
            q = 0.5 * self.air_density(h) * v * v
            a_drag = cd * q * self.area / m
            v = max(v - a_drag * dt, 0.0)

            h = max(h - v * sin_t * dt, 0.0)
            s += v * cos_t * dt
            track.append(TrackSample(height_m=h, velocity_ms=v, mass_kg=m, downrange_m=s))

            if q >= self.strength_pa and h > 0.0:
                logger.info(f"Airburst at {h / 1000.0:.2f} km (q = {q:.3e} Pa, v = {v / 1000.0:.2f} km/s)")
                return EntryState(
                    terminal=Airburst(altitude_m=h, velocity_ms=v, mass_kg=m, downrange_m=s),
                    track=tuple(track),
                )

            if h <= 0.0:
                logger.info(f"Ground impact at {v / 1000.0:.2f} km/s after {s / 1000.0:.1f} km downrange")
                return EntryState(
                    terminal=Impact(velocity_ms=v, mass_kg=m, kinetic_energy_j=kinetic_energy(m, v)),
                    track=tuple(track),
                )

        # Step budget exhausted: treat the last sample as a ground impact
        last = track[-1]
        logger.warning(f"Entry did not terminate within {self.model['max_steps']} steps "
                       f"(h = {last.height_m:.0f} m); using last sample as ground impact")
        return EntryState(
            terminal=Impact(velocity_ms=last.velocity_ms, mass_kg=last.mass_kg,
                            kinetic_energy_j=kinetic_energy(last.mass_kg, last.velocity_ms)),
            track=tuple(track),
        )
