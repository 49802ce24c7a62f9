"""
Crater formation using pi-group scaling.

The transient crater follows the gravity-regime scaling law

    D_tc = K · (ρ_i/ρ_t)^(1/3) · L^0.78 · v^0.44 · g^(−0.22) · sin(θ)^(1/3)

with K = 1.161 for rock targets and 1.365 for water. The final crater is a fixed
multiple of the transient one; depth, rim height and central peak are fixed
proportions of the final diameter.
"""

import math

from neo_impact.thresholds import CRATER_SCALING
from neo_impact.utils import G_EARTH


def _zero_crater():
    return {
        "transient_diameter_m": 0.0,
        "final_diameter_m": 0.0,
        "depth_m": 0.0,
        "rim_height_m": 0.0,
        "central_peak_m": 0.0,
    }


def target_density(ocean_impact):
    """Target material density: sea water for ocean impacts, crustal rock otherwise."""
    return CRATER_SCALING["water_density"] if ocean_impact else CRATER_SCALING["rock_density"]


def calculate_crater(mass_kg, velocity_ms, angle_rad, target_density_kg_m3,
                     impactor_density_kg_m3, g=G_EARTH, scaling=CRATER_SCALING):
    """
    Crater dimensions for a ground impact.

    Parameters
    ----------
    mass_kg : float
        Impactor mass at the ground
    velocity_ms : float
        Terminal velocity at the ground
    angle_rad : float
        Impact angle from the horizontal
    target_density_kg_m3 : float
        Target material density (rock ≈ 2650, water ≈ 1030)
    impactor_density_kg_m3 : float
        Impactor bulk density, used to recover the projectile diameter from its mass

    Returns
    -------
    dict
        transient_diameter_m, final_diameter_m, depth_m, rim_height_m, central_peak_m;
        all zero for degenerate input
    """
    sin_angle = math.sin(angle_rad)
    if mass_kg <= 0 or velocity_ms <= 0 or sin_angle <= 0 or target_density_kg_m3 <= 0 \
            or impactor_density_kg_m3 <= 0:
        return _zero_crater()

    projectile_d = (6.0 * mass_kg / (math.pi * impactor_density_kg_m3)) ** (1.0 / 3.0)
    if target_density_kg_m3 <= scaling["water_density"]:
        k = scaling["coefficient_water"]
    else:
        k = scaling["coefficient_rock"]

    d_tc = (k * (impactor_density_kg_m3 / target_density_kg_m3) ** (1.0 / 3.0)
            * projectile_d ** scaling["diameter_exponent"]
            * velocity_ms ** scaling["velocity_exponent"]
            * g ** scaling["gravity_exponent"]
            * sin_angle ** (1.0 / 3.0))
    d_fr = scaling["final_to_transient"] * d_tc

    return {
        "transient_diameter_m": d_tc,
        "final_diameter_m": d_fr,
        "depth_m": d_fr * scaling["depth_ratio"],
        "rim_height_m": d_fr * scaling["rim_height_ratio"],
        "central_peak_m": d_fr * scaling["central_peak_ratio"],
    }
