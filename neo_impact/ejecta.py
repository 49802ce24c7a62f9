"""Ejecta blanket extent, volume and characteristic launch velocity."""

import math

from neo_impact.thresholds import EJECTA_MODEL
from neo_impact.utils import clamp, m_to_km


def calculate_ejecta(crater_diameter_m, crater_depth_m, energy_j, angle_rad, model=EJECTA_MODEL):
    """
    Parameters
    ----------
    crater_diameter_m : float
        Final crater diameter; zero (airburst) yields an all-zero result
    crater_depth_m : float
        Final crater depth
    energy_j : float
        Impact energy
    angle_rad : float
        Impact angle from the horizontal

    Returns
    -------
    dict
        ejecta_radius_km, ejecta_volume_km3 (cylinder approximation of the crater
        bowl) and ejecta_velocity_kms
    """
    if crater_diameter_m <= 0:
        return {"ejecta_radius_km": 0.0, "ejecta_volume_km3": 0.0, "ejecta_velocity_kms": 0.0}

    radius_km = m_to_km(crater_diameter_m) * (model["radius_base_factor"]
                                              + model["radius_angle_factor"] * math.sin(angle_rad))
    volume_km3 = math.pi * (crater_diameter_m / 2.0) ** 2 * crater_depth_m / 1e9
    velocity_kms = clamp(model["velocity_coefficient"] * max(energy_j, 0.0) ** model["velocity_energy_exponent"],
                         model["velocity_min_kms"], model["velocity_max_kms"])

    return {
        "ejecta_radius_km": radius_km,
        "ejecta_volume_km3": volume_km3,
        "ejecta_velocity_kms": velocity_kms,
    }
