"""
Tsunami wave-height proxies for ocean impacts.

Heights at 100 km and 1000 km scale with sqrt(E) normalised to 1e15 J, a depth
factor (depth/4000 m, clamped to [0.2, 1.2]) and a direction factor
(0.6 + 0.4·cos θ, clamped to [0.2, 1.0]). The values are intentionally conservative
and are meant for visualization only.
"""

import math

from neo_impact.thresholds import TSUNAMI_MODEL
from neo_impact.utils import clamp


def _no_tsunami():
    return {"tsunami_100km_m": 0.0, "tsunami_1000km_m": 0.0, "tsunami_radius_km": 0.0}


def calculate_tsunami(energy_j, depth_m, angle_rad, model=TSUNAMI_MODEL):
    """
    Returns
    -------
    dict
        tsunami_100km_m, tsunami_1000km_m and the near-field extent tsunami_radius_km;
        all zero unless the ocean is deeper than 50 m and energy is positive
    """
    if depth_m is None or energy_j <= 0 or depth_m <= model["min_ocean_depth_m"]:
        return _no_tsunami()

    scale = math.sqrt(energy_j) / math.sqrt(model["reference_energy_j"])
    depth_factor = clamp(depth_m / model["reference_depth_m"],
                         model["depth_factor_min"], model["depth_factor_max"])
    direction_factor = clamp(model["direction_base"] + model["direction_cos_weight"] * math.cos(angle_rad),
                             model["direction_factor_min"], model["direction_factor_max"])

    return {
        "tsunami_100km_m": model["near_field_coefficient"] * scale * depth_factor * direction_factor,
        "tsunami_1000km_m": model["far_field_coefficient"] * scale * math.sqrt(depth_factor) * direction_factor,
        "tsunami_radius_km": model["near_field_extent_km"],
    }
