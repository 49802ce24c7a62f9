"""
Seismic shaking from the ground-coupled share of impact energy.

Magnitude follows a Gutenberg-Richter style energy relation

    M = (2/3) · log10(E) − 3.2,  clamped to [0, 9.5]

and the strong-shaking damage radius grows exponentially with magnitude:
10 km at M5, about 56 km at M7.
"""

import math

from neo_impact.thresholds import SEISMIC_MODEL
from neo_impact.utils import clamp


def calculate_seismic(ground_energy_j, lat=None, lng=None, model=SEISMIC_MODEL):
    """
    Parameters
    ----------
    ground_energy_j : float
        Seismically coupled energy (already multiplied by the coupling fraction)
    lat, lng : float, optional
        Epicenter; carried for callers that want to annotate the result

    Returns
    -------
    dict
        seismic_magnitude and seismic_damage_radius_km; both zero when energy <= 0
    """
    if ground_energy_j <= 0:
        return {"seismic_magnitude": 0.0, "seismic_damage_radius_km": 0.0}

    magnitude = model["log_slope"] * math.log10(ground_energy_j) + model["log_offset"]
    magnitude = clamp(magnitude, model["magnitude_min"], model["magnitude_max"])
    radius_km = model["reference_radius_km"] * 10.0 ** (
        model["radius_growth"] * (magnitude - model["reference_magnitude"]))

    return {
        "seismic_magnitude": magnitude,
        "seismic_damage_radius_km": radius_km,
    }
