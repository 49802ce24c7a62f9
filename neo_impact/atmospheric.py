"""
Atmospheric opacity effects: ozone depletion, aerosol optical depth and the
derived nuclear-winter risk.

This is the default provider for the engine's atmospheric collaborator; any
callable with the same signature and result keys can replace it.
"""

import math

from neo_impact.thresholds import ATMOSPHERIC_MODEL
from neo_impact.utils import clamp


def calculate_atmospheric_effects(energy_mt, burst_altitude_km, ejecta_volume_km3, model=ATMOSPHERIC_MODEL):
    """
    Returns
    -------
    dict
        ozone_depletion_percent, aerosol_optical_depth, nuclear_winter_risk;
        all zero when energy <= 0
    """
    if energy_mt <= 0:
        return {"ozone_depletion_percent": 0.0, "aerosol_optical_depth": 0.0, "nuclear_winter_risk": 0.0}

    ozone = clamp(model["ozone_log_coefficient"] * math.log10(energy_mt + 1.0), 0.0, model["ozone_max_percent"])
    aod = clamp(model["aod_energy_coefficient"] * energy_mt ** model["aod_energy_exponent"]
                + model["aod_ejecta_coefficient"] * math.sqrt(max(ejecta_volume_km3, 0.0)),
                0.0, model["aod_max"])

    return {
        "ozone_depletion_percent": ozone,
        "aerosol_optical_depth": aod,
        "nuclear_winter_risk": clamp(aod / model["aod_max"], 0.0, 1.0),
    }
