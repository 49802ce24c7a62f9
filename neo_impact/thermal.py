"""Thermal radiation (third-degree burn) radius."""

from neo_impact.thresholds import THERMAL_MODEL
from neo_impact.utils import clamp


def burst_height_factor(burst_height_km, model=THERMAL_MODEL):
    return clamp(model["height_factor_base"] - model["height_factor_per_km"] * burst_height_km,
                 model["height_factor_min"], model["height_factor_max"])


def calculate_thermal(energy_mt, burst_height_km, model=THERMAL_MODEL):
    """Third-degree burn radius r = 10 · E_mt^0.4 · f(h), in km; zero when energy <= 0."""
    if energy_mt <= 0:
        return {"thermal_radiation_radius_km": 0.0}

    radius_km = model["coefficient_km"] * energy_mt ** model["energy_exponent"] \
        * burst_height_factor(burst_height_km, model)
    return {"thermal_radiation_radius_km": radius_km}
