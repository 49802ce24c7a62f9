"""
Planetary-defense mitigation heuristics.

Each mitigation type maps its tunable parameters to a success probability and an
energy-reduction fraction:

- deflection: kinetic impactor, score = (lead_days/30) · Δv
- ablation:   laser ablation, score = (lead_days/60) · efficiency
- nuclear:    stand-off detonation, driven by yield and coupling efficiency

Unknown types are reported with zero probability and a warning.
"""

import logging
import math

from neo_impact.thresholds import MITIGATION_MODELS, MITIGATION_TYPES
from neo_impact.utils import clamp, safe_float

logger = logging.getLogger(__name__)


def _deflection(lead_days, dv_ms, efficiency, model):
    score = (lead_days / model["lead_days_unit"]) * (dv_ms / model["delta_v_unit_ms"])
    p = clamp(model["probability_base"] + model["probability_slope"] * score, 0.0, model["probability_max"])
    reduction = clamp(model["reduction_slope"] * score * efficiency, 0.0, model["reduction_max"])
    return p, reduction


def _ablation(lead_days, efficiency, model):
    score = (lead_days / model["lead_days_unit"]) * efficiency
    p = clamp(model["probability_base"] + model["probability_slope"] * score, 0.0, model["probability_max"])
    reduction = clamp(model["reduction_slope"] * score, 0.0, model["reduction_max"])
    return p, reduction


def _nuclear(yield_mt, efficiency, model):
    p = clamp(model["probability_base"] + model["probability_slope"] * math.log10(max(yield_mt, 0.0) + 1.0),
              model["probability_min"], model["probability_max"])
    reduction = clamp(model["reduction_slope"] * math.log10(max(yield_mt * efficiency, 0.0) + 1.0),
                      0.0, model["reduction_max"])
    return p, reduction


def calculate_mitigation(mitigation_type, params, impactor_mass_kg, impactor_velocity_kms,
                         models=MITIGATION_MODELS):
    """
    Evaluate a mitigation campaign.

    Parameters
    ----------
    mitigation_type : str
        "deflection", "ablation", "nuclear" or "none"
    params : dict
        lead_time_days, delta_v_ms, yield_mt, efficiency (all optional)
    impactor_mass_kg, impactor_velocity_kms : float
        Impactor state, recorded with the result

    Returns
    -------
    dict
        type, success_probability, energy_reduction, plus notes or warning
    """
    mitigation_type = str(mitigation_type or "none")
    if mitigation_type == "none":
        return {"type": "none", "success_probability": 0.0, "energy_reduction": 0.0}

    params = params or {}
    lead_days = safe_float(params.get("lead_time_days"), 0.0)
    dv_ms = safe_float(params.get("delta_v_ms"), 0.0)
    yield_mt = safe_float(params.get("yield_mt"), 0.0)
    efficiency = clamp(safe_float(params.get("efficiency"), models["default_efficiency"]),
                       models["efficiency_min"], models["efficiency_max"])

    result = {
        "type": mitigation_type,
        "impactor_mass_kg": impactor_mass_kg,
        "impactor_velocity_kms": impactor_velocity_kms,
    }
    if mitigation_type not in MITIGATION_TYPES:
        logger.warning(f"Unknown mitigation type '{mitigation_type}'; no mitigation applied")
        p, reduction = 0.0, 0.0
        result["warning"] = "Unknown mitigation type"
    elif mitigation_type == "deflection":
        p, reduction = _deflection(lead_days, dv_ms, efficiency, models["deflection"])
    elif mitigation_type == "ablation":
        p, reduction = _ablation(lead_days, efficiency, models["ablation"])
    else:
        p, reduction = _nuclear(yield_mt, efficiency, models["nuclear"])
        result["notes"] = "Stand-off detonation assumed"

    result["success_probability"] = p
    result["energy_reduction"] = reduction
    return result


def is_favorable(mitigation, models=MITIGATION_MODELS):
    """True when a mitigation result justifies rescaling the impact effects."""
    return (mitigation.get("success_probability", 0.0) > models["min_success_probability"]
            and mitigation.get("energy_reduction", 0.0) > 0.0)
