"""
Airblast damage radii from cube-root yield scaling.

Each band radius is R = k · E_mt^(1/3) with the per-band coefficients in
BLAST_COEFFICIENTS. Higher bursts shrink the near-field (vaporization and severe)
bands by a linear factor clamped to [0.5, 1.0].
"""

from neo_impact.thresholds import BLAST_COEFFICIENTS, BLAST_MODEL
from neo_impact.utils import clamp, convert_energy_j_to_mt, m_to_km


def altitude_correction(burst_alt_km, model=BLAST_MODEL):
    return clamp(1.0 - model["altitude_correction_per_km"] * burst_alt_km,
                 model["altitude_correction_min"], model["altitude_correction_max"])


def calculate_blast_radii(energy_j, angle_rad, burst_alt_m, coefficients=BLAST_COEFFICIENTS):
    """
    Five concentric airblast radii in km.

    The impact angle is accepted for interface symmetry with the other
    calculators; the cube-root model does not depend on it.

    Returns
    -------
    dict
        vaporization_km, severe_blast_km, moderate_blast_km, window_damage_km,
        minor_damage_km; all zero when energy_j <= 0
    """
    e_mt = convert_energy_j_to_mt(energy_j)
    f = e_mt ** (1.0 / 3.0) if e_mt > 0 else 0.0
    h_corr = altitude_correction(max(m_to_km(burst_alt_m), 0.0))

    return {
        "vaporization_km": coefficients["vaporization"] * f * h_corr,
        "severe_blast_km": coefficients["severe"] * f * h_corr,
        "moderate_blast_km": coefficients["moderate"] * f,
        "window_damage_km": coefficients["window"] * f,
        "minor_damage_km": coefficients["minor"] * f,
    }


def peak_overpressure_psi():
    """Overpressure associated with the severe-blast radius."""
    return BLAST_MODEL["peak_overpressure_psi"]
