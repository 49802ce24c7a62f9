"""
Tuning tables and thresholds for the impact effect calculators.

Every coefficient used by the simulation core is collected here, one named table per
calculator. The values are tuned for visual plausibility in interactive what-if
exploration, not for engineering-grade or peer-reviewed accuracy.
"""

# ==========================================
# Input parameter ranges (inclusive)
# ==========================================
PARAMETER_RANGES = {
    "diameter_m": (1.0, 100000.0),
    "density_kg_m3": (100.0, 10000.0),
    "velocity_kms": (1.0, 100.0),
    "impact_angle_deg": (5.0, 90.0),
    "lat": (-90.0, 90.0),
    "lng": (-180.0, 180.0),
}

MITIGATION_TYPES = ("none", "deflection", "ablation", "nuclear")

# ==========================================
# Atmospheric entry
# ==========================================
ENTRY_MODEL = {
    "sea_level_density": 1.225,   # kg/m³
    "scale_height_m": 8000.0,
    "drag_coefficient": 1.0,
    "time_step_s": 0.25,
    "max_steps": 600,
    "start_altitude_m": 80000.0,
}

# ==========================================
# Crater (pi-group scaling)
# ==========================================
CRATER_SCALING = {
    "rock_density": 2650.0,       # kg/m³
    "water_density": 1030.0,      # kg/m³
    "coefficient_rock": 1.161,
    "coefficient_water": 1.365,
    "diameter_exponent": 0.78,
    "velocity_exponent": 0.44,
    "gravity_exponent": -0.22,
    "final_to_transient": 1.3,
    "depth_ratio": 0.2,
    "rim_height_ratio": 0.04,
    "central_peak_ratio": 0.05,
}

# ==========================================
# Airblast: R = k · E_mt^(1/3), k in km
# ==========================================
BLAST_COEFFICIENTS = {
    "vaporization": 0.9,
    "severe": 4.5,
    "moderate": 8.5,
    "window": 15.0,
    "minor": 25.0,
}

BLAST_MODEL = {
    "altitude_correction_per_km": 0.02,
    "altitude_correction_min": 0.5,
    "altitude_correction_max": 1.0,
    "peak_overpressure_psi": 20.0,
}

# ==========================================
# Thermal radiation (third-degree burns)
# ==========================================
THERMAL_MODEL = {
    "coefficient_km": 10.0,
    "energy_exponent": 0.4,
    "height_factor_base": 1.2,
    "height_factor_per_km": 0.05,
    "height_factor_min": 0.6,
    "height_factor_max": 1.2,
}

# ==========================================
# Seismic
# ==========================================
SEISMIC_MODEL = {
    "ground_coupled_fraction": 0.5,
    "log_slope": 2.0 / 3.0,
    "log_offset": -3.2,
    "magnitude_min": 0.0,
    "magnitude_max": 9.5,
    "reference_radius_km": 10.0,   # damage radius at the reference magnitude
    "reference_magnitude": 5.0,
    "radius_growth": 0.375,        # log10 radius per magnitude unit (~56 km at M7)
}

# ==========================================
# Tsunami
# ==========================================
TSUNAMI_MODEL = {
    "min_ocean_depth_m": 50.0,
    "reference_energy_j": 1e15,
    "reference_depth_m": 4000.0,
    "depth_factor_min": 0.2,
    "depth_factor_max": 1.2,
    "direction_base": 0.6,
    "direction_cos_weight": 0.4,
    "direction_factor_min": 0.2,
    "direction_factor_max": 1.0,
    "near_field_coefficient": 2.0,    # wave height proxy at 100 km
    "far_field_coefficient": 0.35,    # wave height proxy at 1000 km
    "near_field_extent_km": 500.0,
    "ring_height_threshold_m": 0.5,
}

# ==========================================
# Ejecta
# ==========================================
EJECTA_MODEL = {
    "radius_base_factor": 2.5,
    "radius_angle_factor": 1.0,
    "velocity_coefficient": 0.15,
    "velocity_energy_exponent": 0.05,
    "velocity_min_kms": 0.1,
    "velocity_max_kms": 2.5,
}

# ==========================================
# Atmospheric / opacity effects
# ==========================================
ATMOSPHERIC_MODEL = {
    "ozone_log_coefficient": 2.0,
    "ozone_max_percent": 35.0,
    "aod_energy_coefficient": 0.01,
    "aod_energy_exponent": 0.6,
    "aod_ejecta_coefficient": 0.02,
    "aod_max": 3.0,
}

# ==========================================
# Mitigation heuristics
# ==========================================
MITIGATION_MODELS = {
    "default_efficiency": 0.3,
    "efficiency_min": 0.05,
    "efficiency_max": 0.9,
    "deflection": {
        "lead_days_unit": 30.0,
        "delta_v_unit_ms": 1.0,
        "probability_base": 0.1,
        "probability_slope": 0.08,
        "probability_max": 0.95,
        "reduction_slope": 0.02,
        "reduction_max": 0.6,
    },
    "ablation": {
        "lead_days_unit": 60.0,
        "probability_base": 0.05,
        "probability_slope": 0.07,
        "probability_max": 0.8,
        "reduction_slope": 0.3,
        "reduction_max": 0.5,
    },
    "nuclear": {
        "probability_base": 0.5,
        "probability_slope": 0.05,
        "probability_min": 0.2,
        "probability_max": 0.98,
        "reduction_slope": 0.15,
        "reduction_max": 0.75,
    },
    # Rescaling is applied only when both conditions hold
    "min_success_probability": 0.5,
}

# ==========================================
# Damage assessment
# ==========================================
# (upper bound in Mt, label); energies at or above the last bound are EXTINCTION
THREAT_LEVELS = [
    (1.0, "MINIMAL"),
    (10.0, "MINOR"),
    (100.0, "LOCAL"),
    (1000.0, "REGIONAL"),
    (10000.0, "CONTINENTAL"),
]
THREAT_LEVEL_MAX = "EXTINCTION"

GLOBAL_EFFECT_THRESHOLDS = {
    "local_only_below_mt": 10.0,
    "regional_climate_mt": 100.0,
    "global_cooling_mt": 1000.0,
    "mass_extinction_mt": 10000.0,
    "nuclear_winter_risk": 0.5,
    "ozone_depletion_percent": 10.0,
    "global_tsunami_m": 5.0,
}

DETECTION_RANGE_AU = 0.05
EVACUATION_FACTOR = 1.5

# (upper bound in km, label), checked in order
NEAR_MISS_THREAT_BANDS = [
    (2.0 * 6371.0, "EXTREME - Within 2 Earth radii"),
    (10.0 * 6371.0, "VERY HIGH - Within 10 Earth radii"),
    (0.5 * 384400.0, "HIGH - Within half lunar distance"),
    (384400.0, "MODERATE - Within lunar distance"),
]
NEAR_MISS_THREAT_MAX = "LOW - Beyond lunar distance"

# ==========================================
# Timeline and visualization
# ==========================================
TIMELINE = {
    "pre_impact_seconds": 60,
    "velocity_decay_window_s": 120.0,
    "post_impact_seconds": 300,
    "post_impact_step_s": 5,
    "shockwave_speed_kms": 0.34,
    "p_wave_speed_kms": 6.0,
    "shockwave_samples": 21,
    "overpressure_falloff": 2.5,
    "debris_path_count": 12,
    "debris_path_steps": 20,
    "debris_apex_ratio": 0.25,
    "flyby_half_window_h": 10,
    "flyby_curvature_km": 1000.0,
    "ring_outline_points": 72,
}

# ==========================================
# Damage ring styles: type -> (label, color)
# ==========================================
RING_STYLES = {
    "vaporization": ("Vaporization", "#ff1744"),
    "crater": ("Crater rim", "#ff6b35"),
    "severe": ("Severe blast", "#ff4d4f"),
    "moderate": ("Moderate damage", "#ff9800"),
    "minor": ("Window damage", "#ffa940"),
    "thermal": ("Third-degree burns", "#ff5722"),
    "seismic": ("Seismic damage", "#9c27b0"),
    "ejecta": ("Ejecta blanket", "#ff9800"),
    "tsunami": ("Tsunami", "#00acc1"),
    "tsunami_far": ("Far-field tsunami", "#00838f"),
}

SIMULATION_VERSION = "2.0"
