"""
NEO Impact Simulation - Utility Functions and Constants Module

This module provides the physical constants and the small, stateless helpers shared
by every calculator in the simulation core. It includes:

1. Physical and geometric constants (Earth radius, TNT equivalence, astronomical unit)
2. Unit conversion utilities (distance, energy, angles)
3. Great-circle navigation helpers used for tracks, debris paths and ring outlines
4. Numeric guards (clamping, best-effort float coercion)

All functions are pure: they hold no state and can be shared freely between
calculators and concurrent simulation runs.
"""

import math

# =============================================================================
# PHYSICAL AND GEOMETRIC CONSTANTS
# =============================================================================

# Earth's mean radius (kilometers / meters) - used for great circle calculations
EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_M = EARTH_RADIUS_KM * 1000.0

# Mean Earth-Moon distance (kilometers) - reference band for near-miss threat levels
LUNAR_DISTANCE_KM = 384400.0

# Astronomical unit (kilometers)
AU_KM = 149597870.7

# Joules per megaton of TNT (1 MT TNT = 4.184 × 10^15 J)
JOULES_PER_MEGATON = 4.184e15

# Standard gravity at Earth's surface (m/s²) - used in crater scaling
G_EARTH = 9.81

# =============================================================================
# UNIT CONVERSION UTILITIES
# =============================================================================

def km_to_m(km):
    """Convert kilometers to meters."""
    return km * 1000.0

def m_to_km(m):
    """Convert meters to kilometers."""
    return m / 1000.0

def deg2rad(deg):
    """Convert degrees to radians."""
    return deg * math.pi / 180.0

def rad2deg(rad):
    """Convert radians to degrees."""
    return rad * 180.0 / math.pi

def convert_energy_j_to_mt(energy_j):
    """
    Convert energy from Joules to Megatons of TNT equivalent.

    Parameters
    ----------
    energy_j : float
        Energy in Joules

    Returns
    -------
    float
        Energy in Megatons TNT equivalent
    """
    return energy_j / JOULES_PER_MEGATON

def sphere_mass(diameter_m, density_kg_m3):
    """Mass (kg) of a homogeneous sphere: (π/6)·ρ·d³."""
    return (math.pi / 6.0) * density_kg_m3 * diameter_m ** 3

def kinetic_energy(mass_kg, velocity_ms):
    """Kinetic energy in Joules."""
    return 0.5 * mass_kg * velocity_ms ** 2

# =============================================================================
# GREAT-CIRCLE GEOMETRY
# =============================================================================

def normalize_lon(lon):
    """Normalize a longitude to the [-180, 180) range."""
    return ((lon + 180.0) % 360.0) - 180.0

def arc_from_meters(meters):
    """
    Convert a distance along Earth's surface into a central angle.

    Parameters
    ----------
    meters : float
        Surface distance in meters (may be negative for a reversed direction)

    Returns
    -------
    float
        Arc length in radians on a sphere of Earth's mean radius
    """
    return meters / EARTH_RADIUS_M

def gc_destination(lat_deg, lon_deg, bearing_deg, arc_rad):
    """
    Destination point on a sphere given a start point, bearing and angular distance.

    Uses the spherical law of cosines:
        lat2 = asin(sin(lat1)·cos(δ) + cos(lat1)·sin(δ)·cos(θ))
        lon2 = lon1 + atan2(sin(θ)·sin(δ)·cos(lat1), cos(δ) − sin(lat1)·sin(lat2))

    Parameters
    ----------
    lat_deg, lon_deg : float
        Start coordinate in decimal degrees
    bearing_deg : float
        Initial bearing θ, degrees clockwise from north
    arc_rad : float
        Angular distance δ in radians

    Returns
    -------
    tuple of float
        (latitude, longitude) of the destination in degrees, longitude normalized
    """
    lat1 = deg2rad(lat_deg)
    lon1 = deg2rad(lon_deg)
    brg = deg2rad(bearing_deg)

    lat2 = math.asin(math.sin(lat1) * math.cos(arc_rad) +
                     math.cos(lat1) * math.sin(arc_rad) * math.cos(brg))
    lon2 = lon1 + math.atan2(math.sin(brg) * math.sin(arc_rad) * math.cos(lat1),
                             math.cos(arc_rad) - math.sin(lat1) * math.sin(lat2))

    return rad2deg(lat2), normalize_lon(rad2deg(lon2))

# =============================================================================
# NUMERIC GUARDS
# =============================================================================

def clamp(v, lo, hi):
    """Clamp v into the closed interval [lo, hi]."""
    if v < lo:
        return lo
    if v > hi:
        return hi
    return v

def safe_float(x, fallback=0.0):
    """Best-effort float coercion; returns fallback instead of raising."""
    if x is None:
        return fallback
    try:
        return float(x)
    except (TypeError, ValueError):
        return fallback
