"""
NEO Impact Simulation - Data Model

Records exchanged between the orchestrator and its collaborators: the validated
simulation request, the trajectory resolver's verdict, the entry integrator's
terminal state and track, and the damage rings. All records are created fresh for
a single run and are immutable once built.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple, Union

from neo_impact.errors import ResolutionError, ValidationError
from neo_impact.thresholds import PARAMETER_RANGES, TSUNAMI_MODEL
from neo_impact.utils import kinetic_energy, safe_float, sphere_mass


def _number(params, key, default=None, required=True):
    """Fetch a numeric field from a request mapping, raising ValidationError on bad input."""
    raw = params.get(key)
    if raw is None:
        raw = default
    if raw is None:
        if required:
            raise ValidationError(f"Missing required parameter: {key}")
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Parameter {key} must be numeric, got {raw!r}") from None
    if not math.isfinite(value):
        raise ValidationError(f"Parameter {key} must be finite, got {raw!r}")
    return value


def check_range(name, value):
    """Raise ValidationError unless value lies inside PARAMETER_RANGES[name]."""
    lo, hi = PARAMETER_RANGES[name]
    if not lo <= value <= hi:
        raise ValidationError(f"Invalid {name}: {value} (expected {lo:g}-{hi:g})")
    return value


# =============================================================================
# SIMULATION REQUEST
# =============================================================================

@dataclass(frozen=True)
class ImpactGeometry:
    """Direct-mode impact geometry: where, how fast and how steep."""
    lat: float
    lng: float
    velocity_kms: float
    impact_angle_deg: float
    azimuth_deg: float = 0.0

    def validate(self) -> "ImpactGeometry":
        check_range("velocity_kms", self.velocity_kms)
        check_range("impact_angle_deg", self.impact_angle_deg)
        if not (PARAMETER_RANGES["lat"][0] <= self.lat <= PARAMETER_RANGES["lat"][1] and
                PARAMETER_RANGES["lng"][0] <= self.lng <= PARAMETER_RANGES["lng"][1]):
            raise ValidationError(f"Invalid coordinates: ({self.lat}, {self.lng})")
        return self


@dataclass(frozen=True)
class OrbitalEncounter:
    """Orbital-mode input, resolved by the external trajectory resolver at run time."""
    orbital_elements: dict
    encounter_time: Any = None


@dataclass(frozen=True)
class SimulationParameters:
    """
    Validated simulation request.

    `trajectory` is a tagged union: an ImpactGeometry for direct parameters or an
    OrbitalEncounter when orbital elements were supplied.
    """
    diameter_m: float
    density_kg_m3: float
    trajectory: Union[ImpactGeometry, OrbitalEncounter]
    strength_mpa: float = 1.0
    ocean_depth_m: Optional[float] = None
    mitigation_type: str = "none"
    mitigation_params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, params: Mapping) -> "SimulationParameters":
        """
        Build and validate parameters from a loosely-typed request mapping.

        Raises
        ------
        ValidationError
            If a required value is missing, non-numeric or outside its range.
        """
        if not isinstance(params, Mapping):
            raise ValidationError("Simulation parameters must be a mapping")

        diameter = check_range("diameter_m", _number(params, "diameter_m"))
        density = check_range("density_kg_m3", _number(params, "density_kg_m3"))

        orbital_elements = params.get("orbital_elements")
        if orbital_elements:
            if not isinstance(orbital_elements, Mapping):
                raise ValidationError("orbital_elements must be a mapping")
            trajectory = OrbitalEncounter(dict(orbital_elements), params.get("encounter_time"))
        else:
            trajectory = ImpactGeometry(
                lat=_number(params, "lat"),
                lng=_number(params, "lng"),
                velocity_kms=_number(params, "velocity_kms"),
                impact_angle_deg=_number(params, "impact_angle_deg"),
                azimuth_deg=_number(params, "azimuth_deg", default=0.0),
            ).validate()

        strength = _number(params, "strength_mpa", default=1.0)
        if strength <= 0:
            raise ValidationError(f"Invalid strength_mpa: {strength}")

        mitigation_params = params.get("mitigation_params") or {}
        if not isinstance(mitigation_params, Mapping):
            raise ValidationError("mitigation_params must be a mapping")

        return cls(
            diameter_m=diameter,
            density_kg_m3=density,
            trajectory=trajectory,
            strength_mpa=strength,
            ocean_depth_m=safe_float(params.get("ocean_depth_m"), None),
            mitigation_type=str(params.get("mitigation_type") or "none"),
            mitigation_params=dict(mitigation_params),
        )

    @property
    def is_orbital(self) -> bool:
        return isinstance(self.trajectory, OrbitalEncounter)

    @property
    def mass_kg(self) -> float:
        return sphere_mass(self.diameter_m, self.density_kg_m3)

    @property
    def ocean_impact(self) -> bool:
        return self.ocean_depth_m is not None and self.ocean_depth_m > TSUNAMI_MODEL["min_ocean_depth_m"]

    def with_geometry(self, geometry: ImpactGeometry) -> "SimulationParameters":
        """Copy of these parameters with the trajectory replaced by a resolved geometry."""
        return replace(self, trajectory=geometry)


# =============================================================================
# TRAJECTORY RESOLVER OUTPUT
# =============================================================================

@dataclass(frozen=True)
class TrajectoryResolution:
    """Read-only verdict of the external trajectory resolver."""
    impact: bool
    velocity_kms: float
    lat: Optional[float] = None
    lng: Optional[float] = None
    impact_angle_deg: Optional[float] = None
    azimuth_deg: float = 0.0
    miss_distance_km: Optional[float] = None
    encounter_time: Any = None
    earth_position_km: Any = None
    neo_position_km: Any = None
    relative_position_km: Any = None

    @classmethod
    def from_mapping(cls, data) -> "TrajectoryResolution":
        """Check the resolver's record for the shape its verdict requires."""
        if not isinstance(data, Mapping):
            raise ResolutionError(f"Trajectory resolver returned {type(data).__name__}, expected a mapping")
        if "impact" not in data:
            raise ResolutionError("Trajectory resolver result has no 'impact' verdict")

        impact = bool(data["impact"])
        required = ["velocity_kms"]
        required += ["lat", "lng", "impact_angle_deg"] if impact else ["miss_distance_km"]
        values = {}
        for key in required:
            value = safe_float(data.get(key), None)
            if value is None:
                raise ResolutionError(f"Trajectory resolver result is missing '{key}'")
            values[key] = value

        return cls(
            impact=impact,
            azimuth_deg=safe_float(data.get("azimuth_deg"), 0.0),
            encounter_time=data.get("encounter_time"),
            earth_position_km=data.get("earth_position_km"),
            neo_position_km=data.get("neo_position_km"),
            relative_position_km=data.get("relative_position_km"),
            **values,
        )

    def impact_geometry(self) -> ImpactGeometry:
        return ImpactGeometry(
            lat=self.lat,
            lng=self.lng,
            velocity_kms=self.velocity_kms,
            impact_angle_deg=self.impact_angle_deg,
            azimuth_deg=self.azimuth_deg,
        )


# =============================================================================
# ENTRY STATE
# =============================================================================

@dataclass(frozen=True)
class TrackSample:
    height_m: float
    velocity_ms: float
    mass_kg: float
    downrange_m: float


@dataclass(frozen=True)
class Airburst:
    """Terminal state when dynamic pressure exceeded material strength aloft."""
    altitude_m: float
    velocity_ms: float
    mass_kg: float
    downrange_m: float

    @property
    def kinetic_energy_j(self) -> float:
        return kinetic_energy(self.mass_kg, self.velocity_ms)


@dataclass(frozen=True)
class Impact:
    """Terminal state when the body reached the ground."""
    velocity_ms: float
    mass_kg: float
    kinetic_energy_j: float


@dataclass(frozen=True)
class EntryState:
    terminal: Union[Airburst, Impact]
    track: Tuple[TrackSample, ...]

    @property
    def is_airburst(self) -> bool:
        return isinstance(self.terminal, Airburst)


# =============================================================================
# DAMAGE RINGS
# =============================================================================

@dataclass(frozen=True)
class DamageRing:
    label: str
    radius_km: float
    color: str
    kind: str

    def scaled(self, factor: float) -> "DamageRing":
        return replace(self, radius_km=self.radius_km * factor)

    def to_dict(self) -> dict:
        return {"label": self.label, "radius_km": self.radius_km, "color": self.color, "type": self.kind}
