"""
NEO Impact Simulation core.

Atmospheric entry, airburst/ground-impact effects (blast, crater, thermal,
seismic, tsunami, ejecta, atmospheric opacity), mitigation and damage
assessment for near-Earth object encounters. The scaling laws are simplified
and tuned for interactive exploration, not for scientific publication.
"""

from neo_impact.engine import ImpactEngine, run_simulation
from neo_impact.errors import ComputationError, ResolutionError, SimulationError, ValidationError
from neo_impact.models import SimulationParameters

__all__ = [
    "ImpactEngine",
    "run_simulation",
    "SimulationParameters",
    "SimulationError",
    "ValidationError",
    "ResolutionError",
    "ComputationError",
]

__version__ = "2.0.0"
