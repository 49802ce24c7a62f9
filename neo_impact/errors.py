"""Error taxonomy for the simulation core."""


class SimulationError(Exception):
    """Base class for every error the simulation reports."""


class ValidationError(SimulationError, ValueError):
    """Raised when a parameter is missing, malformed or outside its declared range."""


class ResolutionError(SimulationError):
    """Raised when the trajectory resolver fails or returns an unusable record."""


class ComputationError(SimulationError):
    """Raised for unexpected failures during integration or effect composition."""
