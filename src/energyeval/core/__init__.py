"""
Core module.

Fundamental data structures of the energy engine:
- ParticleSystem: Read-only particle configuration (positions, cell, pbc)
- EnergyConfig / EnergyReport: Configuration and result schemas
- Error taxonomy: ConfigurationMismatch, UnsupportedGeometry, BackendFailure
"""

from .errors import (
    BackendFailure,
    ConfigurationMismatch,
    EnergyEvalError,
    UnsupportedGeometry,
)
from .schemas import EnergyConfig, EnergyReport
from .system import ParticleSystem, as_system

__all__ = [
    # Classes
    "ParticleSystem",
    "EnergyConfig",
    "EnergyReport",
    # Functions
    "as_system",
    # Errors
    "EnergyEvalError",
    "ConfigurationMismatch",
    "UnsupportedGeometry",
    "BackendFailure",
]
