"""
Core module for the Phase Conjugate Engine.

This module contains the infrastructure layer:
- constants: The fixed constant table
- interfaces: Pydantic data contracts
- config_loader: Pydantic models for configuration
- manifold: Intent embedding
- engine: Conjugation, coupling and payload transforms
- orchestrator: Session construction
- exceptions: Custom exceptions
"""

from phase_conjugate_engine.core.config_loader import Settings, load_settings
from phase_conjugate_engine.core.constants import LAMBDA_PHI, NC_PHYSICS
from phase_conjugate_engine.core.engine import PhaseConjugateEngine
from phase_conjugate_engine.core.exceptions import (
    ConfigurationError,
    InvalidScalarError,
    PhaseEngineError,
)
from phase_conjugate_engine.core.interfaces import (
    BilateralCoupling,
    EngineState,
    IdealSpace,
    PerceptionVector,
    TeleportResult,
)
from phase_conjugate_engine.core.manifold import ManifoldEmbedder

__all__ = [
    "Settings",
    "load_settings",
    "LAMBDA_PHI",
    "NC_PHYSICS",
    "PhaseConjugateEngine",
    "ManifoldEmbedder",
    "BilateralCoupling",
    "EngineState",
    "IdealSpace",
    "PerceptionVector",
    "TeleportResult",
    "PhaseEngineError",
    "ConfigurationError",
    "InvalidScalarError",
]
