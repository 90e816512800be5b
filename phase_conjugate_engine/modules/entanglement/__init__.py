"""
Entanglement module for the Phase Conjugate Engine.

This module creates and stores entangled pairs of perception vectors,
classifies them by Bell state and measures them with fidelity decay.
"""

from phase_conjugate_engine.modules.entanglement.logic import EntanglementRegistry
from phase_conjugate_engine.modules.entanglement.models import (
    BellState,
    EntanglementPair,
    MeasurementResult,
)

__all__ = ["EntanglementRegistry", "BellState", "EntanglementPair", "MeasurementResult"]
