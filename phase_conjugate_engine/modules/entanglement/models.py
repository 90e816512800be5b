"""
Pydantic models for the Entanglement module.

These models define the data contracts for entangled pairs and
measurement results.
"""

import math
from enum import Enum

from pydantic import BaseModel, Field

from phase_conjugate_engine.core.interfaces import PerceptionVector


class BellState(str, Enum):
    """Categorical label of an entangled pair.

    Assigned from the creation-time phase difference normalised to
    [0, 2pi), in bands of width pi/2.
    """

    PHI_PLUS = "PHI_PLUS"
    PHI_MINUS = "PHI_MINUS"
    PSI_PLUS = "PSI_PLUS"
    PSI_MINUS = "PSI_MINUS"

    @property
    def is_minus(self) -> bool:
        """Whether the label is one of the MINUS states."""
        return "MINUS" in self.value

    @classmethod
    def from_phase_difference(cls, phase_diff: float) -> "BellState":
        """Classify a phase difference.

        Args:
            phase_diff: Phase difference in radians, any range.

        Returns:
            The BellState of the band containing the normalised difference.
        """
        normalized = phase_diff % (2 * math.pi)
        # Tiny negative inputs round up to exactly 2*pi
        if normalized >= 2 * math.pi:
            normalized = 0.0

        if normalized < math.pi / 2:
            return cls.PHI_PLUS
        if normalized < math.pi:
            return cls.PHI_MINUS
        if normalized < 3 * math.pi / 2:
            return cls.PSI_PLUS
        return cls.PSI_MINUS


class EntanglementPair(BaseModel):
    """A pair of perception vectors held by the registry.

    Attributes:
        id: Registry key, ``EPR-<epoch-ms>-<suffix>``.
        alice: First side of the pair.
        bob: Second side of the pair.
        bell_state: Label chosen at creation.
        fidelity: Pair quality; only ever decreases.
        created_at: Creation time in epoch milliseconds.
    """

    id: str
    alice: PerceptionVector
    bob: PerceptionVector
    bell_state: BellState
    fidelity: float = Field(..., ge=0.0, le=1.0)
    created_at: float


class MeasurementResult(BaseModel):
    """Result of measuring one side of a pair.

    Attributes:
        measured_value: cos of the measured side's phase.
        collapsed_value: Correlated value of the other side.
        remaining_fidelity: Pair fidelity after the measurement.
    """

    measured_value: float
    collapsed_value: float
    remaining_fidelity: float
