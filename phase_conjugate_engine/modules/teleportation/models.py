"""
Pydantic models for the Teleportation module.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from phase_conjugate_engine.modules.entanglement.models import BellState

Bit = Literal[0, 1]


class BellMeasurement(BaseModel):
    """Two classical correction bits derived from a coupling.

    Attributes:
        bit1: 1 if cos of the phase difference is positive.
        bit2: 1 if sin of the phase difference is positive.
        outcome: The bits as a two-character label, "00" to "11".
    """

    bit1: Bit
    bit2: Bit
    outcome: str = ""

    def model_post_init(self, __context) -> None:
        """Derive the outcome label from the bits."""
        if not self.outcome:
            self.outcome = f"{self.bit1}{self.bit2}"

    @property
    def bits(self) -> tuple[int, int]:
        return (self.bit1, self.bit2)


class TransferResult(BaseModel):
    """Outcome of a transfer protocol run.

    Callers branch on ``success``; a failed run is a result, not an error.

    Attributes:
        success: Whether the destination coupling met the threshold.
        transferred_payload: Corrected and transformed payload, None on failure.
        correction_bits: The two classical correction bits.
        fidelity: Combined fidelity on success, raw destination coupling
            fidelity on failure.
        protocol_name: Descriptive protocol label.
        bell_outcome: Correction bits as a label.
        bell_state: Bell state of the helper pair.
        helper_pair_id: Id of the helper pair in the protocol's registry.
    """

    success: bool
    transferred_payload: Any = None
    correction_bits: tuple[Bit, Bit]
    fidelity: float
    protocol_name: str
    bell_outcome: str = Field(default="")
    bell_state: BellState
    helper_pair_id: str
