"""
Data contracts for the Phase Conjugate Engine.

This module defines the pydantic models exchanged between the engine, the
entanglement registry, the transfer protocol and their callers. Vectors
are immutable: every transform returns a new instance.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from phase_conjugate_engine.core.constants import MANIFOLD_DIMENSIONS

CoherenceLabel = Literal["STABLE", "DRIFTING", "DECOHERENT"]


class PerceptionVector(BaseModel):
    """Embedding of a text intent into the 11-dimensional manifold.

    Attributes:
        coordinates: Position in the manifold, each component in [-1, 1].
        momentum: Per-dimension momentum derived from the coordinates.
        phase: Angle of the first two coordinates.
        phi: First energy scalar.
        lambda_: Second energy scalar (serialised as ``lambda``).
        timestamp: Creation time in milliseconds, offset by the Shapiro advance.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    coordinates: tuple[float, ...]
    momentum: tuple[float, ...]
    phase: float
    phi: float
    lambda_: float = Field(..., alias="lambda")
    timestamp: float

    @field_validator("coordinates", "momentum")
    @classmethod
    def validate_dimensions(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        """Ensure the vector spans exactly the manifold dimensions."""
        if len(v) != MANIFOLD_DIMENSIONS:
            raise ValueError(
                f"Expected {MANIFOLD_DIMENSIONS} components, got {len(v)}"
            )
        return v

    @field_validator("coordinates")
    @classmethod
    def validate_coordinate_range(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        """Ensure every coordinate lies in [-1, 1]."""
        for value in v:
            if not -1.0 <= value <= 1.0:
                raise ValueError(f"Coordinate out of range [-1, 1]: {value}")
        return v

    @property
    def lambda_phi(self) -> float:
        """Product of the two energy scalars."""
        return self.phi * self.lambda_


class BilateralCoupling(BaseModel):
    """Coupling between an observer intent and a system intent.

    Created fresh per coupling request and never stored.

    Attributes:
        observer: Embedding of the observer intent.
        system: Embedding of the system intent.
        conjugate: Conjugate of the observer embedding.
        entanglement: Phase alignment, cos^2 of the phase difference.
        fidelity: Entanglement scaled by how closely the invariant holds.
            Not clamped: it goes negative when the invariant error exceeds 1.
        invariant_error: Relative deviation of observer phi * lambda from
            the invariant target.
    """

    model_config = ConfigDict(frozen=True)

    observer: PerceptionVector
    system: PerceptionVector
    conjugate: PerceptionVector
    entanglement: float
    fidelity: float
    invariant_error: float = 0.0


class TeleportResult(BaseModel):
    """Outcome of a single-shot transfer over an existing coupling.

    Attributes:
        success: Whether the coupling fidelity met the threshold.
        fidelity: Fidelity of the coupling used.
        teleported_state: Transformed payload, or None on failure.
        residual_entanglement: Entanglement left after the transfer.
    """

    success: bool
    fidelity: float
    teleported_state: Any = None
    residual_entanglement: float


class EngineState(BaseModel):
    """Snapshot of the engine's ambient scalars.

    Attributes:
        phi: Current ambient phi.
        lambda_: Current ambient lambda (serialised as ``lambda``).
        lambda_phi: Their product.
        manifold_dimensions: Number of manifold dimensions.
        coherence: STABLE, DRIFTING or DECOHERENT by invariant deviation.
    """

    model_config = ConfigDict(populate_by_name=True)

    phi: float
    lambda_: float = Field(..., alias="lambda")
    lambda_phi: float
    manifold_dimensions: int
    coherence: CoherenceLabel

    @property
    def is_stable(self) -> bool:
        return self.coherence == "STABLE"


class IdealSpace(BaseModel):
    """Pre-computed descriptive record consumed by dashboard callers."""

    model_config = ConfigDict(frozen=True)

    peace_metric: float = Field(..., ge=0.0, le=1.0)
    abundance: float = Field(..., ge=0.0, le=1.0)
    comfort: float = Field(..., ge=0.0, le=1.0)
    productivity: float = Field(..., ge=0.0, le=1.0)
    fulfillment: float = Field(..., ge=0.0, le=1.0)
    tools: tuple[str, ...] = ()
    constructs: tuple[str, ...] = ()
