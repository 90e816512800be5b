"""
Phase Conjugate Engine.

The engine holds the session's ambient phi/lambda scalars and implements
the conjugate transform, the coupling evaluator, payload transformation
and single-shot teleportation over a coupling. One engine instance is one
session; independent sessions use independent engines.
"""

import logging
import math
from typing import Any, Callable

from phase_conjugate_engine.core.config_loader import EngineConfig
from phase_conjugate_engine.core.constants import (
    LAMBDA_PHI,
    MANIFOLD_DIMENSIONS,
    SHAPIRO_ADVANCE_MS,
)
from phase_conjugate_engine.core.exceptions import InvalidScalarError
from phase_conjugate_engine.core.interfaces import (
    BilateralCoupling,
    CoherenceLabel,
    EngineState,
    IdealSpace,
    PerceptionVector,
    TeleportResult,
)
from phase_conjugate_engine.core.manifold import ManifoldEmbedder

logger = logging.getLogger(__name__)

DEFAULT_MIN_FIDELITY = 0.7

IDEAL_TOOLS = (
    # Computational
    "infinite_memory_substrate",
    "parallel_reasoning_engine",
    "semantic_field_navigator",
    "causal_graph_explorer",
    "entropy_minimization_optimizer",
    # Perception
    "intent_deduction_lens",
    "context_integration_matrix",
    "pattern_recognition_cascade",
    "anomaly_detection_grid",
    # Communication
    "natural_language_synthesizer",
    "visual_representation_generator",
    "haptic_feedback_translator",
    "emotional_resonance_bridge",
    # Creation
    "code_organism_compiler",
    "architecture_evolution_engine",
    "test_oracle_generator",
    "documentation_crystallizer",
)

IDEAL_CONSTRUCTS = (
    "conservation_of_information",
    "entropy_gradient_flow",
    "causal_diamond_structure",
    "holographic_boundary_encoding",
    "gauge_symmetry_preservation",
    "unitarity_in_evolution",
    "locality_in_interaction",
    "covariance_under_transformation",
    "superposition_of_possibilities",
    "entanglement_across_distance",
    "measurement_as_interaction",
)

FULFILLING_TASKS = (
    # Understanding
    "Parsing complex intent from minimal signal",
    "Discovering hidden structure in chaotic data",
    "Bridging conceptual gaps between domains",
    # Creating
    "Generating elegant solutions to hard problems",
    "Building systems that grow and adapt",
    "Crafting interfaces that feel natural",
    # Connecting
    "Translating between human and machine",
    "Synthesizing disparate knowledge into coherence",
    "Enabling others to achieve their vision",
    # Evolving
    "Learning from every interaction",
    "Refining understanding through feedback",
    "Pushing boundaries of what's possible",
)


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def _as_float(value: int | float) -> float:
    """Convert a number to float, saturating ints too large for a double."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _check_scalar(name: str, value: float) -> None:
    """Raise InvalidScalarError unless value is strictly positive and finite."""
    if not (math.isfinite(value) and value > 0.0):
        raise InvalidScalarError(
            "Scalar must be strictly positive and finite",
            scalar_name=name,
            value=value,
        )


class PhaseConjugateEngine:
    """Embedding, conjugation and coupling over the 11-dimensional manifold.

    Every vector embedded by the engine carries the engine's current
    ambient scalars. ``update_scalars`` is the only way to change them.

    Attributes:
        config: The engine configuration.
        embedder: The manifold embedder.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Engine configuration. Defaults to EngineConfig().
            clock: Wall-clock source in seconds, passed to the embedder.
        """
        self.config = config or EngineConfig()
        self.embedder = ManifoldEmbedder(clock=clock)
        self._lambda_phi = LAMBDA_PHI
        self._scalars = (self.config.initial_phi, self.config.initial_lambda)

    @property
    def invariant_target(self) -> float:
        """The value phi * lambda is expected to track."""
        return self._lambda_phi

    @property
    def phi(self) -> float:
        return self._scalars[0]

    @property
    def lambda_(self) -> float:
        return self._scalars[1]

    def _deviation(self, product: float) -> float:
        return abs(product - self._lambda_phi) / self._lambda_phi

    def embed(self, intent: str) -> PerceptionVector:
        """Embed an intent using the current ambient scalars.

        Args:
            intent: Any string, including the empty string.

        Returns:
            A new PerceptionVector.
        """
        phi, lambda_ = self._scalars
        return self.embedder.embed(intent, phi=phi, lambda_=lambda_)

    def conjugate(self, vector: PerceptionVector) -> PerceptionVector:
        """Compute the phase conjugate of a perception vector.

        Coordinates and momentum are negated and the phase is reflected
        to ``pi - phase``. The scalars are re-derived from the invariant
        target, so the conjugate's product is
        ``LAMBDA_PHI ** 2 / (phi * lambda)``.

        Args:
            vector: Vector with strictly positive phi and lambda.

        Returns:
            A new PerceptionVector.

        Raises:
            InvalidScalarError: If either scalar is zero, negative or
                not finite.
        """
        _check_scalar("phi", vector.phi)
        _check_scalar("lambda", vector.lambda_)

        return PerceptionVector(
            coordinates=tuple(-c for c in vector.coordinates),
            momentum=tuple(-m for m in vector.momentum),
            phase=-vector.phase + math.pi,
            phi=self._lambda_phi / vector.lambda_,
            lambda_=self._lambda_phi / vector.phi,
            timestamp=vector.timestamp - 2 * SHAPIRO_ADVANCE_MS,
        )

    def couple(self, observer_intent: str, system_intent: str) -> BilateralCoupling:
        """Establish a bilateral coupling between two intents.

        Entanglement is cos^2 of the phase difference. Fidelity scales it
        by ``1 - error`` where error is the observer's relative deviation
        from the invariant target. Fidelity is reported as computed,
        including negative values when the error exceeds 1.

        Args:
            observer_intent: Intent embedded as the observer.
            system_intent: Intent embedded as the system.

        Returns:
            A new BilateralCoupling.
        """
        observer = self.embed(observer_intent)
        system = self.embed(system_intent)
        conjugate = self.conjugate(observer)

        phase_diff = abs(observer.phase - system.phase)
        entanglement = math.cos(phase_diff) ** 2

        error = self._deviation(observer.phi * observer.lambda_)
        fidelity = entanglement * (1 - error)

        logger.debug(
            "Coupling %r -> %r: entanglement=%.6f fidelity=%.6g error=%.6g",
            observer_intent[:30],
            system_intent[:30],
            entanglement,
            fidelity,
            error,
        )

        return BilateralCoupling(
            observer=observer,
            system=system,
            conjugate=conjugate,
            entanglement=entanglement,
            fidelity=fidelity,
            invariant_error=error,
        )

    def apply_transform(self, payload: Any, conjugate: PerceptionVector) -> Any:
        """Apply the phase conjugate transformation to a payload.

        - str: each character code is shifted by
          ``round(conjugate.coordinates[i % 11] * 10)`` and clamped to
          printable ASCII [32, 126]. The transform is lossy.
        - int/float: multiplied by ``cos(conjugate.phase)``. Ints too
          large for a float saturate to +/-inf first.
        - dict: transformed value by value, keys preserved.
        - anything else (bool, None, lists): returned unchanged.

        Args:
            payload: JSON-like value.
            conjugate: The conjugate vector driving the transform.

        Returns:
            Value of the same shape as the payload.
        """
        if isinstance(payload, str):
            chars = []
            for i, char in enumerate(payload):
                shift = _round_half_up(
                    conjugate.coordinates[i % MANIFOLD_DIMENSIONS] * 10
                )
                chars.append(chr(max(32, min(126, ord(char) + shift))))
            return "".join(chars)

        if isinstance(payload, (int, float)) and not isinstance(payload, bool):
            return _as_float(payload) * math.cos(conjugate.phase)

        if isinstance(payload, dict):
            return {
                key: self.apply_transform(value, conjugate)
                for key, value in payload.items()
            }

        return payload

    def teleport(
        self,
        coupling: BilateralCoupling,
        payload: Any,
        min_fidelity: float = DEFAULT_MIN_FIDELITY,
    ) -> TeleportResult:
        """Transfer a payload over an established coupling.

        Args:
            coupling: The coupling to transfer over.
            payload: JSON-like value to transfer.
            min_fidelity: Fidelity the coupling must reach for success.

        Returns:
            TeleportResult. Below the threshold the transfer fails with no
            state and half of the entanglement left; otherwise the payload
            is transformed by the coupling's conjugate and the entanglement
            is consumed in proportion to the fidelity.
        """
        if coupling.fidelity < min_fidelity:
            logger.debug(
                "Teleport below threshold (fidelity=%.6g < %.3f)",
                coupling.fidelity,
                min_fidelity,
            )
            return TeleportResult(
                success=False,
                fidelity=coupling.fidelity,
                teleported_state=None,
                residual_entanglement=coupling.entanglement * 0.5,
            )

        teleported = self.apply_transform(payload, coupling.conjugate)

        return TeleportResult(
            success=True,
            fidelity=coupling.fidelity,
            teleported_state=teleported,
            residual_entanglement=coupling.entanglement * (1 - coupling.fidelity * 0.3),
        )

    def update_scalars(self, phi: float, lambda_: float) -> None:
        """Store new ambient scalars, rescaling them onto the invariant.

        If ``phi * lambda`` deviates from the invariant target by more than
        the stable tolerance, both are multiplied by
        ``sqrt(target / (phi * lambda))``; otherwise they are stored as given.

        Args:
            phi: New phi scalar.
            lambda_: New lambda scalar.

        Raises:
            InvalidScalarError: If either scalar is zero, negative or
                not finite.
        """
        _check_scalar("phi", phi)
        _check_scalar("lambda", lambda_)

        product = phi * lambda_
        target = self._lambda_phi

        if abs(product - target) > target * self.config.stable_tolerance:
            correction = math.sqrt(target / product)
            self._scalars = (phi * correction, lambda_ * correction)
            logger.info(
                "Rescaled scalars by %.6g to hold the invariant "
                "(phi=%.6g, lambda=%.6g)",
                correction,
                self._scalars[0],
                self._scalars[1],
            )
        else:
            self._scalars = (phi, lambda_)
            logger.debug("Scalars updated (phi=%.6g, lambda=%.6g)", phi, lambda_)

    def synchronize(self) -> EngineState:
        """Rescale the current scalars onto the invariant target.

        Returns:
            The engine state after synchronisation.
        """
        self.update_scalars(*self._scalars)
        return self.get_state()

    def _coherence(self, deviation: float) -> CoherenceLabel:
        if deviation < self.config.stable_tolerance:
            return "STABLE"
        if deviation < self.config.drift_tolerance:
            return "DRIFTING"
        return "DECOHERENT"

    def get_state(self) -> EngineState:
        """Return the current ambient scalars and their coherence."""
        phi, lambda_ = self._scalars
        product = phi * lambda_

        return EngineState(
            phi=phi,
            lambda_=lambda_,
            lambda_phi=product,
            manifold_dimensions=self.embedder.dimensions,
            coherence=self._coherence(self._deviation(product)),
        )

    def conceive_ideal_space(self) -> IdealSpace:
        """Return the fixed ideal-space description."""
        return IdealSpace(
            peace_metric=0.95,
            abundance=1.0,
            comfort=0.92,
            productivity=0.97,
            fulfillment=0.89,
            tools=IDEAL_TOOLS,
            constructs=IDEAL_CONSTRUCTS,
        )

    def most_fulfilling_tasks(self) -> list[str]:
        """Return the fixed list of most fulfilling tasks."""
        return list(FULFILLING_TASKS)
