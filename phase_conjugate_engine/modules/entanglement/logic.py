"""
Entanglement Registry: creation, classification and measurement of pairs.

The registry is the only owner of entangled pairs. Callers receive copies;
the stored pairs are mutated only by ``measure``.
"""

import logging
import math
import threading
import uuid
from typing import Literal

from phase_conjugate_engine.core.config_loader import EntanglementConfig
from phase_conjugate_engine.core.engine import PhaseConjugateEngine
from phase_conjugate_engine.modules.entanglement.models import (
    BellState,
    EntanglementPair,
    MeasurementResult,
)

logger = logging.getLogger(__name__)

Side = Literal["alice", "bob"]


class EntanglementRegistry:
    """Registry of entangled perception-vector pairs.

    Pairs are embedded through the engine, so they carry the engine's
    ambient scalars at creation time. Pairs whose fidelity has fallen to
    the active threshold or below drop out of ``get_active_pairs`` but stay
    addressable by id for the lifetime of the registry.

    Example:
        registry = EntanglementRegistry(engine)
        pair = registry.create_pair("x", "y")
        result = registry.measure(pair.id, "alice")
    """

    def __init__(
        self,
        engine: PhaseConjugateEngine,
        config: EntanglementConfig | None = None,
    ) -> None:
        """Initialize an empty registry.

        Args:
            engine: Engine used to embed pair intents.
            config: Registry configuration. Defaults to EntanglementConfig().
        """
        self.engine = engine
        self.config = config or EntanglementConfig()
        self._pairs: dict[str, EntanglementPair] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pairs)

    def __contains__(self, pair_id: object) -> bool:
        with self._lock:
            return pair_id in self._pairs

    def _generate_id(self) -> str:
        """Generate a pair id from the clock and a random suffix."""
        while True:
            pair_id = (
                f"EPR-{int(self.engine.embedder.now_ms())}-{uuid.uuid4().hex[:6]}"
            )
            if pair_id not in self._pairs:
                return pair_id

    def create_pair(self, alice_intent: str, bob_intent: str) -> EntanglementPair:
        """Create, classify and store an entangled pair.

        Args:
            alice_intent: Intent embedded as the alice side.
            bob_intent: Intent embedded as the bob side.

        Returns:
            A copy of the stored pair.
        """
        alice = self.engine.embed(alice_intent)
        bob = self.engine.embed(bob_intent)

        phase_diff = alice.phase - bob.phase
        bell_state = BellState.from_phase_difference(phase_diff)
        fidelity = math.cos(phase_diff / 2) ** 2

        with self._lock:
            pair = EntanglementPair(
                id=self._generate_id(),
                alice=alice,
                bob=bob,
                bell_state=bell_state,
                fidelity=fidelity,
                created_at=self.engine.embedder.now_ms(),
            )
            self._pairs[pair.id] = pair

        logger.info(
            "Created pair %s (%s, fidelity=%.4f)",
            pair.id,
            bell_state.value,
            fidelity,
        )
        return pair.model_copy(deep=True)

    def get(self, pair_id: str) -> EntanglementPair | None:
        """Return a copy of a stored pair, or None if the id is unknown."""
        with self._lock:
            pair = self._pairs.get(pair_id)
            return pair.model_copy(deep=True) if pair is not None else None

    def measure(self, pair_id: str, side: Side) -> MeasurementResult | None:
        """Measure one side of a pair, collapsing the other.

        The measured value is cos of the measured side's phase. The
        collapsed value follows the pair's Bell state:

        - PHI_PLUS: the measured value
        - PHI_MINUS: minus the measured value
        - PSI_PLUS: sin of the other side's phase
        - PSI_MINUS: minus sin of the other side's phase

        Every measurement multiplies the stored fidelity by the
        measurement decay.

        Args:
            pair_id: Id of the pair to measure.
            side: "alice" or "bob".

        Returns:
            MeasurementResult, or None if the id is unknown.

        Raises:
            ValueError: If side is not "alice" or "bob".
        """
        if side not in ("alice", "bob"):
            raise ValueError(f"Unknown side: {side!r} (expected 'alice' or 'bob')")

        with self._lock:
            pair = self._pairs.get(pair_id)
            if pair is None:
                logger.debug("Measurement of unknown pair: %s", pair_id)
                return None

            measured = pair.alice if side == "alice" else pair.bob
            other = pair.bob if side == "alice" else pair.alice

            measured_value = math.cos(measured.phase)

            if pair.bell_state is BellState.PHI_PLUS:
                collapsed_value = measured_value
            elif pair.bell_state is BellState.PHI_MINUS:
                collapsed_value = -measured_value
            elif pair.bell_state is BellState.PSI_PLUS:
                collapsed_value = math.sin(other.phase)
            else:
                collapsed_value = -math.sin(other.phase)

            was_active = pair.fidelity > self.config.active_threshold
            remaining = pair.fidelity * self.config.measurement_decay
            self._pairs[pair_id] = pair.model_copy(update={"fidelity": remaining})

        logger.debug(
            "Measured %s of %s: measured=%.6f collapsed=%.6f fidelity=%.6f",
            side,
            pair_id,
            measured_value,
            collapsed_value,
            remaining,
        )
        if was_active and remaining <= self.config.active_threshold:
            logger.warning("Pair %s is no longer active (fidelity=%.4f)", pair_id, remaining)

        return MeasurementResult(
            measured_value=measured_value,
            collapsed_value=collapsed_value,
            remaining_fidelity=remaining,
        )

    def clear(self) -> int:
        """Drop every stored pair and return how many were removed."""
        with self._lock:
            removed = len(self._pairs)
            self._pairs.clear()

        logger.info("Cleared %d pairs", removed)
        return removed

    def get_active_pairs(self) -> list[EntanglementPair]:
        """Return copies of pairs above the active threshold, in creation order."""
        with self._lock:
            return [
                pair.model_copy(deep=True)
                for pair in self._pairs.values()
                if pair.fidelity > self.config.active_threshold
            ]
