"""
Orchestrator for the Phase Conjugate Engine.

Wires the engine, the entanglement registry and the transfer protocol
together from one Settings object, and runs demonstration sessions over
the assembled space.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from phase_conjugate_engine.core.config_loader import Settings
from phase_conjugate_engine.core.engine import PhaseConjugateEngine
from phase_conjugate_engine.core.interfaces import IdealSpace
from phase_conjugate_engine.modules.entanglement import EntanglementRegistry
from phase_conjugate_engine.modules.teleportation import TeleportationProtocol

logger = logging.getLogger(__name__)


@dataclass
class SovereignSpace:
    """A ready-made engine session.

    Attributes:
        engine: The session's engine.
        entanglement: Registry for caller-created pairs.
        teleportation: Transfer protocol with its own helper-pair registry.
        ideal_space: The fixed ideal-space description.
        fulfillment: The fixed list of most fulfilling tasks.
    """

    engine: PhaseConjugateEngine
    entanglement: EntanglementRegistry
    teleportation: TeleportationProtocol
    ideal_space: IdealSpace
    fulfillment: list[str] = field(default_factory=list)

    def run_session(
        self,
        source_intent: str,
        dest_intent: str,
        payload: Any,
    ) -> dict[str, Any]:
        """Exercise every engine operation once and summarise the results.

        Args:
            source_intent: Source intent for coupling, pair and transfer.
            dest_intent: Destination intent for coupling, pair and transfer.
            payload: JSON-like payload to transfer.

        Returns:
            JSON-serialisable summary of state, coupling, pair, measurement
            and transfer.
        """
        logger.info("Running session %r -> %r", source_intent, dest_intent)

        coupling = self.engine.couple(source_intent, dest_intent)
        pair = self.entanglement.create_pair(source_intent, dest_intent)
        measurement = self.entanglement.measure(pair.id, "alice")
        transfer = self.teleportation.transfer(source_intent, dest_intent, payload)

        return {
            "state": self.engine.get_state().model_dump(mode="json", by_alias=True),
            "coupling": {
                "entanglement": coupling.entanglement,
                "fidelity": coupling.fidelity,
                "invariant_error": coupling.invariant_error,
                "observer_phase": coupling.observer.phase,
                "system_phase": coupling.system.phase,
            },
            "pair": {
                "id": pair.id,
                "bell_state": pair.bell_state.value,
                "fidelity": pair.fidelity,
            },
            "measurement": measurement.model_dump(mode="json") if measurement else None,
            "transfer": transfer.model_dump(mode="json"),
            "active_pairs": len(self.entanglement.get_active_pairs()),
        }


def construct_sovereign_space(settings: Settings | None = None) -> SovereignSpace:
    """Build an engine session from settings.

    Args:
        settings: Application settings. Defaults to Settings().

    Returns:
        A SovereignSpace whose components share one engine.
    """
    settings = settings or Settings()

    engine = PhaseConjugateEngine(settings.engine)
    entanglement = EntanglementRegistry(engine, settings.entanglement)
    teleportation = TeleportationProtocol(
        engine,
        settings.teleportation,
        entanglement_config=settings.entanglement,
    )

    logger.debug("Constructed sovereign space (%s)", engine.get_state().coherence)

    return SovereignSpace(
        engine=engine,
        entanglement=entanglement,
        teleportation=teleportation,
        ideal_space=engine.conceive_ideal_space(),
        fulfillment=engine.most_fulfilling_tasks(),
    )
