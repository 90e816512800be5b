"""
Teleportation: the two-step transfer protocol.

A run creates a helper pair, derives two correction bits from the coupling
between the source and the helper's alice side, applies sign corrections
to the payload, then transfers it over the coupling between the helper's
bob side and the destination.
"""

import asyncio
import logging
import math
from typing import Any

from phase_conjugate_engine.core.config_loader import (
    EntanglementConfig,
    TeleportationConfig,
)
from phase_conjugate_engine.core.engine import PhaseConjugateEngine
from phase_conjugate_engine.core.interfaces import BilateralCoupling
from phase_conjugate_engine.modules.entanglement import BellState, EntanglementRegistry
from phase_conjugate_engine.modules.teleportation.models import (
    BellMeasurement,
    TransferResult,
)

logger = logging.getLogger(__name__)


class TeleportationProtocol:
    """Runs the transfer protocol against one engine.

    Helper pairs are stored in the protocol's own registry unless one is
    injected, so they never show up among a caller's pairs.
    Every transfer stores one helper pair and nothing evicts it, so a
    long-lived protocol grows its registry by one pair per call. Call
    ``clear_helpers`` to drop them.

    Attributes:
        engine: The engine used for couplings and payload transforms.
        registry: Registry holding the helper pairs.
        config: Protocol configuration.
    """

    def __init__(
        self,
        engine: PhaseConjugateEngine,
        config: TeleportationConfig | None = None,
        registry: EntanglementRegistry | None = None,
        entanglement_config: EntanglementConfig | None = None,
    ) -> None:
        """Initialize the protocol.

        Args:
            engine: Engine used for embedding and coupling.
            config: Protocol configuration. Defaults to TeleportationConfig().
            registry: Optional registry for helper pairs.
            entanglement_config: Configuration for the private registry
                created when no registry is given.
        """
        self.engine = engine
        self.config = config or TeleportationConfig()
        if registry is None:
            registry = EntanglementRegistry(engine, entanglement_config)
        self.registry = registry

    def clear_helpers(self) -> int:
        """Drop all helper pairs from the registry and return the count."""
        return self.registry.clear()

    @staticmethod
    def perform_bell_measurement(coupling: BilateralCoupling) -> BellMeasurement:
        """Derive the two correction bits from a coupling's phase difference."""
        phase_diff = coupling.observer.phase - coupling.system.phase

        return BellMeasurement(
            bit1=1 if math.cos(phase_diff) > 0 else 0,
            bit2=1 if math.sin(phase_diff) > 0 else 0,
        )

    def apply_correction(
        self,
        payload: Any,
        bits: tuple[int, int],
        bell_state: BellState,
    ) -> Any:
        """Apply the sign corrections selected by the bits.

        Numbers are negated when bit1 is set, and negated again when bit2
        is set and the helper pair is in a MINUS state. Dicts are corrected
        value by value; other values pass through.

        Args:
            payload: JSON-like value.
            bits: The two correction bits.
            bell_state: Bell state of the helper pair.

        Returns:
            The corrected value.
        """
        bit1, bit2 = bits

        if isinstance(payload, (int, float)) and not isinstance(payload, bool):
            corrected = payload
            if bit1 == 1:
                corrected = -corrected
            if bit2 == 1 and bell_state.is_minus:
                corrected = -corrected
            return corrected

        if isinstance(payload, dict):
            return {
                key: self.apply_correction(value, bits, bell_state)
                for key, value in payload.items()
            }

        return payload

    def transfer(
        self,
        source_intent: str,
        dest_intent: str,
        payload: Any,
    ) -> TransferResult:
        """Transfer a payload from a source intent to a destination intent.

        Args:
            source_intent: Intent coupled with the helper's alice side.
            dest_intent: Intent coupled with the helper's bob side.
            payload: JSON-like value to transfer.

        Returns:
            TransferResult. When the destination coupling's fidelity is
            below the threshold the result has ``success=False``, no
            payload and the raw destination fidelity.
        """
        pair = self.registry.create_pair(
            self.config.helper_alice, self.config.helper_bob
        )

        coupling = self.engine.couple(source_intent, self.config.helper_alice)
        measurement = self.perform_bell_measurement(coupling)

        corrected = self.apply_correction(payload, measurement.bits, pair.bell_state)

        dest_coupling = self.engine.couple(self.config.helper_bob, dest_intent)
        result = self.engine.teleport(
            dest_coupling, corrected, min_fidelity=self.config.min_fidelity
        )

        if not result.success:
            logger.warning(
                "Transfer %r -> %r failed: fidelity %.6g below %.3f",
                source_intent[:30],
                dest_intent[:30],
                result.fidelity,
                self.config.min_fidelity,
            )
            return TransferResult(
                success=False,
                transferred_payload=None,
                correction_bits=measurement.bits,
                fidelity=result.fidelity,
                protocol_name=self.config.protocol_name,
                bell_outcome=measurement.outcome,
                bell_state=pair.bell_state,
                helper_pair_id=pair.id,
            )

        fidelity = result.fidelity * pair.fidelity
        logger.info(
            "Transfer %r -> %r succeeded (bits=%s, fidelity=%.6f)",
            source_intent[:30],
            dest_intent[:30],
            measurement.outcome,
            fidelity,
        )

        return TransferResult(
            success=True,
            transferred_payload=result.teleported_state,
            correction_bits=measurement.bits,
            fidelity=fidelity,
            protocol_name=self.config.protocol_name,
            bell_outcome=measurement.outcome,
            bell_state=pair.bell_state,
            helper_pair_id=pair.id,
        )

    async def transfer_async(
        self,
        source_intent: str,
        dest_intent: str,
        payload: Any,
    ) -> TransferResult:
        """Awaitable transfer, waiting the configured simulated latency first."""
        if self.config.simulated_latency_ms > 0:
            await asyncio.sleep(self.config.simulated_latency_ms / 1000.0)
        return self.transfer(source_intent, dest_intent, payload)
