"""Shared fixtures for the Phase Conjugate Engine tests."""

import pytest

from phase_conjugate_engine.core.engine import PhaseConjugateEngine
from phase_conjugate_engine.modules.entanglement import EntanglementRegistry
from phase_conjugate_engine.modules.teleportation import TeleportationProtocol

FIXED_EPOCH_SECONDS = 1_700_000_000.0


@pytest.fixture
def fixed_clock():
    """Wall clock frozen at FIXED_EPOCH_SECONDS."""
    return lambda: FIXED_EPOCH_SECONDS


@pytest.fixture
def engine(fixed_clock):
    """Engine with the default ambient scalars (not on the invariant)."""
    return PhaseConjugateEngine(clock=fixed_clock)


@pytest.fixture
def synced_engine(fixed_clock):
    """Engine whose ambient scalars have been rescaled onto the invariant."""
    engine = PhaseConjugateEngine(clock=fixed_clock)
    engine.synchronize()
    return engine


@pytest.fixture
def registry(engine):
    return EntanglementRegistry(engine)


@pytest.fixture
def protocol(synced_engine):
    return TeleportationProtocol(synced_engine)
