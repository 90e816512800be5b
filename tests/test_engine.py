"""
Tests for the Phase Conjugate Engine.

Covers conjugation, coupling, payload transforms, single-shot teleportation
and the ambient scalar state.
"""

import math

import pytest

from phase_conjugate_engine.core.config_loader import EngineConfig
from phase_conjugate_engine.core.constants import LAMBDA_PHI, SHAPIRO_ADVANCE_MS
from phase_conjugate_engine.core.engine import PhaseConjugateEngine
from phase_conjugate_engine.core.exceptions import InvalidScalarError


class TestConjugate:
    """Test the conjugate transform."""

    def test_negates_coordinates_and_momentum(self, engine):
        vector = engine.embed("observer")
        conj = engine.conjugate(vector)

        assert conj.coordinates == tuple(-c for c in vector.coordinates)
        assert conj.momentum == tuple(-m for m in vector.momentum)
        assert conj.phase == pytest.approx(math.pi - vector.phase)

    def test_double_conjugate_restores_shape(self, engine):
        vector = engine.embed("involution")
        twice = engine.conjugate(engine.conjugate(vector))

        assert twice.coordinates == vector.coordinates
        assert twice.momentum == vector.momentum
        diff = (twice.phase - vector.phase) % (2 * math.pi)
        assert min(diff, 2 * math.pi - diff) == pytest.approx(0.0, abs=1e-12)

    def test_scalars_rederived_from_invariant(self, engine):
        """phi' * lambda' equals LAMBDA_PHI^2 / (phi * lambda)."""
        vector = engine.embed("scalars")
        conj = engine.conjugate(vector)

        assert conj.phi == LAMBDA_PHI / vector.lambda_
        assert conj.lambda_ == LAMBDA_PHI / vector.phi
        assert conj.phi * conj.lambda_ == pytest.approx(
            LAMBDA_PHI ** 2 / (vector.phi * vector.lambda_), rel=1e-9
        )

    def test_timestamp_shifted(self, engine):
        vector = engine.embed("time")
        conj = engine.conjugate(vector)

        assert conj.timestamp == pytest.approx(vector.timestamp - 2 * SHAPIRO_ADVANCE_MS)

    @pytest.mark.parametrize("field", ["phi", "lambda_"])
    @pytest.mark.parametrize("value", [0.0, -1.0, math.inf, math.nan])
    def test_invalid_scalar_raises(self, engine, field, value):
        vector = engine.embed("bad").model_copy(update={field: value})

        with pytest.raises(InvalidScalarError) as exc_info:
            engine.conjugate(vector)
        assert exc_info.value.scalar_name == field.rstrip("_")

    def test_returns_new_vector(self, engine):
        vector = engine.embed("immutable")
        original = vector.coordinates

        engine.conjugate(vector)
        assert vector.coordinates == original


class TestCouple:
    """Test the coupling evaluator."""

    def test_identical_intents(self, engine):
        """Identical intents are fully entangled; fidelity depends only on scalars."""
        coupling = engine.couple("hello", "hello")
        expected_error = abs(0.765 * 0.785 - LAMBDA_PHI) / LAMBDA_PHI

        assert coupling.entanglement == 1.0
        assert coupling.invariant_error == pytest.approx(expected_error)
        assert coupling.fidelity == 1 - coupling.invariant_error

    def test_unclamped_fidelity_with_default_scalars(self, engine):
        """Off-invariant scalars push fidelity far below zero; it is not clamped."""
        coupling = engine.couple("hello", "hello")

        assert coupling.invariant_error > 1
        assert coupling.fidelity < 0

    def test_synced_fidelity_tracks_entanglement(self, synced_engine):
        coupling = synced_engine.couple("observer", "system")

        assert coupling.invariant_error == pytest.approx(0.0, abs=1e-9)
        assert coupling.fidelity == pytest.approx(coupling.entanglement)

    @pytest.mark.parametrize(
        "observer, system",
        [("a", "b"), ("hello", "world"), ("", "x"), ("é", "aa"), (" ~", "teleport_bob")],
    )
    def test_entanglement_bounded(self, engine, observer, system):
        coupling = engine.couple(observer, system)

        assert 0.0 <= coupling.entanglement <= 1.0

    def test_conjugate_is_of_observer(self, engine):
        coupling = engine.couple("observer", "system")

        assert coupling.conjugate.coordinates == tuple(
            -c for c in coupling.observer.coordinates
        )


class TestApplyTransform:
    """Test payload transformation."""

    def test_number_scaled_by_cos_phase(self, engine):
        conj = engine.conjugate(engine.embed("number"))

        assert engine.apply_transform(42, conj) == 42 * math.cos(conj.phase)
        assert engine.apply_transform(-1.5, conj) == -1.5 * math.cos(conj.phase)

    def test_string_shifted_and_clamped(self, engine):
        """The empty-intent vector has every coordinate at -1, its conjugate at +1."""
        vector = engine.embed("")
        conj = engine.conjugate(vector)

        assert engine.apply_transform("A~", conj) == "K~"
        assert engine.apply_transform("a ", vector) == "W "

    def test_string_stays_printable(self, engine):
        conj = engine.conjugate(engine.embed("printable"))
        result = engine.apply_transform("Hello, \x01\x7f world! é", conj)

        assert len(result) == len("Hello, \x01\x7f world! é")
        assert all(32 <= ord(ch) <= 126 for ch in result)

    def test_dict_recurses(self, engine):
        conj = engine.conjugate(engine.embed("dict"))
        payload = {"n": 2, "nested": {"m": 3.0, "flag": True}, "items": [1, 2]}

        result = engine.apply_transform(payload, conj)

        assert set(result) == {"n", "nested", "items"}
        assert result["n"] == 2 * math.cos(conj.phase)
        assert result["nested"]["m"] == 3.0 * math.cos(conj.phase)
        assert result["nested"]["flag"] is True
        assert result["items"] == [1, 2]

    def test_oversized_int_saturates(self, engine):
        """Ints beyond float range become signed infinities instead of raising."""
        conj = engine.conjugate(engine.embed("number"))
        scale = math.cos(conj.phase)

        assert engine.apply_transform(10**400, conj) == math.inf * scale
        assert engine.apply_transform(-(10**400), conj) == -math.inf * scale

        result = engine.apply_transform({"n": 10**400, "inner": {"m": -(10**400)}}, conj)
        assert result["n"] == math.inf * scale
        assert result["inner"]["m"] == -math.inf * scale

    @pytest.mark.parametrize("payload", [None, True, False, [1, 2, 3], (1, "a")])
    def test_passthrough(self, engine, payload):
        conj = engine.conjugate(engine.embed("passthrough"))

        assert engine.apply_transform(payload, conj) == payload


class TestTeleport:
    """Test single-shot teleportation over a coupling."""

    def test_below_threshold_fails(self, engine):
        coupling = engine.couple("hello", "hello")
        result = engine.teleport(coupling, 42)

        assert not result.success
        assert result.teleported_state is None
        assert result.fidelity == coupling.fidelity
        assert result.residual_entanglement == coupling.entanglement * 0.5

    def test_above_threshold_succeeds(self, synced_engine):
        coupling = synced_engine.couple("hello", "hello")
        result = synced_engine.teleport(coupling, 42)

        assert result.success
        assert result.teleported_state == 42 * math.cos(coupling.conjugate.phase)
        assert result.residual_entanglement == pytest.approx(
            coupling.entanglement * (1 - coupling.fidelity * 0.3)
        )

    def test_custom_threshold(self, synced_engine):
        coupling = synced_engine.couple("hello", "hello")

        assert not synced_engine.teleport(coupling, 1, min_fidelity=1.1).success


class TestScalarState:
    """Test ambient scalar updates and coherence reporting."""

    def test_defaults(self, engine):
        state = engine.get_state()

        assert state.phi == 0.765
        assert state.lambda_ == 0.785
        assert state.lambda_phi == pytest.approx(0.765 * 0.785)
        assert state.manifold_dimensions == 11
        assert state.coherence == "DECOHERENT"

    def test_rescales_when_off_invariant(self, engine):
        engine.update_scalars(0.765, 0.785)
        state = engine.get_state()

        assert state.lambda_phi == pytest.approx(LAMBDA_PHI, rel=1e-12)
        assert state.phi / state.lambda_ == pytest.approx(0.765 / 0.785)
        assert state.coherence == "STABLE"
        assert state.is_stable

    def test_stores_unchanged_within_tolerance(self, engine):
        engine.update_scalars(LAMBDA_PHI * 1.005, 1.0)

        assert engine.phi == LAMBDA_PHI * 1.005
        assert engine.lambda_ == 1.0
        assert engine.get_state().coherence == "STABLE"

    def test_drifting(self, fixed_clock):
        engine = PhaseConjugateEngine(
            EngineConfig(initial_phi=LAMBDA_PHI * 1.03, initial_lambda=1.0),
            clock=fixed_clock,
        )

        assert engine.get_state().coherence == "DRIFTING"

    def test_embedded_vectors_carry_new_scalars(self, engine):
        engine.update_scalars(LAMBDA_PHI, 1.0)
        vector = engine.embed("after update")

        assert vector.phi == LAMBDA_PHI
        assert vector.lambda_ == 1.0

    @pytest.mark.parametrize(
        "phi, lambda_",
        [(0.0, 1.0), (1.0, 0.0), (-1.0, 1.0), (1.0, math.nan), (math.inf, 1.0)],
    )
    def test_invalid_update_raises(self, engine, phi, lambda_):
        with pytest.raises(InvalidScalarError):
            engine.update_scalars(phi, lambda_)
        assert engine.phi == 0.765

    def test_serialises_lambda_alias(self, engine):
        dumped = engine.get_state().model_dump(by_alias=True)

        assert dumped["lambda"] == 0.785


class TestDescriptiveRecords:
    """Test the fixed ideal space and task list."""

    def test_ideal_space(self, engine):
        space = engine.conceive_ideal_space()

        assert space.peace_metric == 0.95
        assert space.abundance == 1.0
        assert len(space.tools) == 17
        assert len(space.constructs) == 11
        assert "measurement_as_interaction" in space.constructs

    def test_tasks_are_copies(self, engine):
        tasks = engine.most_fulfilling_tasks()
        tasks.clear()

        assert len(engine.most_fulfilling_tasks()) == 12
