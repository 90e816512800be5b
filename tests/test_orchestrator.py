"""
Tests for session construction and the command line entry point.
"""

import json
import math

import pytest

from phase_conjugate_engine import construct_sovereign_space
from phase_conjugate_engine.core.config_loader import Settings
from phase_conjugate_engine.main import main, parse_payload


class TestConstructSovereignSpace:
    """Test the facade."""

    def test_components_share_engine(self):
        space = construct_sovereign_space()

        assert space.entanglement.engine is space.engine
        assert space.teleportation.engine is space.engine
        assert space.teleportation.registry is not space.entanglement

    def test_descriptive_records(self):
        space = construct_sovereign_space()

        assert space.ideal_space.fulfillment == 0.89
        assert len(space.fulfillment) == 12

    def test_settings_applied(self):
        settings = Settings(
            engine={"initial_phi": 0.5, "initial_lambda": 0.5},
            entanglement={"measurement_decay": 0.5},
            teleportation={"protocol_name": "SESSION"},
        )
        space = construct_sovereign_space(settings)

        assert space.engine.phi == 0.5
        assert space.entanglement.config.measurement_decay == 0.5
        assert space.teleportation.registry.config.measurement_decay == 0.5
        assert space.teleportation.config.protocol_name == "SESSION"

    def test_run_session(self):
        space = construct_sovereign_space()
        space.engine.synchronize()

        summary = space.run_session("teleport_bob", "teleport_bob", {"value": 42})

        assert summary["state"]["coherence"] == "STABLE"
        assert "lambda" in summary["state"]
        assert summary["coupling"]["entanglement"] == 1.0
        assert summary["measurement"]["remaining_fidelity"] == pytest.approx(
            summary["pair"]["fidelity"] * 0.7
        )
        assert summary["transfer"]["success"] is True
        assert summary["active_pairs"] == 1
        json.dumps(summary)


class TestMain:
    """Test the command line entry point."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        monkeypatch.delenv("PHASE_ENGINE_CONFIG", raising=False)
        monkeypatch.delenv("PHASE_ENGINE_LOG_LEVEL", raising=False)

    def test_parse_payload(self):
        assert parse_payload("42") == 42
        assert parse_payload('{"a": 1}') == {"a": 1}
        assert parse_payload("plain text") == "plain text"

    def test_synced_session(self, capsys):
        assert main(["--sync", "--payload", "7"]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary["transfer"]["success"] is True
        assert summary["state"]["coherence"] == "STABLE"

    def test_unsynced_session_reports_failure(self, capsys):
        assert main([]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary["transfer"]["success"] is False
        assert summary["transfer"]["transferred_payload"] is None

    def test_oversized_numeric_payload(self, capsys):
        assert main(["--sync", "--payload", "9" * 400]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary["transfer"]["success"] is True
        assert math.isinf(summary["transfer"]["transferred_payload"])

    def test_missing_config(self, tmp_path):
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
