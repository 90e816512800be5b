"""
Configuration loader for the Phase Conjugate Engine.

This module provides Pydantic models for type-safe configuration loading
from YAML files and environment variables. Every model has defaults, so
``Settings()`` is a complete configuration on its own.
"""

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from phase_conjugate_engine.core.constants import DEFAULT_LAMBDA, DEFAULT_PHI
from phase_conjugate_engine.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"


class EngineConfig(BaseModel):
    """Configuration for the phase conjugate engine.

    Attributes:
        initial_phi: Starting value of the ambient phi scalar.
        initial_lambda: Starting value of the ambient lambda scalar.
        stable_tolerance: Relative invariant deviation below which the
            engine is STABLE and scalar updates are stored unchanged.
        drift_tolerance: Relative invariant deviation below which the
            engine is DRIFTING rather than DECOHERENT.
    """

    initial_phi: float = Field(default=DEFAULT_PHI, gt=0.0)
    initial_lambda: float = Field(default=DEFAULT_LAMBDA, gt=0.0)
    stable_tolerance: float = Field(default=0.01, gt=0.0)
    drift_tolerance: float = Field(default=0.05, gt=0.0)

    @model_validator(mode="after")
    def validate_tolerance_order(self) -> "EngineConfig":
        """Ensure the stable band sits inside the drifting band."""
        if self.stable_tolerance > self.drift_tolerance:
            raise ValueError("stable_tolerance must not exceed drift_tolerance")
        return self


class EntanglementConfig(BaseModel):
    """Configuration for the entanglement registry.

    Attributes:
        measurement_decay: Factor applied to a pair's fidelity per measurement.
        active_threshold: Pairs at or below this fidelity are no longer active.
    """

    measurement_decay: float = Field(default=0.7, gt=0.0, lt=1.0)
    active_threshold: float = Field(default=0.1, ge=0.0, le=1.0)


class TeleportationConfig(BaseModel):
    """Configuration for the transfer protocol.

    Attributes:
        min_fidelity: Destination coupling fidelity required for success.
        helper_alice: Intent embedded for the source side of the helper pair.
        helper_bob: Intent embedded for the destination side of the helper pair.
        protocol_name: Descriptive label reported with every result.
        simulated_latency_ms: Delay awaited by the async transfer entry point.
    """

    min_fidelity: float = Field(default=0.7, ge=0.0, le=1.0)
    helper_alice: str = Field(default="teleport_alice")
    helper_bob: str = Field(default="teleport_bob")
    protocol_name: str = Field(default="BBCJPW", min_length=1)
    simulated_latency_ms: float = Field(default=0.0, ge=0.0)


class LoggingConfig(BaseModel):
    """Configuration for application logging."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalise and check the level name."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown logging level: {v}")
        return level


class Settings(BaseModel):
    """Root configuration model for the Phase Conjugate Engine.

    Attributes:
        engine: Ambient scalar and coherence configuration.
        entanglement: Entanglement registry configuration.
        teleportation: Transfer protocol configuration.
        logging: Logging configuration.
    """

    engine: EngineConfig = Field(default_factory=EngineConfig)
    entanglement: EntanglementConfig = Field(default_factory=EntanglementConfig)
    teleportation: TeleportationConfig = Field(default_factory=TeleportationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load and validate settings from YAML configuration file.

    This function loads environment variables from .env file, then loads
    and validates the settings.yaml configuration. ``PHASE_ENGINE_CONFIG``
    selects the file when no path is given and ``PHASE_ENGINE_LOG_LEVEL``
    overrides the configured logging level.

    Args:
        config_path: Optional path to settings.yaml. Defaults to the
            settings.yaml bundled with the package.

    Returns:
        Validated Settings object.

    Raises:
        ConfigurationError: If the configuration file cannot be loaded
            or validation fails.
    """
    load_dotenv()

    if config_path is None:
        config_path = os.getenv("PHASE_ENGINE_CONFIG") or DEFAULT_CONFIG_PATH

    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            details={"path": str(config_path)}
        )

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Failed to parse YAML configuration",
            details={"path": str(config_path), "error": str(e)}
        ) from e

    if raw_config is None:
        raise ConfigurationError(
            "Configuration file is empty",
            details={"path": str(config_path)}
        )

    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            "Configuration root must be a mapping",
            details={"path": str(config_path)}
        )

    level_override = os.getenv("PHASE_ENGINE_LOG_LEVEL")
    if level_override:
        raw_config["logging"] = {
            **(raw_config.get("logging") or {}),
            "level": level_override,
        }

    try:
        settings = Settings(**raw_config)
        logger.info("Configuration loaded successfully from %s", config_path)
        return settings
    except Exception as e:
        raise ConfigurationError(
            "Configuration validation failed",
            details={"path": str(config_path), "error": str(e)}
        ) from e
