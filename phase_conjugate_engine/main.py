"""
Phase Conjugate Engine - Entry Point

Runs a demonstration session: loads the configuration, constructs the
engine space, couples two intents, creates and measures a pair, transfers
a payload and prints a JSON summary.
"""

import argparse
import json
import logging
import sys
from typing import Any

from phase_conjugate_engine.core.config_loader import load_settings
from phase_conjugate_engine.core.exceptions import PhaseEngineError
from phase_conjugate_engine.core.orchestrator import construct_sovereign_space


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_payload(raw: str) -> Any:
    """Parse a JSON literal, falling back to the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phase-engine",
        description="Run a phase conjugate engine session and print a summary.",
    )
    parser.add_argument("--source", default="teleport_bob", help="Source intent")
    parser.add_argument("--dest", default="teleport_bob", help="Destination intent")
    parser.add_argument(
        "--payload",
        default='{"value": 42, "label": "coherence"}',
        help="Payload as a JSON literal (plain text is sent as a string)",
    )
    parser.add_argument(
        "--sync",
        action="store_true",
        help="Rescale the ambient scalars onto the invariant before running",
    )
    parser.add_argument("--config", default=None, help="Path to settings.yaml")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the Phase Conjugate Engine.

    Args:
        argv: Command line arguments. Defaults to sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except PhaseEngineError as e:
        setup_logging()
        logging.getLogger(__name__).error("Failed to load configuration: %s", e)
        return 1

    setup_logging(settings.logging.level)
    logger = logging.getLogger(__name__)

    try:
        space = construct_sovereign_space(settings)

        if args.sync:
            state = space.engine.synchronize()
            logger.info("Scalars synchronised (coherence=%s)", state.coherence)

        summary = space.run_session(
            args.source,
            args.dest,
            parse_payload(args.payload),
        )
    except PhaseEngineError as e:
        logger.error("Session failed: %s", e)
        return 1

    transfer = summary["transfer"]
    logger.info("=" * 60)
    logger.info("SESSION COMPLETE")
    logger.info("=" * 60)
    logger.info("Coherence: %s", summary["state"]["coherence"])
    logger.info("Transfer success: %s", transfer["success"])
    logger.info("Transfer fidelity: %.6g", transfer["fidelity"])

    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
