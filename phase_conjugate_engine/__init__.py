"""
Phase Conjugate Engine

A deterministic library that embeds text intents into 11-dimensional
perception vectors, conjugates and couples them, keeps entangled pairs
and runs a two-step transfer protocol over payloads.
"""

__version__ = "1.0.0"

from phase_conjugate_engine.core.orchestrator import SovereignSpace, construct_sovereign_space

__all__ = ["SovereignSpace", "construct_sovereign_space", "__version__"]
