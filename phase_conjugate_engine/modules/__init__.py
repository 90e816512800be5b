"""
Modules package for the Phase Conjugate Engine.

This package contains the protocol modules built on top of the core engine.

Available modules:
- entanglement: Entangled pair registry and measurement
- teleportation: Two-step transfer protocol
"""
