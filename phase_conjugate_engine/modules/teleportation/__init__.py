"""
Teleportation module for the Phase Conjugate Engine.

This module runs the two-step transfer protocol: a helper pair, two
classical correction bits, and a transfer over the destination coupling.
"""

from phase_conjugate_engine.modules.teleportation.logic import TeleportationProtocol
from phase_conjugate_engine.modules.teleportation.models import BellMeasurement, TransferResult

__all__ = ["TeleportationProtocol", "BellMeasurement", "TransferResult"]
