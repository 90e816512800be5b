"""
Constant table for the Phase Conjugate Engine.

These are fixed parameters of the embedding and coupling functions. They
are not measured quantities; every other component reads them from here.
"""

from types import MappingProxyType

# Invariant target for the product phi * lambda
LAMBDA_PHI = 2.176435e-8

# Angular offset (degrees) between consecutive manifold dimensions
THETA_RESONANCE = 51.843

PHI_IGNITION = 7.69
TAU_OMEGA = 25411096.57
GAMMA_FLOOR = 0.092

# Timestamp offset (milliseconds) applied to every embedded vector
SHAPIRO_ADVANCE_MS = -2.01

# Frequency multiplier of the harmonic manifold grid
PHI_GOLDEN = 1.618033988749

PLANCK_COUPLING = 1.054571817e-34

MANIFOLD_DIMENSIONS = 11
MANIFOLD_RESOLUTION = 64

DEFAULT_PHI = 0.765
DEFAULT_LAMBDA = 0.785

NC_PHYSICS = MappingProxyType({
    "LAMBDA_PHI": LAMBDA_PHI,
    "THETA_RESONANCE": THETA_RESONANCE,
    "PHI_IGNITION": PHI_IGNITION,
    "TAU_OMEGA": TAU_OMEGA,
    "GAMMA_FLOOR": GAMMA_FLOOR,
    "SHAPIRO_ADVANCE_MS": SHAPIRO_ADVANCE_MS,
    "PHI_GOLDEN": PHI_GOLDEN,
    "PLANCK_COUPLING": PLANCK_COUPLING,
})
