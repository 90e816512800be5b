"""
Manifold Embedder for the Phase Conjugate Engine.

Maps arbitrary text intents onto the 11-dimensional manifold. The mapping
is deterministic: for a fixed intent and fixed scalars the coordinates,
momentum and phase are reproducible bit for bit. Only the timestamp
depends on the wall clock.
"""

import logging
import math
import time
from typing import Callable

import numpy as np

from phase_conjugate_engine.core.constants import (
    MANIFOLD_DIMENSIONS,
    MANIFOLD_RESOLUTION,
    PHI_GOLDEN,
    SHAPIRO_ADVANCE_MS,
    THETA_RESONANCE,
)
from phase_conjugate_engine.core.interfaces import PerceptionVector

logger = logging.getLogger(__name__)


class ManifoldEmbedder:
    """Embeds text intents as perception vectors.

    The embedder also owns the harmonic manifold grid: an 11 x 64 array of
    points placed at harmonic intervals, offset per dimension by the
    resonance angle. The grid is read-only.

    Example:
        embedder = ManifoldEmbedder()
        vector = embedder.embed("hello", phi=0.765, lambda_=0.785)
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        """Initialize the embedder.

        Args:
            clock: Wall-clock source returning seconds. Defaults to time.time.
        """
        self._clock = clock or time.time
        self._grid = self._build_grid()

    @staticmethod
    def _build_grid() -> np.ndarray:
        """Build the harmonic manifold grid."""
        steps = np.arange(MANIFOLD_RESOLUTION) / MANIFOLD_RESOLUTION
        offsets = np.arange(MANIFOLD_DIMENSIONS)[:, np.newaxis]
        angle = steps * 2 * np.pi + offsets * THETA_RESONANCE * np.pi / 180
        grid = np.sin(angle) * np.cos(angle * PHI_GOLDEN)
        grid.setflags(write=False)
        return grid

    @property
    def grid(self) -> np.ndarray:
        """The read-only harmonic manifold grid."""
        return self._grid

    @property
    def dimensions(self) -> int:
        """Number of manifold dimensions."""
        return self._grid.shape[0]

    def now_ms(self) -> float:
        """Current wall-clock time in milliseconds."""
        return self._clock() * 1000.0

    @staticmethod
    def hash_intent(intent: str) -> list[int]:
        """Expand an intent into a sequence of at least 11 byte codes.

        The codes are the UTF-8 bytes of the intent. Short sequences are
        extended by repeatedly appending the sum of the existing codes
        modulo 256; the empty string therefore expands to eleven zeros.

        Args:
            intent: Any string.

        Returns:
            List of integers in [0, 255].
        """
        codes = list(intent.encode("utf-8"))
        while len(codes) < MANIFOLD_DIMENSIONS:
            codes.append(sum(codes) % 256)
        return codes

    def embed(self, intent: str, phi: float, lambda_: float) -> PerceptionVector:
        """Embed an intent as a perception vector.

        Args:
            intent: Any string, including the empty string.
            phi: Phi scalar carried by the vector.
            lambda_: Lambda scalar carried by the vector.

        Returns:
            A new PerceptionVector.
        """
        codes = np.asarray(self.hash_intent(intent), dtype=np.float64)
        indices = np.arange(MANIFOLD_DIMENSIONS) % len(codes)

        coordinates = (codes[indices] / 255) * 2 - 1
        momentum = np.cos(coordinates * np.pi) * 0.1
        phase = math.atan2(coordinates[1], coordinates[0])

        logger.debug(
            "Embedded intent %r (phase=%.6f, %d codes)",
            intent[:30],
            phase,
            len(codes),
        )

        return PerceptionVector(
            coordinates=tuple(coordinates.tolist()),
            momentum=tuple(momentum.tolist()),
            phase=phase,
            phi=phi,
            lambda_=lambda_,
            timestamp=self.now_ms() + SHAPIRO_ADVANCE_MS,
        )
