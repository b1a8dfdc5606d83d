import logging

import numpy as np

logger = logging.getLogger(__name__)


def particle_count(density, width, height):
    """Number of particles covering ``width`` x ``height`` sub-rows at ``density``."""
    return int(width * height * density)


class Field:
    """Positions and velocities of every particle, one row per particle.

    Coordinates are in sub-row space: ``width`` columns by twice the number of
    display rows. Positions are never clamped.
    """

    def __init__(self, positions, velocities):
        positions = np.ascontiguousarray(positions, dtype=np.float64)
        velocities = np.ascontiguousarray(velocities, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 2:
            raise ValueError(f"positions must have shape (n, 2), got {positions.shape}")
        if velocities.shape != positions.shape:
            raise ValueError(
                f"velocities shape {velocities.shape} does not match "
                f"positions {positions.shape}"
            )
        self.positions = positions
        self.velocities = velocities

    def __len__(self):
        return self.positions.shape[0]

    @classmethod
    def generate(cls, count, width, height, rng):
        positions = np.empty((count, 2), dtype=np.float64)
        positions[:, 0] = rng.uniform(0.0, width, size=count)
        positions[:, 1] = rng.uniform(0.0, height, size=count)
        velocities = rng.uniform(-1.0, 1.0, size=(count, 2))
        return cls(positions, velocities)

    @classmethod
    def from_density(cls, density, width, height, rng):
        return cls.generate(particle_count(density, width, height), width, height, rng)

    def regenerate(self, width, height, rng):
        """Fresh field with the same number of particles, for a reset."""
        logger.info("Regenerating %d particles in %dx%d", len(self), width, height)
        return Field.generate(len(self), width, height, rng)
