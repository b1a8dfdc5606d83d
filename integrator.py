import math

import numpy as np
from numba import jit, prange

import config


@jit(nopython=True, parallel=True)
def update_particles(
    positions,
    velocities,
    dt,
    friction,
    has_attractor,
    attractor_x,
    attractor_y,
    gravity,
    guard,
    gain,
):
    """
    One physics tick using Numba JIT compilation.
    Every particle reads only the attractor and dt, and writes only its own row,
    so the loop runs in parallel.
    """
    n = positions.shape[0]

    for i in prange(n):
        if has_attractor:
            dx = attractor_x - positions[i, 0]
            dy = attractor_y - positions[i, 1]
            distance = np.sqrt(dx * dx + dy * dy)

            # Too close to the attractor, skip to avoid blowing up
            if distance > guard:
                inv_gravity = gravity / distance
                velocities[i, 0] += dx * inv_gravity * gain
                velocities[i, 1] += dy * inv_gravity * gain

        velocities[i, 0] *= friction
        velocities[i, 1] *= friction

        positions[i, 0] += velocities[i, 0] * dt
        positions[i, 1] += velocities[i, 1] * dt


def step(field, dt, attractor=None):
    """Advance ``field`` by ``dt`` seconds, pulled towards ``attractor`` if given.

    The attraction is a per-tick impulse and is not scaled by ``dt``, while
    friction decays continuously with elapsed time.
    """
    if dt < 0:
        raise ValueError(f"dt must be non-negative, got {dt}")
    if len(field) == 0:
        return

    friction = math.pow(config.FRICTION_PER_SECOND, dt)
    if attractor is None:
        has_attractor, attractor_x, attractor_y = False, 0.0, 0.0
    else:
        has_attractor = True
        attractor_x, attractor_y = float(attractor[0]), float(attractor[1])

    update_particles(
        field.positions,
        field.velocities,
        float(dt),
        friction,
        has_attractor,
        attractor_x,
        attractor_y,
        config.GRAVITY_STRENGTH,
        config.SINGULARITY_GUARD,
        config.IMPULSE_GAIN,
    )
