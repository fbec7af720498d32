"""Deterministic pseudo-randomness for precipitation particles.

Particles are placed with a little horizontal jitter and a mix of droplets and
snowflakes. Both are derived from a seed computed from the row's timestamp
string, so re-rendering the same forecast yields identical output.
"""

import math
from typing import Iterator, Literal, NamedTuple

from service.meteogram import models
from service.meteogram.base import constants as bc
from service.meteogram.base import units
from service.meteogram.calc import precip

# Numerical Recipes LCG parameters.
_LCG_A = 1664525
_LCG_C = 1013904223
_LCG_M = 2**32

ParticleKind = Literal["droplet", "snowflake"]


class Particle(NamedTuple):
    kind: ParticleKind
    # Horizontal offset from the row's x, in pixels.
    offset: float


def hash_seed(s: str) -> int:
    """Returns a 32-bit seed for s (Java-style string hash, unsigned)."""
    h = 0
    for ch in s:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return h


def lcg(seed: int) -> Iterator[float]:
    """Yields an endless stream of floats in [0, 1) determined by seed."""
    state = seed % _LCG_M
    while True:
        state = (_LCG_A * state + _LCG_C) % _LCG_M
        yield state / _LCG_M


def particle_count(precipitation: float) -> int:
    if precipitation <= 0:
        return 0
    return min(math.ceil(precipitation * bc.PARTICLES_PER_MM), bc.MAX_PARTICLES)


def particles(row: models.HourlyRow) -> list[Particle]:
    """Returns the particles drawn under the cloud band for row.

    The number of snowflakes follows the row's snow ratio. Their positions in
    the stack are shuffled, and every particle gets a jitter in
    [-PARTICLE_JITTER_PX, PARTICLE_JITTER_PX).
    """
    n = particle_count(row.precipitation)
    if n == 0:
        return []
    rand = lcg(hash_seed(row.time))
    n_snow = units.js_round(n * precip.row_snow_ratio(row))
    kinds: list[ParticleKind] = ["snowflake"] * n_snow + ["droplet"] * (n - n_snow)
    # Fisher-Yates with the row's own generator.
    for i in range(n - 1, 0, -1):
        j = math.floor(next(rand) * (i + 1))
        kinds[i], kinds[j] = kinds[j], kinds[i]
    jitter = bc.PARTICLE_JITTER_PX
    return [Particle(kind=k, offset=next(rand) * 2 * jitter - jitter) for k in kinds]
