#!/usr/bin/env python3
"""
noise_source.py - Seedable Gaussian noise sources for sensor simulation

The set of supported generators is fixed:
- mt19937 / pcg64 / philox / sfc64: numpy Generator over the named bit generator
- python: stdlib random.Random (Mersenne Twister, Box-Muller gauss)

A negative seed (default -1) requests a non-deterministic seed from the OS.
Each simulator instance owns its own noise source; nothing here touches the
process-wide random state.
"""

import random
from enum import Enum
from typing import Optional

import numpy as np


class UnknownPRNGError(ValueError):
    """Raised when a PRNG type name is not one of PRNGType"""


class PRNGType(Enum):
    MT19937 = "mt19937"
    PCG64 = "pcg64"
    PHILOX = "philox"
    SFC64 = "sfc64"
    PYTHON = "python"

    @classmethod
    def from_name(cls, name: str) -> 'PRNGType':
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise UnknownPRNGError(f"Unknown PRNG type '{name}' (valid: {valid})") from None


DEFAULT_PRNG_TYPE = PRNGType.MT19937.value
RANDOM_SEED = -1

_BIT_GENERATORS = {
    PRNGType.MT19937: np.random.MT19937,
    PRNGType.PCG64: np.random.PCG64,
    PRNGType.PHILOX: np.random.Philox,
    PRNGType.SFC64: np.random.SFC64,
}


def _resolve_seed(seed: Optional[int]) -> Optional[int]:
    if seed is None or int(seed) < 0:
        return None
    return int(seed)


class NoiseSource:
    """Standard-normal sample generator bound to one PRNG algorithm"""

    def __init__(self, prng_type: PRNGType, seed: Optional[int] = RANDOM_SEED):
        self.prng_type = prng_type
        self.seed = _resolve_seed(seed)
        self.samples_drawn = 0

        if prng_type is PRNGType.PYTHON:
            self._rng = random.Random(self.seed)
            self._draw = lambda: self._rng.gauss(0.0, 1.0)
        else:
            bit_generator = _BIT_GENERATORS[prng_type](self.seed)
            self._rng = np.random.Generator(bit_generator)
            self._draw = lambda: float(self._rng.standard_normal())

    @property
    def deterministic(self) -> bool:
        return self.seed is not None

    def gaussian(self) -> float:
        """Draw one standard-normal sample"""
        self.samples_drawn += 1
        return self._draw()

    def __repr__(self):
        seed = self.seed if self.deterministic else "random"
        return f"NoiseSource({self.prng_type.value}, seed={seed})"


def create_noise_source(prng_type: str = DEFAULT_PRNG_TYPE, seed: Optional[int] = RANDOM_SEED) -> NoiseSource:
    """Create a noise source from a PRNG type name and seed.

    Raises:
        UnknownPRNGError: if prng_type does not name a supported generator
    """
    return NoiseSource(PRNGType.from_name(prng_type), seed)
