"""Random polynomials over GF(p) and their evaluation.

Randomness is injected through :class:`RandomSource` rather than read from a
module-level generator, so split results are reproducible in tests when a
seeded source is passed in.
"""

from __future__ import annotations

import random
import secrets
from typing import Protocol, Sequence, runtime_checkable

from shamir_custody.core import field


@runtime_checkable
class RandomSource(Protocol):
    """Supplies integers uniformly distributed over [0, upper)."""

    def randbelow(self, upper: int) -> int: ...


class SystemRandomSource:
    """OS-backed CSPRNG. Default source for share generation."""

    def randbelow(self, upper: int) -> int:
        return secrets.randbelow(upper)


class SeededRandomSource:
    """Deterministic source for tests. Never use for real secrets."""

    def __init__(self, seed: int | str | bytes) -> None:
        self._rng = random.Random(seed)

    def randbelow(self, upper: int) -> int:
        if upper <= 0:
            raise ValueError(f"upper must be positive, got {upper}")
        return self._rng.randrange(upper)


def sample_polynomial(
    secret: int,
    threshold: int,
    prime: int,
    rng: RandomSource,
) -> list[int]:
    """Sample a degree-(threshold-1) polynomial with constant term ``secret``.

    Returns ``threshold`` coefficients, lowest degree first. The random
    coefficients a_1..a_{threshold-1} are drawn from [0, prime - 1).
    """
    if threshold < 1:
        raise ValueError(f"threshold must be >= 1, got {threshold}")
    coeffs = [secret]
    coeffs.extend(rng.randbelow(prime - 1) for _ in range(threshold - 1))
    return coeffs


def evaluate_polynomial_at(coefficients: Sequence[int], x: int, prime: int) -> int:
    """Evaluate the polynomial at ``x`` modulo ``prime`` (Horner's method).

    Intermediate values stay below ``prime`` regardless of degree.
    """
    result = 0
    for c in reversed(coefficients):
        result = field.add(field.mul(result, x, prime), c, prime)
    return result
