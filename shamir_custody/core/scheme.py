"""Shamir threshold sharing: split a secret into shares and recover it.

A secret s is hidden as the constant term of a random polynomial f of degree
threshold-1 over GF(prime). Share i is (i, f(i)) for i = 1..total_shares.
Any ``threshold`` shares determine f, and f(0) = s is recovered by Lagrange
interpolation at x = 0. Fewer shares leave every value of s equally likely.

Structural misuse (bad parameters, wrong share count, repeated coordinates)
raises a :class:`ShamirError` subclass before any arithmetic runs. Shares
that are well-formed but come from different polynomials cannot be detected
and recover to an unrelated value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Sequence

import structlog

from shamir_custody.core import field
from shamir_custody.core.polynomial import (
    RandomSource,
    SystemRandomSource,
    evaluate_polynomial_at,
    sample_polynomial,
)
from shamir_custody.utils.primes import is_probable_prime

if TYPE_CHECKING:
    from shamir_custody.config import Config

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ShamirError(ValueError):
    """Base class for rejected split/recover calls."""


class InvalidThresholdConfig(ShamirError):
    """Scheme parameters cannot produce a valid split."""


class WrongShareCount(ShamirError):
    """Recovery was given a number of shares other than the threshold."""


class DuplicateXCoordinate(ShamirError):
    """Two shares have the same x-coordinate (modulo the prime)."""


class InvalidShare(ShamirError):
    """A share's x-coordinate is zero in the field."""


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Share:
    """A single Shamir share: (x, y) where y = f(x) for secret polynomial f."""

    x: int
    y: int

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


ShareLike = Share | tuple[int, int]


@dataclass(frozen=True)
class SchemeParams:
    """Threshold, share count and field modulus for one sharing scheme.

    Validated on construction so misconfiguration surfaces before any
    secret is touched.
    """

    threshold: int
    total_shares: int
    prime: int

    def __post_init__(self) -> None:
        if self.threshold < 1:
            raise InvalidThresholdConfig(f"threshold must be >= 1, got {self.threshold}")
        if self.threshold >= self.total_shares:
            raise InvalidThresholdConfig(
                f"threshold ({self.threshold}) must be less than total_shares ({self.total_shares})"
            )
        # x = 1..total_shares must be distinct non-zero field elements
        if self.prime <= self.total_shares:
            raise InvalidThresholdConfig(
                f"prime must exceed total_shares ({self.total_shares}), got {self.prime}"
            )
        if not is_probable_prime(self.prime):
            raise InvalidThresholdConfig(f"prime must be prime, got composite modulus {self.prime}")


def _as_share(item: ShareLike) -> Share:
    if isinstance(item, Share):
        return item
    x, y = item
    return Share(x=int(x), y=int(y))


# ---------------------------------------------------------------------------
# Split / recover
# ---------------------------------------------------------------------------


def split(
    params: SchemeParams,
    secret: int,
    rng: RandomSource | None = None,
) -> list[Share]:
    """Split ``secret`` into ``params.total_shares`` shares.

    Args:
        params: Validated scheme parameters.
        secret: Field element to share. Values outside [0, prime) are not
            rejected but will not round-trip.
        rng: Source for the random coefficients. Defaults to the OS CSPRNG.

    Returns:
        Shares ordered by x = 1..total_shares.
    """
    if rng is None:
        rng = SystemRandomSource()
    coeffs = sample_polynomial(secret, params.threshold, params.prime, rng)
    shares = [
        Share(x=x, y=evaluate_polynomial_at(coeffs, x, params.prime))
        for x in range(1, params.total_shares + 1)
    ]
    log.debug("secret_split", threshold=params.threshold, total_shares=params.total_shares)
    return shares


def interpolate_at_zero(shares: Sequence[ShareLike], prime: int) -> int:
    """Lagrange-interpolate f(0) from the given points over GF(prime).

    No count or coordinate checks: callers that need them go through
    :func:`recover`. Colliding x-coordinates raise ``NotInvertibleError``.
    """
    points = [_as_share(s) for s in shares]
    result = 0
    for i, share_i in enumerate(points):
        term = share_i.y
        for j, share_j in enumerate(points):
            if i == j:
                continue
            term = field.mul(term, field.neg(share_j.x, prime), prime)
            term = field.mul(
                term,
                field.modular_inverse(field.sub(share_i.x, share_j.x, prime), prime),
                prime,
            )
        result = field.add(result, term, prime)

    return field.normalize(result, prime)


def _check_coordinates(xs: Iterable[int], prime: int) -> None:
    seen: dict[int, int] = {}
    for x in xs:
        reduced = x % prime
        if reduced == 0:
            raise InvalidShare(f"x-coordinate {x} is zero modulo the prime")
        if reduced in seen:
            raise DuplicateXCoordinate(
                f"x-coordinate {x} collides with {seen[reduced]}; shares must be distinct"
            )
        seen[reduced] = x


def recover(params: SchemeParams, shares: Sequence[ShareLike]) -> int:
    """Reconstruct the secret from exactly ``params.threshold`` shares.

    Share order does not matter.

    Raises:
        WrongShareCount: ``len(shares) != params.threshold``.
        InvalidShare: an x-coordinate is 0 modulo the prime.
        DuplicateXCoordinate: two shares share an x-coordinate.
    """
    if len(shares) != params.threshold:
        log.warning("recover_rejected", reason="wrong_share_count",
                    expected=params.threshold, got=len(shares))
        raise WrongShareCount(f"expected {params.threshold} shares, got {len(shares)}")

    points = [_as_share(s) for s in shares]
    try:
        _check_coordinates((s.x for s in points), params.prime)
    except ShamirError as e:
        log.warning("recover_rejected", reason=type(e).__name__, error=str(e))
        raise

    secret = interpolate_at_zero(points, params.prime)
    log.debug("secret_recovered", threshold=params.threshold)
    return secret


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


class ShamirScheme:
    """Bound parameters plus the split/recover/inverse operations.

    Usage:
        scheme = ShamirScheme(SchemeParams(threshold=3, total_shares=5, prime=SECP256K1_PRIME))
        shares = scheme.split(secret)
        assert scheme.recover(shares[:3]) == secret
    """

    def __init__(self, params: SchemeParams) -> None:
        self.params = params

    @classmethod
    def from_config(cls, config: Config) -> ShamirScheme:
        return cls(config.scheme_params())

    @property
    def threshold(self) -> int:
        return self.params.threshold

    @property
    def total_shares(self) -> int:
        return self.params.total_shares

    @property
    def prime(self) -> int:
        return self.params.prime

    def split(self, secret: int, rng: RandomSource | None = None) -> list[Share]:
        return split(self.params, secret, rng)

    def recover(self, shares: Sequence[ShareLike]) -> int:
        return recover(self.params, shares)

    def modular_inverse(self, value: int) -> int:
        """Inverse of ``value`` in this scheme's field."""
        return field.modular_inverse(value, self.params.prime)
