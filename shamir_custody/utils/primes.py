"""Named field primes and a probabilistic primality check."""

from __future__ import annotations

import secrets

# secp256k1 base field prime (2^256 - 2^32 - 977)
SECP256K1_PRIME = 2**256 - 2**32 - 977

# BN254 scalar field prime
BN254_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617

MERSENNE_127 = 2**127 - 1

_SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_probable_prime(n: int, rounds: int = 40) -> bool:
    """Miller-Rabin test with ``rounds`` random bases.

    A composite passes with probability at most 4^-rounds.
    """
    if n < 2:
        return False
    for sp in _SMALL_PRIMES:
        if n == sp:
            return True
        if n % sp == 0:
            return False

    # n - 1 = d * 2^s with d odd
    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for _ in range(rounds):
        a = secrets.randbelow(n - 3) + 2  # a in [2, n-2]
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True
