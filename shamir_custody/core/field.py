"""Arithmetic in the prime field GF(p).

Every helper returns the canonical representative in [0, p). Python's ``%``
yields a non-negative remainder for a positive modulus, so a negative
intermediate (e.g. 0 - x_j) reduces straight into the field.
"""

from __future__ import annotations


class NotInvertibleError(ZeroDivisionError):
    """Raised when an element has no multiplicative inverse modulo p."""


def normalize(value: int, p: int) -> int:
    """Map ``value`` onto its canonical representative in [0, p)."""
    return value % p


def add(a: int, b: int, p: int) -> int:
    return (a + b) % p


def sub(a: int, b: int, p: int) -> int:
    return (a - b) % p


def mul(a: int, b: int, p: int) -> int:
    return (a * b) % p


def neg(a: int, p: int) -> int:
    return (-a) % p


def modular_inverse(a: int, p: int) -> int:
    """Return a^-1 mod p using the iterative extended Euclidean algorithm.

    Only the Bézout coefficient of ``a`` is tracked; the one for ``p`` is
    never needed. Iterative, so large operands do not hit the recursion limit.

    Raises:
        ValueError: if ``p <= 1``.
        NotInvertibleError: if ``a ≡ 0 (mod p)`` or ``gcd(a, p) != 1``.
    """
    if p <= 1:
        raise ValueError(f"Modulus must be > 1, got {p}")
    a %= p
    if a == 0:
        raise NotInvertibleError("0 has no inverse modulo p")

    m = p
    x, x_prev = 0, 1
    while m > 1:
        q = a // m
        a, m = m, a % m
        x, x_prev = x_prev - q * x, x

    # The loop only stops on remainder 1 when gcd(a, p) == 1
    if m != 1:
        raise NotInvertibleError("Operand and modulus are not coprime")

    while x < 0:
        x += p
    return x
