"""Shamir threshold secret sharing over a prime field."""

from shamir_custody.core.field import NotInvertibleError, modular_inverse
from shamir_custody.core.scheme import (
    DuplicateXCoordinate,
    InvalidShare,
    InvalidThresholdConfig,
    SchemeParams,
    ShamirError,
    ShamirScheme,
    Share,
    WrongShareCount,
    recover,
    split,
)

__version__ = "0.1.0"

__all__ = [
    "DuplicateXCoordinate",
    "InvalidShare",
    "InvalidThresholdConfig",
    "NotInvertibleError",
    "SchemeParams",
    "ShamirError",
    "ShamirScheme",
    "Share",
    "WrongShareCount",
    "modular_inverse",
    "recover",
    "split",
]
