"""Scheme configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

import structlog
from dotenv import load_dotenv

from shamir_custody.core.scheme import SchemeParams
from shamir_custody.utils.primes import SECP256K1_PRIME, is_probable_prime

load_dotenv()

log = structlog.get_logger()

MIN_RECOMMENDED_PRIME_BITS = 128


def _int_env(key: str, default: str) -> int:
    """Read an integer env var. Accepts decimal or 0x-prefixed hex."""
    val = os.getenv(key, default)
    try:
        return int(val.strip().replace("_", ""), 0)
    except (ValueError, TypeError, AttributeError, OverflowError):
        raise ValueError(f"Invalid integer for {key}: {val!r}")


def _bool_env(key: str, default: str) -> bool:
    val = os.getenv(key, default).strip().lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Invalid boolean for {key}: {val!r}")


@dataclass(frozen=True)
class Config:
    # Sharing parameters
    threshold: int = _int_env("SSS_THRESHOLD", "3")
    total_shares: int = _int_env("SSS_TOTAL_SHARES", "5")
    prime: int = _int_env("SSS_PRIME", hex(SECP256K1_PRIME))

    # Treat validation warnings as errors
    strict: bool = _bool_env("SSS_STRICT", "0")

    def validate(self, *, strict: bool | None = None) -> list[str]:
        """Validate config before use. Returns list of warnings (empty = all good).

        Args:
            strict: If True, raise ValueError on any warning. Defaults to
                    the ``strict`` field (SSS_STRICT).
        """
        if strict is None:
            strict = self.strict

        if self.threshold < 1:
            raise ValueError(f"SSS_THRESHOLD must be >= 1, got {self.threshold}")
        if self.threshold >= self.total_shares:
            raise ValueError(
                f"SSS_THRESHOLD ({self.threshold}) must be less than SSS_TOTAL_SHARES ({self.total_shares})"
            )
        if self.prime <= self.total_shares:
            raise ValueError(f"SSS_PRIME must exceed SSS_TOTAL_SHARES, got {self.prime}")

        warnings = []
        if not is_probable_prime(self.prime):
            warnings.append("SSS_PRIME is not prime; shares will not reconstruct reliably")
        if self.prime.bit_length() < MIN_RECOMMENDED_PRIME_BITS:
            warnings.append(
                f"SSS_PRIME is {self.prime.bit_length()} bits "
                f"(< {MIN_RECOMMENDED_PRIME_BITS}); secrets must fit below it"
            )

        for w in warnings:
            log.warning("config_warning", warning=w)
        if strict and warnings:
            raise ValueError("Config validation failed in strict mode:\n" + "\n".join(f"  - {w}" for w in warnings))
        return warnings

    def scheme_params(self) -> SchemeParams:
        return SchemeParams(
            threshold=self.threshold,
            total_shares=self.total_shares,
            prime=self.prime,
        )
