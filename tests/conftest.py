"""Shared test fixtures for the shamir_custody test suite."""

from __future__ import annotations

import os

import pytest

# Pin scheme settings so a developer's .env cannot change test expectations.
os.environ["SSS_THRESHOLD"] = "3"
os.environ["SSS_TOTAL_SHARES"] = "5"
os.environ.pop("SSS_PRIME", None)
os.environ["SSS_STRICT"] = "0"

from shamir_custody.core.polynomial import SeededRandomSource  # noqa: E402
from shamir_custody.core.scheme import SchemeParams  # noqa: E402
from shamir_custody.utils.primes import SECP256K1_PRIME  # noqa: E402


@pytest.fixture
def rng() -> SeededRandomSource:
    return SeededRandomSource(1234)


@pytest.fixture
def secp_params() -> SchemeParams:
    return SchemeParams(threshold=3, total_shares=5, prime=SECP256K1_PRIME)
