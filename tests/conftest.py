"""
Keccak / E-521 Test Fixtures
"""

import pytest

from keccak_ec import ECC, Schnorr


@pytest.fixture(scope="session")
def ecc() -> ECC:
    """E-521 group with its generator."""
    return ECC()


@pytest.fixture(scope="session")
def schnorr() -> Schnorr:
    return Schnorr()


@pytest.fixture(scope="session")
def alice_keys(schnorr) -> tuple:
    """Deterministic key pair derived from a passphrase."""
    return schnorr.keypair_from_passphrase("alice passphrase")


@pytest.fixture(scope="session")
def bob_keys(schnorr) -> tuple:
    return schnorr.keypair_from_passphrase("bob passphrase")
