"""Shared key-pair fixtures for the Paillier test suite."""

import pytest

from paillier import generate_keypair

TEST_BIT_LENGTH = 256
TEST_THRESHOLD = 2**63 - 1


@pytest.fixture(scope="module")
def keypair():
    return generate_keypair(TEST_BIT_LENGTH, TEST_THRESHOLD)


@pytest.fixture(scope="module")
def other_keypair():
    """An independently generated key pair, for mismatch checks."""
    return generate_keypair(TEST_BIT_LENGTH, TEST_THRESHOLD)
