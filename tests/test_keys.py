import logging
import secrets

import pytest
import sympy

from paillier import PrivateKey, PublicKey, RandomnessError, encrypt, generate_keypair
from paillier.keys import random_prime


@pytest.mark.parametrize("bits", [2, 3, 8, 64, 256])
def test_random_prime_has_exact_bit_length(bits):
    p = random_prime(bits)
    assert p.bit_length() == bits
    assert sympy.isprime(p)


def test_random_prime_rejects_tiny_sizes():
    with pytest.raises(ValueError):
        random_prime(1)


def test_keypair_structure(keypair):
    pub, priv = keypair
    assert isinstance(pub, PublicKey)
    assert isinstance(priv, PrivateKey)
    assert pub.length == 256
    assert pub.n.bit_length() == 512
    assert pub.n_sq == pub.n * pub.n
    assert pub.g == pub.n + 1
    assert priv.public_key is pub
    assert priv.threshold == 2**63 - 1
    assert (priv.l * priv.u) % pub.n == 1


def test_public_key_equality_is_structural(keypair, other_keypair):
    pub, _ = keypair
    copy = PublicKey(length=pub.length, n=pub.n, n_sq=pub.n_sq, g=pub.g)
    assert copy == pub
    assert other_keypair[0] != pub


def test_private_key_repr_hides_secrets(keypair):
    _, priv = keypair
    text = repr(priv)
    assert str(priv.l) not in text
    assert str(priv.u) not in text


def test_keys_are_immutable(keypair):
    pub, priv = keypair
    with pytest.raises(AttributeError):
        pub.n = 7
    with pytest.raises(AttributeError):
        priv.threshold = 0


def test_entropy_failure_raises_randomness_error(monkeypatch):
    def broken(bits):
        raise OSError("no entropy")

    monkeypatch.setattr(secrets, "randbits", broken)
    with pytest.raises(RandomnessError) as excinfo:
        generate_keypair(64, 2**31)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_threshold_above_modulus_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="paillier.keys"):
        pub, priv = generate_keypair(16, threshold=2**40)
    assert priv.threshold == 2**40
    assert "Threshold" in caplog.text


def test_blinding_entropy_failure_raises_randomness_error(keypair, monkeypatch):
    pub, _ = keypair
    failure = OSError("no entropy")

    def broken(bits):
        raise failure

    monkeypatch.setattr(secrets, "randbits", broken)
    with pytest.raises(RandomnessError) as excinfo:
        encrypt(pub, 5)
    assert excinfo.value.__cause__ is failure
