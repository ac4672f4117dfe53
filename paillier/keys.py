from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Tuple
import logging
import secrets
import sympy

from .errors import KeyMismatchError, RandomnessError

if TYPE_CHECKING:
    from .encrypted_int import EncryptedInt

logger = logging.getLogger(__name__)

DEFAULT_BIT_LENGTH = 1024


@dataclass(frozen=True)
class PublicKey:
    """Public half of a key pair, safe to share"""
    length: int  # Bit length of each prime factor
    n: int       # Modulus p1 * p2
    n_sq: int    # n^2, the ciphertext modulus
    g: int       # Generator, always n + 1

    def encrypt(self, plaintext: int) -> "EncryptedInt":
        from .encrypted_int import encrypt
        return encrypt(self, plaintext)


@dataclass(frozen=True)
class PrivateKey:
    """Secret half of a key pair"""
    length: int
    public_key: PublicKey
    l: int = field(repr=False)  # (p1 - 1) * (p2 - 1)
    u: int = field(repr=False)  # l^-1 mod n
    threshold: int              # Decrypted values above this are negative

    def decrypt(self, encrypted: "EncryptedInt") -> int:
        from .encrypted_int import decrypt
        return decrypt(self, encrypted)


def random_prime(bits: int) -> int:
    """Draw a random prime of exactly `bits` bits from the secure source.

    The two top bits are forced so that the product of two such primes has
    exactly 2 * bits bits.
    """
    if bits < 2:
        raise ValueError(f"prime size must be at least 2 bits, got {bits}")

    top = 3 << (bits - 2) if bits > 2 else 2
    while True:
        try:
            candidate = secrets.randbits(bits)
        except (OSError, NotImplementedError) as e:
            raise RandomnessError(f"Failed to draw {bits}-bit prime candidate: {e}") from e
        candidate |= top | 1
        if sympy.isprime(candidate):
            return candidate


def generate_keypair(bit_length: int, threshold: int) -> Tuple[PublicKey, PrivateKey]:
    """Generate a key pair from two random primes of `bit_length` bits each.

    The modulus is roughly 2 * bit_length bits and must be large enough for
    every plaintext that will be encrypted. `threshold` should exceed the
    largest magnitude that will be encrypted; decrypted values above it are
    read back as negative.
    """
    p1 = random_prime(bit_length)
    p2 = random_prime(bit_length)

    n = p1 * p2
    public_key = PublicKey(length=bit_length, n=n, n_sq=n * n, g=n + 1)

    l = (p1 - 1) * (p2 - 1)
    private_key = PrivateKey(
        length=bit_length,
        public_key=public_key,
        l=l,
        u=pow(l, -1, n),
        threshold=threshold,
    )

    logger.debug("Generated key pair with %d-bit primes, %d-bit modulus", bit_length, n.bit_length())
    if threshold >= n:
        logger.warning("Threshold %d is not below the modulus; negative values will not be recovered", threshold)

    return public_key, private_key


def require_same_public_key(x: PublicKey, y: PublicKey) -> None:
    if x != y:
        raise KeyMismatchError("public keys not equal")
