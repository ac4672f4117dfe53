"""Encrypted integers under the Paillier cryptosystem.

An EncryptedInt carries its ciphertext together with the public key it was
encrypted under. Ciphertexts can be combined with each other or with
plaintext integers, and the result decrypts to the matching combination of
plaintexts. Encryption is non-deterministic: the same plaintext encrypts to a
different ciphertext every time.

Note on blinding: each encryption draws its blinding factor r as a random
prime of the key's bit length. The scheme only needs r to be coprime to n,
so a prime is a stricter (and slower) choice than required. It is kept as
is; do not relax it without revisiting the security argument.
"""
from dataclasses import dataclass
import logging

from .errors import (
    CiphertextOutOfRangeError,
    DivisionByZeroError,
    NonInvertibleCiphertextError,
    NonInvertibleDivisorError,
    PlaintextTooLargeError,
)
from .keys import (
    DEFAULT_BIT_LENGTH,
    PrivateKey,
    PublicKey,
    generate_keypair,
    random_prime,
    require_same_public_key,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncryptedInt:
    cipher: int
    public_key: PublicKey

    def __add__(self, other):
        if isinstance(other, EncryptedInt):
            return add(self, other)
        if isinstance(other, int):
            return add_plaintext(self, other)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, int):
            return add_plaintext(self, other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, EncryptedInt):
            return sub(self, other)
        if isinstance(other, int):
            return add_plaintext(self, -other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, int):
            return add_plaintext(mul_plaintext(self, -1), other)
        return NotImplemented

    def __neg__(self):
        return mul_plaintext(self, -1)

    def __mul__(self, other):
        if isinstance(other, int):
            return mul_plaintext(self, other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, int):
            return div_plaintext(self, other)
        return NotImplemented


def encrypt(public_key: PublicKey, plaintext: int) -> EncryptedInt:
    """Encrypt `plaintext` under `public_key`.

    Negative plaintexts are accepted; they decrypt correctly as long as the
    private key's threshold is set above their magnitude.
    """
    if public_key.n <= plaintext:
        raise PlaintextTooLargeError(
            f"public key length {public_key.length} is too small to encrypt {plaintext}")

    r = random_prime(public_key.length)

    # g^m * r^n mod n^2
    n_sq = public_key.n_sq
    cipher = (pow(public_key.g, plaintext, n_sq) * pow(r, public_key.n, n_sq)) % n_sq
    return EncryptedInt(cipher, public_key)


def decrypt(private_key: PrivateKey, encrypted: EncryptedInt) -> int:
    require_same_public_key(encrypted.public_key, private_key.public_key)

    public_key = private_key.public_key
    if not 0 <= encrypted.cipher < public_key.n_sq:
        raise CiphertextOutOfRangeError(
            f"public key length {public_key.length} is too small to decrypt cipher")

    # ((c^l mod n^2 - 1) / n) * u mod n
    m = (pow(encrypted.cipher, private_key.l, public_key.n_sq) - 1) // public_key.n
    m = (m * private_key.u) % public_key.n

    # Values past the threshold wrapped around from below zero
    if m > private_key.threshold:
        m -= public_key.n
    return m


def add(x: EncryptedInt, y: EncryptedInt) -> EncryptedInt:
    """Encrypted sum x + y."""
    require_same_public_key(x.public_key, y.public_key)
    return EncryptedInt((x.cipher * y.cipher) % x.public_key.n_sq, x.public_key)


def sub(x: EncryptedInt, y: EncryptedInt) -> EncryptedInt:
    """Encrypted difference x - y."""
    require_same_public_key(x.public_key, y.public_key)
    negated = mul_plaintext(y, -1)
    return EncryptedInt((x.cipher * negated.cipher) % x.public_key.n_sq, x.public_key)


def add_plaintext(x: EncryptedInt, k: int) -> EncryptedInt:
    """Encrypted sum x + k for a plaintext k."""
    n_sq = x.public_key.n_sq
    return EncryptedInt((x.cipher * pow(x.public_key.g, k, n_sq)) % n_sq, x.public_key)


def mul_plaintext(x: EncryptedInt, k: int) -> EncryptedInt:
    """Encrypted product x * k for a plaintext k.

    A negative k inverts the ciphertext, which fails for a cipher sharing a
    factor with n.
    """
    try:
        cipher = pow(x.cipher, k, x.public_key.n_sq)
    except ValueError as e:
        raise NonInvertibleCiphertextError("cipher has no inverse modulo n^2") from e
    return EncryptedInt(cipher, x.public_key)


def div_plaintext(x: EncryptedInt, k: int) -> EncryptedInt:
    """Encrypted quotient x / k for a plaintext k.

    The result is only meaningful when k divides the plaintext of x exactly.
    Any other k yields a ciphertext of an unrelated value; this is not
    detected.
    """
    n = x.public_key.n
    if k % n == 0:
        raise DivisionByZeroError("division by 0")
    try:
        k_inv = pow(k, -1, n)
    except ValueError as e:
        raise NonInvertibleDivisorError(f"{k} has no inverse modulo n") from e

    # x^(k^-1 mod n) mod n^2
    return EncryptedInt(pow(x.cipher, k_inv, x.public_key.n_sq), x.public_key)


def demo(bit_length: int = DEFAULT_BIT_LENGTH):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    print(f"Generating Paillier key pair with {bit_length}-bit primes...")
    public_key, private_key = generate_keypair(bit_length, threshold=2**63 - 1)

    x, y = encrypt(public_key, 100), encrypt(public_key, 75)
    print(f"\nEncrypted 100: {hex(x.cipher)[:34]}...")
    print(f"Encrypted 75:  {hex(y.cipher)[:34]}...")

    print(f"\nHomomorphic addition: 100 + 75 = {decrypt(private_key, x + y)}")
    print(f"Homomorphic subtraction: 100 - 75 = {decrypt(private_key, x - y)}")

    negative = encrypt(public_key, -100)
    print(f"Negative operand: -100 + 75 = {decrypt(private_key, negative + y)}")

    print(f"\nPlaintext addition: 100 + 5 = {decrypt(private_key, x + 5)}")
    print(f"Plaintext multiplication: 100 * 3 = {decrypt(private_key, x * 3)}")
    print(f"Plaintext division: 9 / 3 = {decrypt(private_key, encrypt(public_key, 9) / 3)}")

    again = encrypt(public_key, 100)
    print(f"\nRe-encrypting 100 gives a new ciphertext: {again.cipher != x.cipher}")


if __name__ == "__main__":
    demo()
