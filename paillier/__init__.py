"""Paillier partially-homomorphic encryption over signed integers."""
from .encrypted_int import (
    EncryptedInt,
    add,
    add_plaintext,
    decrypt,
    div_plaintext,
    encrypt,
    mul_plaintext,
    sub,
)
from .errors import (
    CiphertextOutOfRangeError,
    DivisionByZeroError,
    KeyMismatchError,
    NonInvertibleCiphertextError,
    NonInvertibleDivisorError,
    PaillierError,
    PlaintextTooLargeError,
    RandomnessError,
)
from .keys import DEFAULT_BIT_LENGTH, PrivateKey, PublicKey, generate_keypair
