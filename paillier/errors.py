class PaillierError(Exception):
    """Base exception for Paillier errors."""


class RandomnessError(PaillierError):
    """Raised when the secure random source cannot supply a value."""


class KeyMismatchError(PaillierError, ValueError):
    """Raised when operands were encrypted under different public keys."""


class PlaintextTooLargeError(PaillierError, ValueError):
    """Raised when a plaintext is not below the modulus n."""


class CiphertextOutOfRangeError(PaillierError, ValueError):
    """Raised when a ciphertext is outside [0, n^2)."""


class DivisionByZeroError(PaillierError, ZeroDivisionError):
    pass


class NonInvertibleDivisorError(PaillierError, ValueError):
    """Raised when a plaintext divisor has no inverse modulo n."""


class NonInvertibleCiphertextError(PaillierError, ValueError):
    """Raised when a ciphertext has no inverse modulo n^2."""
