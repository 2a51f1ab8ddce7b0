# Cryptographic Utilities
# Allowed imports only: secrets

import secrets


MASK64 = 0xFFFFFFFFFFFFFFFF


def rotate_left_64(x: int, n: int) -> int:
    """Rotate a 64-bit integer left by n bits."""
    n &= 63
    if n == 0:
        return x & MASK64
    return ((x << n) | (x >> (64 - n))) & MASK64


def to_bytes(value) -> bytes:
    """Accept str (UTF-8 encoded) or bytes-like input and return bytes."""
    if isinstance(value, str):
        return value.encode('utf-8')
    return bytes(value)


# =============================================================================
# MODULAR ARITHMETIC
# =============================================================================

def mod_inverse(a: int, p: int) -> int:
    """
    Compute modular multiplicative inverse of a modulo p.

    Raises:
        ValueError: If a has no inverse modulo p
    """
    try:
        return pow(a, -1, p)
    except ValueError:
        raise ValueError("No modular inverse exists") from None


def mod_sqrt(v: int, p: int, lsb: int) -> int:
    """
    Square root of v modulo p for p = 3 (mod 4).

    Returns the root whose least significant bit equals lsb,
    or None if v is not a quadratic residue.
    """
    v %= p
    r = pow(v, (p + 1) >> 2, p)
    if (r * r) % p != v:
        return None
    if (r & 1) != (lsb & 1):
        r = (p - r) % p
    return r


# =============================================================================
# SIGNED BIG-ENDIAN INTEGER CODEC
# =============================================================================

def int_to_signed_bytes(n: int) -> bytes:
    """
    Minimal two's-complement big-endian encoding.

    Always carries a sign bit, so 128 encodes as 00 80 and 0 as a single 00.
    """
    magnitude = n if n >= 0 else ~n
    length = magnitude.bit_length() // 8 + 1
    return n.to_bytes(length, 'big', signed=True)


def int_to_fixed_signed_bytes(n: int, length: int) -> bytes:
    """
    Right-justify n into length bytes, filling the leading bytes with
    0xFF for negative values and 0x00 otherwise.
    """
    encoded = int_to_signed_bytes(n)
    if len(encoded) > length:
        raise ValueError(f"Integer does not fit in {length} signed bytes")
    fill = b'\xff' if n < 0 else b'\x00'
    return fill * (length - len(encoded)) + encoded


def signed_bytes_to_int(b: bytes) -> int:
    """Decode a two's-complement big-endian byte string."""
    if not b:
        return 0
    return int.from_bytes(b, 'big', signed=True)


def unsigned_bytes_to_int(b: bytes) -> int:
    """Decode bytes as a non-negative big-endian integer."""
    return int.from_bytes(b, 'big')


def secure_random_below(n: int) -> int:
    """Generate a random integer in [0, n-1]."""
    return secrets.randbelow(n)
