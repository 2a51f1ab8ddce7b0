"""
SHA-3 Derived Functions

Implements on top of the Keccak sponge:
- SHA3-224/256/384/512 (FIPS 202)
- cSHAKE256 customizable XOF (NIST SP 800-185)
- KMACXOF256 keyed XOF (NIST SP 800-185)

NO external crypto libraries used. Only standard library.
"""

from enum import Enum

from .keccak import KeccakSponge, STATE_BYTES
from .utils import to_bytes


SHA3_BIT_LENGTHS = (224, 256, 384, 512)

# Rate in bytes for the 256-bit security level (1088 bits)
RATE_256 = 136


class ConfigurationError(ValueError):
    """Raised when a mode is requested with parameters it cannot accept."""


# =============================================================================
# SP 800-185 ENCODINGS
# =============================================================================

def _encode_length(x: int) -> bytes:
    if x < 0:
        raise ValueError("Encoded lengths must be non-negative")
    n = max(1, (x.bit_length() + 7) // 8)
    if n > 255:
        raise ValueError("Encoded length too large")
    return x.to_bytes(n, 'big')


def left_encode(x: int) -> bytes:
    """Byte count followed by the big-endian bytes of x."""
    encoded = _encode_length(x)
    return bytes([len(encoded)]) + encoded


def right_encode(x: int) -> bytes:
    """Big-endian bytes of x followed by their byte count."""
    encoded = _encode_length(x)
    return encoded + bytes([len(encoded)])


def encode_string(s: bytes) -> bytes:
    """Bit length of s (left encoded) followed by s."""
    return left_encode(len(s) * 8) + s


def bytepad(x: bytes, w: int) -> bytes:
    """Prefix left_encode(w) and zero-fill to a multiple of w bytes."""
    if w <= 0:
        raise ValueError("bytepad width must be positive")
    z = left_encode(w) + x
    return z + b'\x00' * ((-len(z)) % w)


def _check_output_bits(bit_length: int) -> None:
    if bit_length < 0 or bit_length % 8 != 0:
        raise ConfigurationError(
            "Output bit length must be a non-negative multiple of 8 (bytewise)"
        )


# =============================================================================
# HASH / XOF / MAC
# =============================================================================

def sha3(data: bytes, bit_length: int) -> bytes:
    """
    Fixed-length SHA3 digest.

    Args:
        data: Message bytes
        bit_length: One of 224, 256, 384, 512

    Returns:
        bit_length / 8 digest bytes
    """
    if bit_length not in SHA3_BIT_LENGTHS:
        raise ConfigurationError(
            f"SHA3 output length must be one of {SHA3_BIT_LENGTHS}, got {bit_length}"
        )
    rate = STATE_BYTES - 2 * (bit_length // 8)
    sponge = KeccakSponge(rate, KeccakSponge.SUFFIX_SHA3)
    return sponge.absorb(to_bytes(data)).squeeze(bit_length // 8)


def cshake256(data: bytes, bit_length: int, function_name='', customization='') -> bytes:
    """
    cSHAKE256 customizable extendable-output function.

    With an empty function name and customization string this is
    exactly SHAKE256.

    Args:
        data: Input bytes
        bit_length: Requested output length in bits (multiple of 8)
        function_name: NIST function-name string N
        customization: Customization string S

    Returns:
        bit_length / 8 output bytes
    """
    _check_output_bits(bit_length)
    n = to_bytes(function_name)
    s = to_bytes(customization)

    if not n and not s:
        sponge = KeccakSponge(RATE_256, KeccakSponge.SUFFIX_SHAKE)
    else:
        sponge = KeccakSponge(RATE_256, KeccakSponge.SUFFIX_CSHAKE)
        sponge.absorb(bytepad(encode_string(n) + encode_string(s), RATE_256))

    return sponge.absorb(to_bytes(data)).squeeze(bit_length // 8)


def kmacxof256(key: bytes, data: bytes, bit_length: int, customization='') -> bytes:
    """
    KMACXOF256 keyed extendable-output function.

    newX = bytepad(encode_string(K), 136) || X || right_encode(0)
    result = cSHAKE256(newX, L, "KMAC", S)

    Args:
        key: Non-empty key bytes
        data: Message bytes
        bit_length: Requested output length in bits (multiple of 8)
        customization: Customization string S

    Returns:
        bit_length / 8 output bytes
    """
    key = to_bytes(key)
    if not key:
        raise ConfigurationError("KMACXOF256 requires a non-empty key")
    _check_output_bits(bit_length)

    new_x = bytepad(encode_string(key), RATE_256) + to_bytes(data) + right_encode(0)
    return cshake256(new_x, bit_length, 'KMAC', customization)


# Entry point names used by the rest of the suite
digest = sha3
xof = cshake256
mac_xof = kmacxof256


# =============================================================================
# MODE DISPATCH
# =============================================================================

class HashMode(Enum):
    """Operations selectable by name from the outer layer."""

    SHA3 = 'SHA3'
    CSHAKE256 = 'cSHAKE256'
    KMACXOF256 = 'KMACXOF256'

    @classmethod
    def from_name(cls, name: str) -> 'HashMode':
        for mode in cls:
            if mode.value.lower() == name.strip().lower():
                return mode
        choices = ', '.join(mode.value for mode in cls)
        raise ConfigurationError(f"Unable to recognize mode of operation '{name}' (expected one of: {choices})")


def compute(mode: HashMode, data: bytes, bit_length: int, customization='', key=None) -> bytes:
    """
    Run the requested mode once the caller has resolved its name.

    Args:
        mode: HashMode member
        data: Input bytes
        bit_length: Output length in bits
        customization: Customization string (ignored for SHA3)
        key: Key bytes, required for KMACXOF256

    Returns:
        Output bytes
    """
    _check_output_bits(bit_length)

    if mode is HashMode.SHA3:
        return sha3(data, bit_length)
    if mode is HashMode.CSHAKE256:
        return cshake256(data, bit_length, '', customization)
    if mode is HashMode.KMACXOF256:
        if key is None:
            raise ConfigurationError("KMACXOF256 mode requires a key")
        return kmacxof256(key, data, bit_length, customization)
    raise ConfigurationError(f"Unsupported mode: {mode!r}")
