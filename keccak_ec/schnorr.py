"""
Schnorr Digital Signature Scheme Implementation

Implements deterministic Schnorr signatures over E-521:
- Key generation (random or passphrase-derived)
- Signing: z = k - h*s (mod r)
- Verification: h == H(zG + hV, m)

Nonces and challenges are derived with KMACXOF256, so signing needs
no randomness. Signatures are a fixed 130 bytes: h || z, 65 bytes each.
"""

from dataclasses import dataclass
from typing import Optional

from .ecc import ECC, ECPoint, E521
from .sha3 import kmacxof256
from .utils import (
    int_to_signed_bytes,
    int_to_fixed_signed_bytes,
    signed_bytes_to_int,
    unsigned_bytes_to_int,
)


SIGNATURE_SIZE = 130
COMPONENT_SIZE = SIGNATURE_SIZE // 2


@dataclass(frozen=True)
class DecodedSignature:
    """Outcome of decoding signature bytes: either (h, z) or a format error."""

    h: int = 0
    z: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_tuple(self) -> tuple:
        return self.h, self.z


def encode_signature(h: int, z: int) -> bytes:
    """
    Serialize (h, z) into 130 bytes.

    Each integer is right-justified in its own 65-byte half and sign
    extended, so negative values get 0xFF leading bytes.

    Raises:
        ValueError: If either value needs more than 65 signed bytes
    """
    return (
        int_to_fixed_signed_bytes(h, COMPONENT_SIZE) +
        int_to_fixed_signed_bytes(z, COMPONENT_SIZE)
    )


def decode_signature(data: bytes) -> DecodedSignature:
    """Split 130 signature bytes into signed big-endian (h, z)."""
    if data is None or len(data) != SIGNATURE_SIZE:
        length = 'None' if data is None else len(data)
        return DecodedSignature(
            error=f"Signature must be exactly {SIGNATURE_SIZE} bytes, got {length}"
        )
    return DecodedSignature(
        h=signed_bytes_to_int(data[:COMPONENT_SIZE]),
        z=signed_bytes_to_int(data[COMPONENT_SIZE:]),
    )


def _xof_to_scalar(key: bytes, message: bytes, customization: str) -> int:
    """KMACXOF256 output (512 bits) read as a non-negative integer."""
    return unsigned_bytes_to_int(kmacxof256(key, message, 512, customization))


class Schnorr:
    """
    Schnorr Digital Signature Scheme over E-521.

    Provides:
    - Key generation
    - Message signing
    - Signature verification

    Usage:
        schnorr = Schnorr()
        private_key, public_key = schnorr.generate_keypair()
        signature = schnorr.sign(private_key, message)
        valid = schnorr.verify(signature, public_key, message)
    """

    SIGNATURE_SIZE = SIGNATURE_SIZE

    def __init__(self, curve: dict = None):
        """
        Initialize Schnorr signature scheme.

        Args:
            curve: Curve parameters dict (defaults to E-521)
        """
        self.curve = curve if curve is not None else E521
        self.ecc = ECC(self.curve)

    # =========================================================================
    # KEYS
    # =========================================================================

    def generate_keypair(self) -> tuple:
        """
        Generate a random Schnorr key pair.

        Returns:
            (private_key, public_key) tuple
        """
        return self.ecc.generate_keypair()

    def keypair_from_passphrase(self, passphrase) -> tuple:
        """
        Derive a key pair deterministically from a passphrase.

        s = 4 * KMACXOF256(pw, "", 512, "K") mod r
        V = sG

        Returns:
            (private_key, public_key) tuple
        """
        s = 4 * _xof_to_scalar(passphrase, b'', 'K')
        s %= self.ecc.r
        return s, self.ecc.public_key(s)

    def _challenge(self, U: ECPoint, message: bytes) -> int:
        """h = KMACXOF256(U.x, m, 512, "T") as a non-negative integer."""
        return _xof_to_scalar(int_to_signed_bytes(U.x), message, 'T')

    # =========================================================================
    # SIGN / VERIFY
    # =========================================================================

    def sign(self, private_key: int, message: bytes) -> bytes:
        """
        Create a Schnorr signature.

        Algorithm:
        1. k = 4 * KMACXOF256(s, m, 512, "N")   (deterministic nonce)
        2. U = kG                                (commitment)
        3. h = KMACXOF256(U.x, m, 512, "T")     (challenge)
        4. z = (k - h*s) mod r                   (response)

        Args:
            private_key: Signer's private scalar
            message: Message bytes to sign

        Returns:
            130-byte signature
        """
        k = 4 * _xof_to_scalar(int_to_signed_bytes(private_key), message, 'N')

        U = self.ecc.scalar_multiply(k, self.ecc.G)
        h = self._challenge(U, message)
        z = (k - h * private_key) % self.ecc.r

        return encode_signature(h, z)

    def verify(self, signature: bytes, public_key: ECPoint, message: bytes) -> bool:
        """
        Verify a Schnorr signature.

        Algorithm:
        1. Decode (h, z); anything but 130 bytes fails
        2. U' = zG + hV
        3. Accept iff KMACXOF256(U'.x, m, 512, "T") == h

        Correctness:
            zG + hV = (k - hs)G + h(sG) = kG = U

        Args:
            signature: 130-byte signature from sign()
            public_key: Signer's public key
            message: Original message bytes

        Returns:
            True if signature is valid, False otherwise
        """
        decoded = decode_signature(signature)
        if not decoded.ok:
            return False

        h, z = decoded.as_tuple()
        U = self.ecc.point_add(
            self.ecc.scalar_multiply(z, self.ecc.G),
            self.ecc.scalar_multiply(h, public_key)
        )

        return self._challenge(U, message) == h

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def public_key_to_bytes(self, public_key: ECPoint) -> bytes:
        """Serialize public key to bytes."""
        return public_key.to_bytes()

    def public_key_from_bytes(self, data: bytes) -> ECPoint:
        """Deserialize and validate a public key."""
        return ECPoint.from_bytes(data, self.curve)
