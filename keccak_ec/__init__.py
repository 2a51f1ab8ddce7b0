"""
Keccak / E-521 Crypto Suite

This module provides low-level cryptographic primitives:
- Keccak-f[1600] permutation and sponge
- SHA3, cSHAKE256 and KMACXOF256
- Elliptic curve arithmetic on E-521
- Schnorr Digital Signatures

NO HIGH-LEVEL CRYPTO LIBRARIES USED.
Only the standard library is imported.
"""

from .keccak import KeccakSponge, keccak_f
from .sha3 import (
    ConfigurationError,
    HashMode,
    compute,
    cshake256,
    digest,
    kmacxof256,
    mac_xof,
    sha3,
    xof,
)
from .ecc import ECC, ECPoint, E521
from .schnorr import (
    DecodedSignature,
    Schnorr,
    decode_signature,
    encode_signature,
)

__all__ = [
    'KeccakSponge', 'keccak_f',
    'ConfigurationError', 'HashMode', 'compute',
    'sha3', 'cshake256', 'kmacxof256', 'digest', 'xof', 'mac_xof',
    'ECC', 'ECPoint', 'E521',
    'Schnorr', 'DecodedSignature', 'encode_signature', 'decode_signature',
]
