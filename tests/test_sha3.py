"""Tests for SHA3, cSHAKE256 and KMACXOF256.

Known answers come from hashlib (SHA3 / SHAKE256) and the NIST
SP 800-185 sample computations.
"""

import hashlib

import pytest

from keccak_ec.sha3 import (
    ConfigurationError,
    HashMode,
    bytepad,
    compute,
    cshake256,
    digest,
    encode_string,
    kmacxof256,
    left_encode,
    mac_xof,
    right_encode,
    sha3,
    xof,
)


MESSAGES = [
    b"",
    b"abc",
    b"The quick brown fox jumps over the lazy dog",
    b"\xa3" * 200,
    b"a" * 135,
    b"a" * 136,
    b"a" * 137,
    bytes(range(256)) * 4,
]

HASHLIB_SHA3 = {
    224: hashlib.sha3_224,
    256: hashlib.sha3_256,
    384: hashlib.sha3_384,
    512: hashlib.sha3_512,
}


# ── Encodings ───────────────────────────────────────────────────

def test_left_and_right_encode():
    assert left_encode(0) == b"\x01\x00"
    assert right_encode(0) == b"\x00\x01"
    assert left_encode(136) == b"\x01\x88"
    assert left_encode(256) == b"\x02\x01\x00"
    assert right_encode(256) == b"\x01\x00\x02"


def test_encode_string_and_bytepad():
    assert encode_string(b"") == b"\x01\x00"
    assert encode_string(b"KMAC") == b"\x01\x20KMAC"
    padded = bytepad(encode_string(b"KMAC"), 136)
    assert len(padded) == 136
    assert padded.startswith(b"\x01\x88\x01\x20KMAC")
    assert padded[8:] == b"\x00" * 128


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        left_encode(-1)


# ── SHA3 ────────────────────────────────────────────────────────

@pytest.mark.parametrize("bits", sorted(HASHLIB_SHA3))
@pytest.mark.parametrize("message", MESSAGES)
def test_sha3_matches_hashlib(bits, message):
    assert sha3(message, bits) == HASHLIB_SHA3[bits](message).digest()


def test_sha3_known_answer_empty_256():
    assert sha3(b"", 256).hex() == (
        "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"
    )


@pytest.mark.parametrize("bits", [0, 8, 128, 255, 1024])
def test_sha3_rejects_unsupported_lengths(bits):
    with pytest.raises(ConfigurationError):
        sha3(b"abc", bits)


def test_digest_alias():
    assert digest is sha3


# ── cSHAKE256 ───────────────────────────────────────────────────

@pytest.mark.parametrize("message", MESSAGES)
def test_cshake_without_customization_is_shake256(message):
    assert cshake256(message, 512) == hashlib.shake_256(message).digest(64)


def test_cshake_long_output_matches_shake256():
    assert cshake256(b"abc", 8 * 1000) == hashlib.shake_256(b"abc").digest(1000)


def test_cshake256_nist_sample_3():
    out = cshake256(bytes.fromhex("00010203"), 512, "", "Email Signature")
    assert out.hex().upper() == (
        "D008828E2B80AC9D2218FFEE1D070C48B8E4C87BFF32C9699D5B6896EEE0EDD1"
        "64020E2BE0560858D9C00C037E34A96937C561A74C412BB4C746469527281C8C"
    )


def test_customization_separates_domains():
    base = cshake256(b"data", 256)
    assert cshake256(b"data", 256, "", "A") != base
    assert cshake256(b"data", 256, "", "A") != cshake256(b"data", 256, "", "B")
    assert cshake256(b"data", 256, "KMAC", "") != base


@pytest.mark.parametrize("bits", [0, 8, 256, 1088, 1096, 4000])
def test_xof_length_correctness(bits):
    assert len(xof(b"abc", bits, "", "S")) * 8 == bits


def test_xof_prefix_consistency():
    short = cshake256(b"abc", 256, "", "S")
    long = cshake256(b"abc", 2048, "", "S")
    assert long.startswith(short)


@pytest.mark.parametrize("bits", [-8, 1, 7, 257])
def test_xof_rejects_bad_lengths(bits):
    with pytest.raises(ConfigurationError):
        cshake256(b"abc", bits)


def test_string_and_bytes_customization_agree():
    assert cshake256("abc", 256, "", "Email") == cshake256(b"abc", 256, b"", b"Email")


# ── KMACXOF256 ──────────────────────────────────────────────────

def test_kmacxof256_nist_sample_4():
    key = bytes(range(0x40, 0x60))
    out = kmacxof256(key, bytes.fromhex("00010203"), 512, "My Tagged Application")
    assert out.hex().upper() == (
        "1755133F1534752AAD0748F2C706FB5C784512CAB835CD15676B16C0C6647FA9"
        "6FAA7AF634A0BF8FF6DF39374FA00FAD9A39E322A7C92065A64EB1FB0801EB2B"
    )


def test_kmacxof256_is_cshake_over_framed_key():
    key = b"secret key"
    framed = bytepad(encode_string(key), 136) + b"message" + right_encode(0)
    assert kmacxof256(key, b"message", 256, "S") == cshake256(framed, 256, "KMAC", "S")


def test_kmacxof256_deterministic_and_key_sensitive():
    a = kmacxof256(b"key", b"message", 512, "N")
    assert a == kmacxof256(b"key", b"message", 512, "N")
    assert a != kmacxof256(b"kez", b"message", 512, "N")
    assert a != kmacxof256(b"key", b"message", 512, "T")
    assert a != kmacxof256(b"key", b"messagf", 512, "N")


def test_kmacxof256_rejects_empty_key():
    with pytest.raises(ConfigurationError):
        kmacxof256(b"", b"message", 256)


def test_kmacxof256_rejects_bad_length():
    with pytest.raises(ConfigurationError):
        mac_xof(b"key", b"message", 12)


# ── Mode dispatch ───────────────────────────────────────────────

@pytest.mark.parametrize("name,mode", [
    ("SHA3", HashMode.SHA3),
    ("sha3", HashMode.SHA3),
    ("cSHAKE256", HashMode.CSHAKE256),
    ("CSHAKE256", HashMode.CSHAKE256),
    (" kmacxof256 ", HashMode.KMACXOF256),
])
def test_mode_from_name(name, mode):
    assert HashMode.from_name(name) is mode


def test_unknown_mode_rejected():
    with pytest.raises(ConfigurationError):
        HashMode.from_name("MD5")


def test_compute_dispatches_to_modes():
    assert compute(HashMode.SHA3, b"abc", 384) == sha3(b"abc", 384)
    assert compute(HashMode.CSHAKE256, b"abc", 128, "S") == cshake256(b"abc", 128, "", "S")
    assert compute(HashMode.KMACXOF256, b"abc", 128, "S", key=b"k") == kmacxof256(b"k", b"abc", 128, "S")


def test_compute_kmac_requires_key():
    with pytest.raises(ConfigurationError):
        compute(HashMode.KMACXOF256, b"abc", 256)


def test_compute_rejects_non_byte_lengths():
    with pytest.raises(ConfigurationError):
        compute(HashMode.CSHAKE256, b"abc", 100)


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)
