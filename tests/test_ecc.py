"""Tests for E-521 point arithmetic."""

import pytest

from keccak_ec.ecc import E521, ECPoint


def test_generator_on_curve(ecc):
    G = ecc.G
    assert G.x == 4
    assert G.y % 2 == 0
    assert G.is_on_curve()
    assert not G.is_identity


def test_identity_is_neutral(ecc):
    O = ecc.identity
    assert O.is_identity
    assert O.is_on_curve()
    assert ecc.point_add(ecc.G, O) == ecc.G
    assert ecc.point_add(O, ecc.G) == ecc.G


def test_point_plus_negation_is_identity(ecc):
    P = ecc.scalar_multiply(12345, ecc.G)
    assert ecc.point_add(P, P.negate()).is_identity


def test_doubling_matches_addition(ecc):
    P = ecc.scalar_multiply(7, ecc.G)
    assert ecc.point_double(P) == ecc.point_add(P, P)
    assert ecc.point_double(P) == ecc.scalar_multiply(14, ecc.G)


def test_small_multiples(ecc):
    G = ecc.G
    assert ecc.scalar_multiply(1, G) == G
    assert ecc.scalar_multiply(2, G) == ecc.point_add(G, G)
    assert ecc.scalar_multiply(3, G) == ecc.point_add(ecc.point_add(G, G), G)


def test_zero_scalar_gives_identity(ecc):
    assert ecc.scalar_multiply(0, ecc.G).is_identity


def test_group_order_annihilates_generator(ecc):
    assert ecc.scalar_multiply(E521['r'], ecc.G).is_identity
    assert ecc.scalar_multiply(E521['r'] + 1, ecc.G) == ecc.G


def test_negative_scalar_negates(ecc):
    P = ecc.scalar_multiply(99, ecc.G)
    assert ecc.scalar_multiply(-99, ecc.G) == P.negate()
    assert ecc.scalar_multiply(E521['r'] - 99, ecc.G) == P.negate()


def test_scalar_multiplication_is_linear(ecc):
    a, b = 2 ** 130 + 17, 3 ** 70
    lhs = ecc.scalar_multiply(a + b, ecc.G)
    rhs = ecc.point_add(ecc.scalar_multiply(a, ecc.G), ecc.scalar_multiply(b, ecc.G))
    assert lhs == rhs
    assert lhs.is_on_curve()


def test_point_serialization_round_trip(ecc):
    P = ecc.scalar_multiply(424242, ecc.G)
    data = ecc.public_key_to_bytes(P)
    assert len(data) == 133
    assert data[0] == 0x04
    assert ecc.public_key_from_bytes(data) == P


def test_point_decoding_rejects_off_curve(ecc):
    data = bytearray(ecc.G.to_bytes())
    data[-1] ^= 0x01
    with pytest.raises(ValueError):
        ecc.public_key_from_bytes(bytes(data))


@pytest.mark.parametrize("data", [b"", b"\x04", b"\x02" + bytes(132)])
def test_point_decoding_rejects_malformed(ecc, data):
    with pytest.raises(ValueError):
        ECPoint.from_bytes(data, E521)


def test_from_x_recovers_both_parities(ecc):
    even = ECPoint.from_x(4, 0, E521)
    odd = ECPoint.from_x(4, 1, E521)
    assert even == ecc.G
    assert odd.y == E521['p'] - even.y
    assert odd.is_on_curve()


def test_random_keypair(ecc):
    private_key, public_key = ecc.generate_keypair()
    assert 1 <= private_key < E521['r']
    assert public_key.is_on_curve()
    assert public_key == ecc.scalar_multiply(private_key, ecc.G)
