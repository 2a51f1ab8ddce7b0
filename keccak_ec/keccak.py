"""
Keccak-f[1600] Permutation and Sponge Construction

FIPS 202: SHA-3 Standard: Permutation-Based Hash and
Extendable-Output Functions
https://nvlpubs.nist.gov/nistpubs/FIPS/NIST.FIPS.202.pdf

The state is a list of 25 lanes of 64 bits; lane (x, y) lives at
index x + 5*y. Bytes map into lanes little-endian.

NO external crypto libraries used. Only standard library.
"""

from .utils import rotate_left_64, MASK64


STATE_BYTES = 200  # 1600 bits
NUM_ROUNDS = 24


# =============================================================================
# DERIVED CONSTANT TABLES
# =============================================================================

def _generate_round_constants() -> tuple:
    """
    Iota constants from the LFSR x^8 + x^6 + x^5 + x^4 + 1.

    For each round, seven LFSR output bits land at bit positions 2^j - 1.
    """
    constants = []
    lfsr = 0x01
    for _ in range(NUM_ROUNDS):
        rc = 0
        for j in range(7):
            if lfsr & 1:
                rc ^= 1 << ((1 << j) - 1)
            if lfsr & 0x80:
                lfsr = ((lfsr << 1) ^ 0x71) & 0xFF
            else:
                lfsr = (lfsr << 1) & 0xFF
        constants.append(rc)
    return tuple(constants)


def _generate_rotation_offsets() -> tuple:
    """Rho offsets: walk (x, y) -> (y, 2x + 3y) applying (t+1)(t+2)/2."""
    offsets = [[0] * 5 for _ in range(5)]
    x, y = 1, 0
    for t in range(24):
        offsets[x][y] = ((t + 1) * (t + 2) // 2) % 64
        x, y = y, (2 * x + 3 * y) % 5
    return tuple(tuple(column) for column in offsets)


# Round constants for the iota step (one per round)
ROUND_CONSTANTS = _generate_round_constants()

# ROTATION_OFFSETS[x][y] is the left rotation applied to lane (x, y)
ROTATION_OFFSETS = _generate_rotation_offsets()

# Flattened per lane index for the inner loop
_LANE_ROTATIONS = tuple(ROTATION_OFFSETS[i % 5][i // 5] for i in range(25))

# Pi: lane (x, y) moves to (y, 2x + 3y)
PI_LANES = tuple(
    (i // 5) + 5 * ((2 * (i % 5) + 3 * (i // 5)) % 5) for i in range(25)
)


# =============================================================================
# STEP MAPPINGS
# =============================================================================

def _theta(a: list) -> list:
    c = [a[x] ^ a[x + 5] ^ a[x + 10] ^ a[x + 15] ^ a[x + 20] for x in range(5)]
    d = [c[(x - 1) % 5] ^ rotate_left_64(c[(x + 1) % 5], 1) for x in range(5)]
    return [a[i] ^ d[i % 5] for i in range(25)]


def _rho_pi(a: list) -> list:
    b = [0] * 25
    for i in range(25):
        b[PI_LANES[i]] = rotate_left_64(a[i], _LANE_ROTATIONS[i])
    return b


def _chi(b: list) -> list:
    a = [0] * 25
    for y in range(0, 25, 5):
        for x in range(5):
            a[y + x] = (b[y + x] ^ (~b[y + (x + 1) % 5] & b[y + (x + 2) % 5])) & MASK64
    return a


def keccak_f(state: list) -> list:
    """
    Apply the 24-round Keccak-f[1600] permutation.

    Each round: theta, rho, pi, chi, iota. The input list is left
    untouched; a new 25-lane state is returned.

    Args:
        state: 25 lanes of 64 bits

    Returns:
        Permuted 25-lane state
    """
    if len(state) != 25:
        raise ValueError("Keccak state must have exactly 25 lanes")

    a = list(state)
    for rc in ROUND_CONSTANTS:
        a = _chi(_rho_pi(_theta(a)))
        a[0] ^= rc
    return a


# =============================================================================
# SPONGE
# =============================================================================

class KeccakSponge:
    """
    Sponge construction over Keccak-f[1600].

    Usage:
        sponge = KeccakSponge(rate=136, suffix=KeccakSponge.SUFFIX_SHAKE)
        sponge.absorb(b'abc')
        output = sponge.squeeze(64)
    """

    # Domain separation bits, already including the first padding bit
    SUFFIX_KECCAK = 0x01
    SUFFIX_SHA3 = 0x06
    SUFFIX_SHAKE = 0x1F
    SUFFIX_CSHAKE = 0x04

    def __init__(self, rate: int, suffix: int):
        """
        Initialize an empty sponge.

        Args:
            rate: Bytes absorbed/squeezed per permutation call
            suffix: Domain separation suffix byte
        """
        if rate <= 0 or rate >= STATE_BYTES or rate % 8 != 0:
            raise ValueError("Rate must be a positive multiple of 8 bytes below 200")

        self.rate = rate
        self.capacity = STATE_BYTES - rate
        self.suffix = suffix
        self._state = [0] * 25
        self._buffer = bytearray()
        self._finalized = False
        self._squeeze_offset = 0

    def _absorb_block(self, block: bytes) -> None:
        """XOR one rate-sized block into the state and permute."""
        for lane in range(self.rate // 8):
            self._state[lane] ^= int.from_bytes(block[lane * 8:lane * 8 + 8], 'little')
        self._state = keccak_f(self._state)

    def _rate_bytes(self) -> bytes:
        return b''.join(
            self._state[lane].to_bytes(8, 'little') for lane in range(self.rate // 8)
        )

    def absorb(self, data: bytes) -> 'KeccakSponge':
        """
        Absorb data, permuting for every complete rate block.

        Returns:
            self, so calls can be chained
        """
        if self._finalized:
            raise ValueError("Cannot absorb after the sponge has been finalized")

        self._buffer.extend(data)
        offset = 0
        while len(self._buffer) - offset >= self.rate:
            self._absorb_block(self._buffer[offset:offset + self.rate])
            offset += self.rate
        del self._buffer[:offset]
        return self

    def pad_and_finalize(self) -> None:
        """
        Apply multi-rate padding: suffix bits, zeros, final 1 bit.

        The pending buffer is always shorter than the rate here, so the
        padded tail is exactly one block.
        """
        if self._finalized:
            return

        block = bytearray(self.rate)
        block[:len(self._buffer)] = self._buffer
        block[len(self._buffer)] ^= self.suffix
        block[self.rate - 1] ^= 0x80
        self._absorb_block(block)

        self._buffer = bytearray()
        self._finalized = True
        self._squeeze_offset = 0

    def squeeze(self, n: int) -> bytes:
        """
        Return the next n output bytes.

        Args:
            n: Number of bytes to produce

        Returns:
            n bytes of sponge output (empty for n == 0)
        """
        if n < 0:
            raise ValueError("Cannot squeeze a negative number of bytes")
        if n == 0:
            return b''

        self.pad_and_finalize()

        output = bytearray()
        while len(output) < n:
            if self._squeeze_offset == self.rate:
                self._state = keccak_f(self._state)
                self._squeeze_offset = 0
            take = min(n - len(output), self.rate - self._squeeze_offset)
            block = self._rate_bytes()
            output.extend(block[self._squeeze_offset:self._squeeze_offset + take])
            self._squeeze_offset += take
        return bytes(output)
