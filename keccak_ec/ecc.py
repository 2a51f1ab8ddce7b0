"""
Elliptic Curve Arithmetic on E-521

Implements:
- ECPoint class for curve point representation
- Point addition, doubling, and scalar multiplication
- E-521 Edwards curve parameters
- Random key pair generation

NO external crypto libraries used. Only standard library.
"""

from .utils import mod_inverse, mod_sqrt, secure_random_below


# =============================================================================
# E-521 CURVE PARAMETERS
# =============================================================================

# Edwards curve x² + y² = 1 + d·x²·y² over the Mersenne prime 2^521 - 1
E521 = {
    # Prime field modulus
    'p': (1 << 521) - 1,

    # Edwards coefficient
    'd': -376014,

    # Order of the base point (prime)
    'r': (1 << 519) - 337554763258501705789107630418782636071904961214051226618635150085779108655765,

    # Cofactor: #E = 4r
    'h': 4,

    # Base point x-coordinate; y is the unique even root
    'Gx': 4,
    'Gy_lsb': 0,

    # Bytes per coordinate
    'size': 66,

    # Curve name for reference
    'name': 'E-521'
}


class ECPoint:
    """
    Represents an affine point on an Edwards curve.

    The neutral element is (0, 1); there is no separate point at
    infinity because the Edwards addition law is complete.
    """

    def __init__(self, x: int, y: int, curve: dict):
        """
        Initialize a point on the curve.

        Args:
            x: X-coordinate
            y: Y-coordinate
            curve: Curve parameters dict containing p, d, r, etc.
        """
        p = curve['p']
        self.x = x % p
        self.y = y % p
        self.curve = curve

    @staticmethod
    def identity(curve: dict) -> 'ECPoint':
        """Create the neutral element (0, 1)."""
        return ECPoint(0, 1, curve)

    @staticmethod
    def from_x(x: int, lsb: int, curve: dict) -> 'ECPoint':
        """
        Recover a point from its x-coordinate and the parity of y.

        y = sqrt((1 - x²) / (1 - d·x²)) mod p

        Raises:
            ValueError: If no point with that x-coordinate exists
        """
        p = curve['p']
        d = curve['d']
        x %= p
        x2 = (x * x) % p
        v = ((1 - x2) * mod_inverse(1 - d * x2, p)) % p
        y = mod_sqrt(v, p, lsb)
        if y is None:
            raise ValueError("No curve point has the given x-coordinate")
        return ECPoint(x, y, curve)

    @property
    def is_identity(self) -> bool:
        return self.x == 0 and self.y == 1

    def is_on_curve(self) -> bool:
        """
        Verify that this point lies on the curve.

        Checks: x² + y² ≡ 1 + d·x²·y² (mod p)
        """
        p = self.curve['p']
        d = self.curve['d']

        x2 = (self.x * self.x) % p
        y2 = (self.y * self.y) % p

        return (x2 + y2) % p == (1 + d * x2 * y2) % p

    def __eq__(self, other: 'ECPoint') -> bool:
        """Check if two points are equal."""
        if not isinstance(other, ECPoint):
            return False
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        if self.is_identity:
            return "ECPoint(identity)"
        return f"ECPoint(x={hex(self.x)}, y={hex(self.y)})"

    def negate(self) -> 'ECPoint':
        """Return the negation of this point: -(x, y) = (-x mod p, y)."""
        return ECPoint(-self.x, self.y, self.curve)

    def to_bytes(self) -> bytes:
        """
        Serialize point to bytes (uncompressed format).
        Format: 0x04 || x (66 bytes) || y (66 bytes)
        """
        size = self.curve['size']
        return b'\x04' + self.x.to_bytes(size, 'big') + self.y.to_bytes(size, 'big')

    @staticmethod
    def from_bytes(data: bytes, curve: dict) -> 'ECPoint':
        """
        Deserialize and validate a point.

        Raises:
            ValueError: If the encoding is malformed or the point is not on the curve
        """
        size = curve['size']
        if len(data) != 1 + 2 * size:
            raise ValueError(f"Encoded point must be {1 + 2 * size} bytes")
        if data[0] != 0x04:
            raise ValueError("Only uncompressed point format supported")
        x = int.from_bytes(data[1:1 + size], 'big')
        y = int.from_bytes(data[1 + size:], 'big')
        if x >= curve['p'] or y >= curve['p']:
            raise ValueError("Point coordinates out of range")
        point = ECPoint(x, y, curve)
        if not point.is_on_curve():
            raise ValueError("Point is not on the curve")
        return point


class ECC:
    """
    Elliptic curve group operations.

    Provides:
    - Point arithmetic (add, double, multiply)
    - Key pair generation

    Usage:
        ecc = ECC()  # Uses E-521 by default
        private_key, public_key = ecc.generate_keypair()
    """

    def __init__(self, curve: dict = None):
        """
        Initialize ECC with curve parameters.

        Args:
            curve: Curve parameters dict (defaults to E-521)
        """
        self.curve = curve if curve is not None else E521
        self.r = self.curve['r']

        # Create generator point
        self.G = ECPoint.from_x(self.curve['Gx'], self.curve['Gy_lsb'], self.curve)

        # Verify generator is on curve
        if not self.G.is_on_curve():
            raise ValueError("Generator point not on curve")

    @property
    def identity(self) -> ECPoint:
        return ECPoint.identity(self.curve)

    # =========================================================================
    # POINT ARITHMETIC
    # =========================================================================

    def point_add(self, P: ECPoint, Q: ECPoint) -> ECPoint:
        """
        Add two points with the Edwards addition law.

        With t = d·x₁·x₂·y₁·y₂:
            x₃ = (x₁y₂ + y₁x₂) / (1 + t) mod p
            y₃ = (y₁y₂ - x₁x₂) / (1 - t) mod p

        The law is complete for non-square d: it also covers doubling,
        the neutral element and P + (-P).

        Args:
            P: First point
            Q: Second point

        Returns:
            Sum point R = P + Q
        """
        if P.is_identity:
            return Q
        if Q.is_identity:
            return P

        p = self.curve['p']
        d = self.curve['d']

        t = (d * P.x * Q.x * P.y * Q.y) % p
        num_x = (P.x * Q.y + P.y * Q.x) % p
        num_y = (P.y * Q.y - P.x * Q.x) % p

        # One inversion for both denominators
        den_x = (1 + t) % p
        den_y = (1 - t) % p
        inv = mod_inverse(den_x * den_y, p)

        x3 = (num_x * den_y * inv) % p
        y3 = (num_y * den_x * inv) % p

        return ECPoint(x3, y3, self.curve)

    def point_double(self, P: ECPoint) -> ECPoint:
        """Double a point: R = P + P."""
        return self.point_add(P, P)

    def scalar_multiply(self, k: int, P: ECPoint) -> ECPoint:
        """
        Scalar multiplication using the Double-and-Add algorithm.

        Computes Q = kP. Negative k multiplies -P; k is not reduced,
        so multiplying by the group order really walks the full scalar.

        Args:
            k: Scalar multiplier (any integer)
            P: Point to multiply

        Returns:
            Result point Q = kP
        """
        if k == 0 or P.is_identity:
            return ECPoint.identity(self.curve)

        if k < 0:
            k = -k
            P = P.negate()

        R = ECPoint.identity(self.curve)

        # Process bits from MSB to LSB
        for i in range(k.bit_length() - 1, -1, -1):
            R = self.point_double(R)
            if (k >> i) & 1:
                R = self.point_add(R, P)

        return R

    # =========================================================================
    # KEY PAIRS
    # =========================================================================

    def public_key(self, private_key: int) -> ECPoint:
        """Public point V = s·G."""
        return self.scalar_multiply(private_key, self.G)

    def generate_keypair(self) -> tuple:
        """
        Generate a random key pair.

        Private key: Random integer s in [1, r-1]
        Public key: Point V = sG

        Returns:
            (private_key, public_key) tuple
        """
        private_key = secure_random_below(self.r - 1) + 1
        public_key = self.public_key(private_key)

        # Sanity check
        if not public_key.is_on_curve():
            raise RuntimeError("Generated public key not on curve")

        return private_key, public_key

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def public_key_to_bytes(self, public_key: ECPoint) -> bytes:
        """Serialize public key to bytes."""
        return public_key.to_bytes()

    def public_key_from_bytes(self, data: bytes) -> ECPoint:
        """Deserialize and validate a public key."""
        return ECPoint.from_bytes(data, self.curve)
