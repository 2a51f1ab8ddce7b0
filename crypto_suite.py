"""
Keccak / E-521 Crypto Suite

Integrates all cryptographic components:
- SHA3, cSHAKE256 and KMACXOF256 for hashing and authentication
- E-521 key pairs (random or passphrase-derived)
- Schnorr signatures for authenticity

This is the high-level API plus the command-line front end. The
keccak_ec package never touches files or formats text; that happens here.
"""

import argparse
import sys
from pathlib import Path

from keccak_ec import ConfigurationError, ECPoint, HashMode, Schnorr, compute


class CryptoSuite:
    """
    Keccak / E-521 Crypto Suite.

    Provides a complete workflow for:
    1. Hashing with SHA3, cSHAKE256 or KMACXOF256 selected by name
    2. Deriving a signing key pair from a passphrase
    3. Signing messages and verifying signatures

    Usage (Signer - Alice):
        suite = CryptoSuite()
        private_key, public_key = suite.keypair_from_passphrase('correct horse')
        signature = suite.sign(private_key, b'hello')
        # Publish suite.export_public_key(public_key) and the signature

    Usage (Verifier - Bob):
        suite = CryptoSuite()
        alice_public = suite.import_public_key(public_key_bytes)
        valid = suite.verify(signature, alice_public, b'hello')
    """

    def __init__(self):
        """Initialize the suite with the signature scheme."""
        self.schnorr = Schnorr()

    # =========================================================================
    # HASHING
    # =========================================================================

    def hash(self, mode_name: str, data: bytes, bit_length: int,
             customization: str = '', key: bytes = None) -> bytes:
        """
        Hash data with a mode selected by name.

        Args:
            mode_name: 'SHA3', 'cSHAKE256' or 'KMACXOF256'
            data: Input bytes
            bit_length: Output length in bits (multiple of 8)
            customization: Customization string for cSHAKE256/KMACXOF256
            key: Key bytes for KMACXOF256

        Returns:
            Output bytes

        Raises:
            ConfigurationError: For unknown modes or invalid parameters
        """
        mode = HashMode.from_name(mode_name)
        return compute(mode, data, bit_length, customization, key)

    # =========================================================================
    # KEYS
    # =========================================================================

    def generate_keypair(self) -> tuple:
        """
        Generate a random signing key pair.

        Returns:
            (private_key: int, public_key: ECPoint)
        """
        return self.schnorr.generate_keypair()

    def keypair_from_passphrase(self, passphrase) -> tuple:
        """
        Derive a signing key pair from a passphrase.

        Returns:
            (private_key: int, public_key: ECPoint)
        """
        return self.schnorr.keypair_from_passphrase(passphrase)

    def export_public_key(self, public_key: ECPoint) -> bytes:
        """Export a public key as bytes for sharing."""
        return self.schnorr.public_key_to_bytes(public_key)

    def import_public_key(self, data: bytes) -> ECPoint:
        """Import a public key from bytes (validated against the curve)."""
        return self.schnorr.public_key_from_bytes(data)

    # =========================================================================
    # SIGNATURES
    # =========================================================================

    def sign(self, private_key: int, message: bytes) -> bytes:
        """Sign message bytes, returning a 130-byte signature."""
        return self.schnorr.sign(private_key, message)

    def verify(self, signature: bytes, public_key: ECPoint, message: bytes) -> bool:
        """Verify a signature; malformed signatures simply fail."""
        return self.schnorr.verify(signature, public_key, message)

    def sign_file(self, filepath: str, private_key: int) -> bytes:
        """Sign a file's contents."""
        return self.sign(private_key, Path(filepath).read_bytes())

    def verify_file(self, filepath: str, signature: bytes, public_key: ECPoint) -> bool:
        """Verify a file's signature."""
        return self.verify(signature, public_key, Path(filepath).read_bytes())


# =============================================================================
# COMMAND LINE
# =============================================================================

def _read_input(input_mode: str, source: str) -> bytes:
    if input_mode == 'file':
        path = Path(source)
        if not path.is_file():
            raise ConfigurationError(f"Input file not found: {source}")
        return path.read_bytes()
    return source.encode('utf-8')


def _read_file(path: str, what: str) -> bytes:
    p = Path(path)
    if not p.is_file():
        raise ConfigurationError(f"{what} not found: {path}")
    return p.read_bytes()


def _render(data: bytes, upper: bool) -> str:
    text = data.hex()
    return text.upper() if upper else text


def _write_output(data: bytes, output: str) -> None:
    if output:
        Path(output).write_bytes(data)
        print(f"Output successfully written to {output}")


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--input-mode', choices=('file', 'string'), required=True,
                        help="Treat --input as a file path or a literal string")
    parser.add_argument('--input', required=True, help="Input file path or string")


def _build_cli() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='keccak-ec',
        description="SHA3 / cSHAKE256 / KMACXOF256 hashing and E-521 Schnorr signatures"
    )
    sub = parser.add_subparsers(dest='command', required=True)

    hash_cmd = sub.add_parser('hash', help="Hash input with SHA3, cSHAKE256 or KMACXOF256")
    hash_cmd.add_argument('--op', required=True,
                          help="Mode of operation: " + ', '.join(m.value for m in HashMode))
    hash_cmd.add_argument('--bits', type=int, required=True, help="Output length in bits")
    _add_input_arguments(hash_cmd)
    hash_cmd.add_argument('--custom', default='', help="Customization string")
    hash_cmd.add_argument('--key-file', help="Key file (KMACXOF256 only)")
    hash_cmd.add_argument('--output', help="Write raw output bytes to this file")
    hash_cmd.add_argument('--upper', action='store_true', help="Print uppercase hex")

    keygen_cmd = sub.add_parser('keygen', help="Derive a public key from a passphrase")
    keygen_cmd.add_argument('--passphrase', required=True)
    keygen_cmd.add_argument('--output', help="Write the encoded public key to this file")

    sign_cmd = sub.add_parser('sign', help="Sign input with a passphrase-derived key")
    sign_cmd.add_argument('--passphrase', required=True)
    _add_input_arguments(sign_cmd)
    sign_cmd.add_argument('--output', help="Write the 130-byte signature to this file")

    verify_cmd = sub.add_parser('verify', help="Verify a signature over input")
    verify_cmd.add_argument('--public-key-file', required=True)
    verify_cmd.add_argument('--signature-file', required=True)
    _add_input_arguments(verify_cmd)

    sub.add_parser('demo', help="Run a sign/verify walkthrough")
    return parser


def _cmd_hash(suite: CryptoSuite, args) -> int:
    if args.bits % 8 != 0:
        raise ConfigurationError("Output bit length must be evenly divisible by 8 (bytewise).")
    mode = HashMode.from_name(args.op)
    key = None
    if mode is HashMode.KMACXOF256:
        if not args.key_file:
            raise ConfigurationError("KMACXOF256 mode requires a key file.")
        key = _read_file(args.key_file, "Key file")

    data = _read_input(args.input_mode, args.input)
    out = compute(mode, data, args.bits, args.custom, key)

    print(f"{mode.value} {args.bits} bits ({args.input}):")
    print(_render(out, args.upper))
    _write_output(out, args.output)
    return 0


def _cmd_keygen(suite: CryptoSuite, args) -> int:
    _, public_key = suite.keypair_from_passphrase(args.passphrase)
    encoded = suite.export_public_key(public_key)
    print(_render(encoded, False))
    _write_output(encoded, args.output)
    return 0


def _cmd_sign(suite: CryptoSuite, args) -> int:
    private_key, _ = suite.keypair_from_passphrase(args.passphrase)
    signature = suite.sign(private_key, _read_input(args.input_mode, args.input))
    print(_render(signature, False))
    _write_output(signature, args.output)
    return 0


def _cmd_verify(suite: CryptoSuite, args) -> int:
    encoded_key = _read_file(args.public_key_file, "Public key file")
    try:
        public_key = suite.import_public_key(encoded_key)
    except ValueError as e:
        raise ConfigurationError(f"Invalid public key: {e}") from e

    signature = _read_file(args.signature_file, "Signature file")
    valid = suite.verify(signature, public_key, _read_input(args.input_mode, args.input))
    print("Signature valid" if valid else "Signature INVALID")
    return 0 if valid else 1


def _cmd_demo(suite: CryptoSuite, args) -> int:
    print("=" * 60)
    print("Keccak / E-521 Crypto Suite Demo")
    print("=" * 60)

    print("\n[1] Hashing...")
    print(f"  SHA3-256(''): {suite.hash('SHA3', b'', 256).hex()}")
    print(f"  cSHAKE256('', 256, S='Email Signature'): "
          f"{suite.hash('cSHAKE256', b'', 256, 'Email Signature').hex()}")

    print("\n[2] Deriving Alice's key pair from a passphrase...")
    private_key, public_key = suite.keypair_from_passphrase('alice passphrase')
    print(f"  Public key (first 8 bytes): {suite.export_public_key(public_key)[:8].hex()}")

    print("\n[3] Alice signs a message...")
    message = b"Meet me at the usual place at noon."
    signature = suite.sign(private_key, message)
    print(f"  Signature size: {len(signature)} bytes")

    print("\n[4] Bob verifies...")
    print(f"  Signature valid: {suite.verify(signature, public_key, message)}")
    print(f"  Tampered message valid: {suite.verify(signature, public_key, message + b'!')}")

    print("\n" + "=" * 60)
    print("Demo completed successfully!")
    print("=" * 60)
    return 0


_COMMANDS = {
    'hash': _cmd_hash,
    'keygen': _cmd_keygen,
    'sign': _cmd_sign,
    'verify': _cmd_verify,
    'demo': _cmd_demo,
}


def main(argv=None) -> int:
    parser = _build_cli()
    args = parser.parse_args(argv)
    suite = CryptoSuite()
    try:
        return _COMMANDS[args.command](suite, args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
