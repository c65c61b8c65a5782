"""Hashing and ECDSA helpers for blockchain curriculum checks.

Provides:
- SHA-256 hex digests of block and transaction content
- ECDSA key derivation, signing and verification over a configurable curve
  (NIST P-192 by default)

Keys and signatures travel as hex strings, the way learner projects store
them in their JSON files:

    private_key = generate_private_key()
    public_key = get_public_key_from_private(private_key)
    signature = generate_signature(private_key, "payload")
    assert validate_signature(public_key, "payload", signature)
"""

from __future__ import annotations

import hashlib
import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, utils

from harness.core.config import get_settings
from harness.core.errors import InvalidInputError

logger = logging.getLogger(__name__)

_CURVES: dict[str, type[ec.EllipticCurve]] = {
    "secp192r1": ec.SECP192R1,
    "secp256r1": ec.SECP256R1,
    "secp256k1": ec.SECP256K1,
}

# Hex length of a SHA-256 digest
_DIGEST_HEX_LENGTH = 64


def _curve(name: str | None = None) -> ec.EllipticCurve:
    name = name or get_settings().signature_curve
    try:
        return _CURVES[name]()
    except KeyError:
        raise InvalidInputError(f"Unsupported curve: {name}")


def _to_bytes(content: str | bytes) -> bytes:
    return content.encode("utf-8") if isinstance(content, str) else content


def _signing_input(content: str | bytes) -> tuple[bytes, ec.ECDSA]:
    """Bytes to sign and the ECDSA scheme for them.

    A 64-character hex string is a SHA-256 digest (block and transaction
    hashes) and is signed as-is, the way elliptic signs hex messages.
    Anything else is hashed with SHA-256 first.
    """
    if isinstance(content, str) and len(content) == _DIGEST_HEX_LENGTH:
        try:
            return bytes.fromhex(content), ec.ECDSA(utils.Prehashed(hashes.SHA256()))
        except ValueError:
            pass
    return _to_bytes(content), ec.ECDSA(hashes.SHA256())


def _from_hex(value: str, what: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{what} is not valid hex") from e


def generate_hash(content: str | bytes) -> str:
    """SHA-256 hex digest of ``content``."""
    return hashlib.sha256(_to_bytes(content)).hexdigest()


def generate_private_key(curve: str | None = None) -> str:
    """Create a fresh private key, returned as hex."""
    key = ec.generate_private_key(_curve(curve))
    return format(key.private_numbers().private_value, "x")


def _load_private_key(private_key: str, curve: str | None) -> ec.EllipticCurvePrivateKey:
    try:
        value = int(private_key, 16)
    except (TypeError, ValueError) as e:
        raise InvalidInputError("Private key is not valid hex") from e
    try:
        return ec.derive_private_key(value, _curve(curve))
    except ValueError as e:
        raise InvalidInputError(f"Private key out of range for curve: {e}") from e


def _load_public_key(public_key: str, curve: str | None) -> ec.EllipticCurvePublicKey:
    point = _from_hex(public_key, "Public key")
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(_curve(curve), point)
    except ValueError as e:
        raise InvalidInputError(f"Public key is not a point on the curve: {e}") from e


def get_public_key_from_private(private_key: str, curve: str | None = None) -> str:
    """Uncompressed SEC1 public point (``04 || X || Y``) as hex."""
    key = _load_private_key(private_key, curve)
    point = key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    return point.hex()


def generate_signature(private_key: str, content: str | bytes, curve: str | None = None) -> str:
    """DER-encoded ECDSA signature of ``content`` as hex.

    Hex SHA-256 digests are signed directly; other content is hashed first.
    """
    key = _load_private_key(private_key, curve)
    data, scheme = _signing_input(content)
    signature = key.sign(data, scheme)
    return signature.hex()


def validate_signature(
    public_key: str,
    content: str | bytes,
    signature: str,
    curve: str | None = None,
) -> bool:
    """Check a hex DER signature against ``content`` and a hex public key.

    A well-formed signature that does not match returns False. Malformed
    key hex raises ``InvalidInputError``.
    """
    key = _load_public_key(public_key, curve)
    raw_signature = _from_hex(signature, "Signature")
    data, scheme = _signing_input(content)
    try:
        key.verify(raw_signature, data, scheme)
    except InvalidSignature:
        logger.debug("Signature rejected")
        return False
    return True
