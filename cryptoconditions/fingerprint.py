"""
Fingerprints are stored on 32 bytes regardless of the condition type, but the
secp256k1hash fingerprint only has 20 significant bytes on the wire.
"""

from .types import ConditionType

FINGERPRINT_SIZE = 32
PUBKEY_HASH_SIZE = 20


def pad_fingerprint(fingerprint: bytes, cond_type: ConditionType) -> bytes:
    """Right-pad a secp256k1hash fingerprint with zeros up to 32 bytes."""
    if cond_type == ConditionType.SECP256K1_HASH and len(fingerprint) < FINGERPRINT_SIZE:
        return fingerprint + bytes(FINGERPRINT_SIZE - len(fingerprint))
    return bytes(fingerprint)


def shrink_fingerprint(fingerprint: bytes, cond_type: ConditionType) -> bytes:
    """Truncate a fingerprint to its size on the wire for this condition type."""
    if cond_type == ConditionType.SECP256K1_HASH:
        return bytes(fingerprint[:PUBKEY_HASH_SIZE])
    return bytes(fingerprint[:FINGERPRINT_SIZE])
