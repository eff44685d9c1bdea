import coincurve

from coincurve.ecdsa import deserialize_compact

from .errors import ConditionDecodeError

COMPACT_SIGNATURE_SIZE = 64
RAW_PUBKEY_SIZE = 64


def parse_pubkey(key: bytes) -> coincurve.PublicKey:
    """Parse a secp256k1 public key.

    Compressed (33 bytes), uncompressed (65 bytes) and raw uncompressed keys without the
    0x04 prefix (64 bytes) are accepted.
    """
    assert isinstance(key, bytes)
    if len(key) == RAW_PUBKEY_SIZE:
        key = b"\x04" + key
    if len(key) not in (33, 65):
        raise ConditionDecodeError(f"Invalid public key length: {len(key)}")
    try:
        return coincurve.PublicKey(key)
    except ValueError as e:
        raise ConditionDecodeError(f"Public key parsing error: '{str(e)}'") from e


def parse_signature(sig: bytes) -> bytes:
    """Check a compact (r || s) ECDSA signature is well-formed and return it.

    Both r and s must be below the curve order.
    """
    assert isinstance(sig, bytes)
    if len(sig) != COMPACT_SIGNATURE_SIZE:
        raise ConditionDecodeError(f"Invalid signature length: {len(sig)}")
    try:
        deserialize_compact(sig)
    except ValueError as e:
        raise ConditionDecodeError(f"Signature parsing error: '{str(e)}'") from e
    return sig
