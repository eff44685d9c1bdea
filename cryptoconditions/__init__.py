from . import condition, decoding, errors, fingerprint, key, types
from .condition import (
    Anon,
    Condition,
    Eval,
    Preimage,
    Secp256k1,
    Secp256k1Hash,
    Threshold,
)
from .decoding import DecodeFlags, decode_condition, decode_fulfillment
from .errors import ConditionDecodeError
from .fingerprint import pad_fingerprint, shrink_fingerprint
from .types import ConditionType, condition_type_from_id

__version__ = "0.1.0"

MIXED_MODE = DecodeFlags.MIXED_MODE

__all__ = [
    "Anon",
    "Condition",
    "ConditionDecodeError",
    "ConditionType",
    "DecodeFlags",
    "Eval",
    "MIXED_MODE",
    "Preimage",
    "Secp256k1",
    "Secp256k1Hash",
    "Threshold",
    "condition",
    "condition_type_from_id",
    "decode_condition",
    "decode_fulfillment",
    "decoding",
    "errors",
    "fingerprint",
    "key",
    "pad_fingerprint",
    "shrink_fingerprint",
    "types",
]
