"""
Crypto-conditions values.

A condition is a commitment to a rule. When the data proving the rule is met is known, it
is represented by one of the fulfillment-bearing variants (Preimage, Secp256k1,
Secp256k1Hash, Threshold, Eval). When only the commitment is known, it is an Anon: its type,
fingerprint, cost and subtypes.

The set of variants is closed: it is fixed by the wire format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple, Union

import coincurve

from .types import ConditionType


class Condition:
    """A crypto-condition. Only the variants below may derive from it."""

    type_id: ConditionType

    def to_anon(self) -> Anon:
        """Get the compact form of this condition."""
        # Computing the fingerprint of a fulfillment needs the encoder, which lives elsewhere.
        raise NotImplementedError(
            f"Cannot compute the compact form of a {type(self).__name__} condition"
        )


@dataclass(frozen=True)
class Preimage(Condition):
    preimage: bytes

    @property
    def type_id(self) -> ConditionType:
        return ConditionType.PREIMAGE


def _pubkey_bytes(pubkey):
    return pubkey.format() if pubkey is not None else None


@dataclass(frozen=True, eq=False)
class Secp256k1(Condition):
    pubkey: coincurve.PublicKey
    # Set once fulfilled
    signature: Optional[bytes] = None

    @property
    def type_id(self) -> ConditionType:
        return ConditionType.SECP256K1

    def __eq__(self, other):
        if not isinstance(other, Secp256k1):
            return NotImplemented
        return (
            _pubkey_bytes(self.pubkey) == _pubkey_bytes(other.pubkey)
            and self.signature == other.signature
        )

    def __repr__(self):
        sig = self.signature.hex() if self.signature is not None else None
        return f"Secp256k1(pubkey={self.pubkey.format().hex()}, signature={sig})"


@dataclass(frozen=True, eq=False)
class Secp256k1Hash(Condition):
    """Like Secp256k1, but committing to the hash of the public key.

    The public key hash is never part of a fulfillment, it is left for the caller to compute.
    """

    pubkey: Optional[coincurve.PublicKey] = None
    signature: Optional[bytes] = None
    pubkey_hash: Optional[bytes] = None

    @property
    def type_id(self) -> ConditionType:
        return ConditionType.SECP256K1_HASH

    def __eq__(self, other):
        if not isinstance(other, Secp256k1Hash):
            return NotImplemented
        return (
            _pubkey_bytes(self.pubkey) == _pubkey_bytes(other.pubkey)
            and self.signature == other.signature
            and self.pubkey_hash == other.pubkey_hash
        )

    def __repr__(self):
        pubkey = self.pubkey.format().hex() if self.pubkey is not None else None
        sig = self.signature.hex() if self.signature is not None else None
        pkh = self.pubkey_hash.hex() if self.pubkey_hash is not None else None
        return f"Secp256k1Hash(pubkey={pubkey}, signature={sig}, pubkey_hash={pkh})"


@dataclass(frozen=True)
class Threshold(Condition):
    threshold: int
    subconditions: Tuple[Condition, ...]

    def __post_init__(self):
        object.__setattr__(self, "subconditions", tuple(self.subconditions))
        assert all(isinstance(c, Condition) for c in self.subconditions)
        assert 0 <= self.threshold < 2**16
        assert self.threshold <= len(self.subconditions)

    @property
    def type_id(self) -> ConditionType:
        return ConditionType.THRESHOLD


@dataclass(frozen=True)
class Eval(Condition):
    code: bytes

    @property
    def type_id(self) -> ConditionType:
        return ConditionType.EVAL


def _subtype_id(subtype):
    return subtype.value if isinstance(subtype, ConditionType) else subtype


@dataclass(frozen=True)
class Anon(Condition):
    """A condition in compact form. Never carries fulfillment data."""

    cond_type: ConditionType
    fingerprint: bytes
    cost: int
    # Known types as ConditionType, unknown type ids as int
    subtypes: FrozenSet[Union[ConditionType, int]] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "subtypes", frozenset(self.subtypes))
        assert isinstance(self.cond_type, ConditionType)
        assert 0 <= self.cost < 2**64

    @property
    def type_id(self) -> ConditionType:
        return self.cond_type

    def to_anon(self) -> Anon:
        return self

    def __repr__(self):
        subtypes = [
            s.name if isinstance(s, ConditionType) else s
            for s in sorted(self.subtypes, key=_subtype_id)
        ]
        return (
            f"Anon(cond_type={self.cond_type.name}, fingerprint={self.fingerprint.hex()},"
            f" cost={self.cost}, subtypes={subtypes})"
        )
