"""
Recursive decoders for fulfillments and compact conditions.

All decoders take a Reader positioned on the element to decode and the DecodeContext of the
current call. They either return a complete Condition or raise a ConditionDecodeError.
"""

import logging

from enum import IntFlag
from typing import List, Optional

from ..condition import (
    Anon,
    Condition,
    Eval,
    Preimage,
    Secp256k1,
    Secp256k1Hash,
    Threshold,
)
from ..errors import ConditionDecodeError
from ..fingerprint import pad_fingerprint
from ..key import parse_pubkey, parse_signature
from ..types import ConditionType, condition_type_from_id, unpack_subtypes
from .reader import Reader

logger = logging.getLogger(__name__)

MAX_COST = 2**64 - 1
MAX_THRESHOLD = 2**16 - 1


class DecodeFlags(IntFlag):
    """Options altering the accepted grammar. Unknown bits are ignored."""

    NONE = 0
    # Threshold conditions encode their threshold in a leading preimage fulfillment.
    MIXED_MODE = 1


class DecodeContext:
    """The configuration of a decoding call, along with the current nesting depth."""

    def __init__(self, flags=0, max_depth: Optional[int] = None, depth: int = 0):
        assert isinstance(flags, int)
        assert max_depth is None or (isinstance(max_depth, int) and max_depth >= 0)

        self.flags: int = int(flags)
        # None means unbounded.
        self.max_depth: Optional[int] = max_depth
        self.depth: int = depth

    def __repr__(self):
        return f"DecodeContext(flags={self.flags}, max_depth={self.max_depth}, depth={self.depth})"

    @property
    def mixed_mode(self) -> bool:
        return bool(self.flags & DecodeFlags.MIXED_MODE)

    def nested(self) -> "DecodeContext":
        """The context for decoding the subconditions of a threshold."""
        if self.max_depth is not None and self.depth >= self.max_depth:
            raise ConditionDecodeError(
                f"Maximum nesting depth exceeded: {self.max_depth}"
            )
        return DecodeContext(self.flags, self.max_depth, self.depth + 1)


def parse_fulfillment(reader: Reader, ctx: DecodeContext) -> Condition:
    """Decode the next fulfillment from {reader}, dispatching on its type id."""
    type_id, inner = reader.take_any()
    if type_id == ConditionType.PREIMAGE.value:
        cond = parse_preimage(inner)
    elif type_id == ConditionType.THRESHOLD.value:
        cond = parse_threshold(inner, ctx)
    elif type_id == ConditionType.SECP256K1.value:
        cond = parse_secp256k1(inner)
    elif type_id == ConditionType.SECP256K1_HASH.value:
        cond = parse_secp256k1hash(inner)
    elif type_id == ConditionType.EVAL.value:
        cond = parse_eval(inner)
    else:
        raise ConditionDecodeError("Invalid Condition ASN")
    inner.assert_empty()
    return cond


def parse_condition(reader: Reader, ctx: DecodeContext) -> Anon:
    """Decode the next compact condition from {reader}.

    The type id is the only element at this level, and all the others are within it.
    """
    type_id, inner = reader.take_any()
    cond_type = condition_type_from_id(type_id)
    reader.assert_empty()

    fingerprint = pad_fingerprint(inner.take_leaf(0), cond_type)
    cost = int.from_bytes(inner.take_leaf(1), "big", signed=True)
    if cost < 0 or cost > MAX_COST:
        raise ConditionDecodeError("Can't decode cost")
    subtypes = frozenset()
    if cond_type.has_subtypes:
        subtypes = unpack_subtypes(inner.take_leaf(2))
    inner.assert_empty()

    return Anon(cond_type, fingerprint, cost, subtypes)


def parse_single_condition(reader: Reader, ctx: DecodeContext) -> Anon:
    """Decode one compact condition out of a list of them.

    Unlike at the top level, compact conditions in a threshold are not alone in their
    container: each is split off into its own reader before decoding.
    """
    return parse_condition(reader.take_one(), ctx)


def parse_preimage(reader: Reader) -> Preimage:
    return Preimage(reader.take_leaf(0))


def _parse_keypair(reader: Reader, name: str):
    # Read both before validating anything, a misplaced element takes precedence.
    raw_pubkey, raw_sig = reader.take_leaf(0), reader.take_leaf(1)
    try:
        return parse_pubkey(raw_pubkey), parse_signature(raw_sig)
    except ConditionDecodeError as e:
        raise ConditionDecodeError(f"Bad ASN1 {name}: {e.message}") from e


def parse_secp256k1(reader: Reader) -> Secp256k1:
    pubkey, signature = _parse_keypair(reader, "secp256k1")
    return Secp256k1(pubkey, signature)


def parse_secp256k1hash(reader: Reader) -> Secp256k1Hash:
    """Same fields as a secp256k1 fulfillment. The public key hash is left unset."""
    pubkey, signature = _parse_keypair(reader, "secp256k1hash")
    return Secp256k1Hash(pubkey=pubkey, signature=signature, pubkey_hash=None)


def parse_eval(reader: Reader) -> Eval:
    code = reader.take_leaf(0)
    reader.assert_empty()
    return Eval(code)


def parse_threshold(reader: Reader, ctx: DecodeContext) -> Threshold:
    sub_ctx = ctx.nested()
    ffills = reader.take_container(0).take_many(parse_fulfillment, sub_ctx)
    conds = reader.take_container(1).take_many(parse_single_condition, sub_ctx)
    reader.assert_empty()

    if ctx.mixed_mode:
        return assemble_mixed_threshold(ffills, conds)
    return assemble_threshold(ffills, conds)


def assemble_threshold(ffills: List[Condition], conds: List[Anon]) -> Threshold:
    """The number of fulfillments provided is the threshold."""
    if len(ffills) > MAX_THRESHOLD:
        raise ConditionDecodeError("Too many fulfillments")
    logger.debug(
        "Threshold of %d with %d unfulfilled conditions", len(ffills), len(conds)
    )
    return Threshold(len(ffills), ffills + conds)


def assemble_mixed_threshold(ffills: List[Condition], conds: List[Anon]) -> Threshold:
    """The first fulfillment is a preimage whose first byte is the threshold."""
    if len(ffills) == 0:
        raise ConditionDecodeError("no fulfillments")
    sentinel, ffills = ffills[0], ffills[1:]
    if not isinstance(sentinel, Preimage) or len(sentinel.preimage) == 0:
        raise ConditionDecodeError("incorrect mixed mode threshold condition")

    threshold = sentinel.preimage[0]
    if threshold > len(ffills) + len(conds):
        raise ConditionDecodeError("incorrect mixed mode threshold value")

    logger.debug(
        "Mixed mode threshold of %d with %d fulfillments and %d conditions",
        threshold,
        len(ffills),
        len(conds),
    )
    return Threshold(threshold, ffills + [c.to_anon() for c in conds])
