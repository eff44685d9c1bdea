"""Build binary fulfillments and conditions for the tests."""

import coincurve

from asn1crypto.parser import emit

CONTEXT_SPECIFIC = 2


def leaf(tag, contents):
    return emit(CONTEXT_SPECIFIC, 0, tag, contents)


def container(tag, *children):
    return emit(CONTEXT_SPECIFIC, 1, tag, b"".join(children))


def cost_bytes(cost):
    return cost.to_bytes(cost.bit_length() // 8 + 1, "big", signed=True)


def preimage_ffill(preimage):
    return container(0, leaf(0, preimage))


def secp256k1_ffill(pubkey, sig, type_id=5):
    return container(type_id, leaf(0, pubkey), leaf(1, sig))


def eval_ffill(code):
    return container(15, leaf(0, code))


def threshold_ffill(ffills, conds):
    return container(2, container(0, *ffills), container(1, *conds))


def compact_condition(type_id, fingerprint, cost, subtypes=None):
    children = [leaf(0, fingerprint), leaf(1, cost_bytes(cost))]
    if subtypes is not None:
        children.append(leaf(2, subtypes))
    return container(type_id, *children)


def keypair(seed=1):
    """A public key and a compact signature made with it."""
    privkey = coincurve.PrivateKey(bytes([seed]) * 32)
    # Drop the recovery id
    sig = privkey.sign_recoverable(b"crypto-conditions")[:64]
    return privkey.public_key.format(), sig
