"""
Condition types, as identified on the wire.
"""

from enum import Enum
from typing import FrozenSet, Union

from .errors import ConditionDecodeError


class ConditionType(Enum):
    PREIMAGE = 0
    PREFIX = 1
    THRESHOLD = 2
    SECP256K1 = 5
    SECP256K1_HASH = 6
    EVAL = 15
    # Not a type of its own: marks a condition that is already in compact form.
    ANON = 255

    @property
    def has_subtypes(self) -> bool:
        """Whether conditions of this type may embed conditions of other types."""
        return self in [ConditionType.THRESHOLD, ConditionType.PREFIX]


def condition_type_from_id(type_id: int) -> ConditionType:
    """Get the condition type from its numeric identifier."""
    try:
        return ConditionType(type_id)
    except ValueError:
        raise ConditionDecodeError(f"Unknown condition type id: {type_id}")


def unpack_subtypes(bits: bytes) -> FrozenSet[Union[ConditionType, int]]:
    """Get the set of condition types from the body of a DER bit string.

    The first byte is the number of unused trailing bits. Each following bit, most
    significant first, flags the presence of the type id at its position. Ids with no
    known type are kept as integers.
    """
    subtypes = set()
    for i, byte in enumerate(bits[1:]):
        for bit in range(8):
            if byte & (1 << (7 - bit)):
                type_id = i * 8 + bit
                try:
                    subtypes.add(ConditionType(type_id))
                except ValueError:
                    subtypes.add(type_id)
    return frozenset(subtypes)
