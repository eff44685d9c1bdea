import logging

from typing import Optional

from ..condition import Anon, Condition
from ..errors import ConditionDecodeError
from .parsing import DecodeContext, DecodeFlags, parse_condition, parse_fulfillment
from .reader import Reader

logger = logging.getLogger(__name__)


def decode_fulfillment(buf: bytes, flags: int = 0, max_depth: Optional[int] = None) -> Condition:
    """Decode a fulfillment from its binary representation.

    :param flags: a combination of DecodeFlags. DecodeFlags.MIXED_MODE selects the mixed mode
                  encoding of thresholds.
    :param max_depth: the maximum number of nested threshold levels. Unbounded if None.
    """
    ctx = DecodeContext(flags, max_depth)
    try:
        reader = Reader.from_bytes(buf)
        cond = parse_fulfillment(reader, ctx)
        reader.assert_empty()
    except ConditionDecodeError as e:
        logger.debug("Rejected fulfillment: %s", e.message)
        raise
    except RecursionError as e:
        # Nesting is only bounded by the interpreter's stack when max_depth is None.
        logger.debug("Rejected fulfillment: nested too deep")
        raise ConditionDecodeError("Maximum nesting depth exceeded") from e
    return cond


def decode_condition(buf: bytes, max_depth: Optional[int] = None) -> Anon:
    """Decode a condition from its compact binary representation."""
    ctx = DecodeContext(max_depth=max_depth)
    try:
        return parse_condition(Reader.from_bytes(buf), ctx)
    except ConditionDecodeError as e:
        logger.debug("Rejected condition: %s", e.message)
        raise


__all__ = [
    "DecodeContext",
    "DecodeFlags",
    "Reader",
    "decode_condition",
    "decode_fulfillment",
]
