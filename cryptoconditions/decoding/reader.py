"""
An ordered reader over a sequence of context-specific ASN.1 elements.

Tokenizing is left to asn1crypto, this only walks the elements it produces.
"""

from collections import deque, namedtuple

from asn1crypto import parser

from ..errors import ConditionDecodeError

CLASS_CONTEXT_SPECIFIC = 2
METHOD_CONSTRUCTED = 1
MAX_TAG = 255

Element = namedtuple("Element", ["tag", "constructed", "contents"])


def parse_elements(data):
    """Tokenize {data} into a list of top-level Elements.

    Every element must be context-specific, of definite length and have a tag that fits in
    a byte.
    """
    elements = []
    pointer = 0
    while pointer < len(data):
        try:
            class_, method, tag, header, contents, trailer = parser.parse(data[pointer:])
        except ValueError as e:
            raise ConditionDecodeError(f"Invalid ASN data: {str(e)}") from e
        if class_ != CLASS_CONTEXT_SPECIFIC:
            raise ConditionDecodeError("Invalid ASN data: unexpected structure")
        if trailer:
            raise ConditionDecodeError("Invalid ASN data: indefinite length")
        if tag > MAX_TAG:
            raise ConditionDecodeError(f"Invalid type id: {tag}")
        elements.append(Element(tag, method == METHOD_CONSTRUCTED, contents))
        pointer += len(header) + len(contents)
    return elements


class Reader:
    """Consumes elements from left to right, checking their tag as it goes."""

    def __init__(self, elements):
        self._elements = deque(elements)

    @classmethod
    def from_bytes(cls, data):
        """An empty buffer gives an empty reader."""
        assert isinstance(data, (bytes, bytearray))
        if len(data) == 0:
            return cls([])
        return cls(parse_elements(bytes(data)))

    def __len__(self):
        return len(self._elements)

    def __repr__(self):
        return f"Reader({[e.tag for e in self._elements]})"

    def _pop(self):
        if not self._elements:
            raise ConditionDecodeError("Expected element")
        return self._elements.popleft()

    def _pop_tagged(self, tag, constructed):
        elem = self._pop()
        if elem.constructed != constructed:
            kind = "container" if constructed else "leaf"
            raise ConditionDecodeError(
                f"Unexpected structure, expected a {kind} with type id: {tag}"
            )
        if elem.tag != tag:
            raise ConditionDecodeError(
                f"Wrong type id, expected: {tag} but got: {elem.tag}"
            )
        return elem

    def take_leaf(self, tag):
        """Get the raw contents of the next element, which must be a leaf with this tag."""
        return self._pop_tagged(tag, constructed=False).contents

    def take_container(self, tag):
        """Get a reader over the next element, which must be a container with this tag."""
        return Reader.from_bytes(self._pop_tagged(tag, constructed=True).contents)

    def take_any(self):
        """Get the tag of the next element and a reader over its contents."""
        elem = self._pop()
        return elem.tag, Reader.from_bytes(elem.contents)

    def take_one(self):
        """Get a reader holding only the next element, whatever its tag."""
        return Reader([self._pop()])

    def take_many(self, decode_fn, *args):
        """Apply {decode_fn} until all elements are consumed.

        Each call gets this reader and {args}, and must consume at least one element.
        """
        out = []
        while self._elements:
            out.append(decode_fn(self, *args))
        return out

    def assert_empty(self):
        if self._elements:
            raise ConditionDecodeError("ASN has leftover elements")
