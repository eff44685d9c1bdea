import pytest

from cryptoconditions.decoding.reader import Reader
from cryptoconditions.errors import ConditionDecodeError

from helpers import container, leaf


def test_empty_reader():
    reader = Reader.from_bytes(b"")
    assert len(reader) == 0
    reader.assert_empty()
    with pytest.raises(ConditionDecodeError, match="Expected element"):
        reader.take_leaf(0)
    with pytest.raises(ConditionDecodeError, match="Expected element"):
        reader.take_any()


def test_take_leaf():
    reader = Reader.from_bytes(leaf(0, b"hello") + leaf(1, b"") + leaf(200, b"\x01"))
    assert len(reader) == 3
    assert reader.take_leaf(0) == b"hello"
    assert reader.take_leaf(1) == b""
    assert reader.take_leaf(200) == b"\x01"
    reader.assert_empty()


def test_take_leaf_wrong_tag():
    reader = Reader.from_bytes(leaf(1, b"hello"))
    with pytest.raises(ConditionDecodeError, match="expected: 0 but got: 1"):
        reader.take_leaf(0)


def test_leaf_and_container_are_distinct():
    reader = Reader.from_bytes(container(0, leaf(0, b"a")))
    with pytest.raises(ConditionDecodeError, match="Unexpected structure"):
        reader.take_leaf(0)

    reader = Reader.from_bytes(leaf(0, b"a"))
    with pytest.raises(ConditionDecodeError, match="Unexpected structure"):
        reader.take_container(0)


def test_take_container():
    reader = Reader.from_bytes(container(1, leaf(0, b"a"), leaf(1, b"b")) + leaf(2, b"c"))
    inner = reader.take_container(1)
    assert len(inner) == 2
    assert inner.take_leaf(0) == b"a"
    assert inner.take_leaf(1) == b"b"
    inner.assert_empty()
    assert reader.take_leaf(2) == b"c"
    reader.assert_empty()

    reader = Reader.from_bytes(container(1))
    reader.take_container(1).assert_empty()

    reader = Reader.from_bytes(container(1))
    with pytest.raises(ConditionDecodeError, match="expected: 0 but got: 1"):
        reader.take_container(0)


def test_take_any():
    reader = Reader.from_bytes(container(15, leaf(0, b"code")))
    tag, inner = reader.take_any()
    assert tag == 15
    assert inner.take_leaf(0) == b"code"
    reader.assert_empty()


def test_take_one():
    reader = Reader.from_bytes(container(0, leaf(0, b"a")) + container(2))
    first = reader.take_one()
    assert len(first) == 1
    tag, inner = first.take_any()
    assert tag == 0 and inner.take_leaf(0) == b"a"
    assert len(reader) == 1


def test_take_many():
    reader = Reader.from_bytes(leaf(0, b"a") + leaf(0, b"b") + leaf(0, b"c"))
    assert reader.take_many(lambda r: r.take_leaf(0)) == [b"a", b"b", b"c"]
    reader.assert_empty()

    reader = Reader.from_bytes(leaf(0, b"a") + leaf(0, b"b"))
    assert reader.take_many(lambda r, suffix: r.take_leaf(0) + suffix, b"!") == [b"a!", b"b!"]

    assert Reader.from_bytes(b"").take_many(lambda r: r.take_leaf(0)) == []


def test_leftover_elements():
    reader = Reader.from_bytes(leaf(0, b"a") + leaf(1, b"b"))
    reader.take_leaf(0)
    with pytest.raises(ConditionDecodeError, match="leftover elements"):
        reader.assert_empty()


def test_invalid_data():
    # Truncated
    with pytest.raises(ConditionDecodeError, match="Invalid ASN data"):
        Reader.from_bytes(leaf(0, b"hello")[:-1])
    # A stray byte after a valid element
    with pytest.raises(ConditionDecodeError, match="Invalid ASN data"):
        Reader.from_bytes(leaf(0, b"hello") + b"\x80")
    # Universal OCTET STRING
    with pytest.raises(ConditionDecodeError, match="Invalid ASN data"):
        Reader.from_bytes(b"\x04\x01\x00")
    # Indefinite length
    with pytest.raises(ConditionDecodeError, match="Invalid ASN data"):
        Reader.from_bytes(b"\xa0\x80\x80\x01\x00\x00\x00")


def test_nested_invalid_data():
    reader = Reader.from_bytes(container(0, b"\x80\x05ab"))
    with pytest.raises(ConditionDecodeError, match="Invalid ASN data"):
        reader.take_container(0)
