import io
import zlib

import pytest

from gitobj.errors import (
    CorruptObject,
    MalformedHeader,
    TrailingData,
    TruncatedObject,
    UnknownKind,
)
from gitobj.models import ObjectKind, StoredObject
from gitobj.models import codec

EMPTY_BLOB = "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"


@pytest.mark.parametrize(
    "kind, payload, expected",
    [
        (ObjectKind.BLOB, b"", b"blob 0\x00"),
        (ObjectKind.BLOB, b"hello world\n", b"blob 12\x00hello world\n"),
        (ObjectKind.TREE, b"\x00\xff", b"tree 2\x00\x00\xff"),
    ],
)
def test_frame(kind, payload, expected):
    assert codec.frame(kind, payload) == expected


@pytest.mark.parametrize(
    "kind, payload, expected_hash_value",
    [
        (ObjectKind.BLOB, b"", EMPTY_BLOB),
        (ObjectKind.BLOB, b"hello world\n", "3b18e512dba79e4c8300dd08aeb37f8e728b8dad"),
        (ObjectKind.TREE, b"", "4b825dc642cb6eb9a060e54bf8d69288fbee4904"),
    ],
)
def test_digest_known_vectors(kind, payload, expected_hash_value):
    assert codec.digest(codec.frame(kind, payload)) == expected_hash_value


def test_compress_uses_zlib_framing():
    data = codec.frame(ObjectKind.BLOB, b"some content")
    compressed = codec.compress(data)
    assert compressed == zlib.compress(data)
    assert compressed[0] == 0x78
    assert codec.decompress(compressed) == data


def test_decompress_rejects_garbage():
    with pytest.raises(CorruptObject):
        codec.decompress(b"definitely not zlib")


def test_decompress_rejects_cut_stream():
    compressed = codec.compress(codec.frame(ObjectKind.BLOB, b"x" * 100))
    with pytest.raises(CorruptObject):
        codec.decompress(compressed[:-6])


class TestParseHeader:
    @pytest.mark.parametrize(
        "data, kind, length, size",
        [
            (b"blob 0\x00", ObjectKind.BLOB, 0, 7),
            (b"blob 5\x00hello", ObjectKind.BLOB, 5, 7),
            (b"tree 123\x00...", ObjectKind.TREE, 123, 9),
        ],
    )
    def test_valid(self, data, kind, length, size):
        header = codec.parse_header(data)
        assert (header.kind, header.length, header.size) == (kind, length, size)

    @pytest.mark.parametrize(
        "data",
        [
            b"blob 5hello",
            b"",
            b"blob " + b"1" * 40 + b"\x00",
            b"blob\xff 5\x00hello",
            b"blob5\x00hello",
            b"blob -5\x00hello",
            b"blob five\x00hello",
            b"blob \x00",
            b"blob 5 \x00hello",
        ],
    )
    def test_malformed(self, data):
        with pytest.raises(MalformedHeader):
            codec.parse_header(data)

    @pytest.mark.parametrize("data", [b"commit 4\x00body", b"tag 0\x00", b"Blob 0\x00", b" 0\x00"])
    def test_unknown_kind(self, data):
        with pytest.raises(UnknownKind):
            codec.parse_header(data)

    def test_unknown_kind_reports_token(self):
        with pytest.raises(UnknownKind) as exc_info:
            codec.parse_header(b"commit 4\x00body")
        assert exc_info.value.kind == "commit"


class TestReadPayload:
    def test_exact(self):
        assert codec.read_payload(io.BytesIO(b"hello"), 5) == b"hello"

    def test_empty(self):
        assert codec.read_payload(io.BytesIO(b""), 0) == b""

    def test_truncated(self):
        with pytest.raises(TruncatedObject) as exc_info:
            codec.read_payload(io.BytesIO(b"hello"), 10)
        assert (exc_info.value.declared, exc_info.value.actual) == (10, 5)

    def test_trailing(self):
        with pytest.raises(TrailingData):
            codec.read_payload(io.BytesIO(b"hello!!"), 5)


class TestDecode:
    def test_decode(self):
        obj = codec.decode(b"blob 5\x00hello")
        assert obj == StoredObject(kind=ObjectKind.BLOB, body=b"hello")
        assert obj.header == b"blob 5"

    def test_payload_may_contain_nul(self):
        obj = codec.decode(b"tree 3\x00a\x00b")
        assert obj.body == b"a\x00b"

    def test_truncated(self):
        with pytest.raises(TruncatedObject):
            codec.decode(b"blob 10\x00hello")

    def test_trailing(self):
        with pytest.raises(TrailingData):
            codec.decode(b"blob 5\x00hello!!")


def test_encode():
    hash_value, compressed = codec.encode(ObjectKind.BLOB, b"")
    assert hash_value == EMPTY_BLOB
    assert zlib.decompress(compressed) == b"blob 0\x00"
