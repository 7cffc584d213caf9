"""Object framing, hashing and compression.

An object is stored as a *frame*::

    <kind> <decimal length>\\0<payload>

The SHA-1 of the frame is the object's identity and the zlib-compressed
frame is what lands on disk.
"""
import hashlib
import io
import zlib
from typing import BinaryIO

from gitobj.errors import CorruptObject, MalformedHeader, TrailingData, TruncatedObject
from gitobj.models.objects import Header, ObjectKind, StoredObject

__all__ = [
    "NULL_BYTE",
    "MAX_HEADER_LENGTH",
    "frame",
    "digest",
    "compress",
    "decompress",
    "parse_header",
    "read_payload",
    "decode",
    "encode",
]

NULL_BYTE = b"\x00"
# "tree" + space + 20 digit length + NUL still fits
MAX_HEADER_LENGTH = 32


def frame(kind: ObjectKind, payload: bytes) -> bytes:
    header = f"{kind} {len(payload)}".encode("ascii")
    return header + NULL_BYTE + payload


def digest(data: bytes, *, hasher=hashlib.sha1) -> str:
    return hasher(data).hexdigest()


def compress(data: bytes, *, compressor=zlib.compress) -> bytes:
    return compressor(data)


def decompress(data: bytes) -> bytes:
    try:
        return zlib.decompress(data)
    except zlib.error as exc:
        raise CorruptObject(str(exc)) from exc


def parse_header(data: bytes) -> Header:
    """Parse the ``<kind> <length>\\0`` prefix of a decompressed frame.

    Raises ``MalformedHeader`` when there is no NUL within the first
    ``MAX_HEADER_LENGTH`` bytes, the header is not text, there is no space
    or the length is not a base-10 integer, and ``UnknownKind`` when the
    kind token is not a known object kind.
    """
    end = data.find(NULL_BYTE, 0, MAX_HEADER_LENGTH)
    if end == -1:
        raise MalformedHeader("no NUL terminator", data[:MAX_HEADER_LENGTH])
    raw = data[:end]
    try:
        header = raw.decode()
    except UnicodeDecodeError:
        raise MalformedHeader("header is not valid UTF-8", raw) from None

    kind, sep, length = header.partition(" ")
    if not sep:
        raise MalformedHeader("missing space between type and size", raw)
    kind = ObjectKind.parse(kind)
    if not (length.isascii() and length.isdigit()):
        raise MalformedHeader(f"invalid size {length!r}", raw)
    return Header(kind=kind, length=int(length), size=end + 1)


def read_payload(reader: BinaryIO, declared_length: int) -> bytes:
    payload = reader.read(declared_length)
    if len(payload) < declared_length:
        raise TruncatedObject(declared_length, len(payload))
    if reader.read(1):
        raise TrailingData(declared_length)
    return payload


def decode(data: bytes) -> StoredObject:
    header = parse_header(data)
    reader = io.BytesIO(data)
    reader.seek(header.size)
    return StoredObject(kind=header.kind, body=read_payload(reader, header.length))


def encode(kind: ObjectKind, payload: bytes) -> tuple[str, bytes]:
    """Return the identity and the compressed frame of an object."""
    data = frame(kind, payload)
    return digest(data), compress(data)
