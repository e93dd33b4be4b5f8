import re
import logging

from torrentcodec.bencode.errors import InvalidValueError, MalformedError
from torrentcodec.bencode.value import (
    BencodeBytes,
    BencodeDict,
    BencodeInt,
    BencodeList,
    Value,
)

logger = logging.getLogger(__name__)

MAX_DEPTH = 256
# far beyond any 64-bit quantity, below the interpreter's int parsing limit
MAX_INT_DIGITS = 64

_INT_BODY = re.compile(rb"-?(?:0|[1-9][0-9]*)")
_LENGTH_PREFIX = re.compile(rb"0|[1-9][0-9]*")


class Decoder:
    """
    Single forward pass over a bencoded buffer.

    Each value is read by dispatching on its first byte; there is no
    backtracking. Grammar violations raise MalformedError with the offset
    where decoding stopped.
    """

    __slots__ = ("data", "index", "depth")

    def __init__(self, data: bytes):
        self.data = data
        self.index = 0
        self.depth = 0

    def decode(self) -> Value:
        if not self.data:
            raise MalformedError("Empty input", 0)
        value = self._decode_next()
        if self.index != len(self.data):
            raise MalformedError(
                f"Trailing data after root value ({len(self.data) - self.index} bytes)",
                self.index,
            )
        return value

    def _peek(self) -> bytes:
        return self.data[self.index : self.index + 1]

    def _decode_next(self) -> Value:
        char = self._peek()

        if char == b"i":
            return self._decode_int()
        elif char == b"l":
            return self._decode_list()
        elif char == b"d":
            return self._decode_dict()
        elif char.isdigit():
            return self._decode_bytes()
        elif not char:
            raise MalformedError("Unexpected end of input", self.index)
        else:
            raise MalformedError(f"Unexpected byte {char!r}", self.index)

    def _decode_int(self) -> BencodeInt:
        # i<digits>e
        start = self.index + 1
        end = self.data.find(b"e", start)
        if end == -1:
            raise MalformedError("Unterminated integer", self.index)

        body = self.data[start:end]
        if not _INT_BODY.fullmatch(body) or body == b"-0":
            raise MalformedError(f"Invalid integer {body!r}", start)
        if len(body.lstrip(b"-")) > MAX_INT_DIGITS:
            raise InvalidValueError(
                "integer", f"more than {MAX_INT_DIGITS} digits (at byte {start})"
            )

        self.index = end + 1
        return BencodeInt(int(body))

    def _decode_bytes(self) -> BencodeBytes:
        # <length>:<bytes>
        colon = self.data.find(b":", self.index)
        if colon == -1:
            raise MalformedError("Byte string without ':' separator", self.index)

        prefix = self.data[self.index : colon]
        if not _LENGTH_PREFIX.fullmatch(prefix):
            raise MalformedError(f"Invalid length prefix {prefix!r}", self.index)

        if len(prefix) > MAX_INT_DIGITS:
            raise MalformedError("Byte string length prefix too long", self.index)

        start = colon + 1
        end = start + int(prefix)
        if end > len(self.data):
            raise MalformedError(
                f"Byte string of length {int(prefix)} runs past end of input", self.index
            )

        self.index = end
        return BencodeBytes(self.data[start:end])

    def _enter(self):
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise MalformedError(f"Nesting deeper than {MAX_DEPTH} levels", self.index)

    def _decode_list(self) -> BencodeList:
        # l<items>e
        self._enter()
        start = self.index
        self.index += 1
        items = []

        while self._peek() != b"e":
            if not self._peek():
                raise MalformedError("Unterminated list", start)
            items.append(self._decode_next())

        self.index += 1
        self.depth -= 1
        return BencodeList(tuple(items))

    def _decode_dict(self) -> BencodeDict:
        # d<key><value>...e, keys in any order
        self._enter()
        start = self.index
        self.index += 1
        pairs = []
        seen = set()

        while self._peek() != b"e":
            char = self._peek()
            if not char:
                raise MalformedError("Unterminated dictionary", start)
            if not char.isdigit():
                raise MalformedError("Dictionary key must be a byte string", self.index)

            key_offset = self.index
            key = self._decode_bytes().value
            if key in seen:
                raise MalformedError(f"Duplicate dictionary key {key!r}", key_offset)
            seen.add(key)

            if not self._peek():
                raise MalformedError(f"Missing value for key {key!r}", self.index)
            pairs.append((key, self._decode_next()))

        self.index += 1
        self.depth -= 1
        return BencodeDict(tuple(pairs))


def decode_value(data: bytes | bytearray | memoryview) -> Value:
    """Decode a complete bencoded buffer into a generic value tree."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected a bytes-like buffer, got {type(data).__name__}")

    value = Decoder(bytes(data)).decode()
    logger.debug(f"Decoded {type(value).__name__} from {len(data)} bytes")
    return value
