"""
Bencode decoder for BitTorrent metainfo files.
"""
import logging
import re

from .structure import INT64_MAX, INT64_MIN, BencodeDict, BencodeInt, BencodeList, BencodeString

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200

_DIGITS = re.compile(rb"[0-9]+")
_INTEGER = re.compile(rb"-?[0-9]+")


class BencodeDecodeError(Exception):
    """Base class for Bencode decoding errors."""

    def __init__(self, reason: str, position: int = None):
        self.reason = reason
        self.position = position
        if position is None:
            super().__init__(reason)
        else:
            super().__init__(f"{reason} (at byte {position})")


class BencodeParseError(BencodeDecodeError):
    """Input violates the bencode grammar at an identifiable point."""


class BencodeUnhandledError(BencodeDecodeError):
    """The byte at the cursor does not start any bencode value."""


class BencodeDepthError(BencodeDecodeError):
    """Lists and dicts are nested deeper than the decoder allows."""


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into Bencode value trees.

    The decoder owns an immutable copy of the input and a cursor that only
    moves forward. Each call to :meth:`decode` consumes exactly one value
    starting at the cursor. After an error the decoder must be discarded.
    """
    def __init__(self, data, max_depth: int = DEFAULT_MAX_DEPTH):
        if isinstance(data, str):
            data = data.encode()
        elif isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        elif not isinstance(data, bytes):
            raise TypeError(f"Cannot decode object of type {type(data).__name__}")
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")

        self.data = data
        self.max_depth = max_depth
        self.i = 0  # cursor index
        self._depth = 0

    @property
    def position(self) -> int:
        return self.i

    def at_end(self) -> bool:
        return self.i >= len(self.data)

    def decode(self):
        """Decodes one value at the cursor and leaves the cursor right after it."""
        try:
            return self._parse_value()
        except BencodeDecodeError as exc:
            logger.debug("bencode decode failed: %s", exc)
            raise
        except RecursionError as exc:
            # max_depth set above what the interpreter stack allows
            raise BencodeDepthError(f"Nesting too deep at depth {self._depth}", self.i) from exc

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self):
        """Returns the byte at the cursor, or b'' at end of input."""
        return self.data[self.i:self.i+1]

    def _consume(self, n=1):
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    def _parse_error(self, reason):
        return BencodeParseError(f"Invalid encoding format, {reason}", self.i)

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self):
        ch = self._peek()

        if ch.isdigit():  # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == b'i':
            return self._parse_int()

        if ch == b'l':
            return self._parse_list()

        if ch == b'd':
            return self._parse_dict()

        if not ch:
            raise BencodeUnhandledError("Unhandled encoded value: end of input", self.i)
        raise BencodeUnhandledError(f"Unhandled encoded value: {ch!r}", self.i)

    def _parse_int(self):
        """Parses an integer from the Bencoded data."""
        end_pos = self.data.find(b'e', self.i + 1)
        if end_pos == -1:
            raise self._parse_error("`e` delimiter not found for number")

        number_bytes = self.data[self.i+1:end_pos]
        if not number_bytes:
            raise self._parse_error("trying to parse `ie`")
        if not _INTEGER.fullmatch(number_bytes):
            raise self._parse_error(f"invalid encoded number {number_bytes!r}")
        if number_bytes.startswith(b'-0'):
            raise self._parse_error("negative zero or leading zero in number")
        if len(number_bytes) > 1 and number_bytes.startswith(b'0'):
            raise self._parse_error("leading zero in number")

        num = int(number_bytes)
        if not INT64_MIN <= num <= INT64_MAX:
            raise self._parse_error("number out of signed 64-bit range")

        self.i = end_pos + 1  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self):
        """Parses a byte string from the Bencoded data."""
        colon = self.data.find(b':', self.i)
        if colon == -1:
            raise self._parse_error("colon separator not found for string")

        length_bytes = self.data[self.i:colon]
        if not _DIGITS.fullmatch(length_bytes):
            raise self._parse_error("invalid encoded length for string")

        length = int(length_bytes)
        start = colon + 1
        if start + length > len(self.data):
            raise self._parse_error(
                f"string declares {length} bytes but only {len(self.data) - start} remain"
            )

        self.i = start
        return BencodeString(self._consume(length))

    def _enter(self):
        self._depth += 1
        if self._depth > self.max_depth:
            raise BencodeDepthError(f"Nesting deeper than {self.max_depth} levels", self.i)

    def _parse_list(self):
        """Parses a list from the Bencoded data."""
        self._enter()
        self._consume(1)  # skip 'l'
        items = []

        while self._peek() != b'e':
            if not self._peek():
                raise self._parse_error("incomplete list encoding")
            items.append(self._parse_value())

        self._consume(1)  # skip 'e'
        self._depth -= 1
        return BencodeList(items)

    def _parse_dict(self):
        """Parses a dictionary from the Bencoded data."""
        self._enter()
        self._consume(1)  # skip 'd'
        obj = {}

        while self._peek() != b'e':
            if not self._peek():
                raise self._parse_error("incomplete dict encoding")
            # keys MUST be strings
            if not self._peek().isdigit():
                raise self._parse_error("dict's key must be string")
            key_pos = self.i
            key = self._parse_string().value
            if key in obj:
                raise BencodeParseError(
                    f"Invalid encoding format, duplicate dict key {key!r}", key_pos
                )
            if not self._peek():
                raise self._parse_error("incomplete dict encoding, missing value")
            obj[key] = self._parse_value()

        self._consume(1)  # skip 'e'
        self._depth -= 1
        return BencodeDict(obj)


def decode(data, max_depth: int = DEFAULT_MAX_DEPTH):
    """
    Convenience function to decode one complete Bencoded value.

    Bytes left over after the value are rejected.
    """
    decoder = BencodeDecoder(data, max_depth=max_depth)
    result = decoder.decode()
    if not decoder.at_end():
        err = BencodeParseError("Invalid encoding format, trailing data after value", decoder.position)
        logger.debug("bencode decode failed: %s", err)
        raise err
    return result
