"""
Data structures for representing Bencoded types.

Every decoded value is one of four node classes. Nodes are immutable once
built, compare by value, and keep byte strings as raw ``bytes``.
"""
from types import MappingProxyType

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "INT64_MIN",
    "INT64_MAX",
]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _as_key(key) -> bytes:
    if isinstance(key, str):
        return key.encode()
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TypeError(f"Bencode dict keys must be bytes, got {type(key).__name__}")


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("value",)

    def __init__(self, value):
        object.__setattr__(self, "value", value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class BencodeInt(BencodeType):
    """Represents a Bencoded integer (signed 64-bit)."""
    __slots__ = ()

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"BencodeInt out of signed 64-bit range: {value}")
        super().__init__(value)


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    __slots__ = ()

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("BencodeString requires bytes.")
        super().__init__(bytes(value))

    def __len__(self):
        return len(self.value)


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError(f"BencodeList items must be Bencode values, got {type(item).__name__}")
        super().__init__(tuple(value))

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def __getitem__(self, index):
        return self.value[index]


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys keep the order they were inserted in, which for decoded values is
    the order they appeared on the wire. ``str`` keys are accepted by the
    accessors and looked up as their UTF-8 bytes.
    """
    __slots__ = ()

    def __init__(self, value: dict):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        # keys must be bytes (bencode requirement)
        for k, v in value.items():
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError(f"BencodeDict values must be Bencode values, got {type(v).__name__}")
        super().__init__(MappingProxyType({bytes(k): v for k, v in value.items()}))

    def __repr__(self):
        return f"BencodeDict({dict(self.value)!r})"

    def __hash__(self):
        # equality ignores key order, so the hash must too
        return hash((type(self).__name__, frozenset(self.value.items())))

    def __getitem__(self, key):
        return self.value[_as_key(key)]

    def __contains__(self, key):
        return _as_key(key) in self.value

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def get(self, key, default=None):
        return self.value.get(_as_key(key), default)

    def keys(self):
        return self.value.keys()

    def items(self):
        return self.value.items()
