"""
Converts decoded Bencode values into JSON-friendly Python objects.

Bencode strings are raw bytes. Turning them into text is the one place a
policy is needed, selected with ``bytes_mode``:

- ``"replace"``: decode as UTF-8, invalid sequences become U+FFFD (lossy).
- ``"strict"``: decode as UTF-8, invalid sequences raise UnicodeDecodeError.
- ``"hex"``: decode as UTF-8 when valid, otherwise lowercase hex digits.

Dict keys that end up as the same text are an error, never a dropped entry.
"""
import json

from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString

BYTES_MODES = ("replace", "strict", "hex")


class KeyCollisionError(ValueError):
    """Two distinct dict keys render to the same text."""


def bytes_to_text(b: bytes, bytes_mode: str = "replace") -> str:
    """Turns a byte string into text according to ``bytes_mode``."""
    if bytes_mode == "replace":
        return b.decode("utf-8", errors="replace")
    if bytes_mode == "strict":
        return b.decode("utf-8")
    if bytes_mode == "hex":
        try:
            return b.decode("utf-8")
        except UnicodeDecodeError:
            return b.hex()
    raise ValueError(f"Unknown bytes mode {bytes_mode!r}, expected one of {BYTES_MODES}")


def to_jsonable(obj, bytes_mode: str = "replace"):
    """Maps a BencodeType tree onto str/int/list/dict."""

    if isinstance(obj, BencodeString):
        return bytes_to_text(obj.value, bytes_mode)

    if isinstance(obj, BencodeInt):
        return obj.value

    if isinstance(obj, BencodeList):
        return [to_jsonable(x, bytes_mode) for x in obj.value]

    if isinstance(obj, BencodeDict):
        out = {}
        for k, v in obj.value.items():
            text = bytes_to_text(k, bytes_mode)
            if text in out:
                raise KeyCollisionError(
                    f"dict keys collide as {text!r} in {bytes_mode!r} mode, e.g. {k!r}"
                )
            out[text] = to_jsonable(v, bytes_mode)
        return out

    raise TypeError(f"Cannot render object of type {type(obj)}")


def to_json(obj, bytes_mode: str = "replace") -> str:
    """Compact JSON text for a decoded value, e.g. ``["spam",42]``."""
    return json.dumps(to_jsonable(obj, bytes_mode), separators=(",", ":"), ensure_ascii=False)
