"""
Bencode package for decoding BitTorrent data.
"""
from .decoder import (
    DEFAULT_MAX_DEPTH,
    BencodeDecodeError,
    BencodeDecoder,
    BencodeDepthError,
    BencodeParseError,
    BencodeUnhandledError,
    decode,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

__all__ = [
    'decode',
    'BencodeDecoder',
    'DEFAULT_MAX_DEPTH',
    'BencodeDecodeError',
    'BencodeParseError',
    'BencodeUnhandledError',
    'BencodeDepthError',
    'BencodeType',
    'BencodeInt',
    'BencodeString',
    'BencodeList',
    'BencodeDict',
]
