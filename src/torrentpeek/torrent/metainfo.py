"""
Binds a decoded .torrent (metainfo) dictionary to typed fields.
"""
import logging
from pathlib import Path
from typing import List, Union

from torrentpeek.bencode import DEFAULT_MAX_DEPTH, BencodeDict, BencodeInt, BencodeList, BencodeString, decode

logger = logging.getLogger(__name__)

PIECE_HASH_LENGTH = 20


class MetainfoError(ValueError):
    """The decoded value does not have the shape of a metainfo file."""


def _require(mapping: BencodeDict, key: str, where: str):
    value = mapping.get(key)
    if value is None:
        raise MetainfoError(f"{where} missing '{key}'")
    return value


def _text(value, field: str) -> str:
    if not isinstance(value, BencodeString):
        raise MetainfoError(f"'{field}' must be a string, got {type(value).__name__}")
    try:
        return value.value.decode()
    except UnicodeDecodeError as exc:
        raise MetainfoError(f"'{field}' is not valid UTF-8") from exc


def _length(value, field: str) -> int:
    if not isinstance(value, BencodeInt):
        raise MetainfoError(f"'{field}' must be an integer, got {type(value).__name__}")
    if value.value < 0:
        raise MetainfoError(f"'{field}' must not be negative, got {value.value}")
    return value.value


class PieceHashes:
    """The SHA-1 hash of every piece, in piece order."""

    def __init__(self, raw: bytes):
        if len(raw) % PIECE_HASH_LENGTH != 0:
            raise MetainfoError(
                f"'pieces' length must be a multiple of {PIECE_HASH_LENGTH}, got {len(raw)}"
            )
        self.hashes = [raw[i:i+PIECE_HASH_LENGTH] for i in range(0, len(raw), PIECE_HASH_LENGTH)]

    def __len__(self):
        return len(self.hashes)

    def __iter__(self):
        return iter(self.hashes)

    def __getitem__(self, index):
        return self.hashes[index]

    def __repr__(self):
        return f"PieceHashes({len(self.hashes)} pieces)"


class FileEntry:
    """One file of a multi-file torrent."""

    def __init__(self, length: int, path: List[str]):
        self.length = length
        self.path = path

    @classmethod
    def from_value(cls, value) -> "FileEntry":
        if not isinstance(value, BencodeDict):
            raise MetainfoError("'files' entries must be dictionaries")
        length = _length(_require(value, "length", "file entry"), "length")
        path_b = _require(value, "path", "file entry")
        if not isinstance(path_b, BencodeList):
            raise MetainfoError("'path' must be a list")
        if len(path_b) == 0:
            raise MetainfoError("'path' must not be empty")
        return cls(length, [_text(p, "path") for p in path_b])

    def __repr__(self):
        return f"FileEntry(length={self.length}, path={self.path!r})"


class SingleFile:
    """The torrent describes one file of ``length`` bytes."""

    def __init__(self, length: int):
        self.length = length

    def __repr__(self):
        return f"SingleFile(length={self.length})"


class MultiFile:
    """The torrent describes a directory of files, concatenated in list order."""

    def __init__(self, files: List[FileEntry]):
        self.files = files

    def __repr__(self):
        return f"MultiFile(files={self.files!r})"


class Info:
    def __init__(self, name: str, piece_length: int, pieces: PieceHashes,
                 keys: Union[SingleFile, MultiFile]):
        self.name = name
        self.piece_length = piece_length
        self.pieces = pieces
        self.keys = keys

    @classmethod
    def from_value(cls, value) -> "Info":
        if not isinstance(value, BencodeDict):
            raise MetainfoError("'info' must be a dictionary")

        # ------------------ NAME ------------------
        name = _text(_require(value, "name", "info"), "name")

        # ------------------ PIECE LENGTH ------------------
        piece_length = _length(_require(value, "piece length", "info"), "piece length")

        # ------------------ PIECES ------------------
        pieces_b = _require(value, "pieces", "info")
        if not isinstance(pieces_b, BencodeString):
            raise MetainfoError("'pieces' must be a byte string")
        pieces = PieceHashes(pieces_b.value)

        # ------------------ FILES ------------------
        has_length = "length" in value
        has_files = "files" in value
        if has_length and has_files:
            raise MetainfoError("info has both 'length' and 'files'")
        if has_length:
            keys = SingleFile(_length(value["length"], "length"))
        elif has_files:
            files_b = value["files"]
            if not isinstance(files_b, BencodeList):
                raise MetainfoError("'files' must be a list")
            keys = MultiFile([FileEntry.from_value(f) for f in files_b])
        else:
            raise MetainfoError("info has neither 'length' nor 'files'")

        return cls(name, piece_length, pieces, keys)

    def __repr__(self):
        return (
            f"Info(name={self.name!r}, piece_length={self.piece_length}, "
            f"pieces={self.pieces!r}, keys={self.keys!r})"
        )


class TorrentMeta:
    """A metainfo file (also known as a .torrent file)."""

    def __init__(self, announce: str, info: Info):
        self.announce = announce
        self.info = info

    @classmethod
    def from_value(cls, root) -> "TorrentMeta":
        if not isinstance(root, BencodeDict):
            raise MetainfoError("Invalid torrent: root must be a dictionary")

        announce = _text(_require(root, "announce", "torrent"), "announce")
        info = Info.from_value(_require(root, "info", "torrent"))

        meta = cls(announce, info)
        logger.debug("bound %r", meta)
        return meta

    @classmethod
    def from_bytes(cls, raw: bytes, max_depth: int = DEFAULT_MAX_DEPTH) -> "TorrentMeta":
        return cls.from_value(decode(raw, max_depth=max_depth))

    @classmethod
    def from_file(cls, path, max_depth: int = DEFAULT_MAX_DEPTH) -> "TorrentMeta":
        path = Path(path)
        logger.info("reading torrent file %s", path)
        return cls.from_bytes(path.read_bytes(), max_depth=max_depth)

    @property
    def is_single(self) -> bool:
        return isinstance(self.info.keys, SingleFile)

    @property
    def total_length(self) -> int:
        if self.is_single:
            return self.info.keys.length
        return sum(f.length for f in self.info.keys.files)

    @property
    def num_pieces(self) -> int:
        return len(self.info.pieces)

    def __repr__(self):
        return f"TorrentMeta(announce={self.announce!r}, info={self.info!r})"
