import pytest

ANNOUNCE = b"http://tracker.example.org:6969/announce"
PIECES = b"A" * 20 + b"B" * 20


def bstr(b: bytes) -> bytes:
    return str(len(b)).encode() + b":" + b


def make_torrent(announce=ANNOUNCE, name=b"sample.txt", piece_length=b"i32768e",
                 pieces=PIECES, layout=b"6:lengthi92063e") -> bytes:
    """Hand-assembles a metainfo file; keys are already in sorted order."""
    info = b"d"
    if layout:
        info += layout
    info += b"4:name" + bstr(name)
    info += b"12:piece length" + piece_length
    info += b"6:pieces" + bstr(pieces)
    info += b"e"
    root = b"d"
    if announce is not None:
        root += b"8:announce" + bstr(announce)
    root += b"4:info" + info + b"e"
    return root


MULTI_FILE_LAYOUT = (
    b"5:files"
    b"l"
    b"d6:lengthi100e4:pathl3:dir5:a.txtee"
    b"d6:lengthi50e4:pathl5:b.txtee"
    b"e"
)


@pytest.fixture
def single_file_torrent(tmp_path):
    path = tmp_path / "sample.torrent"
    path.write_bytes(make_torrent())
    return path


@pytest.fixture
def multi_file_torrent(tmp_path):
    path = tmp_path / "multi.torrent"
    path.write_bytes(make_torrent(name=b"album", layout=MULTI_FILE_LAYOUT))
    return path
