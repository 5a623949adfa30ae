import pytest

from conftest import make_torrent
from torrentpeek.cli import EXIT_FAILURE, EXIT_OK, main


def test_decode_string(capsys):
    assert main(["decode", "5:hello"]) == EXIT_OK
    assert capsys.readouterr().out == '"hello"\n'


def test_decode_nested(capsys):
    assert main(["decode", "d3:fool4:spami42ee3:bari-5ee"]) == EXIT_OK
    assert capsys.readouterr().out == '{"foo":["spam",42],"bar":-5}\n'


def test_decode_bytes_mode(capsys):
    bad = "2:" + b"\xff\xfe".decode("utf-8", "surrogateescape")
    assert main(["decode", "--bytes", "hex", bad]) == EXIT_OK
    assert capsys.readouterr().out == '"fffe"\n'

    assert main(["decode", "--bytes", "strict", bad]) == EXIT_FAILURE
    assert "not valid UTF-8" in capsys.readouterr().err


@pytest.mark.parametrize("value", ["i03e", "4:sp", "l4:spam", "x", "d3:keyi5ei1ei2ee"])
def test_decode_malformed(capsys, value):
    assert main(["decode", value]) == EXIT_FAILURE
    captured = capsys.readouterr()
    print("stderr:", captured.err)
    assert captured.out == ""
    assert captured.err.startswith("error: invalid bencode")


def test_decode_max_depth(capsys):
    assert main(["--max-depth", "2", "decode", "llleee"]) == EXIT_FAILURE
    assert "Nesting" in capsys.readouterr().err
    assert main(["--max-depth", "3", "decode", "llleee"]) == EXIT_OK


def test_info_single_file(capsys, single_file_torrent):
    assert main(["info", str(single_file_torrent)]) == EXIT_OK
    out = capsys.readouterr().out
    assert out == (
        "Tracker URL: http://tracker.example.org:6969/announce\n"
        "Length: 92063\n"
    )


def test_info_multi_file_unsupported(capsys, multi_file_torrent):
    assert main(["info", str(multi_file_torrent)]) == EXIT_FAILURE
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "multi-file torrents are not supported" in captured.err


def test_info_bad_pieces(capsys, tmp_path):
    path = tmp_path / "bad.torrent"
    path.write_bytes(make_torrent(pieces=b"x" * 30))
    assert main(["info", str(path)]) == EXIT_FAILURE
    assert "error: invalid torrent" in capsys.readouterr().err


def test_info_missing_file(capsys, tmp_path):
    assert main(["info", str(tmp_path / "nope.torrent")]) == EXIT_FAILURE
    assert "failed to read" in capsys.readouterr().err


def test_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


def test_decode_colliding_keys(capsys):
    value = "d1:" + b"\xfe".decode("utf-8", "surrogateescape") + "i1e1:" + b"\xff".decode("utf-8", "surrogateescape") + "i2ee"
    assert main(["decode", value]) == EXIT_FAILURE
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "collide" in captured.err

    assert main(["decode", "--bytes", "hex", value]) == EXIT_OK
    assert capsys.readouterr().out == '{"fe":1,"ff":2}\n'


def test_info_honours_max_depth(capsys, single_file_torrent):
    assert main(["--max-depth", "1", "info", str(single_file_torrent)]) == EXIT_FAILURE
    assert "Nesting" in capsys.readouterr().err
