"""
Command line entry point.

    torrentpeek decode <bencoded-value>
    torrentpeek info <path-to-torrent>
"""
import argparse
import logging
import os
import sys

from torrentpeek import __version__
from torrentpeek.bencode import DEFAULT_MAX_DEPTH, BencodeDecodeError, decode
from torrentpeek.bencode.render import BYTES_MODES, KeyCollisionError, to_json
from torrentpeek.torrent.metainfo import MetainfoError, SingleFile, TorrentMeta

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class UnsupportedTorrentError(Exception):
    """The torrent is well formed but uses a layout this tool does not handle."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="torrentpeek",
        description="Decode bencoded values and inspect .torrent files.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="log to stderr, repeat for debug output")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help="maximum list/dict nesting (default: %(default)s)")

    sub = parser.add_subparsers(dest="command", required=True)

    p_decode = sub.add_parser("decode", help="decode a bencoded value and print it as JSON")
    p_decode.add_argument("value", help="bencoded text, e.g. l4:spami42ee")
    p_decode.add_argument("--bytes", dest="bytes_mode", choices=BYTES_MODES, default="replace",
                          help="how to print strings that are not UTF-8 (default: %(default)s)")

    p_info = sub.add_parser("info", help="print the tracker URL and length of a .torrent file")
    p_info.add_argument("torrent", help="path to a .torrent file")

    return parser


def setup_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def cmd_decode(args) -> int:
    # argv text back to the bytes the shell passed in
    value = decode(os.fsencode(args.value), max_depth=args.max_depth)
    print(to_json(value, bytes_mode=args.bytes_mode))
    return EXIT_OK


def cmd_info(args) -> int:
    meta = TorrentMeta.from_file(args.torrent, max_depth=args.max_depth)
    logger.debug("%r", meta)

    if not isinstance(meta.info.keys, SingleFile):
        raise UnsupportedTorrentError("multi-file torrents are not supported yet")

    print(f"Tracker URL: {meta.announce}")
    print(f"Length: {meta.info.keys.length}")
    return EXIT_OK


COMMANDS = {
    "decode": cmd_decode,
    "info": cmd_info,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.max_depth < 1:
        parser.error("--max-depth must be at least 1")

    try:
        return COMMANDS[args.command](args)
    except BencodeDecodeError as e:
        print(f"error: invalid bencode: {e}", file=sys.stderr)
    except MetainfoError as e:
        print(f"error: invalid torrent: {e}", file=sys.stderr)
    except UnsupportedTorrentError as e:
        print(f"error: {e}", file=sys.stderr)
    except KeyCollisionError as e:
        print(f"error: cannot print value: {e}; try another --bytes mode", file=sys.stderr)
    except UnicodeDecodeError as e:
        print(f"error: string is not valid UTF-8 ({e.reason}); try --bytes hex", file=sys.stderr)
    except OSError as e:
        print(f"error: failed to read torrent file: {e}", file=sys.stderr)
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
