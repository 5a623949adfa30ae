"""
torrentpeek: bencode decoding and .torrent inspection.
"""
__version__ = "0.1.0"
