"""
Torrent package for reading BitTorrent metainfo files.
"""
from .metainfo import FileEntry, Info, MetainfoError, MultiFile, PieceHashes, SingleFile, TorrentMeta

__all__ = ['TorrentMeta', 'Info', 'SingleFile', 'MultiFile', 'FileEntry', 'PieceHashes', 'MetainfoError']
