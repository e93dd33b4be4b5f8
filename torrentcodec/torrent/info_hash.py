import hashlib

from torrentcodec.torrent.encoder import encode
from torrentcodec.torrent.metadata import Info


def info_hash(info: Info) -> bytes:
    """SHA-1 of the canonical `info` encoding; the torrent's identity."""
    return hashlib.sha1(encode(info)).digest()


def info_hash_hex(info: Info) -> str:
    return info_hash(info).hex()
