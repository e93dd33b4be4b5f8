import bencodepy

from torrentcodec.torrent.metadata import FileEntry, Info, MultiFile, SingleFile


def _canonical(d: dict) -> dict:
    # keys ascending by raw bytes
    return dict(sorted(d.items()))


def _file_dict(entry: FileEntry) -> dict:
    return _canonical({
        b"length": entry.length,
        b"path": [segment.encode("utf-8") for segment in entry.path],
    })


def info_to_dict(info: Info) -> dict:
    """Build the bencode-ready `info` dictionary, keys in canonical order."""
    d = {
        b"name": info.name.encode("utf-8"),
        b"piece length": info.piece_length,
        b"pieces": info.pieces,
    }

    match info.layout:
        case SingleFile(length=length):
            d[b"length"] = length
        case MultiFile(files=files):
            d[b"files"] = [_file_dict(entry) for entry in files]
        case layout:
            # only reachable through a corrupted in-memory record
            raise TypeError(f"Unsupported file layout: {layout!r}")

    return _canonical(d)


def encode(info: Info) -> bytes:
    """
    Serialize an Info record into its canonical bencoded form.

    Dictionaries are handed to bencodepy already sorted by raw key bytes;
    bencodepy writes integers in minimal decimal form and byte strings
    length-prefixed, so the output is exactly what the info hash is
    computed over.
    """
    return bencodepy.encode(info_to_dict(info))
