from pathlib import Path
import logging

from torrentcodec.bencode.decoder import decode_value
from torrentcodec.bencode.errors import (
    DecodeError,
    InvalidValueError,
    MissingFieldError,
)
from torrentcodec.bencode.value import (
    BencodeBytes,
    BencodeDict,
    BencodeInt,
    BencodeList,
    Value,
)
from torrentcodec.torrent.metadata import (
    PIECE_HASH_LENGTH,
    FileEntry,
    FileLayout,
    Info,
    Metainfo,
    MultiFile,
    SingleFile,
)

logger = logging.getLogger(__name__)

UINT64_MAX = 2**64 - 1


def _require(d: BencodeDict, field: str) -> Value:
    value = d.get(field.encode())
    if value is None:
        raise MissingFieldError(field)
    return value


def _as_dict(value: Value, field: str) -> BencodeDict:
    match value:
        case BencodeDict():
            return value
    raise InvalidValueError(field, f"expected a dictionary, got {type(value).__name__}")


def _as_list(value: Value, field: str) -> tuple[Value, ...]:
    match value:
        case BencodeList(items=items):
            return items
    raise InvalidValueError(field, f"expected a list, got {type(value).__name__}")


def _as_bytes(value: Value, field: str) -> bytes:
    match value:
        case BencodeBytes(value=raw):
            return raw
    raise InvalidValueError(field, f"expected a byte string, got {type(value).__name__}")


def _as_text(value: Value, field: str) -> str:
    raw = _as_bytes(value, field)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidValueError(field, "not valid UTF-8 text") from e


def _as_uint(value: Value, field: str, minimum: int = 0) -> int:
    match value:
        case BencodeInt(value=number):
            if not minimum <= number <= UINT64_MAX:
                raise InvalidValueError(
                    field, f"{number} is outside {minimum}..{UINT64_MAX}"
                )
            return number
    raise InvalidValueError(field, f"expected an integer, got {type(value).__name__}")


def _file_entry(value: Value) -> FileEntry:
    d = _as_dict(value, "files")
    length = _as_uint(_require(d, "length"), "length")
    segments = _as_list(_require(d, "path"), "path")
    if not segments:
        raise InvalidValueError("path", "must contain at least one segment")
    path = tuple(_as_text(seg, "path") for seg in segments)
    return FileEntry(length=length, path=path)


def _layout(d: BencodeDict) -> FileLayout:
    # a non-empty files list wins over a top-level length
    files_value = d.get(b"files")
    if files_value is not None:
        entries = _as_list(files_value, "files")
        if entries:
            return MultiFile(tuple(_file_entry(entry) for entry in entries))
    return SingleFile(_as_uint(_require(d, "length"), "length"))


def project_info(value: Value) -> Info:
    """Project a decoded `info` dictionary into an Info record."""
    d = _as_dict(value, "info")

    name = _as_text(_require(d, "name"), "name")
    piece_length = _as_uint(_require(d, "piece length"), "piece length", minimum=1)
    pieces = _as_bytes(_require(d, "pieces"), "pieces")
    if len(pieces) % PIECE_HASH_LENGTH != 0:
        raise InvalidValueError(
            "pieces",
            f"length {len(pieces)} is not a multiple of {PIECE_HASH_LENGTH}",
        )

    return Info(
        name=name,
        piece_length=piece_length,
        pieces=pieces,
        layout=_layout(d),
    )


def project_metainfo(value: Value) -> Metainfo:
    """Project a decoded root dictionary into a Metainfo record."""
    root = _as_dict(value, "metainfo")
    announce = _as_text(_require(root, "announce"), "announce")
    info = project_info(_require(root, "info"))
    return Metainfo(announce=announce, info=info)


def decode(data: bytes) -> Metainfo:
    """
    Decode a complete .torrent buffer.

    Unknown keys are ignored at every level. Raises a DecodeError subclass
    for malformed grammar, missing required fields or invalid values.
    """
    return project_metainfo(decode_value(data))


def decode_info(data: bytes) -> Info:
    """Decode a standalone bencoded `info` dictionary."""
    return project_info(decode_value(data))


def parse_torrent_file(path: Path) -> Metainfo:
    logger.info(f"Parsing torrent file: {path}")

    with path.open("rb") as f:
        data = f.read()

    try:
        metainfo = decode(data)
    except DecodeError as e:
        logger.error(f"Failed to decode torrent file {path}: {e}")
        raise

    info = metainfo.info
    if info.is_multi_file:
        logger.info(
            f"Parsed multi-file torrent: {info.name} ({len(info.layout.files)} files, {info.total_length} bytes)"
        )
    else:
        logger.info(f"Parsed single-file torrent: {info.name} ({info.total_length} bytes)")

    return metainfo
