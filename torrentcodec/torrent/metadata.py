from dataclasses import dataclass
from pathlib import Path

PIECE_HASH_LENGTH = 20


@dataclass(frozen=True, slots=True)
class FileEntry:
    length: int
    path: tuple[str, ...]

    @property
    def relative_path(self) -> Path:
        return Path(*self.path)


@dataclass(frozen=True, slots=True)
class SingleFile:
    length: int


@dataclass(frozen=True, slots=True)
class MultiFile:
    files: tuple[FileEntry, ...]


FileLayout = SingleFile | MultiFile


@dataclass(frozen=True, slots=True)
class Info:
    name: str
    piece_length: int
    pieces: bytes
    layout: FileLayout

    @property
    def is_multi_file(self) -> bool:
        return isinstance(self.layout, MultiFile)

    @property
    def total_length(self) -> int:
        match self.layout:
            case SingleFile(length=length):
                return length
            case MultiFile(files=files):
                return sum(f.length for f in files)
        raise TypeError(f"Unsupported file layout: {self.layout!r}")

    @property
    def piece_count(self) -> int:
        return len(self.pieces) // PIECE_HASH_LENGTH

    @property
    def piece_hashes(self) -> list[bytes]:
        return [
            self.pieces[i : i + PIECE_HASH_LENGTH]
            for i in range(0, len(self.pieces), PIECE_HASH_LENGTH)
        ]


@dataclass(frozen=True, slots=True)
class Metainfo:
    announce: str
    info: Info
