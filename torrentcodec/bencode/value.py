from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BencodeInt:
    value: int


@dataclass(frozen=True, slots=True)
class BencodeBytes:
    value: bytes


@dataclass(frozen=True, slots=True)
class BencodeList:
    items: tuple["Value", ...]


@dataclass(frozen=True, slots=True)
class BencodeDict:
    # pairs kept in stream order; lookups scan linearly
    pairs: tuple[tuple[bytes, "Value"], ...]

    def get(self, key: bytes) -> "Value | None":
        for k, v in self.pairs:
            if k == key:
                return v
        return None

    def keys(self) -> list[bytes]:
        return [k for k, _ in self.pairs]

    def __contains__(self, key: bytes) -> bool:
        return self.get(key) is not None


Value = BencodeInt | BencodeBytes | BencodeList | BencodeDict
