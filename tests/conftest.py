from pathlib import Path

import bencodepy
import pytest

FIXTURES = Path(__file__).parent / "fixtures"

SAMPLE_INFO_HASH = "d69f91e6b2ae4c542468d1073a71d4ea13879a7f"
# canonical (key-sorted) encoding of multi.torrent's info dictionary
MULTI_INFO_HASH = "1fb456afd839554eb07ae36d5e27324a9ef6593d"


@pytest.fixture
def sample_torrent() -> bytes:
    return (FIXTURES / "sample.torrent").read_bytes()


@pytest.fixture
def multi_torrent() -> bytes:
    return (FIXTURES / "multi.torrent").read_bytes()


@pytest.fixture
def info_dict() -> dict:
    """A minimal well-formed single-file info dictionary."""
    return {
        b"name": b"file.bin",
        b"piece length": 16384,
        b"pieces": b"\xab" * 40,
        b"length": 20000,
    }


@pytest.fixture
def make_torrent():
    def _make(info: dict, announce: bytes = b"http://tracker.test/announce") -> bytes:
        return bencodepy.encode({b"announce": announce, b"info": info})

    return _make
