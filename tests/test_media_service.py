import asyncio
import base64

import pytest

from ankiform.errors import EncodingError
from ankiform.models import MediaFile
from ankiform.services import MediaEncoder


def test_encode_none_returns_none():
    assert asyncio.run(MediaEncoder().encode(None)) is None


def test_encode_file_from_path(tmp_path):
    path = tmp_path / "hello.mp3"
    path.write_bytes(b"ID3 audio bytes")

    encoded = asyncio.run(MediaEncoder().encode(MediaFile.from_path(str(path))))

    assert encoded.filename == "hello.mp3"
    assert base64.b64decode(encoded.data) == b"ID3 audio bytes"


def test_encode_in_memory_data():
    encoded = asyncio.run(MediaEncoder().encode(MediaFile("cat.png", data=b"\x89PNG")))

    assert encoded.filename == "cat.png"
    assert encoded.data == base64.b64encode(b"\x89PNG").decode("ascii")


def test_missing_file_raises(tmp_path):
    media = MediaFile.from_path(str(tmp_path / "gone.mp3"))

    with pytest.raises(EncodingError) as exc:
        asyncio.run(MediaEncoder().encode(media))

    assert exc.value.filename == "gone.mp3"


def test_too_large_raises(tmp_path):
    path = tmp_path / "big.png"
    path.write_bytes(b"x" * 20)

    with pytest.raises(EncodingError):
        asyncio.run(MediaEncoder(max_bytes=10).encode(MediaFile.from_path(str(path))))


def test_encode_many_keeps_going_after_a_failure(tmp_path):
    good = tmp_path / "b.png"
    good.write_bytes(b"png")
    files = [
        MediaFile("a.png", data=b"a"),
        MediaFile.from_path(str(tmp_path / "missing.png")),
        MediaFile.from_path(str(good)),
    ]

    encoded, errors = asyncio.run(MediaEncoder().encode_many(files))

    assert [e.filename for e in encoded] == ["a.png", "b.png"]
    assert [e.filename for e in errors] == ["missing.png"]
