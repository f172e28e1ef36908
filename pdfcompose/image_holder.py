"""Holders for raw image data identified by a stable id."""

from __future__ import annotations

import hashlib
import io
import os
from typing import BinaryIO


class ImageHolder:
    """Image bytes together with an identifier used for caching."""

    def __init__(self, image_id: str, data: bytes) -> None:
        self._id = image_id
        self._data = bytes(data)
        self._stream = io.BytesIO(self._data)

    @property
    def id(self) -> str:
        """The identifier: a path or an MD5 hex digest of the data."""
        return self._id

    @property
    def data(self) -> bytes:
        """All image bytes."""
        return self._data

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining when negative)."""
        return self._stream.read(size)


def _md5_hex(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


def image_holder_from_bytes(data: bytes) -> ImageHolder:
    """Hold ``data``, identified by its MD5 digest."""
    return ImageHolder(_md5_hex(data), data)


def image_holder_from_path(path: str | os.PathLike[str]) -> ImageHolder:
    """Hold the content of the file at ``path``, identified by the path."""
    with open(path, "rb") as handle:
        data = handle.read()
    return ImageHolder(os.fspath(path), data)


def image_holder_from_reader(reader: BinaryIO) -> ImageHolder:
    """Hold everything read from ``reader``, identified by its MD5 digest."""
    data = reader.read()
    return ImageHolder(_md5_hex(data), data)