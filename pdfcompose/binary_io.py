"""Big-endian writers and a positional byte buffer."""

from __future__ import annotations

from typing import BinaryIO


def write_uint32(w: BinaryIO, v: int) -> None:
    """Write the low 32 bits of ``v`` big-endian."""
    w.write(bytes(((v >> 24) & 0xFF, (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF)))


def write_uint16(w: BinaryIO, v: int) -> None:
    """Write the low 16 bits of ``v`` big-endian."""
    w.write(bytes(((v >> 8) & 0xFF, v & 0xFF)))


def write_tag(w: BinaryIO, tag: str) -> None:
    """Write ``tag`` as UTF-8 bytes."""
    w.write(tag.encode("utf-8"))


def write_bytes(w: BinaryIO, data: bytes, offset: int, count: int) -> None:
    """Write ``count`` bytes of ``data`` starting at ``offset``."""
    if offset < 0 or count < 0 or offset + count > len(data):
        raise IndexError("slice out of range")
    w.write(data[offset : offset + count])


class Buff:
    """A growable byte buffer written at a movable position."""

    def __init__(self) -> None:
        self.position = 0
        self._data = bytearray()

    def write(self, data: bytes) -> int:
        """Write ``data`` at the current position, overwriting or extending."""
        end = self.position + len(data)
        if len(self._data) < end:
            self._data.extend(bytes(end - len(self._data)))
        self._data[self.position : end] = data
        self.position = end
        return len(data)

    def to_bytes(self) -> bytes:
        """Return the whole buffer content."""
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)