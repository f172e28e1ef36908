"""Low-level TrueType reading: the byte reader, table entries, kerning and cmap format 12."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


class FontFormatError(ValueError):
    """The font data is malformed or uses an unsupported layout."""


class TableNotFoundError(FontFormatError):
    """A required table is missing from the font's table directory."""


class FontReader:
    """A big-endian reader over font bytes with an absolute position."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def data(self) -> bytes:
        """All bytes of the font."""
        return self._data

    def read(self, length: int) -> bytes:
        """Read exactly ``length`` bytes."""
        if length < 0:
            raise FontFormatError("negative read length")
        end = self._pos + length
        if self._pos >= len(self._data) or end > len(self._data):
            raise FontFormatError("file out of length")
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def read_ushort(self) -> int:
        """Read an unsigned 16-bit integer."""
        return int.from_bytes(self.read(2), "big")

    def read_short(self) -> int:
        """Read a signed 16-bit integer."""
        return int.from_bytes(self.read(2), "big", signed=True)

    def read_ulong(self) -> int:
        """Read an unsigned 32-bit integer."""
        return int.from_bytes(self.read(4), "big")

    def skip(self, length: int) -> None:
        """Move the position forward (or back) by ``length`` bytes."""
        self.seek(self._pos + length)

    def seek(self, offset: int) -> None:
        """Move to the absolute ``offset``."""
        if offset < 0:
            raise FontFormatError("negative position")
        self._pos = offset

    def tell(self) -> int:
        """The current absolute position."""
        return self._pos

    def seek_table(self, tables: Mapping[str, TableDirectoryEntry], tag: str) -> None:
        """Move to the start of the table named ``tag``."""
        try:
            entry = tables[tag]
        except KeyError:
            raise TableNotFoundError(tag) from None
        self.seek(entry.offset)


@dataclass(frozen=True)
class TableDirectoryEntry:
    """Location of one table within the font file."""

    checksum: int = 0
    offset: int = 0
    length: int = 0

    def padded_length(self) -> int:
        """The length rounded up to a multiple of four."""
        return (self.length + 3) & ~3


@dataclass
class KernTable:
    """Format-0 kerning pairs: ``kerning[left][right] = value``."""

    version: int = 0
    n_tables: int = 0
    kerning: dict[int, dict[int, int]] = field(default_factory=dict)

    def value(self, left: int, right: int) -> int | None:
        """The kerning value of the glyph pair, or ``None`` when there is none."""
        return self.kerning.get(left, {}).get(right)


@dataclass(frozen=True)
class CmapFormat12Group:
    """A sequential map group of a format-12 cmap subtable."""

    start_char_code: int
    end_char_code: int
    glyph_id: int


def _parse_kern_subtable(reader: FontReader, kern: KernTable) -> None:
    reader.skip(2 + 2)  # version, length
    coverage = reader.read_ushort()
    fmt = coverage & 0xF0
    # Each subtable replaces the pairs of the previous ones.
    kern.kerning = {}
    if fmt != 0:
        raise FontFormatError(f"not support kerning format {fmt}")
    n_pairs = reader.read_ushort()
    reader.skip(2 + 2 + 2)  # searchRange, entrySelector, rangeShift
    for _ in range(n_pairs):
        left = reader.read_ushort()
        right = reader.read_ushort()
        value = reader.read_short()
        kern.kerning.setdefault(left, {})[right] = value


def parse_kern(
    reader: FontReader, tables: Mapping[str, TableDirectoryEntry]
) -> KernTable | None:
    """Parse the ``kern`` table; ``None`` when the font has none."""
    try:
        reader.seek_table(tables, "kern")
    except TableNotFoundError:
        return None
    kern = KernTable()
    kern.version = reader.read_ushort()
    kern.n_tables = reader.read_ushort()
    for _ in range(kern.n_tables):
        _parse_kern_subtable(reader, kern)
    return kern


def parse_cmap_format12(
    reader: FontReader, tables: Mapping[str, TableDirectoryEntry]
) -> list[CmapFormat12Group] | None:
    """Parse the Windows full-Unicode (3, 10) cmap subtable.

    Returns ``None`` when the font has no such subtable.
    """
    reader.seek_table(tables, "cmap")
    reader.skip(2)  # version
    num_tables = reader.read_ushort()
    records = []
    for _ in range(num_tables):
        platform_id = reader.read_ushort()
        encoding_id = reader.read_ushort()
        offset = reader.read_ulong()
        records.append((platform_id, encoding_id, offset))

    offset = next(
        (off for platform_id, encoding_id, off in records if (platform_id, encoding_id) == (3, 10)),
        None,
    )
    if offset is None:
        return None

    reader.seek(tables["cmap"].offset + offset)
    if reader.read_ushort() != 12:
        raise FontFormatError("format != 12")
    if reader.read_ushort() != 0:
        raise FontFormatError("reserved != 0")
    reader.skip(4)  # length
    reader.skip(4)  # language
    n_groups = reader.read_ulong()
    groups = []
    for _ in range(n_groups):
        start = reader.read_ulong()
        end = reader.read_ulong()
        glyph = reader.read_ulong()
        groups.append(CmapFormat12Group(start, end, glyph))
    return groups