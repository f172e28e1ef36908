import io
import struct

import pytest

from pdfcompose.ttf_tables import CmapFormat12Group, FontFormatError, TableNotFoundError
from pdfcompose.ttfparser import NONSYMBOLIC, TTFParser


def _head(upem=1000, bbox=(-100, -200, 1100, 900), loc_format=0, magic=0x5F0F3CF5):
    return struct.pack(
        ">IIIIHHqqhhhhHHhhh",
        0x10000, 0, 0, magic, 0, upem, 0, 0, *bbox, 0, 0, 0, loc_format, 0,
    )


def _hhea(asc=800, desc=-200, n_metrics=3):
    return struct.pack(">Ihh13hH", 0x10000, asc, desc, *([0] * 13), n_metrics)


def _maxp(num_glyphs=5):
    return struct.pack(">IH", 0x5000, num_glyphs)


def _hmtx(widths=(500, 600, 700)):
    return b"".join(struct.pack(">Hh", w, 0) for w in widths)


def _cmap(platform=(3, 1), groups=None, subtable_format=4):
    end = [67, 98, 0xFFFF]
    start = [65, 97, 0xFFFF]
    delta = [65472, 0, 1]
    range_offsets = [0, 4, 0]
    glyph_ids = [4, 0]
    length = 16 + 8 * 3 + 2 * len(glyph_ids)
    fmt4 = (
        struct.pack(">HHHHHHH", subtable_format, length, 0, 6, 4, 1, 2)
        + struct.pack(">3H", *end)
        + struct.pack(">H", 0)
        + struct.pack(">3H", *start)
        + struct.pack(">3H", *delta)
        + struct.pack(">3H", *range_offsets)
        + struct.pack(">2H", *glyph_ids)
    )
    subtables = [(platform, fmt4)]
    if groups:
        fmt12 = struct.pack(">HHIII", 12, 0, 16 + 12 * len(groups), 0, len(groups))
        fmt12 += b"".join(struct.pack(">III", *g) for g in groups)
        subtables.append(((3, 10), fmt12))
    header = struct.pack(">HH", 0, len(subtables))
    offset = 4 + 8 * len(subtables)
    records = b""
    body = b""
    for (pid, eid), data in subtables:
        records += struct.pack(">HHI", pid, eid, offset + len(body))
        body += data
    return header + records + body


def _name(ps_name="Test-Font"):
    entries = [(1, "Family".encode("utf-16-be"))]
    if ps_name:
        entries.append((6, ps_name.encode("utf-16-be")))
    count = len(entries)
    data = struct.pack(">HHH", 0, count, 6 + 12 * count)
    strings = b""
    for name_id, raw in entries:
        data += struct.pack(">HHHHHH", 3, 1, 0x409, name_id, len(raw), len(strings))
        strings += raw
    return data + strings


def _os2(version=3, fs_type=0, fs_selection=0, typo=(750, -250), win=(900, 300),
         x_height=500, cap_height=700):
    data = struct.pack(">HhHHH", version, 0, 400, 5, fs_type) + bytes(52)
    data += struct.pack(">HHHhhhHH", fs_selection, 32, 126, typo[0], typo[1], 0, win[0], win[1])
    if version >= 2:
        data += bytes(8) + struct.pack(">hh", x_height, cap_height) + bytes(6)
    return data


def _post(italic=-12, up=-100, ut=50, fixed=1):
    return struct.pack(">IhHhhI", 0x30000, italic, 0, up, ut, fixed) + bytes(16)


def _loca(offsets=(0, 10, 20, 30, 40, 50), long_format=False):
    if long_format:
        return b"".join(struct.pack(">I", v) for v in offsets)
    return b"".join(struct.pack(">H", v // 2) for v in offsets)


def _kern(pairs):
    data = struct.pack(">HH", 0, 1)
    data += struct.pack(">HHHHHHH", 0, 14 + 6 * len(pairs), 1, len(pairs), 0, 0, 0)
    data += b"".join(struct.pack(">HHh", *p) for p in pairs)
    return data


def base_tables():
    return {
        "head": _head(),
        "hhea": _hhea(),
        "maxp": _maxp(),
        "hmtx": _hmtx(),
        "cmap": _cmap(),
        "name": _name(),
        "OS/2": _os2(),
        "post": _post(),
        "loca": _loca(),
    }


def build_font(tables):
    n = len(tables)
    header = struct.pack(">IHHHH", 0x00010000, n, 0, 0, 0)
    offset = 12 + 16 * n
    entries = b""
    body = b""
    for tag, data in tables.items():
        entries += struct.pack(">4sIII", tag.encode("latin-1"), 0, offset + len(body), len(data))
        body += data + bytes((-len(data)) % 4)
    return header + entries + body


def parsed(tables=None, use_kerning=False):
    parser = TTFParser(use_kerning=use_kerning)
    parser.parse_bytes(build_font(tables if tables is not None else base_tables()))
    return parser


def test_head_metrics():
    p = parsed()
    assert p.units_per_em == 1000
    assert (p.x_min, p.y_min, p.x_max, p.y_max) == (-100, -200, 1100, 900)


def test_hhea_and_maxp():
    p = parsed()
    assert p.hhea_ascender == 800
    assert p.hhea_descender == -200
    assert p.number_of_h_metrics == 3
    assert p.num_glyphs == 5


def test_widths_padded_with_last_width():
    p = parsed()
    assert p.widths == [500, 600, 700, 700, 700]


def test_cmap_format4_chars():
    p = parsed()
    assert p.chars == {65: 1, 66: 2, 67: 3, 97: 4}
    assert 98 not in p.chars
    assert p.seg_count == 3
    assert p.start_count == [65, 97, 0xFFFF]
    assert p.glyph_id_array == [4, 0]


def test_post_script_name():
    assert parsed().post_script_name == "Test-Font"


def test_post_script_name_drops_zero_characters():
    tables = base_tables()
    tables["name"] = _name("Font0Sans")
    assert parsed(tables).post_script_name == "FontSans"


def test_missing_post_script_name():
    tables = base_tables()
    tables["name"] = _name(None)
    with pytest.raises(FontFormatError):
        parsed(tables)


def test_post_table():
    p = parsed()
    assert p.italic_angle == -12
    assert p.underline_position == -100
    assert p.underline_thickness == 50
    assert p.is_fixed_pitch is True


@pytest.mark.parametrize(
    "fs_type, expected",
    [(0, True), (2, False), (0x200, False), (8, True)],
)
def test_embeddable(fs_type, expected):
    tables = base_tables()
    tables["OS/2"] = _os2(fs_type=fs_type)
    assert parsed(tables).embeddable is expected


def test_bold_from_fs_selection():
    tables = base_tables()
    tables["OS/2"] = _os2(fs_selection=32)
    assert parsed(tables).bold is True
    assert parsed().bold is False


def test_cap_height_from_os2_version_2():
    p = parsed()
    assert p.cap_height == 700
    assert p.x_height() == 500


def test_cap_height_falls_back_to_hhea_ascender():
    tables = base_tables()
    tables["OS/2"] = _os2(version=1)
    p = parsed(tables)
    assert p.cap_height == p.hhea_ascender == 800


def test_x_height_estimated_without_sx_height():
    tables = base_tables()
    tables["hhea"] = _hhea(asc=1000)
    tables["OS/2"] = _os2(version=1)
    assert parsed(tables).x_height() == 660


def test_ascender_descender_use_windows_metrics():
    p = parsed()
    assert p.ascender() == 900
    assert p.descender() == -300


def test_ascender_descender_fall_back_to_hhea():
    tables = base_tables()
    tables["OS/2"] = _os2(typo=(0, 0))
    p = parsed(tables)
    assert p.ascender() == 800
    assert p.descender() == -200


def test_flag_is_nonsymbolic():
    assert parsed().flag() == NONSYMBOLIC


def test_short_loca():
    p = parsed()
    assert p.is_short_index is True
    assert p.loca_table == [0, 10, 20, 30, 40, 50]


def test_long_loca():
    tables = base_tables()
    tables["head"] = _head(loc_format=1)
    tables["loca"] = _loca(offsets=(0, 100, 70000), long_format=True)
    p = parsed(tables)
    assert p.is_short_index is False
    assert p.loca_table == [0, 100, 70000]


def test_kerning_read_when_enabled():
    tables = base_tables()
    tables["kern"] = _kern([(1, 2, -50), (1, 3, 20)])
    p = parsed(tables, use_kerning=True)
    assert p.kern is not None
    assert p.kern.value(1, 2) == -50
    assert p.kern.value(1, 3) == 20
    assert p.kern.value(2, 1) is None


def test_kerning_ignored_when_disabled():
    tables = base_tables()
    tables["kern"] = _kern([(1, 2, -50)])
    assert parsed(tables).kern is None


def test_kerning_enabled_without_table():
    assert parsed(use_kerning=True).kern is None


def test_cmap_format12_groups():
    tables = base_tables()
    tables["cmap"] = _cmap(groups=[(0x1F600, 0x1F602, 10)])
    p = parsed(tables)
    assert p.grouping_tables == [CmapFormat12Group(0x1F600, 0x1F602, 10)]
    assert p.chars[65] == 1


def test_no_format12_gives_empty_groups():
    assert parsed().grouping_tables == []


def test_parse_from_path_and_reader(tmp_path):
    data = build_font(base_tables())
    path = tmp_path / "font.ttf"
    path.write_bytes(data)

    from_path = TTFParser()
    from_path.parse(path)
    from_reader = TTFParser()
    from_reader.parse_reader(io.BytesIO(data))

    assert from_path.font_data == data
    assert from_reader.font_data == data
    assert from_path.chars == from_reader.chars
    assert from_path.widths == from_reader.widths


def test_reparse_does_not_accumulate_widths():
    data = build_font(base_tables())
    parser = TTFParser()
    parser.parse_bytes(data)
    parser.parse_bytes(data)
    assert len(parser.widths) == parser.num_glyphs


def test_bad_version_rejected():
    data = bytearray(build_font(base_tables()))
    data[0:4] = b"OTTO"
    with pytest.raises(FontFormatError):
        TTFParser().parse_bytes(bytes(data))


def test_bad_magic_rejected():
    tables = base_tables()
    tables["head"] = _head(magic=0x12345678)
    with pytest.raises(FontFormatError):
        parsed(tables)


def test_missing_table_rejected():
    tables = base_tables()
    del tables["loca"]
    with pytest.raises(TableNotFoundError):
        parsed(tables)


def test_no_unicode_cmap_rejected():
    tables = base_tables()
    tables["cmap"] = _cmap(platform=(1, 0))
    with pytest.raises(FontFormatError):
        parsed(tables)


def test_unexpected_cmap_format_rejected():
    tables = base_tables()
    tables["cmap"] = _cmap(subtable_format=6)
    with pytest.raises(FontFormatError):
        parsed(tables)


def test_truncated_font_rejected():
    data = build_font(base_tables())
    with pytest.raises(FontFormatError):
        TTFParser().parse_bytes(data[:40])