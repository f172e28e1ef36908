"""Turn a TrueType font and an encoding map into a compressed font file and a metrics module."""

from __future__ import annotations

import errno
import os
import sys
import zlib
from typing import Mapping, Sequence

from pdfcompose.ttf_info import FontMap, NoKeyFoundError, TtfInfo, round_half_away
from pdfcompose.ttfparser import TTFParser

_NOTDEF = ".notdef"
_FONT_TYPE = "TrueType"
# Size reported for the embedded font program by generated definitions.
_ORIGINAL_SIZE = 98764


class FontLicenseError(ValueError):
    """The font's licence does not allow embedding."""

    def __init__(self) -> None:
        super().__init__("Font license does not allow embedding")


def _require_file(path: str) -> None:
    if not os.path.exists(path):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


class FontMaker:
    """Builds font definition files; messages about the work land in ``results``."""

    def __init__(self) -> None:
        self.results: list[str] = []

    def make_font(self, fontpath: str, mappath: str, encoding: str, outfolder: str) -> None:
        """Write ``<name>.z`` and ``<name>_font.py`` for ``fontpath`` into ``outfolder``."""
        encoding_path = os.path.join(mappath, encoding + ".map")
        _require_file(fontpath)
        if os.path.splitext(fontpath)[1].lower() != ".ttf":
            raise ValueError("support only ttf ")

        fontmaps = self.load_map(encoding_path)
        info = self.get_info_from_truetype(fontpath, fontmaps)

        basename = os.path.basename(fontpath).split(".")[0].replace(" ", "_")
        zfilename = basename + ".z"
        with open(fontpath, "rb") as handle:
            font_bytes = handle.read()
        zpath = os.path.join(outfolder, zfilename)
        with open(zpath, "wb") as handle:
            handle.write(zlib.compress(font_bytes))
        info["File"] = zfilename
        self.results.append(f"Save Z file at {zpath}.")

        self.make_definition_file(
            self.struct_name(basename),
            mappath,
            os.path.join(outfolder, basename + "_font.py"),
            encoding,
            fontmaps,
            info,
        )

    def struct_name(self, name: str) -> str:
        """``name`` with its first character upper-cased."""
        if not name:
            raise ValueError("empty font name")
        return name[0].upper() + name[1:]

    def make_definition_file(
        self,
        name: str,
        mappath: str,
        exportfile: str,
        encoding: str,
        fontmaps: Sequence[FontMap],
        info: TtfInfo,
    ) -> str:
        """Write a module defining class ``name`` with the font's metrics; return its text."""
        parts = [
            '"""Metrics of a TrueType font."""\n\n',
            "from pdfcompose.options import FontDescItem, to_byte\n\n\n",
            f"class {name}:\n",
            '    """Metrics of one TrueType font."""\n\n',
            "    def __init__(self) -> None:\n",
            '        self.family = ""\n',
            '        self.diff = ""\n',
            f"        self.original_size = {_ORIGINAL_SIZE}\n",
        ]
        parts.append(self.make_width_array(info.get_int_map("Widths")))
        parts.append(f"        self.up = {info.get_int('UnderlinePosition')}\n")
        parts.append(f"        self.ut = {info.get_int('UnderlineThickness')}\n")
        parts.append(f"        self.font_type = {_FONT_TYPE!r}\n")
        parts.append(f"        self.name = {info.get_str('FontName')!r}\n")
        parts.append(f"        self.enc = {encoding!r}\n")
        diff = self.make_font_encoding(mappath, fontmaps)
        if diff:
            parts.append(f"        self.diff = {diff!r}\n")
        parts.append(self.make_font_descriptor(info))
        text = "".join(parts)

        with open(exportfile, "w", encoding="utf-8") as handle:
            handle.write(text)
        self.results.append(f"Save definition file at {exportfile}.")
        return text

    def make_font_descriptor(self, info: TtfInfo) -> str:
        """Code assigning ``self.desc``, the font descriptor entries."""
        ascender = info.get_int("Ascender")
        descender = info.get_int("Descender")
        try:
            cap_height = info.get_int("CapHeight")
        except NoKeyFoundError:
            cap_height = ascender

        flags = 0
        if info.get_bool("IsFixedPitch"):
            flags += 1 << 0
        flags += 1 << 5
        italic_angle = info.get_int("ItalicAngle")
        if italic_angle != 0:
            flags += 1 << 6

        bbox = info.get_ints("FontBBox")
        if len(bbox) < 4:
            raise ValueError("FontBBox needs four values")

        try:
            std_vw: int | None = info.get_int("StdVW")
        except NoKeyFoundError:
            std_vw = None
        bold = info.get_bool("Bold")
        if std_vw is not None:
            stem_v = std_vw
        elif bold:
            stem_v = 120
        else:
            stem_v = 70

        missing_width = info.get_int("MissingWidth")

        items = [
            ("Ascent", str(ascender)),
            ("Descent", str(descender)),
            ("CapHeight", str(cap_height)),
            ("Flags", str(flags)),
            ("FontBBox", f"[{bbox[0]} {bbox[1]} {bbox[2]} {bbox[3]}]"),
            ("ItalicAngle", str(italic_angle)),
            ("StemV", str(stem_v)),
            ("MissingWidth", str(missing_width)),
        ]
        lines = ["        self.desc = [\n"]
        lines.extend(f'            FontDescItem("{key}", "{val}"),\n' for key, val in items)
        lines.append("        ]\n")
        return "".join(lines)

    def make_font_encoding(self, mappath: str, fontmaps: Sequence[FontMap]) -> str:
        """The ``/Differences`` of ``fontmaps`` against the cp1252 map in ``mappath``."""
        ref = self.load_map(os.path.join(mappath, "cp1252.map"))
        parts: list[str] = []
        last = 0
        for code, (entry, ref_entry) in enumerate(zip(fontmaps[:256], ref)):
            if entry.name != ref_entry.name:
                if code != last + 1:
                    parts.append(f"{code} ")
                last = code
                parts.append(f"/{entry.name} ")
        return "".join(parts).strip()

    def make_width_array(self, widths: Mapping[int, int]) -> str:
        """Code filling ``self.cw`` with the widths of codes 0..255."""
        lines = ["        self.cw = {}\n"]
        for code in range(256):
            char = chr(code)
            if char == '"':
                key = 'to_byte("\\"")'
            elif char == "\\":
                key = 'to_byte("\\\\")'
            elif 32 <= code <= 126:
                key = f'to_byte("{char}")'
            else:
                key = str(code)
            lines.append(f"        self.cw[{key}] = {widths.get(code, 0)}\n")
        return "".join(lines)

    def get_info_from_truetype(self, fontpath: str, fontmaps: Sequence[FontMap]) -> TtfInfo:
        """Read the metrics of ``fontpath``, scaled to 1000 units per em."""
        parser = TTFParser()
        parser.parse(fontpath)
        if not parser.embeddable:
            raise FontLicenseError()

        info = TtfInfo()
        with open(fontpath, "rb") as handle:
            info["Data"] = handle.read()
        info["OriginalSize"] = os.path.getsize(fontpath)

        if parser.units_per_em == 0:
            raise ValueError("font has zero units per em")
        k = 1000.0 / parser.units_per_em

        def scaled(value: int) -> int:
            return round_half_away(k * value)

        info["FontName"] = parser.post_script_name
        info["Bold"] = parser.bold
        info["ItalicAngle"] = parser.italic_angle
        info["IsFixedPitch"] = parser.is_fixed_pitch
        info["Ascender"] = scaled(parser.typo_ascender)
        info["Descender"] = scaled(parser.typo_descender)
        info["UnderlineThickness"] = scaled(parser.underline_thickness)
        info["UnderlinePosition"] = scaled(parser.underline_position)
        info["FontBBox"] = [
            scaled(parser.x_min),
            scaled(parser.y_min),
            scaled(parser.x_max),
            scaled(parser.y_max),
        ]
        info["CapHeight"] = scaled(parser.cap_height)
        if not parser.widths:
            raise ValueError("font has no glyph widths")
        missing_width = scaled(parser.widths[0])
        info["MissingWidth"] = missing_width

        widths = dict.fromkeys(range(256), missing_width)
        for code, entry in enumerate(fontmaps[:256]):
            if entry.name == _NOTDEF:
                continue
            glyph = parser.chars.get(entry.uv)
            if glyph is None:
                self.results.append(
                    f"Warning: Character {entry.name} ({entry.uv}) is missing"
                )
            else:
                widths[code] = scaled(parser.widths[glyph])
        info["Widths"] = widths
        return info

    def load_map(self, path: str) -> list[FontMap]:
        """Read an encoding map of lines such as ``!41 U+0041 A`` into 256 entries."""
        _require_file(path)
        fontmaps = [FontMap() for _ in range(256)]
        with open(path, encoding="utf-8") as handle:
            for line in handle:
                fields = line.strip().split(" ")
                if fields == [""]:
                    continue
                if len(fields) < 3:
                    raise ValueError(f"malformed map line: {line.strip()!r}")
                code = int(fields[0][1:], 16)
                uv = int(fields[1][2:], 16)
                if not 0 <= code < 256:
                    raise ValueError(f"character code out of range: {code}")
                fontmaps[code] = FontMap(uv=uv, name=fields[2])
        return fontmaps


def _usage() -> str:
    return (
        "fontmaker is tool for making font file to use with pdfcompose.\n"
        "\nUsage:\n"
        "\tfontmaker encoding map_folder font_file output_folder\n"
        "\nExample:\n"
        "\tfontmaker cp874 ./map  ../ttf/Loma.ttf ./tmp\n"
        "\n"
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Command entry point: ``fontmaker encoding map_folder font_file output_folder``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 4:
        sys.stdout.write(_usage())
        return
    print("Deprecated: No longer need to create font maps!!!!")
    encoding, mappath, fontpath, outputpath = args[:4]

    maker = FontMaker()
    try:
        maker.make_font(fontpath, mappath, encoding, outputpath)
    except (OSError, ValueError, KeyError, TypeError, IndexError) as err:
        sys.stderr.write(f"\nERROR: {err}\n\n")
        sys.stdout.write(_usage())
        return

    for result in maker.results:
        print(result)
    print("Finish.")