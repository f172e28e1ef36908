# pdfcompose

Building blocks for writing PDF content by hand and for reading the metrics
of TrueType fonts.

- **Units** (`pdfcompose.units`): convert between points, millimetres,
  centimetres, inches and pixels with `Unit`, `UnitConfig`,
  `units_to_points` and `points_to_units`. `Box.units_to_points` returns a
  copy of a box with all four edges in points; a box's own
  `unit_override` takes precedence over the unit passed in.
- **Binary output** (`pdfcompose.binary_io`): big-endian `write_uint32` and
  `write_uint16`, `write_tag`, `write_bytes`, and `Buff`, a byte buffer
  written at a movable `position` that overwrites or extends its content.
- **Image holders** (`pdfcompose.image_holder`): wrap image bytes, files or
  readers with an identifier used for caching. `image_holder_from_bytes`
  and `image_holder_from_reader` identify the data by its MD5 hex digest,
  `image_holder_from_path` by the path.
- **Graphics state operators** (`pdfcompose.graphics_state`): `ColorRGB`,
  `ColorCMYK`, `TextColorRGB`, `TextColorCMYK`, `Gray`, `LineWidth`,
  `LineType` (`dashed`, `dotted`, anything else solid), `CustomLineType`
  and `ColorSpaceRef`. Colour components outside 0..255 raise `ValueError`.
- **Shapes** (`pdfcompose.shapes`): `Line`, `Rectangle` (painted with a
  `PaintStyle`), `Oval`, `Polygon`, `Curve`, `Rotate`/`RotateReset`,
  `ImageContent` (with optional `Crop`, flips, rotation and mask rotation)
  and `ImportedTemplate`, plus `rotate_transformation_matrix`.

  Every operator and shape has a `render()` method returning its piece of
  PDF content-stream text. Coordinates are given from the top of the page
  and flipped using `page_height`.
- **TrueType parsing** (`pdfcompose.ttfparser`, `pdfcompose.ttf_tables`):
  `TTFParser` reads the `head`, `hhea`, `maxp`, `hmtx`, `cmap` (formats 4
  and 12), `name`, `OS/2`, `post` and `loca` tables, and the `kern` table
  when created with `use_kerning=True`. `FontReader`, `TableDirectoryEntry`,
  `KernTable`, `parse_kern` and `parse_cmap_format12` are the lower-level
  pieces. Malformed data raises `FontFormatError`; a missing table raises
  `TableNotFoundError`.
- **Font information** (`pdfcompose.ttf_info`): `TtfInfo`, a dictionary with
  type-checked getters (`get_bool`, `get_str`, `get_int`, `get_ints`,
  `get_int_map`) that raise `NoKeyFoundError` or `WrongTypeError`;
  `FontMap`, one entry of an encoding map; and `round_half_away`.

## Installation

```
pip install .
```

## Example

```python
from pdfcompose.units import Unit, units_to_points
from pdfcompose.shapes import Line
from pdfcompose.ttfparser import TTFParser

print(units_to_points(Unit.MM, 25.4))  # about 72 points

print(Line(page_height=842, x1=10, y1=10, x2=100, y2=10).render())

parser = TTFParser()
parser.parse("MyFont.ttf")
print(parser.post_script_name, parser.ascender(), parser.descender())
```

## Font maker

The `pdfcompose-fontmaker` command reads a TrueType font together with a
character map file and writes a zlib-compressed copy of the font
(`<name>.z`) and a Python definition file (`<name>_font.py`) holding a
class with the font's widths, underline metrics, encoding differences and
font descriptor entries, scaled to 1000 units per em:

```
pdfcompose-fontmaker cp874 ./map ./fonts/MyFont.ttf ./out
```

The arguments are the encoding name, the folder holding the `.map` files
(it must also hold `cp1252.map`, used as the reference encoding), the font
file and the output folder. Map files hold lines such as `!41 U+0041 A`.
Only `.ttf` files are accepted, and fonts whose licence forbids embedding
are refused. The same work is available from Python through
`pdfcompose.fontmaker.FontMaker`, whose `results` list collects the
messages and warnings about missing characters.

## What the package does not do

The package produces pieces of content streams and reads font metrics; it
does not assemble them into a PDF file. There is no document or page
object, no cross-reference table or trailer, no serialisation of catalog,
font, encryption or graphics-state dictionaries, no text layout or line
breaking, and no image decoding.

## Running the tests

```
pip install .[test]
pytest
```