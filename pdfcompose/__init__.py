"""Units, content stream operators, image holders and TrueType font parsing for PDF composition."""

__version__ = "0.1.0"

__all__ = [
    "binary_io",
    "fontmaker",
    "graphics_state",
    "image_holder",
    "shapes",
    "ttf_info",
    "ttf_tables",
    "ttfparser",
    "units",
]