"""Content-stream operators that change the graphics state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

STROKE_RGB = "RG"
FILL_RGB = "rg"
STROKE_CMYK = "K"
FILL_CMYK = "k"
GRAY_FILL = "g"
GRAY_STROKE = "G"


class ContentItem(Protocol):
    """Anything that renders itself as a piece of a content stream."""

    def render(self) -> str: ...


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be within 0..255, got {value}")


def _check_bytes(**values: int) -> None:
    for name, value in values.items():
        _check_byte(name, value)


@dataclass(frozen=True)
class ColorSpaceRef:
    """Select a separation colour space by its zero-based count."""

    count_of_space_color: int

    def render(self) -> str:
        return f"/CS{self.count_of_space_color + 1} CS 1.0000 SCN\n"


@dataclass(frozen=True)
class ColorRGB:
    """Set an RGB stroke or fill colour from 0..255 components."""

    r: int
    g: int
    b: int
    color_type: str = FILL_RGB

    def __post_init__(self) -> None:
        _check_bytes(r=self.r, g=self.g, b=self.b)

    def render(self) -> str:
        return f"{self.r / 255:.3f} {self.g / 255:.3f} {self.b / 255:.3f} {self.color_type}\n"


@dataclass(frozen=True)
class ColorCMYK:
    """Set a CMYK stroke or fill colour from 0..100 percentages."""

    c: int
    m: int
    y: int
    k: int
    color_type: str = FILL_CMYK

    def __post_init__(self) -> None:
        _check_bytes(c=self.c, m=self.m, y=self.y, k=self.k)

    def render(self) -> str:
        return (
            f"{self.c / 100:.2f} {self.m / 100:.2f} {self.y / 100:.2f} "
            f"{self.k / 100:.2f} {self.color_type}\n"
        )


@dataclass(frozen=True)
class CustomLineType:
    """Set a dash pattern from an explicit dash array and phase."""

    dash_array: Sequence[float]
    dash_phase: float

    def render(self) -> str:
        dashes = " ".join(f"{value:.2f}" for value in self.dash_array)
        return f"[{dashes}] {self.dash_phase:.2f} d\n"


@dataclass(frozen=True)
class Gray:
    """Set a grayscale stroke or fill level."""

    scale: float
    gray_type: str = GRAY_FILL

    def render(self) -> str:
        return f"{self.scale:.2f} {self.gray_type}\n"


@dataclass(frozen=True)
class LineType:
    """Set a named dash pattern: ``dashed``, ``dotted`` or anything else for solid."""

    line_type: str = "solid"

    def render(self) -> str:
        if self.line_type == "dashed":
            return "[5] 2 d\n"
        if self.line_type == "dotted":
            return "[2 3] 11 d\n"
        return "[] 0 d\n"


@dataclass(frozen=True)
class LineWidth:
    """Set the line width."""

    width: float

    def render(self) -> str:
        return f"{self.width:.2f} w\n"


@dataclass(frozen=True)
class TextColorRGB:
    """An RGB text fill colour; equal to another only of the same kind."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        _check_bytes(r=self.r, g=self.g, b=self.b)

    def render(self) -> str:
        return ColorRGB(self.r, self.g, self.b, FILL_RGB).render()


@dataclass(frozen=True)
class TextColorCMYK:
    """A CMYK text fill colour; equal to another only of the same kind."""

    c: int
    m: int
    y: int
    k: int

    def __post_init__(self) -> None:
        _check_bytes(c=self.c, m=self.m, y=self.y, k=self.k)

    def render(self) -> str:
        return ColorCMYK(self.c, self.m, self.y, self.k, FILL_CMYK).render()