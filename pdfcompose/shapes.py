"""Content-stream items that draw shapes, images and templates."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence


class PaintStyle(str, Enum):
    """Path painting operators for rectangles."""

    DRAW = "S"
    FILL = "f"
    DRAW_FILL = "B"


def rotate_transformation_matrix(
    x: float, y: float, degree_angle: float, page_height: float
) -> str:
    """Return the ``cm`` operators rotating by ``degree_angle`` about (x, y)."""
    radians = degree_angle * (math.pi / 180)
    c = math.cos(radians)
    s = math.sin(radians)
    cy = page_height - y
    return (
        f"{c:.5f} {s:.5f} {-s:.5f}\n {c:.5f} {x:.2f} {cy:.2f} cm\n"
        f" 1 0 0\n 1 {-x:.2f} {-cy:.2f} cm\n"
    )


def _gs_lines(indexes: Sequence[int]) -> str:
    return "".join(f"/GS{index} gs\n" for index in indexes)


@dataclass(frozen=True)
class Rotate:
    """Save the state and rotate by ``angle`` degrees about (x, y)."""

    angle: float
    x: float
    y: float
    page_height: float

    def render(self) -> str:
        return "q\n " + rotate_transformation_matrix(self.x, self.y, self.angle, self.page_height)


@dataclass(frozen=True)
class RotateReset:
    """Restore the state saved by :class:`Rotate`."""

    def render(self) -> str:
        return "Q\n"


@dataclass(frozen=True)
class Crop:
    """A crop window, relative to the image's placement."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ImageContent:
    """Place image resource ``/I<index+1>`` on the page."""

    index: int
    x: float
    y: float
    width: float
    height: float
    page_height: float
    with_mask: bool = False
    mask_angle: float = 0.0
    image_angle: float = 0.0
    vertical_flip: bool = False
    horizontal_flip: bool = False
    crop: Crop | None = None
    ext_g_state_indexes: tuple[int, ...] = field(default_factory=tuple)

    def _mask_rotation(self) -> str:
        angle = self.mask_angle + self.image_angle
        if angle == 0:
            return ""
        return rotate_transformation_matrix(
            self.x + self.width / 2, self.y + self.height / 2, angle, self.page_height
        )

    def _open_rotation(self) -> str:
        w, h = (self.crop.width, self.crop.height) if self.crop else (self.width, self.height)
        return Rotate(self.image_angle, self.x + w / 2, self.y + h / 2, self.page_height).render()

    def render(self) -> str:
        width, height = self.width, self.height
        parts: list[str] = []
        if not self.with_mask:
            parts.append(self._open_rotation())

        parts.append("q\n")
        parts.append(_gs_lines(self.ext_g_state_indexes))

        if self.horizontal_flip or self.vertical_flip:
            fh = "-1" if self.horizontal_flip else "1"
            fv = "-1" if self.vertical_flip else "1"
            parts.append(f"{fh} 0 0 {fv} 0 0 cm\n")

        x = self.x
        y = self.page_height - self.y
        crop = self.crop
        if crop is not None:
            clip_x = -x - crop.width if self.horizontal_flip else x
            clip_y = y - crop.height
            if self.vertical_flip:
                clip_y = -clip_y - crop.height
            parts.append(
                f"{clip_x:.2f} {clip_y:.2f} {crop.width:.2f} {crop.height:.2f} re W* n\n"
            )
            x -= crop.x
            if self.horizontal_flip:
                x = -x - width
            y += crop.y - height
            if self.vertical_flip:
                y = -y - height
        else:
            y -= height
            if self.horizontal_flip:
                x = -x - width
            if self.vertical_flip:
                y = -y - height

        mask_matrix = self._mask_rotation() if self.with_mask else ""
        parts.append(
            f"q\n {mask_matrix} {width:.2f} 0 0\n {height:.2f} {x:.2f} {y:.2f} cm "
            f"/I{self.index + 1} Do \nQ\n"
        )
        parts.append("Q\n")

        if not self.with_mask:
            parts.append(RotateReset().render())
        return "".join(parts)


@dataclass(frozen=True)
class ImportedTemplate:
    """Draw an imported page template with scaling and translation."""

    page_height: float
    tpl_name: str
    scale_x: float
    scale_y: float
    tx: float
    ty: float

    def render(self) -> str:
        ty = self.ty + self.page_height
        return (
            f"q 0 J 1 w 0 j 0 G 0 g q {self.scale_x:.4f} 0 0 {self.scale_y:.4f} "
            f"{self.tx:.4f} {ty:.4f} cm {self.tpl_name} Do Q Q\n"
        )


@dataclass(frozen=True)
class Line:
    """A stroked straight line from (x1, y1) to (x2, y2)."""

    page_height: float
    x1: float
    y1: float
    x2: float
    y2: float
    ext_g_state_indexes: tuple[int, ...] = field(default_factory=tuple)

    def render(self) -> str:
        h = self.page_height
        return (
            "q\n"
            + _gs_lines(self.ext_g_state_indexes)
            + f"{self.x1:.2f} {h - self.y1:.2f} m {self.x2:.2f} {h - self.y2:.2f} l S\n"
            + "Q\n"
        )


@dataclass(frozen=True)
class Oval:
    """A stroked ellipse inscribed in the box (x1, y1)-(x2, y2)."""

    page_height: float
    x1: float
    y1: float
    x2: float
    y2: float

    def render(self) -> str:
        h, x1, y1, x2, y2 = self.page_height, self.x1, self.y1, self.x2, self.y2
        cp = 0.55228
        dx = (x2 - x1) / 2 * cp
        dy = (y2 - y1) / 2 * cp
        v1 = (x1 + (x2 - x1) / 2, h - y2)
        v2 = (x2, h - (y1 + (y2 - y1) / 2))
        v3 = (x1 + (x2 - x1) / 2, h - y1)
        v4 = (x1, h - (y1 + (y2 - y1) / 2))

        def curve(*values: float) -> str:
            return " ".join(f"{value:.2f}" for value in values) + " c"

        return (
            f"{v1[0]:.2f} {v1[1]:.2f} m\n"
            + curve(v1[0] + dx, v1[1], v2[0], v2[1] - dy, v2[0], v2[1]) + "\n"
            + curve(v2[0], v2[1] + dy, v3[0] + dx, v3[1], v3[0], v3[1]) + "\n"
            + curve(v3[0] - dx, v3[1], v4[0], v4[1] + dy, v4[0], v4[1]) + "\n"
            + curve(v4[0], v4[1] - dy, v1[0] - dx, v1[1], v1[0], v1[1]) + " S\n"
        )


@dataclass(frozen=True)
class Polygon:
    """A closed polygon; style ``F`` fills, ``FD``/``DF`` fills and strokes."""

    page_height: float
    points: Sequence[tuple[float, float]]
    style: str = ""
    ext_g_state_indexes: tuple[int, ...] = field(default_factory=tuple)

    def render(self) -> str:
        parts = ["q\n", _gs_lines(self.ext_g_state_indexes)]
        for position, (px, py) in enumerate(self.points):
            parts.append(f"{px:.2f} {self.page_height - py:.2f}")
            parts.append(" m " if position == 0 else " l ")
        if self.style == "F":
            parts.append(" f\n")
        elif self.style in ("FD", "DF"):
            parts.append(" b\n")
        else:
            parts.append(" s\n")
        parts.append("Q\n")
        return "".join(parts)


@dataclass(frozen=True)
class Rectangle:
    """A rectangle painted with a :class:`PaintStyle` operator."""

    page_height: float
    x: float
    y: float
    width: float
    height: float
    style: str = PaintStyle.DRAW.value
    ext_g_state_indexes: tuple[int, ...] = field(default_factory=tuple)

    def render(self) -> str:
        style = self.style.value if isinstance(self.style, PaintStyle) else self.style
        style = style or PaintStyle.DRAW.value
        return (
            "q\n"
            + _gs_lines(self.ext_g_state_indexes)
            + f"{self.x:.2f} {self.page_height - self.y:.2f} {self.width:.2f} "
            f"{self.height:.2f} re {style}\n"
            + "Q\n"
        )


@dataclass(frozen=True)
class Curve:
    """A cubic Bézier curve; style ``D``/empty draws, ``F`` fills, ``DF``/``FD`` both."""

    page_height: float
    x0: float
    y0: float
    x1: float
    y1: float
    x2: float
    y2: float
    x3: float
    y3: float
    style: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "style", self.style.strip().upper())

    def render(self) -> str:
        h = self.page_height
        if self.style == "F":
            op = "f"
        elif self.style in ("FD", "DF"):
            op = "B"
        else:
            op = "S"
        return (
            f"{self.x0:.2f} {h - self.y0:.2f} m\n"
            f"{self.x1:.2f} {h - self.y1:.2f} {self.x2:.2f} {h - self.y2:.2f} "
            f"{self.x3:.2f} {h - self.y3:.2f} c {op}\n"
        )