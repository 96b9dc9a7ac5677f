"""Window options and HTML/CSS descriptions attached to UI2 windows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Ui2Size:
    """A width and height in pixels."""

    width: int = 0
    height: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ui2Size":
        return cls(width=int(data.get("width", 0)), height=int(data.get("height", 0)))


class Ui2ResizeMode(str, Enum):
    """Directions in which a window may be resized."""

    NONE = "none"
    WIDTH = "width"
    HEIGHT = "height"
    BOTH = "both"

    @classmethod
    def options(cls) -> list[str]:
        return [member.value for member in cls]


class Ui2ScrollbarMode(str, Enum):
    """Which scrollbars a window shows."""

    NONE = "none"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    BOTH = "both"
    AUTO = "auto"

    @classmethod
    def options(cls) -> list[str]:
        return [member.value for member in cls]

    def horizontal_visible(self) -> bool:
        return self in (Ui2ScrollbarMode.HORIZONTAL, Ui2ScrollbarMode.BOTH, Ui2ScrollbarMode.AUTO)

    def vertical_visible(self) -> bool:
        return self in (Ui2ScrollbarMode.VERTICAL, Ui2ScrollbarMode.BOTH, Ui2ScrollbarMode.AUTO)


class Ui2VerticalScrollbarSide(str, Enum):
    """Side on which the vertical scrollbar sits."""

    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def options(cls) -> list[str]:
        return [member.value for member in cls]

    def vui2_variant(self) -> str:
        return self.value.capitalize()


class Ui2HorizontalScrollbarSide(str, Enum):
    """Side on which the horizontal scrollbar sits."""

    TOP = "top"
    BOTTOM = "bottom"

    @classmethod
    def options(cls) -> list[str]:
        return [member.value for member in cls]

    def vui2_variant(self) -> str:
        return self.value.capitalize()


@dataclass
class Ui2WindowOptions:
    """Sizing, scrolling and hit-testing options of a UI2 window."""

    min_size: Ui2Size = field(default_factory=lambda: Ui2Size(320, 240))
    max_size: Optional[Ui2Size] = None
    resize_mode: Ui2ResizeMode = Ui2ResizeMode.BOTH
    scrollbars: Ui2ScrollbarMode = Ui2ScrollbarMode.NONE
    vertical_scrollbar_side: Ui2VerticalScrollbarSide = Ui2VerticalScrollbarSide.LEFT
    horizontal_scrollbar_side: Ui2HorizontalScrollbarSide = Ui2HorizontalScrollbarSide.BOTTOM
    hit_test_visible: bool = True
    preserve_scale: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_size": self.min_size.to_dict(),
            "max_size": self.max_size.to_dict() if self.max_size is not None else None,
            "resize_mode": self.resize_mode.value,
            "scrollbars": self.scrollbars.value,
            "vertical_scrollbar_side": self.vertical_scrollbar_side.value,
            "horizontal_scrollbar_side": self.horizontal_scrollbar_side.value,
            "hit_test_visible": self.hit_test_visible,
            "preserve_scale": self.preserve_scale,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ui2WindowOptions":
        defaults = cls()
        min_size = data.get("min_size")
        max_size = data.get("max_size")
        return cls(
            min_size=Ui2Size.from_dict(min_size) if min_size is not None else defaults.min_size,
            max_size=Ui2Size.from_dict(max_size) if max_size is not None else None,
            resize_mode=Ui2ResizeMode(data.get("resize_mode", defaults.resize_mode.value)),
            scrollbars=Ui2ScrollbarMode(data.get("scrollbars", defaults.scrollbars.value)),
            vertical_scrollbar_side=Ui2VerticalScrollbarSide(
                data.get("vertical_scrollbar_side", defaults.vertical_scrollbar_side.value)
            ),
            horizontal_scrollbar_side=Ui2HorizontalScrollbarSide(
                data.get("horizontal_scrollbar_side", defaults.horizontal_scrollbar_side.value)
            ),
            hit_test_visible=bool(data.get("hit_test_visible", defaults.hit_test_visible)),
            preserve_scale=bool(data.get("preserve_scale", defaults.preserve_scale)),
        )


_DEFAULT_HTML = (
    '<main class="ui2-window" data-layout="absolute">'
    '<section class="ui2-surface"></section></main>'
)
_DEFAULT_CSS = (
    ".ui2-window { position: relative; width: 100%; height: 100%; overflow: hidden; }\n"
    ".ui2-surface { position: relative; min-width: 100%; min-height: 100%; }\n"
)


@dataclass
class Ui2HtmlCssDescription:
    """Markup and stylesheet describing the content of a UI2 window."""

    html: str = _DEFAULT_HTML
    css: str = _DEFAULT_CSS

    def to_dict(self) -> dict[str, Any]:
        return {"html": self.html, "css": self.css}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ui2HtmlCssDescription":
        return cls(html=data.get("html", _DEFAULT_HTML), css=data.get("css", _DEFAULT_CSS))