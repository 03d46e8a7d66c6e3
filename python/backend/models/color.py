"""Liquid colours for the water sort puzzle."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """A liquid colour tag. ``EMPTY`` (0) marks a slot without liquid.

    The named palette mirrors the colours of the mobile game; any other
    value up to 255 is accepted as an unnamed colour spelled ``color#<n>``.
    """

    EMPTY = 0
    BLUE = 1
    BROWN = 2
    DARK_BLUE = 3
    DARK_GREEN = 4
    GRAY = 5
    GREEN = 6
    LIGHT_BLUE = 7
    LIGHT_GREEN = 8
    ORANGE = 9
    PINK = 10
    PURPLE = 11
    RED = 12
    YELLOW = 13

    @classmethod
    def _missing_(cls, value: object) -> Color | None:
        if isinstance(value, int) and not isinstance(value, bool) and 0 < value < 256:
            member = int.__new__(cls, value)
            member._name_ = f"COLOR_{value}"
            member._value_ = value
            return member
        return None

    # -- naming ---------------------------------------------------------------

    @property
    def label(self) -> str:
        """Display / serialisation name, e.g. ``"DarkBlue"`` or ``"color#17"``."""
        name = _LABELS.get(self.value)
        if name is None:
            return f"color#{self.value}"
        return name

    @classmethod
    def parse(cls, token: str | int) -> Color:
        """Parse a palette name, ``color#<n>`` or a bare integer.

        Raises ``ValueError`` for anything else.
        """
        if isinstance(token, bool):
            raise ValueError(f"{token!r} is not a valid color")
        if isinstance(token, int):
            if token < 0:
                raise ValueError(f"{token!r} is not a valid color")
            return cls(token)

        text = token.strip()
        by_name = _BY_LABEL.get(text.lower())
        if by_name is not None:
            return by_name

        digits = text.removeprefix("color#")
        try:
            value = int(digits)
        except ValueError:
            raise ValueError(f"{token!r} is not a valid color") from None
        if value < 0:
            raise ValueError(f"{token!r} is not a valid color")
        return cls(value)

    def __str__(self) -> str:
        return self.label

    def __format__(self, format_spec: str) -> str:
        return format(self.label, format_spec)


_LABELS: dict[int, str] = {
    0: "Empty",
    1: "Blue",
    2: "Brown",
    3: "DarkBlue",
    4: "DarkGreen",
    5: "Gray",
    6: "Green",
    7: "LightBlue",
    8: "LightGreen",
    9: "Orange",
    10: "Pink",
    11: "Purple",
    12: "Red",
    13: "Yellow",
}

_BY_LABEL: dict[str, Color] = {
    label.lower(): Color(value) for value, label in _LABELS.items()
}

# Swatches used by the terminal and web renderers.
SWATCHES: dict[Color, str] = {
    Color.BLUE: "#3b7dd8",
    Color.BROWN: "#7a4b25",
    Color.DARK_BLUE: "#1d2f8f",
    Color.DARK_GREEN: "#1f6b34",
    Color.GRAY: "#8a8a8a",
    Color.GREEN: "#4cc74c",
    Color.LIGHT_BLUE: "#7fd3f0",
    Color.LIGHT_GREEN: "#b5ea72",
    Color.ORANGE: "#f28c28",
    Color.PINK: "#f06eaa",
    Color.PURPLE: "#7d3cb5",
    Color.RED: "#d8322e",
    Color.YELLOW: "#f2d94a",
}


def swatch(color: Color) -> str:
    """Return a hex colour for *color*, falling back to a neutral grey."""
    return SWATCHES.get(color, "#c0c0c0")
