"""
Purpose:
- Map an 8-bit RGB triple to a plain-English color name.
- COLOR_RULES is evaluated top to bottom and the first match wins. Neutrals come
  first, then hue buckets, then grays and brown, with "mixed" as the catch-all.
  Reordering the table changes results for boundary colors.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List

Predicate = Callable[[float, float, float], bool]

@dataclass(frozen=True)
class ColorRule:
    name: str
    matches: Predicate

def _grayish(r: float, g: float, b: float) -> bool:
    return abs(r - g) < 30 and abs(r - b) < 30 and abs(g - b) < 30

COLOR_RULES: List[ColorRule] = [
    ColorRule("white", lambda r, g, b: r > 220 and g > 220 and b > 220),
    ColorRule("black", lambda r, g, b: r < 30 and g < 30 and b < 30),

    # primary
    ColorRule("red", lambda r, g, b: r > 200 and g < 70 and b < 70),
    ColorRule("green", lambda r, g, b: r < 70 and g > 200 and b < 70),
    ColorRule("blue", lambda r, g, b: r < 70 and g < 70 and b > 200),

    # secondary
    ColorRule("yellow", lambda r, g, b: r > 200 and g > 200 and b < 70),
    ColorRule("magenta", lambda r, g, b: r > 200 and g < 70 and b > 200),
    ColorRule("cyan", lambda r, g, b: r < 70 and g > 200 and b > 200),

    # tertiary
    ColorRule("orange", lambda r, g, b: r > 200 and 120 < g < 180 and b < 70),
    ColorRule("purple", lambda r, g, b: 120 < r < 200 and g < 70 and b > 200),
    ColorRule("lime", lambda r, g, b: 70 < r < 120 and g > 200 and b < 70),
    ColorRule("teal", lambda r, g, b: r < 70 and 130 < g < 200 and b > 200),
    ColorRule("pink", lambda r, g, b: r > 200 and g < 70 and 130 < b < 200),
    ColorRule("gold", lambda r, g, b: r > 150 and g > 150 and b < 70),

    # gray shades, bucketed by the red channel
    ColorRule("dark gray", lambda r, g, b: _grayish(r, g, b) and r < 80),
    ColorRule("gray", lambda r, g, b: _grayish(r, g, b) and r < 150),
    ColorRule("light gray", _grayish),

    ColorRule("brown", lambda r, g, b: 130 < r < 200 and 70 < g < 130 and b < 70),
]

FALLBACK_COLOR = "mixed"

def color_name(red: float, green: float, blue: float) -> str:
    """Name the color of one RGB triple. Total: always returns a name."""
    for rule in COLOR_RULES:
        if rule.matches(red, green, blue):
            return rule.name
    return FALLBACK_COLOR
