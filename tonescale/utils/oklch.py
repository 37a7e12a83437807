"""OKLCH color utilities.

Parsing and formatting of CSS ``oklch()`` strings, conversion to sRGB via
OKLab (Björn Ottosson's matrices), and lightness/chroma helpers.

Conversion to a display color clips each sRGB channel into range. Colors
outside the sRGB gamut (common at high chroma) therefore come out as the
nearest clipped value, not a perceptually mapped one.
"""

from __future__ import annotations

import math
import re

from tonescale.models import Color, ParseError

# 100% chroma in CSS Color 4 corresponds to 0.4.
_CHROMA_PERCENT_REF = 0.4

_NUM = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?"
_OKLCH_RE = re.compile(
    rf"""
    oklch\(\s*
    (?P<l>{_NUM}%?|none)
    (?:\s+(?P<c>{_NUM}%?|none))?
    (?:\s+(?P<h>{_NUM}(?:deg)?|none))?
    (?:\s*/\s*(?P<alpha>{_NUM}%?|none))?
    \s*\)
    """,
    re.IGNORECASE | re.VERBOSE,
)
_HEX_RE = re.compile(r"#?([0-9a-f]{3}|[0-9a-f]{6})", re.IGNORECASE)


def _component(raw: str | None, percent_ref: float = 1.0, default: float = 0.0) -> float:
    if raw is None or raw.lower() == "none":
        return default
    raw = raw.lower()
    if raw.endswith("%"):
        return float(raw[:-1]) / 100.0 * percent_ref
    if raw.endswith("deg"):
        raw = raw[:-3]
    return float(raw)


def parse(value: str) -> Color:
    """Parse a CSS ``oklch(L C H [/ A])`` string.

    Omitted or ``none`` chroma and hue default to 0, omitted alpha to 1.
    Raises :class:`ParseError` for anything else.
    """
    if not isinstance(value, str):
        raise ParseError(repr(value), "expected a string")
    match = _OKLCH_RE.fullmatch(value.strip())
    if match is None:
        raise ParseError(value)

    lightness = _component(match["l"])
    chroma = _component(match["c"], _CHROMA_PERCENT_REF)
    hue = _component(match["h"]) % 360.0
    alpha = _component(match["alpha"], default=1.0)
    if not all(math.isfinite(v) for v in (lightness, chroma, hue, alpha)):
        raise ParseError(value, "non-finite component")
    return Color(lightness=lightness, chroma=chroma, hue=hue, alpha=alpha)


def _fmt(v: float) -> str:
    # repr() is the shortest text that round-trips through float().
    text = repr(float(v))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format(color: Color) -> str:  # noqa: A001
    """Format a color as ``oklch(L C H)``, adding ``/ A`` when translucent."""
    body = f"{_fmt(color.lightness)} {_fmt(color.chroma)} {_fmt(color.hue)}"
    if color.alpha < 1:
        body += f" / {_fmt(color.alpha)}"
    return f"oklch({body})"


def to_oklab(color: Color) -> tuple[float, float, float]:
    """Return the (L, a, b) OKLab coordinates of *color*."""
    h = math.radians(color.hue)
    return color.lightness, color.chroma * math.cos(h), color.chroma * math.sin(h)


def to_linear_rgb(color: Color) -> tuple[float, float, float]:
    """Convert to linear-light sRGB. Components are not clipped."""
    L, a, b = to_oklab(color)

    l_ = L + 0.3963377774 * a + 0.2158037573 * b
    m_ = L - 0.1055613458 * a - 0.0638541728 * b
    s_ = L - 0.0894841775 * a - 1.2914855480 * b

    l, m, s = l_ ** 3, m_ ** 3, s_ ** 3

    return (
        4.0767416621 * l - 3.3077115913 * m + 0.2309699292 * s,
        -1.2684380046 * l + 2.6097574011 * m - 0.3413193965 * s,
        -0.0041960863 * l - 0.7034186147 * m + 1.7076147010 * s,
    )


def linear_to_srgb(v: float) -> float:
    if abs(v) <= 0.0031308:
        return 12.92 * v
    return math.copysign(1.055 * abs(v) ** (1 / 2.4) - 0.055, v)


def srgb_to_linear(v: float) -> float:
    if v <= 0.04045:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def _to_byte(v: float) -> int:
    return max(0, min(255, round(v * 255)))


def to_rgb(color: Color) -> tuple[int, int, int]:
    """Convert to gamma-encoded sRGB, each channel clipped to 0-255."""
    r, g, b = (linear_to_srgb(v) for v in to_linear_rgb(color))
    return _to_byte(r), _to_byte(g), _to_byte(b)


def to_display_hex(color: Color | str) -> str:
    """Convert to an uppercase ``#RRGGBB`` string.

    Lossy: out-of-gamut colors are clipped per channel.
    """
    if isinstance(color, str):
        color = parse(color)
    r, g, b = to_rgb(color)
    return f"#{r:02X}{g:02X}{b:02X}"


def _cbrt(v: float) -> float:
    return math.copysign(abs(v) ** (1 / 3), v)


def from_hex(value: str) -> Color:
    """Convert a ``#RGB`` or ``#RRGGBB`` string to an OKLCH color."""
    match = _HEX_RE.fullmatch(value.strip())
    if match is None:
        raise ParseError(value, "expected #RGB or #RRGGBB")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (srgb_to_linear(int(digits[i:i + 2], 16) / 255.0) for i in (0, 2, 4))

    l_ = _cbrt(0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b)
    m_ = _cbrt(0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b)
    s_ = _cbrt(0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b)

    L = 0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_
    a = 1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_
    b_ = 0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_

    chroma = math.hypot(a, b_)
    # Hue is meaningless for greys; report 0 like CSS "none".
    hue = math.degrees(math.atan2(b_, a)) % 360.0 if chroma > 1e-6 else 0.0
    return Color(lightness=L, chroma=chroma, hue=hue)


def adjust_lightness(color: Color, lightness: float) -> Color:
    """Return *color* with lightness set to *lightness*, clamped to [0, 1]."""
    return Color(
        lightness=max(0.0, min(1.0, lightness)),
        chroma=color.chroma,
        hue=color.hue,
        alpha=color.alpha,
    )


def adjust_chroma(color: Color, chroma: float) -> Color:
    """Return *color* with chroma set to *chroma*, clamped to >= 0."""
    return Color(
        lightness=color.lightness,
        chroma=max(0.0, chroma),
        hue=color.hue,
        alpha=color.alpha,
    )


def lighten(color: Color, amount: float) -> Color:
    return adjust_lightness(color, color.lightness + amount)


def darken(color: Color, amount: float) -> Color:
    return adjust_lightness(color, color.lightness - amount)


def interpolate(color1: Color, color2: Color, t: float) -> Color:
    """Linearly interpolate lightness, chroma and hue independently.

    *t* is not clamped, so values outside [0, 1] extrapolate. The result is
    still clamped to legal lightness and chroma, and its hue is wrapped.
    Alpha is taken from *color1*.
    """
    lightness = color1.lightness + (color2.lightness - color1.lightness) * t
    chroma = color1.chroma + (color2.chroma - color1.chroma) * t
    hue = color1.hue + (color2.hue - color1.hue) * t
    return Color(
        lightness=max(0.0, min(1.0, lightness)),
        chroma=max(0.0, chroma),
        hue=hue % 360.0,
        alpha=color1.alpha,
    )
