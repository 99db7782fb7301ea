"""Glyph metrics used by the run builder.

The run builder asks a metrics strategy for the width, height and
displacement of every glyph it places. Real font metrics are supplied by an
external font backend; :class:`ZeroGlyphMetrics` is the placeholder used
until one is plugged in, and every quantity it reports is zero.
"""

import logging
from typing import TYPE_CHECKING, NamedTuple

from pdfruns.pdfexceptions import MetricsUnavailable
from pdfruns.utils import Point, isnumber

if TYPE_CHECKING:
    from pdfruns.pdfinterp import PDFTextState

log = logging.getLogger(__name__)


class GlyphMetrics(NamedTuple):
    width: float
    height: float
    disp: Point


ZERO_METRICS = GlyphMetrics(0, 0, (0, 0))


class PDFGlyphMetrics:
    """Interface of a glyph metrics strategy.

    Each query receives the character being placed and the current text
    state, and raises :class:`MetricsUnavailable` when it has no answer.
    """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"

    def char_width(self, char: str, textstate: "PDFTextState") -> float:
        raise MetricsUnavailable(f"No width for {char!r}")

    def char_height(self, char: str, textstate: "PDFTextState") -> float:
        raise MetricsUnavailable(f"No height for {char!r}")

    def char_disp(self, char: str, textstate: "PDFTextState") -> Point:
        """Returns the writing-direction displacement of a glyph."""
        raise MetricsUnavailable(f"No displacement for {char!r}")


class ZeroGlyphMetrics(PDFGlyphMetrics):
    def char_width(self, char: str, textstate: "PDFTextState") -> float:
        return 0

    def char_height(self, char: str, textstate: "PDFTextState") -> float:
        return 0

    def char_disp(self, char: str, textstate: "PDFTextState") -> Point:
        return (0, 0)


class PDFFontGlyphMetrics(PDFGlyphMetrics):
    """Asks the font stored in the text state for its metrics.

    The font handle is whatever ``set_text_font_and_size`` received. It is
    used when it answers ``char_width(cid)`` and ``get_height()`` in text
    space units of a 1 point font, as pdfminer's fonts do. Vertical fonts
    (``is_vertical()`` true) are also asked for ``char_disp(cid)``; for
    horizontal fonts the displacement is the glyph width. The character code
    is taken to be the ordinal of the character.
    """

    def _font(self, char: str, textstate: "PDFTextState", attr: str) -> object:
        font = textstate.font
        if font is None:
            raise MetricsUnavailable(f"No font selected for {char!r}")
        if not hasattr(font, attr):
            raise MetricsUnavailable(f"Font {font!r} has no {attr}()")
        return font

    def char_width(self, char: str, textstate: "PDFTextState") -> float:
        font = self._font(char, textstate, "char_width")
        try:
            width = font.char_width(ord(char))  # type: ignore[attr-defined]
        except (KeyError, IndexError, TypeError) as err:
            raise MetricsUnavailable(f"No width for {char!r}") from err
        if not isnumber(width):
            raise MetricsUnavailable(f"Invalid width {width!r} for {char!r}")
        return width

    def char_height(self, char: str, textstate: "PDFTextState") -> float:
        font = self._font(char, textstate, "get_height")
        height = font.get_height()  # type: ignore[attr-defined]
        if not isnumber(height):
            raise MetricsUnavailable(f"Invalid height {height!r} for {char!r}")
        return height

    def char_disp(self, char: str, textstate: "PDFTextState") -> Point:
        font = self._font(char, textstate, "char_width")
        is_vertical = getattr(font, "is_vertical", None)
        if is_vertical is None or not is_vertical():
            return (self.char_width(char, textstate), 0)
        font = self._font(char, textstate, "char_disp")
        try:
            disp = font.char_disp(ord(char))  # type: ignore[attr-defined]
        except (KeyError, IndexError, TypeError) as err:
            raise MetricsUnavailable(f"No displacement for {char!r}") from err
        if isnumber(disp):
            return (0, disp)
        (vx, vy) = disp
        return (vx or 0, vy or 0)


def get_glyph_metrics(
    metrics: PDFGlyphMetrics,
    char: str,
    textstate: "PDFTextState",
) -> GlyphMetrics:
    """Queries a strategy, substituting zero metrics for missing answers."""
    try:
        return GlyphMetrics(
            metrics.char_width(char, textstate),
            metrics.char_height(char, textstate),
            metrics.char_disp(char, textstate),
        )
    except MetricsUnavailable as err:
        log.debug("Using zero metrics for %r: %s", char, err)
        return ZERO_METRICS
