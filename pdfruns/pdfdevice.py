import logging
from typing import TYPE_CHECKING

from pdfruns.layout import LTTextRun
from pdfruns.pdffont import PDFGlyphMetrics, ZeroGlyphMetrics, get_glyph_metrics
from pdfruns.utils import (
    MATRIX_IDENTITY,
    Matrix,
    apply_matrix_pt,
    matrix2str,
    mult_matrix,
    text_rendering_matrix,
    translation_matrix,
)

if TYPE_CHECKING:
    from pdfruns.pdfinterp import PDFTextState, PDFTextStateStack

log = logging.getLogger(__name__)

WORD_SEPARATOR = " "


class PDFDevice:
    """Translate the output of PDFTextRunInterpreter to the output that is needed"""

    def __init__(self) -> None:
        self.ctm: Matrix = MATRIX_IDENTITY

    def __repr__(self) -> str:
        return "<PDFDevice>"

    def set_ctm(self, ctm: Matrix) -> None:
        self.ctm = ctm

    def begin_page(self, page: object) -> None:
        pass

    def end_page(self, page: object) -> None:
        pass

    def render_string(
        self,
        stack: "PDFTextStateStack",
        text: str | bytes,
    ) -> list[LTTextRun]:
        return []


class PDFTextRunDevice(PDFDevice):
    """Places every character of a shown string as a text run.

    Glyph sizes and advances come from the glyph metrics strategy, which
    defaults to :class:`ZeroGlyphMetrics`. The current transformation matrix
    is the identity unless the caller sets one, so runs are reported in text
    space by default.
    """

    def __init__(self, metrics: PDFGlyphMetrics | None = None) -> None:
        PDFDevice.__init__(self)
        self.metrics = ZeroGlyphMetrics() if metrics is None else metrics

    def __repr__(self) -> str:
        return f"<PDFTextRunDevice: metrics={self.metrics!r}>"

    def render_string(
        self,
        stack: "PDFTextStateStack",
        text: str | bytes,
    ) -> list[LTTextRun]:
        if isinstance(text, bytes):
            # One character per byte code.
            text = text.decode("latin-1")
        # The text matrix is advanced on a copy of the frame and restored
        # when the string is done.
        stack.push_copy()
        runs = [self.render_char(stack.top(), char) for char in text]
        stack.pop()
        return runs

    def render_char(self, textstate: "PDFTextState", char: str) -> LTTextRun:
        fontsize = textstate.fontsize
        scaling = textstate.scaling
        trm = text_rendering_matrix(fontsize, scaling, textstate.rise)
        matrix = mult_matrix(mult_matrix(trm, textstate.matrix), self.ctm)
        metrics = get_glyph_metrics(self.metrics, char, textstate)
        (x, y) = apply_matrix_pt(matrix, (0, 0))
        run = LTTextRun(
            x,
            y,
            metrics.width * (1 + scaling / 100.0),
            metrics.height,
            char,
        )

        # Text is always advanced horizontally; the vertical displacement is
        # not used.
        (disp_x, _disp_y) = metrics.disp
        if char == WORD_SEPARATOR:
            spacing = textstate.wordspace
        else:
            spacing = textstate.charspace
        tx = ((disp_x - textstate.tj / 1000.0) * fontsize + spacing) * scaling
        textstate.matrix = mult_matrix(translation_matrix(tx, 0), textstate.matrix)
        log.debug(
            "render_char: %r matrix=%s advance=%r", char, matrix2str(matrix), tx
        )
        return run
