import logging
from collections.abc import Iterable, Sequence
from typing import Union, cast

from pdfruns import settings
from pdfruns.casting import safe_float, safe_matrix, safe_point, safe_text
from pdfruns.layout import LTTextRun
from pdfruns.pdfdevice import PDFDevice, PDFTextRunDevice
from pdfruns.pdfexceptions import (
    MalformedOperator,
    PDFInterpreterError,
    StateUnderflow,
)
from pdfruns.pdfops import EventKind, OperatorKind, PDFOperatorEvent, resolve_kind
from pdfruns.utils import (
    MATRIX_IDENTITY,
    Matrix,
    Rect,
    get_bound,
    isnumber,
    mult_matrix,
    translation_matrix,
)

log = logging.getLogger(__name__)


class PDFTextState:
    """One frame of the text state stack."""

    matrix: Matrix

    def __init__(self) -> None:
        self.font: object | None = None
        self.fontsize: float = 0
        self.charspace: float = 0
        self.wordspace: float = 0
        self.scaling: float = 100
        self.leading: float = 0
        self.rise: float = 0
        # adjustment of the current positioning array item, in thousandths
        # of text space units
        self.tj: float = 0
        # vertical offset accumulated by the next-line operators
        self.lineoffset: float = 0
        self.reset()
        # self.matrix is set

    def __repr__(self) -> str:
        return (
            f"<PDFTextState: font={self.font!r}, "
            f"fontsize={self.fontsize!r}, "
            f"charspace={self.charspace!r}, "
            f"wordspace={self.wordspace!r}, "
            f"scaling={self.scaling!r}, "
            f"leading={self.leading!r}, "
            f"rise={self.rise!r}, "
            f"tj={self.tj!r}, "
            f"lineoffset={self.lineoffset!r}, "
            f"matrix={self.matrix!r}>"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PDFTextState):
            return NotImplemented
        return self._fields() == other._fields()

    __hash__ = None  # type: ignore[assignment]

    def _fields(self) -> tuple[object, ...]:
        return (
            self.font,
            self.fontsize,
            self.charspace,
            self.wordspace,
            self.scaling,
            self.leading,
            self.rise,
            self.tj,
            self.lineoffset,
            self.matrix,
        )

    def copy(self) -> "PDFTextState":
        obj = PDFTextState()
        obj.font = self.font
        obj.fontsize = self.fontsize
        obj.charspace = self.charspace
        obj.wordspace = self.wordspace
        obj.scaling = self.scaling
        obj.leading = self.leading
        obj.rise = self.rise
        obj.tj = self.tj
        obj.lineoffset = self.lineoffset
        obj.matrix = self.matrix
        return obj

    def reset(self) -> None:
        self.matrix = MATRIX_IDENTITY


class PDFTextStateStack:
    """Stack of text state frames for one interpretation pass.

    ``begin_page`` pushes the page frame, which is the floor of the stack
    until ``end_page``. Frames above the floor are pushed with
    ``push_copy`` and removed with ``pop``.
    """

    def __init__(self) -> None:
        self._frames: list[PDFTextState] = []
        # indexes of the page frames, innermost last
        self._floors: list[int] = []

    def __len__(self) -> int:
        return len(self._frames)

    def __repr__(self) -> str:
        return (
            f"<PDFTextStateStack: depth={len(self._frames)}, "
            f"pages={len(self._floors)}>"
        )

    def begin_page(self) -> PDFTextState:
        self._floors.append(len(self._frames))
        state = PDFTextState()
        self._frames.append(state)
        return state

    def end_page(self) -> None:
        if not self._floors:
            raise StateUnderflow("end_page: no page is open")
        floor = self._floors.pop()
        del self._frames[floor:]

    def top(self) -> PDFTextState:
        if not self._floors:
            raise StateUnderflow("No page frame on the text state stack")
        return self._frames[-1]

    def push_copy(self) -> PDFTextState:
        state = self.top().copy()
        self._frames.append(state)
        return state

    def pop(self) -> PDFTextState:
        if not self._floors or len(self._frames) - 1 <= self._floors[-1]:
            raise StateUnderflow("pop: no frame above the page floor")
        return self._frames.pop()


class PDFPageRuns:
    """Outcome of interpreting the events of one page."""

    def __init__(self, pageid: object = None) -> None:
        self.pageid = pageid
        self.runs: list[LTTextRun] = []
        self.errors: list[MalformedOperator] = []
        self.underflow: StateUnderflow | None = None

    def __repr__(self) -> str:
        return (
            f"<PDFPageRuns: pageid={self.pageid!r}, runs={len(self.runs)}, "
            f"errors={len(self.errors)}, underflow={self.underflow!r}>"
        )

    @property
    def ok(self) -> bool:
        return self.underflow is None

    @property
    def bbox(self) -> Rect | None:
        if not self.runs:
            return None
        return get_bound(
            [(run.x, run.y) for run in self.runs]
            + [(run.x + run.width, run.y + run.height) for run in self.runs]
        )

    def get_text(self) -> str:
        return "".join(run.get_text() for run in self.runs)


class PDFTextRunInterpreter:
    """Processor for the text operator events of a PDF page

    Each instance owns its text state stack. Use one instance per
    interpretation pass.

    Reference: PDF Reference, Appendix A, Operator Summary
    """

    def __init__(self, device: PDFDevice | None = None) -> None:
        self.device = PDFTextRunDevice() if device is None else device
        self.init_state()

    def init_state(self) -> None:
        """Initialize the text state stack for a new pass."""
        self.stack = PDFTextStateStack()
        self.page: object = None

    # Argument checking.

    @staticmethod
    def _number(kind: OperatorKind, value: object) -> float:
        value_f = safe_float(value)
        if value_f is None:
            raise MalformedOperator(kind, f"{value!r} is an invalid float value")
        return value_f

    @staticmethod
    def _point(kind: OperatorKind, x: object, y: object) -> tuple[float, float]:
        point = safe_point(x, y)
        if point is None:
            raise MalformedOperator(
                kind, f"not all values in {(x, y)!r} can be parsed as floats"
            )
        return point

    @staticmethod
    def _text(kind: OperatorKind, value: object) -> str | bytes:
        text = safe_text(value)
        if text is None:
            raise MalformedOperator(kind, f"{value!r} is not a string")
        return text

    # Page operators.

    def do_begin_page(self, page: object = None) -> None:
        """Begin page"""
        self.page = page
        self.stack.begin_page()
        self.device.begin_page(page)

    def do_end_page(self) -> None:
        """End page"""
        self.stack.end_page()
        self.device.end_page(self.page)

    # Text object operators.

    def do_begin_text_object(self) -> None:
        """Begin text object"""
        self.stack.push_copy()

    def do_end_text_object(self) -> None:
        """End a text object"""
        self.stack.pop()

    # Text state operators.

    def do_set_text_leading(self, leading: object) -> None:
        """Set the text leading.

        Text leading is used only by the T*, ', and " operators.

        :param leading: a number expressed in unscaled text space units
        """
        value = self._number(OperatorKind.SET_TEXT_LEADING, leading)
        self.stack.top().leading = value

    def do_set_text_rise(self, rise: object) -> None:
        """Set the text rise

        :param rise: a number expressed in unscaled text space units
        """
        value = self._number(OperatorKind.SET_TEXT_RISE, rise)
        self.stack.top().rise = value

    def do_set_character_spacing(self, space: object) -> None:
        """Set character spacing.

        :param space: a number expressed in unscaled text space units.
        """
        value = self._number(OperatorKind.SET_CHARACTER_SPACING, space)
        self.stack.top().charspace = value

    def do_set_word_spacing(self, space: object) -> None:
        """Set the word spacing.

        :param space: a number expressed in unscaled text space units
        """
        value = self._number(OperatorKind.SET_WORD_SPACING, space)
        self.stack.top().wordspace = value

    def do_set_horizontal_text_scaling(self, scale: object) -> None:
        """Set the horizontal scaling.

        :param scale: is a number specifying the percentage of the normal width
        """
        value = self._number(OperatorKind.SET_HORIZONTAL_TEXT_SCALING, scale)
        self.stack.top().scaling = value

    def do_set_text_font_and_size(self, font: object, fontsize: object) -> None:
        """Set the text font

        :param font: the font handle; its metrics are looked up by the
            glyph metrics strategy of the device.
        :param fontsize: size is a number representing a scale factor.
        """
        value = self._number(OperatorKind.SET_TEXT_FONT_AND_SIZE, fontsize)
        textstate = self.stack.top()
        textstate.font = font
        textstate.fontsize = value

    # Text positioning operators.

    def do_move_text_position(self, tx: object, ty: object) -> None:
        """Move to the start of the next line

        Offset from the start of the current line by (tx , ty).
        """
        (dx, dy) = self._point(OperatorKind.MOVE_TEXT_POSITION, tx, ty)
        textstate = self.stack.top()
        textstate.matrix = mult_matrix(translation_matrix(dx, dy), textstate.matrix)

    def do_move_text_position_and_set_leading(self, tx: object, ty: object) -> None:
        """Move to the start of the next line.

        As a side effect, this operator sets the leading parameter in the text
        state.
        """
        kind = OperatorKind.MOVE_TEXT_POSITION_AND_SET_LEADING
        (dx, dy) = self._point(kind, tx, ty)
        textstate = self.stack.top()
        textstate.matrix = mult_matrix(translation_matrix(dx, dy), textstate.matrix)
        textstate.leading = dy

    def do_set_text_matrix_and_text_line_matrix(
        self,
        a: object,
        b: object,
        c: object,
        d: object,
        e: object,
        f: object,
    ) -> None:
        """Set text matrix and text line matrix"""
        values = (a, b, c, d, e, f)
        matrix = safe_matrix(*values)
        if matrix is None:
            raise MalformedOperator(
                OperatorKind.SET_TEXT_MATRIX_AND_TEXT_LINE_MATRIX,
                f"not all values in {values!r} can be parsed as floats",
            )
        self.stack.top().matrix = matrix

    def do_move_to_start_of_next_line(self) -> None:
        """Move to start of next text line"""
        textstate = self.stack.top()
        textstate.lineoffset += textstate.leading

    # Text showing operators.

    def do_set_spacing_next_line_show_text(
        self,
        aw: object,
        ac: object,
        s: object,
    ) -> list[LTTextRun]:
        """Set word and character spacing, move to next line, and show text

        The " (double quote) operator.
        """
        kind = OperatorKind.SET_SPACING_NEXT_LINE_SHOW_TEXT
        wordspace = self._number(kind, aw)
        charspace = self._number(kind, ac)
        text = self._text(kind, s)
        textstate = self.stack.top()
        textstate.wordspace = wordspace
        textstate.charspace = charspace
        self.do_move_to_start_of_next_line()
        return self.device.render_string(self.stack, text)

    def do_move_to_next_line_and_show_text(self, s: object) -> list[LTTextRun]:
        """Move to next line and show text

        The ' (single quote) operator.
        """
        text = self._text(OperatorKind.MOVE_TO_NEXT_LINE_AND_SHOW_TEXT, s)
        self.do_move_to_start_of_next_line()
        return self.device.render_string(self.stack, text)

    def do_show_text(self, s: object) -> list[LTTextRun]:
        """Show text"""
        text = self._text(OperatorKind.SHOW_TEXT, s)
        return self.device.render_string(self.stack, text)

    def do_show_text_with_positioning(self, seq: object) -> list[LTTextRun]:
        """Show text, allowing individual glyph positioning

        Numbers in the array adjust the advance of the glyphs that follow
        them, in thousandths of text space units. The adjustment only lasts
        until the end of the array.
        """
        kind = OperatorKind.SHOW_TEXT_WITH_POSITIONING
        if not isinstance(seq, (list, tuple)):
            raise MalformedOperator(kind, f"{seq!r} is not an array")
        for item in seq:
            if not isnumber(item) and safe_text(item) is None:
                raise MalformedOperator(
                    kind, f"{item!r} is neither a number nor a string"
                )

        runs: list[LTTextRun] = []
        self.stack.push_copy()
        for item in seq:
            if isnumber(item):
                self.stack.top().tj = cast(float, item)
            else:
                text = cast(Union[str, bytes], item)
                runs.extend(self.device.render_string(self.stack, text))
        self.stack.pop()
        return runs

    # Dispatching.

    def process_event(self, event: PDFOperatorEvent) -> list[LTTextRun]:
        """Executes one event and returns the text runs it produced.

        :raises MalformedOperator: when the arguments do not fit the operator.
            No state is changed in that case.
        :raises StateUnderflow: when the event pops below the page floor.
        """
        kind: EventKind = resolve_kind(event.kind)
        args = tuple(event.args)
        if not isinstance(kind, OperatorKind):
            if settings.STRICT:
                raise PDFInterpreterError(f"Unknown operator: {kind!r}")
            log.debug("Ignoring unknown operator: %r", kind)
            return []

        func = getattr(self, f"do_{kind.value}")
        nargs = func.__code__.co_argcount - 1
        nopts = len(func.__defaults__ or ())
        if not nargs - nopts <= len(args) <= nargs:
            raise MalformedOperator(
                kind, f"expected {nargs} arguments, got {len(args)}: {args!r}"
            )
        if args:
            log.debug("exec: %s %r", kind.value, args)
        else:
            log.debug("exec: %s", kind.value)
        runs = func(*args)
        return runs or []

    def process_page(
        self,
        events: Iterable[PDFOperatorEvent],
        pageid: object = None,
    ) -> PDFPageRuns:
        """Executes the events of a page in order.

        A malformed operator is recorded on the result and skipped. A
        StateUnderflow ends the page; it is recorded on the result with the
        page identifier and the index of the operator that caused it. The runs
        produced before either error are kept.
        """
        log.debug("Processing page: %r", pageid)
        result = PDFPageRuns(pageid)
        for opindex, event in enumerate(events):
            try:
                result.runs.extend(self.process_event(event))
            except MalformedOperator as err:
                if settings.STRICT:
                    raise
                err.opindex = opindex
                log.warning("Skipping operator %d: %s", opindex, err)
                result.errors.append(err)
            except StateUnderflow as err:
                err.pageid = pageid if pageid is not None else self.page
                err.opindex = opindex
                result.underflow = err
                break
        if result.pageid is None:
            result.pageid = self.page
        return result

    def execute(self, events: Sequence[PDFOperatorEvent]) -> list[LTTextRun]:
        """Executes events and returns all runs, raising on any error."""
        runs: list[LTTextRun] = []
        for event in events:
            runs.extend(self.process_event(event))
        return runs
