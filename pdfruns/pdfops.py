"""Typed operator events consumed by the text run interpreter.

A tokenizer turns a page's content stream into an ordered sequence of
:class:`PDFOperatorEvent` records. Each record carries a kind and the
positional operands of the operator.

Reference: PDF Reference, Appendix A, Operator Summary
"""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import NamedTuple, Union

from pdfruns.utils import shorten_str

log = logging.getLogger(__name__)


class OperatorKind(Enum):
    BEGIN_PAGE = "begin_page"
    END_PAGE = "end_page"
    BEGIN_TEXT_OBJECT = "begin_text_object"
    END_TEXT_OBJECT = "end_text_object"
    SET_TEXT_LEADING = "set_text_leading"
    SET_TEXT_RISE = "set_text_rise"
    SET_CHARACTER_SPACING = "set_character_spacing"
    SET_WORD_SPACING = "set_word_spacing"
    SET_HORIZONTAL_TEXT_SCALING = "set_horizontal_text_scaling"
    MOVE_TEXT_POSITION = "move_text_position"
    MOVE_TEXT_POSITION_AND_SET_LEADING = "move_text_position_and_set_leading"
    SET_TEXT_FONT_AND_SIZE = "set_text_font_and_size"
    SET_TEXT_MATRIX_AND_TEXT_LINE_MATRIX = "set_text_matrix_and_text_line_matrix"
    MOVE_TO_START_OF_NEXT_LINE = "move_to_start_of_next_line"
    SET_SPACING_NEXT_LINE_SHOW_TEXT = "set_spacing_next_line_show_text"
    MOVE_TO_NEXT_LINE_AND_SHOW_TEXT = "move_to_next_line_and_show_text"
    SHOW_TEXT = "show_text"
    SHOW_TEXT_WITH_POSITIONING = "show_text_with_positioning"


# Content stream keywords of the text operators.
KEYWORD_KINDS: dict[str, OperatorKind] = {
    "BT": OperatorKind.BEGIN_TEXT_OBJECT,
    "ET": OperatorKind.END_TEXT_OBJECT,
    "TL": OperatorKind.SET_TEXT_LEADING,
    "Ts": OperatorKind.SET_TEXT_RISE,
    "Tc": OperatorKind.SET_CHARACTER_SPACING,
    "Tw": OperatorKind.SET_WORD_SPACING,
    "Tz": OperatorKind.SET_HORIZONTAL_TEXT_SCALING,
    "Td": OperatorKind.MOVE_TEXT_POSITION,
    "TD": OperatorKind.MOVE_TEXT_POSITION_AND_SET_LEADING,
    "Tf": OperatorKind.SET_TEXT_FONT_AND_SIZE,
    "Tm": OperatorKind.SET_TEXT_MATRIX_AND_TEXT_LINE_MATRIX,
    "T*": OperatorKind.MOVE_TO_START_OF_NEXT_LINE,
    '"': OperatorKind.SET_SPACING_NEXT_LINE_SHOW_TEXT,
    "'": OperatorKind.MOVE_TO_NEXT_LINE_AND_SHOW_TEXT,
    "Tj": OperatorKind.SHOW_TEXT,
    "TJ": OperatorKind.SHOW_TEXT_WITH_POSITIONING,
}

_KINDS_BY_NAME = {kind.value: kind for kind in OperatorKind}

# An unrecognised kind is kept as its name so that it can be reported.
EventKind = Union[OperatorKind, str]


def resolve_kind(name: EventKind) -> EventKind:
    """Returns the OperatorKind called ``name``, or ``name`` if there is none."""
    if isinstance(name, OperatorKind):
        return name
    return _KINDS_BY_NAME.get(name, name)


class PDFOperatorEvent(NamedTuple):
    kind: EventKind
    args: tuple[object, ...] = ()

    @classmethod
    def create(cls, name: EventKind, *args: object) -> "PDFOperatorEvent":
        """Builds an event from a kind or the name of a kind."""
        return cls(resolve_kind(name), args)

    @property
    def name(self) -> str:
        if isinstance(self.kind, OperatorKind):
            return self.kind.value
        return self.kind

    def is_known(self) -> bool:
        return isinstance(self.kind, OperatorKind)

    def __repr__(self) -> str:
        return f"<PDFOperatorEvent: {self.name} {shorten_str(repr(self.args), 50)}>"


def event_from_keyword(
    keyword: str | bytes,
    operands: Sequence[object],
) -> PDFOperatorEvent:
    """Builds an event from a content stream keyword and its operands.

    Keywords that are not text operators give an event of unrecognised kind,
    which the interpreter ignores.
    """
    if isinstance(keyword, bytes):
        keyword = keyword.decode("latin-1")
    kind = KEYWORD_KINDS.get(keyword)
    if kind is None:
        log.debug("event_from_keyword: not a text operator: %r", keyword)
        return PDFOperatorEvent(keyword, tuple(operands))
    return PDFOperatorEvent(kind, tuple(operands))
