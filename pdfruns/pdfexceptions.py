__all__ = [
    "MalformedOperator",
    "MetricsUnavailable",
    "PDFException",
    "PDFInterpreterError",
    "PDFValueError",
    "StateUnderflow",
]


class PDFException(Exception):
    """Base class for all pdfruns exceptions."""


class PDFValueError(PDFException, ValueError):
    pass


class PDFInterpreterError(PDFException):
    pass


class StateUnderflow(PDFInterpreterError):
    """Raised when a frame is popped below the page floor.

    Fatal to the interpretation of the current page. When raised from
    ``PDFTextRunInterpreter.process_page`` the page identifier and the index
    of the offending operator are attached so that the caller can skip to the
    next page.
    """

    def __init__(
        self,
        message: str,
        pageid: object = None,
        opindex: int | None = None,
    ) -> None:
        super().__init__(message)
        self.pageid = pageid
        self.opindex = opindex

    def __str__(self) -> str:
        msg = super().__str__()
        if self.opindex is not None:
            msg = f"{msg} (page={self.pageid!r}, operator={self.opindex})"
        return msg


class MalformedOperator(PDFValueError):
    """Raised when an event's arguments do not match its expected shape."""

    def __init__(
        self,
        kind: object,
        message: str,
        opindex: int | None = None,
    ) -> None:
        name = getattr(kind, "value", kind)
        super().__init__(f"{name}: {message}")
        self.kind = kind
        self.opindex = opindex


class MetricsUnavailable(PDFException):
    """Raised by a glyph metrics strategy that cannot answer for a glyph."""
