"""Functions that can be used for the most common use-cases for pdfruns"""

import logging
from collections.abc import Iterable, Iterator

from pdfruns.layout import LTTextRun
from pdfruns.pdfdevice import PDFTextRunDevice
from pdfruns.pdffont import PDFGlyphMetrics
from pdfruns.pdfinterp import PDFPageRuns, PDFTextRunInterpreter
from pdfruns.pdfops import PDFOperatorEvent

log = logging.getLogger(__name__)


def extract_text_runs(
    pages: Iterable[Iterable[PDFOperatorEvent]],
    metrics: PDFGlyphMetrics | None = None,
) -> Iterator[PDFPageRuns]:
    """Interprets the event streams of a sequence of pages.

    Every page gets its own interpreter, so no state is carried from one page
    to the next. A page whose stack underflows is reported and the following
    pages are still processed.

    :param pages: one iterable of operator events per page, each starting
        with a ``begin_page`` event.
    :param metrics: the glyph metrics strategy. Defaults to zero metrics.
    :return: an iterator of PDFPageRuns, one per page, in page order.
    """
    for pageno, events in enumerate(pages):
        device = PDFTextRunDevice(metrics)
        interpreter = PDFTextRunInterpreter(device)
        result = interpreter.process_page(events, pageid=pageno)
        if result.underflow is not None:
            log.warning("Skipping rest of page %d: %s", pageno, result.underflow)
        yield result


def extract_runs(
    events: Iterable[PDFOperatorEvent],
    metrics: PDFGlyphMetrics | None = None,
) -> list[LTTextRun]:
    """Returns the text runs of a single page's events.

    :raises StateUnderflow: when the events pop below the page floor.
    """
    device = PDFTextRunDevice(metrics)
    interpreter = PDFTextRunInterpreter(device)
    result = interpreter.process_page(events)
    if result.underflow is not None:
        raise result.underflow
    return result.runs
