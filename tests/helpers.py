from pdfruns.pdfops import EventKind, PDFOperatorEvent


def ev(name: EventKind, *args: object) -> PDFOperatorEvent:
    return PDFOperatorEvent.create(name, *args)


def page_events(*events: PDFOperatorEvent, page: object = None) -> list:
    """Returns the events of a page, starting with begin_page."""
    return [ev("begin_page", page), *events]
