#!/usr/bin/env python3
import sys

import atheris

from fuzzing.fuzzed_data_provider import PdfrunsFuzzedDataProvider

with atheris.instrument_imports():
    from fuzzing.utils import prepare_pdfruns_fuzzing
    from pdfruns.high_level import extract_text_runs
    from pdfruns.pdfexceptions import PDFException


def fuzz_one_input(data: bytes) -> None:
    fdp = PdfrunsFuzzedDataProvider(data)
    pages = [fdp.ConsumeEvents(50) for _ in range(fdp.ConsumeIntInRange(1, 3))]

    try:
        for result in extract_text_runs(pages):
            assert all(len(run.get_text()) == 1 for run in result.runs)
    except PDFException:
        return


if __name__ == "__main__":
    prepare_pdfruns_fuzzing()
    atheris.Setup(sys.argv, fuzz_one_input)
    atheris.Fuzz()
