"""Utilities shared across the fuzzing harnesses"""

import logging


def prepare_pdfruns_fuzzing() -> None:
    """Used to disable logging of the pdfruns module"""
    logging.getLogger("pdfruns").setLevel(logging.CRITICAL)
