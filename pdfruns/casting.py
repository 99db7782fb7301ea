from typing import Any

from pdfruns.utils import Matrix


def safe_float(o: Any) -> float | None:
    if isinstance(o, bool):
        return None
    try:
        return float(o)
    except (TypeError, ValueError, OverflowError):
        return None


def safe_point(x: Any, y: Any) -> tuple[float, float] | None:
    x_f = safe_float(x)
    y_f = safe_float(y)

    if x_f is None or y_f is None:
        return None

    return x_f, y_f


def safe_matrix(a: Any, b: Any, c: Any, d: Any, e: Any, f: Any) -> Matrix | None:
    a_f = safe_float(a)
    b_f = safe_float(b)
    c_f = safe_float(c)
    d_f = safe_float(d)
    e_f = safe_float(e)
    f_f = safe_float(f)

    if (
        a_f is None
        or b_f is None
        or c_f is None
        or d_f is None
        or e_f is None
        or f_f is None
    ):
        return None

    return a_f, b_f, c_f, d_f, e_f, f_f


def safe_text(o: Any) -> str | bytes | None:
    if isinstance(o, (str, bytes)):
        return o
    return None
