"""Miscellaneous Routines."""

from collections.abc import Iterable

Point = tuple[float, float]
Rect = tuple[float, float, float, float]
Matrix = tuple[float, float, float, float, float, float]

# The six values (a, b, c, d, e, f) stand for the homogeneous matrix
#
#   | a b 0 |
#   | c d 0 |
#   | e f 1 |
#
# applied to row vectors [x y 1].

#  Matrix operations
MATRIX_IDENTITY: Matrix = (1, 0, 0, 1, 0, 0)


def mult_matrix(m1: Matrix, m0: Matrix) -> Matrix:
    """Returns the multiplication of two matrices.

    The result applies ``m1`` first and then ``m0``.
    """
    (a1, b1, c1, d1, e1, f1) = m1
    (a0, b0, c0, d0, e0, f0) = m0
    return (
        a0 * a1 + c0 * b1,
        b0 * a1 + d0 * b1,
        a0 * c1 + c0 * d1,
        b0 * c1 + d0 * d1,
        a0 * e1 + c0 * f1 + e0,
        b0 * e1 + d0 * f1 + f0,
    )


def translation_matrix(dx: float, dy: float) -> Matrix:
    return (1, 0, 0, 1, dx, dy)


def text_rendering_matrix(fontsize: float, scaling: float, rise: float) -> Matrix:
    """Returns the glyph-local rendering matrix.

    :param fontsize: the text font size.
    :param scaling: the horizontal scaling, in percent.
    :param rise: the text rise, in unscaled text space units.
    """
    h = 1 + scaling / 100.0
    return (fontsize * h, 0, 0, fontsize, 0, rise)


def apply_matrix_pt(m: Matrix, v: Point) -> Point:
    """Applies a matrix to a point."""
    (a, b, c, d, e, f) = m
    (x, y) = v
    return a * x + c * y + e, b * x + d * y + f


#  Utility functions


def isnumber(x: object) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def shorten_str(s: str, size: int) -> str:
    if size < 7:
        return s[:size]
    if len(s) > size:
        length = (size - 5) // 2
        return f"{s[:length]} ... {s[-length:]}"
    else:
        return s


def bbox2str(bbox: Rect) -> str:
    (x0, y0, x1, y1) = bbox
    return f"{x0:.3f},{y0:.3f},{x1:.3f},{y1:.3f}"


def matrix2str(m: Matrix) -> str:
    (a, b, c, d, e, f) = m
    return f"[{a:.2f},{b:.2f},{c:.2f},{d:.2f}, ({e:.2f},{f:.2f})]"


def inside_bbox(pt: Point, bbox: Rect) -> bool:
    (x, y) = pt
    (x0, y0, x1, y1) = bbox
    return x0 <= x <= x1 and y0 <= y <= y1


def get_bound(pts: Iterable[Point]) -> Rect:
    """Compute a minimal rectangle that covers all the points."""
    x0 = y0 = float("inf")
    x1 = y1 = float("-inf")
    for x, y in pts:
        x0 = min(x0, x)
        y0 = min(y0, y)
        x1 = max(x1, x)
        y1 = max(y1, y)
    return x0, y0, x1, y1
