import pytest

from pdfruns.utils import (
    MATRIX_IDENTITY,
    Matrix,
    apply_matrix_pt,
    get_bound,
    isnumber,
    matrix2str,
    mult_matrix,
    shorten_str,
    text_rendering_matrix,
    translation_matrix,
)

MATRICES: list[Matrix] = [
    MATRIX_IDENTITY,
    (2, 0, 0, 2, 0, 0),
    (1, 0, 0, 1, 72, 720),
    (0, 1, -1, 0, 100, 100),
    (0.5, 0.25, -1.5, 3.0, -12.5, 7.75),
    (1e-3, 0, 0, 1e3, 1e6, -1e6),
]


class TestMatrix:
    @pytest.mark.parametrize("m", MATRICES)
    def test_identity_is_neutral_on_the_left(self, m):
        assert mult_matrix(MATRIX_IDENTITY, m) == pytest.approx(m)

    @pytest.mark.parametrize("m", MATRICES)
    def test_identity_is_neutral_on_the_right(self, m):
        assert mult_matrix(m, MATRIX_IDENTITY) == pytest.approx(m)

    def test_mult_matrix_applies_first_argument_first(self):
        scale = (2, 0, 0, 2, 0, 0)
        move = translation_matrix(10, 5)
        pt = (1, 1)

        scale_then_move = mult_matrix(scale, move)
        assert apply_matrix_pt(scale_then_move, pt) == (12, 7)

        move_then_scale = mult_matrix(move, scale)
        assert apply_matrix_pt(move_then_scale, pt) == (22, 12)

    def test_mult_matrix_is_associative(self):
        (m0, m1, m2) = MATRICES[3:6]
        left = mult_matrix(mult_matrix(m0, m1), m2)
        right = mult_matrix(m0, mult_matrix(m1, m2))
        assert left == pytest.approx(right)

    def test_translation_matrix(self):
        assert translation_matrix(3, -4) == (1, 0, 0, 1, 3, -4)
        assert apply_matrix_pt(translation_matrix(3, -4), (1, 1)) == (4, -3)

    def test_translation_before_text_matrix_moves_in_text_space(self):
        tm = (2, 0, 0, 2, 100, 100)
        moved = mult_matrix(translation_matrix(10, 20), tm)
        assert moved == (2, 0, 0, 2, 120, 140)

    def test_text_rendering_matrix(self):
        assert text_rendering_matrix(12, 100, 0) == (24, 0, 0, 12, 0, 0)
        assert text_rendering_matrix(10, 50, 3) == (15, 0, 0, 10, 0, 3)

    def test_text_rendering_matrix_origin_for_identity_text_matrix(self):
        trm = text_rendering_matrix(12, 100, 0)
        assert apply_matrix_pt(mult_matrix(trm, MATRIX_IDENTITY), (0, 0)) == (0, 0)

    def test_origin_maps_to_translation_row(self):
        assert apply_matrix_pt((1, 2, 3, 4, 5, 6), (0, 0)) == (5, 6)

    def test_matrix2str(self):
        assert matrix2str((1, 0, 0, 1, 72, 720)) == (
            "[1.00,0.00,0.00,1.00, (72.00,720.00)]"
        )


def test_get_bound():
    assert get_bound([(1, 5), (3, -2), (0, 4)]) == (0, -2, 3, 5)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1, True), (1.5, True), (-0.0, True), ("1", False), (None, False), (True, False)],
)
def test_isnumber(value, expected):
    assert isnumber(value) is expected


def test_shorten_str():
    assert shorten_str("Hello there World", 15) == "Hello ... World"
    assert shorten_str("Hello", 15) == "Hello"
    assert shorten_str("Hello there World", 5) == "Hello"
