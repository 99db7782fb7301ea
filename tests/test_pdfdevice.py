import pytest

from pdfruns.layout import LTTextRun
from pdfruns.pdfdevice import PDFDevice, PDFTextRunDevice
from pdfruns.pdffont import PDFGlyphMetrics, ZeroGlyphMetrics
from pdfruns.pdfinterp import PDFTextStateStack


class FixedGlyphMetrics(PDFGlyphMetrics):
    def __init__(self, width=0.5, height=0.7, disp=(0.5, 0)):
        self.width = width
        self.height = height
        self.disp = disp

    def char_width(self, char, textstate):
        return self.width

    def char_height(self, char, textstate):
        return self.height

    def char_disp(self, char, textstate):
        return self.disp


def given_stack(**fields):
    stack = PDFTextStateStack()
    state = stack.begin_page()
    for name, value in fields.items():
        setattr(state, name, value)
    return stack


def xs(runs):
    return [run.x for run in runs]


class TestPDFTextRunDevice:
    def test_default_metrics_are_zero(self):
        assert isinstance(PDFTextRunDevice().metrics, ZeroGlyphMetrics)

    def test_one_run_per_character_in_order(self):
        runs = PDFTextRunDevice().render_string(given_stack(fontsize=12), "abcdef")
        assert [run.get_text() for run in runs] == list("abcdef")

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (b"\x00\x01", ["\x00", "\x01"]),
            (b"A\x00", ["A", "\x00"]),
            (b"\xe9t\xe9", ["\xe9", "t", "\xe9"]),
            (b"\xff", ["\xff"]),
        ],
    )
    def test_byte_strings_give_one_run_per_code(self, code, expected):
        runs = PDFTextRunDevice().render_string(given_stack(fontsize=12), code)
        assert [run.get_text() for run in runs] == expected
        assert [ord(run.get_text()) for run in runs] == list(code)

    def test_identity_positioned_text_starts_at_origin(self):
        runs = PDFTextRunDevice().render_string(
            given_stack(fontsize=12, scaling=100, rise=0), "a"
        )
        assert (runs[0].x, runs[0].y) == (0, 0)

    def test_origin_follows_text_matrix_and_rise(self):
        stack = given_stack(fontsize=10, rise=2, matrix=(1, 0, 0, 1, 50, 700))
        (run,) = PDFTextRunDevice().render_string(stack, "a")
        assert (run.x, run.y) == (50, 702)

    def test_rise_follows_rotated_text_matrix(self):
        stack = given_stack(fontsize=10, rise=3, matrix=(0, 1, -1, 0, 100, 100))
        (run,) = PDFTextRunDevice().render_string(stack, "a")
        assert (run.x, run.y) == (97, 100)

    def test_size_comes_from_metrics_and_scaling(self):
        device = PDFTextRunDevice(FixedGlyphMetrics(width=0.5, height=0.7))
        (run,) = device.render_string(given_stack(fontsize=10, scaling=50), "a")
        assert run.width == pytest.approx(0.75)
        assert run.height == pytest.approx(0.7)

    def test_advance_uses_displacement_and_character_spacing(self):
        device = PDFTextRunDevice(FixedGlyphMetrics(disp=(0.5, 0)))
        stack = given_stack(fontsize=10, charspace=1)
        runs = device.render_string(stack, "abc")
        # ((0.5 * 10) + 1) * 100
        assert xs(runs) == pytest.approx([0, 600, 1200])

    def test_space_uses_word_spacing(self):
        stack = given_stack(fontsize=10, charspace=1, wordspace=3)
        runs = PDFTextRunDevice().render_string(stack, "a b")
        assert xs(runs) == pytest.approx([0, 100, 400])

    def test_tj_reduces_advance(self):
        device = PDFTextRunDevice(FixedGlyphMetrics(disp=(0.5, 0)))
        stack = given_stack(fontsize=10, tj=200)
        runs = device.render_string(stack, "ab")
        # (0.5 - 0.2) * 10 * 100
        assert xs(runs) == pytest.approx([0, 300])

    def test_advance_is_horizontal_only(self):
        device = PDFTextRunDevice(FixedGlyphMetrics(disp=(0, -1)))
        stack = given_stack(fontsize=10, charspace=1)
        runs = device.render_string(stack, "ab")
        assert [run.y for run in runs] == [0, 0]

    def test_text_matrix_is_restored(self):
        stack = given_stack(fontsize=10, charspace=2)
        before = stack.top().copy()
        PDFTextRunDevice().render_string(stack, "abc")
        assert stack.top() == before
        assert len(stack) == 1

    def test_rendering_twice_gives_identical_runs(self):
        device = PDFTextRunDevice(FixedGlyphMetrics())
        stack = given_stack(fontsize=9, charspace=0.5, matrix=(1, 0, 0, 1, 5, 5))
        assert device.render_string(stack, "same") == device.render_string(
            stack, "same"
        )

    def test_missing_metrics_fall_back_to_zero(self):
        device = PDFTextRunDevice(PDFGlyphMetrics())
        (run,) = device.render_string(given_stack(fontsize=10), "a")
        assert (run.width, run.height) == (0, 0)

    def test_ctm_is_applied_after_text_matrix(self):
        device = PDFTextRunDevice()
        device.set_ctm((2, 0, 0, 2, 0, 0))
        stack = given_stack(fontsize=10, matrix=(1, 0, 0, 1, 10, 20))
        (run,) = device.render_string(stack, "a")
        assert (run.x, run.y) == (20, 40)

    def test_empty_string(self):
        stack = given_stack(fontsize=10)
        assert PDFTextRunDevice().render_string(stack, "") == []
        assert len(stack) == 1


def test_base_device_renders_nothing():
    device = PDFDevice()
    assert device.render_string(given_stack(), "abc") == []
    assert repr(device) == "<PDFDevice>"


def test_runs_are_text_runs():
    (run,) = PDFTextRunDevice().render_string(given_stack(), "z")
    assert isinstance(run, LTTextRun)
