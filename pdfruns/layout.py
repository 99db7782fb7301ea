from collections.abc import Iterable

from pdfruns.utils import Rect, bbox2str, inside_bbox


class LTTextRun:
    """A piece of rendered text placed in device space.

    ``x`` and ``y`` give the origin of the run, ``width`` and ``height`` its
    extent. Runs are not modified after they are created.
    """

    __slots__ = ("_text", "x", "y", "width", "height")

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        text: str,
    ) -> None:
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "_text", text)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {bbox2str(self.bbox)} text={self._text!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LTTextRun):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple[float, float, float, float, str]:
        return (self.x, self.y, self.width, self.height, self._text)

    @property
    def bbox(self) -> Rect:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def get_text(self) -> str:
        return self._text


def runs_within(runs: Iterable[LTTextRun], bbox: Rect) -> list[LTTextRun]:
    """Returns the runs whose origin lies inside ``bbox``.

    The interpreter emits every run regardless of the page bounds, so callers
    that want to drop text outside the MediaBox filter with this.
    """
    return [run for run in runs if inside_bbox((run.x, run.y), bbox)]
