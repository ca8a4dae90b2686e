import pandas as pd

from frontend.ui.rendering import render_view
from services.views import build_orientation_view
from utils.errors import EmptyInputError


class _RecordingContainer:
    def __init__(self) -> None:
        self.warnings: list = []
        self.entered = 0

    def __enter__(self):
        self.entered += 1
        return self

    def __exit__(self, *exc_info):
        return False

    def warning(self, body, icon=None):
        self.warnings.append(body)


def _raise_empty():
    raise EmptyInputError("no records")


def test_successful_view_renders_inside_container():
    container = _RecordingContainer()
    drawn = []

    result = render_view("Chart", lambda: [1, 2], drawn.append, container=container)

    assert result == [1, 2]
    assert drawn == [[1, 2]]
    assert container.entered == 1
    assert container.warnings == []


def test_explorer_error_becomes_placeholder():
    container = _RecordingContainer()

    result = render_view("Chart", _raise_empty, lambda built: None, container=container)

    assert result is None
    assert container.warnings == ["Chart is unavailable: no records"]


def test_failing_view_does_not_stop_the_next_one():
    grid = pd.DataFrame({"Azimuth": [0, "south"], "Slope": [20, 30], "Metric": [1.0, 2.0]})
    broken, healthy = _RecordingContainer(), _RecordingContainer()
    drawn = []

    first = render_view("Orientation sweep", lambda: build_orientation_view(grid), drawn.append, container=broken)
    second = render_view("Savings chart", lambda: "ok", drawn.append, container=healthy)

    assert first is None
    assert len(broken.warnings) == 1
    assert second == "ok"
    assert drawn == ["ok"]


def test_render_step_errors_are_contained():
    container = _RecordingContainer()

    def _explode(built):
        raise TypeError("bad encoding")

    result = render_view("Heatmap", lambda: 1, _explode, container=container)

    assert result is None
    assert container.warnings == ["Heatmap could not be drawn: bad encoding"]
