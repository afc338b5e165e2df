import pytest

from elevation_chart.geometry import build_outline
from elevation_chart.models import DrawingRect
from elevation_chart.transform import build_transforms


class RecordingProfile:
    """Profile stub that remembers every queried distance."""

    length = 2000.0
    min_elevation = 0.0
    max_elevation = 100.0
    total_ascent = 100.0
    total_descent = 0.0

    def __init__(self):
        self.queries = []

    def elevation_at(self, distance):
        self.queries.append(distance)
        return distance / 20.0


class TestBuildOutline:
    def test_one_point_per_column_plus_baseline(self, scenario_rect, scenario_profile):
        pair = build_transforms(scenario_rect, scenario_profile)
        outline = build_outline(scenario_rect, pair, scenario_profile)
        assert len(outline) == 800 + 1 + 2

    def test_closed_on_baseline(self, scenario_rect, scenario_profile):
        pair = build_transforms(scenario_rect, scenario_profile)
        outline = build_outline(scenario_rect, pair, scenario_profile)
        assert outline[0] == (40, 410)
        assert outline[-1] == (840, 410)
        assert outline[1][0] == 40
        assert outline[-2][0] == 840

    def test_x_non_decreasing(self, scenario_rect, scenario_profile):
        pair = build_transforms(scenario_rect, scenario_profile)
        outline = build_outline(scenario_rect, pair, scenario_profile)
        xs = [x for x, _ in outline]
        assert xs == sorted(xs)

    def test_samples_follow_elevation(self, scenario_rect, scenario_profile):
        pair = build_transforms(scenario_rect, scenario_profile)
        outline = dict(build_outline(scenario_rect, pair, scenario_profile)[1:-1])
        # Summit at 5 km sits on the top edge, route ends on the bottom edge
        assert outline[440] == pytest.approx(10.0)
        assert outline[40] == pytest.approx(410.0)
        assert outline[240] == pytest.approx(210.0)

    def test_samples_stay_within_rect(self, scenario_rect, scenario_profile):
        pair = build_transforms(scenario_rect, scenario_profile)
        for x, y in build_outline(scenario_rect, pair, scenario_profile):
            assert scenario_rect.top - 1e-9 <= y <= scenario_rect.bottom + 1e-9

    def test_queries_each_column_distance(self):
        rect = DrawingRect(x=40, y=10, width=100, height=50)
        profile = RecordingProfile()
        pair = build_transforms(rect, profile)
        build_outline(rect, pair, profile)
        assert len(profile.queries) == 101
        assert profile.queries[0] == pytest.approx(0.0)
        assert profile.queries[50] == pytest.approx(1000.0)
        assert profile.queries[-1] == pytest.approx(2000.0)

    def test_column_step(self, scenario_rect, scenario_profile):
        pair = build_transforms(scenario_rect, scenario_profile)
        outline = build_outline(scenario_rect, pair, scenario_profile, column_step=10)
        assert len(outline) == 81 + 2
        assert outline[-1] == (840, 410)

    def test_invalid_column_step(self, scenario_rect, scenario_profile):
        pair = build_transforms(scenario_rect, scenario_profile)
        with pytest.raises(ValueError):
            build_outline(scenario_rect, pair, scenario_profile, column_step=0)

    def test_fractional_width(self, scenario_profile):
        rect = DrawingRect(x=40, y=10, width=10.5, height=20)
        pair = build_transforms(rect, scenario_profile)
        outline = build_outline(rect, pair, scenario_profile)
        assert len(outline) == 11 + 2
        assert outline[-2][0] == 50
        assert outline[-1] == (50.5, 30)
