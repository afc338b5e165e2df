import pytest

from elevation_chart.distance import cumulative_distances, haversine_distance
from elevation_chart.models import TrackPoint


class TestHaversine:
    def test_same_point(self):
        assert haversine_distance(45.0, 6.0, 45.0, 6.0) == 0.0

    def test_one_hundredth_degree_of_latitude(self):
        assert haversine_distance(45.0, 6.0, 45.01, 6.0) == pytest.approx(1111.95, abs=0.01)

    def test_symmetric(self):
        d1 = haversine_distance(46.2, 6.1, 46.5, 6.6)
        d2 = haversine_distance(46.5, 6.6, 46.2, 6.1)
        assert d1 == pytest.approx(d2)


class TestCumulativeDistances:
    def test_empty(self):
        assert cumulative_distances([]) == []

    def test_accumulates(self, sample_track_points):
        cum = cumulative_distances(sample_track_points)
        assert cum[0] == 0.0
        assert len(cum) == len(sample_track_points)
        assert cum[1] == pytest.approx(1111.95, abs=0.01)
        assert cum[-1] == pytest.approx(10 * 1111.95, abs=0.1)

    def test_single_point(self):
        assert cumulative_distances([TrackPoint(lat=1.0, lon=2.0, elevation=None)]) == [0.0]
