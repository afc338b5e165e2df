import numpy as np
import pytest

from elevation_chart.models import TrackPoint
from elevation_chart.profile import ElevationProfile, ProfileError, profile_from_points


class TestElevationProfile:
    def test_extents(self, scenario_profile):
        assert scenario_profile.length == 10_000
        assert scenario_profile.min_elevation == 100
        assert scenario_profile.max_elevation == 600

    def test_ascent_and_descent(self):
        profile = ElevationProfile.from_uniform_samples(400, [100.0, 120.0, 110.0, 150.0, 140.0])
        assert profile.total_ascent == pytest.approx(60.0)
        assert profile.total_descent == pytest.approx(20.0)

    def test_interpolates_between_samples(self, scenario_profile):
        assert scenario_profile.elevation_at(2500) == pytest.approx(350.0)
        assert scenario_profile.elevation_at(5000) == pytest.approx(600.0)
        assert scenario_profile.elevation_at(7500) == pytest.approx(350.0)

    def test_clamps_outside_route(self, scenario_profile):
        assert scenario_profile.elevation_at(-100) == pytest.approx(100.0)
        assert scenario_profile.elevation_at(1e9) == pytest.approx(100.0)

    def test_irregular_samples(self):
        profile = ElevationProfile([0.0, 10.0, 100.0], [0.0, 10.0, 100.0])
        assert profile.elevation_at(55.0) == pytest.approx(55.0)
        assert profile.length == 100.0

    def test_samples_are_read_only(self, scenario_profile):
        with pytest.raises(ValueError):
            scenario_profile.elevations[0] = 0.0

    def test_input_arrays_are_copied(self):
        elevations = np.array([1.0, 2.0])
        profile = ElevationProfile(np.array([0.0, 1.0]), elevations)
        elevations[0] = 50.0
        assert profile.min_elevation == 1.0

    def test_too_few_samples(self):
        with pytest.raises(ProfileError):
            ElevationProfile([0.0], [100.0])

    def test_non_increasing_distances(self):
        with pytest.raises(ProfileError):
            ElevationProfile([0.0, 5.0, 5.0], [1.0, 2.0, 3.0])

    def test_must_start_at_zero(self):
        with pytest.raises(ProfileError):
            ElevationProfile([1.0, 5.0], [1.0, 2.0])

    def test_mismatched_sizes(self):
        with pytest.raises(ProfileError):
            ElevationProfile([0.0, 5.0], [1.0, 2.0, 3.0])

    def test_non_finite_elevation(self):
        with pytest.raises(ProfileError):
            ElevationProfile([0.0, 5.0], [1.0, float("nan")])

    def test_uniform_samples_need_positive_length(self):
        with pytest.raises(ProfileError):
            ElevationProfile.from_uniform_samples(0, [1.0, 2.0])

    def test_is_profile_error_a_value_error(self):
        assert issubclass(ProfileError, ValueError)


class TestProfileFromPoints:
    def test_sample_track(self, sample_track_points):
        profile = profile_from_points(sample_track_points)
        assert profile.length == pytest.approx(11_119.5, abs=1.0)
        assert profile.min_elevation == 100.0
        assert profile.max_elevation == 600.0
        assert profile.total_ascent == pytest.approx(500.0)
        assert profile.total_descent == pytest.approx(500.0)

    def test_drops_points_without_elevation(self, sample_track_points):
        points = list(sample_track_points)
        points.insert(3, TrackPoint(lat=45.025, lon=6.0, elevation=None))
        profile = profile_from_points(points)
        assert len(profile.distances) == len(sample_track_points)

    def test_merges_repeated_fixes(self, sample_track_points):
        points = [sample_track_points[0]] + sample_track_points
        profile = profile_from_points(points)
        assert len(profile.distances) == len(sample_track_points)

    def test_too_few_points(self):
        with pytest.raises(ProfileError):
            profile_from_points([TrackPoint(lat=45.0, lon=6.0, elevation=10.0)])

    def test_no_elevation(self):
        points = [TrackPoint(lat=45.0 + i * 0.01, lon=6.0, elevation=None) for i in range(5)]
        with pytest.raises(ProfileError):
            profile_from_points(points)

    def test_zero_length(self):
        points = [TrackPoint(lat=45.0, lon=6.0, elevation=10.0 + i) for i in range(3)]
        with pytest.raises(ProfileError):
            profile_from_points(points)
