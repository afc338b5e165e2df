import pytest

from elevation_chart.models import DrawingRect, TrackPoint
from elevation_chart.profile import ElevationProfile

# Elevations of the sample route, one point every 0.01 degree of latitude (~1112 m)
SAMPLE_ELEVATIONS = [100.0, 150.0, 200.0, 300.0, 450.0, 600.0, 500.0, 400.0, 300.0, 200.0, 100.0]


def _gpx_document(elevations, lat0=45.0, lon=6.0, spacing_deg=0.01):
    trkpts = "\n".join(
        f'      <trkpt lat="{lat0 + i * spacing_deg:.6f}" lon="{lon:.6f}"><ele>{e}</ele></trkpt>'
        for i, e in enumerate(elevations)
    )
    return f"""<?xml version="1.0"?>
<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">
  <trk><name>Sample</name><trkseg>
{trkpts}
  </trkseg></trk>
</gpx>
"""


@pytest.fixture
def scenario_profile():
    """10 km route climbing from 100 m to 600 m at halfway, then back down."""
    return ElevationProfile.from_uniform_samples(10_000, [100.0, 600.0, 100.0])


@pytest.fixture
def scenario_rect():
    return DrawingRect(x=40, y=10, width=800, height=400)


@pytest.fixture
def sample_track_points():
    """Points heading due north, ~1112 m apart."""
    return [
        TrackPoint(lat=45.0 + i * 0.01, lon=6.0, elevation=e)
        for i, e in enumerate(SAMPLE_ELEVATIONS)
    ]


@pytest.fixture
def sample_gpx_content():
    return _gpx_document(SAMPLE_ELEVATIONS)


@pytest.fixture
def make_gpx_file(tmp_path):
    """Factory writing a GPX track with the given elevations to a temp file."""
    def _make(elevations=SAMPLE_ELEVATIONS, name="route.gpx"):
        path = tmp_path / name
        path.write_text(_gpx_document(elevations))
        return str(path)
    return _make
