import gpxpy

from elevation_chart.models import TrackPoint


def parse_gpx(filepath: str) -> list[TrackPoint]:
    """Parse a GPX file and return a list of TrackPoints."""
    with open(filepath, "r") as f:
        return parse_gpx_string(f.read())


def parse_gpx_string(content: str) -> list[TrackPoint]:
    """Parse GPX XML content. Route points are used when there are no tracks."""
    gpx = gpxpy.parse(content)

    points: list[TrackPoint] = []
    for track in gpx.tracks:
        for segment in track.segments:
            for pt in segment.points:
                points.append(TrackPoint(lat=pt.latitude, lon=pt.longitude, elevation=pt.elevation))
    if not points:
        for route in gpx.routes:
            for pt in route.points:
                points.append(TrackPoint(lat=pt.latitude, lon=pt.longitude, elevation=pt.elevation))
    return points
