"""Simple web interface for elevation charts."""

import hashlib
import io
import logging
import os
from collections import OrderedDict
from threading import Lock

from flask import Flask, jsonify, render_template_string, request, send_file

from elevation_chart import __version_date__, get_git_hash
from elevation_chart.charts import render_scene
from elevation_chart.config import get_settings
from elevation_chart.controller import InteractionController
from elevation_chart.parser import parse_gpx_string
from elevation_chart.profile import ElevationProfile, ProfileError, profile_from_points

logger = logging.getLogger(__name__)

app = Flask(__name__)

# Largest chart we are willing to rasterize, in pixels per side
MAX_CHART_SIZE = 4000


class RouteStore:
    """Thread-safe LRU store of uploaded route profiles."""

    def __init__(self, max_size: int = 50):
        self.max_size = max_size
        self.routes: OrderedDict[str, ElevationProfile] = OrderedDict()
        self.lock = Lock()

    def add(self, content: bytes, profile: ElevationProfile) -> str:
        """Store a profile and return its id (derived from the GPX content)."""
        route_id = hashlib.md5(content).hexdigest()[:12]
        with self.lock:
            if route_id in self.routes:
                self.routes.move_to_end(route_id)
            self.routes[route_id] = profile
            while len(self.routes) > self.max_size:
                self.routes.popitem(last=False)
        return route_id

    def get(self, route_id: str) -> ElevationProfile | None:
        with self.lock:
            profile = self.routes.get(route_id)
            if profile is not None:
                self.routes.move_to_end(route_id)
            return profile

    def clear(self) -> None:
        with self.lock:
            self.routes.clear()


_route_store = RouteStore()


def _number_arg(name: str, default, cast=float):
    """Read a numeric query parameter; raises ValueError on bad input."""
    raw = request.args.get(name, "")
    if raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"Invalid number for {name}: {raw!r}") from None


def _chart_size(settings: dict) -> tuple[int, int]:
    width = _number_arg("width", settings["width"], int)
    height = _number_arg("height", settings["height"], int)
    if not (0 < width <= MAX_CHART_SIZE and 0 < height <= MAX_CHART_SIZE):
        raise ValueError(f"Chart size must be between 1 and {MAX_CHART_SIZE} pixels")
    return width, height


def _make_controller(profile: ElevationProfile, settings: dict, width: int, height: int) -> InteractionController:
    controller = InteractionController(
        profile,
        min_horizontal_spacing=settings["min_horizontal_spacing"],
        min_vertical_spacing=settings["min_vertical_spacing"],
    )
    controller.resize(width, height)
    return controller


def _route_not_found(route_id: str):
    return jsonify({"error": f"Unknown route: {route_id}"}), 404


@app.route("/", methods=["GET"])
def index():
    return render_template_string(
        INDEX_TEMPLATE,
        route_id=request.args.get("route", ""),
        version_date=__version_date__,
        git_hash=get_git_hash(),
    )


@app.route("/routes", methods=["POST"])
def upload_route():
    """Accept a GPX file (multipart field 'gpx' or raw body) and store its profile."""
    upload = request.files.get("gpx")
    content = upload.read() if upload is not None else request.get_data()
    if not content:
        return jsonify({"error": "No GPX data provided"}), 400

    try:
        points = parse_gpx_string(content.decode("utf-8"))
        profile = profile_from_points(points)
    except ProfileError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.warning("Rejected GPX upload: %s", e)
        return jsonify({"error": f"Invalid GPX file: {e}"}), 400

    route_id = _route_store.add(content, profile)
    logger.info("Stored route %s (%s)", route_id, profile)
    return jsonify({"id": route_id, **_summary_json(profile)}), 201


@app.route("/routes/<route_id>/summary")
def route_summary(route_id: str):
    profile = _route_store.get(route_id)
    if profile is None:
        return _route_not_found(route_id)
    return jsonify(_summary_json(profile))


@app.route("/routes/<route_id>/profile.png")
def route_profile_image(route_id: str):
    """Serve the chart image, optionally with the position indicator."""
    profile = _route_store.get(route_id)
    if profile is None:
        return _route_not_found(route_id)

    settings = get_settings()
    try:
        width, height = _chart_size(settings)
        highlight = _number_arg("highlight", None)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    show_summary = request.args.get("summary", "true").lower() == "true"

    controller = _make_controller(profile, settings, width, height)
    controller.set_highlighted_position(highlight)
    png = render_scene(controller.scene(), width, height, show_summary=show_summary, settings=settings)
    return send_file(io.BytesIO(png), mimetype="image/png")


@app.route("/routes/<route_id>/position")
def route_position(route_id: str):
    """Return the route position under a pointer at pixel (x, y)."""
    profile = _route_store.get(route_id)
    if profile is None:
        return _route_not_found(route_id)

    settings = get_settings()
    try:
        width, height = _chart_size(settings)
        x = _number_arg("x", None)
        y = _number_arg("y", None)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    controller = _make_controller(profile, settings, width, height)
    if x is None or y is None:
        controller.pointer_exited()
    else:
        controller.pointer_moved(x, y)
    position = controller.mouse_position
    elevation = round(profile.elevation_at(position)) if position is not None else None
    return jsonify({
        "position": position,
        "elevation": elevation,
        "state": controller.state.value,
    })


def _summary_json(profile: ElevationProfile) -> dict:
    return {
        "length_m": round(profile.length),
        "total_ascent_m": round(profile.total_ascent),
        "total_descent_m": round(profile.total_descent),
        "min_elevation_m": round(profile.min_elevation),
        "max_elevation_m": round(profile.max_elevation),
    }


INDEX_TEMPLATE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>Elevation Chart</title>
  <style>
    body { font-family: Avenir, Helvetica, sans-serif; margin: 2em; }
    #chart { border: 1px solid #ddd; cursor: crosshair; }
    #position { margin-top: 0.5em; color: #333; }
    footer { margin-top: 2em; font-size: 0.8em; color: #999; }
  </style>
</head>
<body>
  <h1>Elevation Chart</h1>
  <form id="upload" enctype="multipart/form-data">
    <input type="file" name="gpx" accept=".gpx">
    <button type="submit">Upload</button>
  </form>
  {% if route_id %}
  <div>
    <img id="chart" src="/routes/{{ route_id }}/profile.png?width=800&height=300" width="800">
    <div id="position">Position: -</div>
  </div>
  {% endif %}
  <footer>Version {{ version_date }} ({{ git_hash }})</footer>
  <script>
    document.getElementById('upload').addEventListener('submit', async (e) => {
      e.preventDefault();
      const resp = await fetch('/routes', {method: 'POST', body: new FormData(e.target)});
      const data = await resp.json();
      if (resp.ok) { window.location = '/?route=' + data.id; } else { alert(data.error); }
    });
    const chart = document.getElementById('chart');
    if (chart) {
      const base = '/routes/{{ route_id }}';
      const label = document.getElementById('position');
      let pending = false;
      chart.addEventListener('mousemove', async (e) => {
        if (pending) return;
        pending = true;
        const url = base + '/position?width=800&height=300&x=' + e.offsetX + '&y=' + e.offsetY;
        const data = await (await fetch(url)).json();
        pending = false;
        if (data.position === null) {
          label.textContent = 'Position: -';
          return;
        }
        label.textContent = 'Position: ' + (data.position / 1000).toFixed(2) + ' km, ' + data.elevation + ' m';
        chart.src = base + '/profile.png?width=800&height=300&highlight=' + data.position;
      });
      chart.addEventListener('mouseleave', () => {
        label.textContent = 'Position: -';
        chart.src = base + '/profile.png?width=800&height=300';
      });
    }
  </script>
</body>
</html>
"""


def main():
    """Run the web server."""
    port = int(os.environ.get("PORT", 5050))
    print("Starting Elevation Chart web server...")
    print(f"Open http://localhost:{port} in your browser")
    app.run(host="0.0.0.0", port=port, debug=True)


if __name__ == "__main__":
    main()
