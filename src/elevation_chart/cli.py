import argparse
import logging
import sys

from elevation_chart.charts import render_scene
from elevation_chart.config import DEFAULTS, get_settings, load_config
from elevation_chart.controller import InteractionController
from elevation_chart.formatters import format_position
from elevation_chart.parser import parse_gpx
from elevation_chart.profile import ProfileError, profile_from_points


def build_parser(config: dict | None = None) -> argparse.ArgumentParser:
    """Build argument parser with defaults from config file."""
    if config is None:
        config = {}

    def get_default(key: str):
        return config.get(key, DEFAULTS[key])

    parser = argparse.ArgumentParser(
        description="Draw the elevation profile of a GPX route."
    )
    parser.add_argument("gpx_file", help="Path to GPX file")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the chart as PNG to this path",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=get_default("width"),
        help=f"Chart width in pixels (default: {DEFAULTS['width']})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=get_default("height"),
        help=f"Chart height in pixels, summary excluded (default: {DEFAULTS['height']})",
    )
    parser.add_argument(
        "--highlight",
        type=float,
        default=None,
        help="Draw the position indicator at this distance along the route, in meters",
    )
    parser.add_argument(
        "--at",
        type=float,
        default=None,
        help="Report the route position under this pixel column",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.width <= 0 or args.height <= 0:
        print(f"Error: Chart size must be positive, got {args.width}x{args.height}", file=sys.stderr)
        sys.exit(1)

    try:
        points = parse_gpx(args.gpx_file)
    except FileNotFoundError:
        print(f"Error: File not found: {args.gpx_file}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error parsing GPX file: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        profile = profile_from_points(points)
    except ProfileError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    settings = get_settings(config)
    controller = InteractionController(
        profile,
        min_horizontal_spacing=settings["min_horizontal_spacing"],
        min_vertical_spacing=settings["min_vertical_spacing"],
    )
    controller.resize(args.width, args.height)
    if args.highlight is not None:
        controller.set_highlighted_position(args.highlight)

    print("=== Elevation Profile ===")
    scene = controller.scene()
    if scene is None:
        print("Nothing to draw: route is flat or chart is too small.")
    else:
        print(scene.summary)

    if args.at is not None:
        rect = controller.rect
        controller.pointer_moved(args.at, rect.top + rect.height / 2)
        print(f"Position at x={args.at:g}: {format_position(controller.mouse_position)}")

    if args.output:
        png = render_scene(scene, args.width, args.height, settings=settings)
        with open(args.output, "wb") as f:
            f.write(png)
        print(f"Wrote {args.output}")
