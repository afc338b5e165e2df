"""Configuration file loading."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "elevation-chart"
CONFIG_PATH = CONFIG_DIR / "elevation-chart.json"
LOCAL_CONFIG_PATH = Path("elevation-chart.json")

# Default values for chart options
DEFAULTS = {
    "width": 800,
    "height": 300,
    "min_horizontal_spacing": 50,
    "min_vertical_spacing": 50,
    "profile_color": "#b3d9ff",
    "profile_edge_color": "#4a90d9",
    "grid_color": "#cccccc",
    "highlight_color": "#e55a00",
    "label_color": "#333333",
    "label_font_size": 8,
}


def load_config() -> dict:
    """Load configuration from config files.

    Merges config from global and local files:
    1. ~/.config/elevation-chart/elevation-chart.json (global, loaded first)
    2. ./elevation-chart.json (local, overrides global)

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    config = {}
    for config_path in [CONFIG_PATH, LOCAL_CONFIG_PATH]:
        if config_path.exists():
            try:
                with config_path.open() as f:
                    config.update(json.load(f))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring config file %s: %s", config_path, e)
                continue
    return config


def get_settings(config: dict | None = None) -> dict:
    """Return DEFAULTS overridden by known keys from config."""
    if config is None:
        config = load_config()
    return {key: config.get(key, default) for key, default in DEFAULTS.items()}
