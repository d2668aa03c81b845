"""Helpers for loading and rotating the marker icon."""
from __future__ import annotations

from pathlib import Path
from typing import Dict

import numpy as np
from PIL import Image, ImageDraw

from .config import VehicleConfig


_ICON_COLOURS: Dict[str, str] = {
    "car": "#1f77b4",
    "bus": "#9467bd",
    "train": "#d62728",
    "plane": "#17becf",
    "boat": "#2ca02c",
    "pedestrian": "#ff7f0e",
}


def _generate_arrow(vehicle_type: str, size: int = 96) -> Image.Image:
    """Draw a north-pointing arrow so that the heading is visible once rotated."""

    colour = _ICON_COLOURS.get(vehicle_type, "#444444")
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    inset = size // 8
    draw.ellipse([(inset, inset), (size - 1 - inset, size - 1 - inset)], outline=colour, width=max(2, size // 24))
    draw.polygon(
        [
            (size / 2.0, 0),
            (size * 0.78, size * 0.8),
            (size / 2.0, size * 0.62),
            (size * 0.22, size * 0.8),
        ],
        fill=colour,
        outline="white",
    )
    return image


def load_vehicle_icon(config: VehicleConfig, base_size: int = 96) -> np.ndarray:
    """Return the RGBA marker icon as a numpy array, pointing north."""

    if config.icon_path and Path(config.icon_path).exists():
        image = Image.open(config.icon_path).convert("RGBA")
    else:
        image = _generate_arrow(config.type, size=base_size)

    if config.icon_scale != 1.0:
        scaled_size = max(16, int(round(base_size * config.icon_scale)))
        image = image.resize((scaled_size, scaled_size), Image.LANCZOS)

    return np.array(image)


def rotate_icon(icon: np.ndarray, bearing: float) -> np.ndarray:
    """Rotate the icon array clockwise so that it faces the given bearing."""

    image = Image.fromarray(icon)
    rotated = image.rotate(-bearing, resample=Image.BICUBIC, expand=True)
    return np.array(rotated)
