"""Preview module for displaying and exporting rendered images.

Components:
    display: Tone mapping, gamma correction and Matplotlib preview
    export: 8-bit export and import through Pillow

Display pipeline:
    1. Tone mapping (luminosity normalization, Reinhard or exposure)
    2. Gamma correction for sRGB display
    3. Quantization to 8 bits
"""

from .display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_luminosity,
    tone_map_reinhard,
)
from .export import compute_rmse, load_ldr, save_ldr, save_png, to_uint8

__all__ = [
    "ToneMapMethod",
    "apply_gamma",
    "process_image_for_display",
    "show_preview",
    "tone_map_exposure",
    "tone_map_luminosity",
    "tone_map_reinhard",
    "compute_rmse",
    "load_ldr",
    "save_ldr",
    "save_png",
    "to_uint8",
]
