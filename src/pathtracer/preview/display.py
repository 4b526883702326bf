"""Tone mapping and Matplotlib preview of HDR images.

Features:
    - Luminosity tone mapping (normalize to an average luminosity, then
      compress with x / (1 + x))
    - Reinhard and exposure tone mapping
    - Gamma correction
    - Interactive preview window

Example:
    >>> from src.pathtracer.preview.display import show_preview
    >>> tracer.fire_all_rays(renderer)
    >>> show_preview(tracer.image, tone_map="luminosity", gamma=2.2)
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import numpy.typing as npt

from src.pathtracer.core.hdr_image import HdrImage

# Type alias for tone mapping options
ToneMapMethod = Literal["none", "luminosity", "reinhard", "exposure"]

# Default normalization factor of luminosity tone mapping
DEFAULT_LUMINOSITY_FACTOR = 0.2


def tone_map_luminosity(
    image: HdrImage,
    factor: float = DEFAULT_LUMINOSITY_FACTOR,
    luminosity: float | None = None,
) -> npt.NDArray[np.float32]:
    """Normalize an image to a target average luminosity, then clamp it.

    Works on a copy; ``image`` is left untouched.

    Args:
        image: Linear HDR image.
        factor: Luminosity an average pixel is mapped to.
        luminosity: Average luminosity of the image (computed if None).

    Returns:
        Tone mapped array of shape (H, W, 3) in [0, 1).
    """
    work = HdrImage.from_array(np.maximum(image.pixels, 0.0))
    if luminosity is None and not work.pixels.any():
        return work.pixels
    work.normalize_image(factor, luminosity)
    work.clamp_image()
    return work.pixels


def tone_map_reinhard(
    image: npt.NDArray[np.float32],
) -> npt.NDArray[np.float32]:
    """Apply Reinhard tone mapping: L / (1 + L).

    Args:
        image: Linear HDR image array of shape (H, W, 3).

    Returns:
        Tone mapped image in [0, 1) range.
    """
    image = np.maximum(image, 0.0)
    return (image / (1.0 + image)).astype(np.float32)


def tone_map_exposure(
    image: npt.NDArray[np.float32],
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Apply exposure-based tone mapping: 1 - exp(-c * exposure).

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        exposure: Exposure value (default 1.0). Higher values brighten the image.

    Returns:
        Tone mapped image in [0, 1) range.
    """
    image = np.maximum(image, 0.0)
    return (1.0 - np.exp(-image * exposure)).astype(np.float32)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Apply gamma correction for display: out = in^(1/gamma).

    Args:
        image: Linear image array of shape (H, W, 3) in [0, 1] range.
        gamma: Gamma value (default 2.2 for sRGB).

    Returns:
        Gamma corrected image.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)
    return np.power(image, 1.0 / gamma).astype(np.float32)


def process_image_for_display(
    image: HdrImage,
    tone_map: ToneMapMethod = "luminosity",
    gamma: float = 1.0,
    exposure: float = 1.0,
    factor: float = DEFAULT_LUMINOSITY_FACTOR,
    luminosity: float | None = None,
) -> npt.NDArray[np.float32]:
    """Run the full display pipeline on an HDR image.

    1. Tone mapping
    2. Gamma correction
    3. Clamping to [0, 1]

    Args:
        image: Linear HDR image.
        tone_map: Tone mapping method.
        gamma: Gamma correction value.
        exposure: Exposure for exposure tone mapping.
        factor: Normalization factor for luminosity tone mapping.
        luminosity: Average luminosity for luminosity tone mapping.

    Returns:
        Array of shape (H, W, 3) in [0, 1], ready for display.

    Raises:
        ValueError: If ``tone_map`` is unknown.
    """
    if tone_map == "luminosity":
        result = tone_map_luminosity(image, factor, luminosity)
    elif tone_map == "reinhard":
        result = tone_map_reinhard(image.pixels)
    elif tone_map == "exposure":
        result = tone_map_exposure(image.pixels, exposure)
    elif tone_map == "none":
        result = image.pixels.copy()
    else:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0).astype(np.float32)


def show_preview(
    image: HdrImage,
    *,
    tone_map: ToneMapMethod = "luminosity",
    gamma: float = 2.2,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display an HDR image in a Matplotlib window.

    Args:
        image: The image to display.
        tone_map: Tone mapping method.
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: Exposure value for exposure tone mapping.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(
        image, tone_map=tone_map, gamma=gamma, exposure=exposure
    )

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {image.width}x{image.height}"
        if tone_map != "none":
            title += f" ({tone_map})"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
