"""Image export utilities for rendered images.

Supported formats:
    - PFM (32-bit float HDR, see HdrImage.write_pfm)
    - PNG, JPEG, ... (8-bit via Pillow)

Example:
    >>> from src.pathtracer.preview.export import save_png
    >>> save_png(tracer.image, "output.png", gamma=2.2)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.pathtracer.core.hdr_image import HdrImage
from src.pathtracer.preview.display import (
    DEFAULT_LUMINOSITY_FACTOR,
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
)


def to_uint8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Scale values in [0, 1] to 8-bit integers: int(255 * c)."""
    return (np.clip(image, 0.0, 1.0) * 255).astype(np.uint8)


def save_ldr(
    image: HdrImage,
    filepath: str,
    *,
    gamma: float = 1.0,
    image_format: str | None = None,
) -> None:
    """Save an already tone mapped image as an 8-bit file.

    Each component becomes ``int(255 * c ** (1 / gamma))``.

    Args:
        image: Image with components in [0, 1].
        filepath: Output file path.
        gamma: Display gamma.
        image_format: Pillow format name; inferred from ``filepath`` if None.
    """
    image_uint8 = to_uint8(apply_gamma(image.pixels, gamma))
    PILImage.fromarray(image_uint8).save(filepath, format=image_format)


def save_png(
    image: HdrImage,
    filepath: str,
    *,
    tone_map: ToneMapMethod = "luminosity",
    gamma: float = 2.2,
    exposure: float = 1.0,
    factor: float = DEFAULT_LUMINOSITY_FACTOR,
    luminosity: float | None = None,
) -> None:
    """Tone map a linear HDR image and save it as a PNG file.

    Args:
        image: Linear HDR image.
        filepath: Output file path (should end in .png).
        tone_map: Tone mapping method.
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: Exposure value for exposure tone mapping.
        factor: Normalization factor for luminosity tone mapping.
        luminosity: Average luminosity for luminosity tone mapping.
    """
    processed = process_image_for_display(
        image,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
        factor=factor,
        luminosity=luminosity,
    )
    PILImage.fromarray(to_uint8(processed)).save(filepath, format="PNG")


def load_ldr(filepath: str) -> HdrImage:
    """Load an 8-bit image file as a linear HDR image with values in [0, 1]."""
    with PILImage.open(filepath) as pil_image:
        data = np.asarray(pil_image.convert("RGB"), dtype=np.float32) / 255.0
    return HdrImage.from_array(data)


def compute_rmse(image_a: HdrImage, image_b: HdrImage) -> float:
    """Compute root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.pixels.shape != image_b.pixels.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.pixels.shape} vs {image_b.pixels.shape}"
        )

    diff = image_a.pixels.astype(np.float64) - image_b.pixels.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
