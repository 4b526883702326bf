"""Image tracer: turns a camera and a renderer into a filled HDR image.

For every pixel the tracer fires one or more camera rays, asks the renderer
for their radiance and stores the average in the image. With
``samples_per_side = n > 0`` each pixel is split into an n x n grid and one
jittered ray is fired per cell (stratified sampling).

Rows are independent. When a ``seed`` is given, row ``r`` draws every random
number from its own ``PCG(seed, r)`` and the renderer is rebound to that
generator, so the image does not depend on how rows are scheduled and may be
spread over several worker processes.

Example:
    >>> image = HdrImage(320, 240)
    >>> camera = PerspectiveCamera(aspect_ratio=320 / 240)
    >>> tracer = ImageTracer(image, camera, samples_per_side=2, seed=42)
    >>> tracer.fire_all_rays(PathTracer(world), workers=4)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

from src.pathtracer.camera.base import Camera
from src.pathtracer.core.color import BLACK, Color
from src.pathtracer.core.hdr_image import HdrImage
from src.pathtracer.core.integrator import Renderer, is_finite_color
from src.pathtracer.core.pcg import PCG
from src.pathtracer.core.ray import Ray

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


class ImageTracer:
    """Fires camera rays through every pixel of an image.

    Attributes:
        image: Output image; its size defines the pixel grid.
        camera: Camera generating the primary rays.
        samples_per_side: Stratified samples per pixel side (0 = one ray
            through the pixel centre).
        pcg: Generator used for jitter when no seed is given.
        seed: Master seed for per-row generators, or None.
    """

    def __init__(
        self,
        image: HdrImage,
        camera: Camera,
        samples_per_side: int = 0,
        pcg: PCG | None = None,
        seed: int | None = None,
    ) -> None:
        """Create an image tracer.

        Raises:
            ValueError: If ``samples_per_side`` is negative or the image is
                empty.
        """
        if samples_per_side < 0:
            raise ValueError(f"samples_per_side must be >= 0, got {samples_per_side}")
        if image.width == 0 or image.height == 0:
            raise ValueError(f"Cannot trace an empty {image.width}x{image.height} image")
        self.image = image
        self.camera = camera
        self.samples_per_side = samples_per_side
        self.pcg = pcg if pcg is not None else PCG()
        self.seed = seed

    def fire_ray(
        self, col: int, row: int, u_pixel: float = 0.5, v_pixel: float = 0.5
    ) -> Ray:
        """Return the camera ray through a point of pixel (col, row).

        Row 0 is the top of the image.

        Args:
            col: Pixel column.
            row: Pixel row.
            u_pixel: Horizontal position inside the pixel, in [0, 1].
            v_pixel: Vertical position inside the pixel, in [0, 1].
        """
        u = (col + u_pixel) / self.image.width
        v = 1.0 - (row + v_pixel) / self.image.height
        return self.camera.fire_ray(u, v)

    def trace_row(self, row: int, renderer: Renderer, pcg: PCG) -> list[Color]:
        """Compute the colors of one row, left to right.

        Args:
            row: Row index.
            renderer: Renderer evaluating each ray.
            pcg: Generator used for jitter.
        """
        n = self.samples_per_side
        colors = []
        for col in range(self.image.width):
            if n > 0:
                cum_color = BLACK
                for inter_row in range(n):
                    for inter_col in range(n):
                        u_pixel = (inter_col + pcg.random_float()) / n
                        v_pixel = (inter_row + pcg.random_float()) / n
                        ray = self.fire_ray(col, row, u_pixel, v_pixel)
                        cum_color = cum_color + renderer(ray)
                color = cum_color * (1.0 / (n * n))
            else:
                color = renderer(self.fire_ray(col, row))

            if not is_finite_color(color):
                logger.warning("Non-finite radiance %s at pixel (%d, %d)", color, col, row)
            colors.append(color)
        return colors

    def _row_setup(self, row: int, renderer: Renderer) -> tuple[Renderer, PCG]:
        if self.seed is None:
            return renderer, self.pcg
        pcg = PCG(self.seed, row)
        return renderer.with_pcg(pcg), pcg

    def fire_all_rays(
        self,
        renderer: Renderer,
        callback: ProgressCallback | None = None,
        workers: int = 1,
    ) -> HdrImage:
        """Render every pixel into ``self.image``.

        Args:
            renderer: Renderer evaluating each ray.
            callback: Called with (rows_completed, total_rows) after each row.
            workers: Number of worker processes. Values above 1 require a
                seed, so that rows can be rendered in any order.

        Returns:
            The filled image.

        Raises:
            ValueError: If ``workers`` is invalid or several workers are
                requested without a seed.
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if workers > 1 and self.seed is None:
            raise ValueError("Parallel rendering requires a seed for per-row generators")

        height = self.image.height
        logger.info(
            "Rendering %dx%d image with %s (%d samples per pixel, %d worker(s))",
            self.image.width,
            height,
            type(renderer).__name__,
            max(1, self.samples_per_side**2),
            workers,
        )
        start = time.perf_counter()

        if workers == 1:
            for row in range(height):
                row_renderer, pcg = self._row_setup(row, renderer)
                self.image.set_row(row, self.trace_row(row, row_renderer, pcg))
                logger.debug("Row %d/%d done", row + 1, height)
                if callback is not None:
                    callback(row + 1, height)
        else:
            self._fire_rows_parallel(renderer, callback, workers)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return self.image

    def _fire_rows_parallel(
        self,
        renderer: Renderer,
        callback: ProgressCallback | None,
        workers: int,
    ) -> None:
        height = self.image.height
        # Workers get a tracer with a blank buffer; rows come back by index
        worker_tracer = ImageTracer(
            HdrImage(self.image.width, height),
            self.camera,
            self.samples_per_side,
            seed=self.seed,
        )
        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=_init_worker,
            initargs=(worker_tracer, renderer),
        ) as executor:
            futures = [executor.submit(_trace_row_in_worker, row) for row in range(height)]
            for done, future in enumerate(as_completed(futures), start=1):
                row, rgb = future.result()
                self.image.set_row(row, [Color(*c) for c in rgb])
                logger.debug("Row %d done (%d/%d)", row, done, height)
                if callback is not None:
                    callback(done, height)


# =============================================================================
# Worker process state
# =============================================================================

_worker_state: dict[str, Any] = {}


def _init_worker(tracer: ImageTracer, renderer: Renderer) -> None:
    _worker_state["tracer"] = tracer
    _worker_state["renderer"] = renderer


def _trace_row_in_worker(row: int) -> tuple[int, list[tuple[float, float, float]]]:
    tracer: ImageTracer = _worker_state["tracer"]
    row_renderer, pcg = tracer._row_setup(row, _worker_state["renderer"])
    colors = tracer.trace_row(row, row_renderer, pcg)
    return row, [c.to_tuple() for c in colors]
