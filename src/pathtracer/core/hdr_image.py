"""High dynamic range image buffer with PFM input/output.

Pixels are stored in a NumPy float32 array of shape (height, width, 3), with
row 0 at the top of the image. PFM files store rows bottom to top; reading and
writing take care of the flip.

Example:
    >>> image = HdrImage(3, 2)
    >>> image.set_pixel(0, 0, Color(10.0, 20.0, 30.0))
    >>> with open("out.pfm", "wb") as stream:
    ...     image.write_pfm(stream)
"""

from __future__ import annotations

import logging
import math
from typing import BinaryIO

import numpy as np
import numpy.typing as npt

from src.pathtracer.core.color import Color

logger = logging.getLogger(__name__)

# Offset that keeps log10 finite on black pixels
DEFAULT_LUMINOSITY_DELTA = 1e-10


class InvalidPfmFileFormat(ValueError):
    """Raised when a stream does not contain a valid PFM image."""


def _read_line(stream: BinaryIO) -> str:
    line = stream.readline()
    try:
        return line.decode("ascii").rstrip("\n")
    except UnicodeDecodeError as exc:
        raise InvalidPfmFileFormat("PFM header is not ASCII") from exc


def parse_endianness(line: str) -> bool:
    """Parse the PFM scale line.

    Args:
        line: Third header line, ``-1.0`` or ``1.0``.

    Returns:
        True for little endian data, False for big endian.

    Raises:
        InvalidPfmFileFormat: If the line is not a valid scale factor.
    """
    try:
        value = float(line)
    except ValueError as exc:
        raise InvalidPfmFileFormat("Missing endianness specification") from exc

    if value == 1.0:
        return False
    if value == -1.0:
        return True
    raise InvalidPfmFileFormat(f"Invalid endianness specification: {value}")


def parse_image_size(line: str) -> tuple[int, int]:
    """Parse the ``"<width> <height>"`` PFM header line.

    Raises:
        InvalidPfmFileFormat: If the line does not hold two non-negative ints.
    """
    elements = line.split(" ")
    if len(elements) != 2:
        raise InvalidPfmFileFormat("Invalid image size specification")

    try:
        width, height = int(elements[0]), int(elements[1])
    except ValueError as exc:
        raise InvalidPfmFileFormat("Invalid width/height (not integers)") from exc

    if width < 0 or height < 0:
        raise InvalidPfmFileFormat("Invalid width/height (negative values)")
    return width, height


class HdrImage:
    """A grid of linear RGB colors.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        pixels: Float32 array of shape (height, width, 3).
    """

    def __init__(self, width: int = 0, height: int = 0) -> None:
        """Create a black image.

        Args:
            width: Number of columns.
            height: Number of rows.

        Raises:
            ValueError: If a dimension is negative.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: npt.NDArray[np.float32] = np.zeros(
            (height, width, 3), dtype=np.float32
        )

    @classmethod
    def from_array(cls, array: npt.ArrayLike) -> HdrImage:
        """Wrap an (H, W, 3) array as an image (the data are copied)."""
        data = np.array(array, dtype=np.float32)
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (H, W, 3), got {data.shape}")
        image = cls(data.shape[1], data.shape[0])
        image.pixels[...] = data
        return image

    @classmethod
    def from_pfm_file(cls, path: str) -> HdrImage:
        """Load an image from a PFM file on disk."""
        with open(path, "rb") as stream:
            return cls.read_pfm(stream)

    def valid_coordinates(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def _check_coordinates(self, col: int, row: int) -> None:
        if not self.valid_coordinates(col, row):
            raise IndexError(
                f"Pixel ({col}, {row}) out of range for a {self.width}x{self.height} image"
            )

    def get_pixel(self, col: int, row: int) -> Color:
        """Return the color at column ``col`` and row ``row``.

        Raises:
            IndexError: If the coordinates are out of range.
        """
        self._check_coordinates(col, row)
        r, g, b = self.pixels[row, col]
        return Color(float(r), float(g), float(b))

    def set_pixel(self, col: int, row: int, color: Color) -> None:
        """Store ``color`` at column ``col`` and row ``row``.

        Raises:
            IndexError: If the coordinates are out of range.
        """
        self._check_coordinates(col, row)
        self.pixels[row, col] = (color.r, color.g, color.b)

    def set_row(self, row: int, colors: list[Color]) -> None:
        """Store a full row of colors, left to right."""
        if len(colors) != self.width:
            raise ValueError(f"Expected {self.width} colors, got {len(colors)}")
        self._check_coordinates(0, row)
        self.pixels[row] = [(c.r, c.g, c.b) for c in colors]

    def average_luminosity(self, delta: float = DEFAULT_LUMINOSITY_DELTA) -> float:
        """Logarithmic average of the per-pixel luminosity.

        Args:
            delta: Offset added to each luminosity before taking the log.

        Returns:
            ``10 ** mean(log10(delta + L))`` with ``L = (max + min) / 2``.
        """
        if self.pixels.size == 0:
            return 0.0
        data = self.pixels.astype(np.float64)
        lum = (data.max(axis=2) + data.min(axis=2)) / 2.0
        return float(math.pow(10.0, np.mean(np.log10(delta + lum))))

    def normalize_image(self, factor: float, luminosity: float | None = None) -> None:
        """Scale every pixel by ``factor / luminosity``.

        Args:
            factor: Target luminosity of an average pixel.
            luminosity: Image luminosity; computed with ``average_luminosity``
                when omitted.
        """
        lum = self.average_luminosity() if luminosity is None else luminosity
        if lum <= 0.0:
            raise ValueError(f"Luminosity must be positive, got {lum}")
        self.pixels *= np.float32(factor / lum)

    def clamp_image(self) -> None:
        """Map every component into [0, 1) with ``x / (1 + x)``."""
        self.pixels = (self.pixels / (1.0 + self.pixels)).astype(np.float32)

    def write_pfm(self, stream: BinaryIO, little_endian: bool = True) -> None:
        """Write the image as a PFM stream.

        Args:
            stream: Binary output stream.
            little_endian: Byte order of the float data.
        """
        scale = "-1.0" if little_endian else "1.0"
        stream.write(f"PF\n{self.width} {self.height}\n{scale}\n".encode("ascii"))
        dtype = "<f4" if little_endian else ">f4"
        stream.write(self.pixels[::-1].astype(dtype).tobytes())
        logger.debug("Wrote %dx%d PFM image", self.width, self.height)

    @classmethod
    def read_pfm(cls, stream: BinaryIO) -> HdrImage:
        """Read a PFM stream into a new image.

        Raises:
            InvalidPfmFileFormat: If the header or the raster is malformed.
        """
        magic = _read_line(stream)
        if magic != "PF":
            raise InvalidPfmFileFormat("Invalid magic in PFM file")

        width, height = parse_image_size(_read_line(stream))
        little_endian = parse_endianness(_read_line(stream))

        count = width * height * 3
        data = stream.read(count * 4)
        if len(data) != count * 4:
            raise InvalidPfmFileFormat(
                f"Expected {count * 4} bytes of pixel data, found {len(data)}"
            )

        dtype = "<f4" if little_endian else ">f4"
        raster = np.frombuffer(data, dtype=dtype).reshape(height, width, 3)
        image = cls(width, height)
        image.pixels[...] = raster[::-1]
        logger.debug("Read %dx%d PFM image", width, height)
        return image

    def write_ldr_image(
        self, path: str, gamma: float = 1.0, image_format: str | None = None
    ) -> None:
        """Save an 8-bit image (PNG, JPEG, ...) with Pillow.

        The image should already be normalized and clamped.

        Args:
            path: Output file path.
            gamma: Display gamma.
            image_format: Pillow format name; inferred from ``path`` if None.
        """
        from src.pathtracer.preview.export import save_ldr

        save_ldr(self, path, gamma=gamma, image_format=image_format)
