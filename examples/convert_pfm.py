#!/usr/bin/env python3
"""Convert a PFM file into an 8-bit image.

The HDR image is normalized to an average luminosity, clamped with
x / (1 + x), gamma corrected and saved with Pillow.

Usage:
    python -m examples.convert_pfm INPUT OUTPUT [options]

Options:
    --factor FACTOR         Normalization factor (default: 0.2)
    --gamma GAMMA           Display gamma (default: 1.0)
    --luminosity LUM        Average luminosity (default: computed from the image)
    --format FORMAT         Pillow output format (default: from the extension)

Example:
    python -m examples.convert_pfm image.pfm image.png --factor 0.3 --gamma 2.2
"""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger("convert_pfm")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert a PFM file into an 8-bit image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", type=str, help="Input PFM file")
    parser.add_argument("output", type=str, help="Output image file")
    parser.add_argument(
        "--factor",
        type=float,
        default=0.2,
        help="Normalization factor (default: 0.2)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Display gamma (default: 1.0)",
    )
    parser.add_argument(
        "--luminosity",
        type=float,
        default=None,
        help="Average luminosity (default: computed from the image)",
    )
    parser.add_argument(
        "--format",
        type=str,
        default=None,
        help="Pillow output format (default: inferred from the extension)",
    )
    parser.add_argument("--quiet", action="store_true", help="Only report errors")
    return parser.parse_args()


def convert_pfm(
    input_path: str,
    output_path: str,
    factor: float = 0.2,
    gamma: float = 1.0,
    luminosity: float | None = None,
    image_format: str | None = None,
) -> None:
    """Tone map a PFM file and save it as an LDR image.

    Args:
        input_path: PFM file to read.
        output_path: Destination file.
        factor: Normalization factor.
        gamma: Display gamma.
        luminosity: Average luminosity; computed when None.
        image_format: Pillow format name.
    """
    from src.pathtracer.core.hdr_image import HdrImage

    image = HdrImage.from_pfm_file(input_path)
    logger.info("Read %dx%d image from %s", image.width, image.height, input_path)

    image.normalize_image(factor, luminosity)
    image.clamp_image()
    image.write_ldr_image(output_path, gamma=gamma, image_format=image_format)
    logger.info("Saved %s", output_path)


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        convert_pfm(
            args.input,
            args.output,
            factor=args.factor,
            gamma=args.gamma,
            luminosity=args.luminosity,
            image_format=args.format,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
