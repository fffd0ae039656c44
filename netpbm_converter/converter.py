#!/usr/bin/env python3
"""
Netpbm Converter - Main Entry Point

Loads a PBM/PGM image, applies a sequence of in-memory transforms and writes
the result back as a Netpbm file in the requested encoding.

Usage:
    netpbm_convert <image> [operations] [options]

Example:
    netpbm_convert scan.pgm --rotate --invert --to-bitmap -o scan.pbm

Operations are applied in the order given on the command line. A YAML
recipe (--recipe) can supply the image, the operations and the output
settings; command-line operations run after the recipe's.
"""

import sys
import os
import argparse
from typing import Optional, Sequence

from .netpbm_format import FormatTag
from .netpbm_io import load, save
from .pixel_buffer import PixelBuffer
from .transform_recipe import OPERATIONS, TransformRecipe


def apply_operation(buffer: PixelBuffer, operation: str) -> PixelBuffer:
    """
    Apply one named transform.

    Args:
        buffer: Image to transform
        operation: One of OPERATIONS

    Returns:
        The transformed buffer (a new buffer for the format conversions)
    """
    if operation == "invert":
        return buffer.invert()
    elif operation == "flip":
        return buffer.flip()
    elif operation == "flop":
        return buffer.flop()
    elif operation == "rotate":
        return buffer.rotate()
    elif operation == "to_bitmap":
        return buffer.to_bitmap()
    elif operation == "to_greymap":
        return buffer.to_greymap()
    raise ValueError(
        f"Unknown operation {operation!r}, expected one of {', '.join(OPERATIONS)}"
    )


def apply_output_format(
    buffer: PixelBuffer,
    format_tag: Optional[FormatTag] = None,
    max_value: Optional[int] = None,
) -> PixelBuffer:
    """
    Bring a buffer into the requested output encoding.

    A tag from the other format family converts the image (threshold or
    expand); a tag from the same family only changes the encoding.
    """
    if format_tag is not None:
        if format_tag.is_bitmap and buffer.format_tag.is_greymap:
            buffer = buffer.to_bitmap(format_tag)
        elif format_tag.is_greymap and buffer.format_tag.is_bitmap:
            buffer = buffer.to_greymap(max_value or 255, format_tag)
        else:
            buffer.set_format_tag(format_tag)

    if max_value is not None:
        if buffer.format_tag.is_bitmap:
            raise ValueError("A max value only applies to greymap output")
        buffer.set_max_value(max_value)

    return buffer


class NetpbmConverter:
    """
    Main converter class for Netpbm transforms.

    Orchestrates the complete pipeline:
    1. Decode the input image
    2. Apply the requested transforms in order
    3. Convert to the requested output encoding
    4. Encode and write the result
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize converter.

        Args:
            verbose: Print progress information
        """
        self.verbose = verbose
        self.buffer = None

    def _log(self, message: str = ""):
        if self.verbose:
            print(message)

    def convert(
        self,
        input_path: str,
        output_path: str = None,
        operations: Sequence[str] = (),
        format_tag: Optional[FormatTag] = None,
        max_value: Optional[int] = None,
    ) -> PixelBuffer:
        """
        Convert one Netpbm image.

        Args:
            input_path: Path to the PBM/PGM image
            output_path: Output file path (default: <input>_out.pbm/.pgm)
            operations: Transform names, applied in order
            format_tag: Output encoding (default: keep the current one)
            max_value: Greymap max value for the output (default: unchanged)

        Returns:
            The buffer that was written
        """
        self._log("\n" + "=" * 70)
        self._log("  NETPBM CONVERTER")
        self._log("=" * 70)
        self._log(f"\n📂 Input: {input_path}")

        buffer = load(input_path)
        self._describe("Input Image", buffer)

        if operations:
            self._log(f"\n🔧 Applying {len(operations)} operation(s)...")
        for operation in operations:
            buffer = apply_operation(buffer, operation)
            self._log(f"   {operation:<12} → {buffer.width} × {buffer.height} {buffer.format_tag.magic}")

        buffer = apply_output_format(buffer, format_tag, max_value)

        if output_path is None:
            base = os.path.splitext(input_path)[0]
            output_path = base + "_out" + buffer.format_tag.extension

        save(buffer, output_path)
        self.buffer = buffer

        self._describe("Output Image", buffer)
        self._log("\n" + "=" * 70)
        self._log("  ✓ CONVERSION COMPLETE")
        self._log("=" * 70)
        self._log(f"\n📁 Output:  {output_path}\n")

        return buffer

    def _describe(self, title: str, buffer: PixelBuffer):
        self._log(f"\n📊 {title}:")
        self._log(f"   Format:      {buffer.format_tag.magic}")
        self._log(f"   Size:        {buffer.width} × {buffer.height} pixels")
        if buffer.max_value is not None:
            self._log(f"   Max value:   {buffer.max_value}")


def main(args=None):
    """
    Main entry point for the converter.

    Args:
        args: Command line arguments (optional, for testing)
    """
    parser = argparse.ArgumentParser(
        description="Transform and convert Netpbm bitmap (PBM) and greymap (PGM) images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Invert a greymap and write it next to the input
  netpbm_convert photo.pgm --invert

  # Rotate, mirror and threshold to an ASCII bitmap
  netpbm_convert photo.pgm --rotate --flip --format P1 -o photo.pbm

  # Run the operations listed in a YAML recipe
  netpbm_convert --recipe recipe.yaml

Note:
  Operations are applied in command-line order and may be repeated.
  Bitmap headers store "rows columns", greymap headers "columns rows".
        """,
    )

    parser.add_argument(
        "image",
        type=str,
        nargs="?",
        default=None,
        help="Path to the input PBM/PGM image (optional when --recipe names one)",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file path (default: <input>_out.pbm or .pgm)",
    )

    parser.add_argument(
        "--recipe",
        type=str,
        default=None,
        help="YAML recipe with image, operations, output and format entries",
    )

    for operation, help_text in (
        ("invert", "Invert samples (max - value, or logical not for bitmaps)"),
        ("flip", "Mirror horizontally"),
        ("flop", "Mirror vertically"),
        ("rotate", "Rotate 90 degrees clockwise"),
        ("to_bitmap", "Threshold a greymap into a bitmap (value > max / 2)"),
        ("to_greymap", "Expand a bitmap into a greymap (set -> max, unset -> 0)"),
    ):
        parser.add_argument(
            "--" + operation.replace("_", "-"),
            dest="operations",
            action="append_const",
            const=operation,
            help=help_text,
        )

    parser.add_argument(
        "--format",
        type=str,
        choices=[tag.magic for tag in FormatTag],
        default=None,
        help="Output encoding (default: keep the input encoding)",
    )

    parser.add_argument(
        "--max-value",
        type=int,
        default=None,
        metavar="N",
        help="Greymap output max value, 1-255 (samples are rescaled)",
    )

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report errors",
    )

    # Parse arguments
    if args is None:
        args = parser.parse_args()
    else:
        args = parser.parse_args(args)

    if args.image is None and args.recipe is None:
        parser.error("an input image or --recipe is required")

    try:
        image = args.image
        output = args.output
        operations = []
        format_tag = None
        max_value = args.max_value

        if args.recipe is not None:
            recipe = TransformRecipe(args.recipe)
            image = image or recipe.image_path
            output = output or recipe.output_path
            operations.extend(recipe.operations)
            format_tag = recipe.format_tag
            if max_value is None:
                max_value = recipe.max_value

        operations.extend(args.operations or [])
        if args.format is not None:
            format_tag = FormatTag.from_magic(args.format)

        if not os.path.exists(image):
            print(f"Error: Image file not found: {image}", file=sys.stderr)
            return 1

        converter = NetpbmConverter(verbose=not args.quiet)
        converter.convert(
            input_path=image,
            output_path=output,
            operations=operations,
            format_tag=format_tag,
            max_value=max_value,
        )
        return 0

    except Exception as e:
        print(f"Error during conversion: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
