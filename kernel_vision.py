#!/usr/bin/env python3
"""Kernel Vision command-line image processor."""

import logging
import sys
from pathlib import Path

import click
from PIL import Image, ImageColor

from KV_Libs.constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FOREGROUND_COLOR,
    DEFAULT_HALFTONE_RADIUS,
    DEFAULT_OUTPUT_FORMAT,
)
from KV_Libs.ImageEditingLib.errors import KernelVisionError
from KV_Libs.ImageEditingLib.image_models import Palette
from KV_Libs.ImageEditingLib.kernel_filter import PRESET_NAMES, get_preset_kernel
from KV_Libs.ImageEditingLib.kernel_io import load_kernel_file
from KV_Libs.ImageEditingLib.transforms import (
    ConvolutionTransform,
    GrayscaleTransform,
    HalftoneTransform,
    apply_transform,
)

logger = logging.getLogger("kernel_vision")


def _parse_color(ctx, param, value):
    if value is None or isinstance(value, tuple):
        return value
    try:
        return ImageColor.getrgb(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _load_image(path: str):
    try:
        img = Image.open(path)
        img.load()
        return img
    except (FileNotFoundError, OSError, Image.UnidentifiedImageError) as e:
        click.echo(f"Error loading image: {e}", err=True)
        sys.exit(1)


def _run(input_path: str, output_path: str, transform) -> None:
    img = _load_image(input_path)
    logger.info(f"Applying {transform.transform_type} to {input_path} ({img.width}x{img.height})")

    try:
        result = apply_transform(img, transform)
    except (KernelVisionError, ValueError, TypeError) as e:
        click.echo(f"Error processing image: {e}", err=True)
        sys.exit(1)

    output = Path(output_path)
    fmt = None if output.suffix else DEFAULT_OUTPUT_FORMAT
    try:
        result.save(output, format=fmt)
    except (ValueError, OSError) as e:
        click.echo(f"Error saving image: {e}", err=True)
        sys.exit(1)
    click.echo(f"Saved: {output}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose):
    """Grayscale, kernel and halftone image processor."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("input", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), required=True, help="Output path")
def grayscale(input, output):
    """Convert INPUT to grayscale."""
    _run(input, output, GrayscaleTransform())


@main.command()
@click.argument("input", type=click.Path(exists=True, dir_okay=False))
@click.option("-k", "--kernel-file", type=click.Path(exists=True, dir_okay=False), help="Kernel text file")
@click.option("-p", "--preset", type=click.Choice(PRESET_NAMES), help="Named kernel preset")
@click.option("-o", "--output", type=click.Path(dir_okay=False), required=True, help="Output path")
def convolve(input, kernel_file, preset, output):
    """Apply a kernel to INPUT."""
    if kernel_file and preset:
        raise click.UsageError("Cannot use both --kernel-file and --preset")

    if not kernel_file and not preset:
        raise click.UsageError("Must specify either --kernel-file or --preset")

    if kernel_file:
        try:
            kernel = load_kernel_file(kernel_file)
        except (OSError, KernelVisionError) as e:
            click.echo(f"Error loading kernel: {e}", err=True)
            sys.exit(1)
    else:
        kernel = get_preset_kernel(preset)

    _run(input, output, ConvolutionTransform(kernel=kernel))


@main.command()
@click.argument("input", type=click.Path(exists=True, dir_okay=False))
@click.option("-r", "--radius", type=click.IntRange(min=1), default=DEFAULT_HALFTONE_RADIUS,
              show_default=True, help="Dot cell radius in pixels")
@click.option("--background", callback=_parse_color, default=None, help="Background color (name or #rrggbb)")
@click.option("--foreground", callback=_parse_color, default=None, help="Dot color (name or #rrggbb)")
@click.option("-o", "--output", type=click.Path(dir_okay=False), required=True, help="Output path")
def halftone(input, radius, background, foreground, output):
    """Render INPUT as halftone dots."""
    palette = Palette(
        background=background or DEFAULT_BACKGROUND_COLOR,
        foreground=foreground or DEFAULT_FOREGROUND_COLOR,
    )
    _run(input, output, HalftoneTransform(radius=radius, palette=palette))


if __name__ == "__main__":
    main()
