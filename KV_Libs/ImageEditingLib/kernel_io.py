"""
Kernel text file loading and saving.

Kernel files hold the size n on the first line, followed by n lines of n
whitespace-separated real numbers:

    3
    0 -1 0
    -1 5 -1
    0 -1 0

Blank lines are ignored.

Functions:
    parse_kernel_text: Parse kernel text into a Kernel
    load_kernel_file: Read and parse a kernel file
    format_kernel_text: Render a Kernel in the file format
    save_kernel_file: Write a Kernel to disk
"""

import logging
from pathlib import Path
from typing import Union

from KV_Libs.constants import KERNEL_FILE_ENCODING, KERNEL_VALUE_FORMAT
from KV_Libs.ImageEditingLib.errors import InvalidKernelError
from KV_Libs.ImageEditingLib.kernel_filter import Kernel

logger = logging.getLogger(__name__)


def parse_kernel_text(text: str) -> Kernel:
    """
    Parse kernel text into a Kernel.

    Args:
        text: Kernel description (size line followed by size rows)

    Returns:
        The parsed Kernel

    Raises:
        InvalidKernelError: If the size line is missing or not an integer,
            the row count or any row's column count differs from the size,
            or a value is not a number
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise InvalidKernelError("Kernel text is empty")

    try:
        size = int(lines[0])
    except ValueError:
        raise InvalidKernelError(f"Kernel size line must be an integer, got {lines[0]!r}")

    rows = lines[1:]
    if len(rows) != size:
        raise InvalidKernelError(f"Kernel declares {size} rows but {len(rows)} were given")

    weights = []
    for index, line in enumerate(rows):
        tokens = line.split()
        if len(tokens) != size:
            raise InvalidKernelError(
                f"Kernel row {index} has {len(tokens)} values, expected {size}"
            )
        try:
            weights.append([float(token) for token in tokens])
        except ValueError:
            raise InvalidKernelError(f"Kernel row {index} contains a non-numeric value: {line!r}")

    return Kernel(weights=weights)


def load_kernel_file(path: Union[str, Path]) -> Kernel:
    """
    Read a kernel file from disk.

    Raises:
        OSError: If the file cannot be read
        InvalidKernelError: If the file is not valid text or not a valid kernel
    """
    path = Path(path)
    try:
        text = path.read_text(encoding=KERNEL_FILE_ENCODING)
    except UnicodeDecodeError as e:
        raise InvalidKernelError(f"Kernel file {path} is not {KERNEL_FILE_ENCODING} text: {e}") from e

    kernel = parse_kernel_text(text)
    logger.debug(f"Loaded {kernel.size}x{kernel.size} kernel from {path}")
    return kernel


def format_kernel_text(kernel: Kernel) -> str:
    """Render a kernel in the text file format."""
    lines = [str(kernel.size)]
    for row in kernel.weights:
        lines.append(" ".join(KERNEL_VALUE_FORMAT.format(value) for value in row))
    return "\n".join(lines) + "\n"


def save_kernel_file(kernel: Kernel, path: Union[str, Path]) -> Path:
    """Write a kernel file to disk and return its path."""
    path = Path(path)
    path.write_text(format_kernel_text(kernel), encoding=KERNEL_FILE_ENCODING)
    return path
