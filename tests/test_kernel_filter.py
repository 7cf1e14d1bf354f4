"""
Tests for the kernel filter.

Tests cover:
- Kernel validation
- Identity and blur behavior
- Edge clamping at the borders
- Kernel orientation (column offset first)
- Truncation and clamping of channel sums
- Alpha handling
- Presets
"""

import unittest

from PIL import Image

from KV_Libs.ImageEditingLib.errors import InvalidKernelError
from KV_Libs.ImageEditingLib.kernel_filter import (
    EDGE_DETECT_KERNEL,
    SHARPEN_KERNEL,
    Kernel,
    apply_kernel,
    box_blur_kernel,
    get_preset_kernel,
    identity_kernel,
)


def _gradient():
    img = Image.new("RGB", (5, 3))
    pixels = img.load()
    for y in range(3):
        for x in range(5):
            pixels[x, y] = (x * 50, y * 100, 7)
    return img


class TestKernelValidation(unittest.TestCase):
    """Test Kernel construction."""

    def test_valid_kernel(self):
        kernel = Kernel.from_rows([[0, 0, 0], [0, 1, 0], [0, 0, 0]])

        self.assertEqual(kernel.size, 3)
        self.assertEqual(kernel.center, 1)
        self.assertEqual(kernel.weights[1][1], 1.0)

    def test_from_rows_passes_kernel_through(self):
        kernel = identity_kernel(3)

        self.assertIs(Kernel.from_rows(kernel), kernel)

    def test_empty_kernel(self):
        with self.assertRaises(InvalidKernelError):
            Kernel.from_rows([])

    def test_even_kernel(self):
        with self.assertRaises(InvalidKernelError):
            Kernel.from_rows([[1, 0], [0, 1]])

    def test_non_square_kernel(self):
        with self.assertRaises(InvalidKernelError):
            Kernel.from_rows([[1, 0, 0], [0, 1, 0], [0, 0]])

    def test_wide_rows(self):
        with self.assertRaises(InvalidKernelError):
            Kernel.from_rows([[1, 0, 0]])

    def test_non_numeric_weight(self):
        with self.assertRaises(InvalidKernelError):
            Kernel.from_rows([["a"]])

    def test_non_finite_weight(self):
        for value in (float("inf"), float("-inf"), float("nan")):
            with self.assertRaises(InvalidKernelError):
                Kernel.from_rows([[value]])

    def test_weight_too_large_for_float(self):
        with self.assertRaises(InvalidKernelError):
            Kernel.from_rows([[10 ** 400]])

    def test_invalid_kernel_is_value_error(self):
        with self.assertRaises(ValueError):
            Kernel.from_rows([])

    def test_to_rows(self):
        self.assertEqual(identity_kernel(1).to_rows(), [[1.0]])


class TestApplyKernel(unittest.TestCase):
    """Test kernel application."""

    def test_one_by_one_identity(self):
        img = _gradient()
        result = apply_kernel(img, [[1.0]])

        self.assertEqual(list(result.getdata()), list(img.getdata()))

    def test_three_by_three_identity_on_mid_gray(self):
        img = Image.new("RGB", (4, 4), (128, 128, 128))
        result = apply_kernel(img, [[0, 0, 0], [0, 1, 0], [0, 0, 0]])

        self.assertEqual(result.size, (4, 4))
        self.assertEqual(list(result.getdata()), list(img.getdata()))

    def test_box_blur_keeps_uniform_color(self):
        img = Image.new("RGB", (6, 5), (37, 200, 128))
        result = apply_kernel(img, box_blur_kernel(3))

        self.assertEqual(set(result.getdata()), {(37, 200, 128)})

    def test_box_blur_clamps_edges(self):
        img = Image.new("RGB", (3, 1))
        pixels = img.load()
        pixels[0, 0] = (0, 0, 0)
        pixels[1, 0] = (90, 0, 0)
        pixels[2, 0] = (180, 0, 0)

        result = apply_kernel(img, box_blur_kernel(3))

        # Out-of-range columns and rows repeat the border pixels
        self.assertEqual(result.getpixel((0, 0)), (30, 0, 0))
        self.assertEqual(result.getpixel((1, 0)), (90, 0, 0))
        self.assertEqual(result.getpixel((2, 0)), (150, 0, 0))

    def test_first_index_is_column_offset(self):
        img = _gradient()
        kernel = [[0, 0, 0], [0, 0, 0], [0, 1, 0]]

        result = apply_kernel(img, kernel)

        self.assertEqual(result.getpixel((0, 0)), (50, 0, 7))
        self.assertEqual(result.getpixel((2, 2)), (150, 200, 7))
        self.assertEqual(result.getpixel((4, 1)), (200, 100, 7))

    def test_second_index_is_row_offset(self):
        img = _gradient()
        kernel = [[0, 0, 0], [0, 0, 1], [0, 0, 0]]

        result = apply_kernel(img, kernel)

        self.assertEqual(result.getpixel((3, 0)), (150, 100, 7))
        self.assertEqual(result.getpixel((3, 2)), (150, 200, 7))

    def test_clamps_overflow_and_underflow(self):
        img = Image.new("RGB", (1, 1), (100, 50, 200))

        self.assertEqual(apply_kernel(img, [[3.0]]).getpixel((0, 0)), (255, 150, 255))
        self.assertEqual(apply_kernel(img, [[-1.0]]).getpixel((0, 0)), (0, 0, 0))

    def test_overflowing_sum_saturates(self):
        img = Image.new("RGB", (1, 1), (255, 255, 255))

        self.assertEqual(apply_kernel(img, [[1e308]]).getpixel((0, 0)), (255, 255, 255))
        self.assertEqual(apply_kernel(img, [[-1e308]]).getpixel((0, 0)), (0, 0, 0))

    def test_opposite_overflows_give_zero(self):
        # +inf from the first column meets -inf from the second
        img = Image.new("RGB", (3, 3), (255, 255, 255))
        kernel = [
            [1e308, 1e308, 1e308],
            [-1e308, -1e308, -1e308],
            [0.0, 0.0, 0.0],
        ]

        self.assertEqual(apply_kernel(img, kernel).getpixel((1, 1)), (0, 0, 0))

    def test_truncates_instead_of_rounding(self):
        img = Image.new("RGB", (1, 1), (255, 3, 1))
        result = apply_kernel(img, [[0.5]])

        self.assertEqual(result.getpixel((0, 0)), (127, 1, 0))

    def test_rgba_keeps_source_alpha(self):
        img = Image.new("RGBA", (2, 2), (10, 20, 30, 77))
        result = apply_kernel(img, [[2.0]])

        self.assertEqual(result.mode, "RGBA")
        self.assertEqual(result.getpixel((1, 1)), (20, 40, 60, 77))

    def test_does_not_modify_input(self):
        img = _gradient()
        before = list(img.getdata())
        apply_kernel(img, SHARPEN_KERNEL)

        self.assertEqual(list(img.getdata()), before)

    def test_empty_image(self):
        result = apply_kernel(Image.new("RGB", (0, 0)), identity_kernel(3))

        self.assertEqual(result.size, (0, 0))

    def test_invalid_kernel_raises_before_processing(self):
        with self.assertRaises(InvalidKernelError):
            apply_kernel(_gradient(), [[1, 1], [1, 1]])

    def test_invalid_input_type(self):
        with self.assertRaises(TypeError):
            apply_kernel("not_an_image", [[1.0]])


class TestPresets(unittest.TestCase):
    """Test kernel presets."""

    def test_identity_preset(self):
        img = _gradient()
        result = apply_kernel(img, get_preset_kernel("identity"))

        self.assertEqual(list(result.getdata()), list(img.getdata()))

    def test_edge_detect_on_uniform_is_black(self):
        img = Image.new("RGB", (4, 4), (90, 180, 30))
        result = apply_kernel(img, EDGE_DETECT_KERNEL)

        self.assertEqual(set(result.getdata()), {(0, 0, 0)})

    def test_sharpen_on_uniform_is_unchanged(self):
        img = Image.new("RGB", (4, 4), (90, 180, 30))
        result = apply_kernel(img, get_preset_kernel("sharpen"))

        self.assertEqual(set(result.getdata()), {(90, 180, 30)})

    def test_preset_name_normalized(self):
        self.assertEqual(get_preset_kernel("Box-Blur"), box_blur_kernel(3))

    def test_unknown_preset(self):
        with self.assertRaises(ValueError):
            get_preset_kernel("emboss")

    def test_box_blur_even_size_rejected(self):
        with self.assertRaises(InvalidKernelError):
            box_blur_kernel(4)


if __name__ == "__main__":
    unittest.main()
