"""
Tests for Transform Nodes.

Tests cover:
- Node config serialization
- Kernel resolution (rows, file, preset)
- Node executors for each transform
- Node creation
- Error handling
"""

import tempfile
import unittest
from pathlib import Path

from PIL import Image

from KV_Libs.ImageEditingLib.errors import InvalidKernelError
from KV_Libs.ImageEditingLib.kernel_filter import SHARPEN_KERNEL, box_blur_kernel
from KV_Libs.ImageEditingLib.kernel_io import save_kernel_file
from KV_Libs.ImageEditingLib.transforms import (
    ConvolutionTransform,
    GrayscaleTransform,
    HalftoneTransform,
)
from KV_Libs.NodesLib.transform_node import (
    TransformNodeConfig,
    create_transform_node,
    execute_convolution_node,
    execute_grayscale_node,
    execute_halftone_node,
    execute_transform_node,
)


class TestTransformNodeConfig(unittest.TestCase):
    """Test node configuration."""

    def test_defaults_to_grayscale(self):
        config = TransformNodeConfig()

        self.assertEqual(config.to_transform(), GrayscaleTransform())

    def test_from_dict_ignores_node_keys(self):
        config = TransformNodeConfig.from_dict({
            "id": "n1",
            "type": "Halftone",
            "transform_type": "halftone",
            "radius": 7,
            "background": [1, 2, 3],
        })

        self.assertEqual(config.radius, 7)
        self.assertEqual(config.background, (1, 2, 3))

    def test_to_dict(self):
        data = TransformNodeConfig(transform_type="halftone", radius=3).to_dict()

        self.assertEqual(data["transform_type"], "halftone")
        self.assertEqual(data["radius"], 3)

    def test_halftone_transform(self):
        config = TransformNodeConfig(transform_type="halftone", radius=3, foreground=(9, 9, 9))
        transform = config.to_transform()

        self.assertIsInstance(transform, HalftoneTransform)
        self.assertEqual(transform.radius, 3)
        self.assertEqual(transform.palette.foreground, (9, 9, 9))

    def test_kernel_rows_take_priority(self):
        config = TransformNodeConfig(
            transform_type="convolution",
            kernel=[[1.0]],
            kernel_preset="sharpen",
        )

        self.assertEqual(config.to_transform(), ConvolutionTransform(kernel=[[1.0]]))

    def test_kernel_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_kernel_file(box_blur_kernel(3), Path(tmpdir) / "blur.txt")
            config = TransformNodeConfig(transform_type="convolution", kernel_file=str(path))

            self.assertEqual(config.resolve_kernel(), box_blur_kernel(3))

    def test_kernel_from_preset(self):
        config = TransformNodeConfig(transform_type="convolution", kernel_preset="sharpen")

        self.assertEqual(config.resolve_kernel(), SHARPEN_KERNEL)

    def test_convolution_without_kernel_raises(self):
        config = TransformNodeConfig(transform_type="convolution")

        with self.assertRaises(ValueError):
            config.to_transform()

    def test_unknown_transform_type(self):
        with self.assertRaises(ValueError):
            TransformNodeConfig(transform_type="emboss").to_transform()


class TestExecuteTransformNode(unittest.TestCase):
    """Test node executors."""

    def setUp(self):
        self.test_image = Image.new("RGB", (12, 10), (255, 0, 0))

    def test_grayscale_node(self):
        result = execute_grayscale_node({"id": "g"}, [self.test_image])

        self.assertEqual(result.getpixel((0, 0)), (76, 76, 76))

    def test_convolution_node(self):
        result = execute_convolution_node({"id": "c", "kernel": [[0.5]]}, [self.test_image])

        self.assertEqual(result.getpixel((3, 3)), (127, 0, 0))

    def test_halftone_node(self):
        result = execute_halftone_node({"id": "h", "radius": 3}, [self.test_image])

        self.assertEqual(result.size, self.test_image.size)

    def test_generic_node_dispatches_on_transform_type(self):
        node = {"id": "t", "transform_type": "convolution", "kernel_preset": "identity"}
        result = execute_transform_node(node, [self.test_image])

        self.assertEqual(list(result.getdata()), list(self.test_image.getdata()))

    def test_specific_executor_overrides_transform_type(self):
        node = {"id": "g", "transform_type": "halftone"}
        result = execute_grayscale_node(node, [self.test_image])

        self.assertEqual(result.getpixel((0, 0)), (76, 76, 76))
        self.assertEqual(node["transform_type"], "halftone")

    def test_no_input_raises(self):
        with self.assertRaises(ValueError):
            execute_transform_node({"transform_type": "grayscale"}, [])

    def test_invalid_input_type(self):
        with self.assertRaises(TypeError):
            execute_transform_node({"transform_type": "grayscale"}, ["not_an_image"])

    def test_invalid_kernel_keeps_error_type(self):
        with self.assertRaises(InvalidKernelError) as ctx:
            execute_convolution_node({"kernel": [[1, 1], [1, 1]]}, [self.test_image])

        self.assertIn("Transform node error", str(ctx.exception))

    def test_invalid_radius(self):
        with self.assertRaises(ValueError):
            execute_halftone_node({"radius": 0}, [self.test_image])

    def test_fractional_radius_rejected(self):
        with self.assertRaises(ValueError):
            execute_halftone_node({"radius": 2.5}, [self.test_image])

    def test_undecodable_kernel_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "binary.txt"
            path.write_bytes(b"1\n\xff\n")

            with self.assertRaises(InvalidKernelError) as ctx:
                execute_convolution_node({"kernel_file": str(path)}, [self.test_image])

        self.assertIn("Transform node error", str(ctx.exception))


class TestCreateTransformNode(unittest.TestCase):
    """Test node creation."""

    def test_create_grayscale_node(self):
        node = create_transform_node("gray-1")

        self.assertEqual(node["id"], "gray-1")
        self.assertEqual(node["type"], "Grayscale")
        self.assertEqual(node["transform_type"], "grayscale")

    def test_create_convolution_node(self):
        node = create_transform_node("edges-1", "convolution", kernel_preset="edge_detect")

        self.assertEqual(node["type"], "Convolution")
        self.assertEqual(node["kernel_preset"], "edge_detect")

    def test_create_halftone_node(self):
        node = create_transform_node("dots-1", "halftone", radius=8)

        self.assertEqual(node["type"], "Halftone")
        self.assertEqual(node["radius"], 8)

    def test_create_unknown_type(self):
        with self.assertRaises(ValueError):
            create_transform_node("x", "emboss")


if __name__ == "__main__":
    unittest.main()
