from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import numpy as np
from PIL import Image

from line_art.processor import ColoringPageProcessor
from line_art.utils import buffer_to_image, image_to_buffer, scale_image_to_width
from models import PixelBuffer, ProcessingParameters


def write_step_png(path: Path, width: int = 40, height: int = 30) -> None:
    grid = np.full((height, width, 3), 255, dtype=np.uint8)
    grid[:, : width // 2] = 0
    Image.fromarray(grid).save(path)


class TestImageConversion(unittest.TestCase):
    def test_rgb_image_becomes_opaque_rgba_buffer(self) -> None:
        image = Image.new("RGB", (4, 3), (10, 20, 30))
        buffer = image_to_buffer(image)
        self.assertEqual((buffer.width, buffer.height, buffer.channels), (4, 3, 4))
        self.assertEqual(buffer.grid[2, 3].tolist(), [10, 20, 30, 255])

    def test_buffer_to_image(self) -> None:
        buffer = PixelBuffer.blank(5, 2, fill=200)
        image = buffer_to_image(buffer)
        self.assertEqual(image.mode, "RGBA")
        self.assertEqual(image.size, (5, 2))
        self.assertEqual(image.getpixel((4, 1)), (200, 200, 200, 200))

    def test_buffer_to_image_rejects_single_channel(self) -> None:
        with self.assertRaises(ValueError):
            buffer_to_image(PixelBuffer.blank(2, 2, channels=1))

    def test_scale_caps_width_and_keeps_aspect(self) -> None:
        scaled, scale = scale_image_to_width(Image.new("RGB", (2200, 400)), 1100)
        self.assertEqual(scaled.size, (1100, 200))
        self.assertAlmostEqual(scale, 0.5)

    def test_scale_never_upscales(self) -> None:
        image = Image.new("RGB", (300, 200))
        scaled, scale = scale_image_to_width(image, 1100)
        self.assertIs(scaled, image)
        self.assertEqual(scale, 1.0)

    def test_scale_rounds_halves_up(self) -> None:
        scaled, _ = scale_image_to_width(Image.new("RGB", (2200, 5)), 1100)
        self.assertEqual(scaled.size, (1100, 3))
        scaled, _ = scale_image_to_width(Image.new("RGB", (2200, 7)), 1100)
        self.assertEqual(scaled.size, (1100, 4))

    def test_scale_keeps_at_least_one_pixel(self) -> None:
        scaled, _ = scale_image_to_width(Image.new("RGB", (5000, 2)), 100)
        self.assertEqual(scaled.size, (100, 1))


class TestColoringPageProcessor(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_process_file(self) -> None:
        src = self.dir / "photo.png"
        write_step_png(src)
        processor = ColoringPageProcessor(ProcessingParameters(smooth=0, threshold=90))

        page = processor.process(src)

        self.assertEqual((page.original_width, page.original_height), (40, 30))
        self.assertEqual(page.buffer.size, (40, 30))
        # Step at x=20 is detected on columns 19 and 20, interior rows only
        self.assertEqual(page.edge_pixel_count, 2 * 28)
        self.assertTrue(np.all(page.buffer.grid[1:-1, 19:21, 0] == 0))

    def test_process_scales_wide_images(self) -> None:
        src = self.dir / "wide.png"
        write_step_png(src, width=80, height=20)
        processor = ColoringPageProcessor(max_width=40)
        page = processor.process(src)
        self.assertEqual(page.buffer.size, (40, 10))
        self.assertEqual((page.original_width, page.original_height), (80, 20))

    def test_parameters_are_clamped_on_construction(self) -> None:
        processor = ColoringPageProcessor(ProcessingParameters(smooth=12, threshold=5))
        self.assertEqual(processor.parameters, ProcessingParameters(smooth=6, threshold=30.0))

    def test_load_missing_file(self) -> None:
        with self.assertRaises(ValueError):
            ColoringPageProcessor().load_image(self.dir / "missing.png")

    def test_load_oversized_image(self) -> None:
        path = self.dir / "huge.png"
        Image.new("RGB", (100, 100)).save(path)
        with patch.object(Image, "MAX_IMAGE_PIXELS", 1000):
            with self.assertRaises(ValueError):
                ColoringPageProcessor().load_image(path)

    def test_load_non_image(self) -> None:
        path = self.dir / "notes.txt"
        path.write_text("not an image")
        with self.assertRaises(ValueError):
            ColoringPageProcessor().load_image(path)

    def test_save_png_round_trip(self) -> None:
        src = self.dir / "photo.png"
        write_step_png(src)
        processor = ColoringPageProcessor(ProcessingParameters(smooth=0, invert=True))
        page = processor.process(src)

        out = processor.save_png(page.buffer, self.dir / "page.png")

        with Image.open(out) as saved:
            self.assertEqual(saved.format, "PNG")
            reloaded = image_to_buffer(saved)
        self.assertEqual(reloaded, page.buffer)


if __name__ == "__main__":
    unittest.main()
