from __future__ import annotations

import unittest

import numpy as np

from line_art.sobel import sobel_gradients, sobel_magnitude
from models import PixelBuffer


class TestSobel(unittest.TestCase):
    def test_border_ring_is_zero(self) -> None:
        rng = np.random.default_rng(7)
        for shape in ((3, 3), (4, 9), (12, 5)):
            with self.subTest(shape=shape):
                plane = rng.integers(0, 256, size=shape, dtype=np.uint8)
                mag = sobel_magnitude(PixelBuffer.from_grid(plane)).grid[:, :, 0]
                self.assertTrue(np.all(mag[0, :] == 0))
                self.assertTrue(np.all(mag[-1, :] == 0))
                self.assertTrue(np.all(mag[:, 0] == 0))
                self.assertTrue(np.all(mag[:, -1] == 0))

    def test_tiny_buffers_are_all_border(self) -> None:
        for width, height in ((1, 1), (2, 5), (5, 2)):
            with self.subTest(size=(width, height)):
                plane = np.full((height, width), 200, dtype=np.uint8)
                plane[0, 0] = 0
                mag = sobel_magnitude(PixelBuffer.from_grid(plane))
                self.assertEqual(mag.size, (width, height))
                self.assertTrue(np.all(mag.samples == 0))

    def test_vertical_step(self) -> None:
        plane = np.zeros((5, 5), dtype=np.uint8)
        plane[:, 2:] = 255
        gx, gy = sobel_gradients(PixelBuffer.from_grid(plane))
        mag = sobel_magnitude(PixelBuffer.from_grid(plane)).grid[:, :, 0]

        self.assertTrue(np.all(gy.samples == 0))
        self.assertEqual(gx.grid[2, :, 0].tolist(), [0, 1020, 1020, 0, 0])
        self.assertEqual(mag[1:4, 1].tolist(), [1020.0] * 3)
        self.assertEqual(mag[1:4, 3].tolist(), [0.0] * 3)

    def test_diagonal_magnitude(self) -> None:
        plane = np.zeros((3, 3), dtype=np.uint8)
        plane[0, 2] = 10
        gx, gy = sobel_gradients(PixelBuffer.from_grid(plane))
        self.assertEqual(gx.grid[1, 1, 0], 10)
        self.assertEqual(gy.grid[1, 1, 0], -10)
        mag = sobel_magnitude(PixelBuffer.from_grid(plane))
        self.assertAlmostEqual(mag.grid[1, 1, 0], np.sqrt(200))

    def test_uses_channel_zero_of_rgba(self) -> None:
        grid = np.zeros((3, 3, 4), dtype=np.uint8)
        grid[:, 2, :3] = 100
        grid[:, :, 3] = 255
        mag = sobel_magnitude(PixelBuffer.from_grid(grid))
        self.assertEqual(mag.channels, 1)
        self.assertEqual(mag.grid[1, 1, 0], 400)


if __name__ == "__main__":
    unittest.main()
