import unittest

import numpy as np
from PIL import Image

from cropper.image_model import Bounds, PackedImage, PilImage, from_pil
from cropper.transform import crop_bottom

from helpers import gradient_image, gradient_pixels


class _OpaqueImage:
    """Image-like object with bounds but no sub-region support."""

    def __init__(self, width, height):
        self.bounds = Bounds(0, 0, width, height)

    def pixel(self, x, y):
        return (0, 0, 0, 255)


class TestCropBottom(unittest.TestCase):
    def assertSize(self, image, width, height):
        self.assertEqual((image.width, image.height), (width, height))

    def test_normal_crop(self):
        self.assertSize(crop_bottom(gradient_image(100, 200), 50), 100, 150)

    def test_small_crop(self):
        self.assertSize(crop_bottom(gradient_image(50, 50), 10), 50, 40)

    def test_zero_cut_returns_input(self):
        img = gradient_image(100, 200)
        self.assertIs(crop_bottom(img, 0), img)

    def test_negative_cut_returns_input(self):
        img = gradient_image(100, 200)
        self.assertIs(crop_bottom(img, -10), img)

    def test_cut_equal_to_height_returns_input(self):
        img = gradient_image(100, 200)
        result = crop_bottom(img, 200)
        self.assertIs(result, img)
        self.assertSize(result, 100, 200)

    def test_cut_greater_than_height_returns_input(self):
        img = gradient_image(100, 200)
        self.assertIs(crop_bottom(img, 300), img)

    def test_bounds_keep_top_left_and_right_edge(self):
        result = crop_bottom(gradient_image(100, 200), 50)
        self.assertEqual(result.bounds, Bounds(0, 0, 100, 150))

    def test_retained_pixels_match_source(self):
        img = gradient_image(30, 40)
        result = crop_bottom(img, 7)
        for y in range(result.height):
            for x in range(result.width):
                self.assertEqual(result.pixel(x, y), img.pixel(x, y))

    def test_cut_rows_are_gone(self):
        result = crop_bottom(gradient_image(10, 20), 5)
        with self.assertRaises(IndexError):
            result.pixel(0, 15)

    def test_packed_crop_is_a_view(self):
        img = gradient_image(100, 200)
        result = crop_bottom(img, 50)
        self.assertTrue(np.shares_memory(result.pixels, img.pixels))
        img.pixels[0, 0] = (1, 2, 3, 4)
        self.assertEqual(result.pixel(0, 0), (1, 2, 3, 4))

    def test_crop_of_offset_image(self):
        img = PackedImage(gradient_pixels(20, 30), origin=(5, 10))
        result = crop_bottom(img, 10)
        self.assertEqual(result.bounds, Bounds(5, 10, 25, 30))
        self.assertEqual(result.pixel(5, 10), img.pixel(5, 10))

    def test_pil_backing_is_copied(self):
        src = Image.fromarray(gradient_pixels(100, 200))
        img = PilImage(src)
        result = crop_bottom(img, 50)
        self.assertIsInstance(result, PilImage)
        self.assertSize(result, 100, 150)
        self.assertIsNot(result.image, src)
        self.assertEqual(result.pixel(99, 149), img.pixel(99, 149))

    def test_unsupported_backing_returns_original(self):
        img = _OpaqueImage(100, 200)
        with self.assertLogs('cropper.transform', level='WARNING') as logs:
            result = crop_bottom(img, 50)
        self.assertIs(result, img)
        self.assertIn('does not support sub-region extraction', logs.output[0])

    def test_object_without_bounds_returns_original(self):
        img = Image.new('RGB', (10, 20))
        with self.assertLogs('cropper.transform', level='WARNING'):
            result = crop_bottom(img, 5)
        self.assertIs(result, img)
        self.assertEqual(img.size, (10, 20))

    def test_grayscale_packed_crop(self):
        img = PackedImage(gradient_pixels(6, 8)[..., 1].copy())
        result = crop_bottom(img, 3)
        self.assertEqual(result.mode, 'L')
        self.assertEqual((result.width, result.height), (6, 5))
        self.assertEqual(result.pixel(2, 4), 4)

    def test_16_bit_crop_keeps_samples(self):
        samples = np.arange(20 * 30, dtype=np.uint16).reshape(30, 20) * 100
        img = from_pil(Image.fromarray(samples))
        result = crop_bottom(img, 10)
        self.assertEqual(result.mode, img.mode)
        self.assertEqual((result.width, result.height), (20, 20))
        self.assertEqual(result.pixel(19, 19), int(samples[19, 19]))


class TestImageModel(unittest.TestCase):
    def test_rejects_unpacked_buffer(self):
        with self.assertRaises(ValueError):
            PackedImage(np.zeros((4, 4, 2), dtype=np.uint8))

    def test_sub_image_outside_bounds(self):
        with self.assertRaises(ValueError):
            gradient_image(10, 10).sub_image(Bounds(0, 0, 10, 11))

    def test_from_pil_keeps_grayscale(self):
        img = from_pil(Image.new('L', (4, 3), 128))
        self.assertIsInstance(img, PackedImage)
        self.assertEqual(img.mode, 'L')
        self.assertEqual(img.pixel(0, 0), 128)

    def test_from_pil_keeps_rgb(self):
        img = from_pil(Image.new('RGB', (4, 3), (1, 2, 3)))
        self.assertEqual(img.mode, 'RGB')
        self.assertEqual(img.pixel(3, 2), (1, 2, 3))

    def test_from_pil_uses_pil_backing_for_palette_and_16_bit(self):
        for mode in ('P', 'I;16'):
            with self.subTest(mode=mode):
                img = from_pil(Image.new(mode, (4, 3)))
                self.assertIsInstance(img, PilImage)
                self.assertEqual(img.mode, mode)

    def test_from_pil_result_outlives_closed_source(self):
        src = Image.new('P', (4, 3), 7)
        img = from_pil(src)
        src.close()
        self.assertEqual(img.pixel(1, 1), 7)

    def test_to_pil_roundtrip(self):
        img = crop_bottom(gradient_image(8, 8), 3)
        pil = img.to_pil()
        self.assertEqual(pil.size, (8, 5))
        self.assertEqual(pil.mode, 'RGBA')


if __name__ == '__main__':
    unittest.main()
