import unittest

import cv2
import numpy as np
from numpy.testing import assert_array_equal

from camshift.features import extract_hue_histogram, compute_backprojection, visualize_hue_and_backprojection
from helpers import BLUE, RED, square_frame


class HueHistogramTestCase(unittest.TestCase):
    def test_shape_and_range(self):
        roi = np.random.RandomState(0).randint(0, 256, (30, 40, 3)).astype(np.uint8)
        hist = extract_hue_histogram(roi)
        self.assertEqual(hist.shape, (16, 1))
        self.assertGreaterEqual(hist.min(), 0)
        self.assertLessEqual(hist.max(), 255)
        self.assertAlmostEqual(float(hist.max()), 255.0, places=3)

    def test_uniform_region_has_one_dominant_bin(self):
        roi = np.full((20, 20, 3), BLUE, dtype=np.uint8)
        hist = extract_hue_histogram(roi).ravel()
        self.assertEqual(np.count_nonzero(hist), 1)
        # hue of pure blue is 120 -> bin 120 // (180 / 16)
        self.assertEqual(int(np.argmax(hist)), 10)
        self.assertAlmostEqual(float(hist[10]), 255.0, places=3)

    def test_bins_is_configurable(self):
        roi = np.full((10, 10, 3), RED, dtype=np.uint8)
        hist = extract_hue_histogram(roi, bins=32)
        self.assertEqual(hist.shape, (32, 1))
        self.assertEqual(int(np.argmax(hist)), 0)

    def test_mask_limits_voting_pixels(self):
        roi = np.zeros((20, 40, 3), dtype=np.uint8)
        roi[:, :20] = BLUE
        roi[:, 20:] = RED
        mask = np.zeros((20, 40), dtype=np.uint8)
        mask[:, :20] = 255

        hist = extract_hue_histogram(roi, mask=mask).ravel()
        self.assertEqual(np.count_nonzero(hist), 1)
        self.assertEqual(int(np.argmax(hist)), 10)

    def test_empty_region(self):
        with self.assertRaises(ValueError):
            extract_hue_histogram(np.zeros((0, 10, 3), dtype=np.uint8))


class BackprojectionTestCase(unittest.TestCase):
    def test_matches_model_color(self):
        frame = np.zeros((20, 40, 3), dtype=np.uint8)
        frame[:, :20] = BLUE
        frame[:, 20:] = RED
        hist = extract_hue_histogram(frame[:, :20])

        dst = compute_backprojection(frame, hist)
        self.assertEqual(dst.shape, (20, 40))
        self.assertEqual(dst.dtype, np.uint8)
        assert_array_equal(dst[:, :20], 255)
        assert_array_equal(dst[:, 20:], 0)

    def test_visualization_shows_both_views(self):
        frame = square_frame(10, 10, size=20)
        hist = extract_hue_histogram(frame[10:30, 10:30])
        shown = []
        rotated_box = ((20.0, 20.0), (20.0, 20.0), 0.0)

        hue_img, backproj_img = visualize_hue_and_backprojection(
            frame, hist, rotated_box, imshow=lambda name, img: shown.append(name))

        self.assertEqual(shown, ['Hue Channel', 'Back Projection'])
        self.assertEqual(hue_img.shape, frame.shape)
        self.assertEqual(backproj_img.shape, frame.shape)
        # outline pixels are green on the backprojection view
        self.assertTrue(np.any(np.all(backproj_img == (0, 255, 0), axis=2)))


if __name__ == '__main__':
    unittest.main()
