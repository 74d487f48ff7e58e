"""
Geometry tests.

Eye/mouth aspect ratios and gaze deviation on synthetic landmark groups,
including the degenerate-input fallbacks.
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest

import numpy as np

from analyzers.geometry import eye_aspect_ratio, mouth_aspect_ratio, gaze_deviation
from detectors.detection_types import parse_point_group
from synthetic_faces import make_eye, make_mouth, make_nose, LEFT_EYE_CENTER, RIGHT_EYE_CENTER


class TestEyeAspectRatio(unittest.TestCase):

    def test_open_and_closed_eye(self):
        open_eye = parse_point_group(make_eye(LEFT_EYE_CENTER, 1.2))
        closed_eye = parse_point_group(make_eye(LEFT_EYE_CENTER, 0.3))
        self.assertAlmostEqual(eye_aspect_ratio(open_eye), 0.4)
        self.assertAlmostEqual(eye_aspect_ratio(closed_eye), 0.1)

    def test_too_few_points_is_fully_open(self):
        eye = np.array([[0, 0], [1, 1], [2, 2], [3, 3], [4, 4]], dtype=float)
        self.assertEqual(eye_aspect_ratio(eye), 1.0)

    def test_missing_group_is_fully_open(self):
        self.assertEqual(eye_aspect_ratio(None), 1.0)
        self.assertEqual(eye_aspect_ratio(np.zeros((0, 2))), 1.0)

    def test_zero_width_does_not_divide_by_zero(self):
        eye = np.array([[5, 5], [5, 4], [5, 4], [5, 5], [5, 6], [5, 6]], dtype=float)
        self.assertEqual(eye_aspect_ratio(eye), 1.0)


class TestMouthAspectRatio(unittest.TestCase):

    def test_ratio_matches_outline(self):
        self.assertAlmostEqual(mouth_aspect_ratio(parse_point_group(make_mouth(0.3))), 0.3)
        self.assertAlmostEqual(mouth_aspect_ratio(parse_point_group(make_mouth(0.8))), 0.8)

    def test_too_few_points_is_closed(self):
        mouth = parse_point_group(make_mouth(0.8))[:11]
        self.assertEqual(mouth_aspect_ratio(mouth), 0.0)

    def test_zero_width_is_closed(self):
        mouth = np.zeros((20, 2))
        self.assertEqual(mouth_aspect_ratio(mouth), 0.0)


class TestGazeDeviation(unittest.TestCase):

    def setUp(self):
        self.left = parse_point_group(make_eye(LEFT_EYE_CENTER, 1.2))
        self.right = parse_point_group(make_eye(RIGHT_EYE_CENTER, 1.2))

    def test_centered_nose(self):
        nose = parse_point_group(make_nose(0.0))
        self.assertAlmostEqual(gaze_deviation(self.left, self.right, nose), 0.0)

    def test_offset_is_normalized_by_eye_distance(self):
        nose = parse_point_group(make_nose(0.4))
        self.assertAlmostEqual(gaze_deviation(self.left, self.right, nose), 0.4)
        nose = parse_point_group(make_nose(-0.25))
        self.assertAlmostEqual(gaze_deviation(self.left, self.right, nose), 0.25)

    def test_missing_groups_fail(self):
        nose = parse_point_group(make_nose(0.0))
        self.assertIsNone(gaze_deviation(None, self.right, nose))
        self.assertIsNone(gaze_deviation(self.left, np.zeros((0, 2)), nose))
        self.assertIsNone(gaze_deviation(self.left, self.right, None))

    def test_short_nose_fails(self):
        nose = parse_point_group(make_nose(0.0))[:3]
        self.assertIsNone(gaze_deviation(self.left, self.right, nose))

    def test_zero_eye_distance_fails(self):
        nose = parse_point_group(make_nose(0.0))
        self.assertIsNone(gaze_deviation(self.left, self.left, nose))

    def test_non_finite_nose_fails(self):
        nose = np.array(parse_point_group(make_nose(0.0)))
        nose[3, 0] = np.nan
        self.assertIsNone(gaze_deviation(self.left, self.right, nose))


if __name__ == "__main__":
    unittest.main()
