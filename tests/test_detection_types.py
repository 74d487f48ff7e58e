"""
Detector boundary tests.

Parsing and validation of raw detector output.
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest

from detectors.detection_types import (
    BoundingBox, DetectedFace, parse_detections, parse_expressions, parse_point_group
)
from synthetic_faces import make_detection, make_landmarks


class TestParseExpressions(unittest.TestCase):

    def test_fills_missing_channels_in_order(self):
        expressions = parse_expressions({"happy": 0.7})
        self.assertEqual(list(expressions), [
            "neutral", "happy", "sad", "angry", "fearful", "disgusted", "surprised"
        ])
        self.assertEqual(expressions["happy"], 0.7)
        self.assertEqual(expressions["sad"], 0.0)

    def test_unknown_channel_rejected(self):
        with self.assertRaises(ValueError):
            parse_expressions({"contempt": 0.2})

    def test_non_numeric_rejected(self):
        with self.assertRaises(ValueError):
            parse_expressions({"happy": "very"})
        with self.assertRaises(ValueError):
            parse_expressions({"happy": float("nan")})


class TestParsePoints(unittest.TestCase):

    def test_accepts_mappings_and_pairs(self):
        group = parse_point_group([{"x": 1, "y": 2}, (3, 4)])
        self.assertEqual(group.shape, (2, 2))
        self.assertEqual(group[1].tolist(), [3.0, 4.0])

    def test_groups_are_read_only(self):
        group = parse_point_group([(1, 2)])
        with self.assertRaises(ValueError):
            group[0, 0] = 5.0

    def test_non_finite_coordinates_rejected(self):
        with self.assertRaises(ValueError):
            parse_point_group([{"x": float("nan"), "y": 1.0}])
        with self.assertRaises(ValueError):
            parse_point_group([(1.0, float("inf"))])

    def test_malformed_point(self):
        with self.assertRaises(ValueError):
            parse_point_group([{"x": 1}])
        with self.assertRaises(ValueError):
            parse_point_group([(1, 2, 3)])


class TestParseDetections(unittest.TestCase):

    def test_empty_frame(self):
        self.assertEqual(parse_detections([]), [])
        self.assertEqual(parse_detections(None), [])

    def test_full_detection(self):
        faces = parse_detections([make_detection({"happy": 0.9}, make_landmarks())])
        face = faces[0]
        self.assertIsInstance(face, DetectedFace)
        self.assertEqual(face.box, BoundingBox(10.0, 20.0, 100.0, 120.0))
        self.assertEqual(face.landmarks.left_eye.shape, (6, 2))
        self.assertEqual(face.landmarks.mouth.shape, (20, 2))
        self.assertEqual(face.landmarks.jaw.shape, (17, 2))
        self.assertEqual(face.landmarks.left_eyebrow.shape, (0, 2))

    def test_top_level_box_and_snake_case_groups(self):
        raw = {
            "box": {"x": 1, "y": 2, "width": 3, "height": 4},
            "expressions": {"sad": 0.5},
            "landmarks": {"left_eye": [(0, 0)] * 6}
        }
        face = parse_detections([raw])[0]
        self.assertEqual(face.box.width, 3.0)
        self.assertEqual(face.landmarks.left_eye.shape, (6, 2))
        self.assertEqual(face.landmarks.right_eye.shape, (0, 2))

    def test_parsed_faces_pass_through(self):
        face = parse_detections([make_detection({"happy": 0.9})])[0]
        self.assertIs(parse_detections([face])[0], face)

    def test_attribute_style_box(self):
        class Box:
            x, y, width, height = 5, 6, 70, 80

        raw = {"detection": {"box": Box()}, "expressions": {"happy": 0.9}}
        face = parse_detections([raw])[0]
        self.assertEqual(face.box, BoundingBox(5.0, 6.0, 70.0, 80.0))

    def test_non_finite_box_rejected(self):
        with self.assertRaises(ValueError):
            parse_detections([{"expressions": {}, "box": {"x": float("inf")}}])

    def test_rejects_non_mapping(self):
        with self.assertRaises(ValueError):
            parse_detections(["face"])
        with self.assertRaises(ValueError):
            parse_detections([{"expressions": {}, "box": "wide"}])


if __name__ == "__main__":
    unittest.main()
