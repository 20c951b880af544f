"""
Utility functions for tracking
"""
import os

import cv2
import numpy as np


def open_frame_source(source=None, device=0):
    """
    Open a video file, or the camera `device` when no path is given.
    Numeric strings are treated as camera indices.
    """
    if source is None or source == '':
        return cv2.VideoCapture(device)
    if isinstance(source, int) or str(source).isdigit():
        return cv2.VideoCapture(int(source))
    if not os.path.exists(source):
        print(f"Warning: video file not found: {source}")
    return cv2.VideoCapture(str(source))


def draw_rotated_box(frame, rotated_box, color=(0, 255, 0), thickness=2):
    """
    Draw the outline of a CamShift rotated rectangle onto the frame in place
    Note: keys are handled by the main loop, not here
    """
    pts = np.int32(cv2.boxPoints(rotated_box))
    cv2.polylines(frame, [pts], True, color, thickness)
    return frame


def key_code(key):
    """'q' -> ord('q'); ints pass through"""
    if isinstance(key, str):
        if len(key) != 1:
            raise ValueError(f"Key binding must be a single character: {key!r}")
        return ord(key)
    return int(key)
