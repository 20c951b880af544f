"""
Point-based ROI selection
The user clicks the four corners of the object; the box spans the
min-sum and max-sum points
"""
from enum import Enum

import cv2
import numpy as np

from .features import extract_hue_histogram

MAX_POINTS = 4
MARKER_COLOR = (0, 255, 0)


class SelectionState(Enum):
    IDLE = 'idle'
    COLLECTING = 'collecting'
    READY = 'ready'


class DegenerateSelection(ValueError):
    """The selected points enclose no area"""


def roi_box_from_points(points):
    """
    Derive the axis-aligned ROI box from the four clicked points.

    The point with the smallest x + y is the top-left corner and the one
    with the largest x + y is the bottom-right corner.

    Returns:
        (x, y, w, h)
    """
    if len(points) != MAX_POINTS:
        raise ValueError(f"Expected {MAX_POINTS} points, got {len(points)}")

    pts = np.asarray(points, dtype=int)
    s = pts.sum(axis=1)
    top_left = pts[np.argmin(s)]
    bottom_right = pts[np.argmax(s)]

    x1, x2 = sorted((int(top_left[0]), int(bottom_right[0])))
    y1, y2 = sorted((int(top_left[1]), int(bottom_right[1])))
    return (x1, y1, x2 - x1, y2 - y1)


class ROISelector:
    """Collects the ROI corner clicks while the feed is paused"""

    def __init__(self, on_change=None):
        self.state = SelectionState.IDLE
        self.points = []
        self.frozen = None   # untouched copy of the frame the ROI is cut from
        self.canvas = None   # frame the markers are drawn on
        self.on_change = on_change

    @property
    def collecting(self):
        return self.state is SelectionState.COLLECTING

    @property
    def ready(self):
        return self.state is SelectionState.READY

    def begin(self, frame):
        """Freeze the frame and start collecting a fresh set of points"""
        self.points = []
        self.frozen = frame.copy()
        self.canvas = frame
        self.state = SelectionState.COLLECTING

    def cancel(self):
        self.points = []
        self.frozen = None
        self.canvas = None
        self.state = SelectionState.IDLE

    def add_point(self, x, y):
        if not self.collecting or len(self.points) >= MAX_POINTS:
            return False

        self.points.append((int(x), int(y)))
        if len(self.points) == MAX_POINTS:
            self.state = SelectionState.READY
        return True

    def mouse_callback(self, event, x, y, flags, param):
        """cv2 mouse callback: left click records a corner and marks it"""
        if event != cv2.EVENT_LBUTTONDOWN:
            return
        if not self.add_point(x, y):
            return

        if self.canvas is not None:
            cv2.circle(self.canvas, (int(x), int(y)), 4, MARKER_COLOR, 2)
        if self.on_change is not None:
            self.on_change(self.canvas)

    def roi_box(self):
        return roi_box_from_points(self.points)

    def result(self, bins=16):
        """
        Histogram and box of the completed selection.

        The selector returns to IDLE whether or not the box is usable.

        Returns:
            (roi_hist, roi_box)
        """
        if not self.ready:
            raise RuntimeError(f"Selection is not complete ({len(self.points)}/{MAX_POINTS} points)")

        frozen = self.frozen
        try:
            x, y, w, h = self.roi_box()
            roi = frozen[y:y + h, x:x + w]
            if w <= 0 or h <= 0 or roi.size == 0:
                raise DegenerateSelection(f"Selected region {(x, y, w, h)} has no area")
            roi_hist = extract_hue_histogram(roi, bins=bins)
        finally:
            self.state = SelectionState.IDLE
            self.frozen = None
            self.canvas = None

        return roi_hist, (x, y, w, h)
