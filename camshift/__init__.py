"""
CamShift tracking package initialization
"""
from .tracker import CamShiftTracker, CamShiftStrategy, TrackingSession, TrackState
from .selection import ROISelector, SelectionState, DegenerateSelection, roi_box_from_points
from .utils import open_frame_source, draw_rotated_box
from .features import (
    extract_hue_histogram,
    compute_backprojection,
    visualize_hue_and_backprojection
)

__all__ = [
    'CamShiftTracker',
    'CamShiftStrategy',
    'TrackingSession',
    'TrackState',
    'ROISelector',
    'SelectionState',
    'DegenerateSelection',
    'roi_box_from_points',
    'open_frame_source',
    'draw_rotated_box',
    'extract_hue_histogram',
    'compute_backprojection',
    'visualize_hue_and_backprojection'
]
