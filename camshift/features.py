"""
Feature extraction for tracking
Hue histograms of the selected region and their backprojection onto frames
"""
import cv2
import numpy as np

HUE_RANGE = [0, 180]


def extract_hue_histogram(roi, bins=16, mask=None):
    """
    Hue histogram of a BGR region, normalized to [0, 255]

    Args:
        roi: BGR image region (H, W, 3)
        bins: number of hue bins
        mask: optional 8-bit mask restricting the pixels that vote

    Returns:
        hist: float32 array of shape (bins, 1)
    """
    if roi is None or roi.size == 0:
        raise ValueError("Cannot compute a histogram of an empty region")

    hsv = cv2.cvtColor(roi, cv2.COLOR_BGR2HSV)
    hist = cv2.calcHist([hsv], [0], mask, [bins], HUE_RANGE)

    # Normalize to [0, 255]
    cv2.normalize(hist, hist, 0, 255, cv2.NORM_MINMAX)

    return hist


def compute_backprojection(frame, hist):
    hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
    return cv2.calcBackProject([hsv], [0], hist, HUE_RANGE, 1)


def visualize_hue_and_backprojection(frame, hist, rotated_box=None, imshow=cv2.imshow):
    """
    Show the Hue channel and the backprojection side windows

    Args:
        rotated_box: if provided, outline of the tracked object drawn on both views
        imshow: display function, cv2.imshow unless a caller swaps it out
    """
    hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
    hue_channel = hsv[:, :, 0]

    backproj = cv2.calcBackProject([hsv], [0], hist, HUE_RANGE, 1)

    # convert to drawable format
    hue_img = cv2.cvtColor(hue_channel, cv2.COLOR_GRAY2BGR)
    backproj_img = cv2.cvtColor(backproj, cv2.COLOR_GRAY2BGR)

    if rotated_box is not None:
        pts = np.int32(cv2.boxPoints(rotated_box))
        cv2.polylines(hue_img, [pts], True, (0, 255, 0), 2)
        cv2.polylines(backproj_img, [pts], True, (0, 255, 0), 2)

    imshow('Hue Channel', hue_img)
    imshow('Back Projection', backproj_img)

    return hue_img, backproj_img
