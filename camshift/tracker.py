import cv2
import numpy as np
from dataclasses import dataclass
import time

from . import features
from .selection import ROISelector, DegenerateSelection
from .utils import open_frame_source, draw_rotated_box, key_code


DEFAULT_TERM_CRIT = (cv2.TERM_CRITERIA_EPS | cv2.TERM_CRITERIA_COUNT, 10, 1)


@dataclass
class TrackState:
    track_window: tuple | None = None          # (x, y, w, h), CamShift seed
    model: np.ndarray | None = None            # hue histogram
    rotated_box: tuple | None = None           # ((cx, cy), (w, h), angle)

    @property
    def tracking(self):
        return self.track_window is not None and self.model is not None


class TrackerStrategy:
    def init(self, state: TrackState, frame, roi): ...
    def update(self, state: TrackState, frame) -> tuple: ...  # return new rotated box


class CamShiftStrategy(TrackerStrategy):
    def __init__(self, *, bins=16, term_crit=DEFAULT_TERM_CRIT,
                 extract_hue_histogram=None, compute_backprojection=None):
        self.bins = bins
        self.term_crit = term_crit
        self.extract_hue_histogram = extract_hue_histogram or features.extract_hue_histogram
        self.compute_backprojection = compute_backprojection or features.compute_backprojection

    def init(self, state: TrackState, frame, roi):
        x, y, w, h = roi
        roi_region = frame[y:y+h, x:x+w]
        hist = self.extract_hue_histogram(roi_region, bins=self.bins)
        self.set_model(state, hist, roi)

    def set_model(self, state: TrackState, hist, roi):
        # model and window always change together
        state.model, state.track_window = hist, tuple(int(v) for v in roi)
        state.rotated_box = None

    def update(self, state: TrackState, frame):
        # Every frame searches from the selected box; only a new selection moves it
        dst = self.compute_backprojection(frame, state.model)
        rotated_box, _ = cv2.CamShift(dst, state.track_window, self.term_crit)
        state.rotated_box = rotated_box
        return rotated_box


class TrackingSession:
    """Per-run state: the current frame, the ROI selector and the tracking state"""

    def __init__(self, strategy, bins=16, selector=None):
        self.frame = None
        self.strategy = strategy
        self.bins = bins
        self.selector = selector if selector is not None else ROISelector()
        self.state = TrackState()

    @property
    def is_tracking(self):
        return self.state.tracking

    def begin_selection(self):
        self.selector.begin(self.frame)

    def apply_selection(self):
        roi_hist, roi_box = self.selector.result(bins=self.bins)
        self.strategy.set_model(self.state, roi_hist, roi_box)
        return roi_box

    def track(self):
        return self.strategy.update(self.state, self.frame)


class CamShiftTracker:
    __slots__ = ('source', 'device', 'capture', 'session', 'window_name',
                 'select_key', 'quit_key', 'selection_wait', 'visualize_process',
                 'imshow', 'wait_key', 'named_window', 'set_mouse_callback',
                 'destroy_all_windows', 'get_window_property',
                 'visualize_hue_and_backprojection')

    def __init__(self, source=None, **kwargs):
        self.source = source
        self.device = kwargs.get('device', 0)
        self.capture = kwargs.get('capture', None)

        from .features import extract_hue_histogram, compute_backprojection, visualize_hue_and_backprojection

        bins = kwargs.get('bins', 16)
        strategy = CamShiftStrategy(
            bins=bins,
            term_crit=(cv2.TERM_CRITERIA_EPS | cv2.TERM_CRITERIA_COUNT,
                       kwargs.get('max_iter', 10), kwargs.get('eps', 1)),
            extract_hue_histogram=extract_hue_histogram,
            compute_backprojection=compute_backprojection
        )
        self.session = TrackingSession(strategy, bins=bins,
                                       selector=ROISelector(on_change=self._show))
        self.visualize_hue_and_backprojection = visualize_hue_and_backprojection

        self.window_name = kwargs.get('window_name', 'frame')
        self.select_key = key_code(kwargs.get('select_key', 'i'))
        self.quit_key = key_code(kwargs.get('quit_key', 'q'))
        self.selection_wait = kwargs.get('selection_wait', 30)
        self.visualize_process = kwargs.get('visualize_process', False)

        # display backend, swapped out by tests
        self.imshow = kwargs.get('imshow', cv2.imshow)
        self.wait_key = kwargs.get('wait_key', cv2.waitKey)
        self.named_window = kwargs.get('named_window', cv2.namedWindow)
        self.set_mouse_callback = kwargs.get('set_mouse_callback', cv2.setMouseCallback)
        self.destroy_all_windows = kwargs.get('destroy_all_windows', cv2.destroyAllWindows)
        self.get_window_property = kwargs.get('get_window_property', cv2.getWindowProperty)

    def _show(self, frame=None):
        self.imshow(self.window_name, self.session.frame if frame is None else frame)

    def _poll_key(self, delay):
        return self.wait_key(delay) & 0xFF

    def _window_closed(self):
        try:
            return self.get_window_property(self.window_name, cv2.WND_PROP_VISIBLE) < 1
        except cv2.error:
            return False  # window might not be visible yet

    def select_roi(self):
        """
        Pause on the current frame until four corners are clicked.

        Returns:
            False if the user quit or closed the window during the selection,
            True otherwise
        """
        session = self.session
        session.begin_selection()
        print("Click the 4 corners of the object, "
              f"'{chr(self.quit_key)}' to quit")

        while session.selector.collecting:
            self._show()
            key = self._poll_key(self.selection_wait)
            if key == self.quit_key or self._window_closed():
                session.selector.cancel()
                return False

        try:
            roi_box = session.apply_selection()
        except DegenerateSelection as e:
            print(f"Ignoring selection: {e}")
            return True

        print(f"Tracking ROI (x, y, w, h) = {roi_box}")
        return True

    def run(self):
        """Main loop. Returns the number of frames processed."""
        capture = self.capture
        if capture is None:
            capture = open_frame_source(self.source, self.device)
        session = self.session

        self.named_window(self.window_name)
        self.set_mouse_callback(self.window_name, session.selector.mouse_callback)
        print(f"Press '{chr(self.select_key)}' to select the ROI, "
              f"'{chr(self.quit_key)}' to quit")

        frame_count = 0
        start_time = time.time()
        try:
            while True:
                ret, frame = capture.read()
                if not ret or frame is None:
                    print("End of video or cannot read frame")
                    break
                session.frame = frame
                frame_count += 1

                if session.is_tracking:
                    rotated_box = session.track()
                    if self.visualize_process:
                        self.visualize_hue_and_backprojection(
                            frame, session.state.model, rotated_box, imshow=self.imshow)
                    draw_rotated_box(frame, rotated_box)

                self._show()
                key = self._poll_key(1)

                if key == self.select_key:
                    if not self.select_roi():
                        print("\nTracking stopped by user")
                        break
                elif key == self.quit_key:
                    print("\nTracking stopped by user")
                    break
        finally:
            capture.release()
            self.destroy_all_windows()

        total_time = time.time() - start_time
        fps = frame_count / total_time if total_time > 0 else 0.0
        print(f"\nTracking completed. Total frames: {frame_count} ({fps:.1f} FPS)")
        return frame_count
