import cv2
import numpy as np

BLUE = (255, 0, 0)
RED = (0, 0, 255)


def square_frame(x, y, size=40, color=BLUE, shape=(240, 320)):
    """Black frame with one uniformly colored square at (x, y)"""
    frame = np.zeros(shape + (3,), dtype=np.uint8)
    frame[y:y + size, x:x + size] = color
    return frame


class FakeCapture:
    def __init__(self, frames):
        self.frames = list(frames)
        self.reads = 0
        self.released = False

    def read(self):
        self.reads += 1
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.released = True


class FakeDisplay:
    """
    Scripted stand-in for the cv2 window functions.
    Script items: a key character, ('click', x, y) delivered to the mouse callback,
    or 'close' to shut the window.
    Once the script runs out, no key is pressed.
    """

    def __init__(self, script=()):
        self.script = list(script)
        self.callback = None
        self.shown = []
        self.destroyed = False
        self.visible = True

    def named_window(self, name, *args):
        pass

    def set_mouse_callback(self, name, callback):
        self.callback = callback

    def imshow(self, name, image):
        self.shown.append(name)

    def wait_key(self, delay):
        if not self.script:
            return -1
        item = self.script.pop(0)
        if isinstance(item, tuple):
            _, x, y = item
            self.callback(cv2.EVENT_LBUTTONDOWN, x, y, 0, None)
            return -1
        if item == 'close':
            self.visible = False
            return -1
        return ord(item)

    def get_window_property(self, name, prop):
        return 1.0 if self.visible else 0.0

    def destroy_all_windows(self):
        self.destroyed = True

    def kwargs(self):
        return dict(imshow=self.imshow, wait_key=self.wait_key,
                    named_window=self.named_window,
                    set_mouse_callback=self.set_mouse_callback,
                    get_window_property=self.get_window_property,
                    destroy_all_windows=self.destroy_all_windows)
