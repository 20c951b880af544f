#!/usr/bin/env python3
"""Track a hand-picked region of a camera or video feed with CamShift.

Example:
  python track.py                 # camera 0
  python track.py path/to/video.mp4

Keys: i (select ROI: click its 4 corners), q (quit).
"""
import argparse

from camshift import CamShiftTracker


def single_char(value):
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"expected a single character, got {value!r}")
    return value


def build_parser():
    p = argparse.ArgumentParser(description='CamShift tracking of a region selected with 4 clicks')
    p.add_argument('video', nargs='?', default=None, help='Optional path to a video file (default: camera)')
    p.add_argument('--device', type=int, default=0, help='Camera index used when no video is given')
    p.add_argument('--bins', type=int, default=16, help='Number of hue histogram bins')
    p.add_argument('--max-iter', type=int, default=10, help='CamShift iteration cap')
    p.add_argument('--eps', type=float, default=1.0, help='CamShift centroid movement threshold (pixels)')
    p.add_argument('--window', default='frame', help='Display window name')
    p.add_argument('--select-key', type=single_char, default='i', help='Key that enters ROI selection')
    p.add_argument('--quit-key', type=single_char, default='q', help='Key that quits')
    p.add_argument('--show-process', action='store_true', help='Also show the hue channel and backprojection')
    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.bins < 1:
        parser.error('--bins must be positive')
    if args.max_iter < 1:
        parser.error('--max-iter must be at least 1')
    if args.eps < 0:
        parser.error('--eps must not be negative')

    tracker = CamShiftTracker(
        args.video,
        device=args.device,
        bins=args.bins,
        max_iter=args.max_iter,
        eps=args.eps,
        window_name=args.window,
        select_key=args.select_key,
        quit_key=args.quit_key,
        visualize_process=args.show_process
    )
    tracker.run()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
