"""
Generates checkerboard.png and gradient.png (512x512, RGB).
Falls back to writing into ./output/ if the current directory is not writable.

Exit status: 0 all images written, 1 out of memory,
2 checkerboard.png failed, 3 gradient.png failed,
64 bad command line.
"""
import argparse
import sys
import numpy as np

from patterns import (WIDTH, HEIGHT, CHANNELS, allocate_image,
                      make_checkerboard, make_gradient, make_gradient_dither)
from png_output import try_write_png

CHECKERBOARD_FILE = "checkerboard.png"
GRADIENT_FILE = "gradient.png"
DITHER_FILE = "gradient-dither.png"

EXIT_OK = 0
EXIT_OUT_OF_MEMORY = 1
EXIT_CHECKERBOARD_FAILED = 2
EXIT_GRADIENT_FAILED = 3
EXIT_USAGE = 64

class _ArgumentParser(argparse.ArgumentParser):
    """Exits with EXIT_USAGE on a bad command line; argparse would use 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")

def parse_args(argv=None):
    parser = _ArgumentParser(description="Write a checkerboard and a gradient test image as PNG.")
    parser.add_argument("--dither", action="store_true",
                        help=f"also write a stochastically dithered gradient to {DITHER_FILE}")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the dither random generator, only valid with --dither (default: fresh entropy)")
    args = parser.parse_args(argv)
    if args.seed is not None and not args.dither:
        parser.error("--seed requires --dither")
    return args

def write_images(img, dither=False, seed=None):
    """Fills `img` with each pattern in turn and writes it. Returns the exit status."""
    stride = WIDTH * CHANNELS
    # Origin is the upper-left; never flip on write.
    flip = False

    make_checkerboard(img, WIDTH, HEIGHT)
    if not try_write_png(CHECKERBOARD_FILE, WIDTH, HEIGHT, CHANNELS, img, stride, flip):
        print(f"Error: failed to write {CHECKERBOARD_FILE}", file=sys.stderr)
        return EXIT_CHECKERBOARD_FAILED

    make_gradient(img, WIDTH, HEIGHT)
    if not try_write_png(GRADIENT_FILE, WIDTH, HEIGHT, CHANNELS, img, stride, flip):
        print(f"Error: failed to write {GRADIENT_FILE}", file=sys.stderr)
        return EXIT_GRADIENT_FAILED

    if dither:
        make_gradient_dither(img, WIDTH, HEIGHT, np.random.default_rng(seed))
        if not try_write_png(DITHER_FILE, WIDTH, HEIGHT, CHANNELS, img, stride, flip):
            # Optional output, does not change the exit status
            print(f"Warning: failed to write {DITHER_FILE}", file=sys.stderr)

    return EXIT_OK

def main(argv=None):
    args = parse_args(argv)

    # One buffer, reused for every image
    try:
        img = allocate_image(WIDTH, HEIGHT, CHANNELS)
    except MemoryError:
        print("Out of memory", file=sys.stderr)
        return EXIT_OUT_OF_MEMORY

    try:
        return write_images(img, dither=args.dither, seed=args.seed)
    finally:
        del img

if __name__ == '__main__':
    sys.exit(main())
