import os
import sys
import numpy as np
from PIL import Image

FALLBACK_DIR = "output"

def _pixel_rows(data, width, height, channels, stride):
    """
    Returns the pixel data as a (height, width, channels) uint8 array,
    reading `height` rows that start `stride` bytes apart.
    Raises ValueError if the buffer cannot hold such an image.
    """
    row_bytes = width * channels
    if stride < row_bytes:
        raise ValueError(f"Row stride {stride} is shorter than a row ({row_bytes} bytes).")

    if isinstance(data, np.ndarray):
        flat = np.ascontiguousarray(data, dtype=np.uint8).reshape(-1)
    else:
        flat = np.frombuffer(data, dtype=np.uint8)

    if flat.size < stride * height:
        raise ValueError(f"Buffer holds {flat.size} bytes, need {stride * height} "
                         f"for {width}x{height}x{channels} with stride {stride}.")

    rows = flat[:stride * height].reshape(height, stride)[:, :row_bytes]
    return rows.reshape(height, width, channels)

def write_png(path, width, height, channels, data, stride, flip_vertically=False):
    """
    Encodes a pixel buffer as PNG and writes it to `path`.
    Args:
        path (str): Destination file.
        width (int), height (int): Image size in pixels.
        channels (int): 1 (grey), 3 (RGB) or 4 (RGBA).
        data (np.ndarray or bytes-like): Row-major pixels, first row on top.
        stride (int): Bytes between the starts of consecutive rows.
        flip_vertically (bool): Write the last row first.
    Returns:
        bool: True if the file was written, False on any I/O or encoder error,
              including an unusable path.
    """
    if channels not in (1, 3, 4):
        raise ValueError(f"Unsupported number of channels: {channels}")

    pixels = _pixel_rows(data, width, height, channels, stride)
    if flip_vertically:
        pixels = np.flipud(pixels)
    if channels == 1:
        pixels = pixels[:, :, 0]

    try:
        Image.fromarray(np.ascontiguousarray(pixels)).save(path, format='PNG')
    except (OSError, ValueError):
        # ValueError: path Pillow cannot open, e.g. an embedded NUL byte
        return False
    return True

def try_write_png(fname, width, height, channels, data, stride, flip_vertically=False):
    """
    Writes `fname` in the current directory, falling back once to
    FALLBACK_DIR/<fname> if that fails. Returns True if either write succeeded.
    """
    # Try current directory first
    if write_png(fname, width, height, channels, data, stride, flip_vertically):
        return True

    # Best effort; the retry below decides success
    try:
        os.makedirs(FALLBACK_DIR, exist_ok=True)
    except OSError:
        pass

    alt = f"{FALLBACK_DIR}/{fname}"
    if write_png(alt, width, height, channels, data, stride, flip_vertically):
        print(f"Note: wrote '{alt}' instead (current dir not writable?)", file=sys.stderr)
        return True
    return False
