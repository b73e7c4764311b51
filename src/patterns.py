import numpy as np

# --- Image parameters ---
WIDTH = 512
HEIGHT = 512
CHANNELS = 3 # RGB, one byte per channel
TILE_SIZE = 64 # 64x64 tiles -> 8x8 board on 512x512

RED = (255, 0, 0)
BLUE = (0, 0, 255)
GRADIENT_BLUE = 128

def allocate_image(width=WIDTH, height=HEIGHT, channels=CHANNELS):
    """
    Allocates a row-major (height, width, channels) uint8 pixel buffer.
    The contents are undefined until a generator fills it.
    Raises MemoryError if the buffer cannot be allocated.
    """
    return np.empty((height, width, channels), dtype=np.uint8)

def _check_buffer(img, width, height):
    if img.shape[:2] != (height, width) or img.ndim != 3 or img.shape[2] < 3:
        raise ValueError(f"Buffer of shape {img.shape} does not hold a {width}x{height} RGB image.")

def make_checkerboard(img, width, height, tile=TILE_SIZE):
    """
    Fills the buffer with a red/blue checkerboard.
    Args:
        img (np.ndarray): (height, width, 3) uint8 buffer, written in place.
        width (int): Image width in pixels.
        height (int): Image height in pixels.
        tile (int): Side of one square tile in pixels.
    Returns:
        np.ndarray: The same buffer.
    """
    _check_buffer(img, width, height)

    # Tile index per row / column; the board size follows from width // tile.
    tile_x = np.arange(width) // tile
    tile_y = np.arange(height) // tile
    tile_color = (tile_y[:, None] + tile_x[None, :]) % 2 # 0 or 1

    # Index 0 is red, so the tile holding (0,0) is always red
    img[:, :, 0] = np.where(tile_color == 0, RED[0], BLUE[0])
    img[:, :, 1] = np.where(tile_color == 0, RED[1], BLUE[1])
    img[:, :, 2] = np.where(tile_color == 0, RED[2], BLUE[2])
    return img

def _check_gradient_size(width, height):
    # The ramps divide by (width - 1) and (height - 1)
    if width < 2 or height < 2:
        raise ValueError(f"Gradient needs at least 2x2 pixels, got {width}x{height}.")

def make_gradient(img, width, height):
    """
    Fills the buffer with a linear gradient: red ramps left to right,
    green ramps top to bottom, blue is constant.

    The ramps use integer truncation, x*255 // (width-1), so the first
    column/row is exactly 0 and the last one exactly 255.
    """
    _check_gradient_size(width, height)
    _check_buffer(img, width, height)

    x = np.arange(width, dtype=np.int64)
    y = np.arange(height, dtype=np.int64)
    red = (x * 255) // (width - 1)   # left 0, right 255
    green = (y * 255) // (height - 1) # top 0, bottom 255

    img[:, :, 0] = red[None, :]
    img[:, :, 1] = green[:, None]
    img[:, :, 2] = GRADIENT_BLUE
    return img

def make_gradient_dither(img, width, height, rng):
    """
    Fills the buffer with the gradient of make_gradient, but rounds the
    exact red/green intensities stochastically instead of truncating.
    Args:
        img (np.ndarray): (height, width, 3) uint8 buffer, written in place.
        width (int): Image width in pixels.
        height (int): Image height in pixels.
        rng (np.random.Generator): Source of the uniform draws. Pass a seeded
                                   generator for reproducible output.
    Returns:
        np.ndarray: The same buffer.
    """
    _check_gradient_size(width, height)
    _check_buffer(img, width, height)

    r_exact = np.arange(width, dtype=np.float64) * 255.0 / (width - 1)
    g_exact = np.arange(height, dtype=np.float64) * 255.0 / (height - 1)
    r_floor = np.floor(r_exact)
    g_floor = np.floor(g_exact)
    r_frac = r_exact - r_floor
    g_frac = g_exact - g_floor

    # One draw per pixel per channel. A channel rounds up when its draw
    # falls below the fractional part; frac is 0 at 255 so no overflow.
    r_draw = rng.random((height, width))
    g_draw = rng.random((height, width))
    red = r_floor[None, :] + (r_draw < r_frac[None, :])
    green = g_floor[:, None] + (g_draw < g_frac[:, None])

    img[:, :, 0] = red.astype(np.uint8)
    img[:, :, 1] = green.astype(np.uint8)
    img[:, :, 2] = GRADIENT_BLUE
    return img

if __name__ == '__main__':
    # A small test case
    small = allocate_image(4, 4)
    make_checkerboard(small, 4, 4, tile=2)
    print("Checkerboard (red channel, tile=2):\n", small[:, :, 0])

    make_gradient(small, 4, 4)
    print("\nGradient red channel:\n", small[:, :, 0])
    print("Gradient green channel:\n", small[:, :, 1])
    # Expected red row: [0, 85, 170, 255]

    make_gradient_dither(small, 4, 4, np.random.default_rng(0))
    print("\nDithered gradient red channel (seed 0):\n", small[:, :, 0])
