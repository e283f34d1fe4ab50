import pytest
from PIL import Image

from image_ascii_art.loader import PixelGrid


def make_grid(rows):
    """Build a PixelGrid from rows of (r, g, b) tuples."""
    h = len(rows)
    w = len(rows[0])
    img = Image.new("RGB", (w, h))
    px = img.load()
    for y, row in enumerate(rows):
        for x, rgb in enumerate(row):
            px[x, y] = rgb
    return PixelGrid.from_image(img)


@pytest.fixture
def png_path(tmp_path):
    """A 200x100 horizontal gradient saved as PNG."""
    img = Image.new("RGB", (200, 100))
    px = img.load()
    for y in range(100):
        for x in range(200):
            v = int(x * 255 / 199)
            px[x, y] = (v, v, v)
    path = tmp_path / "gradient.png"
    img.save(path)
    return path
