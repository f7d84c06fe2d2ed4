"""Placeholder pixel data.

Generated images carry no clinical content: a black frame with a white
label (normally the SOP Instance UID) so a viewer shows which file is open.
"""

from __future__ import annotations

import numpy as np
from pydicom.dataset import Dataset

GLYPH_WIDTH = 5
GLYPH_HEIGHT = 7
GLYPH_SPACING = 1

# 5x7 bitmaps for the characters that occur in UIDs
GLYPHS: dict[str, tuple[str, ...]] = {
    "0": ("01110", "10001", "10011", "10101", "11001", "10001", "01110"),
    "1": ("00100", "01100", "00100", "00100", "00100", "00100", "01110"),
    "2": ("01110", "10001", "00001", "00010", "00100", "01000", "11111"),
    "3": ("11110", "00001", "00001", "01110", "00001", "00001", "11110"),
    "4": ("00010", "00110", "01010", "10010", "11111", "00010", "00010"),
    "5": ("11111", "10000", "11110", "00001", "00001", "10001", "01110"),
    "6": ("00110", "01000", "10000", "11110", "10001", "10001", "01110"),
    "7": ("11111", "00001", "00010", "00100", "01000", "01000", "01000"),
    "8": ("01110", "10001", "10001", "01110", "10001", "10001", "01110"),
    "9": ("01110", "10001", "10001", "01111", "00001", "00010", "01100"),
    ".": ("00000", "00000", "00000", "00000", "00000", "01100", "01100"),
}

_GLYPH_ARRAYS = {
    char: np.array([[int(bit) for bit in row] for row in rows], dtype=np.uint8)
    for char, rows in GLYPHS.items()
}


class PixelDrawer:
    """Renders placeholder monochrome pixel arrays."""

    foreground = 255

    def render(
        self, dataset: Dataset | None, width: int, height: int, label: str
    ) -> np.ndarray:
        """Draw ``label`` in white, centred on a black canvas.

        Args:
            dataset: Image the pixels belong to (unused by this drawer)
            width: Canvas width in pixels
            height: Canvas height in pixels
            label: Text to draw; characters without a glyph are left blank

        Returns:
            uint8 array of shape (height, width)

        """
        canvas = np.zeros((height, width), dtype=np.uint8)
        if not label:
            return canvas

        advance = GLYPH_WIDTH + GLYPH_SPACING
        text_width = len(label) * advance - GLYPH_SPACING
        scale = min(width // text_width, height // GLYPH_HEIGHT)
        if scale < 1:
            return canvas

        top = (height - GLYPH_HEIGHT * scale) // 2
        left = (width - text_width * scale) // 2
        for i, char in enumerate(label):
            glyph = _GLYPH_ARRAYS.get(char)
            if glyph is None:
                continue
            block = np.kron(glyph, np.ones((scale, scale), dtype=np.uint8))
            x = left + i * advance * scale
            region = canvas[top : top + block.shape[0], x : x + block.shape[1]]
            region[block == 1] = self.foreground

        return canvas
