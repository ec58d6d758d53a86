"""Terminal output for rendered frames.

Brightness values are bucketed onto a fixed ramp of twelve glyphs. Values
above the top threshold all saturate to '#', and anything at or below 10
is blank. Frames are not clamped before they get here, so the ramp is the
only place saturation happens.

Example:
    >>> import numpy as np
    >>> from termtrace.preview.terminal import frame_to_text
    >>> frame_to_text(np.array([[0.0, 60.0, 255.0]], dtype=np.float32))
    ' ^#\\n'
"""

from __future__ import annotations

import sys
from typing import TextIO

import numpy as np
import numpy.typing as npt

# Glyphs from darkest to brightest
GLYPH_RAMP = " -~^c+x=o*@#"

# A value maps to GLYPH_RAMP[k] where k is the number of thresholds it
# strictly exceeds
GLYPH_THRESHOLDS = np.array(
    [10.0, 25.0, 50.0, 75.0, 100.0, 125.0, 150.0, 175.0, 200.0, 225.0, 250.0],
    dtype=np.float64,
)

# Moves the cursor to the top-left corner so a frame overwrites the last one
CURSOR_HOME = "\x1b[H"

_GLYPHS = np.array(list(GLYPH_RAMP))


def glyph_indices(frame: npt.ArrayLike) -> npt.NDArray[np.intp]:
    """Map brightness values to indices into GLYPH_RAMP."""
    values = np.nan_to_num(np.asarray(frame, dtype=np.float64), nan=0.0)
    return np.searchsorted(GLYPH_THRESHOLDS, values, side="left")


def value_to_glyph(value: float) -> str:
    """Map a single brightness value to its glyph."""
    return GLYPH_RAMP[int(glyph_indices(value))]


def frame_to_text(frame: npt.NDArray[np.floating]) -> str:
    """Convert a (height, width) frame into printable text.

    Every row, including the last, is terminated by a newline.

    Raises:
        ValueError: If the frame is not two-dimensional.
    """
    frame = np.asarray(frame)
    if frame.ndim != 2:
        raise ValueError(f"Frame must be 2D (height, width), got shape {frame.shape}")

    glyphs = _GLYPHS[glyph_indices(frame)]
    return "".join("".join(row) + "\n" for row in glyphs)


def draw_frame(
    frame: npt.NDArray[np.floating],
    stream: TextIO | None = None,
    *,
    home_cursor: bool = True,
) -> None:
    """Write a frame to a terminal stream in a single write.

    Args:
        frame: Frame brightness of shape (height, width).
        stream: Output stream (default: sys.stdout).
        home_cursor: Prefix the text with CURSOR_HOME so successive frames
            draw over each other instead of scrolling.
    """
    if stream is None:
        stream = sys.stdout
    text = frame_to_text(frame)
    if home_cursor:
        text = CURSOR_HOME + text
    stream.write(text)
    stream.flush()
