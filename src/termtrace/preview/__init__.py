"""Preview module for frame output.

Components:
    terminal: Glyph ramp and terminal drawing
    display: Brightness normalization and Matplotlib preview
    export: Grayscale PNG export

Example:
    >>> from termtrace.preview import draw_frame, save_png
    >>> draw_frame(frame)
    >>> save_png(frame, "frame.png", scale=4)
"""

from termtrace.preview.display import NOMINAL_MAX_BRIGHTNESS, normalize_frame, show_preview
from termtrace.preview.export import frame_to_uint8, save_png
from termtrace.preview.terminal import (
    CURSOR_HOME,
    GLYPH_RAMP,
    GLYPH_THRESHOLDS,
    draw_frame,
    frame_to_text,
    glyph_indices,
    value_to_glyph,
)

__all__ = [
    # Terminal output
    "GLYPH_RAMP",
    "GLYPH_THRESHOLDS",
    "CURSOR_HOME",
    "glyph_indices",
    "value_to_glyph",
    "frame_to_text",
    "draw_frame",
    # Display
    "NOMINAL_MAX_BRIGHTNESS",
    "normalize_frame",
    "show_preview",
    # Export
    "frame_to_uint8",
    "save_png",
]
