"""Matplotlib-based preview display for rendered frames.

Frames hold raw brightness with a nominal maximum of 255 (a fully lit
lamp). This module scales them into [0, 1] for display and export, and can
show a frame in a Matplotlib window as a grayscale image.

Example:
    >>> from termtrace.preview.display import show_preview
    >>> show_preview(frame, title="t = 1.5")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# Brightness of a fully lit lamp, mapped to white
NOMINAL_MAX_BRIGHTNESS = 255.0


def normalize_frame(
    frame: npt.NDArray[np.floating],
    max_brightness: float = NOMINAL_MAX_BRIGHTNESS,
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Scale a brightness frame into [0, 1].

    Values above max_brightness saturate to 1, negative values and NaN to 0.

    Args:
        frame: Frame brightness of shape (height, width).
        max_brightness: Brightness mapped to 1.0 (must be positive).
        gamma: Gamma correction value. Default 1.0 (linear).

    Returns:
        Float32 array of the same shape in [0, 1].

    Raises:
        ValueError: If max_brightness or gamma is not positive.
    """
    if max_brightness <= 0.0:
        raise ValueError(f"max_brightness must be positive, got {max_brightness}")
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")

    image = np.nan_to_num(np.asarray(frame, dtype=np.float32), nan=0.0)
    image = np.clip(image / max_brightness, 0.0, 1.0)

    if gamma != 1.0:
        image = np.power(image, 1.0 / gamma)

    return image.astype(np.float32)


def show_preview(
    frame: npt.NDArray[np.floating],
    *,
    max_brightness: float = NOMINAL_MAX_BRIGHTNESS,
    gamma: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (12, 4),
    block: bool = True,
) -> None:
    """Display a frame as a grayscale Matplotlib figure.

    Terminal frames have non-square cells, so the image is stretched to the
    figure instead of keeping square pixels.

    Args:
        frame: Frame brightness of shape (height, width).
        max_brightness: Brightness mapped to white.
        gamma: Gamma correction value.
        title: Optional figure title.
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = normalize_frame(frame, max_brightness=max_brightness, gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image, cmap="gray", vmin=0.0, vmax=1.0, aspect="auto")
    ax.axis("off")
    if title is not None:
        ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
