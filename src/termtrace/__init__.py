"""Stochastic path tracer that animates spheres and lights in a terminal.

Rendering runs in Taichi kernels; each frame is a grid of brightness values
that the preview package turns into ASCII art, PNGs or a Matplotlib figure.

Subpackages:
    core: Vector algebra, random streams, path tracer, settings, animation
    geometry: Sphere primitive and ray-sphere intersection
    scene: Scene storage, scene manager and the light show scene
    camera: Angular camera with per-pixel ray generation
    preview: Terminal glyph output, PNG export and Matplotlib preview
    utils: Logging setup
"""

__version__ = "0.1.0"
