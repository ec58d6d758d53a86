#!/usr/bin/env python3
"""Animate the light show scene in the terminal.

Two lamps orbit a grey sphere above a dimly glowing floor. Every frame is
path traced and drawn over the previous one as ASCII art.

Usage:
    python -m examples.animate_terminal [options]

Options:
    --width WIDTH         Frame width in columns (default: 158)
    --height HEIGHT       Frame height in rows (default: 42)
    --samples SAMPLES     Maximum trials per pixel (default: 500)
    --bounces BOUNCES     Maximum segments per trial (default: 5)
    --seed SEED           Seed of the random streams (default: 0)
    --start START         Simulated start time (default: 0.0)
    --end END             Simulated end time, exclusive (default: 20.0)
    --step STEP           Simulated time per frame (default: 0.1)
    --frame-delay SECS    Pause after each frame (default: 0.001)
    --output OUTPUT       Save the last frame as a PNG
    --preview             Show the last frame in a Matplotlib window
    --log-level LEVEL     Logging level for progress on stderr (default: WARNING)

Example:
    python -m examples.animate_terminal --width 80 --height 24 --samples 100
"""

from __future__ import annotations

import argparse
import logging
import sys

import taichi as ti

logger = logging.getLogger("termtrace")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Animate the light show scene in the terminal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=158,
        help="Frame width in columns (default: 158)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=42,
        help="Frame height in rows (default: 42)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=500,
        help="Maximum trials per pixel (default: 500)",
    )
    parser.add_argument(
        "--bounces",
        type=int,
        default=5,
        help="Maximum segments per trial (default: 5)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed of the random streams (default: 0)",
    )
    parser.add_argument(
        "--start",
        type=float,
        default=0.0,
        help="Simulated start time (default: 0.0)",
    )
    parser.add_argument(
        "--end",
        type=float,
        default=20.0,
        help="Simulated end time, exclusive (default: 20.0)",
    )
    parser.add_argument(
        "--step",
        type=float,
        default=0.1,
        help="Simulated time per frame (default: 0.1)",
    )
    parser.add_argument(
        "--frame-delay",
        type=float,
        default=0.001,
        help="Pause after each frame in seconds (default: 0.001)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Save the last frame as a PNG",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the last frame in a Matplotlib window",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for progress on stderr (default: WARNING)",
    )
    return parser.parse_args()


def animate(
    render_settings,
    animation_settings,
    output_path: str | None = None,
    preview: bool = False,
) -> int:
    """Run the light show animation, drawing every frame to stdout.

    Args:
        render_settings: RenderSettings for each frame.
        animation_settings: AnimationSettings for the time loop.
        output_path: If given, the last frame is saved there as a PNG.
        preview: If True, the last frame is shown with Matplotlib.

    Returns:
        The number of frames rendered.
    """
    # Lazy imports to allow Taichi initialization first
    from termtrace.core.animator import Animator
    from termtrace.preview.display import show_preview
    from termtrace.preview.export import save_png
    from termtrace.preview.terminal import draw_frame
    from termtrace.scene.light_show import create_light_show_scene, update_light_show

    scene, camera = create_light_show_scene()
    animator = Animator(scene, camera, render_settings, update=update_light_show)

    last_frame = None
    last_time = animation_settings.start_time

    def on_frame(sim_time, frame) -> None:
        nonlocal last_frame, last_time
        draw_frame(frame)
        last_frame = frame
        last_time = sim_time

    count = animator.run(animation_settings, callback=on_frame)
    logger.info("Rendered %d frames", count)

    if last_frame is not None:
        if output_path is not None:
            save_png(last_frame, output_path)
            logger.info("Saved last frame to %s", output_path)
        if preview:
            show_preview(last_frame, title=f"t = {last_time:.2f}")

    return count


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from termtrace.core.settings import AnimationSettings, RenderSettings
    from termtrace.utils.logconfig import setup_logging

    setup_logging("termtrace", level=getattr(logging, args.log_level))

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        logger.info("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        logger.info("Using CPU backend")

    try:
        render_settings = RenderSettings(
            width=args.width,
            height=args.height,
            samples=args.samples,
            bounces=args.bounces,
            seed=args.seed,
        )
        animation_settings = AnimationSettings(
            start_time=args.start,
            end_time=args.end,
            time_step=args.step,
            frame_delay=args.frame_delay,
        )
        animate(
            render_settings,
            animation_settings,
            output_path=args.output,
            preview=args.preview,
        )
        return 0
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
