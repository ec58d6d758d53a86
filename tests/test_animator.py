"""Tests for the animation driver."""

import numpy as np
import pytest


@pytest.fixture
def small_settings():
    from termtrace.core.settings import RenderSettings

    return RenderSettings(width=16, height=8, samples=4, bounces=3, seed=1)


@pytest.fixture
def short_animation():
    from termtrace.core.settings import AnimationSettings

    return AnimationSettings(start_time=0.0, end_time=1.0, time_step=0.5, frame_delay=0.0)


class TestAnimator:
    def test_sets_up_render_target(self, small_settings):
        from termtrace.core.animator import Animator
        from termtrace.core.integrator import get_image_dimensions
        from termtrace.scene.light_show import create_light_show_scene

        scene, camera = create_light_show_scene()
        Animator(scene, camera, small_settings)

        assert get_image_dimensions() == (16, 8)

    def test_render_frame_calls_update(self, small_settings):
        from termtrace.core.animator import Animator
        from termtrace.scene.light_show import create_light_show_scene

        calls = []
        scene, camera = create_light_show_scene()
        animator = Animator(
            scene, camera, small_settings, update=lambda s, t: calls.append((s, t))
        )

        frame = animator.render_frame(1.25)

        assert calls == [(scene, 1.25)]
        assert frame.shape == (8, 16)
        assert animator.frame_count == 1

    def test_run_counts_frames(self, small_settings, short_animation):
        from termtrace.core.animator import Animator
        from termtrace.scene.light_show import create_light_show_scene, update_light_show

        seen = []
        scene, camera = create_light_show_scene()
        animator = Animator(scene, camera, small_settings, update=update_light_show)

        count = animator.run(short_animation, callback=lambda t, frame: seen.append(t))

        assert count == 2
        assert seen == [0.0, 0.5]
        assert animator.frame_count == 2

    def test_lights_follow_time(self, small_settings, short_animation):
        from termtrace.core.animator import Animator
        from termtrace.scene.light_show import (
            LAMP_A_INDEX,
            create_light_show_scene,
            lamp_positions,
            update_light_show,
        )

        scene, camera = create_light_show_scene()
        animator = Animator(scene, camera, small_settings, update=update_light_show)
        animator.run(short_animation)

        assert scene.lights[LAMP_A_INDEX].center == pytest.approx(lamp_positions(0.5)[0])

    def test_frames_are_independent_copies(self, small_settings, short_animation):
        from termtrace.core.animator import Animator
        from termtrace.scene.light_show import create_light_show_scene, update_light_show

        scene, camera = create_light_show_scene()
        animator = Animator(scene, camera, small_settings, update=update_light_show)

        frames = [frame for _, frame in animator.frames(short_animation)]
        first_copy = frames[0].copy()
        frames[1][:] = -1.0

        np.testing.assert_array_equal(frames[0], first_copy)

    def test_static_scene_renders_same_frame(self, small_settings, short_animation):
        from termtrace.core.animator import Animator
        from termtrace.scene.light_show import create_light_show_scene

        scene, camera = create_light_show_scene()
        animator = Animator(scene, camera, small_settings)

        frames = [frame for _, frame in animator.frames(short_animation)]
        np.testing.assert_array_equal(frames[0], frames[1])

    def test_repr(self, small_settings):
        from termtrace.core.animator import Animator
        from termtrace.scene.light_show import create_light_show_scene

        scene, camera = create_light_show_scene()
        animator = Animator(scene, camera, small_settings)
        assert repr(animator) == "Animator(width=16, height=8, frames=0)"

    def test_frame_delay_between_frames(self, small_settings, monkeypatch):
        from termtrace.core import animator as animator_module
        from termtrace.core.animator import Animator
        from termtrace.core.settings import AnimationSettings
        from termtrace.scene.light_show import create_light_show_scene

        sleeps = []
        monkeypatch.setattr(animator_module.time, "sleep", sleeps.append)

        scene, camera = create_light_show_scene()
        animator = Animator(scene, camera, small_settings)
        animation = AnimationSettings(end_time=0.3, time_step=0.1, frame_delay=0.25)
        animator.run(animation)

        assert sleeps == [0.25] * len(animation.times())
