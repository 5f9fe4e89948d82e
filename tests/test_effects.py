"""
Tests for the haze glow, sharpening and grain effects.
"""

import numpy as np
import pytest

from darkroom.processing.effects import (
    apply_haze, box_blur, haze_tint, apply_sharpen, apply_grain, sharpen_kernel
)
from darkroom.processing.effects.haze import blur_radius, glow_alpha

from conftest import solid_image


class TestHaze:
    """Test the tinted glow compositor."""

    @pytest.mark.parametrize("spread, expected", [
        (50, (230.0, 230.0, 230.0)),
        (100, (255.0, 240.0, 205.0)),
        (0, (205.0, 225.0, 255.0)),
    ])
    def test_tint(self, spread, expected):
        """Haze spread warms or cools the tint around neutral gray."""
        assert haze_tint(spread) == pytest.approx(expected)

    def test_blur_radius(self):
        """The blur radius scales with amount and image size."""
        assert blur_radius(100, 100, 200) == 5
        assert blur_radius(1, 10, 10) == 1
        assert blur_radius(50, 400, 400) == 10

    def test_box_blur_preserves_constant(self):
        """A flat channel survives the box blur."""
        channel = np.full((9, 13), 100, dtype=np.uint8)
        np.testing.assert_array_equal(box_blur(channel, 3), channel)

    def test_box_blur_spreads_a_point(self):
        """A single bright pixel spreads to its neighbours."""
        channel = np.zeros((7, 7), dtype=np.uint8)
        channel[3, 3] = 255
        blurred = box_blur(channel, 1)
        assert blurred.dtype == np.uint8
        assert blurred[3, 3] < 255
        assert blurred[2, 2] > 0
        assert blurred[0, 0] == 0

    def test_glow_alpha_is_squared_luma(self):
        """Glow alpha is the squared luma."""
        image = solid_image(1, 2, (255, 255, 255))
        image[0, 1, :3] = 0
        np.testing.assert_array_equal(glow_alpha(image), [[255, 0]])

    def test_black_image_unchanged(self):
        """Black pixels emit no glow."""
        image = solid_image(8, 8, (0, 0, 0))
        apply_haze(image, 100, 50)
        np.testing.assert_array_equal(image[:, :, :3], 0)

    def test_full_haze_on_white_is_tint(self):
        """Full haze turns white into the neutral tint."""
        image = solid_image(8, 8, (255, 255, 255))
        apply_haze(image, 100, 50)
        np.testing.assert_array_equal(image[:, :, :3], 230)

    def test_warm_haze(self):
        """Warm spread gives the warm tint."""
        image = solid_image(8, 8, (255, 255, 255))
        apply_haze(image, 100, 100)
        np.testing.assert_array_equal(image[0, 0, :3], [255, 240, 205])


class TestSharpen:
    """Test the 3x3 sharpening kernel."""

    def test_constant_image_unchanged(self):
        """Sharpening a flat image changes nothing."""
        image = solid_image(6, 6, (90, 120, 150))
        apply_sharpen(image, 100)
        np.testing.assert_array_equal(image[:, :, :3], solid_image(6, 6, (90, 120, 150))[:, :, :3])

    def test_border_untouched(self, random_image):
        """The outer 1px border is never sharpened."""
        original = random_image.copy()
        apply_sharpen(random_image, 80)
        np.testing.assert_array_equal(random_image[0], original[0])
        np.testing.assert_array_equal(random_image[-1], original[-1])
        np.testing.assert_array_equal(random_image[:, 0], original[:, 0])
        np.testing.assert_array_equal(random_image[:, -1], original[:, -1])

    def test_edge_contrast_increases(self):
        """Sharpening increases contrast across an edge."""
        image = solid_image(5, 6, (50, 50, 50))
        image[:, 3:, :3] = 200
        apply_sharpen(image, 50)
        assert image[2, 2, 0] < 50
        assert image[2, 3, 0] > 200

    def test_uses_unsharpened_neighbours(self):
        """Neighbours are read before they are sharpened."""
        image = solid_image(3, 4, (100, 100, 100))
        image[1, 1, :3] = 200
        apply_sharpen(image, 50)
        # (1, 2) sees the original 200 of (1, 1), not its sharpened value
        assert image[1, 2, 0] == 50
        assert image[1, 1, 0] == 255

    def test_kernel_weights(self):
        """The kernel preserves flat areas and weights only direct neighbours."""
        kernel = sharpen_kernel(50)
        assert kernel.sum() == pytest.approx(1.0)
        np.testing.assert_allclose(kernel, [[0, -0.5, 0], [-0.5, 3.0, -0.5], [0, -0.5, 0]])

    def test_overshoot_saturates(self):
        """A bright dot on a dark field clips to 255 and its neighbours to 0."""
        image = solid_image(5, 5, (50, 50, 50))
        image[2, 2, :3] = 200
        apply_sharpen(image, 100)
        assert np.all(image[2, 2, :3] == 255)
        assert np.all(image[1, 2, :3] == 0)
        assert np.all(image[2, 3, :3] == 0)
        assert np.all(image[1, 1, :3] == 50)

    def test_tiny_image_unchanged(self):
        """Images smaller than 3x3 are left alone."""
        image = solid_image(2, 2, (10, 200, 30))
        original = image.copy()
        apply_sharpen(image, 100)
        np.testing.assert_array_equal(image, original)


class TestGrain:
    """Test monochrome film grain."""

    def test_seeded_grain_is_reproducible(self):
        """Equal seeds give equal grain."""
        first = solid_image(16, 16, (128, 128, 128))
        second = first.copy()
        apply_grain(first, 60, np.random.default_rng(7))
        apply_grain(second, 60, np.random.default_rng(7))
        np.testing.assert_array_equal(first, second)

    def test_deviation_is_bounded(self):
        """Grain offsets stay within half the amount range."""
        image = solid_image(32, 32, (128, 128, 128))
        apply_grain(image, 40, np.random.default_rng(3))
        deviation = np.abs(image[:, :, :3].astype(int) - 128)
        assert deviation.max() <= 40 * 2.55 / 2 + 1
        assert deviation.max() > 0

    def test_grain_is_monochrome(self):
        """Grain adds the same offset to all three channels."""
        image = solid_image(16, 16, (128, 128, 128))
        apply_grain(image, 100, np.random.default_rng(11))
        np.testing.assert_array_equal(image[:, :, 0], image[:, :, 1])
        np.testing.assert_array_equal(image[:, :, 1], image[:, :, 2])

    def test_alpha_untouched(self, random_image):
        """Grain leaves alpha alone."""
        alpha = random_image[:, :, 3].copy()
        apply_grain(random_image, 100, np.random.default_rng(0))
        np.testing.assert_array_equal(random_image[:, :, 3], alpha)
