"""
Tests for the per-pixel tonal and colour operators.
"""

import numpy as np
import pytest

from darkroom.processing.basic import apply_basic_filters, tone_lut
from darkroom.processing.models import BasicFilters
from darkroom.processing.tone import (
    apply_exposure, apply_temperature, apply_vibrance, apply_dehaze,
    apply_highlights_shadows, apply_whites_blacks
)

from conftest import solid_image


class TestBasicFilters:
    """Test the brightness/contrast/saturation/sepia pass."""

    def test_brightness_doubles(self):
        """Brightness 200 doubles each channel."""
        image = solid_image(2, 2, (60, 30, 10))
        apply_basic_filters(image, BasicFilters(brightness=200))
        np.testing.assert_array_equal(image[0, 0, :3], [120, 60, 20])

    def test_zero_contrast_is_mid_gray(self, random_image):
        """Contrast 0 flattens the image to mid-gray."""
        apply_basic_filters(random_image, BasicFilters(contrast=0))
        assert np.all(random_image[:, :, :3] == 128)

    def test_zero_saturation_is_gray(self):
        """Saturation 0 gives the luminance gray."""
        image = solid_image(1, 1, (255, 0, 0))
        apply_basic_filters(image, BasicFilters(saturation=0))
        np.testing.assert_array_equal(image[0, 0, :3], [54, 54, 54])

    def test_full_sepia_on_white(self):
        """Full sepia tints white towards yellow."""
        image = solid_image(1, 1, (255, 255, 255))
        apply_basic_filters(image, BasicFilters(sepia=100))
        np.testing.assert_array_equal(image[0, 0, :3], [255, 255, 239])

    def test_identity_lut(self):
        """Neutral brightness and contrast give the identity table."""
        np.testing.assert_allclose(tone_lut(1.0, 1.0), np.arange(256))

    def test_alpha_untouched(self, random_image):
        """The basic filters leave alpha alone."""
        alpha = random_image[:, :, 3].copy()
        apply_basic_filters(random_image, BasicFilters(brightness=150, sepia=40))
        np.testing.assert_array_equal(random_image[:, :, 3], alpha)


class TestExposureAndTemperature:
    """Test exposure and white balance shifts."""

    def test_one_stop_doubles(self):
        """Exposure 100 is one stop brighter."""
        image = solid_image(1, 1, (64, 32, 16))
        apply_exposure(image, 100)
        np.testing.assert_array_equal(image[0, 0, :3], [128, 64, 32])

    def test_exposure_clamps(self):
        """Exposure saturates at 255."""
        image = solid_image(1, 1, (200, 200, 200))
        apply_exposure(image, 100)
        np.testing.assert_array_equal(image[0, 0, :3], [255, 255, 255])

    def test_warm_white(self):
        """Full warmth drops blue on white by 50."""
        image = solid_image(1, 1, (255, 255, 255))
        apply_temperature(image, 100)
        np.testing.assert_array_equal(image[0, 0, :3], [255, 255, 205])

    def test_cool_shift(self):
        """Cooling lowers red and raises blue equally."""
        image = solid_image(1, 1, (100, 100, 100))
        apply_temperature(image, -40)
        np.testing.assert_array_equal(image[0, 0, :3], [80, 100, 120])


class TestVibrance:
    """Test the muted-colour saturation boost."""

    def test_gray_unchanged(self):
        """Vibrance has no effect on neutral pixels."""
        image = solid_image(2, 2, (90, 90, 90))
        apply_vibrance(image, 100)
        np.testing.assert_array_equal(image[:, :, :3], 90)

    def test_positive_pulls_towards_max(self):
        """Positive vibrance moves channels towards the maximum."""
        image = solid_image(1, 1, (150, 120, 110))
        apply_vibrance(image, 100)
        r, g, b = image[0, 0, :3].astype(int)
        assert r == 150
        assert g > 120
        assert b > 110

    def test_negative_moves_away_from_max(self):
        """Negative vibrance moves channels away from the maximum."""
        image = solid_image(1, 1, (150, 120, 110))
        apply_vibrance(image, -100)
        r, g, b = image[0, 0, :3].astype(int)
        assert r == 150
        assert g < 120
        assert b < 110


class TestDehaze:
    """Test the atmospheric scattering model."""

    def test_black_unchanged(self):
        """Dehaze keeps black at black."""
        image = solid_image(1, 1, (0, 0, 0))
        apply_dehaze(image, 100)
        np.testing.assert_array_equal(image[0, 0, :3], [0, 0, 0])

    def test_positive_darkens_haze(self):
        """Positive dehaze darkens a hazy mid-tone."""
        image = solid_image(1, 1, (110, 110, 110))
        apply_dehaze(image, 100)
        assert np.all(image[0, 0, :3] < 110)

    def test_negative_adds_haze(self):
        """Negative dehaze lifts dark pixels towards the airlight."""
        image = solid_image(1, 1, (40, 40, 40))
        apply_dehaze(image, -100)
        assert np.all(image[0, 0, :3] > 40)


class TestTonalRanges:
    """Test highlights/shadows and whites/blacks."""

    def test_shadows_lift_dark_pixels(self):
        """Positive shadows brighten dark pixels."""
        image = solid_image(1, 1, (40, 40, 40))
        apply_highlights_shadows(image, 0, 100)
        assert image[0, 0, 0] > 40

    def test_highlights_recover_bright_pixels(self):
        """Negative highlights darken bright pixels."""
        image = solid_image(1, 1, (230, 230, 230))
        apply_highlights_shadows(image, -100, 0)
        assert image[0, 0, 0] < 230

    def test_shadows_leave_highlights(self):
        """The shadows slider does not reach bright pixels."""
        image = solid_image(1, 1, (230, 230, 230))
        apply_highlights_shadows(image, 0, 100)
        np.testing.assert_array_equal(image[0, 0, :3], [230, 230, 230])

    def test_whites_brighten(self):
        """Positive whites brighten bright pixels."""
        image = solid_image(1, 1, (200, 200, 200))
        apply_whites_blacks(image, 50, 0)
        assert image[0, 0, 0] > 200

    def test_blacks_darken(self):
        """Positive blacks darken dark pixels."""
        image = solid_image(1, 1, (30, 30, 30))
        apply_whites_blacks(image, 0, 50)
        assert image[0, 0, 0] < 30


def _saturate(operator, *args):
    def run(image):
        return operator(image, *args)
    return run


class TestClamping:
    """Out-of-range results saturate at 0 and 255 instead of wrapping."""

    @pytest.mark.parametrize("operator, args", [
        (apply_exposure, (100,)),
        (apply_exposure, (-100,)),
        (apply_temperature, (100,)),
        (apply_temperature, (-100,)),
        (apply_vibrance, (100,)),
        (apply_vibrance, (-100,)),
        (apply_dehaze, (100,)),
        (apply_dehaze, (-100,)),
        (apply_highlights_shadows, (100, 100)),
        (apply_highlights_shadows, (-100, -100)),
        (apply_whites_blacks, (100, 100)),
        (apply_whites_blacks, (-100, -100)),
    ])
    def test_alpha_untouched_at_extremes(self, random_image, operator, args):
        """Operators work in place and never touch alpha."""
        alpha = random_image[:, :, 3].copy()
        result = operator(random_image, *args)
        assert result is random_image
        assert result.dtype == np.uint8
        np.testing.assert_array_equal(result[:, :, 3], alpha)

    @pytest.mark.parametrize("run, rgb, expected", [
        # 200 * 2 and 100 * 2 overflow
        (_saturate(apply_exposure, 100), (200, 100, 10), (255, 200, 20)),
        (_saturate(apply_temperature, 100), (230, 100, 30), (255, 100, 0)),
        (_saturate(apply_temperature, -100), (20, 100, 240), (0, 100, 255)),
        # green and blue are pushed below zero, away from the red maximum
        (_saturate(apply_vibrance, -100), (120, 10, 10), (120, 0, 0)),
        # transmission floored at 0.1 sends white far above 255
        (_saturate(apply_dehaze, 100), (255, 255, 255), (255, 255, 255)),
        (_saturate(apply_dehaze, 100), (200, 215, 255), (20, 170, 255)),
        (_saturate(apply_highlights_shadows, 100, 0), (230, 230, 230), (255, 255, 255)),
        (_saturate(apply_highlights_shadows, 0, -100), (30, 30, 30), (0, 0, 0)),
        (_saturate(apply_whites_blacks, 100, 0), (200, 200, 200), (255, 255, 255)),
        (_saturate(apply_whites_blacks, 0, 100), (30, 30, 30), (0, 0, 0)),
        (lambda image: apply_basic_filters(image, BasicFilters(brightness=200)),
         (200, 100, 10), (255, 200, 20)),
        (lambda image: apply_basic_filters(image, BasicFilters(contrast=200)),
         (250, 5, 200), (255, 0, 255)),
        (lambda image: apply_basic_filters(image, BasicFilters(saturation=200)),
         (255, 0, 0), (255, 0, 0)),
    ])
    def test_saturates(self, run, rgb, expected):
        """Known overflowing inputs land exactly on the channel limits."""
        image = solid_image(2, 2, rgb, alpha=77)
        run(image)
        np.testing.assert_array_equal(image[:, :, :3], np.broadcast_to(expected, (2, 2, 3)))
        assert np.all(image[:, :, 3] == 77)

    def test_matches_clipped_float_reference(self, random_image):
        """Exposure equals the float product clipped to [0, 255] and rounded."""
        expected = np.rint(np.clip(random_image[:, :, :3] * 2.0, 0, 255))
        apply_exposure(random_image, 100)
        np.testing.assert_array_equal(random_image[:, :, :3], expected)
