"""
Tests for histogram analysis.
"""

import numpy as np
import pytest

from darkroom.analysis import compute_histogram, normalize_histogram

from conftest import solid_image


class TestNormalize:
    """Test histogram normalisation."""

    def test_peak_is_255(self, rng):
        """Normalisation scales the tallest bin to 255."""
        hist = rng.integers(0, 1000, size=256).astype(float)
        normalized = normalize_histogram(hist)
        assert normalized.max() == pytest.approx(255.0)
        assert normalized.min() >= 0.0

    def test_all_zero_stays_zero(self):
        """An empty histogram is not rescaled."""
        np.testing.assert_array_equal(normalize_histogram(np.zeros(256)), np.zeros(256))


class TestComputeHistogram:
    """Test luma and per-channel distributions."""

    def test_shapes_and_range(self, random_image):
        """Every channel has 256 bins peaking at 255."""
        data = compute_histogram(random_image)
        for hist in data.channels().values():
            assert hist.shape == (256,)
            assert hist.min() >= 0.0
            assert hist.max() == pytest.approx(255.0)

    def test_uniform_image_is_single_spike(self):
        """A uniform image gives one full-height bin per channel."""
        data = compute_histogram(solid_image(4, 4, (10, 20, 30)))
        assert data.red[10] == 255.0
        assert data.green[20] == 255.0
        assert data.blue[30] == 255.0
        assert np.count_nonzero(data.red) == 1

    def test_luma_bin(self):
        """White lands in the top luma bin."""
        data = compute_histogram(solid_image(2, 2, (255, 255, 255)))
        assert data.rgb[255] == 255.0
        assert np.count_nonzero(data.rgb) == 1

    def test_luma_rounds_half_up(self):
        """Luma is rounded half up to its bin."""
        # luma of (0, 0, 50) is 5.7, of (100, 0, 0) is 29.9
        image = solid_image(1, 2, (0, 0, 50))
        image[0, 1, :3] = (100, 0, 0)
        data = compute_histogram(image)
        assert data.rgb[6] == 255.0
        assert data.rgb[30] == 255.0

    def test_alpha_ignored(self):
        """Alpha does not affect the distributions."""
        opaque = compute_histogram(solid_image(2, 2, (40, 80, 120), alpha=255))
        clear = compute_histogram(solid_image(2, 2, (40, 80, 120), alpha=0))
        np.testing.assert_array_equal(opaque.rgb, clear.rgb)

    def test_input_not_modified(self, random_image):
        """Computing a histogram leaves the buffer untouched."""
        original = random_image.copy()
        compute_histogram(random_image)
        np.testing.assert_array_equal(random_image, original)

    def test_summary(self):
        """Summary reports clipping, mean and peak per channel."""
        image = solid_image(2, 2, (0, 128, 255))
        summary = compute_histogram(image).summary()
        assert summary['red']['shadows_clipped'] == pytest.approx(100.0)
        assert summary['blue']['highlights_clipped'] == pytest.approx(100.0)
        assert summary['green']['mean'] == pytest.approx(128.0)
        assert summary['green']['peak'] == 128

    def test_to_dict(self, random_image):
        """Serialised histograms hold all four channels."""
        data = compute_histogram(random_image).to_dict()
        assert set(data) == {'rgb', 'red', 'green', 'blue'}
        assert len(data['rgb']) == 256

    def test_rejects_non_rgba(self):
        """RGB buffers are rejected."""
        with pytest.raises(ValueError):
            compute_histogram(np.zeros((4, 4, 3), dtype=np.uint8))
