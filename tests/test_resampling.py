"""
Tests for importance resampling: marginal index probabilities, particle
count, and degenerate weight handling.
"""

import numpy as np
import pytest

from pf_localization import WeightDegeneracyError, multinomial_resample, systematic_resample
from pf_localization.resampling import get_resampler, normalize_weights


@pytest.fixture
def rng():
    return np.random.RandomState(1234)


def test_multinomial_frequencies_match_weights(rng):
    idx = multinomial_resample([0.1, 0.9], 10000, rng)
    freq = np.bincount(idx, minlength=2) / len(idx)
    # 5 standard errors of a 0.1 proportion over 10000 draws
    assert freq[0] == pytest.approx(0.1, abs=0.015)
    assert freq[1] == pytest.approx(0.9, abs=0.015)


def test_multinomial_unnormalized_weights(rng):
    idx = multinomial_resample([2.0, 6.0, 2.0], 20000, rng)
    freq = np.bincount(idx, minlength=3) / len(idx)
    np.testing.assert_allclose(freq, [0.2, 0.6, 0.2], atol=0.015)


def test_systematic_frequencies_match_weights(rng):
    idx = systematic_resample([0.1, 0.9], 10000, rng)
    assert abs(np.sum(idx == 0) - 1000) <= 1


@pytest.mark.parametrize("scheme", ["multinomial", "systematic"])
def test_zero_weight_never_drawn(rng, scheme):
    idx = get_resampler(scheme)([0.0, 1.0, 0.0, 3.0, 0.0], 5000, rng)
    assert set(np.unique(idx)) <= {1, 3}


@pytest.mark.parametrize("scheme", ["multinomial", "systematic"])
def test_count_preserved(rng, scheme):
    for n in (1, 7, 100):
        weights = rng.uniform(0.0, 1.0, n)
        idx = get_resampler(scheme)(weights, n, rng)
        assert len(idx) == n
        assert idx.min() >= 0 and idx.max() < n


@pytest.mark.parametrize("weights", [[0.0, 0.0, 0.0], [np.nan, 1.0], [np.inf, 1.0]])
def test_degenerate_weights_raise(rng, weights):
    with pytest.raises(WeightDegeneracyError):
        multinomial_resample(weights, 3, rng)


def test_negative_weight_rejected():
    with pytest.raises(ValueError):
        normalize_weights([0.5, -0.1])


def test_unknown_scheme():
    with pytest.raises(ValueError, match="unknown resampling scheme"):
        get_resampler("residual")


class TopEndRng:
    """Returns the largest float below 1.0 for every draw."""

    def uniform(self, low=0.0, high=1.0, size=None):
        return np.full(size, np.nextafter(1.0, 0.0))


def test_trailing_zero_weight_never_drawn_at_top_end():
    # ten 0.1 weights sum to just under 1.0 in floating point
    weights = [0.1] * 10 + [0.0]
    idx = multinomial_resample(weights, 5, TopEndRng())
    assert idx.tolist() == [9] * 5


def test_top_end_draw_stays_in_range():
    idx = multinomial_resample([1.0, 2.0, 3.0], 4, TopEndRng())
    assert idx.tolist() == [2] * 4
