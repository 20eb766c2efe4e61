"""
Tests for frame transforms, nearest landmark association and the
observation likelihood.
"""

import numpy as np
import pytest

from pf_localization import (
    EmptyMapError,
    Landmark,
    LandmarkMap,
    find_nearest_landmark,
    gaussian_likelihood,
    nearest_landmarks,
    transform_to_map,
)
from pf_localization.observation_model import observation_weight, observations_in_range

SIGMA = np.array([0.3, 0.3])
PEAK = 1.0 / (2 * np.pi * 0.3 * 0.3)


def test_transform_identity_pose():
    np.testing.assert_allclose(transform_to_map([[5.0, 3.0]], 0.0, 0.0, 0.0), [[5.0, 3.0]])


def test_transform_rotated_pose():
    # particle at (4, 5) facing -90 deg sees (2, 2) -> map (6, 3)
    np.testing.assert_allclose(transform_to_map([[2.0, 2.0]], 4.0, 5.0, -np.pi / 2), [[6.0, 3.0]], atol=1e-12)


def test_nearest_landmark_returns_map_record(landmark_map):
    lm = find_nearest_landmark(7.5, 0.5, landmark_map)
    assert lm is landmark_map[2]
    assert lm.id == 3


def test_nearest_landmarks_vectorized(landmark_map):
    idx = nearest_landmarks([[5.1, 2.9], [-2.0, 5.0], [2.0, -3.0]], landmark_map)
    assert idx.tolist() == [0, 3, 1]


def test_tie_goes_to_first_landmark():
    lm_map = LandmarkMap.from_landmarks([Landmark(7, -1.0, 0.0), Landmark(8, 1.0, 0.0)])
    assert find_nearest_landmark(0.0, 0.0, lm_map).id == 7
    reversed_map = LandmarkMap.from_landmarks([Landmark(8, 1.0, 0.0), Landmark(7, -1.0, 0.0)])
    assert find_nearest_landmark(0.0, 0.0, reversed_map).id == 8


def test_empty_map_is_rejected():
    with pytest.raises(EmptyMapError):
        nearest_landmarks([[0.0, 0.0]], LandmarkMap.from_landmarks([]))


def test_likelihood_peak_value():
    assert gaussian_likelihood(0.0, 0.0, 0.3, 0.3) == pytest.approx(PEAK)


def test_likelihood_uses_both_variances():
    # symmetric form: dx^2/(2 sx^2) + dy^2/(2 sy^2)
    p = gaussian_likelihood(0.2, 0.4, 0.1, 0.2)
    expected = np.exp(-(0.04 / 0.02 + 0.16 / 0.08)) / (2 * np.pi * 0.1 * 0.2)
    assert p == pytest.approx(expected)


def test_exact_match_gives_peak_weight(single_landmark_map):
    w = observation_weight((0.0, 0.0, 0.0), [[5.0, 3.0]], SIGMA, single_landmark_map)
    assert w == pytest.approx(PEAK)


def test_offset_pose_gets_lower_weight(single_landmark_map):
    exact = observation_weight((0.0, 0.0, 0.0), [[5.0, 3.0]], SIGMA, single_landmark_map)
    offset = observation_weight((0.5, 0.0, 0.0), [[5.0, 3.0]], SIGMA, single_landmark_map)
    assert exact > offset > 0
    assert offset == pytest.approx(PEAK * np.exp(-0.25 / (2 * 0.09)))


def test_weight_is_product_over_observations(landmark_map):
    obs = [[5.0, 3.0], [2.0, -4.0], [8.0, 1.0]]
    assert observation_weight((0.0, 0.0, 0.0), obs, SIGMA, landmark_map) == pytest.approx(PEAK**3)


def test_no_observations_is_uninformative(landmark_map):
    assert observation_weight((1.0, 2.0, 3.0), np.zeros((0, 2)), SIGMA, landmark_map) == 1.0


def test_range_check_uses_agent_frame_distance():
    obs = np.array([[3.0, 4.0], [30.0, 40.0], [-1.0, 0.0]])
    kept = observations_in_range(obs, 5.0)
    np.testing.assert_array_equal(kept, [[3.0, 4.0], [-1.0, 0.0]])
