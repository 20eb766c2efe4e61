"""
Shared fixtures for the particle filter test suite.
"""

import pytest

from pf_localization import GaussianNoiseModel, Landmark, LandmarkMap, ParticleFilter


@pytest.fixture
def noise():
    """Seeded noise source for reproducible draws."""
    return GaussianNoiseModel(seed=0)


@pytest.fixture
def single_landmark_map():
    return LandmarkMap.from_landmarks([Landmark(1, 5.0, 3.0)])


@pytest.fixture
def landmark_map():
    return LandmarkMap.from_landmarks([
        Landmark(1, 5.0, 3.0),
        Landmark(2, 2.0, -4.0),
        Landmark(3, 8.0, 1.0),
        Landmark(4, -3.0, 6.0),
    ])


@pytest.fixture
def make_filter(noise):
    """Factory for filters seeded at a pose with no spread."""

    def _make(num_particles=10, pose=(0.0, 0.0, 0.0), **kwargs):
        pf = ParticleFilter(num_particles=num_particles, noise=noise, **kwargs)
        pf.init(pose[0], pose[1], pose[2], [0.0, 0.0, 0.0])
        return pf

    return _make
