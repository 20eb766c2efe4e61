## landmark observation model
## observations come in the agent frame, matched to the map per particle


import numpy as np

from .association import nearest_landmarks
from .geometry import transform_to_map


def gaussian_likelihood(dx, dy, sigma_x, sigma_y):
    # bivariate gaussian with independent axes, landmark as the mean
    exponent = dx**2 / (2 * sigma_x**2) + dy**2 / (2 * sigma_y**2)
    return np.exp(-exponent) / (2 * np.pi * sigma_x * sigma_y)


def observations_in_range(observations, sensor_range):
    ## keep observations within sensor_range of the agent
    ## range is measured in the agent frame so every particle keeps the same set
    observations = np.asarray(observations, dtype=np.float64).reshape(-1, 2)
    in_range = np.hypot(observations[:, 0], observations[:, 1]) <= sensor_range
    return observations[in_range]


def match_observations(pose, observations, landmark_map):
    '''
    Transform observations into the map frame using pose (x, y, theta) and
    pair each with its nearest landmark.

    Returns (map_points, landmark_indices).
    '''
    map_points = transform_to_map(observations, pose[0], pose[1], pose[2])
    return map_points, nearest_landmarks(map_points, landmark_map)


def observation_weight(pose, observations, std_landmark, landmark_map):
    '''
    Product of per-observation likelihoods for one particle pose.
    No observations gives 1.0.
    '''
    map_points, idx = match_observations(pose, observations, landmark_map)
    if len(idx) == 0:
        return 1.0

    delta = map_points - landmark_map.coords[idx]
    probs = gaussian_likelihood(delta[:, 0], delta[:, 1], std_landmark[0], std_landmark[1])

    return float(np.prod(probs))
